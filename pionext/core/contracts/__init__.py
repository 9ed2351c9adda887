"""
Contract Validation Module

Модуль для валидации JSON контрактов trade API.
"""

from .validators import (
    ContractValidator,
    CurveStateValidator,
    SchemaLoader,
    TradeRequestValidator,
    parse_curve_state,
    parse_trade_request,
    validate_curve_state,
    validate_trade_request,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "TradeRequestValidator",
    "CurveStateValidator",
    # Functions
    "validate_trade_request",
    "validate_curve_state",
    "parse_trade_request",
    "parse_curve_state",
]
