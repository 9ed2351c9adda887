"""
Domain models and value objects.

Contains curve snapshots, trade intents, results and rejections.
"""

from pionext.core.domain.curve_state import CurveState
from pionext.core.domain.trade import (
    Buy,
    BuySpend,
    RejectionReason,
    Sell,
    SellForProceeds,
    TradeIntent,
    TradeOutcome,
    TradeRejection,
    TradeResult,
    TradeSide,
)
from pionext.core.math.bonding_curve import CurvePoint

__all__ = [
    # Curve state
    "CurveState",
    "CurvePoint",
    # Trade intents
    "Buy",
    "Sell",
    "BuySpend",
    "SellForProceeds",
    "TradeIntent",
    # Trade outcomes
    "TradeSide",
    "TradeResult",
    "TradeRejection",
    "TradeOutcome",
    "RejectionReason",
]
