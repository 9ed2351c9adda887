"""
Core math modules для pionext

Математические примитивы кривой цены и численные защиты.
"""

# Numerical Safeguards
from pionext.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    is_close,
    is_valid_float,
    validate_finite,
    validate_non_negative,
    validate_positive,
)

# Bonding Curve
from pionext.core.math.bonding_curve import (
    DEFAULT_NUM_POINTS,
    FINAL_PRICE,
    CurvePoint,
    InvalidCurveConfiguration,
    cost,
    current_raise,
    curve_sample_points,
    discount_pct,
    holding_value,
    price,
    raise_progress,
    total_raise,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    # Numerical Safeguards — Checks
    "is_close",
    "is_valid_float",
    "validate_finite",
    "validate_non_negative",
    "validate_positive",
    # Bonding Curve — Constants
    "DEFAULT_NUM_POINTS",
    "FINAL_PRICE",
    # Bonding Curve — Exceptions
    "InvalidCurveConfiguration",
    # Bonding Curve — Types
    "CurvePoint",
    # Bonding Curve — Functions
    "cost",
    "current_raise",
    "curve_sample_points",
    "discount_pct",
    "holding_value",
    "price",
    "raise_progress",
    "total_raise",
]
