"""Numeric helpers shared by the scaler and the aggregator.

Every quantity that reaches the aggregator passes through these helpers,
so unset or non-finite inputs collapse to zero instead of leaking NaN
into recipe totals.
"""

import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, Iterable, Optional

from recipe_nutrition.data_layer.models import ScaledNutrient

_TWO_PLACES = Decimal("0.01")
# Enough digits to quantize the largest finite float to 2 places
_ROUNDING_PRECISION = 400


def to_quantity(value: Any) -> Optional[float]:
    """Coerce a user-supplied amount to a finite float.

    Args:
        value: Raw amount (number, numeric string, None, ...)

    Returns:
        Finite float, or None when the value is unset or not a finite number
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def or_zero(value: Any) -> float:
    """Return value as a finite float, or 0.0 when unset."""
    number = to_quantity(value)
    return 0.0 if number is None else number


def round2(value: float) -> float:
    """Round half-up to 2 decimal places (2.675 -> 2.68, not 2.67)."""
    number = or_zero(value)
    with localcontext() as ctx:
        ctx.prec = _ROUNDING_PRECISION
        return float(Decimal(repr(number)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def find_scaled(
    scaled_nutrients: Iterable[ScaledNutrient], nutrient_name: str
) -> Optional[ScaledNutrient]:
    """Find the scaled entry with exactly this name (case-sensitive)."""
    for entry in scaled_nutrients:
        if entry.name == nutrient_name:
            return entry
    return None
