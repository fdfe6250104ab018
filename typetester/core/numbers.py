"""Loose numeric coercion and the rounding rules used for results and stats."""
import math
from decimal import Decimal, ROUND_HALF_DOWN, ROUND_HALF_UP
from typing import Any


def to_number(value: Any) -> float:
    """Loose numeric coercion; anything unparseable or non-finite becomes NaN."""
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, str) and not value.strip():
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return math.nan
    if not math.isfinite(number):
        return math.nan
    return number


def round_half_up(value: float, places: int = 0) -> int | float:
    """Round the exact binary value of a float, halves away from zero.

    round_half_up(2.5) == 3 and round_half_up(-2.5) == -3, where built-in
    round() gives 2 and -2. Returns an int when places == 0.
    """
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    if places == 0:
        return int(rounded)
    return float(rounded)


def round_half_ceiling(value: float) -> int:
    """Round to an integer, halves towards positive infinity.

    round_half_ceiling(70.5) == 71, round_half_ceiling(-70.5) == -70.
    """
    rounding = ROUND_HALF_UP if value >= 0 else ROUND_HALF_DOWN
    return int(Decimal(value).quantize(Decimal(1), rounding=rounding))


def to_int(value: Any) -> int | float:
    """Coerce like to_number, then round half away from zero. NaN passes through."""
    number = to_number(value)
    if math.isnan(number):
        return number
    return round_half_up(number)
