"""Number-safety helpers shared by the engine, validator and formatter."""

from __future__ import annotations

import math
from typing import Any


def is_valid_number(value: Any) -> bool:
    """True for real, finite numbers. Booleans are not numbers here.

    Python ints are always finite, even past the float range.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, int):
        return True
    return math.isfinite(value)


def is_whole(value: float) -> bool:
    return isinstance(value, int) or float(value).is_integer()


def safe_number(value: Any, default: float = 0.0) -> float:
    """Coerce ``value`` to a finite float, falling back to ``default``."""
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return default
    if not is_valid_number(value):
        return default
    try:
        return float(value)
    except OverflowError:
        return default


def real_power(base: float, exponent: float) -> float:
    """``base ** exponent`` restricted to real results.

    A negative base with a non-integer exponent gives NaN instead of a complex
    number, and overflow gives a signed infinity instead of raising.
    """
    if base < 0 and not is_whole(exponent):
        return math.nan
    try:
        return float(base) ** exponent
    except OverflowError:
        if base < 0 and int(exponent) % 2 == 1:
            return -math.inf
        return math.inf
    except ZeroDivisionError:
        # 0.0 ** negative exponent
        return math.inf
