"""Display helpers for the presentation side (yen amounts, percentages, periods)."""

from __future__ import annotations

import re
from typing import Literal

from snowball.core.numbers import is_valid_number

OKU = 100_000_000
MAN = 10_000

FormatKind = Literal["currency", "percentage", "number"]

_FULL_WIDTH_DIGITS = str.maketrans("０１２３４５６７８９．－", "0123456789.-")
_STRIP_MARKS = re.compile(r"[,，¥\\円%％\s]")


def currency(value: float, decimals: int = 0, compact: bool = False, symbol: str = "¥") -> str:
    """Format a yen amount; ``compact`` switches to 万/億 units for large values."""
    if compact and abs(value) >= OKU:
        return f"{value / OKU:.1f}億円"
    if compact and abs(value) >= MAN:
        return f"{value / MAN:.0f}万円"

    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(round(value, decimals)):,.{decimals}f}"


def percentage(value: float, decimals: int = 1) -> str:
    return f"{value * 100:.{decimals}f}%"


def number(value: float, decimals: int = 0) -> str:
    return f"{value:,.{decimals}f}"


def compact(value: float) -> str:
    """Short form such as 1.2万 or 3.4億."""
    sign = "-" if value < 0 else ""
    magnitude = abs(value)

    if magnitude >= OKU:
        return f"{sign}{magnitude / OKU:.1f}億"
    if magnitude >= MAN:
        return f"{sign}{magnitude / MAN:.1f}万"
    if magnitude >= 1000:
        return f"{sign}{magnitude / 1000:.1f}千"
    return f"{sign}{magnitude:.0f}"


def year_label(year: int) -> str:
    return f"Year {year}"


def months_label(months: int) -> str:
    years, remaining = divmod(months, 12)
    if years > 0 and remaining > 0:
        return f"{years}y {remaining}m"
    if years > 0:
        return f"{years}y"
    return f"{months}m"


def period_label(start_year: int, end_year: int) -> str:
    if start_year == end_year:
        return year_label(start_year)
    return f"{year_label(start_year)} - {year_label(end_year)}"


def difference(current: float, previous: float, kind: FormatKind) -> str:
    """Signed change between two figures, e.g. ``+¥1,000`` or ``-2.5%``."""
    diff = current - previous
    sign = "+" if diff >= 0 else ""

    if kind == "currency":
        return f"{sign}{currency(diff)}"
    if kind == "percentage":
        relative = diff / previous if previous != 0 else 0.0
        return f"{sign}{percentage(relative)}"
    return f"{sign}{number(diff)}"


def investment_summary(total_value: float, total_contributed: float, years: int) -> str:
    profit = total_value - total_contributed
    profit_rate = profit / total_contributed if total_contributed > 0 else 0.0

    return " | ".join(
        [
            f"{years}-year plan",
            f"Principal: {currency(total_contributed, compact=True)}",
            f"Final value: {currency(total_value, compact=True)}",
            f"Profit: {currency(profit, compact=True)} ({percentage(profit_rate)})",
        ]
    )


def normalize_input(text: str, kind: FormatKind = "number") -> float:
    """Parse user-typed figures like ``３０,０００円`` or ``5%``; unparsable input gives 0."""
    cleaned = _STRIP_MARKS.sub("", text.translate(_FULL_WIDTH_DIGITS))
    try:
        value = float(cleaned)
    except ValueError:
        return 0.0
    if not is_valid_number(value):
        return 0.0
    return value / 100 if kind == "percentage" else value
