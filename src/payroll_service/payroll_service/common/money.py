from __future__ import annotations

import math
from typing import Any


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (-2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def parse_amount(value: Any) -> float:
    """Best-effort numeric parse of a stored salary amount; invalid input is 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _group_indian(digits: str) -> str:
    if len(digits) <= 3:
        return digits

    result = digits[-3:]
    remaining = digits[:-3]
    while len(remaining) > 2:
        result = f"{remaining[-2:]},{result}"
        remaining = remaining[:-2]
    if remaining:
        result = f"{remaining},{result}"
    return result


def format_inr(value: Any) -> str:
    """Format an amount as rupees with Indian digit grouping, e.g. ₹12,34,567."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        safe = 0
    else:
        safe = round_half_up(value)

    sign = "-" if safe < 0 else ""
    return f"{sign}₹{_group_indian(str(abs(safe)))}"


def format_payable_hours(total_minutes: int) -> str:
    h, m = divmod(max(int(total_minutes), 0), 60)
    if m > 0:
        return f"{h} hr {m} min"
    return f"{h} hr"
