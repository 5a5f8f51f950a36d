"""
Display Formatting — Rounding and p-value rendering for result tables.
"""

import math
from typing import Union

Number = Union[int, float]

P_VALUE_FLOOR = 0.0001


def round2(value: float) -> float:
    """Round half-up to 2 decimals (matches the workbench's display rounding)."""
    if math.isinf(value) or math.isnan(value):
        return value
    return math.floor(value * 100 + 0.5) / 100


def format_number(value: Number) -> str:
    """Render a number for inline text: integral values drop the trailing '.0'."""
    if isinstance(value, int):
        return str(value)
    if math.isinf(value):
        return "∞" if value > 0 else "-∞"
    rounded = round2(value)
    if rounded.is_integer():
        return str(int(rounded))
    return repr(rounded)


def format_p_value(p: float) -> str:
    if p < P_VALUE_FLOOR:
        return "< .0001"
    return f"{p:.4f}"


def display_statistic(value: float) -> Union[float, str]:
    """Rounded float for result tables; infinite statistics become a printable string."""
    if math.isinf(value):
        return format_number(value)
    return round2(value)
