"""
_format.py — number formatting shared by every presenter.
"""
from __future__ import annotations

import math

# Above this magnitude floats stop being exact integers.
_EXACT_INT_LIMIT = 2 ** 53


def format_number(value: float) -> str:
    """`3.0` → "3", `4.5` → "4.5", inf → "∞", nan → "NaN"."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "∞" if value > 0 else "-∞"
    if value.is_integer() and abs(value) < _EXACT_INT_LIMIT:
        return str(int(value))
    return repr(value)
