"""
kpi/numeric.py

Float helpers shared by the engine and the formatters.

Results are kept finite: an overflow saturates at the largest
representable float of the same sign, and NaN collapses to zero.
"""

from __future__ import annotations

import math
import sys

FLOAT_MAX = sys.float_info.max


def saturate(value: float) -> float:
    """Clamp *value* into ``[-FLOAT_MAX, FLOAT_MAX]``; NaN becomes 0.0."""
    if math.isnan(value):
        return 0.0
    return min(max(value, -FLOAT_MAX), FLOAT_MAX)


def round_half_up(value: float) -> int:
    """Nearest integer, .5 rounding toward positive infinity."""
    return math.floor(saturate(value) + 0.5)
