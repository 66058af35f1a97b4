"""
tests/test_numeric.py

Float saturation and half-up rounding shared by the engine and formatters.
"""

from __future__ import annotations

import math

import pytest

from kpi.numeric import FLOAT_MAX, round_half_up, saturate


class TestSaturate:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (math.inf, FLOAT_MAX),
            (-math.inf, -FLOAT_MAX),
            (math.nan, 0.0),
            (12.5, 12.5),
            (-FLOAT_MAX, -FLOAT_MAX),
        ],
    )
    def test_saturate(self, value: float, expected: float) -> None:
        assert saturate(value) == expected


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value, expected",
        [(12.5, 13), (12.49, 12), (-2.5, -2), (0.0, 0)],
    )
    def test_rounding(self, value: float, expected: int) -> None:
        assert round_half_up(value) == expected

    def test_infinity_rounds_to_largest_float(self) -> None:
        assert round_half_up(math.inf) == int(FLOAT_MAX)
