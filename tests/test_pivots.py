# -*- coding: utf-8 -*-
from __future__ import annotations

import math

import pandas as pd
import pytest

from pandas_ta_series import ta
from pandas_ta_series.errors import InvalidConfigError, MissingInputError
from pandas_ta_series.ta._pivots import period_anchor

NAN = float("nan")


def test_traditional_levels():
    levels = ta.pivot_levels("Traditional", 110.0, 90.0, 100.0)
    assert levels == pytest.approx([100, 110, 90, 120, 80, 130, 70, 150, 50, 170, 30])


def test_fibonacci_levels():
    p, r1, s1, r2, s2, r3, s3 = ta.pivot_levels("Fibonacci", 110.0, 90.0, 100.0)[:7]
    assert p == pytest.approx(100.0)
    assert r1 == pytest.approx(100 + 0.382 * 20)
    assert s2 == pytest.approx(100 - 0.618 * 20)
    assert r3 == pytest.approx(120.0)


def test_woodie_pivot_weights_close():
    assert ta.pivot_levels("Woodie", 110.0, 90.0, 104.0)[0] == pytest.approx(102.0)


def test_dm_fills_three_slots():
    levels = ta.pivot_levels("DM", 110.0, 90.0, 100.0, 95.0)
    assert not any(math.isnan(v) for v in levels[:3])
    assert all(math.isnan(v) for v in levels[3:])


def test_camarilla_outer_levels_are_high_low():
    levels = ta.pivot_levels("Camarilla", 110.0, 90.0, 100.0)
    assert levels[1] == pytest.approx(100 + 20 * 1.1 / 12)
    assert levels[9] == 110.0
    assert levels[10] == 90.0


def test_nan_basis_gives_nan_levels():
    assert all(math.isnan(v) for v in ta.pivot_levels("Traditional", NAN, 1.0, 1.0))


def test_anchored_fixed_levels():
    high, low, close = [110, 120, 130], [90, 100, 110], [100, 110, 120]
    out = ta.pivot_point_levels("traditional", [False, True, False], False, high, low, close)
    assert len(out) == 11
    assert math.isnan(out[0][0])
    assert out[0][1] == pytest.approx(110.0)
    # held until the next anchor
    assert out[0][2] == pytest.approx(110.0)


def test_anchored_developing_levels():
    high, low, close = [110, 120, 105], [90, 100, 80], [100, 110, 95]
    out = ta.pivot_point_levels("Traditional", [True, False, False], True, high, low, close)
    assert out[0][0] == pytest.approx(100.0)
    assert out[0][1] == pytest.approx((120 + 90 + 110) / 3)
    assert out[0][2] == pytest.approx((120 + 80 + 95) / 3)


def test_invalid_pivot_configs():
    with pytest.raises(InvalidConfigError):
        ta.pivot_point_levels("Woodie", [True], True, [1.0], [1.0], [1.0])
    with pytest.raises(InvalidConfigError):
        ta.pivot_point_levels("Nope", [True], False, [1.0], [1.0], [1.0])
    with pytest.raises(MissingInputError):
        ta.pivot_point_levels("Classic", [True], False, [1.0], [1.0])


def test_period_anchor_daily():
    times = list(pd.date_range("2025-01-01 20:00", periods=6, freq="2h"))
    assert period_anchor(times, "D") == [True, False, True, False, False, False]
    assert period_anchor([], "D") == []
