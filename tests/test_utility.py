# -*- coding: utf-8 -*-
from __future__ import annotations

import math

import pytest

from pandas_ta_series import ta
from pandas_ta_series.errors import InvalidConfigError, MissingInputError

from conftest import same

NAN = float("nan")


def test_highest_lowest_skip_nan():
    src = [1, 5, NAN, 3, NAN, NAN]
    assert same(ta.highest(src, 3), [NAN, NAN, 5.0, 5.0, 3.0, 3.0])
    assert same(ta.lowest(src, 3), [NAN, NAN, 1.0, 3.0, 3.0, 3.0])
    assert same(ta.highest([NAN, NAN, 1], 2), [NAN, NAN, 1.0])


def test_highestbars_lowestbars():
    src = [1, 5, 2, 3, 0]
    assert same(ta.highestbars(src, 3), [NAN, NAN, 1.0, 2.0, 1.0])
    assert same(ta.lowestbars(src, 3), [NAN, NAN, 2.0, 1.0, 0.0])


def test_change_and_cum():
    assert same(ta.change([1, 4, 9], 1), [NAN, 3.0, 5.0])
    assert same(ta.change([1, 4, 9], 2), [NAN, NAN, 8.0])
    assert ta.cum([1, 2, 3]) == [1.0, 3.0, 6.0]


def test_vwap():
    out = ta.vwap([10, 20], [1, 3])
    assert out[0] == pytest.approx(10.0)
    assert out[1] == pytest.approx((10 + 60) / 4)
    with pytest.raises(MissingInputError):
        ta.vwap([10, 20])


def test_cross_family():
    a = [1, 3, 1, 3]
    b = [2, 2, 2, 2]
    assert ta.crossover(a, b) == [False, True, False, True]
    assert ta.crossunder(a, b) == [False, False, True, False]
    assert ta.cross(a, b) == [False, True, True, True]


def test_rising_falling():
    assert ta.rising([1, 2, 3, 2], 2) == [False, False, True, False]
    assert ta.falling([3, 2, 1, 2], 2) == [False, False, True, False]
    # NaN breaks the streak
    assert ta.rising([1, NAN, 3, 4], 1) == [False, False, False, True]


def test_barssince():
    out = ta.barssince([False, True, False, False, True])
    assert same(out, [NAN, 0.0, 1.0, 2.0, 0.0])


def test_valuewhen():
    cond = [True, False, True, False]
    src = [10, 20, 30, 40]
    assert same(ta.valuewhen(cond, src, 0), [10.0, 10.0, 30.0, 30.0])
    assert same(ta.valuewhen(cond, src, 1), [NAN, NAN, 10.0, 10.0])
    with pytest.raises(InvalidConfigError):
        ta.valuewhen(cond, src, -1)


def test_elementwise_max_min():
    assert same(ta.max([1, 5, NAN], [3, 2, 1]), [3.0, 5.0, NAN])
    assert same(ta.min([1, 5, NAN], [3, 2, 1]), [1.0, 2.0, NAN])


def test_mismatched_lengths_raise():
    with pytest.raises(InvalidConfigError):
        ta.crossover([1, 2], [1, 2, 3])
