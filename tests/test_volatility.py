# -*- coding: utf-8 -*-
from __future__ import annotations

import math

import pytest

from pandas_ta_series import ta
from pandas_ta_series.errors import MissingInputError

from conftest import same

NAN = float("nan")


def test_tr_first_bar_is_high_minus_low():
    out = ta.tr(False, [10, 12], [8, 9], [9, 11])
    assert out == [2.0, 3.0]


def test_tr_nan_previous_close():
    high, low, close = [10, 12, 13], [8, 9, 10], [9, NAN, 11]
    assert math.isnan(ta.tr(False, high, low, close)[2])
    assert ta.tr(True, high, low, close)[2] == 3.0


def test_tr_requires_hlc():
    with pytest.raises(MissingInputError) as info:
        ta.tr(False, [1], [1])
    assert "close" in str(info.value)


def test_atr_is_rma_of_tr(ohlcv_df):
    h, l_, c = ohlcv_df["high"], ohlcv_df["low"], ohlcv_df["close"]
    assert same(ta.atr(14, h, l_, c), ta.rma(ta.tr(False, h, l_, c), 14))


def test_bb_band_width(ohlcv_df):
    close = ohlcv_df["close"]
    basis, upper, lower = ta.bb(close, 20, 2.0)
    dev = ta.stdev(close, 20)
    assert same(basis, ta.sma(close, 20))
    for b, u, lo, d in zip(basis[19:], upper[19:], lower[19:], dev[19:]):
        assert u - b == pytest.approx(2.0 * d)
        assert b - lo == pytest.approx(2.0 * d)


def test_bbw_flat_is_zero():
    assert ta.bbw([5.0] * 5, 3)[-1] == pytest.approx(0.0)


def test_kc_high_low_range():
    close = [10.0, 11.0, 12.0, 13.0]
    high = [c + 1 for c in close]
    low = [c - 1 for c in close]
    basis, upper, lower = ta.kc(close, 3, 2.0, False, high, low, close)
    assert same(basis, ta.ema(close, 3))
    assert all(u - b == pytest.approx(4.0) for b, u in zip(basis, upper))
    assert all(b - lo == pytest.approx(4.0) for b, lo in zip(basis, lower))


def test_kc_requires_bars():
    with pytest.raises(MissingInputError):
        ta.kc([1.0, 2.0], 2)


def test_kcw(ohlcv_df):
    h, l_, c = ohlcv_df["high"], ohlcv_df["low"], ohlcv_df["close"]
    basis, upper, lower = ta.kc(c, 20, 2.0, True, h, l_, c)
    out = ta.kcw(c, 20, 2.0, True, h, l_, c)
    assert out[-1] == pytest.approx((upper[-1] - lower[-1]) / basis[-1] * 100.0)


def test_range():
    assert ta.range([3, 5], [1, 1]) == [2.0, 4.0]
    assert ta.hl_range is ta.range
