# -*- coding: utf-8 -*-
from __future__ import annotations

import math

import pytest

from pandas_ta_series import series_ta as sta
from pandas_ta_series import ta
from pandas_ta_series.errors import InvalidConfigError, MissingInputError
from pandas_ta_series.runtime import Bar, BarData, Series

from conftest import closes_to_bars, make_ohlcv, same

NAN = float("nan")


def close_of(data: BarData) -> Series:
    return Series.from_field(data, "close")


def test_sma_series_end_to_end(five_bars):
    out = sta.sma(close_of(five_bars), 3)
    assert out.name == "SMA_3"
    assert same(out.to_array(), [NAN, NAN, 2.0, 3.0, 4.0])
    five_bars.append(Bar(5, 6, 6, 6, 6))
    assert out.last() == pytest.approx(5.0)


def test_ema_series_first_value():
    data = BarData(closes_to_bars([10, 11, 12, 13, 14]))
    assert sta.ema(close_of(data), 5).get(0) == 10.0


def test_lifted_result_is_cached(bar_data):
    rsi = sta.rsi(close_of(bar_data), 14)
    first = rsi.to_array()
    assert rsi.to_array() is first
    assert same(first, ta.rsi(bar_data.field("close"), 14))


def test_lifted_result_tracks_mutation(bar_data):
    close = close_of(bar_data)
    atr = sta.atr(bar_data, 14)
    before = atr.to_array()
    last = bar_data.at(len(bar_data) - 1)
    bar_data.replace_last(Bar(last.time, last.open, last.high + 5, last.low, last.close))
    after = atr.to_array()
    assert after is not before
    assert after[-1] > before[-1]
    assert same(after[:-1], before[:-1])
    assert len(close.to_array()) == len(after)


def test_multi_output_tuples(bar_data):
    close = close_of(bar_data)
    line, signal, hist = sta.macd(close)
    assert (line.name, signal.name, hist.name) == (
        "MACD_12_26_9", "MACDs_12_26_9", "MACDh_12_26_9")
    expected = ta.macd(bar_data.field("close"))
    assert same(hist.to_array(), expected[2])

    basis, upper, lower = sta.bb(close, 20)
    assert same(basis.to_array(), ta.sma(bar_data.field("close"), 20))

    levels = sta.pivot_point_levels(bar_data, "Camarilla",
                                    Series.constant(bar_data, 1))
    assert len(levels) == 11
    assert levels[0].name == "PIVOTS_CAMARILLA_P"


def test_bar_based_wrappers_accept_series(bar_data):
    close = close_of(bar_data)
    assert same(sta.tr(close).to_array(), sta.tr(bar_data).to_array())
    value, direction = sta.supertrend(close)
    assert value.name == "SUPERT_10_3"
    assert set(direction.to_array()) <= {-1.0, 1.0}
    assert same(sta.adx(bar_data).to_array(), sta.dmi(bar_data)[2].to_array())
    h, l_, c = bar_data.field("high"), bar_data.field("low"), bar_data.field("close")
    assert same(sta.sar(bar_data).to_array(), ta.sar(0.02, 0.02, 0.2, h, l_, c))
    assert len(sta.ichimoku(bar_data)) == 5


def test_zigzag_series_forms():
    swings = [100, 90, 80, 90, 100, 110, 100, 90, 80, 90, 100]
    data = BarData(closes_to_bars(swings))
    from_bars = sta.zigzag(data, 5.0, 2, 1)
    from_source = sta.zigzag(close_of(data), 5.0, 2, 1)
    assert same(from_bars[0].to_array(), from_source[0].to_array())
    pivots = from_source[2].to_array()
    assert [i for i, p in enumerate(pivots) if p == 1.0] == [0, 2, 5, 8, 10]


def test_boolean_results_become_floats(five_bars):
    close = close_of(five_bars)
    assert sta.rising(close, 1).to_array() == [0.0, 1.0, 1.0, 1.0, 1.0]
    assert sta.crossover(close, 2.5).to_array() == [0.0, 0.0, 1.0, 0.0, 0.0]
    assert same(sta.barssince(close.gt(3)).to_array(), [NAN, NAN, NAN, 0.0, 0.0])


def test_scalar_second_operands(five_bars):
    close = close_of(five_bars)
    assert sta.max(close, 3).to_array() == [3.0, 3.0, 3.0, 4.0, 5.0]
    assert sta.min(close, 3).to_array() == [1.0, 2.0, 3.0, 3.0, 3.0]
    assert sta.range(close, 1).to_array() == [0.0, 1.0, 2.0, 3.0, 4.0]
    assert same(sta.valuewhen(close.gt(3), 7).to_array(), [NAN, NAN, NAN, 7.0, 7.0])


def test_validation_is_eager(five_bars):
    close = close_of(five_bars)
    with pytest.raises(InvalidConfigError):
        sta.sma(close, 0)
    with pytest.raises(InvalidConfigError):
        sta.hma(close, 1)
    with pytest.raises(InvalidConfigError):
        sta.valuewhen(close.gt(1), close, -1)
    with pytest.raises(InvalidConfigError):
        sta.percentile_linear_interpolation(close, 3, 150)
    with pytest.raises(InvalidConfigError):
        sta.percentile_linear_interpolation(close, 3, -50)
    with pytest.raises(InvalidConfigError):
        sta.pivot_point_levels(five_bars, "Woodie", Series.constant(five_bars, 1), True)
    with pytest.raises(InvalidConfigError):
        sta.pivot_point_levels(five_bars, "Unknown", Series.constant(five_bars, 1))


def test_missing_volume_is_eager():
    data = BarData.from_dataframe(make_ohlcv(20, seed=3, volume=False))
    close = close_of(data)
    with pytest.raises(MissingInputError):
        sta.vwma(close, 5)
    with pytest.raises(MissingInputError):
        sta.mfi(close, 5)
    with pytest.raises(MissingInputError):
        sta.vwap(close)
    # an explicit volume series is fine
    assert len(sta.vwap(close, Series.constant(data, 1)).to_array()) == 20


def test_volume_series_wrappers(bar_data):
    close = close_of(bar_data)
    vol = bar_data.field("volume")
    assert same(sta.vwma(close, 10).to_array(),
                ta.vwma(bar_data.field("close"), 10, vol))
    assert same(sta.mfi(close, 14).to_array(),
                ta.mfi(bar_data.field("close"), 14, vol))


def test_statistics_wrappers(bar_data):
    close = close_of(bar_data)
    src = bar_data.field("close")
    assert same(sta.stdev(close, 20).to_array(), ta.stdev(src, 20))
    assert same(sta.percentrank(close, 20).to_array(), ta.percentrank(src, 20))
    assert same(sta.correlation(close, close.offset(1), 10).to_array(),
                ta.correlation(src, [NAN] + src[:-1], 10))
    assert same(sta.linreg(close, 14).to_array(), ta.linreg(src, 14))
    assert same(sta.cci(close, 20).to_array(), ta.cci(src, 20))


def test_empty_bar_data_never_raises():
    data = BarData()
    close = close_of(data)
    assert sta.sma(close, 3).to_array() == []
    assert sta.rsi(close, 14).to_array() == []
    assert sta.vwap(close).to_array() == []
    value, direction = sta.supertrend(data)
    assert value.to_array() == []


def test_pivothigh_series(five_bars):
    out = sta.pivothigh(close_of(five_bars), 1, 1).to_array()
    assert all(math.isnan(v) for v in out)


def test_percentile_series_bounds(five_bars):
    close = close_of(five_bars)
    top = sta.percentile_linear_interpolation(close, 3, 100).to_array()
    bottom = sta.percentile_linear_interpolation(close, 3, 0).to_array()
    assert same(top, [NAN, NAN, 3.0, 4.0, 5.0])
    assert same(bottom, [NAN, NAN, 1.0, 2.0, 3.0])
