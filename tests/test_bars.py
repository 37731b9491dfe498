# -*- coding: utf-8 -*-
from __future__ import annotations

import math

import pandas as pd
import pytest

from pandas_ta_series.runtime import Bar, BarData, as_bar, bar_field


def test_version_starts_at_zero(five_bars):
    assert five_bars.version == 0
    assert len(five_bars) == 5


def test_each_mutation_bumps_once(five_bars):
    five_bars.append(Bar(5, 6, 6, 6, 6))
    assert five_bars.version == 1
    five_bars.set(0, Bar(0, 9, 9, 9, 9))
    assert five_bars.version == 2
    five_bars.replace_last(Bar(5, 7, 7, 7, 7))
    assert five_bars.version == 3
    assert five_bars.remove_last() == Bar(5, 7, 7, 7, 7)
    assert five_bars.version == 4
    five_bars.replace_all([Bar(0, 1, 1, 1, 1)])
    assert five_bars.version == 5
    five_bars.invalidate()
    assert five_bars.version == 6
    assert len(five_bars) == 1


def test_invalid_mutations_are_silent_noops():
    data = BarData()
    assert data.remove_last() is None
    data.replace_last(Bar(0, 1, 1, 1, 1))
    data.set(0, Bar(0, 1, 1, 1, 1))
    assert data.version == 0
    assert len(data) == 0

    data.append(Bar(0, 1, 1, 1, 1))
    data.set(-1, Bar(0, 2, 2, 2, 2))
    data.set(1, Bar(1, 2, 2, 2, 2))
    assert data.version == 1
    assert data.at(0).close == 1


def test_reads_never_bump(five_bars):
    _ = five_bars.bars, five_bars.at(2), five_bars.at(99), list(five_bars)
    five_bars.field("close")
    five_bars.to_dataframe()
    assert five_bars.version == 0
    assert five_bars.at(99) is None


def test_constructor_copies_input_list():
    source = [Bar(0, 1, 1, 1, 1)]
    data = BarData(source)
    source.append(Bar(1, 2, 2, 2, 2))
    assert len(data) == 1


def test_field_and_derived_fields():
    bar = Bar(0, open=1.0, high=4.0, low=2.0, close=3.0)
    assert bar_field(bar, "hl2") == 3.0
    assert bar_field(bar, "hlc3") == 3.0
    assert bar_field(bar, "ohlc4") == 2.5
    assert bar_field(bar, "hlcc4") == 3.0
    assert math.isnan(bar_field(bar, "volume"))


def test_as_bar_coercions():
    assert as_bar({"time": 1, "open": 1, "high": 2, "low": 0, "close": 1.5}).high == 2.0
    assert as_bar((1, 1, 2, 0, 1.5, 10)).volume == 10.0
    with pytest.raises(TypeError):
        as_bar("not a bar")


def test_has_volume():
    assert not BarData([Bar(0, 1, 1, 1, 1)]).has_volume()
    assert BarData([Bar(0, 1, 1, 1, 1, 5.0)]).has_volume()


def test_from_dataframe_round_trip(ohlcv_df):
    data = BarData.from_dataframe(ohlcv_df)
    assert len(data) == len(ohlcv_df)
    assert data.at(0).time == ohlcv_df.index[0]
    out = data.to_dataframe()
    assert out.index.name == "time"
    pd.testing.assert_series_equal(out["close"], ohlcv_df["close"], check_names=False,
                                   check_index=False)


def test_from_dataframe_needs_ohlc():
    with pytest.raises(ValueError):
        BarData.from_dataframe(pd.DataFrame({"close": [1.0, 2.0]}))
