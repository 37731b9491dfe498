# -*- coding: utf-8 -*-
from __future__ import annotations

import math

import pandas as pd
import pytest

from pandas_ta_series.errors import InvalidConfigError
from pandas_ta_series.runtime import Bar, BarData, Series, lift

from conftest import closes_to_bars, same


def close_of(data: BarData) -> Series:
    return Series.from_field(data, "close")


# ---------------------------------------------------------------------------
# Cache identity / invalidation
# ---------------------------------------------------------------------------

def test_to_array_is_referentially_stable(five_bars):
    close = close_of(five_bars)
    first = close.to_array()
    assert close.to_array() is first


def test_mutation_recomputes(five_bars):
    close = close_of(five_bars)
    first = close.to_array()
    five_bars.append(Bar(5, 6, 6, 6, 6))
    second = close.to_array()
    assert second is not first
    assert second == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]


def test_dependent_sees_append_after_first_read(five_bars):
    doubled = close_of(five_bars).mul(2)
    assert doubled.to_array() == [2.0, 4.0, 6.0, 8.0, 10.0]
    five_bars.append(Bar(5, 6, 6, 6, 6))
    assert doubled.to_array() == [2.0, 4.0, 6.0, 8.0, 10.0, 12.0]


def test_manual_invalidate_propagates_to_dependents(five_bars):
    values = [1.0, 2.0, 3.0, 4.0, 5.0]
    raw = Series.from_array(five_bars, values)
    plus = raw + 1
    assert plus.to_array() == [2.0, 3.0, 4.0, 5.0, 6.0]
    values[0] = 100.0
    # cached until told otherwise
    assert plus.get(0) == 2.0
    raw.invalidate()
    assert plus.get(0) == 101.0


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------

def test_arithmetic_and_reflected(five_bars):
    c = close_of(five_bars)
    assert (c + c).to_array() == [2.0, 4.0, 6.0, 8.0, 10.0]
    assert (10 - c).to_array() == [9.0, 8.0, 7.0, 6.0, 5.0]
    assert (c * 3).last() == 15.0
    assert (-c).get(0) == -1.0
    assert (1 / c).get(1) == 0.5


def test_division_and_modulo_by_zero_are_nan(five_bars):
    c = close_of(five_bars)
    assert all(math.isnan(v) for v in c.div(0).to_array())
    assert all(math.isnan(v) for v in c.mod(0).to_array())


def test_mod_takes_sign_of_dividend():
    data = BarData(closes_to_bars([-7, 7]))
    out = close_of(data).mod(3).to_array()
    assert out == [-1.0, 1.0]


def test_comparisons_and_logic(five_bars):
    c = close_of(five_bars)
    assert c.gt(3).to_array() == [0.0, 0.0, 0.0, 1.0, 1.0]
    assert c.lte(2).to_array() == [1.0, 1.0, 0.0, 0.0, 0.0]
    assert c.eq(3).to_array() == [0.0, 0.0, 1.0, 0.0, 0.0]
    both = c.gt(1).and_(c.lt(5))
    assert both.to_array() == [0.0, 1.0, 1.0, 1.0, 0.0]
    either = c.lt(2).or_(c.gt(4))
    assert either.to_array() == [1.0, 0.0, 0.0, 0.0, 1.0]
    assert c.gt(3).not_().to_array() == [1.0, 1.0, 1.0, 0.0, 0.0]


def test_nan_is_false_in_logic(five_bars):
    nan_series = Series.constant(five_bars, float("nan"))
    assert nan_series.and_(1).to_array() == [0.0] * 5
    assert nan_series.not_().to_array() == [1.0] * 5


# ---------------------------------------------------------------------------
# History access
# ---------------------------------------------------------------------------

def test_offset_boundaries(five_bars):
    c = close_of(five_bars)
    past = c.offset(1).to_array()
    assert math.isnan(past[0])
    assert past[1:] == [1.0, 2.0, 3.0, 4.0]

    future = c.offset(-1).to_array()
    assert future[:4] == [2.0, 3.0, 4.0, 5.0]
    assert math.isnan(future[4])

    assert all(math.isnan(v) for v in c.offset(5).to_array())


def test_offset_requires_whole_number(five_bars):
    c = close_of(five_bars)
    for k in (float("nan"), 1.5, "1"):
        with pytest.raises(InvalidConfigError):
            c.offset(k)
    assert c.offset(2.0).to_array()[2:] == [1.0, 2.0, 3.0]


def test_get_out_of_range_is_nan(five_bars):
    c = close_of(five_bars)
    assert math.isnan(c.get(-1))
    assert math.isnan(c.get(5))
    assert c.get(4) == 5.0


def test_empty_data():
    c = close_of(BarData())
    assert c.to_array() == []
    assert math.isnan(c.last())
    assert c.offset(1).to_array() == []


# ---------------------------------------------------------------------------
# Factories / materialize / export
# ---------------------------------------------------------------------------

def test_from_array_shorter_than_data(five_bars):
    s = Series.from_array(five_bars, [1, 2])
    out = s.to_array()
    assert out[:2] == [1.0, 2.0]
    assert all(math.isnan(v) for v in out[2:])


def test_from_extractor(five_bars):
    s = Series.from_extractor(five_bars, lambda bar, i, bars: bar.close * i)
    assert s.to_array() == [0.0, 2.0, 6.0, 12.0, 20.0]


def test_materialize_equals_source(bar_data):
    expr = close_of(bar_data)
    for k in range(1, 40):
        expr = expr.add(close_of(bar_data).offset(k)).mul(0.5)
    snap = expr.materialize()
    assert same(snap.to_array(), expr.to_array())
    assert snap.to_array() is not expr.to_array()


def test_materialize_reads_nan_past_snapshot(five_bars):
    snap = close_of(five_bars).materialize()
    five_bars.append(Bar(5, 6, 6, 6, 6))
    assert math.isnan(snap.last())


def test_deep_chain_does_not_recurse(five_bars):
    expr = close_of(five_bars)
    for _ in range(5000):
        expr = expr + 1
    assert expr.last() == 5005.0


def test_to_pandas_and_pairs(five_bars):
    c = close_of(five_bars).offset(1)
    ser = c.to_pandas()
    assert isinstance(ser, pd.Series)
    assert ser.index.name == "time"
    assert len(ser) == 5
    assert c.to_time_value_pairs() == [(1, 1.0), (2, 2.0), (3, 3.0), (4, 4.0)]


# ---------------------------------------------------------------------------
# lift
# ---------------------------------------------------------------------------

def test_lift_multi_output_shares_one_computation(five_bars):
    calls = []

    def split(values):
        calls.append(1)
        return [v * 2 for v in values], [v * 3 for v in values]

    double, triple = lift(split, close_of(five_bars), outputs=2, names=("x2", "x3"))
    assert double.to_array() == [2.0, 4.0, 6.0, 8.0, 10.0]
    assert triple.to_array() == [3.0, 6.0, 9.0, 12.0, 15.0]
    assert len(calls) == 1
    assert double.name == "x2"


def test_lift_aligns_operands_from_other_data(five_bars):
    other = BarData(closes_to_bars([10, 20]))
    summed = lift(lambda a, b: [x + y for x, y in zip(a, b)],
                  close_of(five_bars), close_of(other))
    out = summed.to_array()
    assert out[:2] == [11.0, 22.0]
    assert all(math.isnan(v) for v in out[2:])
