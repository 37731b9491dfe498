# -*- coding: utf-8 -*-
from __future__ import annotations

import math

import pytest

from pandas_ta_series import ta
from pandas_ta_series.errors import InvalidConfigError, MissingInputError

from conftest import same

NAN = float("nan")

SWINGS = [100, 90, 80, 90, 100, 110, 100, 90, 80, 90, 100]


# ---------------------------------------------------------------------------
# Supertrend
# ---------------------------------------------------------------------------

def test_supertrend_direction_values(ohlcv_df):
    h, l_, c = ohlcv_df["high"], ohlcv_df["low"], ohlcv_df["close"]
    values, directions = ta.supertrend(3.0, 10, h, l_, c)
    assert len(values) == len(directions) == len(ohlcv_df)
    assert directions[0] == 1.0
    assert set(directions) <= {-1.0, 1.0}


def test_supertrend_bands_are_sticky(ohlcv_df):
    h, l_, c = ohlcv_df["high"], ohlcv_df["low"], ohlcv_df["close"]
    values, directions = ta.supertrend(2.0, 7, h, l_, c)
    for i in range(2, len(values)):
        if math.isnan(values[i]) or math.isnan(values[i - 1]):
            continue
        if directions[i] == directions[i - 1] == -1.0:
            # lower band only ratchets up
            assert values[i] >= values[i - 1]
        elif directions[i] == directions[i - 1] == 1.0:
            # upper band only ratchets down
            assert values[i] <= values[i - 1]


def test_supertrend_requires_bars():
    with pytest.raises(MissingInputError):
        ta.supertrend(3.0, 10, [1.0], [1.0])


# ---------------------------------------------------------------------------
# Parabolic SAR
# ---------------------------------------------------------------------------

def test_sar_stays_below_rising_lows():
    low = [float(i) for i in range(1, 31)]
    high = [v + 1 for v in low]
    close = [v + 0.5 for v in low]
    out = ta.sar(0.02, 0.02, 0.2, high, low, close)
    assert math.isnan(out[0])
    assert all(out[i] < low[i] for i in range(1, len(out)))


def test_sar_flips_on_reversal():
    low = [float(i) for i in range(1, 11)] + [float(i) for i in range(9, 0, -1)]
    high = [v + 1 for v in low]
    close = [v + 0.5 for v in low]
    out = ta.sar(0.02, 0.02, 0.2, high, low, close)
    assert out[5] < low[5]
    assert out[-1] > high[-1]


# ---------------------------------------------------------------------------
# DMI / ADX
# ---------------------------------------------------------------------------

def test_dmi_on_steady_rise():
    low = [float(i) for i in range(1, 41)]
    high = [v + 1 for v in low]
    close = [v + 0.5 for v in low]
    plus, minus, adx = ta.dmi(14, 14, high, low, close)
    assert all(m == 0.0 for m in minus)
    assert all(p > 0 for p in plus)
    assert all(-1e-9 <= a <= 100.0 + 1e-9 for a in adx)
    assert same(ta.adx(14, 14, high, low, close), adx)


def test_dmi_rejects_bad_lengths():
    with pytest.raises(InvalidConfigError):
        ta.dmi(0, 14, [1.0], [1.0], [1.0])


# ---------------------------------------------------------------------------
# ZigZag
# ---------------------------------------------------------------------------

def test_zigzag_pivots_and_repaint():
    values, directions, is_pivot = ta.zigzag(5.0, 2, 1, source=SWINGS)
    assert [i for i, p in enumerate(is_pivot) if p] == [0, 2, 5, 8, 10]
    assert same(values, [100.0, NAN, 80.0, NAN, NAN, 110.0, NAN, NAN, 80.0, NAN, 100.0])
    # the last pivot (index 10) is still unconfirmed: direction ignores it
    assert directions == [-1.0, -1.0, 1.0, 1.0, 1.0, -1.0, -1.0, -1.0, 1.0, 1.0, 1.0]


LONG_SWINGS = SWINGS + [110, 120]


def _flips(directions):
    return [i for i in range(1, len(directions)) if directions[i] != directions[i - 1]]


def test_zigzag_backstep_delays_confirmation():
    _, directions, is_pivot = ta.zigzag(5.0, 2, 2, source=LONG_SWINGS)
    assert [i for i, p in enumerate(is_pivot) if p] == [0, 2, 5, 8, 12]
    assert directions == [-1.0, -1.0, 1.0, 1.0, 1.0, -1.0, -1.0, -1.0,
                          1.0, 1.0, 1.0, 1.0, 1.0]

    _, directions, is_pivot = ta.zigzag(5.0, 2, 3, source=LONG_SWINGS)
    # the low at 2 confirms only on bar 5, so the high at 5 is never taken
    assert [i for i, p in enumerate(is_pivot) if p] == [0, 2, 12]
    assert directions == [-1.0, -1.0] + [1.0] * 11


def test_zigzag_direction_waits_for_backstep_bars():
    n = len(LONG_SWINGS)
    for backstep in (1, 2, 3):
        _, directions, _ = ta.zigzag(5.0, 2, backstep, source=LONG_SWINGS)
        # the trailing repainting pivot (index 12) never flips direction
        assert all(i + backstep <= n - 1 for i in _flips(directions))


def test_zigzag_deviation_gate():
    values, directions, is_pivot = ta.zigzag(50.0, 2, 1, source=SWINGS)
    assert [i for i, p in enumerate(is_pivot) if p] == [0]
    assert directions == [-1.0] * len(SWINGS)


def test_zigzag_high_low_form_matches_source_form():
    a = ta.zigzag(5.0, 2, 1, source=SWINGS)
    b = ta.zigzag(5.0, 2, 1, high=SWINGS, low=SWINGS)
    assert same(a[0], b[0])
    assert a[1] == b[1]
    assert a[2] == b[2]


def test_zigzag_requires_input():
    with pytest.raises(MissingInputError):
        ta.zigzag()
    with pytest.raises(InvalidConfigError):
        ta.zigzag(5.0, 0, 1, source=SWINGS)
