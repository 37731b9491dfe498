# -*- coding: utf-8 -*-
from __future__ import annotations

import math
from typing import List, Sequence

import numpy as np
import pandas as pd
import pytest

from pandas_ta_series.runtime import Bar, BarData


def make_ohlcv(rows: int, seed: int, volume: bool = True) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    idx = pd.date_range("2025-01-01", periods=rows, freq="1h")
    base = 100 + rng.standard_normal(rows).cumsum()
    close = base + rng.normal(0, 0.2, rows)
    open_ = base + rng.normal(0, 0.2, rows)
    high = np.maximum(open_, close) + rng.random(rows) * 0.5
    low = np.minimum(open_, close) - rng.random(rows) * 0.5
    df = pd.DataFrame(
        {
            "open": open_,
            "high": high,
            "low": low,
            "close": close,
        },
        index=idx,
    )
    if volume:
        df["volume"] = rng.integers(100, 1000, rows).astype(float)
    return df


def closes_to_bars(closes: Sequence[float], volume: float = None) -> List[Bar]:
    """Flat bars: open = high = low = close."""
    return [Bar(i, c, c, c, c, volume) for i, c in enumerate(closes)]


def same(a: Sequence[float], b: Sequence[float], tol: float = 1e-9) -> bool:
    """Element-wise equality where NaN == NaN."""
    if len(a) != len(b):
        return False
    for x, y in zip(a, b):
        if math.isnan(x) or math.isnan(y):
            if not (math.isnan(x) and math.isnan(y)):
                return False
        elif abs(x - y) > tol:
            return False
    return True


@pytest.fixture
def ohlcv_df() -> pd.DataFrame:
    return make_ohlcv(200, seed=7)


@pytest.fixture
def bar_data(ohlcv_df) -> BarData:
    return BarData.from_dataframe(ohlcv_df)


@pytest.fixture
def five_bars() -> BarData:
    return BarData(closes_to_bars([1, 2, 3, 4, 5]))
