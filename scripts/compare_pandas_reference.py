#!/usr/bin/env python3
"""Compare array-level indicator outputs vs pandas reference computations.

Each entry pairs one of our algorithms with the equivalent pandas
rolling / ewm expression and reports NaN counts and absolute / relative
differences per column.
"""
from __future__ import annotations

import argparse
import os
import sys
from typing import Callable, Dict, Tuple

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import numpy as np
import pandas as pd

from pandas_ta_series import ta


def make_ohlcv(rows: int, seed: int) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    idx = pd.date_range("2025-01-01", periods=rows, freq="1min")
    base = 100 + rng.standard_normal(rows).cumsum()
    close = base + rng.normal(0, 0.2, rows)
    open_ = base + rng.normal(0, 0.2, rows)
    high = np.maximum(open_, close) + rng.random(rows) * 0.5
    low = np.minimum(open_, close) - rng.random(rows) * 0.5
    volume = rng.integers(100, 1000, rows).astype(float)
    return pd.DataFrame(
        {
            "open": open_,
            "high": high,
            "low": low,
            "close": close,
            "volume": volume,
        },
        index=idx,
    )


def reference_pairs(df: pd.DataFrame, length: int) -> Dict[str, Tuple[Callable, Callable]]:
    close, high, low, volume = df["close"], df["high"], df["low"], df["volume"]
    span = length
    return {
        f"SMA_{length}": (
            lambda: ta.sma(close, length),
            lambda: close.rolling(length).mean(),
        ),
        f"EMA_{length}": (
            lambda: ta.ema(close, length),
            lambda: close.ewm(span=span, adjust=False).mean(),
        ),
        f"STDEV_{length}": (
            lambda: ta.stdev(close, length),
            lambda: close.rolling(length).std(ddof=0),
        ),
        f"VAR_{length}": (
            lambda: ta.variance(close, length, biased=False),
            lambda: close.rolling(length).var(ddof=1),
        ),
        f"HIGHEST_{length}": (
            lambda: ta.highest(high, length),
            lambda: high.rolling(length).max(),
        ),
        f"LOWEST_{length}": (
            lambda: ta.lowest(low, length),
            lambda: low.rolling(length).min(),
        ),
        f"MEDIAN_{length}": (
            lambda: ta.median(close, length),
            lambda: close.rolling(length).median(),
        ),
        f"CORR_{length}": (
            lambda: ta.correlation(close, volume, length),
            lambda: close.rolling(length).corr(volume),
        ),
        f"MOM_{length}": (
            lambda: ta.mom(close, length),
            lambda: close.diff(length),
        ),
        f"ROC_{length}": (
            lambda: ta.roc(close, length),
            lambda: close.pct_change(length) * 100.0,
        ),
        "CUM": (
            lambda: ta.cum(close),
            lambda: close.cumsum(),
        ),
    }


def compare_frames(ref: pd.DataFrame, test: pd.DataFrame, eps: float) -> pd.DataFrame:
    diff = (test - ref).abs()
    rel = diff / (ref.abs() + eps)
    return pd.DataFrame(
        {
            "nan_ref": ref.isna().sum(),
            "nan_test": test.isna().sum(),
            "max_abs": diff.max(),
            "mean_abs": diff.mean(),
            "mean_rel": rel.mean(),
        }
    )


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--rows", type=int, default=2000)
    ap.add_argument("--length", type=int, default=20)
    ap.add_argument("--tail", type=int, default=0, help="compare last N rows only (0 = all)")
    ap.add_argument("--seed", type=int, default=11)
    ap.add_argument("--eps", type=float, default=1e-12)
    args = ap.parse_args()

    df = make_ohlcv(args.rows, args.seed)
    pairs = reference_pairs(df, args.length)

    test = pd.DataFrame({name: ours() for name, (ours, _) in pairs.items()}, index=df.index)
    ref = pd.DataFrame({name: theirs() for name, (_, theirs) in pairs.items()}, index=df.index)
    if args.tail > 0:
        test, ref = test.iloc[-args.tail:], ref.iloc[-args.tail:]

    summary = compare_frames(ref, test, args.eps)

    print("[i] rows:", args.rows)
    print("[i] length:", args.length)
    print("[i] compare rows:", len(test))
    print("[i] indicator columns:", len(pairs))
    print("\nBy max_abs:")
    print(summary.sort_values("max_abs", ascending=False))


if __name__ == "__main__":
    main()
