#!/usr/bin/env python3
"""Benchmark Series recalculation speed as bar history grows.

Builds a small indicator graph (SMA, RSI, ATR, Supertrend, MACD) over a
BarData, reads it once, then times one mutation plus a full re-read.
Three modes:
  - append:  a new bar arrives (BarData.append)
  - replace: the live bar updates in place (BarData.replace_last)
  - read:    no mutation, cached read only (should be ~O(1))
"""
from __future__ import annotations

import argparse
import os
import sys
from time import perf_counter
from typing import List

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import numpy as np
import pandas as pd

from pandas_ta_series import series_ta as sta
from pandas_ta_series.runtime import Bar, BarData, Series


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


def parse_list(value: str) -> List[int]:
    return [int(v.strip()) for v in value.split(",") if v.strip()]


def time_call(fn, runs: int) -> float:
    times = []
    for _ in range(max(runs, 1)):
        start = perf_counter()
        fn()
        times.append(perf_counter() - start)
    return sum(times) / len(times)


def build_graph(data: BarData) -> List[Series]:
    close = Series.from_field(data, "close")
    outputs = [
        sta.sma(close, 20),
        sta.rsi(close, 14),
        sta.atr(data, 14),
    ]
    outputs.extend(sta.supertrend(data, 3.0, 10))
    outputs.extend(sta.macd(close))
    return outputs


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument(
        "--sizes",
        type=str,
        default="1000,5000,10000,50000",
        help="comma-separated total row counts",
    )
    ap.add_argument("--seed", type=int, default=7)
    ap.add_argument("--warmup", type=int, default=1, help="warmup runs (not timed)")
    ap.add_argument("--runs", type=int, default=3, help="timed runs")
    ap.add_argument(
        "--mode",
        type=str,
        default="all",
        choices=("append", "replace", "read", "all"),
        help="benchmark mutation mode",
    )
    args = ap.parse_args()

    sizes = parse_list(args.sizes)
    modes = ("append", "replace", "read") if args.mode == "all" else (args.mode,)

    print(f"[i] sizes: {sizes}")
    print(f"[i] runs: {args.runs} (warmup: {args.warmup})")
    print(f"[i] modes: {modes}")

    for rows in sizes:
        df = make_ohlcv(rows, args.seed)
        data = BarData.from_dataframe(df)
        graph = build_graph(data)
        for s in graph:
            s.to_array()

        def read_all():
            for s in graph:
                s.to_array()

        def run_append():
            last = data.at(len(data) - 1)
            data.append(Bar(last.time, last.close, last.close + 0.3, last.close - 0.3,
                            last.close + 0.1, last.volume))
            read_all()

        def run_replace():
            last = data.at(len(data) - 1)
            data.replace_last(Bar(last.time, last.open, last.high + 0.01, last.low,
                                  last.close + 0.01, last.volume))
            read_all()

        runners = {"append": run_append, "replace": run_replace, "read": read_all}
        for mode in modes:
            fn = runners[mode]
            for _ in range(max(args.warmup, 0)):
                fn()
            avg = time_call(fn, args.runs)
            print(f"[{mode}] rows={rows} series={len(graph)} avg_s={avg:.6f}")


if __name__ == "__main__":
    main()
