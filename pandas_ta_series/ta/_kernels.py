# -*- coding: utf-8 -*-
"""pandas-ta-series -- numba kernels for the naive window scans.

Every kernel re-scans its full window for each index, O(length) per bar.
Inputs are float64 ndarrays; NaN marks unavailable output.
"""
from __future__ import annotations

from typing import List, Sequence

import numpy as np
from numba import njit
from numpy import full, isnan, nan


def as_array(values: Sequence[float]) -> np.ndarray:
    return np.asarray(values, dtype=np.float64)


# Sum of the trailing window, newest value first.
@njit(cache=True)
def nb_rolling_sum(x, length):
    m = x.size
    out = full(m, nan)

    for i in range(length - 1, m):
        total = 0.0
        for j in range(length):
            total += x[i - j]
        out[i] = total

    return out


# Highest / lowest of the trailing window, skipping NaN.
@njit(cache=True)
def nb_rolling_extreme(x, length, find_max):
    m = x.size
    out = full(m, nan)

    for i in range(length - 1, m):
        found = False
        best = 0.0
        for j in range(length):
            v = x[i - j]
            if isnan(v):
                continue
            if not found:
                best = v
                found = True
            elif find_max and v > best:
                best = v
            elif not find_max and v < best:
                best = v
        if found:
            out[i] = best

    return out


# Strict pivots: the center must beat every bar on both sides.
@njit(cache=True)
def nb_pivot_scan(x, left, right, find_high):
    m = x.size
    out = full(m, nan)

    for i in range(left, m - right):
        center = x[i]
        is_pivot = True

        for j in range(1, left + 1):
            v = x[i - j]
            if (find_high and v >= center) or (not find_high and v <= center):
                is_pivot = False
                break

        if is_pivot:
            for j in range(1, right + 1):
                v = x[i + j]
                if (find_high and v >= center) or (not find_high and v <= center):
                    is_pivot = False
                    break

        if is_pivot:
            out[i] = center

    return out


def rolling_sum(values: Sequence[float], length: int) -> List[float]:
    return nb_rolling_sum(as_array(values), length).tolist()


def rolling_extreme(values: Sequence[float], length: int, find_max: bool) -> List[float]:
    return nb_rolling_extreme(as_array(values), length, find_max).tolist()


def pivot_scan(values: Sequence[float], left: int, right: int, find_high: bool) -> List[float]:
    return nb_pivot_scan(as_array(values), left, right, find_high).tolist()
