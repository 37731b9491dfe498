# -*- coding: utf-8 -*-
"""pandas-ta-series -- rolling statistics.

Registered kinds
----------------
stdev, variance, dev, median, mode, percentile, percentrank, correlation, rci, cog

Window convention: index ``i`` covers ``i-length+1 .. i`` and is NaN while
``i < length - 1``.  Whether NaN *inside* a full window is skipped or
poisons the result differs per function and is noted on each.
"""
from __future__ import annotations

import math
from collections import Counter
from typing import Any, Dict, List

from ._base import (
    NAN,
    Source,
    _param,
    _as_int,
    _as_float,
    _as_bool,
    _floats,
    _fmt_num,
    _check_length,
    _check_percentage,
    _same_length,
    Indicator,
    INDICATOR_REGISTRY,
)
from ._overlap import sma


def _windows(src: List[float], length: int):
    """Yield ``(i, window)`` for each full window, ``None`` before."""
    for i in range(len(src)):
        if i < length - 1:
            yield i, None
        else:
            yield i, src[i - length + 1:i + 1]


# ===========================================================================
# Dispersion
# ===========================================================================

def stdev(source: Source, length: int, biased: bool = True) -> List[float]:
    """Rolling standard deviation (population when *biased*)."""
    length = _check_length("stdev", length)
    src = _floats(source)
    avg = sma(src, length)
    divisor = length if biased else length - 1
    result: List[float] = []
    for i, window in _windows(src, length):
        if window is None or divisor == 0:
            result.append(NAN)
            continue
        mean = avg[i]
        sum_sq = 0.0
        for v in reversed(window):
            diff = v - mean
            sum_sq += diff * diff
        result.append(math.sqrt(sum_sq / divisor))
    return result


def variance(source: Source, length: int, biased: bool = True) -> List[float]:
    """Rolling variance; NaN members are left out of the sum and count."""
    length = _check_length("variance", length)
    src = _floats(source)
    avg = sma(src, length)
    result: List[float] = []
    for i, window in _windows(src, length):
        mean = avg[i]
        if window is None or math.isnan(mean):
            result.append(NAN)
            continue
        sum_sq = 0.0
        count = 0
        for v in reversed(window):
            if not math.isnan(v):
                diff = v - mean
                sum_sq += diff * diff
                count += 1
        divisor = count if biased else count - 1
        result.append(sum_sq / divisor if divisor > 0 else NAN)
    return result


def dev(source: Source, length: int) -> List[float]:
    """Rolling mean absolute deviation around the SMA."""
    length = _check_length("dev", length)
    src = _floats(source)
    avg = sma(src, length)
    result: List[float] = []
    for i, window in _windows(src, length):
        mean = avg[i]
        if window is None or math.isnan(mean):
            result.append(NAN)
            continue
        total = 0.0
        for v in reversed(window):
            if not math.isnan(v):
                total += abs(v - mean)
        result.append(total / length)
    return result


# ===========================================================================
# Order statistics  (NaN filtered unless noted)
# ===========================================================================

def median(source: Source, length: int) -> List[float]:
    length = _check_length("median", length)
    src = _floats(source)
    result: List[float] = []
    for _, window in _windows(src, length):
        values = sorted(v for v in window if not math.isnan(v)) if window is not None else []
        if not values:
            result.append(NAN)
            continue
        mid = len(values) // 2
        if len(values) % 2 == 0:
            result.append((values[mid - 1] + values[mid]) / 2.0)
        else:
            result.append(values[mid])
    return result


def mode(source: Source, length: int) -> List[float]:
    """Most frequent value in the window; ties go to the smallest value."""
    length = _check_length("mode", length)
    src = _floats(source)
    result: List[float] = []
    for _, window in _windows(src, length):
        values = [v for v in window if not math.isnan(v)] if window is not None else []
        if not values:
            result.append(NAN)
            continue
        counts = Counter(values)
        top = max(counts.values())
        result.append(min(v for v, c in counts.items() if c == top))
    return result


def percentile_linear_interpolation(source: Source, length: int, percentage: float) -> List[float]:
    """Interpolated percentile; any NaN in the window gives NaN."""
    length = _check_length("percentile_linear_interpolation", length)
    percentage = _check_percentage("percentile_linear_interpolation", percentage)
    src = _floats(source)
    result: List[float] = []
    for _, window in _windows(src, length):
        if window is None or any(math.isnan(v) for v in window):
            result.append(NAN)
            continue
        ordered = sorted(window)
        position = (percentage / 100.0) * (len(ordered) - 1)
        lower = math.floor(position)
        upper = math.ceil(position)
        if lower == upper:
            result.append(ordered[lower])
        else:
            fraction = position - lower
            result.append(ordered[lower] + fraction * (ordered[upper] - ordered[lower]))
    return result


def percentile_nearest_rank(source: Source, length: int, percentage: float) -> List[float]:
    """Nearest-rank percentile over the non-NaN members; >= 100 is the max."""
    length = _check_length("percentile_nearest_rank", length)
    src = _floats(source)
    result: List[float] = []
    for _, window in _windows(src, length):
        values = sorted(v for v in window if not math.isnan(v)) if window is not None else []
        if not values:
            result.append(NAN)
            continue
        if percentage >= 100:
            result.append(values[-1])
            continue
        rank = math.ceil((percentage / 100.0) * len(values))
        result.append(values[max(0, rank - 1)])
    return result


def percentrank(source: Source, length: int) -> List[float]:
    """Percent of the window's other values that are <= the current one."""
    length = _check_length("percentrank", length)
    src = _floats(source)
    result: List[float] = []
    for i, window in _windows(src, length):
        if window is None or length == 1 or any(math.isnan(v) for v in window):
            result.append(NAN)
            continue
        current = src[i]
        count = sum(1 for v in window if v <= current)
        result.append((count - 1) / (length - 1) * 100.0)
    return result


# ===========================================================================
# Correlation
# ===========================================================================

def correlation(source1: Source, source2: Source, length: int) -> List[float]:
    """Pearson correlation over the NaN-free pairs of the window."""
    length = _check_length("correlation", length)
    a, b = _floats(source1), _floats(source2)
    _same_length("correlation", source1=a, source2=b)
    result: List[float] = []
    for i in range(len(a)):
        if i < length - 1:
            result.append(NAN)
            continue
        pairs = [
            (a[i - j], b[i - j]) for j in range(length)
            if not math.isnan(a[i - j]) and not math.isnan(b[i - j])
        ]
        if not pairs:
            result.append(NAN)
            continue
        mean1 = sum(p[0] for p in pairs) / len(pairs)
        mean2 = sum(p[1] for p in pairs) / len(pairs)
        num = sq1 = sq2 = 0.0
        for v1, v2 in pairs:
            d1, d2 = v1 - mean1, v2 - mean2
            num += d1 * d2
            sq1 += d1 * d1
            sq2 += d2 * d2
        denom = math.sqrt(sq1 * sq2)
        result.append(NAN if denom == 0 else num / denom)
    return result


def _average_ranks(values: List[float]) -> List[float]:
    """1-based ranks by value, ties share the mean of their ranks."""
    order = sorted(range(len(values)), key=lambda k: values[k])
    ranks = [0.0] * len(values)
    pos = 0
    while pos < len(order):
        tie = 1
        while pos + tie < len(order) and values[order[pos + tie]] == values[order[pos]]:
            tie += 1
        avg_rank = (pos + 1 + pos + tie) / 2.0
        for k in range(tie):
            ranks[order[pos + k]] = avg_rank
        pos += tie
    return ranks


def rci(source: Source, length: int) -> List[float]:
    """Rank correlation index: Spearman rho of value rank vs time rank, x100."""
    length = _check_length("rci", length)
    src = _floats(source)
    n = length
    denom = n * (n * n - 1)
    result: List[float] = []
    for _, window in _windows(src, length):
        if window is None or denom == 0 or any(math.isnan(v) for v in window):
            result.append(NAN)
            continue
        ranks = _average_ranks(window)
        sum_sq = 0.0
        for j, rank in enumerate(ranks):
            diff = (j + 1) - rank
            sum_sq += diff * diff
        result.append((1.0 - (6.0 * sum_sq) / denom) * 100.0)
    return result


def cog(source: Source, length: int = 10) -> List[float]:
    """Center of gravity; the oldest bar in the window weighs 1."""
    length = _check_length("cog", length)
    src = _floats(source)
    result: List[float] = []
    for _, window in _windows(src, length):
        if window is None:
            result.append(NAN)
            continue
        num = den = 0.0
        for j, price in enumerate(window):
            num += (j + 1) * price
            den += price
        result.append(NAN if den == 0 else -(num / den) + (length + 1) / 2.0)
    return result


# ===========================================================================
# Registry
# ===========================================================================

def _length(params: Dict[str, Any], default: int = 20) -> int:
    return _as_int(_param(params, "length", default), default)


def _stdev_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[List[float]]:
    biased = _as_bool(params.get("biased"), True)
    return [stdev(inputs["close"], _length(params), biased)]


def _variance_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[List[float]]:
    biased = _as_bool(params.get("biased"), True)
    return [variance(inputs["close"], _length(params), biased)]


INDICATOR_REGISTRY["stdev"] = Indicator(
    kind="stdev",
    category="statistics",
    inputs=("close",),
    compute=_stdev_compute,
    output_names=lambda params: [f"STDEV_{_length(params)}"],
)
INDICATOR_REGISTRY["variance"] = Indicator(
    kind="variance",
    category="statistics",
    inputs=("close",),
    compute=_variance_compute,
    output_names=lambda params: [f"VAR_{_length(params)}"],
)
INDICATOR_REGISTRY["dev"] = Indicator(
    kind="dev",
    category="statistics",
    inputs=("close",),
    compute=lambda inputs, params: [dev(inputs["close"], _length(params))],
    output_names=lambda params: [f"DEV_{_length(params)}"],
)
INDICATOR_REGISTRY["median"] = Indicator(
    kind="median",
    category="statistics",
    inputs=("close",),
    compute=lambda inputs, params: [median(inputs["close"], _length(params))],
    output_names=lambda params: [f"MEDIAN_{_length(params)}"],
)
INDICATOR_REGISTRY["mode"] = Indicator(
    kind="mode",
    category="statistics",
    inputs=("close",),
    compute=lambda inputs, params: [mode(inputs["close"], _length(params))],
    output_names=lambda params: [f"MODE_{_length(params)}"],
)


def _percentile_params(params: Dict[str, Any]):
    percentage = _as_float(_param(params, "percentage", 50.0), 50.0)
    method = str(_param(params, "method", "linear")).lower()
    return _length(params), percentage, method


def _percentile_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[List[float]]:
    length, percentage, method = _percentile_params(params)
    if method == "nearest":
        return [percentile_nearest_rank(inputs["close"], length, percentage)]
    return [percentile_linear_interpolation(inputs["close"], length, percentage)]


def _percentile_output_names(params: Dict[str, Any]) -> List[str]:
    length, percentage, method = _percentile_params(params)
    tag = "PCTN" if method == "nearest" else "PCTL"
    return [f"{tag}_{length}_{_fmt_num(percentage)}"]


INDICATOR_REGISTRY["percentile"] = Indicator(
    kind="percentile",
    category="statistics",
    inputs=("close",),
    compute=_percentile_compute,
    output_names=_percentile_output_names,
)
INDICATOR_REGISTRY["percentrank"] = Indicator(
    kind="percentrank",
    category="statistics",
    inputs=("close",),
    compute=lambda inputs, params: [percentrank(inputs["close"], _length(params))],
    output_names=lambda params: [f"PCTRANK_{_length(params)}"],
)
INDICATOR_REGISTRY["correlation"] = Indicator(
    kind="correlation",
    category="statistics",
    inputs=("close", "volume"),
    compute=lambda inputs, params: [correlation(inputs["close"], inputs["volume"], _length(params))],
    output_names=lambda params: [f"CORR_{_length(params)}"],
)
INDICATOR_REGISTRY["rci"] = Indicator(
    kind="rci",
    category="statistics",
    inputs=("close",),
    compute=lambda inputs, params: [rci(inputs["close"], _length(params, 10))],
    output_names=lambda params: [f"RCI_{_length(params, 10)}"],
)
INDICATOR_REGISTRY["cog"] = Indicator(
    kind="cog",
    category="statistics",
    inputs=("close",),
    compute=lambda inputs, params: [cog(inputs["close"], _length(params, 10))],
    output_names=lambda params: [f"COG_{_length(params, 10)}"],
)
