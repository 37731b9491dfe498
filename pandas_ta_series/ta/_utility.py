# -*- coding: utf-8 -*-
"""pandas-ta-series -- window extremes, conditions and running sums.

Registered kinds
----------------
highest, lowest, highestbars, lowestbars, change, cum, vwap

The condition helpers (``crossover``, ``rising``, ...) return lists of
bools.  ``max`` and ``min`` are element-wise over two sources and are
defined last so the module itself keeps the builtins.
"""
from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

from ._base import (
    NAN,
    Source,
    _param,
    _as_int,
    _floats,
    _bools,
    _check_length,
    _same_length,
    _require,
    Indicator,
    INDICATOR_REGISTRY,
)
from ._kernels import rolling_extreme
from pandas_ta_series.errors import InvalidConfigError


# ===========================================================================
# Window extremes
# ===========================================================================

def highest(source: Source, length: int) -> List[float]:
    """Highest non-NaN value of the window; NaN when the window is all NaN."""
    length = _check_length("highest", length)
    return rolling_extreme(_floats(source), length, True)


def lowest(source: Source, length: int) -> List[float]:
    """Lowest non-NaN value of the window; NaN when the window is all NaN."""
    length = _check_length("lowest", length)
    return rolling_extreme(_floats(source), length, False)


def _extreme_offset(fn: str, source: Source, length: int, find_max: bool) -> List[float]:
    length = _check_length(fn, length)
    src = _floats(source)
    result: List[float] = []
    for i in range(len(src)):
        if i < length - 1:
            result.append(NAN)
            continue
        best = src[i - length + 1]
        offset = length - 1
        for j in range(i - length + 2, i + 1):
            if (find_max and src[j] > best) or (not find_max and src[j] < best):
                best = src[j]
                offset = i - j
        result.append(float(offset))
    return result


def highestbars(source: Source, length: int) -> List[float]:
    """Bars back (>= 0) to the highest value of the window."""
    return _extreme_offset("highestbars", source, length, True)


def lowestbars(source: Source, length: int) -> List[float]:
    """Bars back (>= 0) to the lowest value of the window."""
    return _extreme_offset("lowestbars", source, length, False)


# ===========================================================================
# Differences and running sums
# ===========================================================================

def change(source: Source, length: int = 1) -> List[float]:
    length = _check_length("change", length)
    src = _floats(source)
    return [NAN if i < length else src[i] - src[i - length] for i in range(len(src))]


def cum(source: Source) -> List[float]:
    total = 0.0
    result: List[float] = []
    for x in _floats(source):
        total += x
        result.append(total)
    return result


def vwap(source: Source, volume: Optional[Source] = None) -> List[float]:
    """Cumulative volume weighted price; NaN bars are skipped (and read NaN)."""
    _require("vwap", hint="Pass the bar volume series.", volume=volume)
    src, vol = _floats(source), _floats(volume)
    _same_length("vwap", source=src, volume=vol)
    cum_pv = cum_vol = 0.0
    result: List[float] = []
    for p, v in zip(src, vol):
        if math.isnan(p) or math.isnan(v):
            result.append(NAN)
            continue
        cum_pv += p * v
        cum_vol += v
        result.append(NAN if cum_vol == 0 else cum_pv / cum_vol)
    return result


# ===========================================================================
# Conditions
# ===========================================================================

def crossover(source1: Source, source2: Source) -> List[bool]:
    a, b = _floats(source1), _floats(source2)
    _same_length("crossover", source1=a, source2=b)
    return [i > 0 and a[i] > b[i] and a[i - 1] <= b[i - 1] for i in range(len(a))]


def crossunder(source1: Source, source2: Source) -> List[bool]:
    a, b = _floats(source1), _floats(source2)
    _same_length("crossunder", source1=a, source2=b)
    return [i > 0 and a[i] < b[i] and a[i - 1] >= b[i - 1] for i in range(len(a))]


def cross(source1: Source, source2: Source) -> List[bool]:
    return [up or down for up, down in zip(crossover(source1, source2),
                                           crossunder(source1, source2))]


def rising(source: Source, length: int) -> List[bool]:
    """True when each of the last *length* steps went strictly up."""
    length = _check_length("rising", length)
    src = _floats(source)
    return [
        i >= length and all(src[i - j + 1] > src[i - j] for j in range(1, length + 1))
        for i in range(len(src))
    ]


def falling(source: Source, length: int) -> List[bool]:
    """True when each of the last *length* steps went strictly down."""
    length = _check_length("falling", length)
    src = _floats(source)
    return [
        i >= length and all(src[i - j + 1] < src[i - j] for j in range(1, length + 1))
        for i in range(len(src))
    ]


def barssince(condition: Source) -> List[float]:
    """Bars since *condition* was last true; NaN before the first true."""
    since = NAN
    result: List[float] = []
    for flag in _bools(condition):
        if flag:
            since = 0.0
        elif not math.isnan(since):
            since += 1.0
        result.append(since)
    return result


def valuewhen(condition: Source, source: Source, occurrence: int = 0) -> List[float]:
    """*source* at the ``occurrence``-th most recent bar where *condition* held."""
    if occurrence < 0:
        raise InvalidConfigError(f"valuewhen(): occurrence must be >= 0, got {occurrence}")
    flags, src = _bools(condition), _floats(source)
    _same_length("valuewhen", condition=flags, source=src)
    hits: List[int] = []
    result: List[float] = []
    for i, flag in enumerate(flags):
        if flag:
            hits.append(i)
        result.append(src[hits[-1 - occurrence]] if len(hits) > occurrence else NAN)
    return result


# ===========================================================================
# Registry
# ===========================================================================

def _length(params: Dict[str, Any], default: int = 14) -> int:
    return _as_int(_param(params, "length", default), default)


INDICATOR_REGISTRY["highest"] = Indicator(
    kind="highest",
    category="utility",
    inputs=("high",),
    compute=lambda inputs, params: [highest(inputs["high"], _length(params))],
    output_names=lambda params: [f"HIGHEST_{_length(params)}"],
)
INDICATOR_REGISTRY["lowest"] = Indicator(
    kind="lowest",
    category="utility",
    inputs=("low",),
    compute=lambda inputs, params: [lowest(inputs["low"], _length(params))],
    output_names=lambda params: [f"LOWEST_{_length(params)}"],
)
INDICATOR_REGISTRY["highestbars"] = Indicator(
    kind="highestbars",
    category="utility",
    inputs=("high",),
    compute=lambda inputs, params: [highestbars(inputs["high"], _length(params))],
    output_names=lambda params: [f"HIGHESTBARS_{_length(params)}"],
)
INDICATOR_REGISTRY["lowestbars"] = Indicator(
    kind="lowestbars",
    category="utility",
    inputs=("low",),
    compute=lambda inputs, params: [lowestbars(inputs["low"], _length(params))],
    output_names=lambda params: [f"LOWESTBARS_{_length(params)}"],
)
INDICATOR_REGISTRY["change"] = Indicator(
    kind="change",
    category="utility",
    inputs=("close",),
    compute=lambda inputs, params: [change(inputs["close"], _length(params, 1))],
    output_names=lambda params: [f"CHANGE_{_length(params, 1)}"],
)
INDICATOR_REGISTRY["cum"] = Indicator(
    kind="cum",
    category="utility",
    inputs=("close",),
    compute=lambda inputs, params: [cum(inputs["close"])],
    output_names=lambda params: ["CUM"],
)
INDICATOR_REGISTRY["vwap"] = Indicator(
    kind="vwap",
    category="volume",
    inputs=("hlc3", "volume"),
    compute=lambda inputs, params: [vwap(inputs["hlc3"], inputs["volume"])],
    output_names=lambda params: ["VWAP"],
)


# ===========================================================================
# Element-wise max / min  (shadow the builtins from here on)
# ===========================================================================

def max(source1: Source, source2: Source) -> List[float]:  # noqa: A001
    a, b = _floats(source1), _floats(source2)
    _same_length("max", source1=a, source2=b)
    return [NAN if (x != x or y != y) else (x if x >= y else y) for x, y in zip(a, b)]


def min(source1: Source, source2: Source) -> List[float]:  # noqa: A001
    a, b = _floats(source1), _floats(source2)
    _same_length("min", source1=a, source2=b)
    return [NAN if (x != x or y != y) else (x if x <= y else y) for x, y in zip(a, b)]
