# -*- coding: utf-8 -*-
"""pandas-ta-series -- overlap (moving average) algorithms.

Registered kinds
----------------
sma, ema, rma, wma, hma, alma, swma, vwma, linreg

Each function takes plain numeric sequences and returns a list of floats
with the same length; NaN marks bars without enough history.
"""
from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

from ._base import (
    NAN,
    Source,
    _param,
    _as_int,
    _as_float,
    _floats,
    _fmt_num,
    _check_length,
    _same_length,
    _require,
    ema_make,
    rma_make,
    ema_update_raw,
    rma_update_raw,
    Indicator,
    INDICATOR_REGISTRY,
)
from ._kernels import rolling_sum
from pandas_ta_series.errors import InvalidConfigError


# ===========================================================================
# SMA
# ===========================================================================

def sma(source: Source, length: int) -> List[float]:
    """Simple moving average; NaN while ``i < length - 1``."""
    length = _check_length("sma", length)
    src = _floats(source)
    return [s / length for s in rolling_sum(src, length)]


# ===========================================================================
# EMA / RMA  (recursive)
# ===========================================================================
# EMA: out[0] = x[0], then (x - ema) * 2/(L+1) + ema
# RMA: out[0] = mean(x[0:min(L, n)]), then x/L + (1 - 1/L) * rma
# NaN inputs propagate through the recursion.

def ema(source: Source, length: int) -> List[float]:
    length = _check_length("ema", length)
    state = ema_make(length)
    result: List[float] = []
    for x in _floats(source):
        value, state = ema_update_raw(state, x)
        result.append(value)
    return result


def rma(source: Source, length: int) -> List[float]:
    length = _check_length("rma", length)
    src = _floats(source)
    state = rma_make(length, src)
    result: List[float] = []
    for x in src:
        value, state = rma_update_raw(state, x)
        result.append(value)
    return result


# ===========================================================================
# WMA / HMA
# ===========================================================================

def wma(source: Source, length: int) -> List[float]:
    """Linearly weighted average; the newest bar weighs ``length``."""
    length = _check_length("wma", length)
    src = _floats(source)
    weight_sum = length * (length + 1) / 2.0
    result: List[float] = []
    for i in range(len(src)):
        if i < length - 1:
            result.append(NAN)
            continue
        total = 0.0
        for j in range(length):
            total += src[i - j] * (length - j)
        result.append(total / weight_sum)
    return result


def hma(source: Source, length: int) -> List[float]:
    """Hull moving average: ``wma(2*wma(L/2) - wma(L), sqrt(L))``."""
    length = _check_length("hma", length, minimum=2)
    src = _floats(source)
    half = wma(src, length // 2)
    full = wma(src, length)
    diff = [2.0 * h - f for h, f in zip(half, full)]
    return wma(diff, int(math.floor(math.sqrt(length))))


# ===========================================================================
# ALMA
# ===========================================================================

def alma(source: Source, length: int = 9, offset: float = 0.85, sigma: float = 6.0) -> List[float]:
    """Arnaud Legoux moving average with a gaussian weight curve."""
    length = _check_length("alma", length)
    if sigma == 0:
        raise InvalidConfigError("alma(): sigma must be non-zero")
    src = _floats(source)

    m = math.floor(offset * (length - 1))
    s = length / sigma
    weights = [math.exp(-((k - m) ** 2) / (2.0 * s * s)) for k in range(length)]
    norm = sum(weights)
    weights = [w / norm for w in weights]

    result: List[float] = []
    for i in range(len(src)):
        if i < length - 1:
            result.append(NAN)
            continue
        value = 0.0
        base = i - length + 1
        for j in range(length):
            value += src[base + j] * weights[j]
        result.append(value)
    return result


# ===========================================================================
# SWMA  (fixed 4-bar symmetric weights 1/6, 2/6, 2/6, 1/6)
# ===========================================================================

def swma(source: Source) -> List[float]:
    src = _floats(source)
    result: List[float] = []
    for i in range(len(src)):
        if i < 3:
            result.append(NAN)
            continue
        window = src[i - 3:i + 1]
        if any(math.isnan(v) for v in window):
            result.append(NAN)
            continue
        result.append(
            window[0] * (1 / 6) + window[1] * (2 / 6) + window[2] * (2 / 6) + window[3] * (1 / 6)
        )
    return result


# ===========================================================================
# VWMA
# ===========================================================================

def vwma(source: Source, length: int, volume: Optional[Source] = None) -> List[float]:
    """Volume weighted moving average: ``sma(src*vol) / sma(vol)``."""
    _require("vwma", hint="Pass the bar volume series.", volume=volume)
    length = _check_length("vwma", length)
    src, vol = _floats(source), _floats(volume)
    _same_length("vwma", source=src, volume=vol)

    numerator = sma([s * v for s, v in zip(src, vol)], length)
    denominator = sma(vol, length)
    return [
        NAN if (d == 0 or math.isnan(d)) else n / d
        for n, d in zip(numerator, denominator)
    ]


# ===========================================================================
# LINREG  (least squares, evaluated at x = length - 1 - offset)
# ===========================================================================

def linreg(source: Source, length: int, offset: int = 0) -> List[float]:
    length = _check_length("linreg", length)
    src = _floats(source)
    result: List[float] = []
    for i in range(len(src)):
        if i < length - 1:
            result.append(NAN)
            continue
        window = src[i - length + 1:i + 1]
        if any(math.isnan(v) for v in window):
            result.append(NAN)
            continue

        sum_x = sum_y = sum_xy = sum_x2 = 0.0
        for x, y in enumerate(window):
            sum_x += x
            sum_y += y
            sum_xy += x * y
            sum_x2 += x * x

        denom = length * sum_x2 - sum_x * sum_x
        if denom == 0:
            # single-bar window, no slope
            result.append(NAN)
            continue
        slope = (length * sum_xy - sum_x * sum_y) / denom
        intercept = (sum_y - slope * sum_x) / length
        result.append(intercept + slope * (length - 1 - offset))
    return result


# ===========================================================================
# Registry
# ===========================================================================

def _single(fn_name: str, fn, default_length: int):
    def _compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[List[float]]:
        length = _as_int(_param(params, "length", default_length), default_length)
        return [fn(inputs["close"], length)]

    def _names(params: Dict[str, Any]) -> List[str]:
        length = _as_int(_param(params, "length", default_length), default_length)
        return [f"{fn_name.upper()}_{length}"]

    INDICATOR_REGISTRY[fn_name] = Indicator(
        kind=fn_name,
        category="overlap",
        inputs=("close",),
        compute=_compute,
        output_names=_names,
    )


_single("sma", sma, 10)
_single("ema", ema, 10)
_single("rma", rma, 10)
_single("wma", wma, 10)
_single("hma", hma, 10)


def _alma_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[List[float]]:
    length = _as_int(_param(params, "length", 9), 9)
    offset = _as_float(_param(params, "offset", 0.85), 0.85)
    sigma = _as_float(_param(params, "sigma", 6.0), 6.0)
    return [alma(inputs["close"], length, offset, sigma)]


def _alma_output_names(params: Dict[str, Any]) -> List[str]:
    length = _as_int(_param(params, "length", 9), 9)
    offset = _as_float(_param(params, "offset", 0.85), 0.85)
    sigma = _as_float(_param(params, "sigma", 6.0), 6.0)
    return [f"ALMA_{length}_{_fmt_num(sigma)}_{_fmt_num(offset)}"]


INDICATOR_REGISTRY["alma"] = Indicator(
    kind="alma",
    category="overlap",
    inputs=("close",),
    compute=_alma_compute,
    output_names=_alma_output_names,
)

INDICATOR_REGISTRY["swma"] = Indicator(
    kind="swma",
    category="overlap",
    inputs=("close",),
    compute=lambda inputs, params: [swma(inputs["close"])],
    output_names=lambda params: ["SWMA"],
)


def _vwma_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[List[float]]:
    length = _as_int(_param(params, "length", 10), 10)
    return [vwma(inputs["close"], length, inputs["volume"])]


INDICATOR_REGISTRY["vwma"] = Indicator(
    kind="vwma",
    category="overlap",
    inputs=("close", "volume"),
    compute=_vwma_compute,
    output_names=lambda params: [f"VWMA_{_as_int(_param(params, 'length', 10), 10)}"],
)


def _linreg_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[List[float]]:
    length = _as_int(_param(params, "length", 14), 14)
    offset = _as_int(_param(params, "offset", 0), 0)
    return [linreg(inputs["close"], length, offset)]


def _linreg_output_names(params: Dict[str, Any]) -> List[str]:
    length = _as_int(_param(params, "length", 14), 14)
    offset = _as_int(_param(params, "offset", 0), 0)
    return [f"LINREG_{length}" if offset == 0 else f"LINREG_{length}_{offset}"]


INDICATOR_REGISTRY["linreg"] = Indicator(
    kind="linreg",
    category="overlap",
    inputs=("close",),
    compute=_linreg_compute,
    output_names=_linreg_output_names,
)
