# -*- coding: utf-8 -*-
"""pandas-ta-series -- momentum oscillators.

Registered kinds
----------------
rsi, macd, mom, roc, cmo, tsi, cci, stoch, wpr, mfi
"""
from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Tuple

from ._base import (
    NAN,
    Source,
    _param,
    _as_int,
    _floats,
    _check_length,
    _same_length,
    _require,
    Indicator,
    INDICATOR_REGISTRY,
)
from ._overlap import sma, ema, rma
from ._statistics import dev
from ._utility import highest, lowest


# ===========================================================================
# RSI
# ===========================================================================
# gains / losses of the n-1 changes are smoothed by RMA *without* padding,
# so RMA index k lands on output index k + 1 and output[0] is NaN.
# avg_loss == 0 -> 100

def rsi(source: Source, length: int) -> List[float]:
    length = _check_length("rsi", length)
    src = _floats(source)
    if not src:
        return []
    changes = [src[i] - src[i - 1] for i in range(1, len(src))]
    gains = [c if c > 0 else 0.0 for c in changes]
    losses = [-c if c < 0 else 0.0 for c in changes]
    avg_gain = rma(gains, length)
    avg_loss = rma(losses, length)

    result: List[float] = [NAN]
    for g, lo in zip(avg_gain, avg_loss):
        if lo == 0:
            result.append(100.0)
        else:
            result.append(100.0 - 100.0 / (1.0 + g / lo))
    return result


# ===========================================================================
# MACD
# ===========================================================================

def macd(
    source: Source, fast: int = 12, slow: int = 26, signal: int = 9
) -> Tuple[List[float], List[float], List[float]]:
    """Returns ``(macd, signal, histogram)``."""
    src = _floats(source)
    fast_ema = ema(src, fast)
    slow_ema = ema(src, slow)
    line = [f - s for f, s in zip(fast_ema, slow_ema)]
    sig = ema(line, signal)
    hist = [m - s for m, s in zip(line, sig)]
    return line, sig, hist


# ===========================================================================
# MOM / ROC / CMO
# ===========================================================================

def mom(source: Source, length: int) -> List[float]:
    length = _check_length("mom", length)
    src = _floats(source)
    return [
        NAN if i < length else src[i] - src[i - length]
        for i in range(len(src))
    ]


def roc(source: Source, length: int) -> List[float]:
    """Rate of change in percent; NaN when the reference value is 0."""
    length = _check_length("roc", length)
    src = _floats(source)
    result: List[float] = []
    for i in range(len(src)):
        if i < length:
            result.append(NAN)
            continue
        old = src[i - length]
        if old == 0 or math.isnan(old) or math.isnan(src[i]):
            result.append(NAN)
        else:
            result.append(100.0 * (src[i] - old) / old)
    return result


def cmo(source: Source, length: int) -> List[float]:
    """Chande momentum oscillator; 0 when the window did not move."""
    length = _check_length("cmo", length)
    src = _floats(source)
    result: List[float] = []
    for i in range(len(src)):
        if i < length:
            result.append(NAN)
            continue
        gains = losses = 0.0
        for j in range(length):
            change = src[i - j] - src[i - j - 1]
            if change > 0:
                gains += change
            else:
                losses += abs(change)
        total = gains + losses
        result.append(0.0 if total == 0 else (gains - losses) / total * 100.0)
    return result


# ===========================================================================
# TSI  (double smoothed momentum)
# ===========================================================================

def tsi(source: Source, short_length: int = 13, long_length: int = 25) -> List[float]:
    src = _floats(source)
    momentum = [0.0 if i == 0 else src[i] - src[i - 1] for i in range(len(src))]
    smooth = ema(ema(momentum, long_length), short_length)
    smooth_abs = ema(ema([abs(m) for m in momentum], long_length), short_length)
    return [0.0 if a == 0 else m / a * 100.0 for m, a in zip(smooth, smooth_abs)]


# ===========================================================================
# CCI
# ===========================================================================

def cci(source: Source, length: int) -> List[float]:
    length = _check_length("cci", length)
    src = _floats(source)
    avg = sma(src, length)
    mad = dev(src, length)
    result: List[float] = []
    for x, m, d in zip(src, avg, mad):
        if math.isnan(m) or math.isnan(d) or d == 0:
            result.append(NAN)
        else:
            result.append((x - m) / (0.015 * d))
    return result


# ===========================================================================
# STOCH / WPR
# ===========================================================================

def stoch(source: Source, high: Source, low: Source, length: int) -> List[float]:
    """Raw stochastic %K; NaN on a flat window."""
    length = _check_length("stoch", length)
    src, hi, lo = _floats(source), _floats(high), _floats(low)
    _same_length("stoch", source=src, high=hi, low=lo)
    hh = highest(hi, length)
    ll = lowest(lo, length)
    result: List[float] = []
    for x, h, l_ in zip(src, hh, ll):
        if math.isnan(h) or math.isnan(l_) or h - l_ == 0:
            result.append(NAN)
        else:
            result.append(100.0 * (x - l_) / (h - l_))
    return result


def wpr(high: Source, low: Source, close: Source, length: int = 14) -> List[float]:
    """Williams %R in ``[-100, 0]``; NaN on a flat window."""
    length = _check_length("wpr", length)
    hi, lo, cl = _floats(high), _floats(low), _floats(close)
    _same_length("wpr", high=hi, low=lo, close=cl)
    result: List[float] = []
    for i in range(len(cl)):
        if i < length - 1:
            result.append(NAN)
            continue
        hh = hi[i - length + 1]
        ll = lo[i - length + 1]
        for j in range(i - length + 2, i + 1):
            if hi[j] > hh:
                hh = hi[j]
            if lo[j] < ll:
                ll = lo[j]
        rng = hh - ll
        result.append(NAN if rng == 0 or math.isnan(rng) else (hh - cl[i]) / rng * -100.0)
    return result


# ===========================================================================
# MFI
# ===========================================================================
# Up bars add volume * source to the positive flow, down bars to the
# negative flow; NaN while i < length, 100 when there is no negative flow.

def mfi(source: Source, length: int, volume: Optional[Source] = None) -> List[float]:
    _require("mfi", hint="Pass the bar volume series.", volume=volume)
    length = _check_length("mfi", length)
    src, vol = _floats(source), _floats(volume)
    _same_length("mfi", source=src, volume=vol)

    pos_flow: List[float] = []
    neg_flow: List[float] = []
    for i in range(len(src)):
        change = src[i] - src[i - 1] if i > 0 else NAN
        flow = vol[i] * src[i]
        pos_flow.append(flow if change > 0 else 0.0)
        neg_flow.append(flow if change < 0 else 0.0)

    result: List[float] = []
    for i in range(len(src)):
        if i < length:
            result.append(NAN)
            continue
        pos = sum(pos_flow[i - length + 1:i + 1])
        neg = sum(neg_flow[i - length + 1:i + 1])
        if neg == 0:
            result.append(100.0)
        else:
            result.append(100.0 - 100.0 / (1.0 + pos / neg))
    return result


# ===========================================================================
# Registry
# ===========================================================================

def _length(params: Dict[str, Any], default: int = 14) -> int:
    return _as_int(_param(params, "length", default), default)


INDICATOR_REGISTRY["rsi"] = Indicator(
    kind="rsi",
    category="momentum",
    inputs=("close",),
    compute=lambda inputs, params: [rsi(inputs["close"], _length(params))],
    output_names=lambda params: [f"RSI_{_length(params)}"],
)


def _macd_params(params: Dict[str, Any]) -> Tuple[int, int, int]:
    fast = _as_int(_param(params, "fast", 12), 12)
    slow = _as_int(_param(params, "slow", 26), 26)
    signal = _as_int(_param(params, "signal", 9), 9)
    if slow < fast:
        fast, slow = slow, fast
    return fast, slow, signal


def _macd_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[List[float]]:
    fast, slow, signal = _macd_params(params)
    line, sig, hist = macd(inputs["close"], fast, slow, signal)
    return [line, hist, sig]


def _macd_output_names(params: Dict[str, Any]) -> List[str]:
    fast, slow, signal = _macd_params(params)
    props = f"_{fast}_{slow}_{signal}"
    return [f"MACD{props}", f"MACDh{props}", f"MACDs{props}"]


INDICATOR_REGISTRY["macd"] = Indicator(
    kind="macd",
    category="momentum",
    inputs=("close",),
    compute=_macd_compute,
    output_names=_macd_output_names,
)
INDICATOR_REGISTRY["mom"] = Indicator(
    kind="mom",
    category="momentum",
    inputs=("close",),
    compute=lambda inputs, params: [mom(inputs["close"], _length(params, 10))],
    output_names=lambda params: [f"MOM_{_length(params, 10)}"],
)
INDICATOR_REGISTRY["roc"] = Indicator(
    kind="roc",
    category="momentum",
    inputs=("close",),
    compute=lambda inputs, params: [roc(inputs["close"], _length(params, 10))],
    output_names=lambda params: [f"ROC_{_length(params, 10)}"],
)
INDICATOR_REGISTRY["cmo"] = Indicator(
    kind="cmo",
    category="momentum",
    inputs=("close",),
    compute=lambda inputs, params: [cmo(inputs["close"], _length(params))],
    output_names=lambda params: [f"CMO_{_length(params)}"],
)


def _tsi_params(params: Dict[str, Any]) -> Tuple[int, int]:
    short = _as_int(_param(params, "short", 13), 13)
    long_ = _as_int(_param(params, "long", 25), 25)
    return short, long_


INDICATOR_REGISTRY["tsi"] = Indicator(
    kind="tsi",
    category="momentum",
    inputs=("close",),
    compute=lambda inputs, params: [tsi(inputs["close"], *_tsi_params(params))],
    output_names=lambda params: ["TSI_{}_{}".format(*_tsi_params(params))],
)
INDICATOR_REGISTRY["cci"] = Indicator(
    kind="cci",
    category="momentum",
    inputs=("hlc3",),
    compute=lambda inputs, params: [cci(inputs["hlc3"], _length(params, 20))],
    output_names=lambda params: [f"CCI_{_length(params, 20)}"],
)
INDICATOR_REGISTRY["stoch"] = Indicator(
    kind="stoch",
    category="momentum",
    inputs=("close", "high", "low"),
    compute=lambda inputs, params: [
        stoch(inputs["close"], inputs["high"], inputs["low"], _length(params))
    ],
    output_names=lambda params: [f"STOCHk_{_length(params)}"],
)
INDICATOR_REGISTRY["wpr"] = Indicator(
    kind="wpr",
    category="momentum",
    inputs=("high", "low", "close"),
    compute=lambda inputs, params: [
        wpr(inputs["high"], inputs["low"], inputs["close"], _length(params))
    ],
    output_names=lambda params: [f"WILLR_{_length(params)}"],
)
INDICATOR_REGISTRY["mfi"] = Indicator(
    kind="mfi",
    category="volume",
    inputs=("hlc3", "volume"),
    compute=lambda inputs, params: [mfi(inputs["hlc3"], _length(params), inputs["volume"])],
    output_names=lambda params: [f"MFI_{_length(params)}"],
)
