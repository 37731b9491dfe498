# -*- coding: utf-8 -*-
"""pandas-ta-series -- volatility and band indicators.

Registered kinds
----------------
tr, atr, bb, bbw, kc, kcw, range
"""
from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Tuple

from ._base import (
    NAN,
    Source,
    _param,
    _as_int,
    _as_float,
    _as_bool,
    _floats,
    _fmt_num,
    _nmax,
    _check_length,
    _same_length,
    _require,
    Indicator,
    INDICATOR_REGISTRY,
)
from ._overlap import sma, ema, rma
from ._statistics import stdev

_HLC_HINT = "Pass the bar high, low and close series."


# ===========================================================================
# TR / ATR
# ===========================================================================
# bar 0 has no previous close: TR = high - low.
# NaN previous close -> high - low with handle_na, else NaN.

def tr(
    handle_na: bool = False,
    high: Optional[Source] = None,
    low: Optional[Source] = None,
    close: Optional[Source] = None,
) -> List[float]:
    _require("tr", hint=_HLC_HINT, high=high, low=low, close=close)
    hi, lo, cl = _floats(high), _floats(low), _floats(close)
    _same_length("tr", high=hi, low=lo, close=cl)

    result: List[float] = []
    for i in range(len(hi)):
        if i == 0:
            result.append(hi[i] - lo[i])
            continue
        prev_close = cl[i - 1]
        if math.isnan(prev_close):
            result.append(hi[i] - lo[i] if handle_na else NAN)
            continue
        result.append(_nmax(_nmax(hi[i] - lo[i], abs(hi[i] - prev_close)),
                            abs(lo[i] - prev_close)))
    return result


def atr(
    length: int,
    high: Optional[Source] = None,
    low: Optional[Source] = None,
    close: Optional[Source] = None,
) -> List[float]:
    """Average true range: RMA of TR."""
    _require("atr", hint=_HLC_HINT, high=high, low=low, close=close)
    length = _check_length("atr", length)
    return rma(tr(False, high, low, close), length)


# ===========================================================================
# Bollinger Bands
# ===========================================================================

def bb(source: Source, length: int, mult: float = 2.0) -> Tuple[List[float], List[float], List[float]]:
    """Returns ``(basis, upper, lower)``; basis = SMA, width = mult * stdev."""
    src = _floats(source)
    basis = sma(src, length)
    dev = stdev(src, length)
    upper = [b + mult * d for b, d in zip(basis, dev)]
    lower = [b - mult * d for b, d in zip(basis, dev)]
    return basis, upper, lower


def bbw(source: Source, length: int, mult: float = 2.0) -> List[float]:
    """Bollinger band width in percent of the basis."""
    basis, upper, lower = bb(source, length, mult)
    return [NAN if b == 0 else (u - l_) / b * 100.0 for b, u, l_ in zip(basis, upper, lower)]


# ===========================================================================
# Keltner Channels
# ===========================================================================

def kc(
    source: Source,
    length: int,
    mult: float = 2.0,
    use_true_range: bool = True,
    high: Optional[Source] = None,
    low: Optional[Source] = None,
    close: Optional[Source] = None,
) -> Tuple[List[float], List[float], List[float]]:
    """Returns ``(basis, upper, lower)`` around an EMA of *source*.

    The band width is an EMA of the true range, or of ``high - low`` when
    *use_true_range* is off.
    """
    if use_true_range:
        _require("kc", hint=_HLC_HINT, high=high, low=low, close=close)
        band_range = tr(False, high, low, close)
    else:
        _require("kc", hint="Pass the bar high and low series.", high=high, low=low)
        band_range = hl_range(high, low)

    src = _floats(source)
    _same_length("kc", source=src, range=band_range)
    basis = ema(src, length)
    range_ema = ema(band_range, length)
    upper = [b + r * mult for b, r in zip(basis, range_ema)]
    lower = [b - r * mult for b, r in zip(basis, range_ema)]
    return basis, upper, lower


def kcw(
    source: Source,
    length: int = 20,
    mult: float = 2.0,
    use_true_range: bool = True,
    high: Optional[Source] = None,
    low: Optional[Source] = None,
    close: Optional[Source] = None,
) -> List[float]:
    """Keltner channel width in percent of the basis."""
    basis, upper, lower = kc(source, length, mult, use_true_range, high, low, close)
    return [
        NAN if (math.isnan(b) or b == 0) else (u - l_) / b * 100.0
        for b, u, l_ in zip(basis, upper, lower)
    ]


# ===========================================================================
# Range  (exported as ``range``)
# ===========================================================================

def hl_range(high: Source, low: Source) -> List[float]:
    hi, lo = _floats(high), _floats(low)
    _same_length("range", high=hi, low=lo)
    return [h - l_ for h, l_ in zip(hi, lo)]


# ===========================================================================
# Registry
# ===========================================================================

def _length(params: Dict[str, Any], default: int = 14) -> int:
    return _as_int(_param(params, "length", default), default)


def _mult(params: Dict[str, Any]) -> float:
    return _as_float(_param(params, "mult", 2.0), 2.0)


def _tr_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[List[float]]:
    handle_na = _as_bool(params.get("handle_na"), False)
    return [tr(handle_na, inputs["high"], inputs["low"], inputs["close"])]


INDICATOR_REGISTRY["tr"] = Indicator(
    kind="tr",
    category="volatility",
    inputs=("high", "low", "close"),
    compute=_tr_compute,
    output_names=lambda params: ["TRUERANGE"],
)
INDICATOR_REGISTRY["atr"] = Indicator(
    kind="atr",
    category="volatility",
    inputs=("high", "low", "close"),
    compute=lambda inputs, params: [
        atr(_length(params), inputs["high"], inputs["low"], inputs["close"])
    ],
    output_names=lambda params: [f"ATRr_{_length(params)}"],
)


def _bb_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[List[float]]:
    basis, upper, lower = bb(inputs["close"], _length(params, 20), _mult(params))
    return [lower, basis, upper]


def _bb_output_names(params: Dict[str, Any]) -> List[str]:
    props = f"_{_length(params, 20)}_{_fmt_num(_mult(params))}"
    return [f"BBL{props}", f"BBM{props}", f"BBU{props}"]


INDICATOR_REGISTRY["bb"] = Indicator(
    kind="bb",
    category="volatility",
    inputs=("close",),
    compute=_bb_compute,
    output_names=_bb_output_names,
)
INDICATOR_REGISTRY["bbw"] = Indicator(
    kind="bbw",
    category="volatility",
    inputs=("close",),
    compute=lambda inputs, params: [bbw(inputs["close"], _length(params, 20), _mult(params))],
    output_names=lambda params: [f"BBB_{_length(params, 20)}_{_fmt_num(_mult(params))}"],
)


def _kc_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[List[float]]:
    use_tr = _as_bool(params.get("use_true_range"), True)
    basis, upper, lower = kc(inputs["close"], _length(params, 20), _mult(params), use_tr,
                             inputs["high"], inputs["low"], inputs["close"])
    return [lower, basis, upper]


def _kc_output_names(params: Dict[str, Any]) -> List[str]:
    props = f"_{_length(params, 20)}_{_fmt_num(_mult(params))}"
    return [f"KCL{props}", f"KCB{props}", f"KCU{props}"]


INDICATOR_REGISTRY["kc"] = Indicator(
    kind="kc",
    category="volatility",
    inputs=("close", "high", "low"),
    compute=_kc_compute,
    output_names=_kc_output_names,
)


def _kcw_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[List[float]]:
    use_tr = _as_bool(params.get("use_true_range"), True)
    return [kcw(inputs["close"], _length(params, 20), _mult(params), use_tr,
                inputs["high"], inputs["low"], inputs["close"])]


INDICATOR_REGISTRY["kcw"] = Indicator(
    kind="kcw",
    category="volatility",
    inputs=("close", "high", "low"),
    compute=_kcw_compute,
    output_names=lambda params: [f"KCW_{_length(params, 20)}_{_fmt_num(_mult(params))}"],
)
INDICATOR_REGISTRY["range"] = Indicator(
    kind="range",
    category="volatility",
    inputs=("high", "low"),
    compute=lambda inputs, params: [hl_range(inputs["high"], inputs["low"])],
    output_names=lambda params: ["HL_RANGE"],
)
