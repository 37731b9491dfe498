# -*- coding: utf-8 -*-
"""pandas-ta-series -- trend indicators.

Registered kinds
----------------
supertrend, psar, dmi, adx, zigzag

Each algorithm threads a small state dataclass across the bars of one
call; nothing survives between calls.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
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
    _nmin,
    _check_length,
    _same_length,
    _require,
    Indicator,
    INDICATOR_REGISTRY,
)
from ._overlap import rma
from ._volatility import atr, tr
from pandas_ta_series.errors import MissingInputError

_HLC_HINT = "Pass the bar high, low and close series."


# ===========================================================================
# SUPERTREND
# ===========================================================================
# bands: hl2 -/+ factor * ATR, sticky (a band only moves toward price)
# direction: -1 = up trend (lower band active), 1 = down trend (upper band)
# direction is 1 until a previous supertrend value exists

@dataclass
class SupertrendState:
    lower: float = NAN
    upper: float = NAN
    value: float = NAN


def supertrend(
    factor: float,
    atr_period: int,
    high: Optional[Source] = None,
    low: Optional[Source] = None,
    close: Optional[Source] = None,
    wicks: bool = False,
) -> Tuple[List[float], List[float]]:
    """Returns ``(supertrend, direction)``."""
    _require("supertrend", hint=_HLC_HINT, high=high, low=low, close=close)
    hi, lo, cl = _floats(high), _floats(low), _floats(close)
    _same_length("supertrend", high=hi, low=lo, close=cl)
    atr_values = atr(atr_period, hi, lo, cl)

    values: List[float] = []
    directions: List[float] = []
    state = SupertrendState()

    for i in range(len(hi)):
        band = atr_values[i] * factor
        if math.isnan(band):
            values.append(NAN)
            directions.append(1.0)
            continue

        hl2 = (hi[i] + lo[i]) / 2.0
        upper = hl2 + band
        lower = hl2 - band

        high_price = hi[i] if wicks else cl[i]
        low_price = lo[i] if wicks else cl[i]

        if i > 0 and not math.isnan(state.lower) and not math.isnan(state.upper):
            prev_low_price = lo[i - 1] if wicks else cl[i - 1]
            prev_high_price = hi[i - 1] if wicks else cl[i - 1]
            if not (lower > state.lower or prev_low_price < state.lower):
                lower = state.lower
            if not (upper < state.upper or prev_high_price > state.upper):
                upper = state.upper

        if math.isnan(state.value):
            direction = 1.0
        elif state.value == state.upper:
            direction = -1.0 if high_price > upper else 1.0
        else:
            direction = 1.0 if low_price < lower else -1.0

        value = lower if direction == -1.0 else upper
        values.append(value)
        directions.append(direction)

        state.lower, state.upper, state.value = lower, upper, value

    return values, directions


# ===========================================================================
# PARABOLIC SAR
# ===========================================================================
# bar 0 is NaN; bar 1 picks the trend from close vs previous close.
# af resets to *start* on a reversal and grows by *inc* (capped at
# *maximum*) on each new extreme, except on the first bar of a trend.
# SAR never sits inside the previous two bars' range.

@dataclass
class SARState:
    sar: float = NAN
    ep: float = NAN
    af: float = 0.0
    up: bool = False
    first: bool = False


def sar(
    start: float = 0.02,
    inc: float = 0.02,
    maximum: float = 0.2,
    high: Optional[Source] = None,
    low: Optional[Source] = None,
    close: Optional[Source] = None,
) -> List[float]:
    _require("sar", hint=_HLC_HINT, high=high, low=low, close=close)
    hi, lo, cl = _floats(high), _floats(low), _floats(close)
    _same_length("sar", high=hi, low=lo, close=cl)

    result: List[float] = []
    st = SARState(af=start)

    for i in range(len(cl)):
        if i == 0:
            result.append(NAN)
            continue

        if i == 1:
            if cl[i] > cl[i - 1]:
                st.up, st.ep, st.sar = True, hi[i], lo[i - 1]
            else:
                st.up, st.ep, st.sar = False, lo[i], hi[i - 1]
            st.first = True
            st.af = start

        st.sar = st.sar + st.af * (st.ep - st.sar)

        # reversal
        if st.up:
            if st.sar > lo[i]:
                st.first, st.up = True, False
                st.sar = _nmax(hi[i], st.ep)
                st.ep = lo[i]
                st.af = start
        elif st.sar < hi[i]:
            st.first, st.up = True, True
            st.sar = _nmin(lo[i], st.ep)
            st.ep = hi[i]
            st.af = start

        # new extreme
        if not st.first:
            if st.up and hi[i] > st.ep:
                st.ep = hi[i]
                st.af = _nmin(st.af + inc, maximum)
            elif not st.up and lo[i] < st.ep:
                st.ep = lo[i]
                st.af = _nmin(st.af + inc, maximum)

        # clamp
        if st.up:
            st.sar = _nmin(st.sar, lo[i - 1])
            if i > 1:
                st.sar = _nmin(st.sar, lo[i - 2])
        else:
            st.sar = _nmax(st.sar, hi[i - 1])
            if i > 1:
                st.sar = _nmax(st.sar, hi[i - 2])

        result.append(st.sar)
        st.first = False

    return result


# ===========================================================================
# DMI / ADX
# ===========================================================================

def dmi(
    di_length: int = 14,
    adx_smoothing: int = 14,
    high: Optional[Source] = None,
    low: Optional[Source] = None,
    close: Optional[Source] = None,
) -> Tuple[List[float], List[float], List[float]]:
    """Returns ``(+DI, -DI, ADX)``, all RMA smoothed."""
    _require("dmi", hint=_HLC_HINT, high=high, low=low, close=close)
    di_length = _check_length("dmi", di_length, name="di_length")
    adx_smoothing = _check_length("dmi", adx_smoothing, name="adx_smoothing")
    hi, lo, cl = _floats(high), _floats(low), _floats(close)
    _same_length("dmi", high=hi, low=lo, close=cl)

    plus_dm: List[float] = []
    minus_dm: List[float] = []
    for i in range(len(hi)):
        if i == 0:
            plus_dm.append(0.0)
            minus_dm.append(0.0)
            continue
        up = hi[i] - hi[i - 1]
        down = lo[i - 1] - lo[i]
        plus_dm.append(up if (up > down and up > 0) else 0.0)
        minus_dm.append(down if (down > up and down > 0) else 0.0)

    s_plus = rma(plus_dm, di_length)
    s_minus = rma(minus_dm, di_length)
    s_tr = rma(tr(False, hi, lo, cl), di_length)

    plus_di: List[float] = []
    minus_di: List[float] = []
    dx: List[float] = []
    for p, m, t in zip(s_plus, s_minus, s_tr):
        pdi = 0.0 if t == 0 else p / t * 100.0
        mdi = 0.0 if t == 0 else m / t * 100.0
        plus_di.append(pdi)
        minus_di.append(mdi)
        total = pdi + mdi
        dx.append(0.0 if total == 0 else abs(pdi - mdi) / total * 100.0)

    return plus_di, minus_di, rma(dx, adx_smoothing)


def adx(
    di_length: int = 14,
    adx_smoothing: int = 14,
    high: Optional[Source] = None,
    low: Optional[Source] = None,
    close: Optional[Source] = None,
) -> List[float]:
    _require("adx", hint=_HLC_HINT, high=high, low=low, close=close)
    return dmi(di_length, adx_smoothing, high, low, close)[2]


# ===========================================================================
# ZIGZAG
# ===========================================================================
# A *potential* pivot opens once price sits `deviation` % away from the
# last confirmed pivot and beats the previous `backstep` bars.  It is
# confirmed when price then moves `deviation` % back from it and at least
# `backstep` bars have passed.  The last unconfirmed potential pivot is
# still written to value / is_pivot (repaint) but never to direction.

@dataclass
class Pivot:
    index: int
    price: float
    kind: str   # "high" | "low"


@dataclass
class ZigZagState:
    last: Optional[Pivot] = None
    potential: Optional[Pivot] = None
    direction: int = 0
    confirmed: List[Pivot] = field(default_factory=list)


def _deviation(p1: float, p2: float) -> float:
    """Percent move from *p1* to *p2*; 0 when undefined."""
    if p1 == 0 or math.isnan(p1) or math.isnan(p2):
        return 0.0
    return abs((p2 - p1) / p1) * 100.0


def _beats_back(values: List[float], i: int, backstep: int, higher: bool) -> bool:
    for j in range(1, backstep + 1):
        if i - j < 0:
            break
        prev = values[i - j]
        if math.isnan(prev):
            continue
        if (higher and prev >= values[i]) or (not higher and prev <= values[i]):
            return False
    return True


def zigzag(
    deviation: float = 5.0,
    depth: int = 10,
    backstep: int = 3,
    source: Optional[Source] = None,
    high: Optional[Source] = None,
    low: Optional[Source] = None,
) -> Tuple[List[float], List[float], List[bool]]:
    """Returns ``(value, direction, is_pivot)``.

    ``value`` holds the pivot price on pivot bars and NaN elsewhere;
    ``direction`` is 1 after a low pivot, -1 after a high pivot, 0 before
    the first one.  Uses *high*/*low* when both are given, else *source*.
    """
    if high is not None and low is not None:
        hi, lo = _floats(high), _floats(low)
    elif source is not None:
        hi = lo = _floats(source)
    else:
        raise MissingInputError("zigzag", "source",
                                hint="Pass a source series or both high and low.")
    depth = _check_length("zigzag", depth, name="depth")
    backstep = _check_length("zigzag", backstep, minimum=0, name="backstep")
    _same_length("zigzag", high=hi, low=lo)

    n = len(hi)
    st = ZigZagState()

    # seed from the extremes of the first `depth` bars
    hi_idx = lo_idx = -1
    hi_val, lo_val = -math.inf, math.inf
    for i in range(min(depth, n)):
        if not math.isnan(hi[i]) and hi[i] > hi_val:
            hi_val, hi_idx = hi[i], i
        if not math.isnan(lo[i]) and lo[i] < lo_val:
            lo_val, lo_idx = lo[i], i

    start = depth
    if hi_idx >= 0 and lo_idx >= 0:
        if lo_idx <= hi_idx:
            st.last, st.direction = Pivot(lo_idx, lo_val, "low"), 1
        else:
            st.last, st.direction = Pivot(hi_idx, hi_val, "high"), -1
        st.confirmed.append(st.last)
        start = st.last.index + 1

    for i in range(max(start, depth), n):
        cur_high, cur_low = hi[i], lo[i]
        if math.isnan(cur_high) or math.isnan(cur_low):
            continue

        if st.direction == 1:
            if _beats_back(hi, i, backstep, higher=True):
                if st.potential is None or st.potential.kind != "high":
                    if st.last is not None and _deviation(st.last.price, cur_high) >= deviation:
                        st.potential = Pivot(i, cur_high, "high")
                elif cur_high > st.potential.price:
                    st.potential = Pivot(i, cur_high, "high")

            pot = st.potential
            if (pot is not None and pot.kind == "high"
                    and _deviation(pot.price, cur_low) >= deviation
                    and i - pot.index >= backstep):
                st.confirmed.append(pot)
                st.last, st.direction, st.potential = pot, -1, None

        elif st.direction == -1:
            if _beats_back(lo, i, backstep, higher=False):
                if st.potential is None or st.potential.kind != "low":
                    if st.last is not None and _deviation(st.last.price, cur_low) >= deviation:
                        st.potential = Pivot(i, cur_low, "low")
                elif cur_low < st.potential.price:
                    st.potential = Pivot(i, cur_low, "low")

            pot = st.potential
            if (pot is not None and pot.kind == "low"
                    and _deviation(pot.price, cur_high) >= deviation
                    and i - pot.index >= backstep):
                st.confirmed.append(pot)
                st.last, st.direction, st.potential = pot, 1, None

        elif st.last is not None:
            if st.last.kind == "low" and _deviation(st.last.price, cur_high) >= deviation:
                st.direction = 1
            elif st.last.kind == "high" and _deviation(st.last.price, cur_low) >= deviation:
                st.direction = -1

    values = [NAN] * n
    is_pivot = [False] * n
    pivots = st.confirmed + ([st.potential] if st.potential is not None else [])
    for p in pivots:
        values[p.index] = p.price
        is_pivot[p.index] = True

    # direction timeline from confirmed pivots only
    directions: List[float] = []
    current = 0.0
    k = 0
    for i in range(n):
        while k < len(st.confirmed) and st.confirmed[k].index <= i:
            current = 1.0 if st.confirmed[k].kind == "low" else -1.0
            k += 1
        directions.append(current)

    return values, directions, is_pivot


# ===========================================================================
# Registry
# ===========================================================================

def _supertrend_params(params: Dict[str, Any]) -> Tuple[int, float]:
    length = _as_int(_param(params, "length", 10), 10)
    factor = _as_float(_param(params, "factor", 3.0), 3.0)
    return length, factor


def _supertrend_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[List[float]]:
    length, factor = _supertrend_params(params)
    wicks = _as_bool(params.get("wicks"), False)
    return list(supertrend(factor, length, inputs["high"], inputs["low"], inputs["close"], wicks))


def _supertrend_output_names(params: Dict[str, Any]) -> List[str]:
    length, factor = _supertrend_params(params)
    props = f"_{length}_{_fmt_num(factor)}"
    return [f"SUPERT{props}", f"SUPERTd{props}"]


INDICATOR_REGISTRY["supertrend"] = Indicator(
    kind="supertrend",
    category="trend",
    inputs=("high", "low", "close"),
    compute=_supertrend_compute,
    output_names=_supertrend_output_names,
)


def _psar_params(params: Dict[str, Any]) -> Tuple[float, float, float]:
    start = _as_float(_param(params, "start", 0.02), 0.02)
    inc = _as_float(_param(params, "inc", 0.02), 0.02)
    maximum = _as_float(_param(params, "maximum", 0.2), 0.2)
    return start, inc, maximum


INDICATOR_REGISTRY["psar"] = Indicator(
    kind="psar",
    category="trend",
    inputs=("high", "low", "close"),
    compute=lambda inputs, params: [
        sar(*_psar_params(params), inputs["high"], inputs["low"], inputs["close"])
    ],
    output_names=lambda params: [
        "PSAR_{}_{}_{}".format(*(_fmt_num(v) for v in _psar_params(params)))
    ],
)


def _dmi_params(params: Dict[str, Any]) -> Tuple[int, int]:
    length = _as_int(_param(params, "length", 14), 14)
    smoothing = _as_int(_param(params, "smoothing", length), length)
    return length, smoothing


def _dmi_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[List[float]]:
    plus, minus, adx_ = dmi(*_dmi_params(params), inputs["high"], inputs["low"], inputs["close"])
    return [adx_, plus, minus]


def _dmi_output_names(params: Dict[str, Any]) -> List[str]:
    length, smoothing = _dmi_params(params)
    return [f"ADX_{smoothing}", f"DMP_{length}", f"DMN_{length}"]


INDICATOR_REGISTRY["dmi"] = Indicator(
    kind="dmi",
    category="trend",
    inputs=("high", "low", "close"),
    compute=_dmi_compute,
    output_names=_dmi_output_names,
)
INDICATOR_REGISTRY["adx"] = Indicator(
    kind="adx",
    category="trend",
    inputs=("high", "low", "close"),
    compute=lambda inputs, params: [
        adx(*_dmi_params(params), inputs["high"], inputs["low"], inputs["close"])
    ],
    output_names=lambda params: [f"ADX_{_dmi_params(params)[1]}"],
)


def _zigzag_params(params: Dict[str, Any]) -> Tuple[float, int, int]:
    deviation = _as_float(_param(params, "deviation", 5.0), 5.0)
    depth = _as_int(_param(params, "depth", 10), 10)
    backstep = _as_int(_param(params, "backstep", 3), 3)
    return deviation, depth, backstep


def _zigzag_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[List[Any]]:
    return list(zigzag(*_zigzag_params(params), high=inputs["high"], low=inputs["low"]))


def _zigzag_output_names(params: Dict[str, Any]) -> List[str]:
    deviation, depth, backstep = _zigzag_params(params)
    props = f"_{_fmt_num(deviation)}%_{depth}_{backstep}"
    return [f"ZIGZAGv{props}", f"ZIGZAGd{props}", f"ZIGZAGp{props}"]


INDICATOR_REGISTRY["zigzag"] = Indicator(
    kind="zigzag",
    category="trend",
    inputs=("high", "low"),
    compute=_zigzag_compute,
    output_names=_zigzag_output_names,
)
