# -*- coding: utf-8 -*-
"""pandas-ta-series -- indicators that read bars after the current one.

  1. ichimoku   -- chikou span is close shifted *back* by displacement
  2. pivothigh  -- a pivot is only known `right` bars after it happened
  3. pivotlow   -- same, for lows

The registry flags these kinds with ``lookahead=True``; the ichimoku entry
drops the chikou span when called with ``lookahead=False``.
"""
from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ._base import (
    NAN,
    Source,
    _param,
    _as_int,
    _as_bool,
    _floats,
    _check_length,
    _same_length,
    _require,
    Indicator,
    INDICATOR_REGISTRY,
)
from ._kernels import pivot_scan
from ._utility import highest, lowest


# ===========================================================================
# ICHIMOKU
# ===========================================================================

def _midpoint(hi: List[float], lo: List[float], length: int) -> List[float]:
    hh = highest(hi, length)
    ll = lowest(lo, length)
    return [NAN if (math.isnan(h) or math.isnan(l_)) else (h + l_) / 2.0 for h, l_ in zip(hh, ll)]


def ichimoku(
    conversion: int = 9,
    base: int = 26,
    lagging_span2: int = 52,
    displacement: int = 26,
    high: Optional[Source] = None,
    low: Optional[Source] = None,
    close: Optional[Source] = None,
) -> Tuple[List[float], List[float], List[float], List[float], List[float]]:
    """Returns ``(tenkan, kijun, senkou_a, senkou_b, chikou)``.

    Senkou spans at ``i`` read the midpoints of ``i - displacement``
    (leading NaN run); chikou at ``i`` reads ``close[i + displacement]``
    (trailing NaN run).
    """
    _require("ichimoku", hint="Pass the bar high, low and close series.",
             high=high, low=low, close=close)
    displacement = _check_length("ichimoku", displacement, minimum=0, name="displacement")
    hi, lo, cl = _floats(high), _floats(low), _floats(close)
    _same_length("ichimoku", high=hi, low=lo, close=cl)
    n = len(hi)

    tenkan = _midpoint(hi, lo, conversion)
    kijun = _midpoint(hi, lo, base)
    span_b = _midpoint(hi, lo, lagging_span2)

    senkou_a: List[float] = []
    senkou_b: List[float] = []
    chikou: List[float] = []
    for i in range(n):
        k = i - displacement
        if k < 0:
            senkou_a.append(NAN)
            senkou_b.append(NAN)
        else:
            senkou_a.append((tenkan[k] + kijun[k]) / 2.0)
            senkou_b.append(span_b[k])
        j = i + displacement
        chikou.append(cl[j] if j < n else NAN)

    return tenkan, kijun, senkou_a, senkou_b, chikou


# ===========================================================================
# PIVOTHIGH / PIVOTLOW
# ===========================================================================
# pivothigh(source, left, right) or pivothigh(left, right, high=...)
# The center must be strictly above (below) every bar on both sides.
# NaN while i < left or i + right >= n.

def _pivot_args(fn: str, args: Sequence[Any], fallback: Optional[Source], name: str):
    if len(args) == 2:
        _require(fn, hint=f"The two-argument form reads the bar {name} series.",
                 **{name: fallback})
        src, (left, right) = fallback, args
    elif len(args) == 3:
        src, left, right = args
    else:
        raise TypeError(f"{fn}() takes (source, leftbars, rightbars) or (leftbars, rightbars)")
    left = _check_length(fn, left, minimum=0, name="leftbars")
    right = _check_length(fn, right, minimum=0, name="rightbars")
    return _floats(src), left, right


def pivothigh(*args: Any, high: Optional[Source] = None) -> List[float]:
    src, left, right = _pivot_args("pivothigh", args, high, "high")
    return pivot_scan(src, left, right, True)


def pivotlow(*args: Any, low: Optional[Source] = None) -> List[float]:
    src, left, right = _pivot_args("pivotlow", args, low, "low")
    return pivot_scan(src, left, right, False)


# ===========================================================================
# Registry
# ===========================================================================

def _ichimoku_params(params: Dict[str, Any]) -> Tuple[int, int, int, int]:
    tenkan = _as_int(_param(params, "tenkan", 9), 9)
    kijun = _as_int(_param(params, "kijun", 26), 26)
    senkou = _as_int(_param(params, "senkou", 52), 52)
    displacement = _as_int(_param(params, "displacement", kijun), kijun)
    return tenkan, kijun, senkou, displacement


def _ichimoku_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[List[float]]:
    out = list(ichimoku(*_ichimoku_params(params), inputs["high"], inputs["low"], inputs["close"]))
    if not _as_bool(params.get("lookahead"), True):
        out = out[:4]
    return out


def _ichimoku_output_names(params: Dict[str, Any]) -> List[str]:
    tenkan, kijun, senkou, _ = _ichimoku_params(params)
    names = [
        f"ITS_{tenkan}", f"IKS_{kijun}", f"ISA_{tenkan}", f"ISB_{kijun}", f"ICS_{kijun}",
    ]
    if not _as_bool(params.get("lookahead"), True):
        names = names[:4]
    return names


INDICATOR_REGISTRY["ichimoku"] = Indicator(
    kind="ichimoku",
    category="trend",
    inputs=("high", "low", "close"),
    compute=_ichimoku_compute,
    output_names=_ichimoku_output_names,
    lookahead=True,
)


def _bars(params: Dict[str, Any]) -> Tuple[int, int]:
    left = _as_int(_param(params, "left", 5), 5)
    right = _as_int(_param(params, "right", left), left)
    return left, right


INDICATOR_REGISTRY["pivothigh"] = Indicator(
    kind="pivothigh",
    category="trend",
    inputs=("high",),
    compute=lambda inputs, params: [pivothigh(inputs["high"], *_bars(params))],
    output_names=lambda params: ["PIVOTH_{}_{}".format(*_bars(params))],
    lookahead=True,
)
INDICATOR_REGISTRY["pivotlow"] = Indicator(
    kind="pivotlow",
    category="trend",
    inputs=("low",),
    compute=lambda inputs, params: [pivotlow(inputs["low"], *_bars(params))],
    output_names=lambda params: ["PIVOTL_{}_{}".format(*_bars(params))],
    lookahead=True,
)
