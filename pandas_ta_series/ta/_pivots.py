# -*- coding: utf-8 -*-
"""pandas-ta-series -- anchored pivot point levels.

Output slot layout, shared by every type::

    [P, R1, S1, R2, S2, R3, S3, R4, S4, R5, S5]

Slots a type does not define stay NaN (DM only fills P, R1, S1).
"""
from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

import pandas as pd

from ._base import (
    NAN,
    Source,
    _param,
    _as_bool,
    _floats,
    _bools,
    _same_length,
    _require,
    Indicator,
    INDICATOR_REGISTRY,
)
from pandas_ta_series.errors import InvalidConfigError

PIVOT_TYPES = ("Traditional", "Fibonacci", "Woodie", "Classic", "DM", "Camarilla")
LEVEL_NAMES = ("P", "R1", "S1", "R2", "S2", "R3", "S3", "R4", "S4", "R5", "S5")

_TYPE_LOOKUP = {t.lower(): t for t in PIVOT_TYPES}


def _canonical_type(pivot_type: str) -> str:
    canonical = _TYPE_LOOKUP.get(str(pivot_type).strip().lower())
    if canonical is None:
        raise InvalidConfigError(
            f"pivot_point_levels(): unknown type '{pivot_type}', expected one of {PIVOT_TYPES}"
        )
    return canonical


def pivot_levels(pivot_type: str, h: float, l: float, c: float, o: float = NAN) -> List[float]:
    """The 11 levels for one basis ``(high, low, close, open)``."""
    levels = [NAN] * 11
    if math.isnan(h) or math.isnan(l) or math.isnan(c):
        return levels

    rng = h - l
    if pivot_type == "Woodie":
        p = (h + l + 2.0 * c) / 4.0
    else:
        p = (h + l + c) / 3.0
    levels[0] = p

    if pivot_type in ("Traditional", "Classic", "Woodie"):
        levels[1] = 2.0 * p - l
        levels[2] = 2.0 * p - h
        levels[3] = p + rng
        levels[4] = p - rng
        levels[5] = h + 2.0 * (p - l)
        levels[6] = l - 2.0 * (h - p)
        levels[7] = levels[5] + rng
        levels[8] = levels[6] - rng
        levels[9] = levels[7] + rng
        levels[10] = levels[8] - rng

    elif pivot_type == "Fibonacci":
        levels[1] = p + 0.382 * rng
        levels[2] = p - 0.382 * rng
        levels[3] = p + 0.618 * rng
        levels[4] = p - 0.618 * rng
        levels[5] = p + rng
        levels[6] = p - rng
        levels[7] = levels[5] + 0.618 * rng
        levels[8] = levels[6] - 0.618 * rng
        levels[9] = levels[7] + 0.382 * rng
        levels[10] = levels[8] - 0.382 * rng

    elif pivot_type == "DM":
        has_open = not math.isnan(o)
        x = h + l + 2.0 * c + (o if has_open else c)
        levels[0] = x / (5.0 if has_open else 4.0)
        levels[1] = x / 2.0 - l
        levels[2] = x / 2.0 - h

    elif pivot_type == "Camarilla":
        levels[1] = c + rng * 1.1 / 12.0
        levels[2] = c - rng * 1.1 / 12.0
        levels[3] = c + rng * 1.1 / 6.0
        levels[4] = c - rng * 1.1 / 6.0
        levels[5] = c + rng * 1.1 / 4.0
        levels[6] = c - rng * 1.1 / 4.0
        levels[7] = c + rng * 1.1 / 2.0
        levels[8] = c - rng * 1.1 / 2.0
        levels[9] = h
        levels[10] = l

    return levels


def pivot_point_levels(
    pivot_type: str,
    anchor: Source,
    developing: bool = False,
    high: Optional[Source] = None,
    low: Optional[Source] = None,
    close: Optional[Source] = None,
    open_: Optional[Source] = None,
) -> List[List[float]]:
    """Pivot levels re-based on every bar where *anchor* is true.

    Fixed mode keeps the anchor bar's high/low/close/open until the next
    anchor.  Developing mode tracks the highest high and lowest low since
    the anchor plus the current close (the open stays the anchor bar's).
    Returns 11 lists in ``LEVEL_NAMES`` order; NaN before the first anchor.
    """
    pivot_type = _canonical_type(pivot_type)
    if pivot_type == "Woodie" and developing:
        raise InvalidConfigError("pivot_point_levels(): Woodie type cannot use developing=True")
    _require("pivot_point_levels", hint="Pass the bar high, low and close series.",
             high=high, low=low, close=close)

    flags = _bools(anchor)
    hi, lo, cl = _floats(high), _floats(low), _floats(close)
    op = _floats(open_)
    _same_length("pivot_point_levels", anchor=flags, high=hi, low=lo, close=cl, open=op)

    results: List[List[float]] = [[] for _ in range(11)]
    anchor_idx = -1
    base_h = base_l = base_c = base_o = NAN
    run_h = run_l = NAN

    for i, flag in enumerate(flags):
        if flag:
            anchor_idx = i
            base_h, base_l, base_c = hi[i], lo[i], cl[i]
            base_o = op[i] if op is not None else NAN
            run_h = run_l = NAN

        if developing and anchor_idx >= 0:
            if not math.isnan(hi[i]) and (math.isnan(run_h) or hi[i] > run_h):
                run_h = hi[i]
            if not math.isnan(lo[i]) and (math.isnan(run_l) or lo[i] < run_l):
                run_l = lo[i]
            levels = pivot_levels(pivot_type, run_h, run_l, cl[i], base_o)
        else:
            levels = pivot_levels(pivot_type, base_h, base_l, base_c, base_o)

        for k in range(11):
            results[k].append(levels[k])

    return results


# ===========================================================================
# Registry
# ===========================================================================
# ``anchor`` is a pandas offset alias ("D", "W", "M", ...); a new period
# starts on the first bar whose timestamp falls in a different period.

def period_anchor(times: List[Any], freq: str = "D") -> List[bool]:
    """True on the first bar of every *freq* period of *times*."""
    if not times:
        return []
    periods = pd.DatetimeIndex(pd.to_datetime(times)).to_period(freq)
    return [i == 0 or periods[i] != periods[i - 1] for i in range(len(periods))]


def _pivots_compute(inputs: Dict[str, List[Any]], params: Dict[str, Any]) -> List[List[float]]:
    pivot_type = str(_param(params, "type", "Traditional"))
    developing = _as_bool(params.get("developing"), False)
    anchor = period_anchor(inputs["time"], str(_param(params, "anchor", "D")))
    return pivot_point_levels(pivot_type, anchor, developing,
                              inputs["high"], inputs["low"], inputs["close"], inputs.get("open"))


def _pivots_output_names(params: Dict[str, Any]) -> List[str]:
    tag = _canonical_type(_param(params, "type", "Traditional")).upper()
    return [f"PIVOTS_{tag}_{name}" for name in LEVEL_NAMES]


INDICATOR_REGISTRY["pivots"] = Indicator(
    kind="pivots",
    category="trend",
    inputs=("time", "high", "low", "close", "open"),
    compute=_pivots_compute,
    output_names=_pivots_output_names,
)
