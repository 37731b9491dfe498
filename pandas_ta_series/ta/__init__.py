# -*- coding: utf-8 -*-
"""pandas-ta-series.ta -- array-level indicator algorithms.

Every function takes plain numeric sequences (lists, ndarrays, pd.Series)
and returns lists of the same length.  Category modules populate
INDICATOR_REGISTRY at import time.
"""
from __future__ import annotations

# Base API (always available)
from ._base import (
    NAN,
    EMAState,
    Indicator,
    INDICATOR_REGISTRY,
    ema_make,
    rma_make,
    ema_update_raw,
    rma_update_raw,
    resolve_output_names,
    supported_kinds,
    compute,
)

# ---------------------------------------------------------------------------
# Category modules -- each populates the shared registry on import
# ---------------------------------------------------------------------------
from ._overlap import sma, ema, rma, wma, hma, alma, swma, vwma, linreg
from ._statistics import (
    stdev,
    variance,
    dev,
    median,
    mode,
    percentile_linear_interpolation,
    percentile_nearest_rank,
    percentrank,
    correlation,
    rci,
    cog,
)
from ._utility import (
    highest,
    lowest,
    highestbars,
    lowestbars,
    change,
    cum,
    vwap,
    crossover,
    crossunder,
    cross,
    rising,
    falling,
    barssince,
    valuewhen,
    max,
    min,
)
from ._momentum import rsi, macd, mom, roc, cmo, tsi, cci, stoch, wpr, mfi
from ._volatility import tr, atr, bb, bbw, kc, kcw, hl_range
from ._trend import supertrend, sar, dmi, adx, zigzag
from ._lookahead import ichimoku, pivothigh, pivotlow
from ._pivots import PIVOT_TYPES, LEVEL_NAMES, pivot_levels, pivot_point_levels

range = hl_range  # noqa: A001

__all__ = [
    # base
    "NAN",
    "EMAState",
    "Indicator",
    "INDICATOR_REGISTRY",
    "ema_make",
    "rma_make",
    "ema_update_raw",
    "rma_update_raw",
    "resolve_output_names",
    "supported_kinds",
    "compute",
    # overlap
    "sma", "ema", "rma", "wma", "hma", "alma", "swma", "vwma", "linreg",
    # statistics
    "stdev", "variance", "dev", "median", "mode",
    "percentile_linear_interpolation", "percentile_nearest_rank",
    "percentrank", "correlation", "rci", "cog",
    # utility
    "highest", "lowest", "highestbars", "lowestbars", "change", "cum", "vwap",
    "crossover", "crossunder", "cross", "rising", "falling",
    "barssince", "valuewhen", "max", "min",
    # momentum
    "rsi", "macd", "mom", "roc", "cmo", "tsi", "cci", "stoch", "wpr", "mfi",
    # volatility
    "tr", "atr", "bb", "bbw", "kc", "kcw", "hl_range", "range",
    # trend
    "supertrend", "sar", "dmi", "adx", "zigzag",
    "ichimoku", "pivothigh", "pivotlow",
    "PIVOT_TYPES", "LEVEL_NAMES", "pivot_levels", "pivot_point_levels",
]
