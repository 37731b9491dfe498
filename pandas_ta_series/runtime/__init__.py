# -*- coding: utf-8 -*-
"""pandas-ta-series runtime -- bar store, Series graph and run context."""
from __future__ import annotations

from ._bars import (
    NAN,
    FIELDS,
    DERIVED_FIELDS,
    Bar,
    BarData,
    as_bar,
    bar_field,
)
from ._series import Series, lift
from ._context import RuntimeContext, PlotSpec, HLineSpec, InputSpec

__all__ = [
    "NAN",
    "FIELDS",
    "DERIVED_FIELDS",
    "Bar",
    "BarData",
    "as_bar",
    "bar_field",
    "Series",
    "lift",
    "RuntimeContext",
    "PlotSpec",
    "HLineSpec",
    "InputSpec",
]
