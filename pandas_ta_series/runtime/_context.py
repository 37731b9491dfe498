# -*- coding: utf-8 -*-
"""pandas-ta-series -- explicit runtime context.

An indicator script declares plots, horizontal lines and user inputs while
it runs.  Those declarations are recorded on a ``RuntimeContext`` that the
caller creates and passes in; nothing is kept in module-level state, so any
number of scripts can run side by side.
"""
from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pandas as pd

from ._bars import BarData
from ._series import Series

logger = logging.getLogger(__name__)


@dataclass
class PlotSpec:
    key: str
    series: Series
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass
class HLineSpec:
    key: str
    price: float
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass
class InputSpec:
    name: str
    default: Any
    value: Any
    options: Dict[str, Any] = field(default_factory=dict)


class RuntimeContext:
    """Caller-owned registration context for one indicator run.

    Plots and hlines are idempotent per key: registering the same key again
    replaces the earlier declaration.  ``reset()`` forgets them before the
    next recalculation; inputs survive until ``dispose()``.
    """

    def __init__(self, bar_data: Optional[BarData] = None):
        self.bar_data = bar_data
        self.indicator: Dict[str, Any] = {}
        self._plots: Dict[str, PlotSpec] = {}
        self._hlines: Dict[str, HLineSpec] = {}
        self._inputs: Dict[str, InputSpec] = {}
        self._disposed = False

    def __enter__(self) -> "RuntimeContext":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.dispose()

    def __repr__(self) -> str:
        return (f"RuntimeContext(plots={len(self._plots)}, hlines={len(self._hlines)}, "
                f"inputs={len(self._inputs)})")

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def _check_open(self) -> None:
        if self._disposed:
            raise RuntimeError("RuntimeContext has been disposed")

    def register_indicator(self, title: str, overlay: bool = False, **options: Any) -> None:
        self._check_open()
        self.indicator = {"title": title, "overlay": overlay, **options}
        logger.info("indicator registered: %s (overlay=%s)", title, overlay)

    def register_plot(self, key: str, series: Series, **options: Any) -> PlotSpec:
        self._check_open()
        spec = PlotSpec(key=key, series=series, options=dict(options))
        self._plots[key] = spec
        logger.debug("plot registered: %s", key)
        return spec

    def register_hline(self, key: str, price: float, **options: Any) -> HLineSpec:
        self._check_open()
        spec = HLineSpec(key=key, price=float(price), options=dict(options))
        self._hlines[key] = spec
        logger.debug("hline registered: %s @ %s", key, price)
        return spec

    def register_input(self, name: str, default: Any, **options: Any) -> Any:
        """Declare a user input and return its current value.

        A user override set through ``set_input_values`` wins over
        *default*.  Re-declaring with another default keeps the override.
        """
        self._check_open()
        existing = self._inputs.get(name)
        if existing is None:
            self._inputs[name] = InputSpec(name=name, default=default, value=default,
                                           options=dict(options))
            logger.debug("input registered: %s=%r", name, default)
            return default

        if existing.default != default:
            warnings.warn(
                f"[!] input '{name}' re-registered with a different default "
                f"({existing.default!r} -> {default!r})",
                stacklevel=2,
            )
            if existing.value == existing.default:
                existing.value = default
            existing.default = default
        existing.options.update(options)
        return existing.value

    def input_value(self, name: str, default: Any = None) -> Any:
        spec = self._inputs.get(name)
        return default if spec is None else spec.value

    def set_input_values(self, values: Dict[str, Any]) -> None:
        """Override inputs; names not yet declared are kept for later."""
        self._check_open()
        for name, value in values.items():
            spec = self._inputs.get(name)
            if spec is None:
                self._inputs[name] = InputSpec(name=name, default=value, value=value)
            else:
                spec.value = value

    # ------------------------------------------------------------------
    # Read back
    # ------------------------------------------------------------------

    @property
    def plots(self) -> List[PlotSpec]:
        return list(self._plots.values())

    @property
    def hlines(self) -> List[HLineSpec]:
        return list(self._hlines.values())

    @property
    def inputs(self) -> Dict[str, Any]:
        return {name: spec.value for name, spec in self._inputs.items()}

    def plot_frame(self) -> pd.DataFrame:
        """All registered plots as a pandas DataFrame (one column per key)."""
        columns = {spec.key: spec.series.to_array() for spec in self._plots.values()}
        index = None
        if self.bar_data is not None:
            index = pd.Index([b.time for b in self.bar_data.bars], name="time")
        return pd.DataFrame(columns, index=index)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Forget plots and hlines before a recalculation; keep inputs."""
        self._plots.clear()
        self._hlines.clear()
        logger.debug("context reset")

    def dispose(self) -> None:
        self._plots.clear()
        self._hlines.clear()
        self._inputs.clear()
        self.indicator = {}
        self.bar_data = None
        self._disposed = True
        logger.debug("context disposed")
