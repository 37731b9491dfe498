# -*- coding: utf-8 -*-
"""pandas-ta-series -- versioned OHLCV bar store.

``BarData`` is the single mutable object of the library.  Every successful
structural mutation bumps ``version`` by exactly one; every Series built on
the store compares its cached version against it to decide whether a
recomputation is due.  Invalid mutations (out-of-range ``set``, popping an
empty store) are silent no-ops and do not bump the version.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Sequence

import pandas as pd

logger = logging.getLogger(__name__)

NAN = float("nan")

FIELDS = ("open", "high", "low", "close", "volume")
DERIVED_FIELDS = ("hl2", "hlc3", "ohlc4", "hlcc4")


@dataclass(frozen=True)
class Bar:
    """Single OHLCV bar.  Replaced wholesale, never mutated."""

    time: Any
    open: float
    high: float
    low: float
    close: float
    volume: Optional[float] = None


def as_bar(value: Any) -> Bar:
    """Coerce a Bar, a mapping or a ``(time, o, h, l, c[, v])`` tuple."""
    if isinstance(value, Bar):
        return value
    if isinstance(value, Mapping):
        t = value.get("time", value.get("timestamp", value.get("ts")))
        return Bar(
            time=t,
            open=float(value["open"]),
            high=float(value["high"]),
            low=float(value["low"]),
            close=float(value["close"]),
            volume=None if value.get("volume") is None else float(value["volume"]),
        )
    if isinstance(value, (tuple, list)) and len(value) in (5, 6):
        vol = value[5] if len(value) == 6 else None
        return Bar(
            time=value[0],
            open=float(value[1]),
            high=float(value[2]),
            low=float(value[3]),
            close=float(value[4]),
            volume=None if vol is None else float(vol),
        )
    raise TypeError(f"Cannot build a Bar from {type(value).__name__}")


def bar_field(bar: Bar, name: str) -> float:
    """Value of an OHLCV (or derived hl2/hlc3/ohlc4/hlcc4) field; NaN if absent."""
    if name == "hl2":
        return (bar.high + bar.low) / 2.0
    if name == "hlc3":
        return (bar.high + bar.low + bar.close) / 3.0
    if name == "ohlc4":
        return (bar.open + bar.high + bar.low + bar.close) / 4.0
    if name == "hlcc4":
        return (bar.high + bar.low + 2.0 * bar.close) / 4.0
    value = getattr(bar, name, None)
    return NAN if value is None else float(value)


class BarData:
    """Ordered, mutable, versioned sequence of bars.

    One producer mutates the store, any number of Series read it.  A read
    after a write always sees the write: the version bump and the Series
    cache check are both synchronous.
    """

    def __init__(self, bars: Optional[Iterable[Any]] = None):
        self._bars: List[Bar] = [as_bar(b) for b in bars] if bars is not None else []
        self._version: int = 0

    @staticmethod
    def from_bars(bars: Iterable[Any]) -> "BarData":
        return BarData(bars)

    @staticmethod
    def from_dataframe(df: pd.DataFrame) -> "BarData":
        """Build from a DataFrame with open/high/low/close[/volume] columns.

        The bar time comes from a ``time`` or ``timestamp`` column when
        present, else from the index.
        """
        cols = {c.lower(): c for c in df.columns}
        missing = [c for c in ("open", "high", "low", "close") if c not in cols]
        if missing:
            raise ValueError(f"DataFrame missing columns: {missing}")

        if "time" in cols:
            times = df[cols["time"]].tolist()
        elif "timestamp" in cols:
            times = df[cols["timestamp"]].tolist()
        else:
            times = df.index.tolist()

        o = df[cols["open"]].astype(float).tolist()
        h = df[cols["high"]].astype(float).tolist()
        lo = df[cols["low"]].astype(float).tolist()
        c = df[cols["close"]].astype(float).tolist()
        if "volume" in cols:
            v = [None if pd.isna(x) else float(x) for x in df[cols["volume"]].tolist()]
        else:
            v = [None] * len(c)

        return BarData(Bar(t, *row) for t, *row in zip(times, o, h, lo, c, v))

    # ------------------------------------------------------------------
    # Read-only access (never bumps the version)
    # ------------------------------------------------------------------

    @property
    def version(self) -> int:
        return self._version

    @property
    def bars(self) -> List[Bar]:
        return self._bars

    def __len__(self) -> int:
        return len(self._bars)

    def __iter__(self) -> Iterator[Bar]:
        return iter(self._bars)

    def __repr__(self) -> str:
        return f"BarData(len={len(self._bars)}, version={self._version})"

    def at(self, index: int) -> Optional[Bar]:
        if 0 <= index < len(self._bars):
            return self._bars[index]
        return None

    def field(self, name: str) -> List[float]:
        return [bar_field(b, name) for b in self._bars]

    def has_volume(self) -> bool:
        return any(b.volume is not None and not math.isnan(b.volume) for b in self._bars)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            {name: self.field(name) for name in FIELDS},
            index=pd.Index([b.time for b in self._bars], name="time"),
        )

    # ------------------------------------------------------------------
    # Mutation (each success bumps the version by exactly one)
    # ------------------------------------------------------------------

    def _bump(self, op: str) -> None:
        self._version += 1
        logger.debug("BarData %s: len=%d version=%d", op, len(self._bars), self._version)

    def append(self, bar: Any) -> None:
        self._bars.append(as_bar(bar))
        self._bump("append")

    def remove_last(self) -> Optional[Bar]:
        if not self._bars:
            return None
        bar = self._bars.pop()
        self._bump("remove_last")
        return bar

    def set(self, index: int, bar: Any) -> None:
        if 0 <= index < len(self._bars):
            self._bars[index] = as_bar(bar)
            self._bump("set")

    def replace_last(self, bar: Any) -> None:
        if self._bars:
            self._bars[-1] = as_bar(bar)
            self._bump("replace_last")

    def replace_all(self, bars: Sequence[Any]) -> None:
        self._bars = [as_bar(b) for b in bars]
        self._bump("replace_all")

    def invalidate(self) -> None:
        self._bump("invalidate")
