# -*- coding: utf-8 -*-
"""pandas-ta-series -- shared base: helpers, smoothing state, registry.

All category modules (``_overlap``, ``_momentum``, ...) import from here
and populate ``INDICATOR_REGISTRY`` at load time.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

import logging

import pandas as pd

from pandas_ta_series.errors import InvalidConfigError, MissingInputError
from pandas_ta_series.runtime import BarData

logger = logging.getLogger(__name__)

NAN = float("nan")

Source = Sequence[Any]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _truthy(x: Any) -> bool:
    """Condition value of *x*: NaN, None, 0 and False are false."""
    if x is None:
        return False
    if isinstance(x, float):
        return x == x and x != 0.0
    return bool(x)


def _param(params: Dict[str, Any], key: str, default: Any) -> Any:
    """Pull *key* from *params*; treat None as missing -> default."""
    value = params.get(key, default)
    return default if value is None else value


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return int(default)


def _as_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return float(default)


def _as_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _floats(values: Optional[Source]) -> Optional[List[float]]:
    """Copy any numeric sequence (list, ndarray, pd.Series) to floats; None -> NaN."""
    if values is None:
        return None
    out: List[float] = []
    for x in values:
        try:
            out.append(NAN if x is None else float(x))
        except (TypeError, ValueError):
            out.append(NAN)
    return out


def _bools(values: Source) -> List[bool]:
    return [_truthy(x) for x in values]


def _nmax(a: float, b: float) -> float:
    """max() that propagates NaN."""
    if a != a or b != b:
        return NAN
    return a if a >= b else b


def _nmin(a: float, b: float) -> float:
    """min() that propagates NaN."""
    if a != a or b != b:
        return NAN
    return a if a <= b else b


def _check_length(fn: str, length: Any, minimum: int = 1, name: str = "length") -> int:
    try:
        value = int(length)
    except (TypeError, ValueError):
        raise InvalidConfigError(f"{fn}(): {name} must be an integer, got {length!r}") from None
    if value < minimum:
        raise InvalidConfigError(f"{fn}(): {name} must be >= {minimum}, got {value}")
    return value


def _check_percentage(fn: str, percentage: Any) -> float:
    try:
        value = float(percentage)
    except (TypeError, ValueError):
        raise InvalidConfigError(f"{fn}(): percentage must be a number, got {percentage!r}") from None
    if not 0.0 <= value <= 100.0:
        raise InvalidConfigError(f"{fn}(): percentage must be within [0, 100], got {percentage!r}")
    return value


def _same_length(fn: str, **arrays: Optional[Sequence[Any]]) -> None:
    """Raise when the given (non-None) inputs differ in length."""
    sizes = {k: len(v) for k, v in arrays.items() if v is not None}
    if len(set(sizes.values())) > 1:
        detail = ", ".join(f"{k}={n}" for k, n in sizes.items())
        raise InvalidConfigError(f"{fn}(): input lengths differ ({detail})")


def _require(fn: str, hint: str = "", **inputs: Any) -> None:
    """Raise MissingInputError naming every input that is None."""
    missing = [k for k, v in inputs.items() if v is None]
    if missing:
        raise MissingInputError(fn, *missing, hint=hint)


# ---------------------------------------------------------------------------
# Shared smoothing state
# ---------------------------------------------------------------------------

@dataclass
class EMAState:
    """Exponential smoothing state, reused by EMA and RMA.

    EMA  -> alpha = 2 / (length + 1)   via ``ema_make``; first output = x[0]
    RMA  -> alpha = 1 / length          via ``rma_make``; first output = seed

    ``seed`` (RMA only) is the mean of the first ``min(length, n)`` inputs.
    """
    length: int
    alpha: float
    last: Optional[float] = None
    seed: Optional[float] = None


def ema_make(length: int) -> EMAState:
    """EMA state -- alpha = 2 / (length + 1)."""
    return EMAState(length=length, alpha=2.0 / (length + 1.0))


def rma_make(length: int, source: Sequence[float]) -> EMAState:
    """RMA / Wilder state -- alpha = 1 / length, seeded from *source*."""
    count = min(length, len(source))
    total = 0.0
    for k in range(count):
        total += source[k]
    return EMAState(length=length, alpha=1.0 / length,
                    seed=total / count if count else NAN)


def ema_update_raw(state: EMAState, x: float) -> Tuple[float, EMAState]:
    """Single-step EMA update: ``(x - last) * alpha + last``."""
    if state.last is None:
        state.last = x
    else:
        state.last = (x - state.last) * state.alpha + state.last
    return state.last, state


def rma_update_raw(state: EMAState, x: float) -> Tuple[float, EMAState]:
    """Single-step RMA update: ``alpha * x + (1 - alpha) * last``."""
    if state.last is None:
        state.last = state.seed
    else:
        state.last = state.alpha * x + (1.0 - state.alpha) * state.last
    return state.last, state


# ---------------------------------------------------------------------------
# Indicator descriptor & registry  (populated by category modules)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Indicator:
    """Immutable descriptor for a registry indicator.

    ``inputs`` names the bar fields handed to ``compute`` (as float lists);
    ``optional`` fields are passed when the bars carry them.  ``lookahead``
    marks indicators whose value at bar ``i`` reads bars after ``i``.
    """
    kind:         str
    category:     str
    inputs:       Tuple[str, ...]
    compute:      Callable[[Dict[str, List[float]], Dict[str, Any]], List[List[Any]]]
    output_names: Callable[[Dict[str, Any]], List[str]]
    optional:     Tuple[str, ...] = ()
    lookahead:    bool = False


INDICATOR_REGISTRY: Dict[str, Indicator] = {}

INDICATOR_SPEC_EXCLUDES = frozenset({
    "kind", "prefix", "suffix", "delimiter", "col_names", "name",
})


def _fmt_num(val: Any) -> Any:
    if isinstance(val, float) and float(val).is_integer():
        return int(val)
    return val


# ---------------------------------------------------------------------------
# Output-name helpers
# ---------------------------------------------------------------------------

def resolve_output_names(
        base_names: List[str], spec: Dict[str, Any]
) -> Tuple[Optional[List[str]], Optional[str]]:
    """Apply prefix / suffix / col_names overrides from *spec*."""
    names = list(base_names)
    delimiter = spec.get("delimiter", "_")
    prefix = spec.get("prefix") or ""
    suffix = spec.get("suffix") or ""
    if prefix:
        prefix = f"{prefix}{delimiter}"
    if suffix:
        suffix = f"{delimiter}{suffix}"
    if prefix or suffix:
        names = [f"{prefix}{n}{suffix}" for n in names]
    col_names = spec.get("col_names")
    if col_names is not None:
        if not isinstance(col_names, tuple):
            col_names = (col_names,) if isinstance(col_names, str) else tuple(col_names)
        if len(col_names) < len(names):
            return None, f"[!] col_names too short: {len(col_names)} < {len(names)}"
        names = list(col_names[: len(names)])
    return names, None


def supported_kinds(category: Optional[str] = None, include_lookahead: bool = True) -> List[str]:
    """Return sorted list of supported indicator kinds.

    When include_lookahead=False, drop kinds that read future bars.
    """
    return sorted(
        k for k, ind in INDICATOR_REGISTRY.items()
        if (category is None or ind.category == category)
        and (include_lookahead or not ind.lookahead)
    )


# ---------------------------------------------------------------------------
# Registry driver
# ---------------------------------------------------------------------------

def compute(kind: str, data: Union[BarData, pd.DataFrame], **params: Any) -> pd.DataFrame:
    """Compute a registered indicator over *data*; one column per output.

    >>> compute("sma", bars, length=10).columns.tolist()
    ['SMA_10']
    """
    indicator = INDICATOR_REGISTRY.get(kind.lower())
    if indicator is None:
        raise InvalidConfigError(
            f"Unknown indicator '{kind}'; see supported_kinds()"
        )
    if isinstance(data, pd.DataFrame):
        data = BarData.from_dataframe(data)

    if "volume" in indicator.inputs and not data.has_volume():
        raise MissingInputError(kind, "volume", hint="Bars carry no volume.")

    inputs: Dict[str, List[Any]] = {
        name: [b.time for b in data.bars] if name == "time" else data.field(name)
        for name in indicator.inputs
    }
    for name in indicator.optional:
        if name == "volume" and not data.has_volume():
            continue
        inputs[name] = data.field(name)

    algo_params = {k: v for k, v in params.items() if k not in INDICATOR_SPEC_EXCLUDES}
    outputs = indicator.compute(inputs, algo_params)

    names, err = resolve_output_names(indicator.output_names(algo_params), params)
    if err:
        raise InvalidConfigError(err)

    logger.debug("computed %s over %d bars -> %s", kind, len(data), names)
    index = pd.Index([b.time for b in data.bars], name="time")
    return pd.DataFrame(dict(zip(names, outputs)), index=index)
