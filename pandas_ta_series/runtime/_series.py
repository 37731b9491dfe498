# -*- coding: utf-8 -*-
"""pandas-ta-series -- lazy, versioned Series graph.

A ``Series`` is a node in an explicit computation graph over one
``BarData``.  Each node carries an operation tag, references to its operand
nodes and an optional payload (field name, constant, value list, offset,
callable).  Nothing is computed until ``to_array()``; the result is cached
together with the BarData version it was computed at.

Node kinds
----------
field     bar field extraction (open/high/low/close/volume/hl2/...)
const     constant value on every bar
array     index lookup into a value list (``from_array`` / ``materialize``)
extract   user extractor ``fn(bar, index, bars) -> float``
unary     neg / not
binary    add sub mul div mod gt gte lt lte eq neq and or
offset    history access ``value[i - k]``
apply     lifted array algorithm ``fn(*operand_arrays)``
pick      one output of a multi-output ``apply`` node

Evaluation walks the graph iteratively (explicit stack) so deep operator
chains never hit the interpreter recursion limit.  A node recomputes when
its BarData version moved, when it was invalidated by hand, or when any
operand handed it a different array object than last time; the last rule
makes manual invalidation propagate to every dependent node.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd

from pandas_ta_series.errors import InvalidConfigError

from ._bars import NAN, Bar, BarData, bar_field

logger = logging.getLogger(__name__)

Operand = Union["Series", float, int, bool]
Extractor = Callable[[Bar, int, List[Bar]], float]


# ---------------------------------------------------------------------------
# Element-wise helpers
# ---------------------------------------------------------------------------

def _num(x: Any) -> float:
    """Float value of *x*; None and non-numerics become NaN."""
    if x is None:
        return NAN
    try:
        return float(x)
    except (TypeError, ValueError):
        return NAN


def _truthy(x: float) -> bool:
    """NaN and 0 are false."""
    return x == x and x != 0.0


def _div(a: float, b: float) -> float:
    return NAN if b == 0 else a / b


def _mod(a: float, b: float) -> float:
    # truncated remainder: the result takes the sign of the dividend
    if b == 0 or math.isinf(a):
        return NAN
    return math.fmod(a, b)


_BINARY: Dict[str, Callable[[float, float], float]] = {
    "add": lambda a, b: a + b,
    "sub": lambda a, b: a - b,
    "mul": lambda a, b: a * b,
    "div": _div,
    "mod": _mod,
    "gt":  lambda a, b: 1.0 if a > b else 0.0,
    "gte": lambda a, b: 1.0 if a >= b else 0.0,
    "lt":  lambda a, b: 1.0 if a < b else 0.0,
    "lte": lambda a, b: 1.0 if a <= b else 0.0,
    "eq":  lambda a, b: 1.0 if a == b else 0.0,
    "neq": lambda a, b: 1.0 if a != b else 0.0,
    "and": lambda a, b: 1.0 if _truthy(a) and _truthy(b) else 0.0,
    "or":  lambda a, b: 1.0 if _truthy(a) or _truthy(b) else 0.0,
}

_UNARY: Dict[str, Callable[[float], float]] = {
    "neg": lambda a: -a,
    "not": lambda a: 0.0 if _truthy(a) else 1.0,
}


def _at(values: Sequence[float], i: int) -> float:
    return values[i] if 0 <= i < len(values) else NAN


# ---------------------------------------------------------------------------
# Series
# ---------------------------------------------------------------------------

class Series:
    """Lazily evaluated, cached, composable per-bar value.

    Series never raise on data problems: out-of-range history, division by
    zero and the like all come back as NaN.
    """

    def __init__(
        self,
        data: BarData,
        op: str,
        operands: Tuple["Series", ...] = (),
        payload: Any = None,
        name: Optional[str] = None,
    ):
        self._data = data
        self._op = op
        self._operands = operands
        self._payload = payload
        self.name = name
        self._cache: Any = None
        self._cache_version: int = -1
        self._cache_inputs: Tuple[Any, ...] = ()

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @staticmethod
    def from_field(data: BarData, name: str) -> "Series":
        return Series(data, "field", payload=name, name=name)

    @staticmethod
    def constant(data: BarData, value: float) -> "Series":
        return Series(data, "const", payload=_num(value))

    @staticmethod
    def from_array(data: BarData, values: Sequence[Any], name: Optional[str] = None) -> "Series":
        """Series reading ``values[i]``; NaN past the end of *values*.

        *values* is held by reference: after mutating it in place call
        ``invalidate()`` to drop the stale cache.
        """
        return Series(data, "array", payload=values, name=name)

    @staticmethod
    def from_extractor(data: BarData, fn: Extractor, name: Optional[str] = None) -> "Series":
        return Series(data, "extract", payload=fn, name=name)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def bar_data(self) -> BarData:
        return self._data

    @property
    def bars(self) -> List[Bar]:
        return self._data.bars

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        label = self.name or self._op
        return f"Series({label}, len={len(self._data)}, version={self._data.version})"

    # ------------------------------------------------------------------
    # Combinators
    # ------------------------------------------------------------------

    def _operand(self, other: Operand) -> "Series":
        if isinstance(other, Series):
            return other
        return Series.constant(self._data, other)

    def _binary(self, op: str, other: Operand) -> "Series":
        return Series(self._data, op, (self, self._operand(other)))

    def add(self, other: Operand) -> "Series":
        return self._binary("add", other)

    def sub(self, other: Operand) -> "Series":
        return self._binary("sub", other)

    def mul(self, other: Operand) -> "Series":
        return self._binary("mul", other)

    def div(self, other: Operand) -> "Series":
        return self._binary("div", other)

    def mod(self, other: Operand) -> "Series":
        return self._binary("mod", other)

    def neg(self) -> "Series":
        return Series(self._data, "neg", (self,))

    def gt(self, other: Operand) -> "Series":
        return self._binary("gt", other)

    def gte(self, other: Operand) -> "Series":
        return self._binary("gte", other)

    def lt(self, other: Operand) -> "Series":
        return self._binary("lt", other)

    def lte(self, other: Operand) -> "Series":
        return self._binary("lte", other)

    def eq(self, other: Operand) -> "Series":
        return self._binary("eq", other)

    def neq(self, other: Operand) -> "Series":
        return self._binary("neq", other)

    def and_(self, other: Operand) -> "Series":
        return self._binary("and", other)

    def or_(self, other: Operand) -> "Series":
        return self._binary("or", other)

    def not_(self) -> "Series":
        return Series(self._data, "not", (self,))

    def offset(self, k: int) -> "Series":
        """History access: value at ``i - k`` (``k < 0`` reads the future).

        *k* must be a whole number; NaN or a fractional offset raises
        ``InvalidConfigError``.
        """
        try:
            shift = int(k)
        except (TypeError, ValueError, OverflowError):
            raise InvalidConfigError(f"offset(): k must be an integer, got {k!r}") from None
        if shift != k:
            raise InvalidConfigError(f"offset(): k must be an integer, got {k!r}")
        return Series(self._data, "offset", (self,), payload=shift)

    __add__ = add
    __sub__ = sub
    __mul__ = mul
    __truediv__ = div
    __mod__ = mod
    __neg__ = neg

    def __radd__(self, other: Operand) -> "Series":
        return self._operand(other).add(self)

    def __rsub__(self, other: Operand) -> "Series":
        return self._operand(other).sub(self)

    def __rmul__(self, other: Operand) -> "Series":
        return self._operand(other).mul(self)

    def __rtruediv__(self, other: Operand) -> "Series":
        return self._operand(other).div(self)

    def __rmod__(self, other: Operand) -> "Series":
        return self._operand(other).mod(self)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def _post_order(self) -> List["Series"]:
        """Operands before dependents, each node once."""
        order: List[Series] = []
        seen = set()
        stack: List[Tuple[Series, bool]] = [(self, False)]
        while stack:
            node, expanded = stack.pop()
            if expanded:
                order.append(node)
                continue
            if id(node) in seen:
                continue
            seen.add(id(node))
            stack.append((node, True))
            for operand in node._operands:
                if id(operand) not in seen:
                    stack.append((operand, False))
        return order

    def _evaluate(self, inputs: Tuple[Any, ...]) -> Any:
        bars = self._data.bars
        n = len(bars)
        op = self._op

        if op == "field":
            name = self._payload
            return [bar_field(b, name) for b in bars]
        if op == "const":
            return [self._payload] * n
        if op == "array":
            values = self._payload
            m = len(values)
            return [_num(values[i]) if i < m else NAN for i in range(n)]
        if op == "extract":
            fn = self._payload
            return [_num(fn(b, i, bars)) for i, b in enumerate(bars)]
        if op in _UNARY:
            fn1 = _UNARY[op]
            a = inputs[0]
            return [fn1(_at(a, i)) for i in range(n)]
        if op in _BINARY:
            fn2 = _BINARY[op]
            a, b = inputs
            return [fn2(_at(a, i), _at(b, i)) for i in range(n)]
        if op == "offset":
            k = self._payload
            a = inputs[0]
            return [_at(a, i - k) if 0 <= i - k < n else NAN for i in range(n)]
        if op == "apply":
            # operands on another BarData are cut or NaN-padded to this one
            args = [a if len(a) == n else [_at(a, i) for i in range(n)] for a in inputs]
            return self._payload(*args)
        if op == "pick":
            out = inputs[0][self._payload]
            return [_at(out, i) for i in range(n)]
        raise ValueError(f"Unknown Series op: {op}")

    def _refresh(self) -> None:
        version = self._data.version
        inputs = tuple(operand._cache for operand in self._operands)
        if (
            self._cache is not None
            and self._cache_version == version
            and len(inputs) == len(self._cache_inputs)
            and all(a is b for a, b in zip(inputs, self._cache_inputs))
        ):
            return
        self._cache = self._evaluate(inputs)
        self._cache_version = version
        self._cache_inputs = inputs
        logger.debug("Series %s recomputed: len=%d version=%d",
                     self.name or self._op, len(self._data), version)

    def to_array(self) -> List[float]:
        """Values for every bar, in index order.

        The returned list is the cache itself: it is the same object on
        every call until the BarData changes.  Treat it as read-only.
        """
        for node in self._post_order():
            node._refresh()
        return self._cache

    def get(self, index: int) -> float:
        values = self.to_array()
        return values[index] if 0 <= index < len(values) else NAN

    def last(self) -> float:
        values = self.to_array()
        return values[-1] if values else NAN

    def materialize(self) -> "Series":
        """Snapshot current values into a flat array-backed Series.

        Later reads of the result cost an index lookup regardless of how
        deep this Series' chain is.  Bars appended after the snapshot read
        NaN until materialized again.
        """
        return Series.from_array(self._data, list(self.to_array()), name=self.name)

    def invalidate(self) -> None:
        """Drop the cache; this node and its dependents recompute on next read."""
        self._cache = None
        self._cache_version = -1
        self._cache_inputs = ()

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_pandas(self) -> pd.Series:
        values = self.to_array()
        index = pd.Index([b.time for b in self._data.bars], name="time")
        return pd.Series(values, index=index, name=self.name, dtype="float64")

    def to_time_value_pairs(self) -> List[Tuple[Any, float]]:
        values = self.to_array()
        return [
            (bar.time, v) for bar, v in zip(self._data.bars, values) if not math.isnan(v)
        ]


# ---------------------------------------------------------------------------
# Lifting array algorithms onto the graph
# ---------------------------------------------------------------------------

def lift(
    fn: Callable[..., Any],
    *operands: Series,
    data: Optional[BarData] = None,
    outputs: int = 1,
    name: Optional[str] = None,
    names: Optional[Sequence[str]] = None,
) -> Union[Series, Tuple[Series, ...]]:
    """Wrap ``fn(*operand_arrays)`` as a graph node.

    With ``outputs > 1`` *fn* must return that many lists; the outputs share
    one cached computation and come back as a tuple of Series.
    """
    if data is None:
        if not operands:
            raise ValueError("lift() needs operands or an explicit data argument")
        data = operands[0].bar_data
    node = Series(data, "apply", tuple(operands), payload=fn, name=name)
    if outputs == 1:
        return node
    labels = list(names) if names is not None else [None] * outputs
    return tuple(
        Series(data, "pick", (node,), payload=k, name=labels[k]) for k in range(outputs)
    )
