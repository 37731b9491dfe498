# -*- coding: utf-8 -*-
"""pandas-ta-series -- indicator algorithms lifted onto the Series graph.

Every function here mirrors one in ``pandas_ta_series.ta`` but takes and
returns ``Series``.  Nothing is computed on call: the result is a graph
node that runs the array algorithm on first read and recomputes only when
the underlying BarData changes.  Multi-output indicators return a tuple of
Series that share one cached computation.

Argument validation (window lengths, pivot types, missing volume) runs
eagerly, at call time, so configuration errors never surface later from
inside ``to_array()``.

Bar-based indicators (``tr``, ``atr``, ``supertrend``, ``sar``, ``dmi``,
``adx``, ``ichimoku``, ``zigzag``, ``pivot_point_levels``) take the
BarData, or any Series built on it, and read high/low/close themselves.
"""
from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

from pandas_ta_series import ta as _ta
from pandas_ta_series.errors import InvalidConfigError, MissingInputError
from pandas_ta_series.runtime import BarData, Series, lift
from pandas_ta_series.ta._base import _check_length, _check_percentage, _fmt_num
from pandas_ta_series.ta._pivots import LEVEL_NAMES, _canonical_type

Operand = Union[Series, float, int, bool]
DataLike = Union[BarData, Series]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _bar_data(x: DataLike) -> BarData:
    if isinstance(x, BarData):
        return x
    if isinstance(x, Series):
        return x.bar_data
    raise TypeError(f"Expected BarData or Series, got {type(x).__name__}")


def _operand(x: Operand, data: BarData) -> Series:
    """Scalar | Series -> Series, resolved once at construction."""
    if isinstance(x, Series):
        return x
    return Series.constant(data, x)


def _floats(values: Sequence[Any]) -> List[float]:
    return [1.0 if v is True else 0.0 if v is False else v for v in values]


def _bool_fn(fn: Callable[..., List[bool]]) -> Callable[..., List[float]]:
    return lambda *arrays: _floats(fn(*arrays))


def _hlc(data: BarData) -> Tuple[Series, Series, Series]:
    return (Series.from_field(data, "high"),
            Series.from_field(data, "low"),
            Series.from_field(data, "close"))


def _volume(fn: str, data: BarData, volume: Optional[Series]) -> Series:
    if volume is not None:
        return volume
    if len(data) and not data.has_volume():
        raise MissingInputError(fn, "volume", hint="Bars carry no volume.")
    return Series.from_field(data, "volume")


# ===========================================================================
# Overlap
# ===========================================================================

def sma(source: Series, length: int) -> Series:
    length = _check_length("sma", length)
    return lift(lambda s: _ta.sma(s, length), source, name=f"SMA_{length}")


def ema(source: Series, length: int) -> Series:
    length = _check_length("ema", length)
    return lift(lambda s: _ta.ema(s, length), source, name=f"EMA_{length}")


def rma(source: Series, length: int) -> Series:
    length = _check_length("rma", length)
    return lift(lambda s: _ta.rma(s, length), source, name=f"RMA_{length}")


def wma(source: Series, length: int) -> Series:
    length = _check_length("wma", length)
    return lift(lambda s: _ta.wma(s, length), source, name=f"WMA_{length}")


def hma(source: Series, length: int) -> Series:
    length = _check_length("hma", length, minimum=2)
    return lift(lambda s: _ta.hma(s, length), source, name=f"HMA_{length}")


def alma(source: Series, length: int = 9, offset: float = 0.85, sigma: float = 6.0) -> Series:
    length = _check_length("alma", length)
    if sigma == 0:
        raise InvalidConfigError("alma(): sigma must be non-zero")
    return lift(lambda s: _ta.alma(s, length, offset, sigma), source, name=f"ALMA_{length}")


def swma(source: Series) -> Series:
    return lift(_ta.swma, source, name="SWMA")


def vwma(source: Series, length: int, volume: Optional[Series] = None) -> Series:
    length = _check_length("vwma", length)
    vol = _volume("vwma", source.bar_data, volume)
    return lift(lambda s, v: _ta.vwma(s, length, v), source, vol, name=f"VWMA_{length}")


def linreg(source: Series, length: int, offset: int = 0) -> Series:
    length = _check_length("linreg", length)
    return lift(lambda s: _ta.linreg(s, length, offset), source, name=f"LINREG_{length}")


# ===========================================================================
# Statistics
# ===========================================================================

def stdev(source: Series, length: int, biased: bool = True) -> Series:
    length = _check_length("stdev", length)
    return lift(lambda s: _ta.stdev(s, length, biased), source, name=f"STDEV_{length}")


def variance(source: Series, length: int, biased: bool = True) -> Series:
    length = _check_length("variance", length)
    return lift(lambda s: _ta.variance(s, length, biased), source, name=f"VAR_{length}")


def dev(source: Series, length: int) -> Series:
    length = _check_length("dev", length)
    return lift(lambda s: _ta.dev(s, length), source, name=f"DEV_{length}")


def median(source: Series, length: int) -> Series:
    length = _check_length("median", length)
    return lift(lambda s: _ta.median(s, length), source, name=f"MEDIAN_{length}")


def mode(source: Series, length: int) -> Series:
    length = _check_length("mode", length)
    return lift(lambda s: _ta.mode(s, length), source, name=f"MODE_{length}")


def percentile_linear_interpolation(source: Series, length: int, percentage: float) -> Series:
    length = _check_length("percentile_linear_interpolation", length)
    percentage = _check_percentage("percentile_linear_interpolation", percentage)
    return lift(lambda s: _ta.percentile_linear_interpolation(s, length, percentage), source)


def percentile_nearest_rank(source: Series, length: int, percentage: float) -> Series:
    length = _check_length("percentile_nearest_rank", length)
    return lift(lambda s: _ta.percentile_nearest_rank(s, length, percentage), source)


def percentrank(source: Series, length: int) -> Series:
    length = _check_length("percentrank", length)
    return lift(lambda s: _ta.percentrank(s, length), source, name=f"PCTRANK_{length}")


def correlation(source1: Series, source2: Operand, length: int) -> Series:
    length = _check_length("correlation", length)
    other = _operand(source2, source1.bar_data)
    return lift(lambda a, b: _ta.correlation(a, b, length), source1, other,
                name=f"CORR_{length}")


def rci(source: Series, length: int) -> Series:
    length = _check_length("rci", length)
    return lift(lambda s: _ta.rci(s, length), source, name=f"RCI_{length}")


def cog(source: Series, length: int = 10) -> Series:
    length = _check_length("cog", length)
    return lift(lambda s: _ta.cog(s, length), source, name=f"COG_{length}")


# ===========================================================================
# Utility
# ===========================================================================

def highest(source: Series, length: int) -> Series:
    length = _check_length("highest", length)
    return lift(lambda s: _ta.highest(s, length), source, name=f"HIGHEST_{length}")


def lowest(source: Series, length: int) -> Series:
    length = _check_length("lowest", length)
    return lift(lambda s: _ta.lowest(s, length), source, name=f"LOWEST_{length}")


def highestbars(source: Series, length: int) -> Series:
    length = _check_length("highestbars", length)
    return lift(lambda s: _ta.highestbars(s, length), source)


def lowestbars(source: Series, length: int) -> Series:
    length = _check_length("lowestbars", length)
    return lift(lambda s: _ta.lowestbars(s, length), source)


def change(source: Series, length: int = 1) -> Series:
    length = _check_length("change", length)
    return lift(lambda s: _ta.change(s, length), source)


def cum(source: Series) -> Series:
    return lift(_ta.cum, source, name="CUM")


def vwap(source: Series, volume: Optional[Series] = None) -> Series:
    vol = _volume("vwap", source.bar_data, volume)
    return lift(_ta.vwap, source, vol, name="VWAP")


def crossover(source1: Series, source2: Operand) -> Series:
    return lift(_bool_fn(_ta.crossover), source1, _operand(source2, source1.bar_data))


def crossunder(source1: Series, source2: Operand) -> Series:
    return lift(_bool_fn(_ta.crossunder), source1, _operand(source2, source1.bar_data))


def cross(source1: Series, source2: Operand) -> Series:
    return lift(_bool_fn(_ta.cross), source1, _operand(source2, source1.bar_data))


def rising(source: Series, length: int) -> Series:
    length = _check_length("rising", length)
    return lift(_bool_fn(lambda s: _ta.rising(s, length)), source)


def falling(source: Series, length: int) -> Series:
    length = _check_length("falling", length)
    return lift(_bool_fn(lambda s: _ta.falling(s, length)), source)


def barssince(condition: Series) -> Series:
    return lift(_ta.barssince, condition)


def valuewhen(condition: Series, source: Operand, occurrence: int = 0) -> Series:
    if occurrence < 0:
        raise InvalidConfigError(f"valuewhen(): occurrence must be >= 0, got {occurrence}")
    return lift(lambda c, s: _ta.valuewhen(c, s, occurrence),
                condition, _operand(source, condition.bar_data))


def max(source1: Series, source2: Operand) -> Series:  # noqa: A001
    return lift(_ta.max, source1, _operand(source2, source1.bar_data))


def min(source1: Series, source2: Operand) -> Series:  # noqa: A001
    return lift(_ta.min, source1, _operand(source2, source1.bar_data))


# ===========================================================================
# Momentum
# ===========================================================================

def rsi(source: Series, length: int) -> Series:
    length = _check_length("rsi", length)
    return lift(lambda s: _ta.rsi(s, length), source, name=f"RSI_{length}")


def macd(source: Series, fast: int = 12, slow: int = 26, signal: int = 9) -> Tuple[Series, ...]:
    """``(macd, signal, histogram)`` sharing one computation."""
    for name, value in (("fast", fast), ("slow", slow), ("signal", signal)):
        _check_length("macd", value, name=name)
    props = f"_{fast}_{slow}_{signal}"
    return lift(lambda s: _ta.macd(s, fast, slow, signal), source, outputs=3,
                names=(f"MACD{props}", f"MACDs{props}", f"MACDh{props}"))


def mom(source: Series, length: int) -> Series:
    length = _check_length("mom", length)
    return lift(lambda s: _ta.mom(s, length), source, name=f"MOM_{length}")


def roc(source: Series, length: int) -> Series:
    length = _check_length("roc", length)
    return lift(lambda s: _ta.roc(s, length), source, name=f"ROC_{length}")


def cmo(source: Series, length: int) -> Series:
    length = _check_length("cmo", length)
    return lift(lambda s: _ta.cmo(s, length), source, name=f"CMO_{length}")


def tsi(source: Series, short_length: int = 13, long_length: int = 25) -> Series:
    _check_length("tsi", short_length, name="short_length")
    _check_length("tsi", long_length, name="long_length")
    return lift(lambda s: _ta.tsi(s, short_length, long_length), source,
                name=f"TSI_{short_length}_{long_length}")


def cci(source: Series, length: int) -> Series:
    length = _check_length("cci", length)
    return lift(lambda s: _ta.cci(s, length), source, name=f"CCI_{length}")


def stoch(source: Series, high: Series, low: Series, length: int) -> Series:
    length = _check_length("stoch", length)
    return lift(lambda s, h, l_: _ta.stoch(s, h, l_, length), source, high, low,
                name=f"STOCHk_{length}")


def wpr(high: Series, low: Series, close: Series, length: int = 14) -> Series:
    length = _check_length("wpr", length)
    return lift(lambda h, l_, c: _ta.wpr(h, l_, c, length), high, low, close,
                name=f"WILLR_{length}")


def mfi(source: Series, length: int, volume: Optional[Series] = None) -> Series:
    length = _check_length("mfi", length)
    vol = _volume("mfi", source.bar_data, volume)
    return lift(lambda s, v: _ta.mfi(s, length, v), source, vol, name=f"MFI_{length}")


# ===========================================================================
# Volatility
# ===========================================================================

def tr(data: DataLike, handle_na: bool = False) -> Series:
    bars = _bar_data(data)
    return lift(lambda h, l_, c: _ta.tr(handle_na, h, l_, c), *_hlc(bars),
                name="TRUERANGE")


def atr(data: DataLike, length: int) -> Series:
    length = _check_length("atr", length)
    bars = _bar_data(data)
    return lift(lambda h, l_, c: _ta.atr(length, h, l_, c), *_hlc(bars),
                name=f"ATRr_{length}")


def bb(source: Series, length: int, mult: float = 2.0) -> Tuple[Series, ...]:
    """``(basis, upper, lower)``."""
    length = _check_length("bb", length)
    return lift(lambda s: _ta.bb(s, length, mult), source, outputs=3,
                names=(f"BBM_{length}", f"BBU_{length}", f"BBL_{length}"))


def bbw(source: Series, length: int, mult: float = 2.0) -> Series:
    length = _check_length("bbw", length)
    return lift(lambda s: _ta.bbw(s, length, mult), source, name=f"BBB_{length}")


def kc(source: Series, length: int, mult: float = 2.0,
       use_true_range: bool = True) -> Tuple[Series, ...]:
    """``(basis, upper, lower)``; high/low/close come from *source*'s bars."""
    length = _check_length("kc", length)
    h, l_, c = _hlc(source.bar_data)
    return lift(lambda s, hi, lo, cl: _ta.kc(s, length, mult, use_true_range, hi, lo, cl),
                source, h, l_, c, outputs=3,
                names=(f"KCB_{length}", f"KCU_{length}", f"KCL_{length}"))


def kcw(source: Series, length: int = 20, mult: float = 2.0,
        use_true_range: bool = True) -> Series:
    length = _check_length("kcw", length)
    h, l_, c = _hlc(source.bar_data)
    return lift(lambda s, hi, lo, cl: _ta.kcw(s, length, mult, use_true_range, hi, lo, cl),
                source, h, l_, c, name=f"KCW_{length}")


def range(high: Series, low: Operand) -> Series:  # noqa: A001
    return lift(_ta.hl_range, high, _operand(low, high.bar_data), name="HL_RANGE")


# ===========================================================================
# Trend
# ===========================================================================

def supertrend(data: DataLike, factor: float = 3.0, atr_period: int = 10,
               wicks: bool = False) -> Tuple[Series, ...]:
    """``(supertrend, direction)``; direction -1 = up trend, 1 = down trend."""
    atr_period = _check_length("supertrend", atr_period, name="atr_period")
    bars = _bar_data(data)
    props = f"_{atr_period}_{_fmt_num(factor)}"
    return lift(lambda h, l_, c: _ta.supertrend(factor, atr_period, h, l_, c, wicks),
                *_hlc(bars), outputs=2, names=(f"SUPERT{props}", f"SUPERTd{props}"))


def sar(data: DataLike, start: float = 0.02, inc: float = 0.02, maximum: float = 0.2) -> Series:
    bars = _bar_data(data)
    return lift(lambda h, l_, c: _ta.sar(start, inc, maximum, h, l_, c), *_hlc(bars),
                name=f"PSAR_{_fmt_num(start)}_{_fmt_num(inc)}_{_fmt_num(maximum)}")


def dmi(data: DataLike, di_length: int = 14, adx_smoothing: int = 14) -> Tuple[Series, ...]:
    """``(+DI, -DI, ADX)``."""
    _check_length("dmi", di_length, name="di_length")
    _check_length("dmi", adx_smoothing, name="adx_smoothing")
    bars = _bar_data(data)
    return lift(lambda h, l_, c: _ta.dmi(di_length, adx_smoothing, h, l_, c), *_hlc(bars),
                outputs=3, names=(f"DMP_{di_length}", f"DMN_{di_length}", f"ADX_{adx_smoothing}"))


def adx(data: DataLike, di_length: int = 14, adx_smoothing: int = 14) -> Series:
    return dmi(data, di_length, adx_smoothing)[2]


def zigzag(data: DataLike, deviation: float = 5.0, depth: int = 10,
           backstep: int = 3) -> Tuple[Series, ...]:
    """``(value, direction, is_pivot)``.

    With a BarData the pivots come from high/low; with a Series they come
    from that single source.
    """
    _check_length("zigzag", depth, name="depth")
    _check_length("zigzag", backstep, minimum=0, name="backstep")
    names = ("ZIGZAGv", "ZIGZAGd", "ZIGZAGp")

    def _run(*arrays):
        if len(arrays) == 2:
            value, direction, pivot = _ta.zigzag(deviation, depth, backstep,
                                                 high=arrays[0], low=arrays[1])
        else:
            value, direction, pivot = _ta.zigzag(deviation, depth, backstep, source=arrays[0])
        return value, direction, _floats(pivot)

    if isinstance(data, Series):
        return lift(_run, data, outputs=3, names=names)
    high, low, _ = _hlc(data)
    return lift(_run, high, low, outputs=3, names=names)


def ichimoku(data: DataLike, conversion: int = 9, base: int = 26, lagging_span2: int = 52,
             displacement: int = 26) -> Tuple[Series, ...]:
    """``(tenkan, kijun, senkou_a, senkou_b, chikou)``."""
    for name, value in (("conversion", conversion), ("base", base),
                        ("lagging_span2", lagging_span2)):
        _check_length("ichimoku", value, name=name)
    _check_length("ichimoku", displacement, minimum=0, name="displacement")
    bars = _bar_data(data)
    return lift(
        lambda h, l_, c: _ta.ichimoku(conversion, base, lagging_span2, displacement, h, l_, c),
        *_hlc(bars), outputs=5,
        names=(f"ITS_{conversion}", f"IKS_{base}", f"ISA_{conversion}", f"ISB_{base}",
               f"ICS_{base}"),
    )


def pivothigh(source: Series, leftbars: int, rightbars: int) -> Series:
    _check_length("pivothigh", leftbars, minimum=0, name="leftbars")
    _check_length("pivothigh", rightbars, minimum=0, name="rightbars")
    return lift(lambda s: _ta.pivothigh(s, leftbars, rightbars), source)


def pivotlow(source: Series, leftbars: int, rightbars: int) -> Series:
    _check_length("pivotlow", leftbars, minimum=0, name="leftbars")
    _check_length("pivotlow", rightbars, minimum=0, name="rightbars")
    return lift(lambda s: _ta.pivotlow(s, leftbars, rightbars), source)


def pivot_point_levels(data: DataLike, pivot_type: str, anchor: Series,
                       developing: bool = False) -> Tuple[Series, ...]:
    """11 Series in ``LEVEL_NAMES`` order (P, R1, S1, ... R5, S5)."""
    pivot_type = _canonical_type(pivot_type)
    if pivot_type == "Woodie" and developing:
        raise InvalidConfigError("pivot_point_levels(): Woodie type cannot use developing=True")
    bars = _bar_data(data)
    high, low, close = _hlc(bars)
    open_ = Series.from_field(bars, "open")
    return lift(
        lambda a, h, l_, c, o: _ta.pivot_point_levels(pivot_type, a, developing, h, l_, c, o),
        anchor, high, low, close, open_, outputs=11,
        names=tuple(f"PIVOTS_{pivot_type.upper()}_{n}" for n in LEVEL_NAMES),
    )
