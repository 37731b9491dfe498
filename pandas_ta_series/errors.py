# -*- coding: utf-8 -*-
"""pandas-ta-series -- exception types.

Unavailable *data* (short windows, out-of-range history, zero ranges) is
never an error: it comes back as NaN.  The classes below cover malformed
*calls*, which fail fast with a message naming the offending parameter.
"""
from __future__ import annotations


class TAError(Exception):
    """Base class for every error raised by pandas-ta-series."""


class MissingInputError(TAError, ValueError):
    """
    Raised when an indicator call lacks a required input series, e.g.
    high/low/close for the ATR family or volume for money flow and VWAP.
    """

    def __init__(self, indicator: str, *missing: str, hint: str = ""):
        self.indicator = indicator
        self.missing = tuple(missing)
        names = ", ".join(self.missing)
        msg = f"{indicator}() requires {names}"
        if hint:
            msg = f"{msg}. {hint}"
        super().__init__(msg)


class InvalidConfigError(TAError, ValueError):
    """
    Raised for parameter combinations that can never produce a result:
    Woodie pivots in developing mode, unknown pivot types, mismatched
    input lengths, non-positive window lengths, unknown indicator kinds.
    """
