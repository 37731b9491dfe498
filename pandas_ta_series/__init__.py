# -*- coding: utf-8 -*-
from importlib.metadata import PackageNotFoundError, version as _version

try:
    version = _version("pandas_ta_series")
except PackageNotFoundError:
    version = "0.0.0"

from pandas_ta_series.errors import TAError, MissingInputError, InvalidConfigError
from pandas_ta_series.runtime import *
from pandas_ta_series.runtime import __all__ as runtime_all

# Array level: ta.sma(list, 14); Series level: series_ta.sma(series, 14)
from pandas_ta_series import ta
from pandas_ta_series import series_ta
from pandas_ta_series.ta import compute, supported_kinds, INDICATOR_REGISTRY

__all__ = [
    "version",
    "TAError",
    "MissingInputError",
    "InvalidConfigError",
    "ta",
    "series_ta",
    "compute",
    "supported_kinds",
    "INDICATOR_REGISTRY",
]
__all__ += runtime_all
