"""Columnar OHLCV candle series."""

from candlestore.errors import (
    CandleStoreError,
    ColumnLengthError,
    SeriesIdError,
    VolumeTrackingError,
)
from candlestore.models import (
    Candle,
    CandleSeries,
    Candles,
    CandlesIterator,
    CandlesView,
    ColumnView,
)

__all__ = [
    "Candle",
    "CandleSeries",
    "CandleStoreError",
    "Candles",
    "CandlesIterator",
    "CandlesView",
    "ColumnLengthError",
    "ColumnView",
    "SeriesIdError",
    "VolumeTrackingError",
]
