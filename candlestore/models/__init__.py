"""Data models for candlestore."""

from candlestore.models.candle import Candle
from candlestore.models.candles import CandleSeries, Candles, CandlesView, ColumnView
from candlestore.models.iterator import CandlesIterator

__all__ = [
    "Candle",
    "CandleSeries",
    "Candles",
    "CandlesIterator",
    "CandlesView",
    "ColumnView",
]
