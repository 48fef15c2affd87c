"""Exceptions raised by candle store mutations."""


class CandleStoreError(ValueError):
    """Base class for candle store errors."""


class ColumnLengthError(CandleStoreError):
    """Raised when the columns of a series have different lengths."""


class VolumeTrackingError(CandleStoreError):
    """Raised when a bar's volume does not match the series' volume tracking."""


class SeriesIdError(CandleStoreError):
    """Raised when a candle is pushed into a series with a different id."""
