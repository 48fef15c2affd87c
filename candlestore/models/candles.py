"""Columnar candle series.

A series keeps one list per field instead of one object per bar. Rows are
materialized on demand as independent ``Candle`` values, so nothing handed
out by a read ever aliases the series' columns.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, PrivateAttr, field_validator, model_validator

from candlestore.errors import ColumnLengthError, SeriesIdError, VolumeTrackingError
from candlestore.models.candle import Candle, to_utc
from candlestore.models.iterator import CandlesIterator

logger = logging.getLogger(__name__)


class CandleSeries:
    """Read operations shared by owned series and borrowed views.

    Subclasses provide ``id`` and the ``open``, ``high``, ``low``, ``close``,
    ``volume`` and ``time`` columns as indexable sequences, plus the
    ``strict_volume`` flag. ``volume`` is None when the series does not
    track volume.
    """

    def __len__(self) -> int:
        return len(self.time)

    def __iter__(self) -> CandlesIterator:
        return self.iter()

    @property
    def has_volume(self) -> bool:
        return self.volume is not None

    def is_empty(self) -> bool:
        """Check whether the series holds no bars."""
        return len(self.time) == 0

    def get(self, index: int) -> Optional[Candle]:
        """Materialize the bar at ``index``.

        Args:
            index: Row index, counted from the oldest bar.

        Returns:
            A new Candle, or None if ``index`` is out of range.
        """
        if index < 0 or index >= len(self.time):
            return None

        volume = self.volume
        return Candle(
            id=self.id,
            open=self.open[index],
            high=self.high[index],
            low=self.low[index],
            close=self.close[index],
            volume=None if volume is None else volume[index],
            time=self.time[index],
        )

    def last(self) -> Optional[Candle]:
        """Materialize the most recent bar, or None if the series is empty."""
        return self.get(len(self.time) - 1)

    def take_last(self, n: int) -> Optional["Candles"]:
        """Copy the most recent ``n`` bars into a new series.

        Args:
            n: Number of bars to keep. Zero gives an empty series with
                the same id.

        Returns:
            A new Candles, or None if fewer than ``n`` bars are available.

        Raises:
            ValueError: If ``n`` is negative.
        """
        if n < 0:
            raise ValueError(f"n must be non-negative, got {n}")

        length = len(self.time)
        if length < n:
            return None

        start = length - n
        volume = self.volume
        tail = Candles(
            id=self.id,
            open=list(self.open[start:]),
            high=list(self.high[start:]),
            low=list(self.low[start:]),
            close=list(self.close[start:]),
            volume=None if volume is None else list(volume[start:]),
            time=list(self.time[start:]),
        )
        tail._strict_volume = self.strict_volume
        return tail

    def snapshot(self) -> "Candles":
        """Return an independent copy of the whole series."""
        return self.take_last(len(self.time))

    def iter(self) -> CandlesIterator:
        """Iterate over the bars as of now; later pushes are not seen."""
        return CandlesIterator(self.snapshot())


class Candles(CandleSeries, BaseModel):
    """Growable columnar OHLCV series for one instrument.

    Index ``i`` in every column describes the same bar. Bars are expected
    to be pushed in chronological order.

    The column fields are the series' own lists, returned without copying.
    Writing to them directly skips validation; call ``ensure_consistent()``
    afterwards, or hand consumers ``view()`` for read-only access.

    With ``strict_volume`` (the default), pushing a volume into a series
    that does not track volume is an error. Otherwise the volume is dropped
    with a warning. The flag is carried over to ``take_last`` and snapshot
    copies but is not part of the serialized form.
    """

    _strict_volume: bool = PrivateAttr(default=True)

    id: str = Field(default="", description="Series identifier shared by all bars")
    open: list[float] = Field(default_factory=list, description="Opening prices")
    high: list[float] = Field(default_factory=list, description="High prices")
    low: list[float] = Field(default_factory=list, description="Low prices")
    close: list[float] = Field(default_factory=list, description="Closing prices")
    volume: Optional[list[float]] = Field(
        default=None, description="Traded volumes, None when volume is not tracked"
    )
    time: list[datetime] = Field(default_factory=list, description="Bar times (UTC)")

    @field_validator("time")
    @classmethod
    def normalize_time(cls, v: list[datetime]) -> list[datetime]:
        return [to_utc(t) for t in v]

    @model_validator(mode="after")
    def check_column_lengths(self) -> "Candles":
        self.ensure_consistent()
        return self

    @property
    def strict_volume(self) -> bool:
        return self._strict_volume

    @classmethod
    def empty(cls, id: str, track_volume: bool = False, strict_volume: bool = True) -> "Candles":
        """Create an empty series.

        Args:
            id: Series identifier.
            track_volume: Whether bars pushed later carry a volume.
            strict_volume: Reject volume pushed into a series that does not
                track it, instead of dropping it.
        """
        candles = cls(id=id, volume=[] if track_volume else None)
        candles._strict_volume = strict_volume
        return candles

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[Candle],
        id: Optional[str] = None,
        strict_volume: bool = True,
    ) -> "Candles":
        """Build a series from rows.

        The id defaults to the first row's, and volume is tracked if the
        first row has one.
        """
        rows = list(rows)
        if id is None:
            id = rows[0].id if rows else ""
        track_volume = bool(rows) and rows[0].volume is not None

        candles = cls.empty(id, track_volume=track_volume, strict_volume=strict_volume)
        candles.extend(rows)
        return candles

    def ensure_consistent(self) -> None:
        """Check column lengths and normalize column values in place.

        Prices and volumes are converted to float and timestamps to UTC,
        as on construction. Nothing is modified if a check fails.

        Raises:
            ColumnLengthError: If any column length differs from ``time``.
            TypeError: If a timestamp is not a datetime.
            ValueError: If a price or volume is not numeric.
        """
        length = len(self.time)
        columns = {
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
        }
        if self.volume is not None:
            columns["volume"] = self.volume

        mismatched = {name: len(col) for name, col in columns.items() if len(col) != length}
        if mismatched:
            raise ColumnLengthError(
                f"Series '{self.id}' has {length} timestamps but column lengths {mismatched}"
            )

        values = {name: [float(v) for v in col] for name, col in columns.items()}
        for t in self.time:
            if not isinstance(t, datetime):
                raise TypeError(f"Series '{self.id}' has a non-datetime timestamp: {t!r}")
        times = [to_utc(t) for t in self.time]

        for name, col in columns.items():
            col[:] = values[name]
        self.time[:] = times

    def push(
        self,
        open: float,
        high: float,
        low: float,
        close: float,
        volume: Optional[float],
        time: datetime,
    ) -> None:
        """Append one bar to every column.

        Everything is checked before the first column is touched, so a
        rejected bar leaves the series unchanged.

        Raises:
            VolumeTrackingError: If ``volume`` is None on a series that
                tracks volume, or given to one that does not while the
                series is ``strict_volume``.
            TypeError: If ``time`` is not a datetime.
        """
        if not isinstance(time, datetime):
            raise TypeError(f"time must be a datetime, got {type(time).__name__}")

        prices = (float(open), float(high), float(low), float(close))
        time = to_utc(time)

        if self.volume is not None:
            if volume is None:
                raise VolumeTrackingError(
                    f"Series '{self.id}' tracks volume but the bar at {time} has none"
                )
            volume = float(volume)
        elif volume is not None:
            if self._strict_volume:
                raise VolumeTrackingError(
                    f"Series '{self.id}' does not track volume, got volume {volume}"
                )
            logger.warning(
                "Dropping volume %s for series '%s' which does not track volume",
                volume,
                self.id,
            )

        self.open.append(prices[0])
        self.high.append(prices[1])
        self.low.append(prices[2])
        self.close.append(prices[3])
        if self.volume is not None:
            self.volume.append(volume)
        self.time.append(time)

    def push_candle(self, candle: Candle) -> None:
        """Append a row to the series.

        Raises:
            SeriesIdError: If the candle belongs to another series.
        """
        if candle.id != self.id:
            raise SeriesIdError(f"Cannot push candle for '{candle.id}' into series '{self.id}'")
        self.push(candle.open, candle.high, candle.low, candle.close, candle.volume, candle.time)

    def extend(self, rows: Iterable[Candle]) -> None:
        for candle in rows:
            self.push_candle(candle)

    def view(self) -> "CandlesView":
        """Borrow a read-only view of this series."""
        return CandlesView(self)


class ColumnView(Sequence):
    """Read-only window onto one column. Reads go straight to the column."""

    __slots__ = ("_values",)

    def __init__(self, values: list):
        self._values = values

    def __getitem__(self, index):
        return self._values[index]

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self):
        return iter(self._values)

    def __eq__(self, other) -> bool:
        if isinstance(other, ColumnView):
            other = other._values
        return self._values == other

    def __repr__(self) -> str:
        return f"ColumnView({self._values!r})"


class CandlesView(CandleSeries):
    """Borrowed, read-only access to a Candles series.

    The view does not copy: it reflects pushes made to the series after
    it was created. Iterating it still works on a snapshot.
    """

    def __init__(self, candles: Candles):
        self._candles = candles

    @property
    def id(self) -> str:
        return self._candles.id

    @property
    def open(self) -> ColumnView:
        return ColumnView(self._candles.open)

    @property
    def high(self) -> ColumnView:
        return ColumnView(self._candles.high)

    @property
    def low(self) -> ColumnView:
        return ColumnView(self._candles.low)

    @property
    def close(self) -> ColumnView:
        return ColumnView(self._candles.close)

    @property
    def volume(self) -> Optional[ColumnView]:
        if self._candles.volume is None:
            return None
        return ColumnView(self._candles.volume)

    @property
    def time(self) -> ColumnView:
        return ColumnView(self._candles.time)

    @property
    def strict_volume(self) -> bool:
        return self._candles.strict_volume

    def __repr__(self) -> str:
        return f"CandlesView(id={self.id!r}, len={len(self)})"
