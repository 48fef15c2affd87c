"""Forward-only iteration over a candle series."""

from typing import TYPE_CHECKING, Optional

from candlestore.models.candle import Candle

if TYPE_CHECKING:
    from candlestore.models.candles import Candles


class CandlesIterator:
    """Yields the bars of a series as Candle rows, oldest first.

    The iterator takes ownership of the series it is given; ``Candles.iter()``
    hands it a private snapshot. Rows are built one at a time as they are
    requested. Once the end is reached the iterator stays exhausted and
    releases the series; create a new one to scan again.
    """

    def __init__(self, candles: "Candles"):
        self._candles: Optional["Candles"] = candles
        self._index = 0

    def __iter__(self) -> "CandlesIterator":
        return self

    def __next__(self) -> Candle:
        if self._candles is None:
            raise StopIteration

        candle = self._candles.get(self._index)
        if candle is None:
            self._candles = None
            raise StopIteration

        self._index += 1
        return candle

    def __length_hint__(self) -> int:
        if self._candles is None:
            return 0
        return len(self._candles) - self._index

    @property
    def position(self) -> int:
        """Number of rows yielded so far."""
        return self._index

    @property
    def exhausted(self) -> bool:
        return self._candles is None
