"""Hypothesis strategies for candle data."""

from datetime import datetime, timedelta, timezone

from hypothesis import strategies as st

from candlestore.models import Candles

prices = st.floats(min_value=0.01, max_value=1_000_000.0, allow_nan=False, allow_infinity=False)

symbols = st.text(
    alphabet=st.characters(whitelist_categories=("Lu",)),
    min_size=1,
    max_size=10,
)


@st.composite
def candle_series(draw, min_size: int = 0, max_size: int = 30, with_volume=None):
    """Generate a consistent series of one-minute bars."""
    size = draw(st.integers(min_value=min_size, max_value=max_size))
    if with_volume is None:
        with_volume = draw(st.booleans())

    def column():
        return draw(st.lists(prices, min_size=size, max_size=size))

    start = draw(st.datetimes(min_value=datetime(2000, 1, 1), max_value=datetime(2030, 1, 1)))
    start = start.replace(tzinfo=timezone.utc)

    return Candles(
        id=draw(symbols),
        open=column(),
        high=column(),
        low=column(),
        close=column(),
        volume=column() if with_volume else None,
        time=[start + timedelta(minutes=i) for i in range(size)],
    )
