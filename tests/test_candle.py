"""Tests for the Candle row model."""

import math
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from candlestore.models import Candle


def make_candle(**overrides) -> Candle:
    fields = dict(
        id="BTCUSDT",
        open=100.0,
        high=105.0,
        low=99.0,
        close=104.0,
        volume=None,
        time=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    fields.update(overrides)
    return Candle(**fields)


class TestCandle:
    def test_fields(self):
        candle = make_candle(volume=12.5)

        assert candle.id == "BTCUSDT"
        assert candle.open == 100.0
        assert candle.high == 105.0
        assert candle.low == 99.0
        assert candle.close == 104.0
        assert candle.volume == 12.5
        assert candle.time == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_volume_defaults_to_none(self):
        candle = Candle(
            id="X", open=1, high=1, low=1, close=1, time=datetime(2024, 1, 1, tzinfo=timezone.utc)
        )
        assert candle.volume is None

    def test_is_frozen(self):
        candle = make_candle()
        with pytest.raises(ValidationError):
            candle.close = 1.0

    def test_equal_values_hash_alike(self):
        assert make_candle() == make_candle()
        assert hash(make_candle()) == hash(make_candle())
        assert make_candle() != make_candle(close=1.0)

    def test_price_order_not_enforced(self):
        candle = make_candle(high=1.0, low=2.0)
        assert candle.high < candle.low

    def test_non_finite_prices_accepted(self):
        candle = make_candle(open=float("nan"), high=float("inf"))
        assert math.isnan(candle.open)
        assert math.isinf(candle.high)


class TestCandleTime:
    def test_naive_time_is_taken_as_utc(self):
        candle = make_candle(time=datetime(2024, 1, 1, 9, 30))
        assert candle.time.tzinfo is not None
        assert candle.time.utcoffset() == timedelta(0)
        assert candle.time == datetime(2024, 1, 1, 9, 30, tzinfo=timezone.utc)

    def test_aware_time_is_converted_to_utc(self):
        ist = timezone(timedelta(hours=5, minutes=30))
        candle = make_candle(time=datetime(2024, 1, 1, 15, 0, tzinfo=ist))

        assert candle.time.utcoffset() == timedelta(0)
        assert candle.time.hour == 9
        assert candle.time.minute == 30

    def test_iso_string_time_is_parsed(self):
        candle = make_candle(time="2024-01-01T00:00:00+00:00")
        assert candle.time == datetime(2024, 1, 1, tzinfo=timezone.utc)
