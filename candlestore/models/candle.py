"""Candle (OHLCV) row model."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator


def to_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Candle(BaseModel):
    """A single price bar.

    No ordering is enforced between the prices, and non-finite values
    are accepted as-is.
    """

    id: str = Field(..., description="Series identifier")
    open: float = Field(..., description="Opening price")
    high: float = Field(..., description="High price")
    low: float = Field(..., description="Low price")
    close: float = Field(..., description="Closing price")
    volume: Optional[float] = Field(default=None, description="Traded volume, if tracked")
    time: datetime = Field(..., description="Bar time (UTC)")

    model_config = {"frozen": True}

    @field_validator("time")
    @classmethod
    def normalize_time(cls, v: datetime) -> datetime:
        return to_utc(v)
