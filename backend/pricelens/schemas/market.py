"""
CONTRACT 1: Historical Price Data

Input to the Indicator Engine, supplied by the historical-data collaborator.

Bars are ordered oldest to newest with strictly ascending timestamps.
Spacing is irrelevant (weekends and holidays are simply absent): the engine
works on bar index, not on time.
"""

from datetime import datetime

import numpy as np
from pydantic import BaseModel, Field, field_validator


class PriceBar(BaseModel):
    """Single candlestick data point."""

    timestamp: datetime
    open: float = Field(..., gt=0)
    high: float = Field(..., gt=0)
    low: float = Field(..., gt=0)
    close: float = Field(..., gt=0)
    volume: float = Field(default=0, ge=0)


class PriceHistory(BaseModel):
    """Chronological bars for one symbol."""

    symbol: str = Field(..., min_length=1)
    bars: list[PriceBar]

    @field_validator("symbol")
    @classmethod
    def normalize_symbol(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("bars")
    @classmethod
    def check_ascending(cls, bars: list[PriceBar]) -> list[PriceBar]:
        for previous, current in zip(bars, bars[1:]):
            try:
                out_of_order = current.timestamp <= previous.timestamp
            except TypeError:
                raise ValueError("Bar timestamps mix timezone-aware and naive values")
            if out_of_order:
                raise ValueError(
                    f"Bar timestamps must be strictly ascending: "
                    f"{current.timestamp.isoformat()} follows {previous.timestamp.isoformat()}"
                )
        return bars

    def closes(self) -> np.ndarray:
        """Price series used by every indicator (close of each bar)."""
        return np.array([bar.close for bar in self.bars], dtype=float)

    class Config:
        json_schema_extra = {
            "example": {
                "symbol": "RELIANCE",
                "bars": [
                    {
                        "timestamp": "2024-02-01T00:00:00+05:30",
                        "open": 2440.0,
                        "high": 2462.5,
                        "low": 2431.0,
                        "close": 2450.5,
                        "volume": 5400000,
                    }
                ],
            }
        }
