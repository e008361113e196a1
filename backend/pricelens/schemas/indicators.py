"""
CONTRACT 2: Indicator Engine

Input: IndicatorRequest (PriceHistory + IndicatorConfig)
Output: IndicatorOutput (IndicatorBundle + latest-value summary)

All series are serialized with their offset: values[i] belongs to bar
offset + i of the history they were computed from.
"""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, Field, model_validator

from pricelens.schemas.market import PriceBar, PriceHistory

if TYPE_CHECKING:
    from pricelens.core.config import Settings
    from pricelens.services.indicators.series import IndicatorSeries


# =============================================================================
# ENUMS
# =============================================================================


class SignalType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    NEUTRAL = "NEUTRAL"


class RSIZone(str, Enum):
    OVERBOUGHT = "OVERBOUGHT"
    OVERSOLD = "OVERSOLD"
    NEUTRAL = "NEUTRAL"


# =============================================================================
# CONFIGURATION
# =============================================================================


class IndicatorConfig(BaseModel):
    """
    Indicator periods.

    Periods are bar counts. MACD needs a fast EMA strictly shorter than the
    slow one, and the short SMA may not exceed the long SMA.
    """

    sma_short: int = Field(default=20, ge=1)
    sma_long: int = Field(default=50, ge=1)
    rsi_period: int = Field(default=14, ge=1)
    macd_fast: int = Field(default=12, ge=1)
    macd_slow: int = Field(default=26, ge=1)
    macd_signal: int = Field(default=9, ge=1)
    bollinger_period: int = Field(default=20, ge=1)
    bollinger_std_dev: float = Field(default=2.0, ge=0)

    @model_validator(mode="after")
    def check_period_order(self) -> "IndicatorConfig":
        if self.macd_fast >= self.macd_slow:
            raise ValueError(
                f"macd_fast ({self.macd_fast}) must be smaller than macd_slow ({self.macd_slow})"
            )
        if self.sma_short > self.sma_long:
            raise ValueError(
                f"sma_short ({self.sma_short}) must not exceed sma_long ({self.sma_long})"
            )
        return self

    @classmethod
    def from_settings(cls, settings: "Settings") -> "IndicatorConfig":
        """Default periods configured through the environment."""
        return cls(
            sma_short=settings.indicator_sma_short,
            sma_long=settings.indicator_sma_long,
            rsi_period=settings.indicator_rsi_period,
            macd_fast=settings.indicator_macd_fast,
            macd_slow=settings.indicator_macd_slow,
            macd_signal=settings.indicator_macd_signal,
            bollinger_period=settings.indicator_bollinger_period,
            bollinger_std_dev=settings.indicator_bollinger_std_dev,
        )

    def max_lookback(self) -> int:
        """Bars needed before every configured indicator has a value."""
        return max(
            self.sma_long,
            self.rsi_period + 1,
            self.macd_slow + self.macd_signal - 1,
            self.bollinger_period,
        )


# =============================================================================
# INPUT
# =============================================================================


class IndicatorRequest(BaseModel):
    """
    Request for indicator calculation.
    Sent by: API
    Received by: Indicator Service
    """

    symbol: str = Field(..., description="Which symbol the history belongs to")
    history: PriceHistory
    config: Optional[IndicatorConfig] = None


class TechnicalAnalysisRequest(BaseModel):
    """HTTP body for the technical analysis endpoints."""

    bars: list[PriceBar]
    config: Optional[IndicatorConfig] = None


# =============================================================================
# OUTPUT: Series
# =============================================================================


class SeriesData(BaseModel):
    """Serialized IndicatorSeries."""

    values: list[float]
    offset: int = Field(..., ge=0, description="Bar index of values[0]")

    @classmethod
    def from_series(cls, series: "IndicatorSeries") -> "SeriesData":
        return cls(values=series.tolist(), offset=series.offset)


class MACDSeries(BaseModel):
    line: SeriesData
    signal: SeriesData
    histogram: SeriesData


class BollingerSeries(BaseModel):
    upper: SeriesData
    middle: SeriesData
    lower: SeriesData


class IndicatorBundle(BaseModel):
    """Every indicator series computed for one price history."""

    sma20: SeriesData = Field(..., description="SMA over the short period")
    sma50: SeriesData = Field(..., description="SMA over the long period")
    rsi: SeriesData
    macd: MACDSeries
    bollinger: BollingerSeries


# =============================================================================
# OUTPUT: Latest values
# =============================================================================


class MACDData(BaseModel):
    """Latest MACD values."""

    line: Optional[float] = None
    signal: Optional[float] = None
    histogram: Optional[float] = None
    bias: Optional[SignalType] = None


class BollingerBandsData(BaseModel):
    """Latest Bollinger Bands values."""

    upper: Optional[float] = None
    middle: Optional[float] = None
    lower: Optional[float] = None
    percent_b: Optional[float] = Field(
        default=None, description="Latest close position within the bands (0-1)"
    )


class IndicatorSummary(BaseModel):
    """Newest value of every series; None where the series is empty."""

    last_close: Optional[float] = None
    sma20: Optional[float] = None
    sma50: Optional[float] = None
    rsi: Optional[float] = Field(default=None, ge=0, le=100)
    rsi_zone: Optional[RSIZone] = None
    macd: MACDData
    bollinger: BollingerBandsData


# =============================================================================
# OUTPUT: IndicatorOutput (Complete Response)
# =============================================================================


class IndicatorOutput(BaseModel):
    """
    Complete indicator analysis for a symbol.
    Returned by: Indicator Service
    Consumed by: reporting and charting clients
    """

    symbol: str
    data_points: int = Field(..., ge=0)
    config: IndicatorConfig
    indicators: IndicatorBundle
    summary: IndicatorSummary
    last_updated: datetime

    class Config:
        json_schema_extra = {
            "example": {
                "symbol": "RELIANCE",
                "data_points": 60,
                "config": {"sma_short": 20, "sma_long": 50, "rsi_period": 14},
                "indicators": {
                    "sma20": {"values": [2431.2, 2433.9], "offset": 19},
                    "rsi": {"values": [61.8, 63.4], "offset": 14},
                },
                "summary": {
                    "last_close": 2450.5,
                    "rsi": 63.4,
                    "rsi_zone": "NEUTRAL",
                    "macd": {"histogram": 1.9, "bias": "BUY"},
                },
                "last_updated": "2024-02-04T10:30:00+05:30",
            }
        }
