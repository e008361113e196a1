"""
PriceLens Schema Contracts

This module defines all JSON contracts between system components.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from pricelens.schemas.market import (
    PriceBar,
    PriceHistory,
)
from pricelens.schemas.indicators import (
    SignalType,
    RSIZone,
    IndicatorConfig,
    IndicatorRequest,
    TechnicalAnalysisRequest,
    SeriesData,
    MACDSeries,
    BollingerSeries,
    IndicatorBundle,
    MACDData,
    BollingerBandsData,
    IndicatorSummary,
    IndicatorOutput,
)

__all__ = [
    # Market
    "PriceBar",
    "PriceHistory",
    # Indicators
    "SignalType",
    "RSIZone",
    "IndicatorConfig",
    "IndicatorRequest",
    "TechnicalAnalysisRequest",
    "SeriesData",
    "MACDSeries",
    "BollingerSeries",
    "IndicatorBundle",
    "MACDData",
    "BollingerBandsData",
    "IndicatorSummary",
    "IndicatorOutput",
]
