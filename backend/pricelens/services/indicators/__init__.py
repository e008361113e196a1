"""
Indicator Engine Service

CONTRACT:
    Input:  IndicatorRequest (PriceHistory + IndicatorConfig)
    Output: IndicatorOutput

RESPONSIBILITIES:
    - Moving averages (SMA, EMA)
    - Momentum (RSI, MACD)
    - Volatility (Bollinger Bands)
    - Keep every series aligned to the newest bar

PURE PYTHON - Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from pricelens.services.indicators.series import IndicatorSeries, align
from pricelens.services.indicators.calculations import (
    BollingerBandsResult,
    MACDResult,
    bollinger_bands,
    ema,
    macd,
    rsi,
    sma,
)
from pricelens.services.indicators.interface import IndicatorServiceInterface
from pricelens.services.indicators.service import (
    IndicatorService,
    compute_indicator_bundle,
    get_indicator_service,
    summarize_bundle,
)

__all__ = [
    "IndicatorSeries",
    "align",
    "sma",
    "ema",
    "rsi",
    "macd",
    "bollinger_bands",
    "MACDResult",
    "BollingerBandsResult",
    "IndicatorServiceInterface",
    "IndicatorService",
    "compute_indicator_bundle",
    "summarize_bundle",
    "get_indicator_service",
]
