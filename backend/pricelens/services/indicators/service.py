"""
Indicator Engine Service Implementation

Turns a price history into the indicator bundle served to charts and reports.
Pure Python/NumPy calculations; the service holds no per-request state.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from pricelens.core.config import get_settings
from pricelens.schemas.market import PriceHistory
from pricelens.schemas.indicators import (
    BollingerBandsData,
    BollingerSeries,
    IndicatorBundle,
    IndicatorConfig,
    IndicatorOutput,
    IndicatorRequest,
    IndicatorSummary,
    MACDData,
    MACDSeries,
    RSIZone,
    SeriesData,
    SignalType,
)
from pricelens.services.base import ValidationError
from pricelens.services.indicators.interface import IndicatorServiceInterface
from pricelens.services.indicators.calculations import (
    PriceInput,
    as_price_series,
    bollinger_bands,
    macd,
    rsi,
    sma,
)

logger = logging.getLogger(__name__)

RSI_OVERBOUGHT = 70.0
RSI_OVERSOLD = 30.0


def compute_indicator_bundle(
    prices: PriceInput, config: Optional[IndicatorConfig] = None
) -> IndicatorBundle:
    """
    Compute every indicator for one price series.

    An empty or short series is not an error: the affected indicators come
    back as empty series.
    """
    config = config or IndicatorConfig()
    closes = as_price_series(prices)

    sma_short = sma(closes, config.sma_short)
    sma_long = sma(closes, config.sma_long)
    rsi_series = rsi(closes, config.rsi_period)
    macd_result = macd(closes, config.macd_fast, config.macd_slow, config.macd_signal)
    bands = bollinger_bands(closes, config.bollinger_period, config.bollinger_std_dev)

    return IndicatorBundle(
        sma20=SeriesData.from_series(sma_short),
        sma50=SeriesData.from_series(sma_long),
        rsi=SeriesData.from_series(rsi_series),
        macd=MACDSeries(
            line=SeriesData.from_series(macd_result.line),
            signal=SeriesData.from_series(macd_result.signal),
            histogram=SeriesData.from_series(macd_result.histogram),
        ),
        bollinger=BollingerSeries(
            upper=SeriesData.from_series(bands.upper),
            middle=SeriesData.from_series(bands.middle),
            lower=SeriesData.from_series(bands.lower),
        ),
    )


def _latest(series: SeriesData) -> Optional[float]:
    return series.values[-1] if series.values else None


def _rsi_zone(value: Optional[float]) -> Optional[RSIZone]:
    if value is None:
        return None
    if value >= RSI_OVERBOUGHT:
        return RSIZone.OVERBOUGHT
    if value <= RSI_OVERSOLD:
        return RSIZone.OVERSOLD
    return RSIZone.NEUTRAL


def _histogram_bias(value: Optional[float]) -> Optional[SignalType]:
    if value is None:
        return None
    if value > 0:
        return SignalType.BUY
    if value < 0:
        return SignalType.SELL
    return SignalType.NEUTRAL


def summarize_bundle(
    bundle: IndicatorBundle, last_close: Optional[float]
) -> IndicatorSummary:
    """
    Latest value of every series in the bundle.

    Every series ends at the newest bar, so the last values all describe the
    same bar as last_close.
    """
    rsi_value = _latest(bundle.rsi)
    histogram = _latest(bundle.macd.histogram)

    upper = _latest(bundle.bollinger.upper)
    lower = _latest(bundle.bollinger.lower)
    percent_b = None
    if last_close is not None and upper is not None and lower is not None and upper != lower:
        percent_b = (last_close - lower) / (upper - lower)

    return IndicatorSummary(
        last_close=last_close,
        sma20=_latest(bundle.sma20),
        sma50=_latest(bundle.sma50),
        rsi=rsi_value,
        rsi_zone=_rsi_zone(rsi_value),
        macd=MACDData(
            line=_latest(bundle.macd.line),
            signal=_latest(bundle.macd.signal),
            histogram=histogram,
            bias=_histogram_bias(histogram),
        ),
        bollinger=BollingerBandsData(
            upper=upper,
            middle=_latest(bundle.bollinger.middle),
            lower=lower,
            percent_b=percent_b,
        ),
    )


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Engine Service.

    Calculates technical indicators for chart and report rendering.
    All calculations are deterministic and reproducible.
    """

    def __init__(self, default_config: Optional[IndicatorConfig] = None):
        self._default_config = default_config or IndicatorConfig.from_settings(get_settings())

    @property
    def name(self) -> str:
        return "IndicatorService"

    @property
    def default_config(self) -> IndicatorConfig:
        return self._default_config

    async def validate_input(self, input_data: IndicatorRequest) -> IndicatorRequest:
        """Reject a history that belongs to another symbol."""
        requested = input_data.symbol.strip().upper()
        if requested != input_data.history.symbol:
            raise ValidationError(
                self.name,
                f"History is for {input_data.history.symbol}, not {requested}",
                {"requested": requested, "history": input_data.history.symbol},
            )
        return input_data

    async def execute(self, input_data: IndicatorRequest) -> IndicatorOutput:
        """Calculate indicators for the requested history."""
        request = await self.validate_input(input_data)
        return await self.calculate_for_history(request.history, request.config)

    async def calculate_for_history(
        self,
        history: PriceHistory,
        config: Optional[IndicatorConfig] = None,
    ) -> IndicatorOutput:
        """Calculate all indicators for a single symbol."""
        config = config or self._default_config
        closes = history.closes()

        if len(closes) < config.max_lookback():
            logger.warning(
                f"{history.symbol}: {len(closes)} bars, {config.max_lookback()} needed "
                f"for every indicator; some series will be short or empty"
            )

        bundle = compute_indicator_bundle(closes, config)
        last_close = float(closes[-1]) if len(closes) else None

        logger.debug(f"Computed indicators for {history.symbol} over {len(closes)} bars")

        return IndicatorOutput(
            symbol=history.symbol,
            data_points=len(closes),
            config=config,
            indicators=bundle,
            summary=summarize_bundle(bundle, last_close),
            last_updated=datetime.now(timezone.utc),
        )

    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance
