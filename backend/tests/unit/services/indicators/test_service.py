"""
Indicator service tests

Bundle assembly, latest-value summary, service contract.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from pricelens.schemas.indicators import (
    IndicatorBundle,
    IndicatorConfig,
    IndicatorRequest,
    RSIZone,
    SeriesData,
    SignalType,
)
from pricelens.schemas.market import PriceHistory
from pricelens.services.base import ValidationError
from pricelens.services.indicators.calculations import bollinger_bands, macd, rsi, sma
from pricelens.services.indicators.service import (
    IndicatorService,
    compute_indicator_bundle,
    get_indicator_service,
    summarize_bundle,
)
from tests.helpers import make_bars, make_closes


def _series(values, offset=0) -> SeriesData:
    return SeriesData(values=values, offset=offset)


def _bundle(**overrides) -> IndicatorBundle:
    empty = _series([])
    fields = {
        "sma20": empty,
        "sma50": empty,
        "rsi": empty,
        "macd": {"line": empty, "signal": empty, "histogram": empty},
        "bollinger": {"upper": empty, "middle": empty, "lower": empty},
    }
    fields.update(overrides)
    return IndicatorBundle(**fields)


class TestComputeIndicatorBundle:
    """compute_indicator_bundle"""

    def test_bundle_matches_calculations(self, closes):
        bundle = compute_indicator_bundle(closes)

        assert bundle.sma20.values == sma(closes, 20).tolist()
        assert bundle.sma50.values == sma(closes, 50).tolist()
        assert bundle.rsi.values == rsi(closes, 14).tolist()
        assert bundle.macd.histogram.values == macd(closes, 12, 26, 9).histogram.tolist()
        assert bundle.bollinger.upper.values == bollinger_bands(closes, 20, 2.0).upper.tolist()

    def test_bundle_offsets(self, closes):
        bundle = compute_indicator_bundle(closes)

        assert bundle.sma20.offset == 19
        assert bundle.sma50.offset == 49
        assert bundle.rsi.offset == 14
        assert bundle.macd.line.offset == 25
        assert bundle.macd.signal.offset == 33
        assert bundle.macd.histogram.offset == 33
        assert bundle.bollinger.middle.offset == 19

    def test_every_series_ends_at_newest_bar(self, closes):
        bundle = compute_indicator_bundle(closes)

        series = [
            bundle.sma20,
            bundle.sma50,
            bundle.rsi,
            bundle.macd.line,
            bundle.macd.signal,
            bundle.macd.histogram,
            bundle.bollinger.upper,
            bundle.bollinger.middle,
            bundle.bollinger.lower,
        ]
        for s in series:
            assert s.offset + len(s.values) == len(closes)

    def test_empty_prices(self):
        bundle = compute_indicator_bundle([])

        assert bundle.sma20.values == []
        assert bundle.sma50.values == []
        assert bundle.rsi.values == []
        assert bundle.macd.line.values == []
        assert bundle.macd.signal.values == []
        assert bundle.macd.histogram.values == []
        assert bundle.bollinger.upper.values == []
        assert bundle.bollinger.middle.values == []
        assert bundle.bollinger.lower.values == []

    def test_short_prices(self):
        """30 bars: no long SMA yet, everything else available"""
        bundle = compute_indicator_bundle(make_closes(30))

        assert bundle.sma50.values == []
        assert len(bundle.sma20.values) == 11
        assert len(bundle.rsi.values) == 16
        assert len(bundle.macd.line.values) == 5
        assert len(bundle.macd.signal.values) == 1

    def test_custom_config(self, closes):
        config = IndicatorConfig(sma_short=5, sma_long=10, rsi_period=7, bollinger_period=10)

        bundle = compute_indicator_bundle(closes, config)

        assert bundle.sma20.values == sma(closes, 5).tolist()
        assert bundle.sma50.values == sma(closes, 10).tolist()
        assert bundle.rsi.offset == 7
        assert len(bundle.bollinger.upper.values) == len(closes) - 9

    def test_parallel_calls_are_identical(self, closes):
        expected = compute_indicator_bundle(closes).model_dump()

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: compute_indicator_bundle(closes).model_dump(), range(16)))

        assert all(result == expected for result in results)


class TestSummarizeBundle:
    """summarize_bundle"""

    def test_latest_values(self):
        bundle = _bundle(
            sma20=_series([1.0, 2.0], 3),
            rsi=_series([40.0, 75.0], 3),
            macd={
                "line": _series([0.5, 0.7], 3),
                "signal": _series([0.4], 4),
                "histogram": _series([0.3], 4),
            },
            bollinger={
                "upper": _series([12.0], 4),
                "middle": _series([10.0], 4),
                "lower": _series([8.0], 4),
            },
        )

        summary = summarize_bundle(bundle, last_close=11.0)

        assert summary.last_close == 11.0
        assert summary.sma20 == 2.0
        assert summary.sma50 is None
        assert summary.rsi == 75.0
        assert summary.rsi_zone == RSIZone.OVERBOUGHT
        assert summary.macd.line == 0.7
        assert summary.macd.histogram == 0.3
        assert summary.macd.bias == SignalType.BUY
        assert summary.bollinger.percent_b == pytest.approx(0.75)

    def test_empty_bundle(self):
        summary = summarize_bundle(_bundle(), last_close=None)

        assert summary.rsi is None
        assert summary.rsi_zone is None
        assert summary.macd.bias is None
        assert summary.bollinger.percent_b is None

    @pytest.mark.parametrize(
        "value, zone",
        [(70.0, RSIZone.OVERBOUGHT), (50.0, RSIZone.NEUTRAL), (30.0, RSIZone.OVERSOLD), (0.0, RSIZone.OVERSOLD)],
    )
    def test_rsi_zone(self, value, zone):
        summary = summarize_bundle(_bundle(rsi=_series([value])), last_close=1.0)

        assert summary.rsi_zone == zone

    @pytest.mark.parametrize(
        "value, bias",
        [(1.5, SignalType.BUY), (-0.2, SignalType.SELL), (0.0, SignalType.NEUTRAL)],
    )
    def test_histogram_bias(self, value, bias):
        macd_series = {"line": _series([]), "signal": _series([]), "histogram": _series([value])}

        summary = summarize_bundle(_bundle(macd=macd_series), last_close=1.0)

        assert summary.macd.bias == bias

    def test_flat_bands_have_no_percent_b(self):
        flat = _series([5.0])
        bundle = _bundle(bollinger={"upper": flat, "middle": flat, "lower": flat})

        assert summarize_bundle(bundle, last_close=5.0).bollinger.percent_b is None


class TestIndicatorService:
    """IndicatorService"""

    @pytest.mark.asyncio
    async def test_execute(self, history):
        service = IndicatorService()

        output = await service.execute(IndicatorRequest(symbol="reliance", history=history))

        assert output.symbol == "RELIANCE"
        assert output.data_points == len(history.bars)
        assert output.config == IndicatorConfig()
        assert output.summary.last_close == history.bars[-1].close
        assert output.summary.sma20 == output.indicators.sma20.values[-1]

    @pytest.mark.asyncio
    async def test_execute_rejects_other_symbol(self, history):
        service = IndicatorService()

        with pytest.raises(ValidationError, match="not TCS"):
            await service.execute(IndicatorRequest(symbol="TCS", history=history))

    @pytest.mark.asyncio
    async def test_request_config_overrides_default(self, history):
        service = IndicatorService()
        config = IndicatorConfig(macd_fast=5, macd_slow=10, macd_signal=3)

        output = await service.execute(
            IndicatorRequest(symbol="RELIANCE", history=history, config=config)
        )

        assert output.config.macd_fast == 5
        assert output.indicators.macd.line.offset == 9

    @pytest.mark.asyncio
    async def test_service_default_config(self, history):
        service = IndicatorService(default_config=IndicatorConfig(sma_short=10))

        output = await service.calculate_for_history(history)

        assert output.indicators.sma20.offset == 9

    @pytest.mark.asyncio
    async def test_empty_history(self):
        service = IndicatorService()
        history = PriceHistory(symbol="INFY", bars=[])

        output = await service.calculate_for_history(history)

        assert output.data_points == 0
        assert output.summary.last_close is None
        assert output.indicators.rsi.values == []

    @pytest.mark.asyncio
    async def test_short_history_logs_warning(self, caplog):
        service = IndicatorService()
        history = PriceHistory(symbol="INFY", bars=make_bars(make_closes(10)))

        with caplog.at_level("WARNING"):
            output = await service.calculate_for_history(history)

        assert "INFY" in caplog.text
        assert output.indicators.sma20.values == []

    @pytest.mark.asyncio
    async def test_health_check(self):
        assert await IndicatorService().health_check() is True

    def test_singleton(self):
        assert get_indicator_service() is get_indicator_service()
