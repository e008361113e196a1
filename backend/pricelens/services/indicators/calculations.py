"""
Technical Indicator Calculations

Pure NumPy implementations of the chart indicators.
All math is deterministic: the same closes and periods give bit-identical
results on every call, from any thread.

Every result is an IndicatorSeries anchored to the END of the input. Short
inputs never raise; they produce shorter or empty series.
"""

from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np

from pricelens.services.indicators.series import IndicatorSeries, align

PriceInput = Union[Sequence[float], np.ndarray]


def as_price_series(prices: PriceInput) -> np.ndarray:
    """Convert closing prices (oldest first) to a float array."""
    data = np.asarray(prices, dtype=float)
    if data.ndim != 1:
        raise ValueError(f"Price series must be one-dimensional, got shape {data.shape}")
    return data


def _validate_period(period: int, name: str = "period") -> None:
    if period < 1:
        raise ValueError(f"{name} must be >= 1, got {period}")


@dataclass(frozen=True, eq=False)
class MACDResult:
    """MACD line, signal line and histogram, each tail-anchored to the closes."""

    line: IndicatorSeries
    signal: IndicatorSeries
    histogram: IndicatorSeries


@dataclass(frozen=True, eq=False)
class BollingerBandsResult:
    """Bollinger bands, index-aligned to each other and to SMA(period)."""

    upper: IndicatorSeries
    middle: IndicatorSeries
    lower: IndicatorSeries


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(data: PriceInput, period: int) -> IndicatorSeries:
    """
    Simple Moving Average.

    One value per complete window: len == max(N - period + 1, 0).
    Fewer than `period` points gives an empty series.
    """
    _validate_period(period)
    prices = as_price_series(data)

    if len(prices) < period:
        return IndicatorSeries.empty(len(prices))

    result = np.empty(len(prices) - period + 1)
    for i in range(len(result)):
        result[i] = np.mean(prices[i : i + period])

    return IndicatorSeries(result, period - 1)


def ema(data: PriceInput, period: int) -> IndicatorSeries:
    """
    Exponential Moving Average.

    Seeded with the mean of the first min(period, N) prices, then
    value = price * k + previous * (1 - k) with k = 2 / (period + 1)
    for every price after the first `period`.

    Unlike sma(), a short input still yields the seed: EMA of fewer than
    `period` prices is a single value, the mean of what is available.
    """
    _validate_period(period)
    prices = as_price_series(data)

    if len(prices) == 0:
        return IndicatorSeries.empty(0)

    multiplier = 2 / (period + 1)
    seed_length = min(period, len(prices))

    result = np.empty(1 + max(len(prices) - period, 0))
    result[0] = np.mean(prices[:seed_length])

    for k, i in enumerate(range(period, len(prices)), start=1):
        result[k] = (prices[i] * multiplier) + (result[k - 1] * (1 - multiplier))

    # The seed stands for the last price it averaged
    return IndicatorSeries(result, seed_length - 1)


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def rsi(closes: PriceInput, period: int = 14) -> IndicatorSeries:
    """
    Relative Strength Index.

    Averages gains and losses over each window of `period` price changes
    with a plain mean (no Wilder smoothing). A window without losses is
    exactly 100. Values are always within [0, 100].
    """
    _validate_period(period)
    prices = as_price_series(closes)

    if len(prices) <= period:
        return IndicatorSeries.empty(len(prices))

    deltas = np.diff(prices)
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    result = np.empty(len(deltas) - period + 1)
    for i in range(len(result)):
        avg_gain = np.mean(gains[i : i + period])
        avg_loss = np.mean(losses[i : i + period])

        if avg_loss == 0:
            result[i] = 100.0
        else:
            rs = avg_gain / avg_loss
            result[i] = 100 - (100 / (1 + rs))

    # First window covers the changes into closes[1..period]
    return IndicatorSeries(result, period)


def macd(
    closes: PriceInput,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> MACDResult:
    """
    MACD (Moving Average Convergence Divergence).

    line      = EMA(fast) - EMA(slow), on the range where both exist
    signal    = EMA(line, signal_period)
    histogram = line - signal, on the range where the signal exists

    Every subtraction pairs the newest values of its operands.
    """
    _validate_period(fast_period, "fast_period")
    _validate_period(slow_period, "slow_period")
    _validate_period(signal_period, "signal_period")
    prices = as_price_series(closes)

    fast_ema = ema(prices, fast_period)
    slow_ema = ema(prices, slow_period)

    fast_values, slow_values = align(fast_ema, slow_ema)
    macd_line = IndicatorSeries(
        fast_values - slow_values, len(prices) - len(fast_values)
    )

    # The signal is an EMA over the MACD line, re-anchored onto price indices
    signal_line = ema(macd_line.values, signal_period).shift(macd_line.offset)

    line_values, signal_values = align(macd_line, signal_line)
    histogram = IndicatorSeries(line_values - signal_values, signal_line.offset)

    return MACDResult(line=macd_line, signal=signal_line, histogram=histogram)


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def bollinger_bands(
    closes: PriceInput, period: int = 20, std_dev: float = 2.0
) -> BollingerBandsResult:
    """
    Bollinger Bands.

    middle = SMA(period); upper/lower = middle +/- std_dev * sigma, where
    sigma is the population standard deviation of the same window.
    """
    _validate_period(period)
    if std_dev < 0:
        raise ValueError(f"std_dev must be >= 0, got {std_dev}")
    prices = as_price_series(closes)

    middle = sma(prices, period)
    if middle.is_empty():
        empty = IndicatorSeries.empty(len(prices))
        return BollingerBandsResult(upper=empty, middle=empty, lower=empty)

    sigma = np.empty(len(middle))
    for i in range(len(sigma)):
        window = prices[i : i + period]
        # A constant window has zero width regardless of mean rounding
        if window.max() == window.min():
            sigma[i] = 0.0
        else:
            sigma[i] = np.std(window)

    upper = middle.values + (std_dev * sigma)
    lower = middle.values - (std_dev * sigma)

    return BollingerBandsResult(
        upper=IndicatorSeries(upper, middle.offset),
        middle=middle,
        lower=IndicatorSeries(lower, middle.offset),
    )
