"""
Indicator API Endpoints

Endpoints for technical indicator calculations. Price bars arrive in the
request body; fetching them is the caller's concern.
"""

import logging

from fastapi import APIRouter, HTTPException, Path

from pricelens.core.config import settings
from pricelens.schemas.market import PriceHistory
from pricelens.schemas.indicators import (
    IndicatorConfig,
    IndicatorOutput,
    IndicatorRequest,
    IndicatorSummary,
    TechnicalAnalysisRequest,
)
from pricelens.services.base import ServiceError
from pricelens.services.indicators import get_indicator_service

logger = logging.getLogger(__name__)

router = APIRouter()


async def _run_analysis(symbol: str, body: TechnicalAnalysisRequest) -> IndicatorOutput:
    """Validate the bars and run the indicator service."""
    symbol = symbol.upper().strip()

    if not body.bars:
        raise HTTPException(
            status_code=400,
            detail="No historical data supplied for technical analysis",
        )
    if len(body.bars) > settings.max_bars_per_request:
        raise HTTPException(
            status_code=400,
            detail=f"Too many bars: {len(body.bars)} (limit {settings.max_bars_per_request})",
        )

    try:
        history = PriceHistory(symbol=symbol, bars=body.bars)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    logger.info(f"Calculating technical indicators for {symbol}")

    indicator_service = get_indicator_service()
    try:
        return await indicator_service.execute(
            IndicatorRequest(symbol=symbol, history=history, config=body.config)
        )
    except (ServiceError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Indicator calculation failed for {symbol}: {e}")
        raise HTTPException(status_code=500, detail=f"Indicator calculation failed: {e}")


@router.get("/defaults", response_model=IndicatorConfig)
async def get_default_config():
    """Default indicator periods used when a request carries no config."""
    return get_indicator_service().default_config


@router.post("/{symbol}/technical", response_model=IndicatorOutput)
async def get_technical_indicators(
    body: TechnicalAnalysisRequest,
    symbol: str = Path(..., min_length=1, max_length=32),
):
    """
    Get every indicator series for a symbol.

    Returns:
        - SMA (short and long period)
        - RSI
        - MACD (line, signal, histogram)
        - Bollinger Bands (upper, middle, lower)
        - Latest value of each series

    Each series carries its offset: values[i] belongs to bars[offset + i].
    """
    return await _run_analysis(symbol, body)


@router.post("/{symbol}/summary", response_model=IndicatorSummary)
async def get_indicator_summary(
    body: TechnicalAnalysisRequest,
    symbol: str = Path(..., min_length=1, max_length=32),
):
    """
    Get a quick summary of key indicators (newest value of each series).
    """
    output = await _run_analysis(symbol, body)
    return output.summary
