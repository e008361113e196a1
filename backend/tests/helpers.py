"""
Test data builders for price series and bar histories.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import numpy as np

from pricelens.schemas.market import PriceBar


SCENARIO_PRICES = [100.0, 102.0, 101.0, 105.0, 110.0, 108.0, 107.0, 111.0, 115.0, 112.0]


def make_closes(num_points: int = 80) -> list[float]:
    """Trending series with oscillation (deterministic)."""
    return [100.0 + i * 0.5 + float(np.sin(i / 3)) * 4 for i in range(num_points)]


def make_bars(closes: list[float], start: Optional[datetime] = None) -> list[PriceBar]:
    """Daily bars on weekdays only, one per close."""
    day = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
    bars = []
    for close in closes:
        while day.weekday() >= 5:
            day += timedelta(days=1)
        bars.append(
            PriceBar(
                timestamp=day,
                open=close - 0.2,
                high=close + 1.0,
                low=close - 1.0,
                close=close,
                volume=1_000_000,
            )
        )
        day += timedelta(days=1)
    return bars
