"""
pytest shared fixtures

Price series and bar histories used across the indicator tests.
"""

import pytest

from pricelens.schemas.market import PriceHistory
from tests.helpers import SCENARIO_PRICES, make_bars, make_closes


@pytest.fixture
def scenario_prices() -> list[float]:
    return list(SCENARIO_PRICES)


@pytest.fixture
def closes() -> list[float]:
    return make_closes()


@pytest.fixture
def history(closes) -> PriceHistory:
    return PriceHistory(symbol="RELIANCE", bars=make_bars(closes))
