"""
Indicator Engine Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod
from typing import Optional

from pricelens.services.base import BaseService
from pricelens.schemas.market import PriceHistory
from pricelens.schemas.indicators import IndicatorConfig, IndicatorOutput, IndicatorRequest


class IndicatorServiceInterface(BaseService[IndicatorRequest, IndicatorOutput]):
    """
    Indicator Engine Service Contract.

    INPUT: IndicatorRequest
        - symbol: Symbol the caller asked for
        - history: Chronological price bars for that symbol
        - config: Indicator periods (optional, defaults from settings)

    OUTPUT: IndicatorOutput
        - indicators: Every indicator series with its bar offset
        - summary: Newest value of every series
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    async def execute(self, input_data: IndicatorRequest) -> IndicatorOutput:
        """Calculate indicators for the requested history."""
        pass

    @abstractmethod
    async def calculate_for_history(
        self,
        history: PriceHistory,
        config: Optional[IndicatorConfig] = None,
    ) -> IndicatorOutput:
        """
        Calculate indicators for a single symbol.

        Args:
            history: Chronological bars for the symbol
            config: Indicator periods; service defaults when omitted

        Returns:
            Complete indicator analysis
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        pass
