"""
Port (interface) for quote/history providers.
Infrastructure adapters (e.g. AlphaVantageQuoteProvider) must implement this interface.
"""

from abc import ABC, abstractmethod

from finpeek.domain.entities.quote import Quote, Series, Timeframe


class IQuoteProvider(ABC):
    @abstractmethod
    async def fetch_quote(self, symbol: str) -> Quote:
        """Fetch the current quote for *symbol*.

        Raises:
            TransportError, ParseError, EmptyResult (all FetchFailure).
        """
        ...

    @abstractmethod
    async def fetch_series(self, symbol: str, timeframe: Timeframe) -> Series:
        """Fetch up to ``timeframe.point_count`` closes, oldest first.

        Raises:
            TransportError, ParseError, EmptyResult (all FetchFailure).
        """
        ...

    async def aclose(self) -> None:
        """Release network resources held by the adapter."""
        return None
