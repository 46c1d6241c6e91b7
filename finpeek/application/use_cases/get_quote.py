"""
Use-case: fetch the current quote for a symbol, falling back to synthetic data.
Depends only on Domain ports and entities; no infrastructure imports.
"""

import logging
from typing import Callable

from finpeek.domain.entities.quote import Quote
from finpeek.domain.errors import FetchFailure
from finpeek.domain.ports.quote_provider_port import IQuoteProvider

logger = logging.getLogger(__name__)


class GetQuoteUseCase:
    def __init__(self, provider: IQuoteProvider, fallback: Callable[[str], Quote]) -> None:
        """
        Args:
            provider: IQuoteProvider implementation (e.g. AlphaVantageQuoteProvider).
            fallback: Builds a synthetic Quote for a symbol when the provider fails.
        """
        self._provider = provider
        self._fallback = fallback

    async def execute(self, symbol: str) -> Quote:
        """Return a live quote for *symbol*, or the fallback quote on any FetchFailure.

        Raises:
            ValueError: if *symbol* is blank.
        """
        if not symbol or not symbol.strip():
            raise ValueError("symbol must be a non-empty string")
        symbol = symbol.upper().strip()
        try:
            return await self._provider.fetch_quote(symbol)
        except FetchFailure as exc:
            logger.warning("Quote unavailable (%s), using mock data: %s", exc.kind, exc)
            return self._fallback(symbol)
