"""
Use-case: fetch a closing-price series for a symbol and timeframe, falling
back to synthetic data.
Depends only on Domain ports and entities; no infrastructure imports.
"""

import logging
from typing import Callable

from finpeek.domain.entities.quote import Series, Timeframe
from finpeek.domain.errors import EmptyResult, FetchFailure
from finpeek.domain.ports.quote_provider_port import IQuoteProvider

logger = logging.getLogger(__name__)


class GetSeriesUseCase:
    def __init__(
        self,
        provider: IQuoteProvider,
        fallback: Callable[[str, Timeframe], Series],
    ) -> None:
        self._provider = provider
        self._fallback = fallback

    async def execute(self, symbol: str, timeframe: Timeframe) -> Series:
        """Return at most ``timeframe.point_count`` closes, oldest first.

        The result is never empty: an empty live series is treated as an
        EmptyResult and replaced by the fallback.

        Raises:
            ValueError: if *symbol* is blank.
        """
        if not symbol or not symbol.strip():
            raise ValueError("symbol must be a non-empty string")
        symbol = symbol.upper().strip()
        try:
            series = await self._provider.fetch_series(symbol, timeframe)
            if not series.closes:
                raise EmptyResult(symbol, f"no {timeframe.value} closes returned")
            if len(series.closes) > timeframe.point_count:
                series = Series(
                    symbol=series.symbol,
                    timeframe=timeframe,
                    closes=tuple(series.closes[-timeframe.point_count :]),
                )
            return series
        except FetchFailure as exc:
            logger.warning(
                "Series %s unavailable (%s), using mock data: %s",
                timeframe.value,
                exc.kind,
                exc,
            )
            return self._fallback(symbol, timeframe)
