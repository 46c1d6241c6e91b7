"""
Infrastructure adapter: yfinance → IQuoteProvider.
All yfinance-specific details (fast_info, history()) are confined here.
yfinance is blocking, so every call runs in a worker thread.
"""

import asyncio

import yfinance as yf

from finpeek.domain.entities.quote import Quote, Series, Timeframe
from finpeek.domain.errors import EmptyResult, FetchFailure, ParseError, TransportError
from finpeek.domain.ports.quote_provider_port import IQuoteProvider


# (period, interval) wide enough to cover point_count bars.
_HISTORY_WINDOWS = {
    Timeframe.HOURLY: ("5d", "60m"),
    Timeframe.DAILY: ("3mo", "1d"),
}


class YFinanceQuoteProvider(IQuoteProvider):
    """Fetches quotes and price history from Yahoo Finance via the yfinance library."""

    async def fetch_quote(self, symbol: str) -> Quote:
        return await self._call(symbol, self._quote_sync, symbol)

    async def fetch_series(self, symbol: str, timeframe: Timeframe) -> Series:
        return await self._call(symbol, self._series_sync, symbol, timeframe)

    @staticmethod
    async def _call(symbol: str, func, *args):
        try:
            return await asyncio.to_thread(func, *args)
        except FetchFailure:
            raise
        except Exception as exc:
            raise TransportError(symbol, f"{type(exc).__name__}: {exc}") from exc

    @staticmethod
    def _quote_sync(symbol: str) -> Quote:
        fast_info = yf.Ticker(symbol).fast_info

        current_price = getattr(fast_info, "last_price", None)
        previous_close = getattr(fast_info, "previous_close", None)
        if not current_price or not previous_close:
            raise EmptyResult(symbol, "no price data available")

        try:
            price = float(current_price)
            change = price - float(previous_close)
            change_percent = change / float(previous_close) * 100
        except (TypeError, ValueError) as exc:
            raise ParseError(symbol, f"non-numeric price data: {exc}") from exc

        volume = getattr(fast_info, "last_volume", None)
        return Quote(
            symbol=symbol,
            price=price,
            change=change,
            change_percent=change_percent,
            currency=getattr(fast_info, "currency", None) or "USD",
            volume=int(volume) if volume else None,
        )

    @staticmethod
    def _series_sync(symbol: str, timeframe: Timeframe) -> Series:
        period, interval = _HISTORY_WINDOWS[timeframe]
        history = yf.Ticker(symbol).history(period=period, interval=interval)

        if history.empty or "Close" not in history:
            raise EmptyResult(symbol, f"no {interval} history available")

        closes = history["Close"].dropna().tail(timeframe.point_count)
        if closes.empty:
            raise EmptyResult(symbol, f"no {interval} closes available")
        return Series(
            symbol=symbol,
            timeframe=timeframe,
            closes=tuple(round(float(close), 4) for close in closes),
        )
