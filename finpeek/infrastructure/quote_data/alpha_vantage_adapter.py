"""
Infrastructure adapter: Alpha Vantage REST API → IQuoteProvider.

All Alpha Vantage specifics (query functions, response keys, rate-limit
notes) are confined here; the rest of the codebase depends only on
IQuoteProvider and the FetchFailure taxonomy.
"""

import logging
from typing import Any, Optional

import httpx

from finpeek.domain.entities.quote import Quote, Series, Timeframe
from finpeek.domain.errors import EmptyResult, ParseError, TransportError
from finpeek.domain.ports.quote_provider_port import IQuoteProvider

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.alphavantage.co/query"

_SERIES_KEYS = {
    Timeframe.HOURLY: "Time Series (60min)",
    Timeframe.DAILY: "Time Series (Daily)",
}

# Keys Alpha Vantage uses for rate-limit and bad-request notices
# (HTTP 200 with no data).
_NOTICE_KEYS = ("Note", "Information", "Error Message")


class AlphaVantageQuoteProvider(IQuoteProvider):
    """Fetches quotes and price history from Alpha Vantage over httpx."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def fetch_quote(self, symbol: str) -> Quote:
        payload = await self._get(symbol, {"function": "GLOBAL_QUOTE"})
        quote = payload.get("Global Quote")
        if not isinstance(quote, dict) or not quote:
            raise EmptyResult(symbol, self._describe_empty(payload, "Global Quote"))

        try:
            price = float(quote["05. price"])
            change = float(quote["09. change"])
            change_percent = float(str(quote["10. change percent"]).rstrip("%"))
            volume = int(quote["06. volume"]) if quote.get("06. volume") else None
        except (KeyError, TypeError, ValueError) as exc:
            raise ParseError(symbol, f"malformed Global Quote: {exc}") from exc

        if price <= 0:
            raise EmptyResult(symbol, f"non-positive price {price!r}")

        return Quote(
            symbol=symbol,
            price=price,
            change=change,
            change_percent=change_percent,
            currency="USD",
            volume=volume,
        )

    async def fetch_series(self, symbol: str, timeframe: Timeframe) -> Series:
        params = {"outputsize": "compact"}
        if timeframe is Timeframe.HOURLY:
            params.update(function="TIME_SERIES_INTRADAY", interval="60min")
        else:
            params["function"] = "TIME_SERIES_DAILY"

        payload = await self._get(symbol, params)
        key = _SERIES_KEYS[timeframe]
        time_series = payload.get(key)
        if not isinstance(time_series, dict) or not time_series:
            raise EmptyResult(symbol, self._describe_empty(payload, key))

        # Timestamps are ISO formatted, so lexical order is chronological.
        newest = sorted(time_series, reverse=True)[: timeframe.point_count]
        try:
            closes = tuple(float(time_series[stamp]["4. close"]) for stamp in reversed(newest))
        except (KeyError, TypeError, ValueError) as exc:
            raise ParseError(symbol, f"malformed {key}: {exc}") from exc

        return Series(symbol=symbol, timeframe=timeframe, closes=closes)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _get(self, symbol: str, params: dict[str, str]) -> dict[str, Any]:
        query = {**params, "symbol": symbol, "apikey": self._api_key}
        logger.debug("Alpha Vantage %s for %s", params["function"], symbol)
        try:
            response = await self._client.get(self._base_url, params=query)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransportError(symbol, f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(symbol, f"{type(exc).__name__}: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise ParseError(symbol, "response body is not JSON") from exc
        if not isinstance(payload, dict):
            raise ParseError(symbol, f"expected a JSON object, got {type(payload).__name__}")
        return payload

    @staticmethod
    def _describe_empty(payload: dict[str, Any], key: str) -> str:
        for notice in _NOTICE_KEYS:
            if notice in payload:
                return f"{notice}: {payload[notice]}"
        return f"missing {key!r}"
