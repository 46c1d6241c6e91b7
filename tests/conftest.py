"""Shared fakes for the port interfaces."""

import random
from typing import Optional

import pytest

from finpeek.domain.entities.quote import Quote, Series, Timeframe
from finpeek.domain.errors import FetchFailure, PersistenceError
from finpeek.domain.ports.display_port import IDashboardDisplay
from finpeek.domain.ports.quote_provider_port import IQuoteProvider
from finpeek.domain.ports.ticker_store_port import ITickerStore

FIXED_NOW_MS = 1_700_000_000_000.0


class FakeQuoteProvider(IQuoteProvider):
    """Serves canned quotes, or raises *failure* for every call when set."""

    def __init__(self, failure: Optional[FetchFailure] = None) -> None:
        self.failure = failure
        self.quote_calls: list[str] = []
        self.series_calls: list[tuple[str, Timeframe]] = []
        self.closed = False

    async def fetch_quote(self, symbol: str) -> Quote:
        self.quote_calls.append(symbol)
        if self.failure is not None:
            raise self.failure
        return Quote(symbol=symbol, price=100.0, change=1.5, change_percent=1.5, volume=2_500_000)

    async def fetch_series(self, symbol: str, timeframe: Timeframe) -> Series:
        self.series_calls.append((symbol, timeframe))
        if self.failure is not None:
            raise self.failure
        closes = tuple(100.0 + i for i in range(timeframe.point_count))
        return Series(symbol=symbol, timeframe=timeframe, closes=closes)

    async def aclose(self) -> None:
        self.closed = True


class MemoryTickerStore(ITickerStore):
    def __init__(self, initial: Optional[dict] = None, broken: bool = False) -> None:
        self.data = dict(initial or {})
        self.broken = broken

    def get(self, key: str) -> Optional[str]:
        if self.broken:
            raise PersistenceError("store unavailable")
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.broken:
            raise PersistenceError("store unavailable")
        self.data[key] = value


class RecordingDisplay(IDashboardDisplay):
    def __init__(self) -> None:
        self.events: list[str] = []
        self.quote = None
        self.benchmark = None
        self.charts: dict = {}
        self.timeframes = None
        self.input_visible = True
        self.prompted = False
        self.heartbeats = 0

    def show_loading(self, symbol):
        self.events.append(f"loading:{symbol}")

    def show_quote(self, view_model):
        self.events.append("quote")
        self.quote = view_model

    def show_benchmark(self, view_model):
        self.events.append("benchmark")
        self.benchmark = view_model

    def draw_chart(self, panel, title, instructions):
        self.events.append(f"chart:{panel.value}")
        self.charts[panel] = (title, instructions)

    def show_timeframes(self, stock, benchmark):
        self.timeframes = (stock, benchmark)

    def show_input(self):
        self.input_visible = True

    def hide_input(self):
        self.input_visible = False

    def show_ticker_prompt(self):
        self.prompted = True

    def heartbeat(self):
        self.heartbeats += 1


@pytest.fixture
def provider():
    return FakeQuoteProvider()


@pytest.fixture
def store():
    return MemoryTickerStore()


@pytest.fixture
def display():
    return RecordingDisplay()


@pytest.fixture
def rng():
    return random.Random(42)
