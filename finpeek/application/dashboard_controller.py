"""
Application controller: orchestrates search, startup load and the scheduled
refresh/cycle actions.

All mutable dashboard state (current ticker, both timeframes, input
visibility, timer handles) lives on one DashboardController instance. The
scheduled actions read that state when they fire, so a ticker or timeframe
change between ticks is picked up on the next tick. Results that arrive after
the state they were fetched for has changed are dropped instead of rendered.
"""

import logging
import random
from typing import Callable, Optional

from finpeek.application.services.chart_renderer import render_points
from finpeek.application.services.mock_market_data import (
    mock_benchmark_quote,
    mock_benchmark_series,
    mock_quote,
    mock_series,
)
from finpeek.application.services.refresh_scheduler import RefreshScheduler, RepeatingTask
from finpeek.application.services.view_models import build_benchmark_view_model, build_view_model
from finpeek.application.use_cases.get_quote import GetQuoteUseCase
from finpeek.application.use_cases.get_series import GetSeriesUseCase
from finpeek.domain.entities.quote import Timeframe, normalize_ticker
from finpeek.domain.entities.view_model import ChartPanel
from finpeek.domain.errors import PersistenceError
from finpeek.domain.ports.display_port import IDashboardDisplay
from finpeek.domain.ports.keep_awake_port import IKeepAwake
from finpeek.domain.ports.quote_provider_port import IQuoteProvider
from finpeek.domain.ports.ticker_store_port import ITickerStore

logger = logging.getLogger(__name__)


class DashboardController:
    STORE_KEY = "finpeek_default_ticker"

    def __init__(
        self,
        provider: IQuoteProvider,
        store: ITickerStore,
        display: IDashboardDisplay,
        scheduler: Optional[RefreshScheduler] = None,
        *,
        benchmark_symbol: str = "SPY",
        stock_timeframe: Timeframe = Timeframe.DAILY,
        benchmark_timeframe: Timeframe = Timeframe.DAILY,
        chart_width: float = 300,
        chart_height: float = 150,
        chart_padding: float = 10,
        keep_awake: Optional[IKeepAwake] = None,
        keep_awake_interval: float = 30.0,
        clock: Optional[Callable[[], float]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Args:
            provider:    Live quote/history source; failures fall back to mock data.
            store:       Key-value store for the last searched ticker.
            display:     Sink for view-models and drawing instructions.
            scheduler:   Owner of the refresh and timeframe-cycle timers.
            clock:       Wall clock in milliseconds for mock prices (defaults to time.time).
            rng:         Random source for mock noise.
        """
        self._store = store
        self._display = display
        self.scheduler = scheduler or RefreshScheduler()
        self.benchmark_symbol = normalize_ticker(benchmark_symbol)
        self._chart_size = (chart_width, chart_height, chart_padding)
        self._keep_awake = keep_awake
        self._keep_awake_interval = keep_awake_interval
        self._heartbeat: Optional[RepeatingTask] = None
        self._clock = clock
        self._rng = rng or random.Random()

        self._ticker = ""
        self._stock_timeframe = stock_timeframe
        self._benchmark_timeframe = benchmark_timeframe
        self._input_visible = True
        self._session = 0
        self._cycling_cancelled = False
        self._display.show_timeframes(stock_timeframe, benchmark_timeframe)

        self._stock_quote = GetQuoteUseCase(
            provider, lambda symbol: mock_quote(symbol, self._now_ms(), self._rng)
        )
        self._benchmark_quote = GetQuoteUseCase(
            provider, lambda symbol: mock_benchmark_quote(symbol, self._rng)
        )
        self._stock_series = GetSeriesUseCase(
            provider, lambda symbol, tf: mock_series(symbol, tf, self._now_ms(), self._rng)
        )
        self._benchmark_series = GetSeriesUseCase(
            provider, lambda symbol, tf: mock_benchmark_series(symbol, tf, self._rng)
        )

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def ticker(self) -> str:
        return self._ticker

    @property
    def stock_timeframe(self) -> Timeframe:
        return self._stock_timeframe

    @property
    def benchmark_timeframe(self) -> Timeframe:
        return self._benchmark_timeframe

    @property
    def input_visible(self) -> bool:
        return self._input_visible

    def _now_ms(self) -> Optional[float]:
        return self._clock() if self._clock is not None else None

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    async def search(self, raw_ticker: Optional[str]) -> bool:
        """Load *raw_ticker* and (re)start the refresh session.

        Returns:
            True if a ticker was loaded, False for blank input.
        """
        ticker = normalize_ticker(raw_ticker)
        if not ticker:
            if not self._ticker:
                self._display.show_ticker_prompt()
            logger.debug("Ignoring blank ticker input")
            return False

        logger.info("Loading ticker %s", ticker)
        self._session += 1
        session = self._session
        self._cycling_cancelled = False
        self._ticker = ticker
        self._save_ticker(ticker)

        self._display.show_loading(ticker)
        self._display.show_timeframes(self._stock_timeframe, self._benchmark_timeframe)
        await self.refresh()

        # A newer search owns the scheduler once it has begun.
        if session == self._session:
            self.scheduler.start(
                self.refresh, self.cycle_timeframes, cycling=not self._cycling_cancelled
            )
        self.hide_input()
        return True

    async def load_saved_ticker(self) -> bool:
        """Run the search sequence for the persisted ticker, if there is one."""
        try:
            saved = self._store.get(self.STORE_KEY)
        except PersistenceError as exc:
            logger.warning("Could not load saved ticker: %s", exc)
            return False
        if not saved:
            return False
        return await self.search(saved)

    async def toggle_stock_timeframe(self) -> Timeframe:
        self._cancel_cycling()
        self._stock_timeframe = self._stock_timeframe.toggled()
        self._display.show_timeframes(self._stock_timeframe, self._benchmark_timeframe)
        if self._ticker:
            await self._render_stock_chart(self._ticker)
        return self._stock_timeframe

    async def toggle_benchmark_timeframe(self) -> Timeframe:
        self._cancel_cycling()
        self._benchmark_timeframe = self._benchmark_timeframe.toggled()
        self._display.show_timeframes(self._stock_timeframe, self._benchmark_timeframe)
        await self._render_benchmark_chart()
        return self._benchmark_timeframe

    def toggle_input(self) -> bool:
        if self._input_visible:
            self.hide_input()
        else:
            self.show_input()
        return self._input_visible

    def show_input(self) -> None:
        self._input_visible = True
        self._display.show_input()

    def hide_input(self) -> None:
        self._input_visible = False
        self._display.hide_input()

    # ------------------------------------------------------------------
    # Scheduled actions
    # ------------------------------------------------------------------

    async def refresh(self) -> None:
        """Re-fetch both quotes and both charts for the current state."""
        ticker = self._ticker
        if not ticker:
            return
        await self._render_stock_quote(ticker)
        await self._render_benchmark_quote()
        await self._render_stock_chart(ticker)
        await self._render_benchmark_chart()

    async def cycle_timeframes(self) -> None:
        self._stock_timeframe = self._stock_timeframe.toggled()
        self._benchmark_timeframe = self._benchmark_timeframe.toggled()
        self._display.show_timeframes(self._stock_timeframe, self._benchmark_timeframe)
        if self._ticker:
            await self._render_stock_chart(self._ticker)
        await self._render_benchmark_chart()

    # ------------------------------------------------------------------
    # Keep-awake and lifecycle
    # ------------------------------------------------------------------

    async def start_keep_awake(self) -> bool:
        """Acquire the keep-awake capability, or fall back to a display heartbeat.

        Returns:
            True if the capability was acquired.
        """
        if self._keep_awake is not None and self._keep_awake.available:
            try:
                await self._keep_awake.acquire()
                logger.info("Keep-awake lock acquired")
                return True
            except RuntimeError as exc:
                logger.warning("Keep-awake refused, using heartbeat: %s", exc)

        if self._heartbeat is None:
            self._heartbeat = RepeatingTask(
                "keep-awake-heartbeat", self._keep_awake_interval, self._beat
            )
        self._heartbeat.start()
        return False

    async def _beat(self) -> None:
        self._display.heartbeat()

    def shutdown(self) -> None:
        self.scheduler.stop()
        if self._heartbeat is not None:
            self._heartbeat.cancel()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _cancel_cycling(self) -> None:
        self._cycling_cancelled = True
        self.scheduler.cancel_cycling()

    def _save_ticker(self, ticker: str) -> None:
        try:
            self._store.set(self.STORE_KEY, ticker)
        except PersistenceError as exc:
            logger.warning("Could not save ticker %s: %s", ticker, exc)

    async def _render_stock_quote(self, ticker: str) -> None:
        quote = await self._stock_quote.execute(ticker)
        if ticker != self._ticker:
            logger.debug("Dropping stale quote for %s", ticker)
            return
        self._display.show_quote(build_view_model(quote))

    async def _render_benchmark_quote(self) -> None:
        quote = await self._benchmark_quote.execute(self.benchmark_symbol)
        self._display.show_benchmark(build_benchmark_view_model(quote))

    async def _render_stock_chart(self, ticker: str) -> None:
        timeframe = self._stock_timeframe
        series = await self._stock_series.execute(ticker, timeframe)
        if ticker != self._ticker or timeframe is not self._stock_timeframe:
            logger.debug("Dropping stale %s chart for %s", timeframe.value, ticker)
            return
        self._draw(ChartPanel.STOCK, ticker, series.closes)

    async def _render_benchmark_chart(self) -> None:
        timeframe = self._benchmark_timeframe
        series = await self._benchmark_series.execute(self.benchmark_symbol, timeframe)
        if timeframe is not self._benchmark_timeframe:
            return
        self._draw(ChartPanel.BENCHMARK, self.benchmark_symbol, series.closes)

    def _draw(self, panel: ChartPanel, title: str, closes: tuple[float, ...]) -> None:
        width, height, padding = self._chart_size
        instructions = render_points(closes, width, height, padding, panel.color)
        self._display.draw_chart(panel, title, instructions)
