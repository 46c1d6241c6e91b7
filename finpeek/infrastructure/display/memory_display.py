"""
Infrastructure adapter: in-process dashboard state → IDashboardDisplay.

Keeps the latest view-models, chart geometry and input visibility as a
JSON-ready snapshot. The HTTP layer serves the snapshot and streams it to
subscribers (one asyncio.Queue each) whenever it changes.
"""

import asyncio
import dataclasses
from datetime import datetime, timezone
from typing import Any, Optional

from finpeek.domain.entities.quote import Timeframe
from finpeek.domain.entities.view_model import (
    BenchmarkViewModel,
    ChartPanel,
    DrawingInstructions,
    QuoteViewModel,
)
from finpeek.domain.ports.display_port import IDashboardDisplay


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _plain(view_model: Any) -> dict:
    """asdict() with enum members replaced by their values."""
    return {
        key: getattr(value, "value", value)
        for key, value in dataclasses.asdict(view_model).items()
    }


class InMemoryDisplay(IDashboardDisplay):
    QUEUE_SIZE = 16

    def __init__(self) -> None:
        self._version = 0
        self._updated_at: Optional[str] = None
        self._last_heartbeat: Optional[str] = None
        self._status = "idle"
        self._symbol: Optional[str] = None
        self._input_visible = True
        self._quote: Optional[QuoteViewModel] = None
        self._benchmark: Optional[BenchmarkViewModel] = None
        self._timeframes = {
            ChartPanel.STOCK: Timeframe.DAILY,
            ChartPanel.BENCHMARK: Timeframe.DAILY,
        }
        self._charts: dict[ChartPanel, tuple[str, DrawingInstructions]] = {}
        self._subscribers: set[asyncio.Queue] = set()

    # ------------------------------------------------------------------
    # IDashboardDisplay interface
    # ------------------------------------------------------------------

    def show_loading(self, symbol: str) -> None:
        self._status = "loading"
        self._symbol = symbol
        self._publish()

    def show_quote(self, view_model: QuoteViewModel) -> None:
        self._status = "ready"
        self._symbol = view_model.symbol
        self._quote = view_model
        self._publish()

    def show_benchmark(self, view_model: BenchmarkViewModel) -> None:
        self._benchmark = view_model
        self._publish()

    def draw_chart(
        self,
        panel: ChartPanel,
        title: str,
        instructions: DrawingInstructions,
    ) -> None:
        self._charts[panel] = (title, instructions)
        self._publish()

    def show_timeframes(self, stock: Timeframe, benchmark: Timeframe) -> None:
        self._timeframes = {ChartPanel.STOCK: stock, ChartPanel.BENCHMARK: benchmark}
        self._publish()

    def show_input(self) -> None:
        self._input_visible = True
        self._publish()

    def hide_input(self) -> None:
        self._input_visible = False
        self._publish()

    def show_ticker_prompt(self) -> None:
        self._status = "prompt"
        self._input_visible = True
        self._publish()

    def heartbeat(self) -> None:
        self._last_heartbeat = _now()
        self._publish()

    # ------------------------------------------------------------------
    # Read side used by the HTTP layer
    # ------------------------------------------------------------------

    def chart(self, panel: ChartPanel) -> Optional[tuple[str, DrawingInstructions]]:
        return self._charts.get(panel)

    def snapshot(self) -> dict:
        charts = {}
        for panel, (title, instructions) in self._charts.items():
            chart = dataclasses.asdict(instructions)
            chart["points"] = [list(point) for point in instructions.points]
            chart["title"] = title
            charts[panel.value] = chart

        return {
            "version": self._version,
            "updated_at": self._updated_at,
            "last_heartbeat": self._last_heartbeat,
            "status": self._status,
            "symbol": self._symbol,
            "input_visible": self._input_visible,
            "quote": _plain(self._quote) if self._quote else None,
            "benchmark": _plain(self._benchmark) if self._benchmark else None,
            "timeframes": {panel.value: tf.value for panel, tf in self._timeframes.items()},
            "charts": charts,
        }

    def subscribe(self) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.QUEUE_SIZE)
        self._subscribers.add(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        self._subscribers.discard(queue)

    def _publish(self) -> None:
        self._version += 1
        self._updated_at = _now()
        if not self._subscribers:
            return
        snapshot = self.snapshot()
        for queue in self._subscribers:
            if queue.full():
                # Slow consumer: keep only the newest snapshots.
                queue.get_nowait()
            queue.put_nowait(snapshot)
