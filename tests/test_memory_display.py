import asyncio

import pytest

from finpeek.application.services.chart_renderer import render_points
from finpeek.domain.entities.quote import Timeframe
from finpeek.domain.entities.view_model import ChartPanel, QuoteViewModel, Sentiment
from finpeek.infrastructure.display.memory_display import InMemoryDisplay
from finpeek.infrastructure.display.svg import render_svg


class TestInMemoryDisplay:
    def test_snapshot_is_json_ready(self):
        display = InMemoryDisplay()
        display.show_quote(QuoteViewModel("AAPL", "$1.00", "+$0.00 (+0.00%)", Sentiment.POSITIVE))
        display.draw_chart(ChartPanel.STOCK, "AAPL", render_points([1, 2], 100, 50, 10, "#007AFF"))
        display.show_timeframes(Timeframe.HOURLY, Timeframe.DAILY)

        state = display.snapshot()
        assert state["version"] == 3
        assert state["quote"]["sentiment"] == "positive"
        assert state["charts"]["stock"]["points"] == [[10, 40], [90, 10]]
        assert state["charts"]["stock"]["title"] == "AAPL"
        assert state["timeframes"] == {"stock": "1H", "benchmark": "1D"}

    def test_prompt_shows_input(self):
        display = InMemoryDisplay()
        display.hide_input()
        display.show_ticker_prompt()
        state = display.snapshot()
        assert state["status"] == "prompt"
        assert state["input_visible"] is True

    def test_heartbeat_marks_time(self):
        display = InMemoryDisplay()
        display.heartbeat()
        assert display.snapshot()["last_heartbeat"] is not None

    @pytest.mark.asyncio
    async def test_subscribers_receive_snapshots(self):
        display = InMemoryDisplay()
        queue = display.subscribe()
        display.show_loading("AAPL")
        snapshot = await asyncio.wait_for(queue.get(), timeout=1)
        assert snapshot["status"] == "loading"
        display.unsubscribe(queue)
        display.hide_input()
        assert queue.empty()

    @pytest.mark.asyncio
    async def test_slow_subscriber_keeps_newest(self):
        display = InMemoryDisplay()
        queue = display.subscribe()
        for _ in range(InMemoryDisplay.QUEUE_SIZE + 5):
            display.heartbeat()
        assert queue.qsize() == InMemoryDisplay.QUEUE_SIZE
        newest = None
        while not queue.empty():
            newest = queue.get_nowait()
        assert newest["version"] == display.snapshot()["version"]


class TestRenderSvg:
    def test_contains_paths_and_gradient(self):
        instructions = render_points([1, 3, 2], 300, 150, 10, "#007AFF")
        svg = render_svg(instructions)
        assert svg.startswith("<svg")
        assert 'id="gradient-007AFF"' in svg
        assert f'd="{instructions.line_path}"' in svg
        assert 'fill="url(#gradient-007AFF)"' in svg
