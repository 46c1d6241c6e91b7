"""
FastAPI entry point: dashboard HTTP surface.

This module is the Composition Root: it reads Settings, wires the quote
provider, ticker store and in-memory display into a DashboardController and
exposes the display state plus the command dispatch table over HTTP.

Run locally:
    uvicorn finpeek.infrastructure.entrypoints.fastapi_app:app --reload --port 8000
"""

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import Response, StreamingResponse
from pydantic import BaseModel

load_dotenv()

from finpeek.application.dashboard_controller import DashboardController  # noqa: E402
from finpeek.application.services.refresh_scheduler import RefreshScheduler  # noqa: E402
from finpeek.domain.entities.view_model import ChartPanel  # noqa: E402
from finpeek.domain.ports.keep_awake_port import IKeepAwake  # noqa: E402
from finpeek.domain.ports.quote_provider_port import IQuoteProvider  # noqa: E402
from finpeek.domain.ports.ticker_store_port import ITickerStore  # noqa: E402
from finpeek.infrastructure.config.settings import Settings  # noqa: E402
from finpeek.infrastructure.display.memory_display import InMemoryDisplay  # noqa: E402
from finpeek.infrastructure.display.svg import render_svg  # noqa: E402
from finpeek.infrastructure.entrypoints.command_registry import create_commands  # noqa: E402
from finpeek.infrastructure.persistence.json_ticker_store import JsonTickerStore  # noqa: E402
from finpeek.infrastructure.quote_data.alpha_vantage_adapter import (  # noqa: E402
    AlphaVantageQuoteProvider,
)

logger = logging.getLogger(__name__)

STREAM_KEEPALIVE_SECONDS = 15


class SearchRequest(BaseModel):
    ticker: str = ""


def build_provider(settings: Settings) -> IQuoteProvider:
    if settings.quote_provider == "yfinance":
        from finpeek.infrastructure.quote_data.yfinance_adapter import YFinanceQuoteProvider

        return YFinanceQuoteProvider()
    return AlphaVantageQuoteProvider(
        api_key=settings.api_key,
        base_url=settings.api_base_url,
        timeout=settings.request_timeout,
    )


def create_app(
    settings: Optional[Settings] = None,
    provider: Optional[IQuoteProvider] = None,
    store: Optional[ITickerStore] = None,
    display: Optional[InMemoryDisplay] = None,
    keep_awake: Optional[IKeepAwake] = None,
) -> FastAPI:
    """Wire all dependencies and return the FastAPI app.

    Collaborators left as None are built from *settings*.
    """
    settings = settings or Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    provider = provider or build_provider(settings)
    store = store or JsonTickerStore(settings.ticker_store_path)
    display = display or InMemoryDisplay()
    controller = DashboardController(
        provider,
        store,
        display,
        RefreshScheduler(settings.refresh_interval, settings.timeframe_cycle_interval),
        benchmark_symbol=settings.benchmark_symbol,
        stock_timeframe=settings.default_stock_timeframe,
        benchmark_timeframe=settings.default_benchmark_timeframe,
        chart_width=settings.chart_width,
        chart_height=settings.chart_height,
        chart_padding=settings.chart_padding,
        keep_awake=keep_awake,
        keep_awake_interval=settings.keep_awake_interval,
    )
    commands = create_commands(controller)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        logger.info(
            "FinPeek starting (provider=%s, benchmark=%s)",
            settings.quote_provider,
            settings.benchmark_symbol,
        )
        await controller.load_saved_ticker()
        await controller.start_keep_awake()
        yield
        controller.shutdown()
        await provider.aclose()

    app = FastAPI(title="FinPeek Dashboard API", lifespan=lifespan)
    app.state.controller = controller
    app.state.display = display

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/api/state")
    async def get_state():
        return display.snapshot()

    @app.post("/api/search")
    async def search(body: SearchRequest):
        loaded = await controller.search(body.ticker)
        return {"loaded": loaded, "state": display.snapshot()}

    @app.post("/api/commands/{command}")
    async def run_command(command: str):
        handler = commands.get(command)
        if handler is None:
            raise HTTPException(status_code=404, detail=f"Unknown command: {command!r}")
        result = await handler()
        return {"command": command, "result": result, "state": display.snapshot()}

    @app.get("/api/charts/{panel}.svg")
    async def get_chart(panel: str):
        try:
            chart = display.chart(ChartPanel(panel))
        except ValueError:
            raise HTTPException(status_code=404, detail=f"Unknown chart panel: {panel!r}")
        if chart is None:
            raise HTTPException(status_code=404, detail=f"No {panel} chart rendered yet.")
        _title, instructions = chart
        return Response(content=render_svg(instructions), media_type="image/svg+xml")

    @app.get("/api/stream")
    async def stream(request: Request):
        """Stream display snapshots as Server-Sent Events."""
        queue = display.subscribe()

        async def event_stream():
            try:
                yield f"data: {json.dumps(display.snapshot())}\n\n"
                while not await request.is_disconnected():
                    try:
                        snapshot = await asyncio.wait_for(
                            queue.get(), timeout=STREAM_KEEPALIVE_SECONDS
                        )
                    except asyncio.TimeoutError:
                        yield ": keep-alive\n\n"
                        continue
                    yield f"data: {json.dumps(snapshot)}\n\n"
            finally:
                display.unsubscribe(queue)

        return StreamingResponse(event_stream(), media_type="text/event-stream")

    return app


app = create_app()
