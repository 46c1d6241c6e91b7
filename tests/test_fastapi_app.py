import pytest
from fastapi.testclient import TestClient

from finpeek.application.dashboard_controller import DashboardController
from finpeek.domain.entities.quote import Timeframe
from finpeek.infrastructure.config.settings import Settings
from finpeek.infrastructure.display.memory_display import InMemoryDisplay
from finpeek.infrastructure.entrypoints.fastapi_app import create_app

from tests.conftest import FakeQuoteProvider, MemoryTickerStore


@pytest.fixture
def fake_provider():
    return FakeQuoteProvider()


@pytest.fixture
def ticker_store():
    return MemoryTickerStore()


@pytest.fixture
def client(fake_provider, ticker_store):
    app = create_app(
        settings=Settings(),
        provider=fake_provider,
        store=ticker_store,
        display=InMemoryDisplay(),
    )
    with TestClient(app) as test_client:
        yield test_client


class TestReadEndpoints:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_initial_state(self, client):
        state = client.get("/api/state").json()
        assert state["status"] == "idle"
        assert state["input_visible"] is True
        assert state["quote"] is None
        assert state["timeframes"] == {"stock": "1D", "benchmark": "1D"}

    def test_initial_state_reports_configured_timeframes(self, fake_provider, ticker_store):
        app = create_app(
            settings=Settings(default_stock_timeframe=Timeframe.HOURLY),
            provider=fake_provider,
            store=ticker_store,
            display=InMemoryDisplay(),
        )
        with TestClient(app) as test_client:
            state = test_client.get("/api/state").json()
        assert state["timeframes"] == {"stock": "1H", "benchmark": "1D"}

    def test_chart_before_first_render_is_404(self, client):
        assert client.get("/api/charts/stock.svg").status_code == 404

    def test_unknown_chart_panel_is_404(self, client):
        assert client.get("/api/charts/crypto.svg").status_code == 404


class TestSearchEndpoint:
    def test_search_loads_ticker(self, client, ticker_store):
        body = client.post("/api/search", json={"ticker": "aapl"}).json()
        assert body["loaded"] is True
        state = body["state"]
        assert state["status"] == "ready"
        assert state["quote"]["symbol"] == "AAPL"
        assert state["quote"]["sentiment"] == "positive"
        assert state["benchmark"]["symbol"] == "SPY"
        assert state["input_visible"] is False
        assert set(state["charts"]) == {"stock", "benchmark"}
        assert ticker_store.data[DashboardController.STORE_KEY] == "AAPL"

    def test_blank_search_prompts_for_ticker(self, client):
        body = client.post("/api/search", json={"ticker": "   "}).json()
        assert body["loaded"] is False
        assert body["state"]["status"] == "prompt"

    def test_invalid_body_is_422(self, client):
        assert client.post("/api/search", json={"ticker": ["AAPL"]}).status_code == 422

    def test_chart_svg_after_search(self, client):
        client.post("/api/search", json={"ticker": "AAPL"})
        response = client.get("/api/charts/benchmark.svg")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("image/svg+xml")
        assert "gradient-00C851" in response.text


class TestCommandEndpoint:
    def test_toggle_stock_timeframe(self, client):
        client.post("/api/search", json={"ticker": "AAPL"})
        body = client.post("/api/commands/toggle-stock-timeframe").json()
        assert body["result"] == {"stock_timeframe": "1H"}
        assert body["state"]["timeframes"]["stock"] == "1H"
        assert client.app.state.controller.scheduler.active_cycle_tasks == 0

    def test_toggle_input(self, client):
        body = client.post("/api/commands/toggle-input").json()
        assert body["result"] == {"input_visible": False}
        assert body["state"]["input_visible"] is False

    def test_refresh_without_ticker(self, client, fake_provider):
        body = client.post("/api/commands/refresh").json()
        assert body["result"] == {"ticker": None}
        assert fake_provider.quote_calls == []

    def test_unknown_command_is_404(self, client):
        assert client.post("/api/commands/self-destruct").status_code == 404


class TestLifespan:
    def test_startup_loads_saved_ticker(self, fake_provider):
        store = MemoryTickerStore({DashboardController.STORE_KEY: "TSLA"})
        app = create_app(settings=Settings(), provider=fake_provider, store=store)
        with TestClient(app) as client:
            state = client.get("/api/state").json()
            assert state["symbol"] == "TSLA"
            assert state["input_visible"] is False
        assert fake_provider.closed is True
