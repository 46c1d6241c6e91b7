import pytest

from finpeek.domain.errors import PersistenceError
from finpeek.infrastructure.persistence.json_ticker_store import JsonTickerStore

KEY = "finpeek_default_ticker"


class TestJsonTickerStore:
    def test_missing_file_returns_none(self, tmp_path):
        assert JsonTickerStore(str(tmp_path / "state.json")).get(KEY) is None

    def test_set_then_get(self, tmp_path):
        path = tmp_path / "nested" / "state.json"
        store = JsonTickerStore(str(path))
        store.set(KEY, "AAPL")
        assert path.exists()
        assert JsonTickerStore(str(path)).get(KEY) == "AAPL"

    def test_set_keeps_other_keys(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text('{"theme": "dark"}', encoding="utf-8")
        store = JsonTickerStore(str(path))
        store.set(KEY, "MSFT")
        assert store.get("theme") == "dark"
        assert store.get(KEY) == "MSFT"

    def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(PersistenceError):
            JsonTickerStore(str(path)).get(KEY)

    def test_non_object_raises(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text('["AAPL"]', encoding="utf-8")
        with pytest.raises(PersistenceError):
            JsonTickerStore(str(path)).get(KEY)

    def test_unwritable_location_raises(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        store = JsonTickerStore(str(blocker / "state.json"))
        with pytest.raises(PersistenceError):
            store.set(KEY, "AAPL")

    def test_set_recovers_from_corrupt_file(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("{not json", encoding="utf-8")
        store = JsonTickerStore(str(path))
        store.set(KEY, "NVDA")
        assert store.get(KEY) == "NVDA"
