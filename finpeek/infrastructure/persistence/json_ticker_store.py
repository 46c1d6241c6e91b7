"""
Infrastructure adapter: JSON file → ITickerStore.
Holds a flat {key: value} object; any I/O or decode failure surfaces as
PersistenceError so callers can ignore it.
"""

import json
import logging
import os
from typing import Optional

from finpeek.domain.errors import PersistenceError
from finpeek.domain.ports.ticker_store_port import ITickerStore

logger = logging.getLogger(__name__)


class JsonTickerStore(ITickerStore):
    def __init__(self, path: str) -> None:
        self._path = path

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) and value else None

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read()
        except PersistenceError as exc:
            logger.warning("Overwriting unreadable ticker store: %s", exc)
            data = {}
        data[key] = value
        try:
            directory = os.path.dirname(self._path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            tmp_path = f"{self._path}.tmp"
            with open(tmp_path, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp_path, self._path)
        except OSError as exc:
            raise PersistenceError(f"could not write {self._path}: {exc}") from exc

    def _read(self) -> dict:
        if not os.path.exists(self._path):
            return {}
        try:
            with open(self._path, encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"could not read {self._path}: {exc}") from exc
        if not isinstance(data, dict):
            raise PersistenceError(f"{self._path} does not hold a JSON object")
        return data
