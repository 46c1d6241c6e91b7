"""
Port (interface) for the key-value store holding the last searched ticker.
Infrastructure adapters (e.g. JsonTickerStore) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional


class ITickerStore(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value or None. Raises PersistenceError on I/O failure."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*. Raises PersistenceError on I/O failure."""
        ...
