"""
Port (interface) for an optional screen keep-awake capability.
Callers must check ``available`` first and fall back when it is False.
"""

from abc import ABC, abstractmethod


class IKeepAwake(ABC):
    @property
    @abstractmethod
    def available(self) -> bool: ...

    @abstractmethod
    async def acquire(self) -> None:
        """Acquire the keep-awake lock. Raises RuntimeError when refused."""
        ...
