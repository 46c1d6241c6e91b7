"""
Domain entities for quotes, price series and timeframes.
Zero external dependencies: pure Python dataclasses and enums only.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Timeframe(str, Enum):
    DAILY = "1D"
    HOURLY = "1H"

    @property
    def point_count(self) -> int:
        """Number of closes shown on a chart for this timeframe."""
        return 24 if self is Timeframe.HOURLY else 30

    def toggled(self) -> "Timeframe":
        return Timeframe.HOURLY if self is Timeframe.DAILY else Timeframe.DAILY


def normalize_ticker(raw: Optional[str]) -> str:
    """Trim and uppercase user input. Returns '' for blank input."""
    if raw is None:
        return ""
    return raw.strip().upper()


@dataclass(frozen=True)
class Quote:
    symbol: str
    price: float
    change: float
    change_percent: float
    currency: str = "USD"
    volume: Optional[int] = None


@dataclass(frozen=True)
class Series:
    """Closing prices ordered oldest to newest."""

    symbol: str
    timeframe: Timeframe
    closes: tuple[float, ...]

    def __len__(self) -> int:
        return len(self.closes)
