"""
Domain entities for presentation-ready dashboard state.
View-models are rebuilt on every refresh and never mutated in place.
"""

from dataclasses import dataclass
from enum import Enum


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"


class ChartPanel(str, Enum):
    STOCK = "stock"
    BENCHMARK = "benchmark"

    @property
    def color(self) -> str:
        return "#007AFF" if self is ChartPanel.STOCK else "#00C851"


@dataclass(frozen=True)
class QuoteViewModel:
    symbol: str
    price_text: str
    change_text: str
    sentiment: Sentiment


@dataclass(frozen=True)
class BenchmarkViewModel:
    symbol: str
    price_text: str
    change_text: str
    sentiment: Sentiment
    volume_text: str


@dataclass(frozen=True)
class DrawingInstructions:
    """Chart geometry in viewport coordinates (origin top-left)."""

    width: float
    height: float
    padding: float
    color: str
    points: tuple[tuple[float, float], ...]
    line_path: str
    area_path: str
    baseline_y: float
