"""
Port (interface) for the display sink.
The controller pushes computed view-models and drawing instructions here;
presentation is entirely the adapter's concern.
"""

from abc import ABC, abstractmethod

from finpeek.domain.entities.quote import Timeframe
from finpeek.domain.entities.view_model import (
    BenchmarkViewModel,
    ChartPanel,
    DrawingInstructions,
    QuoteViewModel,
)


class IDashboardDisplay(ABC):
    @abstractmethod
    def show_loading(self, symbol: str) -> None: ...

    @abstractmethod
    def show_quote(self, view_model: QuoteViewModel) -> None: ...

    @abstractmethod
    def show_benchmark(self, view_model: BenchmarkViewModel) -> None: ...

    @abstractmethod
    def draw_chart(
        self,
        panel: ChartPanel,
        title: str,
        instructions: DrawingInstructions,
    ) -> None: ...

    @abstractmethod
    def show_timeframes(self, stock: Timeframe, benchmark: Timeframe) -> None: ...

    @abstractmethod
    def show_input(self) -> None: ...

    @abstractmethod
    def hide_input(self) -> None: ...

    @abstractmethod
    def show_ticker_prompt(self) -> None:
        """Ask the user for a ticker instead of fabricating data for an empty one."""
        ...

    @abstractmethod
    def heartbeat(self) -> None:
        """Touch the 'last updated' marker so an idle screen stays active."""
        ...
