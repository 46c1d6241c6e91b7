"""
UI command dispatch table: Composition Root helper.

Maps the event names a dashboard client sends (button clicks, key presses)
to DashboardController methods. Keeping the mapping here keeps UI wiring out
of the application layer.
"""

from typing import Any, Awaitable, Callable

from finpeek.application.dashboard_controller import DashboardController

Command = Callable[[], Awaitable[dict[str, Any]]]


def create_commands(controller: DashboardController) -> dict[str, Command]:
    """Build the command table for *controller*.

    Returns:
        Dict of command name → coroutine function returning a small result dict.
    """

    async def toggle_input() -> dict[str, Any]:
        return {"input_visible": controller.toggle_input()}

    async def show_input() -> dict[str, Any]:
        controller.show_input()
        return {"input_visible": True}

    async def hide_input() -> dict[str, Any]:
        controller.hide_input()
        return {"input_visible": False}

    async def toggle_stock_timeframe() -> dict[str, Any]:
        timeframe = await controller.toggle_stock_timeframe()
        return {"stock_timeframe": timeframe.value}

    async def toggle_benchmark_timeframe() -> dict[str, Any]:
        timeframe = await controller.toggle_benchmark_timeframe()
        return {"benchmark_timeframe": timeframe.value}

    async def refresh() -> dict[str, Any]:
        await controller.refresh()
        return {"ticker": controller.ticker or None}

    return {
        "toggle-input": toggle_input,
        "show-input": show_input,
        "hide-input": hide_input,
        "toggle-stock-timeframe": toggle_stock_timeframe,
        "toggle-benchmark-timeframe": toggle_benchmark_timeframe,
        "refresh": refresh,
    }
