"""
Application service: the two repeating actions of a refresh session.

A session owns one data-refresh task and one timeframe-cycle task. Starting a
new session cancels both handles of the previous one before scheduling new
ones, so at most one live instance of each action exists at any time. A
manual timeframe toggle cancels cycling for the rest of the session.
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

Action = Callable[[], Awaitable[None]]


class RepeatingTask:
    """Awaits *action* every *interval* seconds until cancelled."""

    def __init__(self, name: str, interval: float, action: Action) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval!r}")
        self.name = name
        self.interval = interval
        self._action = action
        self._task: Optional[asyncio.Task] = None
        self._cancelled = False

    @property
    def active(self) -> bool:
        """True while the action is still scheduled to fire again."""
        return self._task is not None and not self._cancelled and not self._task.done()

    def start(self) -> None:
        self.cancel()
        self._cancelled = False
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self.name)

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._cancelled = True

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self._action()
            except Exception:
                logger.exception("Scheduled action %r failed; will retry next tick", self.name)


class SchedulerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    MANUAL_OVERRIDE = "manual_override"


class RefreshScheduler:
    def __init__(self, refresh_interval: float = 10.0, cycle_interval: float = 5.0) -> None:
        self.refresh_interval = refresh_interval
        self.cycle_interval = cycle_interval
        self.state = SchedulerState.IDLE
        self._refresh_tasks: list[RepeatingTask] = []
        self._cycle_tasks: list[RepeatingTask] = []

    @property
    def active_refresh_tasks(self) -> int:
        return self._count_active(self._refresh_tasks)

    @property
    def active_cycle_tasks(self) -> int:
        return self._count_active(self._cycle_tasks)

    @staticmethod
    def _count_active(tasks: list[RepeatingTask]) -> int:
        tasks[:] = [task for task in tasks if task.active]
        return len(tasks)

    def start(self, refresh_action: Action, cycle_action: Action, cycling: bool = True) -> None:
        """Replace any running session with a fresh pair of repeating actions.

        With *cycling* False the session starts already in manual override and
        only the refresh action is scheduled.
        """
        self._cancel_all(self._refresh_tasks)
        self._cancel_all(self._cycle_tasks)

        refresh = RepeatingTask("data-refresh", self.refresh_interval, refresh_action)
        refresh.start()
        self._refresh_tasks.append(refresh)
        if cycling:
            cycle = RepeatingTask("timeframe-cycle", self.cycle_interval, cycle_action)
            cycle.start()
            self._cycle_tasks.append(cycle)
            self.state = SchedulerState.RUNNING
        else:
            self.state = SchedulerState.MANUAL_OVERRIDE
        logger.debug(
            "Refresh session started (refresh=%ss, cycle=%ss)",
            self.refresh_interval,
            self.cycle_interval,
        )

    def cancel_cycling(self) -> None:
        """Stop timeframe cycling for the rest of this session."""
        self._cancel_all(self._cycle_tasks)
        if self.state is SchedulerState.RUNNING:
            self.state = SchedulerState.MANUAL_OVERRIDE
            logger.info("Timeframe cycling cancelled by manual toggle")

    def stop(self) -> None:
        self._cancel_all(self._refresh_tasks)
        self._cancel_all(self._cycle_tasks)
        self.state = SchedulerState.IDLE

    @staticmethod
    def _cancel_all(tasks: list[RepeatingTask]) -> None:
        for task in tasks:
            task.cancel()
