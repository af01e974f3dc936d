"""Cancelable deferred tasks for a single-threaded host loop.

Nothing here runs on its own: the host loop asks how long to wait, waits,
then calls ``run_due()``. Tests drive the same scheduler with a manual clock,
so timing-dependent behavior replays without real delays.
"""

import itertools
import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class ScheduledTask:
    """Handle for a deferred callback."""

    def __init__(self, due: float, callback: Callable[[], None], sequence: int):
        self.due = due
        self.callback = callback
        self.sequence = sequence
        self.cancelled = False
        self.done = False

    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call more than once."""
        self.cancelled = True

    @property
    def pending(self) -> bool:
        return not self.cancelled and not self.done


class CooperativeScheduler:
    """Runs deferred callbacks when the host loop asks for them."""

    def __init__(self, clock: Clock = time.monotonic):
        self.clock = clock
        self._tasks: list[ScheduledTask] = []
        self._sequence = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        """Schedule callback to run once delay seconds have passed."""
        task = ScheduledTask(self.clock() + max(delay, 0.0), callback, next(self._sequence))
        self._tasks.append(task)
        return task

    @property
    def pending_tasks(self) -> list[ScheduledTask]:
        return sorted(
            (t for t in self._tasks if t.pending),
            key=lambda t: (t.due, t.sequence),
        )

    def seconds_until_next(self) -> float | None:
        """Seconds until the next pending task is due, or None if idle."""
        pending = self.pending_tasks
        if not pending:
            return None
        return max(pending[0].due - self.clock(), 0.0)

    def run_due(self) -> int:
        """Run every pending task that is due, in due order.

        Returns:
            Number of callbacks run.
        """
        now = self.clock()
        ran = 0
        for task in self.pending_tasks:
            if task.due > now:
                break
            # A callback may cancel tasks that come after it
            if not task.pending:
                continue
            task.done = True
            task.callback()
            ran += 1

        self._tasks = [t for t in self._tasks if t.pending]
        if ran:
            logger.debug("Ran %d scheduled task(s)", ran)
        return ran

    def cancel_all(self) -> None:
        for task in self._tasks:
            task.cancel()
        self._tasks = []


class ManualClock:
    """A clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
