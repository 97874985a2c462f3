"""Periodic tasks and the manager that runs the ones that are due."""

from __future__ import annotations

import threading
from typing import Callable, Optional

from .clock import now_ms

TaskCallback = Callable[["Task"], None]


class Task:
    """A callback that becomes due ``interval`` milliseconds after creation or restart.

    A task that is still overdue after its callback ran is dropped by the
    manager, so a repeating task calls :meth:`restart` from its callback.
    """

    def __init__(self, callback: Optional[TaskCallback], interval: int) -> None:
        self.callback = callback
        self.interval = interval
        self.when = interval + now_ms()

    def run(self) -> None:
        """Invoke the callback with this task."""
        if self.callback is not None:
            self.callback(self)

    def restart(self) -> None:
        """Make the task due again ``interval`` milliseconds from now."""
        self.when = self.interval + now_ms()


class TaskMgr:
    """A set of tasks polled by :meth:`on_work`."""

    def __init__(self) -> None:
        self._tasks: set[Task] = set()
        self._lock = threading.RLock()

    def add(self, task: Task) -> bool:
        """Register ``task``; returns False if it is already registered."""
        with self._lock:
            if task in self._tasks:
                return False
            self._tasks.add(task)
            return True

    def remove(self, task: Task) -> bool:
        """Forget ``task`` if it is registered."""
        with self._lock:
            self._tasks.discard(task)
            return True

    def on_work(self) -> None:
        """Run every overdue task and drop those that did not reschedule."""
        with self._lock:
            now = now_ms()
            for task in list(self._tasks):
                if task.when < now:
                    task.run()
                    if task.when < now:
                        self._tasks.discard(task)

    def __contains__(self, task: object) -> bool:
        with self._lock:
            return task in self._tasks

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)