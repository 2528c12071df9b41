"""Lifecycle manager for the composer's background asyncio tasks."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

LOGGER = logging.getLogger(__name__)


class TaskManager:
    """Track named background tasks.

    Tasks installed with :meth:`replace` share a slot of one per name: a new
    task supersedes the previous one instead of queuing behind it. Tasks added
    with :meth:`track` run to completion side by side.
    """

    def __init__(self) -> None:
        self._slots: dict[str, asyncio.Task[Any]] = {}
        self._background: dict[asyncio.Task[Any], str] = {}

    def replace(self, name: str, task: asyncio.Task[Any]) -> asyncio.Task[Any] | None:
        """Install ``task`` under ``name`` and cancel whatever held the slot.

        The superseded task is cancelled but not awaited, so this is safe to
        call from synchronous event handlers.  Returns the superseded task.
        """
        previous = self._slots.get(name)
        self._slots[name] = task
        task.add_done_callback(lambda done: self._release(name, done))
        if previous is not None and previous is not task and not previous.done():
            previous.cancel()
            LOGGER.debug(
                "task.superseded",
                extra={"event": "task.superseded", "task_name": name},
            )
        return previous

    def track(self, name: str, task: asyncio.Task[Any]) -> None:
        """Keep ``task`` running alongside others registered under ``name``."""
        self._background[task] = name
        task.add_done_callback(lambda done: self._release(name, done))

    def get(self, name: str) -> asyncio.Task[Any] | None:
        """Return the running task for ``name`` or ``None``."""
        return self._slots.get(name)

    def is_running(self, name: str) -> bool:
        task = self._slots.get(name)
        if task is not None and not task.done():
            return True
        return any(
            tracked == name and not pending.done()
            for pending, tracked in self._background.items()
        )

    def _release(self, name: str, task: asyncio.Task[Any]) -> None:
        if self._slots.get(name) is task:
            del self._slots[name]
        self._background.pop(task, None)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            LOGGER.warning(
                "task.exception",
                extra={
                    "event": "task.exception",
                    "task_name": name,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )

    async def cancel(self, name: str) -> None:
        """Cancel the task in slot ``name`` and await its completion."""
        task = self._slots.pop(name, None)
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    def _all_tasks(self) -> list[asyncio.Task[Any]]:
        return [*self._slots.values(), *self._background]

    async def await_all(self) -> None:
        """Await every tracked task without cancelling it."""
        while True:
            pending = [task for task in self._all_tasks() if not task.done()]
            if not pending:
                return
            for task in pending:
                try:
                    await task
                except asyncio.CancelledError:
                    pass

    async def cancel_all(self) -> None:
        """Cancel every tracked task and await them all."""
        tasks = [task for task in self._all_tasks() if not task.done()]
        self._slots.clear()
        self._background.clear()
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
