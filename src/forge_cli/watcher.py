"""Polling build watcher that emits ``change`` after each completed scan cycle."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, Protocol

from forge_cli.events import EventEmitter

logger = logging.getLogger(__name__)

CHANGE_EVENT = "change"
DEFAULT_IGNORED = frozenset({".git", "__pycache__", "node_modules", "dist", "tmp", ".pytest_cache"})

Snapshot = dict[str, int]


class Watcher(Protocol):
    """Source of build-completed notifications."""

    def on(self, event: str, listener: Callable[..., Any]) -> None: ...

    def off(self, event: str, listener: Callable[..., Any]) -> None: ...

    def start(self) -> None: ...

    async def stop(self) -> None: ...


class PollingWatcher(EventEmitter):
    """Watch ``root`` by comparing mtime snapshots every ``poll_interval_seconds``.

    The first scan counts as the initial build, so ``change`` is emitted once
    right after ``start()`` and then whenever the tree differs.
    """

    def __init__(
        self,
        root: Path,
        *,
        poll_interval_seconds: float = 1.0,
        ignored: Iterable[str] = DEFAULT_IGNORED,
    ) -> None:
        super().__init__()
        self.root = root
        self.poll_interval_seconds = poll_interval_seconds
        self.ignored = frozenset(ignored)
        self._task: asyncio.Task[None] | None = None

    def scan(self) -> Snapshot:
        snapshot: Snapshot = {}
        for dirpath, dirnames, filenames in os.walk(self.root):
            dirnames[:] = [name for name in dirnames if name not in self.ignored]
            for filename in filenames:
                path = os.path.join(dirpath, filename)
                try:
                    snapshot[path] = os.stat(path).st_mtime_ns
                except FileNotFoundError:
                    continue
        return snapshot

    def start(self) -> None:
        if self._task is not None:
            return
        self._task = asyncio.get_running_loop().create_task(self._poll())

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _poll(self) -> None:
        snapshot = await asyncio.to_thread(self.scan)
        self._emit_change()
        while True:
            await asyncio.sleep(self.poll_interval_seconds)
            current = await asyncio.to_thread(self.scan)
            if current != snapshot:
                snapshot = current
                logger.debug("Change detected under %s", self.root)
                self._emit_change()

    def _emit_change(self) -> None:
        try:
            self.emit(CHANGE_EVENT)
        except Exception:
            logger.exception("Watcher listener failed")
