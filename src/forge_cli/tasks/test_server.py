"""Watch-mode test task: start the runner on the first build, restart it on rebuilds."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from forge_cli.errors import TaskRuntimeError
from forge_cli.tasks.test import TestTask, check_exit_code
from forge_cli.watcher import CHANGE_EVENT, Watcher

logger = logging.getLogger(__name__)


class CoordinatorState(str, Enum):
    AWAITING_FIRST_BUILD = "awaiting_first_build"
    RUNNING = "running"


class TestServerTask(TestTask):
    """Drive one test-runner session from watcher ``change`` notifications.

    ``start_dev`` is called once, on the first notification; every later
    notification calls ``restart``. The task settles exactly once, when the
    runner reports its final exit or any handler raises.
    """

    __test__ = False

    async def run(self, options: Mapping[str, Any]) -> int:
        watcher: Watcher = options["watcher"]
        loop = asyncio.get_running_loop()
        outcome: asyncio.Future[int] = loop.create_future()
        state = CoordinatorState.AWAITING_FIRST_BUILD

        def settle(exit_code: int | None, error: BaseException | None) -> None:
            if outcome.done():
                if error is not None:
                    logger.warning("Ignoring test runner error after session ended: %s", error)
                return
            if error is not None:
                outcome.set_exception(error)
                return
            if exit_code is None:
                outcome.set_exception(TaskRuntimeError("Test runner exited without an exit code."))
                return
            try:
                outcome.set_result(check_exit_code(exit_code))
            except Exception as failure:
                outcome.set_exception(failure)

        def on_change() -> None:
            nonlocal state
            try:
                if state is CoordinatorState.RUNNING:
                    self.test_runner.restart()
                    return
                state = CoordinatorState.RUNNING
                self.ui.stop_progress()
                self.test_runner.start_dev(self.test_runner_options(options), settle)
            except Exception as error:
                settle(None, error)

        # The build is already in flight when the task starts.
        self.ui.start_progress("Building", ".")
        watcher.on(CHANGE_EVENT, on_change)
        try:
            return await outcome
        finally:
            watcher.off(CHANGE_EVENT, on_change)
            if state is CoordinatorState.AWAITING_FIRST_BUILD:
                self.ui.stop_progress()
