"""Run the project's test suite once."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from forge_cli.environment import CommandEnvironment
from forge_cli.errors import ProcessExitError
from forge_cli.tasks.base import Task

logger = logging.getLogger(__name__)

NON_ZERO_EXIT_MESSAGE = "Test runner finished with non-zero exit code. Tests failed."


class TestTask(Task):
    __test__ = False

    def __init__(self, env: CommandEnvironment) -> None:
        super().__init__(env)
        self.test_runner = env.create_test_runner()

    def test_runner_options(self, options: Mapping[str, Any]) -> dict[str, Any]:
        """Translate parsed command options into runner options."""

        args: list[str] = []
        if options.get("filter"):
            args.extend(["-k", str(options["filter"])])
        return {"args": args, "cwd": str(self.project.root)}

    async def run(self, options: Mapping[str, Any]) -> int:
        exit_code = await self.test_runner.run(self.test_runner_options(options))
        return check_exit_code(exit_code)


def check_exit_code(exit_code: int) -> int:
    if exit_code != 0:
        raise ProcessExitError(NON_ZERO_EXIT_MESSAGE, exit_code=exit_code)
    return exit_code
