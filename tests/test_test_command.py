from __future__ import annotations

import asyncio
from pathlib import Path

import allure
import pytest

from conftest import FakeTestRunner, FakeWatcher, wait_until
from forge_cli.commands import TestCommand
from forge_cli.errors import ProcessExitError, SilentError
from forge_cli.tasks import DEFAULT_TASKS

pytestmark = [
    allure.epic("Commands"),
    allure.feature("test"),
]


@pytest.mark.asyncio
async def test_runs_tests_once_with_filter(make_env, tmp_path: Path) -> None:
    runner = FakeTestRunner()
    env = make_env(inside_project=True, tasks=DEFAULT_TASKS, runner=runner)

    result = await TestCommand(env).validate_and_run(["--filter", "smoke"])

    assert result == 0
    assert runner.run_calls == [{"args": ["-k", "smoke"], "cwd": str(tmp_path)}]


@pytest.mark.asyncio
async def test_non_zero_exit_is_a_silent_failure(make_env) -> None:
    env = make_env(inside_project=True, tasks=DEFAULT_TASKS, runner=FakeTestRunner(1))

    with pytest.raises(ProcessExitError, match="non-zero exit code") as excinfo:
        await TestCommand(env).validate_and_run([])

    assert excinfo.value.exit_code == 1
    assert excinfo.value.silent


@pytest.mark.asyncio
async def test_server_mode_owns_the_watcher(make_env) -> None:
    runner = FakeTestRunner()
    watcher = FakeWatcher()
    env = make_env(inside_project=True, tasks=DEFAULT_TASKS, runner=runner, watcher=watcher)

    pending = asyncio.create_task(TestCommand(env).validate_and_run(["-s"]))
    await wait_until(lambda: watcher.listener_count("change") == 1)
    assert watcher.started

    watcher.emit("change")
    watcher.emit("change")
    runner.finish(0)

    assert await pending == 0
    assert len(runner.start_dev_calls) == 1
    assert runner.restart_calls == 1
    assert watcher.stopped


@pytest.mark.asyncio
async def test_requires_a_project(make_env) -> None:
    env = make_env(tasks=DEFAULT_TASKS)

    with pytest.raises(SilentError, match="You have to be inside a forge project to use the `test` command."):
        await TestCommand(env).validate_and_run([])
