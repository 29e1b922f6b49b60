"""Shared test fixtures and collaborator fakes."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from forge_cli import PROJECT_MARKER
from forge_cli.config import Settings
from forge_cli.environment import CommandEnvironment
from forge_cli.events import EventEmitter
from forge_cli.models import BlueprintLookupResult, BlueprintNotFound, OptionSpec
from forge_cli.project import Project


class RecordingUI:
    def __init__(self) -> None:
        self.lines: list[str] = []
        self.warnings: list[str] = []
        self.progress: list[tuple[str, ...]] = []

    def write_line(self, message: str) -> None:
        self.lines.append(message)

    def write_warn_line(self, message: str) -> None:
        self.warnings.append(message)

    def start_progress(self, label: str, tick: str = ".") -> None:
        self.progress.append(("start", label, tick))

    def stop_progress(self) -> None:
        self.progress.append(("stop",))


class FakeWatcher(EventEmitter):
    def __init__(self) -> None:
        super().__init__()
        self.started = False
        self.stopped = False

    def start(self) -> None:
        self.started = True

    async def stop(self) -> None:
        self.stopped = True


class FakeTestRunner:
    __test__ = False

    def __init__(self, run_exit_code: int = 0) -> None:
        self.run_exit_code = run_exit_code
        self.run_calls: list[Mapping[str, Any]] = []
        self.start_dev_calls: list[Mapping[str, Any]] = []
        self.restart_calls = 0
        self.start_error: BaseException | None = None
        self.restart_error: BaseException | None = None
        self._on_exit: Callable[[int | None, BaseException | None], None] | None = None

    def start_dev(self, options, on_exit) -> None:
        if self.start_error is not None:
            raise self.start_error
        self.start_dev_calls.append(dict(options))
        self._on_exit = on_exit

    def restart(self) -> None:
        self.restart_calls += 1
        if self.restart_error is not None:
            raise self.restart_error

    async def run(self, options) -> int:
        self.run_calls.append(dict(options))
        return self.run_exit_code

    def finish(self, exit_code: int | None, error: BaseException | None = None) -> None:
        assert self._on_exit is not None, "start_dev was never called"
        self._on_exit(exit_code, error)


@dataclass
class StubBlueprint:
    name: str
    available_options: tuple[OptionSpec, ...] = ()
    description: str = ""
    installs: list[dict[str, Any]] = field(default_factory=list)

    def install(self, *, target, entity_name, options, dry_run=False) -> list[Path]:
        self.installs.append(
            {"target": target, "entity_name": entity_name, "options": dict(options)},
        )
        return []


class StubBlueprintLookup:
    def __init__(
        self,
        results: Mapping[str, BlueprintLookupResult] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.results = dict(results or {})
        self.error = error
        self.calls: list[str] = []

    def lookup(self, name: str) -> BlueprintLookupResult:
        self.calls.append(name)
        if self.error is not None:
            raise self.error
        return self.results.get(name, BlueprintNotFound(name=name))


@pytest.fixture()
def make_env(tmp_path: Path):
    """Build a ``CommandEnvironment`` rooted at ``tmp_path`` with fake collaborators."""

    def _make(  # noqa: PLR0913
        *,
        root: Path | None = None,
        inside_project: bool = False,
        blueprints=None,
        tasks=None,
        commands=None,
        runner: FakeTestRunner | None = None,
        watcher: FakeWatcher | None = None,
        settings: Settings | None = None,
    ) -> CommandEnvironment:
        project_root = root or tmp_path
        project_root.mkdir(parents=True, exist_ok=True)
        if inside_project:
            (project_root / PROJECT_MARKER).write_text("{}", "utf-8")
        return CommandEnvironment(
            ui=RecordingUI(),
            project=Project(root=project_root),
            settings=settings or Settings(),
            blueprints=blueprints or StubBlueprintLookup(),
            tasks=tasks or {},
            commands=commands or {},
            test_runner_factory=lambda env: runner or FakeTestRunner(),
            watcher_factory=lambda root, interval: watcher or FakeWatcher(),
        )

    return _make


async def wait_until(predicate: Callable[[], bool], *, timeout: float = 10.0) -> None:
    """Yield to the loop until ``predicate`` holds."""

    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met before timeout")
        await asyncio.sleep(0.01)
