"""Collaborators injected into every command and task."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING

from forge_cli.config import Settings
from forge_cli.models import BlueprintLookup
from forge_cli.project import Project
from forge_cli.test_runner import TestRunner
from forge_cli.ui import UI
from forge_cli.watcher import Watcher

if TYPE_CHECKING:
    from forge_cli.commands.base import Command
    from forge_cli.tasks.base import Task


@dataclass(slots=True)
class CommandEnvironment:
    """Explicit registry of the tasks, sub-commands, and services a command may use."""

    ui: UI
    project: Project
    settings: Settings
    blueprints: BlueprintLookup
    tasks: Mapping[str, type[Task]] = field(default_factory=dict)
    commands: Mapping[str, type[Command]] = field(default_factory=dict)
    test_runner_factory: Callable[[CommandEnvironment], TestRunner] | None = None
    watcher_factory: Callable[[Path, float], Watcher] | None = None

    def for_project(self, project: Project) -> CommandEnvironment:
        return replace(self, project=project)

    def create_test_runner(self) -> TestRunner:
        if self.test_runner_factory is None:
            raise LookupError("No test runner configured.")
        return self.test_runner_factory(self)

    def create_watcher(self, root: Path, poll_interval_seconds: float) -> Watcher:
        if self.watcher_factory is None:
            raise LookupError("No watcher configured.")
        return self.watcher_factory(root, poll_interval_seconds)
