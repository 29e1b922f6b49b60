"""Controller wiring collaborators and running forge commands for the CLI."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from forge_cli.blueprints import DirectoryBlueprintLookup
from forge_cli.commands import DEFAULT_COMMANDS
from forge_cli.config import Settings
from forge_cli.environment import CommandEnvironment
from forge_cli.errors import ForgeError
from forge_cli.project import Project
from forge_cli.tasks import DEFAULT_TASKS
from forge_cli.test_runner import SubprocessTestRunner, TestRunner
from forge_cli.ui import UI, ConsoleUI
from forge_cli.watcher import PollingWatcher, Watcher

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommandInvocation:
    """CLI input for one forge command."""

    command_name: str
    raw_args: tuple[str, ...]
    cwd: Path


class ForgeCliController:
    """Builds a ``CommandEnvironment`` per invocation and runs the command to completion."""

    def __init__(self, ui: UI | None = None) -> None:
        self.ui = ui

    def invoke(self, invocation: CommandInvocation) -> Any:
        env = self.build_environment(invocation.cwd)
        command_class = env.commands.get(invocation.command_name)
        if command_class is None:
            raise ForgeError(f"Unknown command: {invocation.command_name}")
        command = command_class(env)
        logger.debug(
            "Running %s with args %s in %s",
            invocation.command_name,
            invocation.raw_args,
            env.project.root,
        )
        return asyncio.run(command.validate_and_run(invocation.raw_args))

    def build_environment(self, cwd: Path) -> CommandEnvironment:
        settings = _load_settings()
        project = Project.closest(cwd)
        return CommandEnvironment(
            ui=self.ui or ConsoleUI(),
            project=project,
            settings=settings,
            blueprints=DirectoryBlueprintLookup(
                project.blueprint_lookup_paths(settings.blueprints.search_paths),
            ),
            tasks=DEFAULT_TASKS,
            commands=DEFAULT_COMMANDS,
            test_runner_factory=_subprocess_test_runner,
            watcher_factory=_polling_watcher,
        )


def _load_settings() -> Settings:
    try:
        settings = Settings.from_env()
        settings.validate()
    except ValueError as error:
        raise ForgeError(f"Invalid configuration: {error}") from error
    return settings


def _subprocess_test_runner(env: CommandEnvironment) -> TestRunner:
    return SubprocessTestRunner(
        command=env.settings.test.command,
        dev_command=env.settings.test.server_command,
        cwd=env.project.root,
    )


def _polling_watcher(root: Path, poll_interval_seconds: float) -> Watcher:
    return PollingWatcher(root, poll_interval_seconds=poll_interval_seconds)
