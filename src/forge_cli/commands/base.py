"""Command base class: option resolution, name validation, parsing, and dispatch."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum
from typing import Any, ClassVar

from forge_cli import TOOL_NAME
from forge_cli.commands.options import parse_args, render_help, resolve_options, wants_help
from forge_cli.commands.validation import ValidationOutcome, validate_name
from forge_cli.environment import CommandEnvironment
from forge_cli.errors import SilentError, ValidationError
from forge_cli.models import OptionSpec
from forge_cli.project import Project
from forge_cli.tasks.base import Task

logger = logging.getLogger(__name__)


class CommandState(str, Enum):
    """Lifecycle of one ``validate_and_run`` invocation."""

    CREATED = "created"
    OPTIONS_RESOLVED = "options_resolved"
    NAME_VALIDATED = "name_validated"
    PARSED = "parsed"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class Works(str, Enum):
    """Where a command may be invoked relative to a forge project."""

    INSIDE_PROJECT = "inside_project"
    OUTSIDE_PROJECT = "outside_project"
    EVERYWHERE = "everywhere"


class Command:
    """One CLI command, constructed per invocation with injected collaborators."""

    name: ClassVar[str] = ""
    description: ClassVar[str] = ""
    aliases: ClassVar[tuple[str, ...]] = ()
    works: ClassVar[Works] = Works.INSIDE_PROJECT
    available_options: ClassVar[tuple[OptionSpec, ...]] = ()
    anonymous_options: ClassVar[tuple[str, ...]] = ()
    creates_named_entity: ClassVar[bool] = False

    def __init__(self, env: CommandEnvironment) -> None:
        self.env = env
        self.ui = env.ui
        self.project = env.project
        self.settings = env.settings
        self.options: tuple[OptionSpec, ...] = self.available_options
        self.state = CommandState.CREATED

    async def validate_and_run(self, raw_args: Sequence[str]) -> Any:
        """Check context, resolve options, validate the entity name, parse, then run.

        Settles exactly once: the ``run`` result, or the first error raised.
        ``-h``/``--help`` prints help for the resolved options instead of running.
        """

        try:
            result = await self._validate_and_run(list(raw_args))
        except BaseException:
            self._transition(CommandState.FAILED)
            raise
        self._transition(CommandState.SUCCEEDED)
        return result

    async def _validate_and_run(self, raw_args: list[str]) -> Any:
        show_help = wants_help(raw_args)
        if not show_help:
            self.check_works_context()
        await self.before_run(raw_args)
        self._transition(CommandState.OPTIONS_RESOLVED)
        if show_help:
            self.ui.write_line(self.help_text())
            return None

        if self.creates_named_entity:
            outcome = self.validate_entity_name(self.entity_name(raw_args))
            if not outcome.valid:
                raise ValidationError(outcome.reason)
        self._transition(CommandState.NAME_VALIDATED)

        parsed = parse_args(self.name, self.options, raw_args)
        self._transition(CommandState.PARSED)

        self._transition(CommandState.RUNNING)
        return await self.run(parsed.options, parsed.positionals)

    async def before_run(self, raw_args: list[str]) -> None:
        """Extend ``self.options`` before parsing; the default keeps static options."""

    async def run(self, options: dict[str, Any], positionals: list[str]) -> Any:
        raise NotImplementedError

    def entity_name(self, raw_args: list[str]) -> str | None:
        return None

    def validate_entity_name(self, name: str | None) -> ValidationOutcome:
        return validate_name(name, command_name=self.name)

    def help_text(self) -> str:
        return render_help(
            self.name,
            self.options,
            usage_args=self.anonymous_options,
            description=self.description,
        )

    def check_works_context(self) -> None:
        inside = self.project.is_forge_project()
        if self.works is Works.INSIDE_PROJECT and not inside:
            raise SilentError(
                f"You have to be inside a {TOOL_NAME} project to use the `{self.name}` command.",
            )
        if self.works is Works.OUTSIDE_PROJECT and inside:
            raise SilentError(
                f"You cannot use the `{self.name}` command inside a {TOOL_NAME} project.",
            )

    def register_blueprint_options(self, blueprint_name: str | None, *, tolerate_missing: bool) -> None:
        self.options = resolve_options(
            self.available_options,
            self.env.blueprints.lookup,
            blueprint_name,
            tolerate_missing=tolerate_missing,
        )

    def make_task(self, name: str) -> Task:
        task_class = self.env.tasks.get(name)
        if task_class is None:
            raise LookupError(f"Task {name!r} is not available to the `{self.name}` command.")
        return task_class(self.env)

    def make_command(self, name: str, *, project: Project | None = None) -> Command:
        command_class = self.env.commands.get(name)
        if command_class is None:
            raise LookupError(f"Command {name!r} is not available to the `{self.name}` command.")
        env = self.env if project is None else self.env.for_project(project)
        return command_class(env)

    def _transition(self, state: CommandState) -> None:
        logger.debug("%s: %s -> %s", self.name, self.state.value, state.value)
        self.state = state
