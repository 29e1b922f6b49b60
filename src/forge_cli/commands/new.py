"""``forge new``: create a project directory and initialize it from a blueprint."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from forge_cli.commands.base import Command, Works
from forge_cli.commands.options import first_positional, option_value
from forge_cli.models import OptionSpec, OptionType
from forge_cli.project import Project
from forge_cli.tasks.base import run_sequence


class NewCommand(Command):
    name = "new"
    description = "Creates a new directory and runs `forge init` in it."
    works = Works.OUTSIDE_PROJECT
    creates_named_entity = True
    anonymous_options = ("<app-name>",)
    available_options = (
        OptionSpec(
            "dry-run",
            OptionType.BOOLEAN,
            default=False,
            aliases=("d",),
            description="Show what would be written without writing it.",
        ),
        OptionSpec("blueprint", aliases=("b",), description="Blueprint to install."),
        OptionSpec("directory", aliases=("dir",), description="Directory to create."),
        OptionSpec(
            "force",
            OptionType.BOOLEAN,
            default=False,
            aliases=("f",),
            description="Overwrite existing files.",
        ),
    )

    async def before_run(self, raw_args: list[str]) -> None:
        blueprint_name = option_value(self.available_options, raw_args, "blueprint")
        self.register_blueprint_options(
            blueprint_name or self.settings.blueprints.default_blueprint,
            tolerate_missing=self.settings.blueprints.tolerate_missing,
        )

    def entity_name(self, raw_args: list[str]) -> str | None:
        return first_positional(self.options, raw_args)

    async def run(self, options: dict[str, Any], positionals: list[str]) -> Any:
        command_options = {
            **options,
            "project_name": positionals[0],
            "blueprint": options.get("blueprint") or self.settings.blueprints.default_blueprint,
        }
        create_directory = self.make_task("create_and_step_into_directory")

        async def initialize(directory: Path) -> Any:
            init = self.make_command("init", project=Project(root=directory))
            return await init.run({**command_options, "target": str(directory)}, positionals)

        return await run_sequence(
            [
                lambda _: create_directory.run(command_options),
                initialize,
            ],
        )
