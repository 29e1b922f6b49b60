"""``forge generate``: install a named blueprint inside an existing project."""

from __future__ import annotations

from typing import Any

from forge_cli import TOOL_NAME
from forge_cli.commands.base import Command, Works
from forge_cli.commands.options import first_positional
from forge_cli.errors import ValidationError
from forge_cli.models import OptionSpec, OptionType


class GenerateCommand(Command):
    name = "generate"
    description = "Generates new code from blueprints."
    aliases = ("g",)
    works = Works.INSIDE_PROJECT
    anonymous_options = ("<blueprint>", "<name>")
    available_options = (
        OptionSpec(
            "dry-run",
            OptionType.BOOLEAN,
            default=False,
            aliases=("d",),
            description="Show what would be written without writing it.",
        ),
        OptionSpec(
            "force",
            OptionType.BOOLEAN,
            default=False,
            aliases=("f",),
            description="Overwrite existing files.",
        ),
    )

    async def before_run(self, raw_args: list[str]) -> None:
        # Unlike `new`, an unknown blueprint here is always an error.
        self.register_blueprint_options(
            first_positional(self.available_options, raw_args),
            tolerate_missing=False,
        )

    async def run(self, options: dict[str, Any], positionals: list[str]) -> Any:
        if len(positionals) < 2:
            raise ValidationError(
                f"The `{TOOL_NAME} generate` command requires a blueprint name and an "
                f"entity name. For more details, use `{TOOL_NAME} help`.",
            )
        blueprint_name, entity_name = positionals[0], positionals[1]
        install = self.make_task("install_blueprint")
        return await install.run(
            {
                **options,
                "blueprint": blueprint_name,
                "entity_name": entity_name,
                "target": str(self.project.root),
            },
        )
