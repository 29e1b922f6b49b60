"""``forge init``: install a blueprint into the current directory."""

from __future__ import annotations

from typing import Any

from forge_cli.commands.base import Command, Works
from forge_cli.commands.options import first_positional, option_value
from forge_cli.models import OptionSpec, OptionType


class InitCommand(Command):
    name = "init"
    description = "Creates a new forge project in the current folder."
    works = Works.EVERYWHERE
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
        OptionSpec("name", aliases=("n",), description="Project name to record."),
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
        explicit = option_value(self.options, raw_args, "name")
        return explicit or _positional_name(first_positional(self.options, raw_args)) or self.project.name

    async def run(self, options: dict[str, Any], positionals: list[str]) -> Any:
        positional = _positional_name(positionals[0] if positionals else None)
        entity_name = options.get("name") or positional or self.project.name
        install = self.make_task("install_blueprint")
        written = await install.run(
            {
                **options,
                "blueprint": options.get("blueprint") or self.settings.blueprints.default_blueprint,
                "entity_name": entity_name,
                "target": options.get("target") or str(self.project.root),
            },
        )
        if not options.get("dry_run"):
            self.ui.write_line(f"Installed {len(written)} file(s) for `{entity_name}`.")
        return written


def _positional_name(value: str | None) -> str | None:
    # "." names the current directory, so the project name is used instead.
    return None if value == "." else value
