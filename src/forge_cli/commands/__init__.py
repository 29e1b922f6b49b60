"""Commands exposed by the forge CLI."""

from forge_cli.commands.base import Command, CommandState, Works
from forge_cli.commands.generate import GenerateCommand
from forge_cli.commands.init import InitCommand
from forge_cli.commands.new import NewCommand
from forge_cli.commands.test import TestCommand

DEFAULT_COMMANDS: dict[str, type[Command]] = {
    "new": NewCommand,
    "init": InitCommand,
    "generate": GenerateCommand,
    "test": TestCommand,
}

__all__ = [
    "DEFAULT_COMMANDS",
    "Command",
    "CommandState",
    "GenerateCommand",
    "InitCommand",
    "NewCommand",
    "TestCommand",
    "Works",
]
