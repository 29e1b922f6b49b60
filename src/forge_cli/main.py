"""CLI entrypoint for forge."""

import logging
from pathlib import Path

import rich_click as click

from forge_cli import TOOL_NAME, __version__
from forge_cli.controllers import CommandInvocation, ForgeCliController
from forge_cli.errors import ForgeError

click.rich_click.USE_MARKDOWN = True
CONTROLLER = ForgeCliController()
# Subcommand arguments, help flags included, are parsed by the command itself.
PASSTHROUGH = {"ignore_unknown_options": True}

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name=TOOL_NAME)
@click.option("--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def forge(ctx: click.Context, verbose: bool) -> None:
    """Scaffold projects and run their tests."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)["verbose"] = verbose


@forge.command("new", context_settings=PASSTHROUGH, add_help_option=False)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def new(ctx: click.Context, args: tuple[str, ...]) -> None:
    """Create a new project directory and initialize it from a blueprint."""

    _invoke(ctx, "new", args)


@forge.command("init", context_settings=PASSTHROUGH, add_help_option=False)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def init(ctx: click.Context, args: tuple[str, ...]) -> None:
    """Initialize a project in the current directory from a blueprint."""

    _invoke(ctx, "init", args)


@forge.command("generate", context_settings=PASSTHROUGH, add_help_option=False)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def generate(ctx: click.Context, args: tuple[str, ...]) -> None:
    """Generate files from a blueprint inside the current project."""

    _invoke(ctx, "generate", args)


@forge.command("test", context_settings=PASSTHROUGH, add_help_option=False)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def test(ctx: click.Context, args: tuple[str, ...]) -> None:
    """Run the test suite once, or with `--server` keep it running across rebuilds."""

    _invoke(ctx, "test", args)


def _invoke(ctx: click.Context, command_name: str, args: tuple[str, ...]) -> None:
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    try:
        CONTROLLER.invoke(
            CommandInvocation(command_name=command_name, raw_args=args, cwd=Path.cwd()),
        )
    except ForgeError as error:
        if verbose and not error.silent:
            logger.exception("%s failed", command_name)
        exception = click.ClickException(str(error))
        exit_code = getattr(error, "exit_code", None)
        if isinstance(exit_code, int) and exit_code > 0:
            exception.exit_code = exit_code
        raise exception from error


if __name__ == "__main__":  # pragma: no cover
    forge()
