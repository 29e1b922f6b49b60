"""Option schema resolution and click-backed argument parsing for commands."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

import click

from forge_cli import TOOL_NAME
from forge_cli.errors import OptionResolutionError, ParseError
from forge_cli.models import (
    BlueprintFound,
    BlueprintLookupFailure,
    BlueprintLookupResult,
    BlueprintNotFound,
    OptionSpec,
    OptionType,
)

logger = logging.getLogger(__name__)

OptionsProvider = Callable[[str], BlueprintLookupResult]

HELP_FLAGS = ("-h", "--help")
POSITIONALS = "positionals"


@dataclass(slots=True)
class ParsedArgs:
    """Typed options keyed by ``OptionSpec.key`` plus positional arguments."""

    options: dict[str, Any] = field(default_factory=dict)
    positionals: list[str] = field(default_factory=list)


def merge_options(
    static_options: Sequence[OptionSpec],
    dynamic_options: Iterable[OptionSpec],
    *,
    source: str = "",
) -> tuple[OptionSpec, ...]:
    """Concatenate option lists; the first option to claim a name or alias wins."""

    merged = list(static_options)
    taken_names = {option.name for option in merged}
    taken_aliases = {alias for option in merged for alias in option.aliases}
    for option in dynamic_options:
        if option.name in taken_names:
            logger.warning(
                "Ignoring option --%s from %s: already declared by the command",
                option.name,
                source or "dynamic options",
            )
            continue
        clashing_aliases = taken_aliases.intersection(option.aliases)
        if clashing_aliases:
            logger.warning(
                "Ignoring option --%s from %s: alias %s already taken",
                option.name,
                source or "dynamic options",
                ", ".join(f"-{alias}" for alias in sorted(clashing_aliases)),
            )
            continue
        merged.append(option)
        taken_names.add(option.name)
        taken_aliases.update(option.aliases)
    return tuple(merged)


def resolve_options(
    static_options: Sequence[OptionSpec],
    provider: OptionsProvider,
    source_name: str | None,
    *,
    tolerate_missing: bool = True,
) -> tuple[OptionSpec, ...]:
    """Merge static options with the ones contributed by blueprint ``source_name``.

    A benign not-found yields no extra options when ``tolerate_missing`` is set;
    every other lookup problem raises ``OptionResolutionError``.
    """

    if not source_name:
        return tuple(static_options)

    try:
        result = provider(source_name)
    except OptionResolutionError:
        raise
    except Exception as error:
        raise OptionResolutionError(
            f"Failed to look up blueprint `{source_name}`: {error}",
        ) from error

    match result:
        case BlueprintFound(blueprint=blueprint):
            return merge_options(
                static_options,
                blueprint.available_options,
                source=f"blueprint `{blueprint.name}`",
            )
        case BlueprintNotFound(name=name):
            if tolerate_missing:
                logger.debug("Blueprint %s not found; using static options only", name)
                return tuple(static_options)
            raise OptionResolutionError(f"Unknown blueprint: {name}")
        case BlueprintLookupFailure(name=name, reason=reason):
            raise OptionResolutionError(f"Failed to look up blueprint `{name}`: {reason}")
    raise OptionResolutionError(f"Unexpected blueprint lookup result: {result!r}")


def build_parser(
    command_name: str,
    specs: Sequence[OptionSpec],
    *,
    usage_args: Sequence[str] = (),
    description: str = "",
) -> click.Command:
    """Declare the merged option schema as a click command.

    Positional tokens are collected by a trailing variadic argument so the
    command decides how many it needs.
    """

    params: list[click.Parameter] = [_click_option(spec) for spec in specs]
    params.append(
        click.Argument([POSITIONALS], nargs=-1, metavar=" ".join(usage_args) or None),
    )
    return click.Command(
        command_name,
        params=params,
        help=description or None,
        context_settings={"help_option_names": list(HELP_FLAGS)},
    )


def parse_args(
    command_name: str,
    specs: Sequence[OptionSpec],
    raw_args: Sequence[str],
) -> ParsedArgs:
    """Convert raw CLI tokens into typed options; unknown flags are an error."""

    parser = build_parser(command_name, specs)
    try:
        ctx = parser.make_context(command_name, list(raw_args))
    except click.NoSuchOption as error:
        raise ParseError(
            f"The option '{error.option_name}' is not registered with the "
            f"'{command_name}' command. Run `{TOOL_NAME} {command_name} --help` "
            "for a list of supported options.",
        ) from error
    except click.UsageError as error:
        raise ParseError(error.format_message()) from error
    return ParsedArgs(
        options={spec.key: ctx.params[spec.key] for spec in specs},
        positionals=list(ctx.params[POSITIONALS]),
    )


def render_help(
    command_name: str,
    specs: Sequence[OptionSpec],
    *,
    usage_args: Sequence[str] = (),
    description: str = "",
) -> str:
    parser = build_parser(command_name, specs, usage_args=usage_args, description=description)
    ctx = click.Context(
        parser,
        info_name=f"{TOOL_NAME} {command_name}",
        help_option_names=list(HELP_FLAGS),
    )
    return parser.get_help(ctx)


def wants_help(raw_args: Sequence[str]) -> bool:
    for token in raw_args:
        if token == "--":
            return False
        if token in HELP_FLAGS:
            return True
    return False


def first_positional(specs: Sequence[OptionSpec], raw_args: Sequence[str]) -> str | None:
    """Return the first positional token without failing on not-yet-known flags."""

    ctx = _peek(specs, raw_args)
    if ctx is None:
        return None
    # Unknown flags are kept among the positionals by the lenient parse.
    return next((token for token in ctx.params[POSITIONALS] if not _is_flag(token)), None)


def option_value(specs: Sequence[OptionSpec], raw_args: Sequence[str], name: str) -> Any:
    """Peek at the value of option ``name`` before the full parse."""

    target = next((spec for spec in specs if spec.name == name), None)
    if target is None:
        return None
    ctx = _peek(specs, raw_args)
    if ctx is None:
        return None
    return ctx.params.get(target.key)


def _peek(specs: Sequence[OptionSpec], raw_args: Sequence[str]) -> click.Context | None:
    parser = build_parser("peek", specs)
    try:
        return parser.make_context(
            parser.name,
            list(raw_args),
            resilient_parsing=True,
            ignore_unknown_options=True,
        )
    except click.UsageError:
        return None


def _click_option(spec: OptionSpec) -> click.Option:
    aliases = [f"-{alias}" for alias in spec.aliases]
    help_text = spec.description or None
    if spec.type is OptionType.BOOLEAN:
        return click.Option(
            [f"--{spec.name}/--no-{spec.name}", *aliases, spec.key],
            is_flag=True,
            default=bool(spec.default),
            help=help_text,
        )
    if spec.type is OptionType.CHOICE:
        param_type: click.ParamType = click.Choice(spec.choices)
    elif spec.type is OptionType.NUMBER:
        param_type = click.INT if isinstance(spec.default, int) else click.FLOAT
    else:
        param_type = click.STRING
    return click.Option(
        [f"--{spec.name}", *aliases, spec.key],
        type=param_type,
        default=spec.default,
        show_default=spec.default is not None,
        help=help_text,
    )


def _is_flag(token: str) -> bool:
    return len(token) > 1 and token.startswith("-")
