"""Entity-name rules applied by commands that create a named project."""

from __future__ import annotations

import re
from dataclasses import dataclass

from forge_cli import PACKAGE_NAME, TOOL_NAME

RESERVED_NAMES = frozenset({TOOL_NAME, PACKAGE_NAME, "test", "vendor"})
_LEADING_DIGIT = re.compile(r"^[0-9]")


@dataclass(frozen=True, slots=True)
class ValidationOutcome:
    """Either valid, or invalid with a user-facing reason."""

    valid: bool
    reason: str | None = None

    def __post_init__(self) -> None:
        if self.valid and self.reason is not None:
            raise ValueError("A valid outcome cannot carry a reason.")
        if not self.valid and not self.reason:
            raise ValueError("An invalid outcome requires a reason.")

    @classmethod
    def ok(cls) -> ValidationOutcome:
        return cls(valid=True)

    @classmethod
    def invalid(cls, reason: str) -> ValidationOutcome:
        return cls(valid=False, reason=reason)


def unsupported_name_message(name: str) -> str:
    return f"We currently do not support a name of `{name}`."


def current_directory_message() -> str:
    return (
        "Trying to generate an application structure in this directory? "
        f"Use `{TOOL_NAME} init` instead."
    )


def missing_name_message(command_name: str) -> str:
    return (
        f"The `{TOOL_NAME} {command_name}` command requires a name to be specified. "
        f"For more details, use `{TOOL_NAME} help`."
    )


def validate_name(
    name: str | None,
    *,
    command_name: str = "new",
    reserved: frozenset[str] = RESERVED_NAMES,
) -> ValidationOutcome:
    """Check a proposed project name; first matching rule wins.

    ``"."`` is checked before the period rule so it gets the ``init``
    suggestion rather than the generic rejection. Messages always quote the
    name exactly as supplied.
    """

    if not name:
        return ValidationOutcome.invalid(missing_name_message(command_name))
    if name == ".":
        return ValidationOutcome.invalid(current_directory_message())
    if name.lower() in reserved:
        return ValidationOutcome.invalid(unsupported_name_message(name))
    if "." in name:
        return ValidationOutcome.invalid(unsupported_name_message(name))
    if _LEADING_DIGIT.match(name):
        return ValidationOutcome.invalid(unsupported_name_message(name))
    return ValidationOutcome.ok()
