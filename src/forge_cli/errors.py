"""Error taxonomy shared by commands and tasks."""

from __future__ import annotations


class ForgeError(RuntimeError):
    """Base error surfaced to the CLI as a user-facing message."""

    silent = False


class SilentError(ForgeError):
    """Expected failure reported without a stack trace."""

    silent = True


class ValidationError(SilentError):
    """Entity name violates a reserved-name or format rule."""


class OptionResolutionError(ForgeError):
    """Dynamic option lookup failed before argument parsing."""


class ParseError(SilentError):
    """Unknown or malformed command-line flag."""


class TaskRuntimeError(ForgeError):
    """A task collaborator raised or failed to start."""


class ProcessExitError(SilentError):
    """Child process exited with a non-zero code."""

    def __init__(self, message: str, *, exit_code: int) -> None:
        super().__init__(message)
        self.exit_code = exit_code
