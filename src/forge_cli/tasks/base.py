"""Task base class and sequential composition."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from forge_cli.environment import CommandEnvironment

Step = Callable[[Any], Awaitable[Any]]


class Task:
    """One asynchronous unit of work; stateless apart from injected collaborators."""

    def __init__(self, env: CommandEnvironment) -> None:
        self.env = env
        self.ui = env.ui
        self.project = env.project

    async def run(self, options: Mapping[str, Any]) -> Any:
        raise NotImplementedError


async def run_sequence(steps: Iterable[Step], initial: Any = None) -> Any:
    """Await ``steps`` in order, feeding each the previous result.

    A raising step stops the sequence; its error propagates unchanged.
    """

    result = initial
    for step in steps:
        result = await step(result)
    return result
