"""``forge test``: run the test suite once, or keep it running across rebuilds."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from forge_cli.commands.base import Command, Works
from forge_cli.models import OptionSpec, OptionType


class TestCommand(Command):
    __test__ = False

    name = "test"
    description = "Runs your project's test suite."
    aliases = ("t",)
    works = Works.INSIDE_PROJECT
    available_options = (
        OptionSpec(
            "server",
            OptionType.BOOLEAN,
            default=False,
            aliases=("s",),
            description="Keep running and re-run tests after every rebuild.",
        ),
        OptionSpec("filter", aliases=("f",), description="Only run tests matching this expression."),
        OptionSpec("watch-path", description="Directory to watch; defaults to the project root."),
        OptionSpec("poll-interval", OptionType.NUMBER, description="Seconds between scans."),
    )

    async def run(self, options: dict[str, Any], positionals: list[str]) -> Any:
        if not options["server"]:
            return await self.make_task("test").run(options)

        watcher = self.env.create_watcher(
            Path(options.get("watch_path") or self.project.root),
            float(options.get("poll_interval") or self.settings.test.poll_interval_seconds),
        )
        task = self.make_task("test_server")
        watcher.start()
        try:
            return await task.run({**options, "watcher": watcher})
        finally:
            await watcher.stop()
