"""Install a blueprint's files into the current project."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from forge_cli.errors import SilentError, TaskRuntimeError
from forge_cli.models import BlueprintFound, BlueprintLookupFailure, BlueprintNotFound
from forge_cli.tasks.base import Task


class InstallBlueprintTask(Task):
    async def run(self, options: Mapping[str, Any]) -> list[Path]:
        name = options["blueprint"]
        match self.env.blueprints.lookup(name):
            case BlueprintFound(blueprint=blueprint):
                pass
            case BlueprintNotFound():
                raise SilentError(f"Unknown blueprint: {name}")
            case BlueprintLookupFailure(reason=reason):
                raise TaskRuntimeError(f"Failed to look up blueprint `{name}`: {reason}")

        target = Path(options.get("target") or self.project.root)
        written = await asyncio.to_thread(
            blueprint.install,
            target=target,
            entity_name=options["entity_name"],
            options=options,
            dry_run=bool(options.get("dry_run")),
        )
        for path in written:
            self.ui.write_line(f"  create {path.relative_to(target)}")
        return written
