"""Create the directory a new project is generated into."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from forge_cli.errors import SilentError
from forge_cli.tasks.base import Task

logger = logging.getLogger(__name__)


class CreateAndStepIntoDirectoryTask(Task):
    """Create ``<cwd>/<directory>`` and return it as the new project root."""

    async def run(self, options: Mapping[str, Any]) -> Path:
        directory_name = options.get("directory") or options["project_name"]
        target = self.project.root / directory_name
        if target.exists() and (not target.is_dir() or any(target.iterdir())):
            raise SilentError(f"Directory '{directory_name}' already exists.")

        if options.get("dry_run"):
            self.ui.write_warn_line("You specified the dry-run flag, so no changes will be written.")
            return target

        await asyncio.to_thread(target.mkdir, parents=True, exist_ok=True)
        logger.debug("Created project directory %s", target)
        return target
