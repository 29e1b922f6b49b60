"""Project context resolved from the working directory."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from forge_cli import PROJECT_MARKER
from forge_cli.blueprints import BUNDLED_BLUEPRINTS_DIR


@dataclass(frozen=True, slots=True)
class Project:
    """A directory that may or may not hold a forge project."""

    root: Path

    @classmethod
    def closest(cls, start: Path) -> Project:
        """Walk up from ``start`` to the nearest ``forge.json``; fall back to ``start``."""

        start = start.resolve()
        for candidate in (start, *start.parents):
            if (candidate / PROJECT_MARKER).is_file():
                return cls(root=candidate)
        return cls(root=start)

    @property
    def name(self) -> str:
        return self.root.name

    def is_forge_project(self) -> bool:
        return (self.root / PROJECT_MARKER).is_file()

    def blueprint_lookup_paths(self, extra: tuple[Path, ...] = ()) -> tuple[Path, ...]:
        """Project blueprints first, then configured paths, then bundled ones."""

        paths: list[Path] = []
        if self.is_forge_project():
            paths.append(self.root / "blueprints")
        paths.extend(extra)
        paths.append(BUNDLED_BLUEPRINTS_DIR)
        return tuple(paths)
