"""Directory-backed blueprints and their lookup."""

from __future__ import annotations

import json
import logging
import shutil
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from string import Template
from typing import Any

from forge_cli.models import (
    BlueprintFound,
    BlueprintLookupFailure,
    BlueprintLookupResult,
    BlueprintNotFound,
    OptionSpec,
)

logger = logging.getLogger(__name__)

MANIFEST_NAME = "blueprint.json"
FILES_DIR = "files"
NAME_TOKEN = "__name__"
BUNDLED_BLUEPRINTS_DIR = Path(__file__).parent / "bundled_blueprints"


@dataclass(frozen=True, slots=True)
class FileBlueprint:
    """Blueprint whose ``files/`` tree is rendered into the target."""

    name: str
    root: Path
    description: str = ""
    available_options: tuple[OptionSpec, ...] = ()

    @property
    def files_root(self) -> Path:
        return self.root / FILES_DIR

    def install(
        self,
        *,
        target: Path,
        entity_name: str,
        options: Mapping[str, Any],
        dry_run: bool = False,
    ) -> list[Path]:
        """Copy blueprint files into ``target``.

        ``__name__`` in path segments becomes the entity name. Text files are
        rendered with ``string.Template``: ``${name}`` and ``${<option_key>}``
        for each blueprint option. Existing files are left untouched unless
        ``options["force"]`` is set.
        """

        if not self.files_root.is_dir():
            return []
        force = bool(options.get("force"))
        values = self.template_values(entity_name, options)
        written: list[Path] = []
        for source in sorted(self.files_root.rglob("*")):
            if not source.is_file():
                continue
            relative = source.relative_to(self.files_root)
            destination = target.joinpath(
                *(part.replace(NAME_TOKEN, entity_name) for part in relative.parts),
            )
            if destination.exists() and not force:
                logger.info("Skipping existing file %s", destination)
                continue
            written.append(destination)
            if dry_run:
                continue
            destination.parent.mkdir(parents=True, exist_ok=True)
            _render_file(source, destination, values)
        return written

    def template_values(self, entity_name: str, options: Mapping[str, Any]) -> dict[str, str]:
        values = {"name": entity_name}
        for spec in self.available_options:
            value = options.get(spec.key, spec.default)
            values[spec.key] = "" if value is None else str(value)
        return values


class DirectoryBlueprintLookup:
    """Find blueprints by name across an ordered list of directories."""

    def __init__(self, search_paths: Iterable[Path]) -> None:
        self.search_paths = tuple(search_paths)

    def lookup(self, name: str) -> BlueprintLookupResult:
        if not name or name.startswith(".") or "/" in name or "\\" in name:
            return BlueprintLookupFailure(name=name, reason="invalid blueprint name")
        for base in self.search_paths:
            candidate = base / name
            if not (candidate / MANIFEST_NAME).is_file():
                continue
            try:
                return BlueprintFound(blueprint=load_blueprint(candidate))
            except ValueError as error:
                return BlueprintLookupFailure(name=name, reason=str(error))
        return BlueprintNotFound(name=name)


def load_blueprint(root: Path) -> FileBlueprint:
    """Read ``blueprint.json`` under ``root``; raise ``ValueError`` if malformed."""

    manifest_path = root / MANIFEST_NAME
    try:
        payload = json.loads(manifest_path.read_text("utf-8"))
    except (OSError, json.JSONDecodeError) as error:
        raise ValueError(f"Cannot read {manifest_path}: {error}") from error
    if not isinstance(payload, dict):
        raise ValueError(f"{manifest_path} must contain a JSON object.")
    raw_options = payload.get("options", [])
    if not isinstance(raw_options, list):
        raise ValueError(f"{manifest_path}: 'options' must be a list.")
    options: list[OptionSpec] = []
    for raw in raw_options:
        if not isinstance(raw, dict):
            raise ValueError(f"{manifest_path}: every option must be an object.")
        options.append(OptionSpec.from_mapping(raw))
    return FileBlueprint(
        name=root.name,
        root=root,
        description=str(payload.get("description", "")),
        available_options=tuple(options),
    )


def _render_file(source: Path, destination: Path, values: Mapping[str, str]) -> None:
    try:
        text = source.read_text("utf-8")
    except UnicodeDecodeError:
        shutil.copyfile(source, destination)
        return
    destination.write_text(Template(text).safe_substitute(values), "utf-8")
