"""Domain models shared by commands, tasks, and blueprints."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Protocol


class OptionType(str, Enum):
    """Value types accepted by command options."""

    STRING = "string"
    BOOLEAN = "boolean"
    NUMBER = "number"
    CHOICE = "choice"


@dataclass(frozen=True, slots=True)
class OptionSpec:
    """One command option; parsed values are stored under ``key``."""

    name: str
    type: OptionType = OptionType.STRING
    default: Any = None
    aliases: tuple[str, ...] = ()
    choices: tuple[str, ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name or self.name.startswith("-"):
            raise ValueError(f"Invalid option name: {self.name!r}")
        if self.type is OptionType.CHOICE and not self.choices:
            raise ValueError(f"Choice option {self.name!r} requires choices.")

    @property
    def key(self) -> str:
        return self.name.replace("-", "_")

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> OptionSpec:
        """Build a spec from a JSON-style mapping such as a blueprint manifest entry."""

        try:
            name = str(raw["name"])
        except KeyError as error:
            raise ValueError("Option entry is missing 'name'.") from error
        try:
            option_type = OptionType(str(raw.get("type", OptionType.STRING.value)).lower())
        except ValueError as error:
            raise ValueError(f"Unsupported option type for {name!r}: {raw.get('type')!r}") from error
        aliases = raw.get("aliases") or ()
        if isinstance(aliases, str):
            aliases = (aliases,)
        return cls(
            name=name,
            type=option_type,
            default=raw.get("default"),
            aliases=tuple(str(alias) for alias in aliases),
            choices=tuple(str(choice) for choice in raw.get("choices") or ()),
            description=str(raw.get("description", "")),
        )


class Blueprint(Protocol):
    """Named generator that may contribute extra options when selected."""

    name: str
    description: str
    available_options: tuple[OptionSpec, ...]

    def install(
        self,
        *,
        target: Path,
        entity_name: str,
        options: Mapping[str, Any],
        dry_run: bool = False,
    ) -> list[Path]:
        """Materialize the blueprint under ``target`` and return written paths."""


@dataclass(frozen=True, slots=True)
class BlueprintFound:
    blueprint: Blueprint


@dataclass(frozen=True, slots=True)
class BlueprintNotFound:
    name: str


@dataclass(frozen=True, slots=True)
class BlueprintLookupFailure:
    name: str
    reason: str


BlueprintLookupResult = BlueprintFound | BlueprintNotFound | BlueprintLookupFailure


class BlueprintLookup(Protocol):
    """Resolves blueprint names to blueprints."""

    def lookup(self, name: str) -> BlueprintLookupResult:
        """Return found, not-found, or a lookup failure for ``name``."""
