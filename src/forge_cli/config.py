"""Runtime configuration for forge commands and tasks."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_TEST_COMMAND = "python -m pytest"


@dataclass(slots=True)
class BlueprintSettings:
    """Blueprint discovery settings."""

    default_blueprint: str = "app"
    search_paths: tuple[Path, ...] = ()
    tolerate_missing: bool = True


@dataclass(slots=True)
class TestSettings:
    """Test runner and watcher settings."""

    __test__ = False

    command: str = DEFAULT_TEST_COMMAND
    server_command: str = DEFAULT_TEST_COMMAND
    poll_interval_seconds: float = 1.0


@dataclass(slots=True)
class Settings:
    """Application settings grouped by domain concerns."""

    blueprints: BlueprintSettings = field(default_factory=BlueprintSettings)
    test: TestSettings = field(default_factory=TestSettings)

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment with sane defaults for local development."""

        test_command = os.getenv("FORGE_TEST_COMMAND", DEFAULT_TEST_COMMAND)
        return cls(
            blueprints=BlueprintSettings(
                default_blueprint=os.getenv("FORGE_DEFAULT_BLUEPRINT", "app").strip() or "app",
                search_paths=_collect_paths(os.getenv("FORGE_BLUEPRINT_PATHS", "")),
                tolerate_missing=_env_bool("FORGE_TOLERATE_MISSING_BLUEPRINTS", default=True),
            ),
            test=TestSettings(
                command=test_command,
                server_command=os.getenv("FORGE_TEST_SERVER_COMMAND", test_command),
                poll_interval_seconds=float(
                    os.getenv("FORGE_WATCH_POLL_INTERVAL_SECONDS", "1.0"),
                ),
            ),
        )

    def validate(self) -> None:
        """Raise configuration error if test or watcher settings are unusable."""

        if not self.test.command.strip():
            raise ValueError("FORGE_TEST_COMMAND must not be empty.")
        if not self.test.server_command.strip():
            raise ValueError("FORGE_TEST_SERVER_COMMAND must not be empty.")
        if self.test.poll_interval_seconds <= 0:
            raise ValueError("FORGE_WATCH_POLL_INTERVAL_SECONDS must be > 0.")


def _collect_paths(raw: str) -> tuple[Path, ...]:
    paths: list[Path] = []
    seen: set[str] = set()
    for part in raw.split(os.pathsep):
        normalized = part.strip()
        if not normalized or normalized in seen:
            continue
        seen.add(normalized)
        paths.append(Path(normalized).expanduser())
    return tuple(paths)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"Invalid boolean value for {name}: {value!r}")
