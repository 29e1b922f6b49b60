"""Async Command/Task core for the forge developer CLI."""

__version__ = "0.3.0"

TOOL_NAME = "forge"
PACKAGE_NAME = "forge-cli"
PROJECT_MARKER = "forge.json"
