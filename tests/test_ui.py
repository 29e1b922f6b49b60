from __future__ import annotations

import io

import allure
from rich.console import Console

from forge_cli.ui import ConsoleUI

pytestmark = [
    allure.epic("UI"),
    allure.feature("Console output"),
]


def _console_ui() -> tuple[ConsoleUI, io.StringIO]:
    buffer = io.StringIO()
    return ConsoleUI(Console(file=buffer, force_terminal=False, width=120)), buffer


def test_progress_label_shows_tick() -> None:
    ui, _ = _console_ui()

    ui.start_progress("Building", "*")
    try:
        assert ui._status is not None
        assert ui._status.renderable.text.plain == "Building***"

        ui.start_progress("Rebuilding")
        assert ui._status.renderable.text.plain == "Rebuilding..."
    finally:
        ui.stop_progress()
    assert ui._status is None


def test_lines_are_printed_without_markup() -> None:
    ui, buffer = _console_ui()

    ui.write_line("--license [MIT|Apache-2.0|none]  [default: MIT]")
    ui.write_warn_line("Directory [old] kept.")

    output = buffer.getvalue()
    assert "--license [MIT|Apache-2.0|none]  [default: MIT]" in output
    assert "WARNING: Directory [old] kept." in output
