"""Console output and progress indicator."""

from __future__ import annotations

from typing import Protocol

from rich.console import Console
from rich.markup import escape
from rich.status import Status


class UI(Protocol):
    """Presentation sink used by commands and tasks."""

    def write_line(self, message: str) -> None: ...

    def write_warn_line(self, message: str) -> None: ...

    def start_progress(self, label: str, tick: str = ".") -> None: ...

    def stop_progress(self) -> None: ...


class ConsoleUI:
    """``rich`` console with a single spinner slot.

    Messages are printed literally; only the warning prefix and the progress
    label are styled.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)
        self._status: Status | None = None

    def write_line(self, message: str) -> None:
        self.console.print(message, markup=False)

    def write_warn_line(self, message: str) -> None:
        self.console.print(f"[yellow]WARNING:[/yellow] {escape(message)}")

    def start_progress(self, label: str, tick: str = ".") -> None:
        text = f"[green]{escape(label + tick * 3)}[/green]"
        if self._status is not None:
            self._status.update(text)
            return
        self._status = self.console.status(text)
        self._status.start()

    def stop_progress(self) -> None:
        if self._status is None:
            return
        self._status.stop()
        self._status = None
