from __future__ import annotations

import sys
from typing import Callable, Optional, Sequence, TextIO

from .synchronizer import TaskRow


LOADING_TEXT = "Loading..."
EMPTY_TEXT = "No tasks created yet"


class ConsoleListView:
    """Renders the task list as plain text lines on a stream."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream or sys.stdout
        self.rows: Sequence[TaskRow] = ()

    def show_loading(self) -> None:
        self.rows = ()
        self._write(LOADING_TEXT)

    def show_empty(self) -> None:
        self.rows = ()
        self._write(EMPTY_TEXT)

    def show_error(self, message: str) -> None:
        self.rows = ()
        self._write(f"Error: {message}")

    def show_rows(self, rows: Sequence[TaskRow]) -> None:
        self.rows = tuple(rows)
        for i, row in enumerate(self.rows, start=1):
            line = f"{i}. {row.task.display_title}"
            if row.task.description:
                line += f" - {row.task.description}"
            self._write(line)

    def _write(self, text: str) -> None:
        self._stream.write(text + "\n")
        self._stream.flush()


class ConsoleInteraction:
    """
    Prompts, confirmations and alerts over a terminal.

    - `prompt` shows the default in brackets; an empty answer keeps it, EOF
      (Ctrl-D) cancels.
    - `confirm` accepts y/yes.
    """

    def __init__(self, input_fn: Callable[[str], str] = input, stream: Optional[TextIO] = None) -> None:
        self._input = input_fn
        self._stream = stream or sys.stdout

    def prompt(self, message: str, default: str = "") -> Optional[str]:
        try:
            answer = self._input(f"{message} [{default}]: ")
        except EOFError:
            return None
        return answer if answer != "" else default

    def confirm(self, message: str) -> bool:
        try:
            answer = self._input(f"{message} [y/N]: ")
        except EOFError:
            return False
        return answer.strip().lower() in {"y", "yes"}

    def alert(self, message: str) -> None:
        self._stream.write(f"! {message}\n")
        self._stream.flush()


__all__ = ["ConsoleListView", "ConsoleInteraction", "LOADING_TEXT", "EMPTY_TEXT"]
