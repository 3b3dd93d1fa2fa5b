"""Writes rendered model views to the terminal."""

from __future__ import annotations

import sys
from typing import TextIO

from rich.console import Console
from rich.control import Control

from milktea.model import Model


class Renderer:
    def __init__(self, output: TextIO | None = None, console: Console | None = None) -> None:
        self.console = console or Console(file=output or sys.stdout, legacy_windows=False)

    @property
    def output(self) -> TextIO:
        return self.console.file

    @property
    def size(self) -> tuple[int, int]:
        size = self.console.size
        return size.width, size.height

    def setup_screen(self) -> None:
        self.console.show_cursor(False)
        self.console.control(Control.clear(), Control.home())
        self.output.flush()

    def render(self, model: Model) -> None:
        content = model.view()
        self.console.control(Control.clear(), Control.home())
        self.output.write(content)
        self.output.flush()

    def restore_screen(self) -> None:
        self.console.control(Control.clear(), Control.home())
        self.console.show_cursor(True)
        self.output.flush()
