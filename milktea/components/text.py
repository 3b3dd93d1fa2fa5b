"""Text component: wrapped, clipped and positioned inside its bounds."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from rich.text import Text as RichText

from milktea.components import place
from milktea.container import Container
from milktea.messages import NoOp
from milktea.screen import get_console


class Text(Container):
    def default_state(self) -> Mapping[str, Any]:
        return {"content": ""}

    @property
    def content(self) -> str:
        return str(self.state.get("content") or "")

    def update(self, message: Any) -> tuple[Text, Any]:
        return self, NoOp()

    def view(self) -> str:
        if not self.content:
            return ""
        return place(self.lines(), self.bounds)

    def lines(self) -> list[str]:
        """Word-wrapped lines (cell-width aware), clipped to the bounds height."""
        width, height = self.bounds.width, self.bounds.height
        if width <= 0 or height <= 0:
            return []
        wrapped = RichText(self.content).wrap(get_console(), width)
        return [line.plain for line in wrapped][:height]
