"""Bordered box component rendered through a rich Panel."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from rich.align import Align
from rich.panel import Panel
from rich.text import Text as RichText

from milktea.components import place, render_lines
from milktea.container import Container
from milktea.messages import NoOp


class Box(Container):
    """Frames ``content`` in a panel that fills the box bounds.

    Children, if any are declared, are drawn after the frame so they sit on
    top of it.
    """

    def default_state(self) -> Mapping[str, Any]:
        return {"title": "", "content": "", "border_style": "cyan"}

    def update(self, message: Any) -> tuple[Box, Any]:
        return self, NoOp()

    def body(self) -> str:
        return str(self.state.get("content") or "")

    def panel(self) -> Panel:
        title = self.state.get("title")
        return Panel(
            Align.center(RichText(self.body())),
            title=f"[bold]{title}[/bold]" if title else None,
            border_style=self.state.get("border_style") or "cyan",
            width=self.bounds.width,
            height=self.bounds.height,
        )

    def view(self) -> str:
        if self.bounds.width <= 0 or self.bounds.height <= 0:
            return self.children_views()
        lines = render_lines(self.panel(), self.bounds.width, self.bounds.height)
        return place(lines, self.bounds) + self.children_views()
