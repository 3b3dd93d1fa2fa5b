"""Positioned components built on Container and shared placement helpers."""

from __future__ import annotations

import io
from collections.abc import Iterable

from rich.console import Console, RenderableType
from rich.control import Control

from milktea.bounds import Bounds


def place(lines: Iterable[str], bounds: Bounds) -> str:
    """Prefix each line with a cursor move so it lands inside ``bounds``."""
    out = []
    for index, line in enumerate(lines):
        if index >= bounds.height:
            break
        out.append(f"{Control.move_to(bounds.x, bounds.y + index)}{line}")
    return "".join(out)


def render_lines(renderable: RenderableType, width: int, height: int | None = None) -> list[str]:
    """Render a rich renderable off-screen at a fixed width and return its lines."""
    console = Console(
        file=io.StringIO(),
        width=max(1, width),
        height=height,
        force_terminal=True,
        color_system="standard",
        legacy_windows=False,
    )
    with console.capture() as capture:
        console.print(renderable)
    lines = capture.get().splitlines()
    if height is not None:
        lines = lines[:height]
    return lines

