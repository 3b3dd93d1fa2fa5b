"""Rectangle value type shared by containers and the layout engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Bounds:
    width: int = 0
    height: int = 0
    x: int = 0
    y: int = 0

    def to_state(self) -> dict[str, Any]:
        return {"width": self.width, "height": self.height, "x": self.x, "y": self.y}
