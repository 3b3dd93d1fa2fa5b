"""Weighted flex distribution of container bounds along one axis."""

from __future__ import annotations

from collections.abc import Sequence

from milktea.bounds import Bounds

COLUMN = "column"
ROW = "row"
DIRECTIONS = (COLUMN, ROW)

BOUNDS_KEYS = ("width", "height", "x", "y")


def validate_direction(direction: str) -> str:
    if direction not in DIRECTIONS:
        raise ValueError(f"unknown layout direction: {direction!r} (expected one of {DIRECTIONS})")
    return direction


def distribute(bounds: Bounds, weights: Sequence[int], direction: str = COLUMN) -> list[Bounds]:
    """Split ``bounds`` into one slot per weight, in order.

    Each slot gets ``floor(extent * weight / total)`` cells of the main axis and
    the full cross axis. Slots are placed back to back starting at the
    container origin. Floor rounding leaves any remainder unassigned at the
    end of the axis.
    """
    validate_direction(direction)
    if not weights:
        return []
    for weight in weights:
        if not isinstance(weight, int) or isinstance(weight, bool) or weight <= 0:
            raise ValueError(f"layout weights must be positive integers, got {weight!r}")

    total = sum(weights)
    slots: list[Bounds] = []

    if direction == COLUMN:
        offset = bounds.y
        for weight in weights:
            height = (bounds.height * weight) // total
            slots.append(Bounds(width=bounds.width, height=height, x=bounds.x, y=offset))
            offset += height
        return slots

    offset = bounds.x
    for weight in weights:
        width = (bounds.width * weight) // total
        slots.append(Bounds(width=width, height=bounds.height, x=offset, y=bounds.y))
        offset += width
    return slots
