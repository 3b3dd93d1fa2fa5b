"""Model specialization that owns bounds and lays its children out."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from milktea.bounds import Bounds
from milktea.layout import BOUNDS_KEYS, COLUMN, distribute
from milktea.model import Model, State
from milktea.screen import screen_size


class Container(Model):
    """A Model with geometry.

    ``width``, ``height``, ``x`` and ``y`` are taken out of the constructor
    state and become :attr:`bounds`; missing dimensions fall back to the
    terminal size. Children are stacked along ``direction`` with sizes
    proportional to their declared weights.
    """

    direction: ClassVar[str] = COLUMN

    def __init__(self, state: Mapping[str, Any] | None = None, **overrides: Any) -> None:
        raw = dict(state or {})
        raw.update(overrides)
        self._bounds = self._extract_bounds(raw)
        super().__init__({k: v for k, v in raw.items() if k not in BOUNDS_KEYS})

    @property
    def bounds(self) -> Bounds:
        return self._bounds

    def view(self) -> str:
        return self.children_views()

    def with_state(self, changes: Mapping[str, Any] | None = None, **overrides: Any) -> Model:
        merged = self._bounds.to_state()
        merged.update(self._state)
        if changes:
            merged.update(changes)
        merged.update(overrides)
        return self.current_class()(merged)

    def _extract_bounds(self, state: Mapping[str, Any]) -> Bounds:
        width = state.get("width")
        height = state.get("height")
        if width is None or height is None:
            screen_width, screen_height = screen_size()
            width = screen_width if width is None else width
            height = screen_height if height is None else height
        return Bounds(
            width=width,
            height=height,
            x=state.get("x") or 0,
            y=state.get("y") or 0,
        )

    def _build_children(self, parent_state: State) -> tuple[Model, ...]:
        specs = type(self).child_specs
        if not specs:
            return ()

        slots = distribute(self._bounds, [spec.weight for spec in specs], type(self).direction)
        children = []
        for spec, slot in zip(specs, slots):
            child_state = dict(spec.mapper(parent_state))
            child_state.update(slot.to_state())
            children.append(spec.resolve(self)(child_state))
        return tuple(children)

    def __eq__(self, other: object) -> bool:
        result = super().__eq__(other)
        if result is True and isinstance(other, Container):
            return self._bounds == other._bounds
        return result

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self._state)!r}, bounds={self._bounds!r})"
