"""Immutable message and command values flowing through the runtime.

Messages are inputs consumed by ``Model.update``; commands are the side-effect
directives ``update`` returns. Both use the same closed set of tagged values,
compared structurally.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from milktea.screen import screen_size


class Message:
    """Base for every message. Subclass it (as a frozen dataclass) for app-defined events."""

    __slots__ = ()


@dataclass(frozen=True)
class NoOp(Message):
    pass


@dataclass(frozen=True)
class Exit(Message):
    pass


@dataclass(frozen=True)
class Reload(Message):
    pass


@dataclass(frozen=True)
class Tick(Message):
    timestamp: float = 0.0


@dataclass(frozen=True)
class KeyPress(Message):
    key: str
    value: str = ""
    ctrl: bool = False
    alt: bool = False
    shift: bool = False


@dataclass(frozen=True)
class Batch(Message):
    messages: tuple[Any, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "messages", tuple(self.messages))


@dataclass(frozen=True)
class Resize(Message):
    width: int | None = None
    height: int | None = None

    def __post_init__(self) -> None:
        if self.width is None or self.height is None:
            width, height = screen_size()
            if self.width is None:
                object.__setattr__(self, "width", width)
            if self.height is None:
                object.__setattr__(self, "height", height)


Command = Union[NoOp, Exit, Batch, Reload, Resize, Tick, Message]
