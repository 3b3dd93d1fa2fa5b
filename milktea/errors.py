"""Error types raised by the model tree and the bootstrap layer."""

from __future__ import annotations

from typing import Any


class MilkteaError(Exception):
    """Base class for every error raised by milktea itself."""


class InvalidChildTypeError(MilkteaError, TypeError):
    def __init__(self, owner: type, value: Any) -> None:
        self.owner = owner
        self.value = value
        super().__init__(
            f"{owner.__name__}: child selector resolved to {type(value).__name__} "
            f"({value!r}), expected a Model subclass"
        )


class MethodNotFoundError(MilkteaError, AttributeError):
    def __init__(self, owner: type, name: str) -> None:
        self.owner = owner
        self.name = name
        super().__init__(f"{owner.__name__} has no method {name!r} to resolve a child component")


class ConfigError(MilkteaError, ValueError):
    pass


class ApplicationError(MilkteaError):
    pass
