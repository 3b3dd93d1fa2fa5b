"""Immutable component tree: state, declared children and the update contract."""

from __future__ import annotations

import sys
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar, Union

from milktea.errors import InvalidChildTypeError, MethodNotFoundError

State = Mapping[str, Any]
StateMapper = Callable[[State], Mapping[str, Any]]
Selector = Union[type, str, Callable[[Any], type]]

EMPTY_STATE: State = MappingProxyType({})
_MISSING = object()


def isolated(_state: State) -> Mapping[str, Any]:
    """Default mapper: the child receives none of the parent state."""
    return {}


@dataclass(frozen=True)
class Child:
    """One declared child slot.

    ``selector`` is either a Model subclass, used as is, or a reference resolved
    against the owning instance at construction time: a method name, or a
    callable taking the owner. ``weight`` only matters inside a Container.
    """

    selector: Selector
    mapper: StateMapper = field(default=isolated)
    weight: int = 1

    def __post_init__(self) -> None:
        if not isinstance(self.weight, int) or isinstance(self.weight, bool) or self.weight <= 0:
            raise ValueError(f"child weight must be a positive integer, got {self.weight!r}")

    def resolve(self, owner: Model) -> type[Model]:
        selector = self.selector
        if isinstance(selector, type):
            component: Any = selector
        elif isinstance(selector, str):
            method = getattr(owner, selector, _MISSING)
            if method is _MISSING:
                raise MethodNotFoundError(type(owner), selector)
            if not callable(method):
                raise InvalidChildTypeError(type(owner), method)
            component = method if isinstance(method, type) else method()
        elif callable(selector):
            component = selector(owner)
        else:
            raise InvalidChildTypeError(type(owner), selector)

        if not (isinstance(component, type) and issubclass(component, Model)):
            raise InvalidChildTypeError(type(owner), component)
        return component


def child(selector: Selector, mapper: StateMapper | None = None, weight: int = 1) -> Child:
    return Child(selector, mapper or isolated, weight)


class Model:
    """Base component following the Model/Update/View loop.

    Subclasses declare ``child_specs`` (built with :func:`child`), override
    ``default_state`` when they need defaults, and implement ``view`` and
    ``update``. Instances never change: ``with_state`` builds a new instance
    and a brand new child tree.
    """

    child_specs: ClassVar[tuple[Child, ...]] = ()

    def __init__(self, state: Mapping[str, Any] | None = None, **overrides: Any) -> None:
        merged = dict(self.default_state())
        if state:
            merged.update(state)
        merged.update(overrides)
        self._state: State = MappingProxyType(merged)
        self._children: tuple[Model, ...] = self._build_children(self._state)

    @property
    def state(self) -> State:
        return self._state

    @property
    def children(self) -> tuple[Model, ...]:
        return self._children

    def default_state(self) -> Mapping[str, Any]:
        return EMPTY_STATE

    def view(self) -> str:
        raise NotImplementedError(f"{type(self).__name__} must implement view()")

    def update(self, message: Any) -> tuple[Model, Any]:
        raise NotImplementedError(f"{type(self).__name__} must implement update()")

    def with_state(self, changes: Mapping[str, Any] | None = None, **overrides: Any) -> Model:
        merged = dict(self._state)
        if changes:
            merged.update(changes)
        merged.update(overrides)
        return self.current_class()(merged)

    def children_views(self) -> str:
        return "".join(c.view() for c in self._children)

    @classmethod
    def current_class(cls) -> type[Model]:
        """Return the live definition of this class.

        After ``importlib.reload`` the module holds a new class object under the
        same name while existing instances still point at the old one; looking
        the name up again lets ``with_state`` pick up reloaded code.
        """
        if "<locals>" in cls.__qualname__:
            return cls
        current: Any = sys.modules.get(cls.__module__)
        for part in cls.__qualname__.split("."):
            current = getattr(current, part, None)
            if current is None:
                return cls
        if isinstance(current, type) and issubclass(current, Model):
            return current
        return cls

    def _build_children(self, parent_state: State) -> tuple[Model, ...]:
        return tuple(
            spec.resolve(self)(spec.mapper(parent_state)) for spec in type(self).child_specs
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Model):
            return NotImplemented
        return type(self) is type(other) and dict(self._state) == dict(other._state)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self._state)!r})"
