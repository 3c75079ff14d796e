"""Transformations: the unit of change recorded in a value's history.

A transformation is anything exposing ``apply(state)``. ``apply`` either
mutates ``state`` in place and returns ``None``, or returns the next state
object, which then replaces the old one. The versioning core never looks
inside a transformation; it stores, counts, compares and invokes them.

Two ways to build one:

    # Explicit command object
    eat = Transformation(lambda person: setattr(person, "hunger", person.hunger - 5))

    # Factory decorator: calling the factory binds arguments
    @transformation
    def eat(person, amount=5):
        person.hunger -= amount

    eat()      # Transformation(eat)
    eat(10)    # Transformation(eat, 10)

Equality:
    ``Transformation`` compares by value: the same function object with the
    same bound arguments and name is equal, so ``eat(10) == eat(10)``. A
    plain callable coerced into a Transformation still equals that callable,
    so histories compare equal to the functions the host passed in. Host
    objects that implement ``apply`` themselves compare however their class
    defines ``__eq__`` (identity by default).
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol, runtime_checkable

from chronicle.core.errors import InvalidTransformationError


@runtime_checkable
class Applicable(Protocol):
    """Protocol for anything that can be recorded in a TransformationLog."""

    def apply(self, state: Any) -> Any:
        """Mutate ``state`` in place (return None) or return the next state."""
        ...


@dataclass(frozen=True)
class Transformation:
    """
    A named, replayable call ``fn(state, *args, **kwargs)``.

    Attributes:
        fn: The transformation body
        args: Positional arguments bound after ``state``
        kwargs: Keyword arguments, stored as sorted ``(key, value)`` pairs
        name: Label used in logs and ``describe()``; defaults to ``fn.__name__``
    """

    fn: Callable[..., Any]
    args: tuple[Any, ...] = ()
    kwargs: tuple[tuple[str, Any], ...] = field(default=())
    name: str = ""

    def __post_init__(self):
        if not callable(self.fn):
            raise InvalidTransformationError(self.fn)
        if isinstance(self.kwargs, dict):
            object.__setattr__(self, "kwargs", tuple(sorted(self.kwargs.items())))
        if not self.name:
            object.__setattr__(self, "name", getattr(self.fn, "__name__", type(self.fn).__name__))

    def apply(self, state: Any) -> Any:
        return self.fn(state, *self.args, **dict(self.kwargs))

    def __call__(self, state: Any) -> Any:
        return self.apply(state)

    @property
    def is_bare(self) -> bool:
        """Wraps a plain callable with nothing bound and its own name."""
        return not self.args and not self.kwargs and self.name == getattr(self.fn, "__name__", None)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Transformation):
            return (self.fn, self.args, self.kwargs, self.name) == (other.fn, other.args, other.kwargs, other.name)
        # A bare wrapper stands in for the callable the host passed in
        if callable(other) and not callable(getattr(other, "apply", None)):
            return self.is_bare and self.fn == other
        return NotImplemented

    def __hash__(self) -> int:
        if self.is_bare:
            return hash(self.fn)
        return hash((self.fn, self.args, self.kwargs, self.name))

    def __repr__(self) -> str:
        parts = [self.name]
        parts.extend(repr(a) for a in self.args)
        parts.extend(f"{k}={v!r}" for k, v in self.kwargs)
        return f"Transformation({', '.join(parts)})"


def transformation(fn: Callable[..., Any] | None = None, *, name: str | None = None):
    """Turn a function ``fn(state, *args, **kwargs)`` into a Transformation factory.

    Usable bare (``@transformation``) or with a name (``@transformation(name="eat")``).
    The undecorated function stays reachable as ``factory.body``.
    """

    def decorate(func: Callable[..., Any]) -> Callable[..., Transformation]:
        label = name or func.__name__

        @functools.wraps(func)
        def factory(*args: Any, **kwargs: Any) -> Transformation:
            return Transformation(func, args, tuple(sorted(kwargs.items())), label)

        factory.body = func  # type: ignore[attr-defined]
        return factory

    if fn is not None:
        return decorate(fn)
    return decorate


def as_transformation(candidate: Any) -> Applicable:
    """Coerce ``candidate`` to something with ``apply``.

    Objects that already expose a callable ``apply`` are returned unchanged,
    so identity and host-defined equality survive. Plain callables are
    wrapped in a Transformation.
    """
    if callable(getattr(candidate, "apply", None)):
        return candidate
    if callable(candidate):
        return Transformation(candidate)
    raise InvalidTransformationError(candidate)


def transformation_name(candidate: Any) -> str:
    """Best-effort label for logs."""
    name = getattr(candidate, "name", None)
    if isinstance(name, str) and name:
        return name
    return type(candidate).__name__


__all__ = [
    "Applicable",
    "Transformation",
    "transformation",
    "as_transformation",
    "transformation_name",
]
