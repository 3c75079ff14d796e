"""Public versioning operations.

Module-level functions over shared engine instances. Each one is also
available as a method on the values themselves (``v.transform(t)``,
``v.rollback()``, ``a - b`` ...).
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from chronicle.versioning.diff import DiffEngine
from chronicle.versioning.log import TransformationLog
from chronicle.versioning.model import StateModel
from chronicle.versioning.replay import ReplayEngine
from chronicle.versioning.value import MutableVersionedValue, VersionedValue, _Versioned

_replay_engine = ReplayEngine()
_diff_engine = DiffEngine()


def construct(model: StateModel, args: Any) -> VersionedValue:
    """Build an immutable value from scratch with an empty history."""
    return VersionedValue.create(model, args)


def construct_mutable(model: StateModel, args: Any) -> MutableVersionedValue:
    """Build a mutable value from scratch with an empty history."""
    return MutableVersionedValue.create(model, args)


def to_mutable(value: _Versioned) -> MutableVersionedValue:
    return value.mutable()


mutable = to_mutable


def freeze(value: _Versioned) -> VersionedValue:
    if isinstance(value, VersionedValue):
        return value
    return value.freeze()


def transform(value: _Versioned, transformation: Any) -> VersionedValue:
    """New immutable value with ``transformation`` applied; ``value`` is untouched."""
    return _replay_engine.derive(value, [transformation])


def replay(value: _Versioned, transformations: Iterable[Any]) -> VersionedValue:
    """Apply ``transformations`` in order (cloning ``value`` first if immutable)."""
    return _replay_engine.apply(value, transformations)


def rollback(value: _Versioned, steps: int = 1) -> VersionedValue:
    """The value as it was ``steps`` transformations ago, rebuilt from scratch."""
    return _replay_engine.rollback(value, steps)


def difference(a: Any, b: Any, *, verify: bool | None = None) -> TransformationLog:
    """Transformations the shorter history lacks relative to the longer."""
    return _diff_engine.difference(a, b, verify=verify)


def equal(a: _Versioned, b: _Versioned) -> bool:
    return a == b


def reconstruct(value: _Versioned) -> VersionedValue:
    """Rebuild from construction args and the full history."""
    return _replay_engine.reconstruct(value)


def describe(value: _Versioned) -> dict[str, Any]:
    return value.to_dict()


__all__ = [
    "construct",
    "construct_mutable",
    "to_mutable",
    "mutable",
    "freeze",
    "transform",
    "replay",
    "rollback",
    "difference",
    "equal",
    "reconstruct",
    "describe",
]
