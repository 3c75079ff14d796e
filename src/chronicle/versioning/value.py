"""
Versioned values - immutable snapshots and their mutable builders.

A versioned value pairs host state with the history of transformations
that produced it and the construction arguments it was first built from.
It exists in two explicit forms:

- ``VersionedValue``: immutable, published. Attribute writes raise
  FrozenValueError. The only way to get a different state is to derive a
  new value (``transform``, ``replay``, ``rollback``).
- ``MutableVersionedValue``: scratch builder. History is a plain list and
  state may be replaced or mutated in place. ``freeze()`` turns it into an
  immutable value.

``mutable()`` and ``freeze()`` are the only bridges between the two. Both
copy state through the value's StateModel, so a builder never shares a
state object with a published snapshot.

Reads of unknown attributes are forwarded to the state, so a snapshot of
a ``Person`` can be read as ``snapshot.hunger``.

Example:
    people = StateModel(Person)
    john = VersionedValue.create(people, 20)
    fed = john.transform(eat())
    fed.hunger       # 95
    john.hunger      # 100
    fed.rollback() == john
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from chronicle.core.errors import FrozenValueError
from chronicle.versioning.log import TransformationLog
from chronicle.versioning.model import StateModel


class Mode(str, Enum):
    """Which of the two forms a versioned value is in."""

    MUTABLE = "mutable"
    IMMUTABLE = "immutable"


class _Versioned:
    """Read API shared by both forms."""

    __slots__ = ("_state", "_history", "_construction_args", "_model")

    mode: Mode

    # -- Fields --------------------------------------------------------------

    @property
    def state(self) -> Any:
        return self._state

    @property
    def construction_args(self) -> Any:
        return self._construction_args

    @property
    def model(self) -> StateModel:
        return self._model

    @property
    def version(self) -> int:
        """Number of transformations applied since construction."""
        return len(self._history)

    @property
    def is_mutable(self) -> bool:
        return self.mode is Mode.MUTABLE

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._state, name)

    # -- Equality ------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _Versioned):
            return NotImplemented
        return list(self._history) == list(other._history)

    # -- Derivation (delegates to the engines) -------------------------------

    def mutable(self) -> MutableVersionedValue:
        """Independent mutable clone: same args, copied history list, copied state."""
        return MutableVersionedValue._create(
            self._model,
            self._construction_args,
            self._model.copy(self._state),
            list(self._history),
        )

    def transform(self, transformation: Any) -> VersionedValue:
        from chronicle.versioning.api import transform

        return transform(self, transformation)

    def replay(self, transformations: Any) -> VersionedValue:
        from chronicle.versioning.api import replay

        return replay(self, transformations)

    def rollback(self, steps: int = 1) -> VersionedValue:
        from chronicle.versioning.api import rollback

        return rollback(self, steps=steps)

    def difference(self, other: _Versioned, *, verify: bool | None = None) -> TransformationLog:
        from chronicle.versioning.api import difference

        return difference(self, other, verify=verify)

    def __sub__(self, other: object) -> TransformationLog:
        if not isinstance(other, _Versioned):
            return NotImplemented
        return self.difference(other)

    # -- Introspection -------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Summary for logging. Not a serialization format."""
        return {
            "mode": self.mode.value,
            "model": self._model.name,
            "version": self.version,
            "construction_args": repr(self._construction_args),
            "history": TransformationLog(self._history).names(),
        }

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._model.name}, version={self.version}, "
            f"state={self._state!r})"
        )


class VersionedValue(_Versioned):
    """Immutable snapshot: state, history and construction args, frozen together."""

    __slots__ = ()

    mode = Mode.IMMUTABLE

    def __init__(self, *args: Any, **kwargs: Any):
        raise TypeError("Use VersionedValue.create() or chronicle.construct()")

    @classmethod
    def create(cls, model: StateModel, args: Any) -> VersionedValue:
        """Build from scratch: fresh state from ``args``, empty history."""
        return cls._create(model, args, model.build(args), TransformationLog())

    @classmethod
    def _create(
        cls,
        model: StateModel,
        args: Any,
        state: Any,
        history: TransformationLog,
    ) -> VersionedValue:
        value = object.__new__(cls)
        object.__setattr__(value, "_model", model)
        object.__setattr__(value, "_construction_args", args)
        object.__setattr__(value, "_state", state)
        object.__setattr__(value, "_history", history)
        return value

    @property
    def history(self) -> TransformationLog:
        return self._history

    def __setattr__(self, name: str, value: Any) -> None:
        raise FrozenValueError(name).with_context(value_type=self._model.name, version=self.version)

    def __delattr__(self, name: str) -> None:
        raise FrozenValueError(name).with_context(value_type=self._model.name, version=self.version)

    def __hash__(self) -> int:
        return hash(self._history)


class MutableVersionedValue(_Versioned):
    """
    Scratch builder for a versioned value.

    Owned by whoever created it; never share one between callers. Writes
    to names that are not the builder's own are forwarded to the state:

        draft = john.mutable()
        draft.hunger = 0
        draft.freeze().hunger   # 0, history unchanged
    """

    __slots__ = ()

    mode = Mode.MUTABLE

    def __init__(self, *args: Any, **kwargs: Any):
        raise TypeError("Use MutableVersionedValue.create() or chronicle.construct_mutable()")

    @classmethod
    def create(cls, model: StateModel, args: Any) -> MutableVersionedValue:
        """Build from scratch in mutable form."""
        return cls._create(model, args, model.build(args), [])

    @classmethod
    def _create(cls, model: StateModel, args: Any, state: Any, history: list) -> MutableVersionedValue:
        value = object.__new__(cls)
        object.__setattr__(value, "_model", model)
        object.__setattr__(value, "_construction_args", args)
        object.__setattr__(value, "_state", state)
        object.__setattr__(value, "_history", history)
        return value

    @property
    def history(self) -> list:
        """The live history list; appends here are recorded on freeze."""
        return self._history

    @property
    def state(self) -> Any:
        return self._state

    @state.setter
    def state(self, value: Any) -> None:
        object.__setattr__(self, "_state", value)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "state" or name in _Versioned.__slots__:
            object.__setattr__(self, name, value)
        elif hasattr(type(self), name):
            raise AttributeError(f"{name!r} is read-only on {type(self).__name__}")
        else:
            setattr(self._state, name, value)

    def freeze(self) -> VersionedValue:
        """Publish the builder's current state and history as an immutable value."""
        return VersionedValue._create(
            self._model,
            self._construction_args,
            self._model.copy(self._state),
            TransformationLog(self._history),
        )

    def _seal(self) -> VersionedValue:
        """Freeze without copying state; only for builders nobody else holds."""
        return VersionedValue._create(
            self._model,
            self._construction_args,
            self._state,
            TransformationLog(self._history),
        )

    __hash__ = None  # type: ignore[assignment]


__all__ = ["Mode", "VersionedValue", "MutableVersionedValue"]
