"""StateModel - how the core builds and copies a host's state.

The versioning core knows nothing about the host's fields. A StateModel
supplies the two capabilities it needs:

- ``build(args)``: construct initial state from the construction arguments
- ``copy(state)``: a shallow field copy, taken whenever an immutable value
  is cloned into a mutable builder

Examples:
    Plain class, shallow ``copy.copy``:

    >>> class Person:
    ...     def __init__(self, age):
    ...         self.age = age
    ...         self.hunger = 100
    >>> people = StateModel(lambda age: Person(age))

    Pydantic model, validated from a mapping:

    >>> people = StateModel.for_pydantic(PersonModel)
    >>> people.build({"age": 20})
    PersonModel(age=20, hunger=100)
"""

from __future__ import annotations

import copy as _copy
from collections.abc import Mapping
from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel

A = TypeVar("A")
S = TypeVar("S")


class StateModel(Generic[A, S]):
    """
    Host capability contract: construct state from args, copy state.

    Args:
        build: Callable producing fresh state from construction args
        copy: Callable producing a shallow copy of a state (default ``copy.copy``)
        name: Label used in logs and error context (default: build's name)
    """

    def __init__(
        self,
        build: Callable[[A], S],
        copy: Callable[[S], S] = _copy.copy,
        name: str | None = None,
    ):
        self._build = build
        self._copy = copy
        self.name = name or getattr(build, "__name__", type(build).__name__)

    def build(self, args: A) -> S:
        return self._build(args)

    def copy(self, state: S) -> S:
        return self._copy(state)

    @classmethod
    def for_pydantic(cls, model_cls: type[BaseModel]) -> StateModel[Any, BaseModel]:
        """Build states with ``model_validate`` and copy them with ``model_copy``.

        Construction args may be a mapping, an instance of ``model_cls``
        (copied, never shared), or anything ``model_validate`` accepts.
        Validation errors surface as pydantic's ``ValidationError``.
        """

        def build(args: Any) -> BaseModel:
            if isinstance(args, model_cls):
                return args.model_copy()
            if isinstance(args, Mapping):
                return model_cls.model_validate(dict(args))
            return model_cls.model_validate(args)

        return cls(build, lambda state: state.model_copy(), name=model_cls.__name__)

    def __repr__(self) -> str:
        return f"StateModel({self.name})"


__all__ = ["StateModel"]
