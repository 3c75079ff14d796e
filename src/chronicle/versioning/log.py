"""TransformationLog - the ordered, immutable record of applied transformations."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any, overload

from chronicle.versioning.transformation import Applicable, as_transformation, transformation_name


class TransformationLog(Sequence):
    """
    Immutable ordered sequence of transformations.

    Every operation that would change the log returns a new one; the
    entries themselves are shared, never copied. Equality is element-wise
    and also holds against plain lists and tuples with the same entries.

    Example:
        log = TransformationLog().appended(eat()).appended(eat())
        len(log)             # 2
        log.without_last()   # TransformationLog([eat])
        log.suffix(1)        # TransformationLog([eat])
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[Any] = ()):
        self._entries: tuple[Applicable, ...] = tuple(as_transformation(e) for e in entries)

    @classmethod
    def _wrap(cls, entries: tuple[Applicable, ...]) -> TransformationLog:
        log = cls.__new__(cls)
        log._entries = entries
        return log

    # -- Sequence protocol ---------------------------------------------------

    @overload
    def __getitem__(self, index: int) -> Applicable: ...

    @overload
    def __getitem__(self, index: slice) -> TransformationLog: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self._wrap(self._entries[index])
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Applicable]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TransformationLog):
            return self._entries == other._entries
        if isinstance(other, (list, tuple)):
            return list(self._entries) == list(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"TransformationLog([{', '.join(self.names())}])"

    # -- Derivation ----------------------------------------------------------

    def appended(self, entry: Any) -> TransformationLog:
        return self._wrap(self._entries + (as_transformation(entry),))

    def extended(self, entries: Iterable[Any]) -> TransformationLog:
        return self._wrap(self._entries + tuple(as_transformation(e) for e in entries))

    def without_last(self, count: int = 1) -> TransformationLog:
        """Drop the trailing ``count`` entries (never more than the log holds)."""
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        return self._wrap(self._entries[: max(len(self._entries) - count, 0)])

    def suffix(self, start: int) -> TransformationLog:
        """Entries from ``start`` to the end."""
        return self._wrap(self._entries[start:])

    # -- Queries -------------------------------------------------------------

    def first_mismatch(self, other: Sequence[Any]) -> int | None:
        """Index of the first position where the logs differ, within the shorter length."""
        for index, (mine, theirs) in enumerate(zip(self._entries, other)):
            if mine != theirs:
                return index
        return None

    def is_prefix_of(self, other: Sequence[Any]) -> bool:
        return len(self) <= len(other) and self.first_mismatch(other) is None

    def names(self) -> list[str]:
        return [transformation_name(e) for e in self._entries]

    def to_list(self) -> list[Applicable]:
        return list(self._entries)


__all__ = ["TransformationLog"]
