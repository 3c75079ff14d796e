"""
Replay Engine - the single path through which state changes.

``transform``, ``replay`` and ``rollback`` all reduce to ``ReplayEngine.apply``
with different inputs:

    transform(v, t)   →  derive(v, [t])                     (v cloned first)
    replay(v, ts)     →  apply(v, ts)
    rollback(v)       →  apply(fresh(v.construction_args), v.history[:-1])

Applying a transformation means: append it to the builder's history, then
invoke it on the builder's state. A non-None return value replaces the
state. When every transformation has run, the builder is frozen.

Guarantees:
    - Immutable inputs are never modified; they are cloned into a builder.
    - A mutable input is used directly and holds the applied history after.
    - Rollback rebuilds from the construction arguments rather than undoing,
      so rolled-back state is exactly what replaying the shorter history
      produces.
    - Exceptions raised by a transformation propagate unchanged; no value
      is returned for that call.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from chronicle.core.errors import EmptyHistoryError
from chronicle.core.logging import get_logger, logging_configured
from chronicle.versioning.log import TransformationLog
from chronicle.versioning.model import StateModel
from chronicle.versioning.transformation import as_transformation
from chronicle.versioning.value import MutableVersionedValue, VersionedValue, _Versioned

logger = get_logger(__name__)


class ReplayEngine:
    """Applies ordered transformations to versioned values."""

    def apply(self, value: _Versioned, transformations: Iterable[Any]) -> VersionedValue:
        """Apply ``transformations`` in order and return the frozen result.

        Every entry is coerced before any runs, so an invalid entry fails
        the call without touching the builder.
        """
        if isinstance(value, MutableVersionedValue):
            return self._run(value, transformations, owned=False)
        return self.derive(value, transformations)

    def derive(self, value: _Versioned, transformations: Iterable[Any]) -> VersionedValue:
        """Like ``apply`` but always works on a clone, even for a mutable ``value``."""
        entries = [as_transformation(t) for t in transformations]
        return self._run(value.mutable(), entries, owned=True)

    def _run(self, builder: MutableVersionedValue, transformations: Iterable[Any], owned: bool) -> VersionedValue:
        # An owned builder is dropped after this call, so its state needs no second copy.
        entries = [as_transformation(t) for t in transformations]

        for entry in entries:
            builder.history.append(entry)
            result = entry.apply(builder.state)
            if result is not None:
                builder.state = result

        frozen = builder._seal() if owned else builder.freeze()
        if logging_configured():
            logger.debug(
                "transformations_replayed",
                value_type=frozen.model.name,
                count=len(entries),
                version=frozen.version,
            )
        return frozen

    def rebuild(self, model: StateModel, args: Any, transformations: Iterable[Any]) -> VersionedValue:
        """Construct from scratch and replay ``transformations`` on top."""
        entries = [as_transformation(t) for t in transformations]
        return self._run(MutableVersionedValue.create(model, args), entries, owned=True)

    def reconstruct(self, value: _Versioned) -> VersionedValue:
        """Rebuild ``value`` from its construction args and full history."""
        return self.rebuild(value.model, value.construction_args, list(value.history))

    def rollback(self, value: _Versioned, steps: int = 1) -> VersionedValue:
        """Rebuild ``value`` without its last ``steps`` transformations.

        Raises:
            ValueError: ``steps`` is less than 1
            EmptyHistoryError: the history holds fewer than ``steps`` entries
        """
        if steps < 1:
            raise ValueError(f"steps must be >= 1, got {steps}")

        history = TransformationLog(value.history)
        if len(history) < steps:
            raise EmptyHistoryError(requested=steps, available=len(history)).with_context(
                operation="rollback",
                value_type=value.model.name,
                version=len(history),
            )

        rolled_back = self.rebuild(value.model, value.construction_args, history.without_last(steps))
        if logging_configured():
            logger.debug(
                "value_rolled_back",
                value_type=value.model.name,
                steps=steps,
                from_version=len(history),
                to_version=rolled_back.version,
            )
        return rolled_back


__all__ = ["ReplayEngine"]
