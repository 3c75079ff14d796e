"""
Diff Engine - which transformations one history has beyond another.

Diffs are positional, not structural: the shorter history is taken to be a
prefix of the longer one, and the difference is everything past that
prefix. For ``v1`` (1 entry) and ``v3`` (3 entries) that is ``v3.history[1:]``,
the two entries that turn ``v1`` into ``v3``. Equal lengths give an empty
log, and argument order does not matter.

With verification on, the prefix assumption is checked and a
NonPrefixDiffError is raised when the histories diverge. Without it the
slice is returned as-is, and replaying it onto the wrong base gives a
deterministic but meaningless result.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from chronicle.core.errors import NonPrefixDiffError
from chronicle.core.logging import get_logger, logging_configured
from chronicle.core.settings import get_settings
from chronicle.versioning.log import TransformationLog

logger = get_logger(__name__)


def _history_of(item: Any) -> TransformationLog:
    history = getattr(item, "history", item)
    if isinstance(history, TransformationLog):
        return history
    if isinstance(history, Sequence):
        return TransformationLog(history)
    raise TypeError(f"Expected a versioned value or a sequence of transformations, got {type(item).__name__}")


class DiffEngine:
    """
    Computes the suffix one history has beyond a shorter, prefix-related one.

    Args:
        verify_prefix: Default for ``difference(..., verify=None)``.
            None defers to ``ChronicleSettings.verify_diff_prefix``.
    """

    def __init__(self, verify_prefix: bool | None = None):
        self.verify_prefix = verify_prefix

    def _should_verify(self, verify: bool | None) -> bool:
        if verify is not None:
            return verify
        if self.verify_prefix is not None:
            return self.verify_prefix
        return get_settings().verify_diff_prefix

    def difference(self, a: Any, b: Any, *, verify: bool | None = None) -> TransformationLog:
        """Transformations in the longer history that the shorter one lacks.

        ``a`` and ``b`` may be versioned values or plain sequences of
        transformations.

        Raises:
            NonPrefixDiffError: verification is on and the shorter history
                is not a prefix of the longer
        """
        shorter, longer = sorted((_history_of(a), _history_of(b)), key=len)

        if self._should_verify(verify):
            mismatch = shorter.first_mismatch(longer)
            if mismatch is not None:
                raise NonPrefixDiffError(
                    shorter_length=len(shorter),
                    longer_length=len(longer),
                    mismatch_index=mismatch,
                ).with_context(operation="difference")

        missing = longer.suffix(len(shorter))
        if logging_configured():
            logger.debug(
                "difference_computed",
                shorter=len(shorter),
                longer=len(longer),
                missing=len(missing),
            )
        return missing


__all__ = ["DiffEngine"]
