"""
Chronicle versioning - immutable snapshots with replayable history.

Components (leaf to root):
- transformation: Transformation command objects and the @transformation factory
- log: TransformationLog, the immutable ordered history
- model: StateModel, how host state is built and copied
- value: VersionedValue (immutable) / MutableVersionedValue (builder)
- replay: ReplayEngine, the single path through which state changes
- diff: DiffEngine, positional suffix between prefix-related histories
- api: module-level operations
"""

from chronicle.versioning.api import (
    construct,
    construct_mutable,
    describe,
    difference,
    equal,
    freeze,
    mutable,
    reconstruct,
    replay,
    rollback,
    to_mutable,
    transform,
)
from chronicle.versioning.diff import DiffEngine
from chronicle.versioning.log import TransformationLog
from chronicle.versioning.model import StateModel
from chronicle.versioning.replay import ReplayEngine
from chronicle.versioning.transformation import (
    Applicable,
    Transformation,
    as_transformation,
    transformation,
)
from chronicle.versioning.value import Mode, MutableVersionedValue, VersionedValue

__all__ = [
    # Operations
    "construct",
    "construct_mutable",
    "describe",
    "difference",
    "equal",
    "freeze",
    "mutable",
    "reconstruct",
    "replay",
    "rollback",
    "to_mutable",
    "transform",
    # Engines
    "DiffEngine",
    "ReplayEngine",
    # Types
    "Applicable",
    "Mode",
    "MutableVersionedValue",
    "StateModel",
    "Transformation",
    "TransformationLog",
    "VersionedValue",
    "as_transformation",
    "transformation",
]
