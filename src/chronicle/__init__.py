"""
Chronicle - immutable values with replayable transformation history.

- chronicle.versioning: snapshots, transformations, replay, rollback, diff
- chronicle.core: errors, logging, settings
"""

__version__ = "0.1.0"

from chronicle.core import *  # noqa
from chronicle.core import __all__ as _core_all
from chronicle.versioning import *  # noqa
from chronicle.versioning import __all__ as _versioning_all

__all__ = ["__version__", *_core_all, *_versioning_all]
