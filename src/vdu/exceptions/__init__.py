"""Exception hierarchy for vdu."""

from .base import VduError
from .config import ConfigurationError, InvalidConfigError
from .scan import EntryAccessError, RootNotFoundError
from .snapshot import CorruptSnapshotError, SnapshotFetchError
from .tree import InsertionPreconditionError, TreeError

__all__ = [
    "VduError",
    "ConfigurationError",
    "InvalidConfigError",
    "RootNotFoundError",
    "EntryAccessError",
    "TreeError",
    "InsertionPreconditionError",
    "CorruptSnapshotError",
    "SnapshotFetchError",
]
