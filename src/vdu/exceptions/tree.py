"""Aggregation tree exceptions."""

from pathlib import PurePath

from .base import VduError


class TreeError(VduError):
    """Base class for aggregation tree errors."""

    pass


class InsertionPreconditionError(TreeError):
    """Raised when a path is inserted before its parent directory.

    This is a traversal ordering bug, never a recoverable condition.
    """

    def __init__(self, path: PurePath, reason: str):
        super().__init__(
            f"Cannot insert path: {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason
