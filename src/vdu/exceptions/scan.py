"""Filesystem scan exceptions: missing roots and unreadable entries."""

from pathlib import Path

from .base import VduError


class RootNotFoundError(VduError):
    """Raised when the scan root does not exist."""

    def __init__(self, path: Path):
        super().__init__(f"Scan root not found: {path}", details={"path": str(path)})
        self.path = path


class EntryAccessError(VduError):
    """A single entry could not be listed or stat-ed.

    Never propagated out of a scan; the walker logs it and moves on.
    """

    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"Cannot access path: {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason
