"""Snapshot transfer exceptions: corrupt payloads and failed fetches."""

from typing import Optional

from .base import VduError


class CorruptSnapshotError(VduError):
    """Raised when a snapshot payload fails structural validation."""

    def __init__(self, reason: str, offset: Optional[int] = None):
        details = {"reason": reason}
        if offset is not None:
            details["node"] = str(offset)
        super().__init__("Corrupt snapshot payload", details=details)
        self.reason = reason
        self.offset = offset


class SnapshotFetchError(VduError):
    """Raised when a snapshot cannot be downloaded from a server."""

    def __init__(self, url: str, reason: str):
        super().__init__(
            f"Cannot fetch snapshot from {url}",
            details={"url": url, "reason": reason},
        )
        self.url = url
        self.reason = reason
