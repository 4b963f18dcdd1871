"""In-memory bundle of the web viewer's files.

Files are held as named byte blobs keyed by their path relative to the
bundle root (``index.html``, ``viewer.js``), loaded either from a
directory or from a tar archive.
"""

from __future__ import annotations

import io
import tarfile
from pathlib import Path, PurePosixPath
from typing import Dict, Optional, Tuple

from ..exceptions import ConfigurationError
from ..logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_DOCUMENT = "index.html"
DEFAULT_BUNDLE_DIR = Path(__file__).parent / "static"

_MIME_TYPES = {
    "wasm": "application/wasm",
    "js": "text/javascript",
    "html": "text/html",
    "css": "text/css",
    "json": "application/json",
    "svg": "image/svg+xml",
}
_FALLBACK_MIME = "application/octet-stream"


def mime_for_path(path: str) -> str:
    """Best-effort content type from the file extension."""
    suffix = PurePosixPath(path).suffix.lower().lstrip(".")
    mime = _MIME_TYPES.get(suffix)
    if mime is None:
        logger.warning("mime for '%s' unknown", path)
        return _FALLBACK_MIME
    return mime


def _normalize(name: str) -> Optional[str]:
    """Canonical bundle key for an archive member or request path."""
    parts = [p for p in PurePosixPath(name).parts if p not in ("/", ".")]
    if not parts or ".." in parts:
        return None
    return "/".join(parts)


class StaticBundle:
    """Named files served by the web viewer endpoint."""

    def __init__(self, files: Dict[str, bytes]) -> None:
        self._files = files

    @classmethod
    def from_directory(cls, directory: Path = DEFAULT_BUNDLE_DIR) -> StaticBundle:
        if not directory.is_dir():
            raise ConfigurationError(f"Bundle directory not found: {directory}")
        files = {
            path.relative_to(directory).as_posix(): path.read_bytes()
            for path in sorted(directory.rglob("*"))
            if path.is_file()
        }
        logger.debug("loaded %d bundle files from %s", len(files), directory)
        return cls(files)

    @classmethod
    def from_tar(cls, data: bytes) -> StaticBundle:
        files: Dict[str, bytes] = {}
        try:
            with tarfile.open(fileobj=io.BytesIO(data)) as archive:
                for member in archive.getmembers():
                    if not member.isfile():
                        continue
                    key = _normalize(member.name)
                    extracted = archive.extractfile(member)
                    if key is None or extracted is None:
                        continue
                    files[key] = extracted.read()
        except tarfile.TarError as e:
            raise ConfigurationError(f"Invalid bundle archive: {e}")
        logger.debug("loaded %d bundle files from archive", len(files))
        return cls(files)

    @classmethod
    def load(cls, bundle_path: Optional[str] = None) -> StaticBundle:
        """Bundle named by configuration, or the one shipped with the package."""
        if bundle_path is None:
            return cls.from_directory()
        path = Path(bundle_path)
        if path.is_dir():
            return cls.from_directory(path)
        try:
            return cls.from_tar(path.read_bytes())
        except OSError as e:
            raise ConfigurationError(f"Cannot read bundle {path}: {e}")

    def names(self) -> list[str]:
        return sorted(self._files)

    def get(self, request_path: str) -> Optional[Tuple[bytes, str]]:
        """Body and content type for ``request_path``; the root maps to index.html."""
        if request_path.strip("/") == "":
            key: Optional[str] = DEFAULT_DOCUMENT
        else:
            key = _normalize(request_path)
        if key is None or key not in self._files:
            return None
        return self._files[key], mime_for_path(key)
