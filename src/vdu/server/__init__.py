"""HTTP server for snapshots and the web viewer bundle."""

from .app import create_app
from .bundle import StaticBundle, mime_for_path

__all__ = ["create_app", "StaticBundle", "mime_for_path"]
