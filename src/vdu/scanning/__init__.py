"""Filesystem traversal and tree construction."""

from .builder import build_tree_from_path
from .walk import walk_entries

__all__ = ["build_tree_from_path", "walk_entries"]
