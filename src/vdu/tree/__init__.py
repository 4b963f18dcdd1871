"""Aggregation tree: size and count statistics for a filesystem subtree."""

from .models import PathNode, PathTree

__all__ = ["PathNode", "PathTree"]
