"""
vdu - visual disk usage

Scans a directory tree into a size-aggregating index and renders it as an
interactive treemap, in a browser or in the terminal.
"""

__version__ = "0.1.0"

from .scanning import build_tree_from_path
from .snapshot import decode, encode
from .tree import PathNode, PathTree

__all__ = [
    "build_tree_from_path",
    "encode",
    "decode",
    "PathNode",
    "PathTree",
]
