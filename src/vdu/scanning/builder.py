"""Build an aggregation tree from a directory walk."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Optional, Tuple

from ..exceptions import RootNotFoundError
from ..logging_config import get_logger
from ..tree import PathTree
from .walk import walk_entries

logger = get_logger(__name__)

Walker = Callable[[Path], Iterable[Tuple[Path, int]]]
ProgressCallback = Callable[[int], None]


def format_size(num_bytes: float) -> str:
    """Format bytes into human-readable form."""
    if num_bytes == 0:
        return "0 B"

    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if num_bytes < 1024.0:
            return f"{num_bytes:.2f} {unit}" if unit != "B" else f"{int(num_bytes)} B"
        num_bytes /= 1024.0
    return f"{num_bytes:.2f} PB"


def build_tree_from_path(
    path: Path,
    walker: Walker = walk_entries,
    progress: Optional[ProgressCallback] = None,
) -> PathTree:
    """Scan ``path`` and return a completed tree.

    The walker must yield parents before their contents; entries are
    inserted in the order they arrive.

    Args:
        path: Root of the scan
        walker: Source of ``(path, size)`` pairs
        progress: Called with the running entry count after every insert

    Raises:
        RootNotFoundError: If ``path`` does not exist
        InsertionPreconditionError: If the walker breaks ancestor-first order
    """
    logger.info('scanning "%s"', path)

    if not path.exists():
        raise RootNotFoundError(path)

    tree = PathTree.empty()
    count = 0
    for entry_path, num_bytes in walker(path):
        tree.insert(entry_path, num_bytes)
        count += 1
        if progress is not None:
            progress(count)

    logger.info("found %s files", f"{tree.total_count():,}")
    logger.info("total of %s", format_size(tree.total_size()))

    return tree
