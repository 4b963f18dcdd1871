"""Error-tolerant directory walk.

Yields every entry under a root as ``(path, logical size)``, directories
before their contents, without following symlinks or leaving the root's
filesystem. Entries that cannot be stat-ed or listed are logged and skipped.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Iterator, List, Tuple

from ..exceptions import EntryAccessError
from ..logging_config import get_logger

logger = get_logger(__name__)


def log_path_error(error: EntryAccessError) -> None:
    logger.warning("cannot access path %s (%s)", error.path, error.reason)


def walk_entries(root: Path, same_file_system: bool = True) -> Iterator[Tuple[Path, int]]:
    """Walk ``root`` depth first in pre-order.

    Args:
        root: Directory or file to start from; it is yielded first
        same_file_system: Do not descend into directories on another device

    Yields:
        ``(path, st_size)`` for every entry that could be stat-ed
    """
    try:
        root_stat = root.lstat()
    except OSError as e:
        log_path_error(EntryAccessError(root, e.strerror or str(e)))
        return

    yield root, root_stat.st_size
    if not stat.S_ISDIR(root_stat.st_mode):
        return

    root_dev = root_stat.st_dev
    stack: List[Path] = [root]
    while stack:
        directory = stack.pop()
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as e:
            log_path_error(EntryAccessError(directory, e.strerror or str(e)))
            continue

        subdirs: List[Path] = []
        for entry in entries:
            path = Path(entry.path)
            try:
                st = entry.stat(follow_symlinks=False)
            except OSError as e:
                log_path_error(EntryAccessError(path, e.strerror or str(e)))
                continue

            yield path, st.st_size

            if stat.S_ISDIR(st.st_mode):
                if same_file_system and st.st_dev != root_dev:
                    logger.debug("not crossing into other filesystem at %s", path)
                    continue
                subdirs.append(path)

        # Reversed so the first listed subdirectory is walked first
        stack.extend(reversed(subdirs))
