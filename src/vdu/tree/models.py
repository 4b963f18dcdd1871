"""Aggregation tree models.

A ``PathTree`` owns a single root ``PathNode``; every node owns its
children, keyed by the final component of their path. Each node carries the
total logical size of its subtree and the number of nodes beneath it, both
maintained incrementally as paths are inserted.

Paths must arrive ancestor first: the first inserted path becomes the root
and every later path needs its parent directory to be present already.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Dict, ItemsView, Iterator, List, Optional, Tuple, Union

from ..exceptions import InsertionPreconditionError

PathLike = Union[str, "os.PathLike[str]"]


@dataclass
class PathNode:
    """One filesystem entry and the aggregates of everything beneath it.

    Equality compares paths, aggregates and the *set* of children, so two
    trees built in different orders compare equal.
    """

    path: str
    num_bytes: int
    num_descendants: int = 0
    children: Dict[str, PathNode] = field(default_factory=dict, repr=False)

    @property
    def name(self) -> str:
        return PurePath(self.path).name

    @property
    def size(self) -> int:
        """Number of nodes in this subtree, including this one."""
        return self.num_descendants + 1

    @property
    def own_bytes(self) -> int:
        """Bytes contributed by this entry alone, excluding its children."""
        return self.num_bytes - sum(c.num_bytes for c in self.children.values())

    def is_leaf(self) -> bool:
        return not self.children


class PathTree:
    """Hierarchical size index, empty until the first insertion."""

    def __init__(self, root: Optional[PathNode] = None) -> None:
        self._root = root

    @classmethod
    def empty(cls) -> PathTree:
        return cls()

    @property
    def root(self) -> Optional[PathNode]:
        return self._root

    def is_empty(self) -> bool:
        return self._root is None

    def total_size(self) -> int:
        """Total logical bytes of the whole tree."""
        return self._root.num_bytes if self._root is not None else 0

    def total_count(self) -> int:
        """Number of nodes in the tree, the root included."""
        return self._root.size if self._root is not None else 0

    def insert(self, path: PathLike, num_bytes: int) -> PathNode:
        """Add ``path`` with its own logical size and update every ancestor.

        Raises:
            InsertionPreconditionError: if the parent of ``path`` is not in
                the tree, ``path`` lies outside the root, or ``path`` is
                already present.
        """
        if num_bytes < 0:
            raise ValueError(f"num_bytes must be non-negative, got {num_bytes}")

        target = PurePath(os.fspath(path))

        if self._root is None:
            self._root = PathNode(str(target), num_bytes)
            return self._root

        try:
            parts = target.relative_to(self._root.path).parts
        except ValueError:
            raise InsertionPreconditionError(target, f"not beneath root {self._root.path}")
        if not parts:
            raise InsertionPreconditionError(target, "path is the root itself")

        chain: List[PathNode] = [self._root]
        for name in parts[:-1]:
            child = chain[-1].children.get(name)
            if child is None:
                missing = PurePath(chain[-1].path) / name
                raise InsertionPreconditionError(target, f"ancestor {missing} not in tree")
            chain.append(child)

        parent = chain[-1]
        name = parts[-1]
        if name in parent.children:
            raise InsertionPreconditionError(target, "already in tree")

        node = PathNode(str(target), num_bytes)
        parent.children[name] = node
        for ancestor in reversed(chain):
            ancestor.num_descendants += 1
            ancestor.num_bytes += num_bytes
        return node

    def children(self) -> ItemsView[str, PathNode]:
        """(name, node) pairs directly under the root."""
        if self._root is None:
            return {}.items()
        return self._root.children.items()

    @staticmethod
    def children_of(node: PathNode) -> ItemsView[str, PathNode]:
        """(name, node) pairs directly under ``node``.

        The returned view can be iterated any number of times; its order is
        stable for as long as the tree is not modified.
        """
        return node.children.items()

    def iter_nodes(self) -> Iterator[Tuple[int, PathNode]]:
        """Yield ``(depth, node)`` for every node, parents before children."""
        if self._root is None:
            return
        stack: List[Tuple[int, PathNode]] = [(0, self._root)]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            stack.extend((depth + 1, c) for c in reversed(list(node.children.values())))

    def find(self, path: PathLike) -> Optional[PathNode]:
        """Return the node for ``path``, or None if it is not in the tree."""
        if self._root is None:
            return None
        target = PurePath(os.fspath(path))
        try:
            parts = target.relative_to(self._root.path).parts
        except ValueError:
            return None
        node = self._root
        for name in parts:
            child = node.children.get(name)
            if child is None:
                return None
            node = child
        return node

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PathTree):
            return NotImplemented
        return self._root == other._root

    def __repr__(self) -> str:
        return f"PathTree(nodes={self.total_count()}, bytes={self.total_size()})"

    def __str__(self) -> str:
        if self._root is None:
            return "(empty)\n"
        lines = [
            f"{' ' * (depth * 4)}{node.path} {node.num_bytes} ({node.num_descendants})"
            for depth, node in self.iter_nodes()
        ]
        return "\n".join(lines) + "\n"
