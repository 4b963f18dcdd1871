"""Snapshot codec.

Layout of an encoded snapshot::

    magic    4 bytes   b"VDUT"
    version  1 byte    FORMAT_VERSION
    crc32    4 bytes   big endian, CRC-32 of body
    length   4 bytes   big endian, length of body
    body     zlib-compressed UTF-8 JSON

The JSON body is ``{"nodes": [[path, num_bytes, num_descendants, parent], ...]}``
with nodes in pre-order and ``parent`` the index of the parent row (-1 for
the root). A flat table keeps both directions free of recursion.

``decode`` either returns a tree that satisfies every aggregate invariant
or raises ``CorruptSnapshotError``; it never returns a partial tree.
"""

from __future__ import annotations

import json
import struct
import zlib
from pathlib import PurePath
from typing import Any, List

from ..exceptions import CorruptSnapshotError
from ..logging_config import get_logger
from ..tree import PathNode, PathTree

logger = get_logger(__name__)

MAGIC = b"VDUT"
FORMAT_VERSION = 1
CONTENT_TYPE = "application/octet-stream"

_HEADER = struct.Struct(">4sBII")


def encode(tree: PathTree) -> bytes:
    """Serialise ``tree`` into a self-describing binary payload."""
    rows: List[list] = []
    if tree.root is not None:
        # (node, parent index) in pre-order
        stack = [(tree.root, -1)]
        while stack:
            node, parent = stack.pop()
            index = len(rows)
            rows.append([node.path, node.num_bytes, node.num_descendants, parent])
            stack.extend((c, index) for c in reversed(list(node.children.values())))

    body = zlib.compress(
        json.dumps({"nodes": rows}, separators=(",", ":")).encode("ascii")
    )
    header = _HEADER.pack(MAGIC, FORMAT_VERSION, zlib.crc32(body), len(body))
    logger.debug("encoded %d nodes into %d bytes", len(rows), _HEADER.size + len(body))
    return header + body


def decode(data: bytes) -> PathTree:
    """Rebuild a tree from ``encode`` output.

    Raises:
        CorruptSnapshotError: If any structural or invariant check fails
    """
    if len(data) < _HEADER.size:
        raise CorruptSnapshotError(f"payload too short ({len(data)} bytes)")

    magic, version, crc, length = _HEADER.unpack_from(data)
    if magic != MAGIC:
        raise CorruptSnapshotError(f"bad magic {magic!r}")
    if version != FORMAT_VERSION:
        raise CorruptSnapshotError(f"unsupported format version {version}")

    body = data[_HEADER.size :]
    if len(body) != length:
        raise CorruptSnapshotError(f"body is {len(body)} bytes, header says {length}")
    if zlib.crc32(body) != crc:
        raise CorruptSnapshotError("checksum mismatch")

    try:
        document = json.loads(zlib.decompress(body).decode("utf-8"))
    except (zlib.error, UnicodeDecodeError, ValueError, RecursionError) as e:
        raise CorruptSnapshotError(f"undecodable body: {e}")

    if not isinstance(document, dict) or not isinstance(document.get("nodes"), list):
        raise CorruptSnapshotError("missing node table")

    return _build_tree(document["nodes"])


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _build_tree(rows: list) -> PathTree:
    nodes: List[PathNode] = []

    for index, row in enumerate(rows):
        if not isinstance(row, list) or len(row) != 4:
            raise CorruptSnapshotError("malformed node row", index)
        path, num_bytes, num_descendants, parent = row
        if not isinstance(path, str) or not path:
            raise CorruptSnapshotError("node path is not a string", index)
        if not _is_count(num_bytes) or not _is_count(num_descendants):
            raise CorruptSnapshotError("node aggregates are not non-negative integers", index)
        if not isinstance(parent, int) or isinstance(parent, bool):
            raise CorruptSnapshotError("parent index is not an integer", index)

        node = PathNode(path, num_bytes, num_descendants)
        if index == 0:
            if parent != -1:
                raise CorruptSnapshotError("first node is not the root", index)
        else:
            if not 0 <= parent < index:
                raise CorruptSnapshotError(f"parent index {parent} out of range", index)
            parent_node = nodes[parent]
            child_path = PurePath(path)
            if child_path.parent != PurePath(parent_node.path) or child_path == child_path.parent:
                raise CorruptSnapshotError(
                    f"{path} is not a direct child of {parent_node.path}", index
                )
            name = child_path.name
            if name in parent_node.children:
                raise CorruptSnapshotError(f"duplicate child {name!r}", index)
            parent_node.children[name] = node

        nodes.append(node)

    # Children always follow their parent, so walking backwards sees every
    # subtree complete before the node that owns it.
    for index in range(len(nodes) - 1, -1, -1):
        node = nodes[index]
        children = node.children.values()
        if node.num_descendants != sum(c.num_descendants + 1 for c in children):
            raise CorruptSnapshotError("descendant count does not match children", index)
        if node.num_bytes < sum(c.num_bytes for c in children):
            raise CorruptSnapshotError("aggregate size smaller than its children", index)

    return PathTree(nodes[0] if nodes else None)
