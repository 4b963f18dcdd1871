"""Recursive treemap layout.

A node's children are split positionally in two halves (first half by
enumeration order gets the extra element), the rectangle is cut in
proportion to the byte totals of the halves, and each half recurses with
the other orientation until single children remain. Enumeration order
therefore shapes the layout: it is stable for one tree instance, not
across independently built or decoded trees.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from ..logging_config import get_logger
from ..tree import PathNode, PathTree
from .geometry import Direction, Rectangle

logger = get_logger(__name__)

MIN_CELL_AREA = 10_000.0

Entry = Tuple[str, PathNode]


@dataclass(frozen=True)
class LeafCell:
    """A rectangle painted as one colored cell."""

    rect: Rectangle
    node: PathNode

    @property
    def path(self) -> str:
        return self.node.path


def split_fraction(left_sum: int, right_sum: int) -> float:
    """Share of the extent owed to the left half; 0.5 when both halves are empty."""
    total = left_sum + right_sum
    if total == 0:
        logger.debug("zero-size sibling group, splitting evenly")
        return 0.5
    return left_sum / total


def divide(
    rect: Rectangle,
    nodes: Sequence[Entry],
    direction: Direction = Direction.VERTICAL,
) -> List[Tuple[Rectangle, str, PathNode]]:
    """Assign each (name, node) a sub-rectangle of ``rect`` sized by its bytes."""
    if not nodes:
        return []
    if len(nodes) == 1:
        name, node = nodes[0]
        return [(rect, name, node)]

    middle = (len(nodes) + 1) // 2
    left_nodes, right_nodes = nodes[:middle], nodes[middle:]

    left_sum = sum(n.num_bytes for _, n in left_nodes)
    right_sum = sum(n.num_bytes for _, n in right_nodes)
    left_rect, right_rect = rect.divide(direction, split_fraction(left_sum, right_sum))

    return divide(left_rect, left_nodes, direction.next()) + divide(
        right_rect, right_nodes, direction.next()
    )


def layout_leaves(
    tree: PathTree,
    viewport: Rectangle,
    min_area: float = MIN_CELL_AREA,
) -> List[LeafCell]:
    """Lay the whole tree out in ``viewport`` and return its leaf cells.

    A node becomes a cell when it has no children or when its rectangle is
    smaller than ``min_area``; otherwise its children are divided starting
    with a vertical cut. Cells come back in painting order.
    """
    if tree.root is None:
        return []

    cells: List[LeafCell] = []
    stack: List[Tuple[Rectangle, PathNode]] = [(viewport, tree.root)]
    while stack:
        rect, node = stack.pop()
        children = list(tree.children_of(node))
        if not children or rect.area < min_area:
            cells.append(LeafCell(rect, node))
            continue
        placed = divide(rect, children, Direction.VERTICAL)
        stack.extend((r, child) for r, _, child in reversed(placed))
    return cells


def hit_test(cells: Iterable[LeafCell], x: float, y: float) -> LeafCell | None:
    """Return the cell containing (x, y), if any."""
    for cell in cells:
        if cell.rect.contains(x, y):
            return cell
    return None
