"""Treemap layout: proportional rectangle subdivision and leaf coloring."""

from .colors import COLOR_PALETTE, color_for_path
from .geometry import Direction, Rectangle
from .treemap import MIN_CELL_AREA, LeafCell, divide, hit_test, layout_leaves, split_fraction

__all__ = [
    "COLOR_PALETTE",
    "color_for_path",
    "Direction",
    "Rectangle",
    "MIN_CELL_AREA",
    "LeafCell",
    "divide",
    "hit_test",
    "layout_leaves",
    "split_fraction",
]
