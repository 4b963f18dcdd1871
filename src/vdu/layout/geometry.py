"""Screen rectangles and split orientation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Direction(Enum):
    """Axis along which a rectangle is cut.

    ``VERTICAL`` cuts with a vertical line, dividing the width;
    ``HORIZONTAL`` cuts with a horizontal line, dividing the height.
    """

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    def next(self) -> Direction:
        if self is Direction.HORIZONTAL:
            return Direction.VERTICAL
        return Direction.HORIZONTAL


@dataclass(frozen=True)
class Rectangle:
    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height

    def divide(self, direction: Direction, left_fraction: float) -> Tuple[Rectangle, Rectangle]:
        """Cut into two rectangles that tile this one exactly.

        The first gets ``left_fraction`` of the extent along ``direction``.
        """
        if direction is Direction.VERTICAL:
            left_width = self.width * left_fraction
            return (
                Rectangle(self.x, self.y, left_width, self.height),
                Rectangle(self.x + left_width, self.y, self.width - left_width, self.height),
            )
        left_height = self.height * left_fraction
        return (
            Rectangle(self.x, self.y, self.width, left_height),
            Rectangle(self.x, self.y + left_height, self.width, self.height - left_height),
        )

    def contains(self, x: float, y: float) -> bool:
        """Half-open containment: a point on a shared edge belongs to one side only."""
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height
