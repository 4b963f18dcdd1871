"""Frame driver for the treemap viewer.

Hosts own the drawing surface and the frame clock. On every frame they call
:meth:`TreemapRenderer.render`, which lays out the whole tree again for the
current viewport, paints every leaf, outlines the leaf under the pointer and
writes its path into the label strip. Pointer and resize events only update
:class:`ViewerState`; they never paint.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, Tuple

from ..layout import MIN_CELL_AREA, Rectangle, color_for_path, hit_test, layout_leaves
from ..layout.colors import PaletteColor
from ..tree import PathTree

LABEL_STRIP_HEIGHT = 20.0


class FramePhase(Enum):
    IDLE = "idle"
    SCHEDULED = "scheduled"
    PAINTING = "painting"


class Surface(Protocol):
    """Drawing target for one frame, measured in pixels."""

    @property
    def width(self) -> float: ...

    @property
    def height(self) -> float: ...

    def clear(self) -> None: ...

    def fill_rect(self, rect: Rectangle, color: PaletteColor) -> None: ...

    def stroke_rect(self, rect: Rectangle) -> None: ...

    def draw_label(self, text: str, x: float, y: float) -> None: ...


@dataclass
class ViewerState:
    """Everything the frame loop reads, shared with the event handlers."""

    tree: PathTree
    pointer: Optional[Tuple[float, float]] = None
    viewport: Tuple[float, float] = (0.0, 0.0)
    selected: Optional[str] = None
    phase: FramePhase = FramePhase.IDLE

    def on_pointer_move(self, x: float, y: float) -> None:
        self.pointer = (x, y)

    def on_resize(self, width: float, height: float) -> None:
        self.viewport = (width, height)


class TreemapRenderer:
    """Paints a :class:`ViewerState` onto a :class:`Surface`, one frame at a time."""

    def __init__(
        self,
        state: ViewerState,
        min_cell_area: float = MIN_CELL_AREA,
        label_strip_height: float = LABEL_STRIP_HEIGHT,
    ) -> None:
        self.state = state
        self.min_cell_area = min_cell_area
        self.label_strip_height = label_strip_height

    def schedule(self) -> None:
        """Mark the next frame as pending; the host decides when it runs."""
        self.state.phase = FramePhase.SCHEDULED

    def render(self, surface: Surface) -> Optional[str]:
        """Paint one frame and return the selected path, if any."""
        state = self.state
        state.phase = FramePhase.PAINTING
        try:
            surface.clear()

            viewport = Rectangle(
                0.0,
                0.0,
                surface.width,
                max(surface.height - self.label_strip_height, 0.0),
            )
            cells = layout_leaves(state.tree, viewport, self.min_cell_area)
            for cell in cells:
                surface.fill_rect(cell.rect, color_for_path(cell.path))

            selected = None
            if state.pointer is not None:
                hovered = hit_test(cells, *state.pointer)
                if hovered is not None:
                    surface.stroke_rect(hovered.rect)
                    surface.draw_label(hovered.path, 0.0, surface.height)
                    selected = hovered.path
            state.selected = selected
            return selected
        finally:
            self.schedule()
