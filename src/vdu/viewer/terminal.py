"""Textual host for the treemap viewer.

Each character cell stands for a fixed block of virtual pixels, so the
layout and its minimum cell area behave the same as on a pixel canvas.
A cell takes the color of the leaf rectangle containing its center.

Layout:
┌──────────────────────────────────────────────┐
│██████████████▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓│
│██████████████▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓│  treemap
│░░░░░░░░░░░░░░▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓│
├──────────────────────────────────────────────┤
│/home/me/videos/holiday.mkv                   │  label strip
└──────────────────────────────────────────────┘
"""

from __future__ import annotations

import math
from typing import List, Optional

from rich.style import Style
from rich.text import Text
from textual import events
from textual.app import App, ComposeResult, RenderResult
from textual.binding import Binding
from textual.widget import Widget
from textual.widgets import Footer

from ..config import VduConfig
from ..layout import Rectangle
from ..layout.colors import PaletteColor
from ..tree import PathTree
from .renderer import TreemapRenderer, ViewerState

OUTLINE_CHAR = "░"
OUTLINE_COLOR = "#000000"


class CellSurface:
    """A grid of terminal cells addressed in virtual pixels."""

    def __init__(self, columns: int, rows: int, cell_width: int, cell_height: int) -> None:
        self.columns = columns
        self.rows = rows
        self.cell_width = cell_width
        self.cell_height = cell_height
        self._chars: List[List[str]] = []
        self._styles: List[List[Optional[Style]]] = []
        self.clear()

    @property
    def width(self) -> float:
        return float(self.columns * self.cell_width)

    @property
    def height(self) -> float:
        return float(self.rows * self.cell_height)

    def clear(self) -> None:
        self._chars = [[" "] * self.columns for _ in range(self.rows)]
        self._styles = [[None] * self.columns for _ in range(self.rows)]

    def _covered(self, rect: Rectangle) -> tuple[range, range]:
        """Columns and rows whose cell centers fall inside ``rect``."""
        first_col = max(math.ceil(rect.x / self.cell_width - 0.5), 0)
        end_col = min(math.ceil((rect.x + rect.width) / self.cell_width - 0.5), self.columns)
        first_row = max(math.ceil(rect.y / self.cell_height - 0.5), 0)
        end_row = min(math.ceil((rect.y + rect.height) / self.cell_height - 0.5), self.rows)
        return range(first_col, end_col), range(first_row, end_row)

    def fill_rect(self, rect: Rectangle, color: PaletteColor) -> None:
        cols, rows = self._covered(rect)
        style = Style(bgcolor=color.hex)
        for row in rows:
            for col in cols:
                self._chars[row][col] = " "
                self._styles[row][col] = style

    def stroke_rect(self, rect: Rectangle) -> None:
        cols, rows = self._covered(rect)
        if not cols or not rows:
            return
        outline = Style(color=OUTLINE_COLOR)
        for row in rows:
            for col in cols:
                on_edge = row in (rows[0], rows[-1]) or col in (cols[0], cols[-1])
                if on_edge:
                    self._chars[row][col] = OUTLINE_CHAR
                    base = self._styles[row][col]
                    self._styles[row][col] = base + outline if base else outline

    def draw_label(self, text: str, x: float, y: float) -> None:
        if not self.rows:
            return
        row = min(max(int(y // self.cell_height), 0), self.rows - 1)
        col = max(int(x // self.cell_width), 0)
        for offset, char in enumerate(text[: max(self.columns - col, 0)]):
            self._chars[row][col + offset] = char
            self._styles[row][col + offset] = Style(bold=True)

    def char_at(self, col: int, row: int) -> str:
        return self._chars[row][col]

    def style_at(self, col: int, row: int) -> Optional[Style]:
        return self._styles[row][col]

    def to_text(self) -> Text:
        lines = []
        for chars, styles in zip(self._chars, self._styles):
            line = Text()
            for char, style in zip(chars, styles):
                line.append(char, style)
            lines.append(line)
        return Text("\n").join(lines)


class TreemapWidget(Widget):
    """Redraws the treemap on a fixed frame timer."""

    DEFAULT_CSS = """
    TreemapWidget {
        width: 1fr;
        height: 1fr;
    }
    """

    def __init__(self, renderer: TreemapRenderer, config: VduConfig) -> None:
        super().__init__()
        self.renderer = renderer
        self.config = config

    @property
    def state(self) -> ViewerState:
        return self.renderer.state

    def on_mount(self) -> None:
        self.renderer.schedule()
        self.set_interval(self.config.frame_interval, self.refresh)

    def on_resize(self, event: events.Resize) -> None:
        self.state.on_resize(
            event.size.width * self.config.cell_width_px,
            event.size.height * self.config.cell_height_px,
        )

    def on_mouse_move(self, event: events.MouseMove) -> None:
        # Center of the hovered cell
        self.state.on_pointer_move(
            (event.x + 0.5) * self.config.cell_width_px,
            (event.y + 0.5) * self.config.cell_height_px,
        )

    def render(self) -> RenderResult:
        width, height = self.state.viewport
        surface = CellSurface(
            int(width // self.config.cell_width_px),
            int(height // self.config.cell_height_px),
            self.config.cell_width_px,
            self.config.cell_height_px,
        )
        self.renderer.render(surface)
        return surface.to_text()


class TreemapApp(App):
    """Full-screen terminal treemap of a snapshot."""

    TITLE = "vdu"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, tree: PathTree, config: Optional[VduConfig] = None) -> None:
        super().__init__()
        self.config = config or VduConfig()
        self.renderer = TreemapRenderer(
            ViewerState(tree),
            min_cell_area=self.config.min_cell_area,
            label_strip_height=self.config.label_strip_height,
        )

    def compose(self) -> ComposeResult:
        yield TreemapWidget(self.renderer, self.config)
        yield Footer()
