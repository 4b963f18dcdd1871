"""Interactive treemap viewer."""

from .client import fetch_snapshot
from .renderer import FramePhase, Surface, TreemapRenderer, ViewerState

__all__ = ["fetch_snapshot", "FramePhase", "Surface", "TreemapRenderer", "ViewerState"]
