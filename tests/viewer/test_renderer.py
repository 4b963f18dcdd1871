"""Tests for the frame driver, using a recording surface."""

import pytest

from conftest import build_tree
from vdu.layout import Rectangle, color_for_path, hit_test, layout_leaves
from vdu.tree import PathTree
from vdu.viewer import FramePhase, TreemapRenderer, ViewerState


class RecordingSurface:
    """Surface that remembers every drawing call."""

    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.calls = []

    def clear(self):
        self.calls.append(("clear",))

    def fill_rect(self, rect, color):
        self.calls.append(("fill", rect, color))

    def stroke_rect(self, rect):
        self.calls.append(("stroke", rect))

    def draw_label(self, text, x, y):
        self.calls.append(("label", text, x, y))

    def of_kind(self, kind):
        return [call for call in self.calls if call[0] == kind]


@pytest.fixture
def renderer(two_file_tree):
    return TreemapRenderer(ViewerState(two_file_tree))


class TestRender:
    def test_frame_starts_with_clear(self, renderer):
        surface = RecordingSurface(200, 120)
        renderer.render(surface)
        assert surface.calls[0] == ("clear",)

    def test_fills_every_leaf_above_label_strip(self, renderer):
        surface = RecordingSurface(200, 120)
        renderer.render(surface)
        fills = surface.of_kind("fill")
        assert [rect for _, rect, _ in fills] == [
            Rectangle(0, 0, 50, 100),
            Rectangle(50, 0, 150, 100),
        ]
        assert fills[0][2] == color_for_path("/data/small")
        assert fills[1][2] == color_for_path("/data/large")

    def test_pointer_selects_leaf(self, renderer):
        renderer.state.on_pointer_move(100, 50)
        surface = RecordingSurface(200, 120)

        selected = renderer.render(surface)

        assert selected == "/data/large"
        assert renderer.state.selected == "/data/large"
        assert surface.of_kind("stroke") == [("stroke", Rectangle(50, 0, 150, 100))]
        assert surface.of_kind("label") == [("label", "/data/large", 0.0, 120)]

    def test_outline_drawn_after_every_fill(self, renderer):
        renderer.state.on_pointer_move(10, 10)
        surface = RecordingSurface(200, 120)
        renderer.render(surface)
        kinds = [call[0] for call in surface.calls]
        assert kinds.index("stroke") > max(i for i, k in enumerate(kinds) if k == "fill")

    @pytest.mark.parametrize("point", [(0, 0), (49.9, 99.9), (50, 0), (199.9, 50), (200, 50)])
    def test_selection_matches_hit_test(self, renderer, point):
        renderer.state.on_pointer_move(*point)
        selected = renderer.render(RecordingSurface(200, 120))
        cells = layout_leaves(renderer.state.tree, Rectangle(0, 0, 200, 100))
        hit = hit_test(cells, *point)
        assert selected == (hit.path if hit is not None else None)

    def test_label_is_drawn_after_fills(self, renderer):
        renderer.state.on_pointer_move(10, 10)
        surface = RecordingSurface(200, 120)
        renderer.render(surface)
        assert surface.calls[-1][0] == "label"

    def test_no_pointer_no_selection(self, renderer):
        surface = RecordingSurface(200, 120)
        assert renderer.render(surface) is None
        assert surface.of_kind("stroke") == []
        assert surface.of_kind("label") == []

    def test_pointer_in_label_strip_selects_nothing(self, renderer):
        renderer.state.on_pointer_move(100, 110)
        surface = RecordingSurface(200, 120)
        assert renderer.render(surface) is None
        assert surface.of_kind("label") == []

    def test_selection_clears_when_pointer_leaves(self, renderer):
        renderer.state.on_pointer_move(10, 10)
        renderer.render(RecordingSurface(200, 120))
        assert renderer.state.selected == "/data/small"

        renderer.state.on_pointer_move(500, 500)
        renderer.render(RecordingSurface(200, 120))
        assert renderer.state.selected is None

    def test_shared_edge_selects_one_leaf(self, renderer):
        renderer.state.on_pointer_move(50, 50)
        surface = RecordingSurface(200, 120)
        assert renderer.render(surface) == "/data/large"
        assert len(surface.of_kind("stroke")) == 1

    def test_every_frame_redraws_everything(self, renderer):
        surface = RecordingSurface(200, 120)
        renderer.render(surface)
        first = list(surface.calls)
        surface.calls.clear()
        renderer.render(surface)
        assert surface.calls == first

    def test_layout_follows_surface_size(self, renderer):
        surface = RecordingSurface(400, 220)
        renderer.render(surface)
        rects = [rect for _, rect, _ in surface.of_kind("fill")]
        assert rects == [Rectangle(0, 0, 100, 200), Rectangle(100, 0, 300, 200)]

    def test_small_viewport_paints_root(self, renderer):
        surface = RecordingSurface(60, 70)
        renderer.render(surface)
        [(_, rect, _)] = surface.of_kind("fill")
        assert rect == Rectangle(0, 0, 60, 50)

    def test_empty_tree_clears_only(self):
        renderer = TreemapRenderer(ViewerState(PathTree.empty()))
        surface = RecordingSurface(200, 120)
        assert renderer.render(surface) is None
        assert surface.calls == [("clear",)]

    def test_custom_threshold_and_strip(self):
        tree = build_tree([("/r", 0), ("/r/a", 1), ("/r/b", 1)])
        renderer = TreemapRenderer(ViewerState(tree), min_cell_area=1.0, label_strip_height=0.0)
        surface = RecordingSurface(10, 10)
        renderer.render(surface)
        assert len(surface.of_kind("fill")) == 2


class TestFramePhase:
    def test_initially_idle(self, two_file_tree):
        assert ViewerState(two_file_tree).phase is FramePhase.IDLE

    def test_schedule(self, renderer):
        renderer.schedule()
        assert renderer.state.phase is FramePhase.SCHEDULED

    def test_render_schedules_next_frame(self, renderer):
        renderer.render(RecordingSurface(200, 120))
        assert renderer.state.phase is FramePhase.SCHEDULED

    def test_painting_during_render(self, renderer):
        phases = []

        class PhaseSurface(RecordingSurface):
            def fill_rect(self, rect, color):
                phases.append(renderer.state.phase)

        renderer.render(PhaseSurface(200, 120))
        assert phases and all(p is FramePhase.PAINTING for p in phases)

    def test_next_frame_scheduled_even_if_surface_fails(self, renderer):
        class BrokenSurface(RecordingSurface):
            def fill_rect(self, rect, color):
                raise RuntimeError("surface lost")

        with pytest.raises(RuntimeError):
            renderer.render(BrokenSurface(200, 120))
        assert renderer.state.phase is FramePhase.SCHEDULED


class TestViewerState:
    def test_events_only_update_state(self, two_file_tree):
        state = ViewerState(two_file_tree)
        state.on_pointer_move(3.5, 4.5)
        state.on_resize(640, 480)
        assert state.pointer == (3.5, 4.5)
        assert state.viewport == (640, 480)
        assert state.selected is None
