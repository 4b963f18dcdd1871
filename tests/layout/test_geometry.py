"""Tests for rectangles and orientation."""

import pytest

from vdu.layout import Direction, Rectangle


class TestDirection:
    def test_alternates(self):
        assert Direction.VERTICAL.next() is Direction.HORIZONTAL
        assert Direction.HORIZONTAL.next() is Direction.VERTICAL


class TestRectangle:
    def test_vertical_divide_splits_width(self):
        left, right = Rectangle(0, 0, 200, 100).divide(Direction.VERTICAL, 0.25)
        assert left == Rectangle(0, 0, 50, 100)
        assert right == Rectangle(50, 0, 150, 100)

    def test_horizontal_divide_splits_height(self):
        top, bottom = Rectangle(10, 20, 40, 80).divide(Direction.HORIZONTAL, 0.5)
        assert top == Rectangle(10, 20, 40, 40)
        assert bottom == Rectangle(10, 60, 40, 40)

    @pytest.mark.parametrize("fraction", [0.0, 0.1, 1 / 3, 0.999, 1.0])
    def test_halves_tile_the_rectangle(self, fraction):
        rect = Rectangle(3.5, 7.25, 123.4, 56.7)
        for direction in Direction:
            a, b = rect.divide(direction, fraction)
            assert a.area + b.area == pytest.approx(rect.area)
            assert a.x == rect.x and a.y == rect.y
            assert b.x + b.width == pytest.approx(rect.x + rect.width)
            assert b.y + b.height == pytest.approx(rect.y + rect.height)

    def test_contains_is_half_open(self):
        rect = Rectangle(0, 0, 10, 10)
        assert rect.contains(0, 0)
        assert rect.contains(9.99, 9.99)
        assert not rect.contains(10, 5)
        assert not rect.contains(5, 10)
        assert not rect.contains(-0.01, 5)

    def test_shared_edge_belongs_to_one_side(self):
        left, right = Rectangle(0, 0, 200, 100).divide(Direction.VERTICAL, 0.25)
        assert not left.contains(50, 10)
        assert right.contains(50, 10)

    def test_area(self):
        assert Rectangle(1, 1, 4, 2.5).area == 10
