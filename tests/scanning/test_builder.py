"""Tests for building a tree from a walk."""

from pathlib import Path

import pytest

from vdu.exceptions import InsertionPreconditionError, RootNotFoundError
from vdu.scanning import build_tree_from_path
from vdu.scanning.builder import format_size


class TestBuildTreeFromPath:
    def test_file_sizes_aggregate(self, sample_dir):
        tree = build_tree_from_path(sample_dir)
        assert tree.root.path == str(sample_dir)
        assert tree.total_count() == 8

        src = tree.find(sample_dir / "src")
        pkg = tree.find(sample_dir / "src" / "pkg")
        assert pkg.num_bytes == pkg.own_bytes + 45
        assert src.num_bytes == src.own_bytes + 300 + pkg.num_bytes
        assert tree.find(sample_dir / "empty.dat").num_bytes == 0

    def test_missing_root_fails_before_walking(self, tmp_path):
        calls = []

        def walker(path):
            calls.append(path)
            return iter(())

        with pytest.raises(RootNotFoundError) as exc_info:
            build_tree_from_path(tmp_path / "nope", walker=walker)
        assert exc_info.value.path == tmp_path / "nope"
        assert calls == []

    def test_uses_walker_order(self, tmp_path):
        def walker(path):
            yield path, 0
            yield path / "a", 10
            yield path / "a" / "b", 5

        tree = build_tree_from_path(tmp_path, walker=walker)
        assert tree.total_size() == 15
        assert tree.find(tmp_path / "a").num_descendants == 1

    def test_out_of_order_walker_is_fatal(self, tmp_path):
        def walker(path):
            yield path, 0
            yield path / "a" / "b", 5
            yield path / "a", 10

        with pytest.raises(InsertionPreconditionError):
            build_tree_from_path(tmp_path, walker=walker)

    def test_progress_counts_every_entry(self, sample_dir):
        counts = []
        build_tree_from_path(sample_dir, progress=counts.append)
        assert counts == list(range(1, 9))

    def test_accepts_relative_root(self, sample_dir, monkeypatch):
        monkeypatch.chdir(sample_dir.parent)
        tree = build_tree_from_path(Path("sample"))
        assert tree.total_count() == 8


class TestFormatSize:
    @pytest.mark.parametrize(
        "num_bytes, expected",
        [
            (0, "0 B"),
            (400, "400 B"),
            (2048, "2.00 KB"),
            (5 * 1024**3, "5.00 GB"),
        ],
    )
    def test_units(self, num_bytes, expected):
        assert format_size(num_bytes) == expected
