"""Tests for the error-tolerant directory walk."""

import logging
import os
import sys

import pytest

from vdu.scanning import walk_entries


class TestWalkEntries:
    def test_yields_root_first_and_every_entry(self, sample_dir):
        entries = list(walk_entries(sample_dir))
        paths = [p for p, _ in entries]
        assert paths[0] == sample_dir
        assert set(paths) == {
            sample_dir,
            sample_dir / "docs",
            sample_dir / "docs" / "guide.txt",
            sample_dir / "src",
            sample_dir / "src" / "main.py",
            sample_dir / "src" / "pkg",
            sample_dir / "src" / "pkg" / "mod.py",
            sample_dir / "empty.dat",
        }

    def test_parents_come_before_contents(self, sample_dir):
        paths = [p for p, _ in walk_entries(sample_dir)]
        for index, path in enumerate(paths[1:], start=1):
            assert path.parent in paths[:index]

    def test_file_sizes_are_logical_lengths(self, sample_dir):
        sizes = dict(walk_entries(sample_dir))
        assert sizes[sample_dir / "docs" / "guide.txt"] == 1200
        assert sizes[sample_dir / "src" / "pkg" / "mod.py"] == 45
        assert sizes[sample_dir / "empty.dat"] == 0

    def test_single_file_root(self, sample_dir):
        target = sample_dir / "src" / "main.py"
        assert list(walk_entries(target)) == [(target, 300)]

    def test_missing_root_yields_nothing(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="vdu"):
            assert list(walk_entries(tmp_path / "missing")) == []
        assert "cannot access path" in caplog.text

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_symlinks_are_not_followed(self, sample_dir, tmp_path):
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "big.bin").write_bytes(b"x" * 5000)
        link = sample_dir / "link"
        os.symlink(outside, link)

        paths = [p for p, _ in walk_entries(sample_dir)]
        assert link in paths
        assert link / "big.bin" not in paths

    @pytest.mark.skipif(
        sys.platform == "win32" or os.geteuid() == 0,
        reason="permission bits are not enforced",
    )
    def test_unreadable_directory_is_logged_and_skipped(self, sample_dir, caplog):
        locked = sample_dir / "locked"
        locked.mkdir()
        (locked / "secret").write_bytes(b"s")
        locked.chmod(0)
        try:
            with caplog.at_level(logging.WARNING, logger="vdu"):
                paths = [p for p, _ in walk_entries(sample_dir)]
        finally:
            locked.chmod(0o755)

        assert locked in paths
        assert locked / "secret" not in paths
        assert sample_dir / "src" / "main.py" in paths
        assert str(locked) in caplog.text
