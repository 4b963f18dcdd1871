"""Shared fixtures for vdu tests."""

import os
from typing import Iterable, Tuple

import pytest

from vdu.tree import PathTree


def build_tree(entries: Iterable[Tuple[str, int]]) -> PathTree:
    """Insert (path, size) pairs in the given order."""
    tree = PathTree.empty()
    for path, size in entries:
        tree.insert(path, size)
    return tree


@pytest.fixture
def two_file_tree():
    """Root directory holding files of 100 and 300 bytes."""
    return build_tree([("/data", 0), ("/data/small", 100), ("/data/large", 300)])


@pytest.fixture
def nested_tree():
    """Three levels with directories that have their own size."""
    return build_tree(
        [
            ("/srv", 4096),
            ("/srv/logs", 4096),
            ("/srv/logs/app.log", 1500),
            ("/srv/logs/old", 4096),
            ("/srv/logs/old/app.log.1", 9000),
            ("/srv/www", 4096),
            ("/srv/www/index.html", 512),
            ("/srv/www/empty.txt", 0),
            ("/srv/README", 64),
        ]
    )


@pytest.fixture
def sample_dir(tmp_path):
    """A small real directory tree with known file sizes."""
    root = tmp_path / "sample"
    (root / "docs").mkdir(parents=True)
    (root / "src" / "pkg").mkdir(parents=True)
    (root / "docs" / "guide.txt").write_bytes(b"g" * 1200)
    (root / "src" / "main.py").write_bytes(b"m" * 300)
    (root / "src" / "pkg" / "mod.py").write_bytes(b"p" * 45)
    (root / "empty.dat").write_bytes(b"")
    return root


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep user and project config files and VDU_* variables out of tests."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(home)
    for key in list(os.environ):
        if key.startswith("VDU_"):
            monkeypatch.delenv(key)
    return home


@pytest.fixture
def undecodable_dir(tmp_path):
    """Directory holding a file whose name is not valid UTF-8."""
    root = tmp_path / "raw"
    root.mkdir()
    try:
        (root / os.fsdecode(b"bad\xffname")).write_bytes(b"x" * 7)
    except (OSError, UnicodeError):
        pytest.skip("filesystem rejects non-UTF-8 file names")
    return root
