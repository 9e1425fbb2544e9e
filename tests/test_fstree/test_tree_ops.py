"""Tests for recursive copy and move."""

from __future__ import annotations

import errno
import os
import shutil
from typing import TYPE_CHECKING

import pytest

from fstree import transfer, tree_ops
from fstree.tree_ops import copy_tree, move_tree

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

LAYOUT = {
    "a/": None,
    "a/f1.txt": "hi",
    "a/nested/": None,
    "a/nested/deep.bin": b"\x00\x01\x02" * 100,
    "empty/": None,
    "b.txt": "world",
}


def _fail_rename(src: object, dest: object) -> None:
    raise OSError(errno.EXDEV, "Invalid cross-device link")


class TestCopyTree:
    @pytest.fixture(autouse=True)
    def _setup(self, make_tree: Callable[..., Path], snapshot: Callable[..., dict], tmp_path: Path) -> None:
        self.make_tree = make_tree
        self.snapshot = snapshot
        self.tmp_dir = tmp_path

    def test_concrete_scenario(self) -> None:
        src = self.make_tree("root", {"a/": None, "a/f1.txt": "hi", "b.txt": "world"})
        dest = self.tmp_dir / "dest"

        copy_tree(src, dest)

        assert self.snapshot(dest) == {"a/": None, "a/f1.txt": b"hi", "b.txt": b"world"}
        assert (dest / "a" / "f1.txt").read_bytes() == (src / "a" / "f1.txt").read_bytes()

    def test_copy_is_isomorphic(self) -> None:
        src = self.make_tree("src", LAYOUT)
        dest = self.tmp_dir / "out" / "dest"

        copy_tree(src, dest)

        assert self.snapshot(dest) == self.snapshot(src)

    def test_source_left_intact(self) -> None:
        src = self.make_tree("src", LAYOUT)
        before = self.snapshot(src)

        copy_tree(src, self.tmp_dir / "dest")

        assert self.snapshot(src) == before

    def test_merges_into_existing_destination(self) -> None:
        src = self.make_tree("src", LAYOUT)
        dest = self.make_tree("dest", {"a/": None, "keep.txt": "keep", "b.txt": "old"})

        copy_tree(src, dest)

        result = self.snapshot(dest)
        assert result["keep.txt"] == b"keep"
        assert result["b.txt"] == b"world"
        assert result["a/nested/deep.bin"] == b"\x00\x01\x02" * 100

    def test_copy_onto_itself_keeps_content(self) -> None:
        src = self.make_tree("src", {"a.txt": "precious"})

        with pytest.raises(shutil.SameFileError):
            copy_tree(src, src)

        assert self.snapshot(src) == {"a.txt": b"precious"}

    def test_missing_source_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            copy_tree(self.tmp_dir / "missing", self.tmp_dir / "dest")

    def test_string_paths(self) -> None:
        src = self.make_tree("src", LAYOUT)
        dest = os.path.join(str(self.tmp_dir), "dest")

        copy_tree(str(src) + os.sep, dest)

        assert self.snapshot(self.tmp_dir / "dest") == self.snapshot(src)


class TestMoveTree:
    @pytest.fixture(autouse=True)
    def _setup(self, make_tree: Callable[..., Path], snapshot: Callable[..., dict], tmp_path: Path) -> None:
        self.src = make_tree("src", LAYOUT)
        self.expected = snapshot(self.src)
        self.snapshot = snapshot
        self.dest = tmp_path / "dest"

    def test_rename(self) -> None:
        move_tree(self.src, self.dest)

        assert not self.src.exists()
        assert self.snapshot(self.dest) == self.expected

    def test_falls_back_to_per_file_moves(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(tree_ops.os, "rename", _fail_rename)

        move_tree(self.src, self.dest)

        assert not self.src.exists()
        assert self.snapshot(self.dest) == self.expected

    def test_partial_failure_leaves_source_partially_moved(self, monkeypatch: pytest.MonkeyPatch) -> None:
        real_copy = transfer.copy_file

        def flaky_copy(src: str, dest: str) -> None:
            if os.path.basename(src) == "deep.bin":
                raise OSError(errno.EIO, "Input/output error")
            real_copy(src, dest)

        monkeypatch.setattr(tree_ops.os, "rename", _fail_rename)
        monkeypatch.setattr(transfer, "copy_file", flaky_copy)

        with pytest.raises(OSError) as excinfo:
            move_tree(self.src, self.dest)

        assert excinfo.value.errno == errno.EIO
        assert self.src.exists()
        assert (self.src / "a" / "nested" / "deep.bin").exists()
        assert not (self.dest / "a" / "nested" / "deep.bin").exists()

    def test_missing_source_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            move_tree(tmp_path / "missing", self.dest)
