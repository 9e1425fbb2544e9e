"""Shared fixtures for fstree tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

TreeLayout = dict[str, str | bytes | None]


def build_tree(root: Path, layout: TreeLayout) -> Path:
    """Create files and directories under root.

    Keys ending with "/" are directories; other keys are files whose value is
    their text or byte content.
    """
    root.mkdir(parents=True, exist_ok=True)
    for rel_path, content in layout.items():
        path = root / rel_path
        if rel_path.endswith("/"):
            path.mkdir(parents=True, exist_ok=True)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content or "", encoding="utf-8")
    return root


def snapshot_tree(root: Path) -> dict[str, bytes | None]:
    """Map each relative POSIX path under root to its bytes (None for directories)."""
    result: dict[str, bytes | None] = {}
    for path in sorted(root.rglob("*")):
        rel = path.relative_to(root).as_posix()
        if path.is_dir():
            result[rel + "/"] = None
        else:
            result[rel] = path.read_bytes()
    return result


@pytest.fixture()
def make_tree(tmp_path: Path) -> Callable[[str, TreeLayout], Path]:
    """Build a named tree under tmp_path and return its root."""

    def _make(name: str, layout: TreeLayout) -> Path:
        return build_tree(tmp_path / name, layout)

    return _make


@pytest.fixture()
def snapshot() -> Callable[[Path], dict[str, bytes | None]]:
    return snapshot_tree
