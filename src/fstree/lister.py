"""Single-directory listing with directories ordered before files."""

from __future__ import annotations

import os

from .types import Entry


def _to_entry(dir_entry: os.DirEntry[str]) -> Entry:
    st = dir_entry.stat(follow_symlinks=False)
    return Entry(
        name=dir_entry.name,
        is_dir=dir_entry.is_dir(follow_symlinks=False),
        size=st.st_size,
        mode=st.st_mode,
        mtime=st.st_mtime,
    )


def list_dir(directory: str | os.PathLike[str]) -> list[Entry]:
    """List the immediate entries of ``directory``.

    Directories come first, then everything else. ``sorted`` is stable, so
    within each group the order is whatever the OS enumerated; names are not
    re-sorted. Symlinks are reported as leaves.

    Raises FileNotFoundError, PermissionError or NotADirectoryError as the
    OS reports them.
    """
    with os.scandir(directory) as it:
        entries = [_to_entry(e) for e in it]
    return sorted(entries, key=lambda entry: not entry.is_dir)
