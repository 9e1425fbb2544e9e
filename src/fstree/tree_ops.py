"""Recursive copy and move of whole directory trees."""

from __future__ import annotations

import os
import shutil
from typing import TYPE_CHECKING

from .logger import logger
from .paths import default_style
from .transfer import copy_file, move_file
from .walker import walk_from_to

if TYPE_CHECKING:
    from .paths import PathStyle
    from .types import Entry


def copy_tree(src: str | os.PathLike[str], dest: str | os.PathLike[str], *, style: PathStyle | None = None) -> None:
    """Recursively copy the directory ``src`` to ``dest``.

    Destination directories are created before anything is copied into them,
    and existing ones are reused. The first error stops the copy; whatever was
    already copied stays.
    """
    style = style or default_style()
    os.makedirs(dest, exist_ok=True)

    def copy_entry(src_dir: str, dest_dir: str, entry: Entry) -> None:
        src_path = style.join(src_dir, entry.name)
        dest_path = style.join(dest_dir, entry.name)
        if entry.is_dir:
            os.makedirs(dest_path, exist_ok=True)
        else:
            copy_file(src_path, dest_path)

    walk_from_to(src, dest, copy_entry, style=style)
    logger.info("Copied tree", src=os.fspath(src), dest=os.fspath(dest))


def move_tree(src: str | os.PathLike[str], dest: str | os.PathLike[str], *, style: PathStyle | None = None) -> None:
    """Move the directory ``src`` to ``dest``.

    Tries a single rename first. Otherwise every file is moved individually
    (directories are recreated under ``dest``) and the emptied ``src`` tree is
    removed. If a file move fails, the error propagates and ``src`` is left
    partially moved.
    """
    try:
        os.rename(src, dest)
        logger.info("Moved tree by rename", src=os.fspath(src), dest=os.fspath(dest))
        return
    except OSError as err:
        logger.warning("Tree rename failed, moving files individually", src=os.fspath(src), dest=os.fspath(dest), error=str(err))

    style = style or default_style()
    os.makedirs(dest, exist_ok=True)

    def move_entry(src_dir: str, dest_dir: str, entry: Entry) -> None:
        src_path = style.join(src_dir, entry.name)
        dest_path = style.join(dest_dir, entry.name)
        if entry.is_dir:
            os.makedirs(dest_path, exist_ok=True)
        else:
            move_file(src_path, dest_path)

    walk_from_to(src, dest, move_entry, style=style)
    shutil.rmtree(src)
    logger.info("Moved tree by copy", src=os.fspath(src), dest=os.fspath(dest))
