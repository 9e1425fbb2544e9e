"""Single-file copy and move."""

from __future__ import annotations

import os
import shutil
import stat

from .config import SETTINGS
from .logger import logger


def copy_file(src: str | os.PathLike[str], dest: str | os.PathLike[str]) -> None:
    """Copy the bytes of ``src`` into ``dest`` and give ``dest`` the same permission bits.

    ``dest`` is created or truncated. Both files are closed on every exit path.
    Raises shutil.SameFileError when ``dest`` is ``src``, before anything is
    truncated.
    """
    if os.path.exists(dest) and os.path.samefile(src, dest):
        raise shutil.SameFileError(f"{os.fspath(src)!r} and {os.fspath(dest)!r} are the same file")
    with open(src, "rb") as fsrc:
        mode = stat.S_IMODE(os.fstat(fsrc.fileno()).st_mode)
        with open(dest, "wb") as fdest:
            os.chmod(dest, mode)
            shutil.copyfileobj(fsrc, fdest, SETTINGS.copy_buffer_size)
    logger.debug("Copied file", src=os.fspath(src), dest=os.fspath(dest))


def move_file(src: str | os.PathLike[str], dest: str | os.PathLike[str]) -> None:
    """Move ``src`` to ``dest``, renaming when possible.

    If the rename fails for any reason, ``src`` is copied and removed only after
    the copy has completed. A failed copy leaves ``src`` in place.
    """
    try:
        os.rename(src, dest)
        return
    except OSError as err:
        logger.warning("Rename failed, falling back to copy", src=os.fspath(src), dest=os.fspath(dest), error=str(err))

    copy_file(src, dest)
    os.remove(src)
    logger.debug("Moved file by copy", src=os.fspath(src), dest=os.fspath(dest))
