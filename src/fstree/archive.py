"""Packing a directory tree into a zip archive and unpacking it again."""

from __future__ import annotations

import io
import os
import posixpath
import shutil
import time
import zipfile
from collections.abc import Iterator
from typing import IO, TYPE_CHECKING

from .config import SETTINGS
from .errors import FsTreeError, PathEscapeError
from .logger import logger
from .paths import default_style
from .types import ArchiveEntry
from .walker import walk

if TYPE_CHECKING:
    from .paths import PathStyle
    from .types import Entry

COMPRESSION_METHODS = {
    "deflate": zipfile.ZIP_DEFLATED,
    "store": zipfile.ZIP_STORED,
}

# MS-DOS directory attribute, set alongside the Unix mode in external_attr.
_DOS_DIRECTORY = 0x10
_UNIX_SYSTEM = 3


class _ArchiveSink:
    """Forwards zip writes to a stream until cut off.

    Once cut, writes are dropped and the stream is never touched again, so a
    ZipFile closed later (including by garbage collection) cannot finalize it.
    """

    def __init__(self, stream: IO[bytes]) -> None:
        self._stream = stream
        self._cut = False

    def cut(self) -> None:
        self._cut = True

    def write(self, data: bytes) -> int:
        if self._cut:
            return len(data)
        return self._stream.write(data)

    def tell(self) -> int:
        return 0 if self._cut else self._stream.tell()

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        return 0 if self._cut else self._stream.seek(offset, whence)

    def flush(self) -> None:
        if not self._cut:
            self._stream.flush()


def _zip_date_time(mtime: float) -> tuple[int, int, int, int, int, int]:
    """Zip timestamps only cover 1980-2107."""
    date_time = time.localtime(mtime)[:6]
    if date_time[0] < 1980:
        return (1980, 1, 1, 0, 0, 0)
    if date_time[0] > 2107:
        return (2107, 12, 31, 23, 59, 58)
    return date_time


def pack_directory(
    source: str | os.PathLike[str],
    dest_stream: IO[bytes],
    *,
    compression: str | None = None,
    style: PathStyle | None = None,
) -> None:
    """Write every entry beneath ``source`` into a zip archive on ``dest_stream``.

    Member names are relative to ``source`` and use ``/``; directories are
    recorded as empty members whose names end with ``/``. Files are compressed
    with ``compression`` ("deflate" or "store", default from settings).

    The archive's central directory is only written once the whole tree has
    been packed. If packing fails, the error propagates and ``dest_stream``
    holds an unfinalized archive that the caller must discard.
    """
    style = style or default_style()
    compression = compression or SETTINGS.archive_compression
    if compression not in COMPRESSION_METHODS:
        raise FsTreeError(f"Unknown compression: {compression!r}", "Use one of: deflate, store")
    method = COMPRESSION_METHODS[compression]
    root = style.with_trailing_sep(source)

    sink = _ArchiveSink(dest_stream)
    zf = zipfile.ZipFile(sink, "w")  # type: ignore[arg-type]

    def add_entry(parent: str, entry: Entry) -> None:
        name = style.to_archive_name(style.join(style.strip_prefix(parent, root), entry.name))
        info = zipfile.ZipInfo(name + "/" if entry.is_dir else name, date_time=_zip_date_time(entry.mtime))
        info.external_attr = (entry.mode & 0xFFFF) << 16

        if entry.is_dir:
            info.external_attr |= _DOS_DIRECTORY
            zf.writestr(info, b"")
            return

        info.compress_type = method
        info.file_size = entry.size
        with open(style.join(parent, entry.name), "rb") as fsrc, zf.open(info, "w") as fdest:
            shutil.copyfileobj(fsrc, fdest, SETTINGS.copy_buffer_size)

    try:
        walk(root, add_entry, style=style)
    except Exception:
        sink.cut()
        logger.warning("Packing failed, archive left unfinalized", source=root)
        raise

    zf.close()
    logger.info("Packed directory", source=root, entries=len(zf.infolist()))


def _random_access(source_stream: IO[bytes], size: int) -> IO[bytes]:
    """The zip reader needs to seek; buffer exactly ``size`` bytes of a forward-only stream."""
    if source_stream.seekable():
        return source_stream

    buf = io.BytesIO()
    remaining = size
    while remaining > 0:
        chunk = source_stream.read(min(remaining, SETTINGS.copy_buffer_size))
        if not chunk:
            break
        buf.write(chunk)
        remaining -= len(chunk)
    if remaining:
        raise zipfile.BadZipFile(f"Archive truncated: expected {size} bytes, got {size - remaining}")
    buf.seek(0)
    return buf


def _member_path(dest_root: str, name: str) -> str:
    """Resolve an archive member name under ``dest_root``, rejecting escapes."""
    if posixpath.isabs(name) or os.path.isabs(name):
        raise PathEscapeError(name, dest_root)
    resolved = os.path.realpath(os.path.join(dest_root, *name.split("/")))
    if resolved != dest_root and not resolved.startswith(dest_root + os.sep):
        raise PathEscapeError(name, dest_root)
    return resolved


def unpack_archive(source_stream: IO[bytes], size: int, dest_dir: str | os.PathLike[str]) -> None:
    """Extract the zip archive on ``source_stream`` (``size`` bytes long) into ``dest_dir``.

    ``dest_dir`` is created if needed. Members are extracted in archive order:
    directory members become directories, file members are streamed into new
    files. Unix permission bits are restored when the archive records them.
    """
    with zipfile.ZipFile(_random_access(source_stream, size)) as zf:
        os.makedirs(dest_dir, exist_ok=True)
        dest_root = os.path.realpath(dest_dir)

        for info in zf.infolist():
            target = _member_path(dest_root, info.filename)
            if info.is_dir():
                os.makedirs(target, exist_ok=True)
                continue

            os.makedirs(os.path.dirname(target), exist_ok=True)
            with zf.open(info) as fsrc, open(target, "wb") as fdest:
                shutil.copyfileobj(fsrc, fdest, SETTINGS.copy_buffer_size)

            mode = (info.external_attr >> 16) & 0o7777
            if info.create_system == _UNIX_SYSTEM and mode:
                os.chmod(target, mode)

        logger.info("Unpacked archive", dest=dest_root, entries=len(zf.infolist()))


def list_archive(source_stream: IO[bytes], size: int) -> Iterator[ArchiveEntry]:
    """Yield the members of the zip archive on ``source_stream`` in archive order."""
    with zipfile.ZipFile(_random_access(source_stream, size)) as zf:
        for info in zf.infolist():
            yield ArchiveEntry(
                name=info.filename,
                is_dir=info.is_dir(),
                size=info.file_size,
                mode=info.external_attr >> 16,
            )


def zip_dir(source: str | os.PathLike[str], dest: str | os.PathLike[str], *, compression: str | None = None) -> None:
    """Pack ``source`` into a new zip file at ``dest``."""
    with open(dest, "wb") as f:
        pack_directory(source, f, compression=compression)


def unzip(src: str | os.PathLike[str], dest: str | os.PathLike[str]) -> None:
    """Extract the zip file at ``src`` into the directory ``dest``."""
    with open(src, "rb") as f:
        unpack_archive(f, os.fstat(f.fileno()).st_size, dest)
