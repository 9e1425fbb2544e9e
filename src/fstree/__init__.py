"""Directory-tree utilities: ordered listing, walking, copy, move and zip archives."""

from __future__ import annotations

from .archive import list_archive, pack_directory, unpack_archive, unzip, zip_dir
from .errors import FsTreeError, PathEscapeError, SkipDir
from .lister import list_dir
from .paths import NATIVE, POSIX, PathStyle, default_style
from .transfer import copy_file, move_file
from .tree_ops import copy_tree, move_tree
from .types import Abort, ArchiveEntry, Entry, PathPair, WalkAction, WalkOutcome
from .walker import walk, walk_from_to

__all__ = [
    # archive
    "list_archive",
    "pack_directory",
    "unpack_archive",
    "unzip",
    "zip_dir",
    # errors
    "FsTreeError",
    "PathEscapeError",
    "SkipDir",
    # lister
    "list_dir",
    # paths
    "NATIVE",
    "POSIX",
    "PathStyle",
    "default_style",
    # transfer
    "copy_file",
    "move_file",
    # tree_ops
    "copy_tree",
    "move_tree",
    # types
    "Abort",
    "ArchiveEntry",
    "Entry",
    "PathPair",
    "WalkAction",
    "WalkOutcome",
    # walker
    "walk",
    "walk_from_to",
]
