"""Depth-first, pre-order directory traversal with skip and abort signals."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

from .errors import SkipDir
from .lister import list_dir
from .paths import default_style
from .types import Abort, Entry, WalkAction, WalkOutcome

if TYPE_CHECKING:
    from .paths import PathStyle

Visitor = Callable[[str, Entry], WalkOutcome]
PairVisitor = Callable[[str, str, Entry], WalkOutcome]


def _descend(visit: Visitor, parent: str, entry: Entry) -> bool:
    """Run the visitor for one entry and decide whether to enter it.

    Raises the aborting error, if any. ``SkipDir`` never escapes.
    """
    try:
        outcome = visit(parent, entry)
    except SkipDir:
        return False

    if isinstance(outcome, Abort):
        if isinstance(outcome.error, SkipDir):
            return False
        raise outcome.error
    if outcome is WalkAction.SKIP_SUBTREE:
        return False
    return entry.is_dir


def walk(root: str | os.PathLike[str], visit: Visitor, *, style: PathStyle | None = None) -> None:
    """Walk every entry beneath ``root``, calling ``visit(parent_dir, entry)``.

    Entries are visited in listing order (directories first), and a directory's
    contents are walked before its next sibling. ``root`` itself is not
    visited. The visitor may return ``WalkAction.SKIP_SUBTREE`` (or raise
    ``SkipDir``) to keep the walker out of a directory, or ``Abort(err)`` to
    stop and have ``err`` raised here. Other exceptions from the visitor or
    from listing propagate unchanged.

    Iterative: each stack frame holds a directory and its remaining entries.
    """
    style = style or default_style()
    root = os.fspath(root)
    stack: list[tuple[str, Iterator[Entry]]] = [(root, iter(list_dir(root)))]

    while stack:
        parent, pending = stack[-1]
        entry = next(pending, None)
        if entry is None:
            stack.pop()
            continue
        if _descend(visit, parent, entry):
            child = style.join(parent, entry.name)
            stack.append((child, iter(list_dir(child))))


def walk_from_to(
    source: str | os.PathLike[str],
    dest: str | os.PathLike[str],
    fn: PairVisitor,
    *,
    style: PathStyle | None = None,
) -> None:
    """Walk ``source``, calling ``fn(source_dir, dest_dir, entry)`` for every entry.

    ``dest_dir`` is ``source_dir`` re-rooted under ``dest``.
    """
    style = style or default_style()
    source = os.fspath(source)
    dest = os.fspath(dest)

    def visit(parent: str, entry: Entry) -> WalkOutcome:
        pair = style.pair(source, dest, parent)
        return fn(pair.source, pair.dest, entry)

    walk(source, visit, style=style)

