"""Path joining and prefix rewriting for projecting one tree onto another."""

from __future__ import annotations

import os
import posixpath
from types import ModuleType

from .config import SETTINGS
from .types import PathPair


class PathStyle:
    """Path strategy used by the walker: how to join, split and rewrite prefixes.

    ``NATIVE`` uses the platform's separator, ``POSIX`` always uses ``/``.
    """

    def __init__(self, name: str, pathmod: ModuleType) -> None:
        self.name = name
        self._path = pathmod
        self.sep: str = pathmod.sep
        self._seps = pathmod.sep + (pathmod.altsep or "")

    def __repr__(self) -> str:
        return f"PathStyle({self.name!r})"

    def join(self, parent: str, name: str) -> str:
        return self._path.join(parent, name)

    def with_trailing_sep(self, path: str | os.PathLike[str]) -> str:
        """Normalize ``path`` and end it with exactly one separator."""
        return self._path.normpath(os.fspath(path)).rstrip(self._seps) + self.sep

    def strip_prefix(self, observed: str, root: str) -> str:
        """Path of ``observed`` relative to ``root``, without leading separators.

        ``observed`` must be ``root`` or lie beneath it; otherwise the result is
        meaningless but still a string.
        """
        rest = observed[len(root) :] if observed.startswith(root) else observed
        return rest.lstrip(self._seps)

    def project(self, source_root: str, dest_root: str, observed: str) -> str:
        """Map ``observed`` under ``source_root`` to the same place under ``dest_root``."""
        rel = self.strip_prefix(observed, source_root)
        return self.join(dest_root, rel) if rel else dest_root

    def pair(self, source_root: str, dest_root: str, observed: str) -> PathPair:
        return PathPair(source=observed, dest=self.project(source_root, dest_root, observed))

    def to_archive_name(self, relative: str) -> str:
        """Archive member names always use ``/``."""
        if self.sep == "/" and not self._path.altsep:
            return relative
        return relative.replace(self.sep, "/")


NATIVE = PathStyle("native", os.path)
POSIX = PathStyle("posix", posixpath)

_STYLES = {"native": NATIVE, "posix": POSIX}


def default_style() -> PathStyle:
    return _STYLES[SETTINGS.path_style]
