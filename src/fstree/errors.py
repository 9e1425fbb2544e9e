"""Errors raised and interpreted by the tree utilities."""

from __future__ import annotations


class SkipDir(Exception):
    """Directive from a walk visitor: do not descend into this directory.

    Not a failure. The walker catches it whether it is raised by the visitor
    or returned wrapped in ``Abort``.
    """


class FsTreeError(Exception):
    """Base exception for errors originating in fstree itself."""

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        self.message = message
        self.suggestion = suggestion
        super().__init__(message)

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message}\nSuggestion: {self.suggestion}"
        return self.message


class PathEscapeError(FsTreeError, ValueError):
    """An archive member would be written outside the destination directory."""

    def __init__(self, member: str, dest_dir: str) -> None:
        self.member = member
        self.dest_dir = dest_dir
        super().__init__(
            f"Archive member escapes destination: {member!r}",
            f"Refusing to write outside {dest_dir}",
        )
