"""Domain types for listing, walking and archiving."""

from __future__ import annotations

import stat
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict


class Entry(BaseModel):
    """One filesystem object as observed by a single directory listing."""

    model_config = ConfigDict(frozen=True)

    name: str
    is_dir: bool
    size: int
    mode: int
    mtime: float

    @property
    def permissions(self) -> int:
        return stat.S_IMODE(self.mode)


class PathPair(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str
    dest: str


class ArchiveEntry(BaseModel):
    """One member of an archive. Container names always end with ``/``."""

    model_config = ConfigDict(frozen=True)

    name: str
    is_dir: bool
    size: int
    mode: int = 0


class WalkAction(Enum):
    CONTINUE = "continue"
    SKIP_SUBTREE = "skip_subtree"


@dataclass(frozen=True)
class Abort:
    """Stop the walk and raise ``error`` to the caller of ``walk``."""

    error: BaseException


# ``None`` is accepted as CONTINUE so plain visitor functions need no return.
WalkOutcome = WalkAction | Abort | None
