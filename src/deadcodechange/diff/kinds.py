"""File kinds and diff-line markers shared by all classifiers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

LINE_ADDED_MARKER = "+"
LINE_DELETED_MARKER = "-"


class FileType(str, Enum):
    CODE = "code"
    BUILD = "build"
    VARIABILITY_MODEL = "variability_model"
    OTHER = "other"


@dataclass(frozen=True)
class FileKind:
    """Closed set of artifact kinds.

    ``consider_all_blocks`` only has a meaning for :attr:`FileType.CODE`: when
    true, every changed preprocessor block line is relevant; otherwise only
    blocks referencing a configuration symbol are.
    """

    type: FileType
    consider_all_blocks: bool = False

    @classmethod
    def code(cls, consider_all_blocks: bool = False) -> "FileKind":
        return cls(FileType.CODE, consider_all_blocks)

    @classmethod
    def build(cls) -> "FileKind":
        return cls(FileType.BUILD)

    @classmethod
    def variability_model(cls) -> "FileKind":
        return cls(FileType.VARIABILITY_MODEL)

    @classmethod
    def other(cls) -> "FileKind":
        return cls(FileType.OTHER)


def change_marker(line: str) -> Optional[str]:
    """Return ``"+"`` or ``"-"`` if *line* is a changed line, else None."""
    if line.startswith(LINE_ADDED_MARKER):
        return LINE_ADDED_MARKER
    if line.startswith(LINE_DELETED_MARKER):
        return LINE_DELETED_MARKER
    return None


def strip_marker(line: str) -> str:
    """Remove a leading added/deleted marker, if any."""
    if change_marker(line) is not None:
        return line[1:]
    return line


def opposite_marker(line: str) -> Optional[str]:
    """Marker of the *other* file version for a changed line (None for context)."""
    marker = change_marker(line)
    if marker == LINE_ADDED_MARKER:
        return LINE_DELETED_MARKER
    if marker == LINE_DELETED_MARKER:
        return LINE_ADDED_MARKER
    return None
