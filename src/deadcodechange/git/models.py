"""Data models for commits and their changed artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class FileStatus(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"
    BINARY = "binary"


@dataclass
class ChangedArtifact:
    """One file changed by a commit.

    ``lines`` holds the hunk lines in diff order: added/deleted lines keep their
    ``+``/``-`` marker, unchanged context lines carry no prefix.
    """

    path: str
    lines: List[str] = field(default_factory=list)
    old_path: Optional[str] = None  # set on renames
    status: FileStatus = FileStatus.MODIFIED


@dataclass
class Commit:
    """A commit identifier and its changed artifacts, in diff order."""

    id: str
    changed_artifacts: List[ChangedArtifact] = field(default_factory=list)
