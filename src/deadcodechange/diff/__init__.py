"""Diff classification — normalizers, relevance classifiers, orchestrator."""

from deadcodechange.diff.analyzer import (
    CommitNotAnalyzable,
    analyze_commit,
    is_blacklisted,
    is_excluded,
)
from deadcodechange.diff.artifact import ArtifactDiff, normalize
from deadcodechange.diff.kinds import FileKind, FileType

__all__ = [
    "ArtifactDiff",
    "CommitNotAnalyzable",
    "FileKind",
    "FileType",
    "analyze_commit",
    "is_blacklisted",
    "is_excluded",
    "normalize",
]
