"""Git interface layer — adapter, diff parsing, models."""

from deadcodechange.git.adapter import (
    GitError,
    get_commit_diff,
    get_range_diff,
    get_repo_root,
    get_revision_diff,
)
from deadcodechange.git.diff_parser import DiffParser
from deadcodechange.git.models import ChangedArtifact, Commit, FileStatus

__all__ = [
    "ChangedArtifact",
    "Commit",
    "DiffParser",
    "FileStatus",
    "GitError",
    "get_commit_diff",
    "get_range_diff",
    "get_repo_root",
    "get_revision_diff",
]
