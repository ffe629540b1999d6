"""Git subprocess wrapper — commit diffs, range diffs, repository root."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional

# Every commit in the output starts with "commit <sha>" so DiffParser can split it.
_COMMIT_FORMAT = "--format=commit %H"


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


def _run_git(args: list[str], cwd: Path, timeout: int = 120) -> str:
    """Run a git command and return stdout. Raises GitError on failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")

    if result.returncode != 0:
        stderr = result.stderr.strip()
        raise GitError(f"git error: {stderr or 'exit code ' + str(result.returncode)}")
    return result.stdout


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the root of the current git repository."""
    cwd = cwd or Path.cwd()
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    return Path(out.strip())


def get_commit_diff(repo_root: Path, rev: str, context_lines: int = 3) -> str:
    """Return the diff introduced by a single commit."""
    return _run_git(
        ["show", _COMMIT_FORMAT, f"--unified={context_lines}", "--no-color", rev, "--"],
        cwd=repo_root,
    )


def get_range_diff(repo_root: Path, base: str, head: str, context_lines: int = 3) -> str:
    """Return the diffs of all commits in ``base..head``, oldest first."""
    return _run_git(
        [
            "log", "-p", "--reverse", _COMMIT_FORMAT,
            f"--unified={context_lines}", "--no-color",
            f"{base}..{head}", "--",
        ],
        cwd=repo_root,
    )


def get_revision_diff(repo_root: Path, revision: str, context_lines: int = 3) -> str:
    """Return the diff for *revision*, either a commit or an ``A..B`` range."""
    if ".." in revision:
        base, _, head = revision.partition("..")
        return get_range_diff(repo_root, base.rstrip("."), head.lstrip(".") or "HEAD", context_lines)
    return get_commit_diff(repo_root, revision, context_lines)
