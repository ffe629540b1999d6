"""Unified diff parser — turns ``git show`` / ``git log -p`` output into commits.

Commits are introduced by ``commit <sha>`` lines. Text without any commit line
(a plain ``git diff`` or a patch file) becomes a single commit carrying the
default id. Within each file, hunk headers, file headers and sub-headers are
dropped; ``+``/``-`` lines keep their marker and context lines lose their
leading space unless their text itself starts with ``+`` or ``-``. Paths that
git quotes (``core.quotepath``) are unquoted. Hunk line counts decide where a
hunk ends, so commit messages following a hunk never leak into an artifact.
"""

from __future__ import annotations

import re
from typing import Generator, Optional

from deadcodechange.git.models import ChangedArtifact, Commit, FileStatus

# --- Regex patterns for diff parsing ---

_COMMIT_RE = re.compile(r"^commit ([0-9a-fA-F]{4,64})\b")
_DIFF_HEADER_RE = re.compile(
    r'^diff --git (?:"a/(?:[^"\\]|\\.)*"|a/.*) (?P<new>"b/(?:[^"\\]|\\.)*"|b/.*)$'
)
_QUOTED_ESCAPE_RE = re.compile(r'\\([0-7]{3}|[abtnvfr"\\])')
_C_ESCAPES = {
    "a": b"\a", "b": b"\b", "t": b"\t", "n": b"\n",
    "v": b"\v", "f": b"\f", "r": b"\r", '"': b'"', "\\": b"\\",
}
_HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")
_BINARY_RE = re.compile(r"^Binary files .* and .* differ$")
_RENAME_FROM_RE = re.compile(r"^rename from (.+)$")
_RENAME_TO_RE = re.compile(r"^rename to (.+)$")
_NO_NEWLINE_RE = re.compile(r"^\\ No newline at end of file$")
_DELETED_FILE_RE = re.compile(r"^deleted file mode \d+$")
_NEW_FILE_RE = re.compile(r"^new file mode \d+$")


def _strip_bom(line: str) -> str:
    """Remove UTF-8 BOM if present."""
    return line.lstrip("\ufeff")


def _unquote(path: str) -> str:
    """Undo git's C-style quoting of a path; unquoted paths pass through."""
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path
    raw = bytearray()
    pos = 0
    body = path[1:-1]
    for m in _QUOTED_ESCAPE_RE.finditer(body):
        raw += body[pos:m.start()].encode("utf-8")
        esc = m.group(1)
        raw += bytes([int(esc, 8) & 0xFF]) if len(esc) == 3 else _C_ESCAPES[esc]
        pos = m.end()
    raw += body[pos:].encode("utf-8")
    return raw.decode("utf-8", errors="replace")


def _context_line(text: str) -> str:
    """Context text, keeping the space if it would otherwise look like a marker."""
    if text.startswith(("+", "-")):
        return " " + text
    return text


def _count(group: Optional[str]) -> int:
    """Hunk header counts default to 1 when omitted."""
    return int(group) if group is not None else 1


class DiffParser:
    """Parse diff text and yield :class:`Commit` objects.

    Usage::

        for commit in DiffParser(text, default_commit_id="fix.patch").parse():
            for artifact in commit.changed_artifacts:
                ...
    """

    def __init__(self, diff_text: str, default_commit_id: str = "") -> None:
        self._lines = [line.rstrip("\r") for line in diff_text.splitlines()]
        self._default_commit_id = default_commit_id

    def parse(self) -> Generator[Commit, None, None]:
        """Yield commits in the order they appear in the text."""
        commit: Optional[Commit] = None
        artifact: Optional[ChangedArtifact] = None
        old_remaining = 0
        new_remaining = 0

        for raw_line in self._lines:
            # --- hunk content (counted) ---
            if artifact is not None and (old_remaining > 0 or new_remaining > 0):
                if _NO_NEWLINE_RE.match(raw_line):
                    continue
                if raw_line.startswith("+"):
                    artifact.lines.append("+" + _strip_bom(raw_line[1:]))
                    new_remaining -= 1
                elif raw_line.startswith("-"):
                    artifact.lines.append("-" + _strip_bom(raw_line[1:]))
                    old_remaining -= 1
                else:
                    # Context line; some tools strip the space of empty lines
                    artifact.lines.append(_context_line(_strip_bom(raw_line[1:])))
                    old_remaining -= 1
                    new_remaining -= 1
                continue

            # --- commit header → new commit context ---
            m = _COMMIT_RE.match(raw_line)
            if m:
                if commit is not None:
                    yield commit
                commit = Commit(id=m.group(1))
                artifact = None
                continue

            # --- diff --git header → new artifact ---
            if raw_line.startswith("diff --git "):
                artifact = None
                m = _DIFF_HEADER_RE.match(raw_line)
                if m is None:
                    continue
                if commit is None:
                    commit = Commit(id=self._default_commit_id)
                new_path = _unquote(m.group("new"))
                artifact = ChangedArtifact(path=new_path[2:])
                commit.changed_artifacts.append(artifact)
                continue

            if artifact is None:
                continue  # commit message, author and date lines

            # --- hunk header ---
            hm = _HUNK_HEADER_RE.match(raw_line)
            if hm:
                old_remaining = _count(hm.group(2))
                new_remaining = _count(hm.group(4))
                continue

            # --- sub-headers (index, mode, ---/+++ file headers are ignored) ---
            if _BINARY_RE.match(raw_line):
                artifact.status = FileStatus.BINARY
            elif _DELETED_FILE_RE.match(raw_line):
                artifact.status = FileStatus.DELETED
            elif _NEW_FILE_RE.match(raw_line):
                artifact.status = FileStatus.ADDED
            elif (rm := _RENAME_FROM_RE.match(raw_line)):
                artifact.old_path = _unquote(rm.group(1))
                artifact.status = FileStatus.RENAMED
            elif (rt := _RENAME_TO_RE.match(raw_line)):
                artifact.path = _unquote(rt.group(1))

        if commit is not None:
            yield commit
