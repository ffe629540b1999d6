"""Diff orchestrator — classifies a commit's changed artifacts.

Paths are routed to the code, build or variability model classifier by full
regex match, in that order. Documentation, scripts, ``.txt`` files and
blacklisted extensions are skipped. Build and model artifacts only need a
single boolean per commit, so once either flag is set, later artifacts of that
kind are not evaluated.
"""

from __future__ import annotations

import logging
import re
from typing import Union

from deadcodechange.diff.artifact import ArtifactDiff
from deadcodechange.diff.kinds import FileKind
from deadcodechange.git.models import Commit
from deadcodechange.results.models import CommitOutcome, Evidence

logger = logging.getLogger(__name__)

PatternLike = Union[str, re.Pattern[str]]

# Extensions (without the dot) of files that look like model or build files by
# name but are not, e.g. coreboot's "Config.lb".
FILE_EXTENSION_BLACKLIST = ("lb",)

_DOC_DIR_PATTERN = r"[dD]ocumentation(?:s)?"
_SCRIPT_DIR_PATTERN = r"[sS]cript(?:s)?"

FILE_EXCLUDE_RE = re.compile(
    rf"(?:(?:.*/)?(?:{_DOC_DIR_PATTERN}|{_SCRIPT_DIR_PATTERN})/.*)|(?:.*\.txt)"
)


class CommitNotAnalyzable(Exception):
    """Raised for commits that cannot be analyzed (empty identifier)."""


def is_excluded(path: str) -> bool:
    """True for documentation, script and ``.txt`` paths."""
    return FILE_EXCLUDE_RE.fullmatch(path) is not None


def is_blacklisted(path: str) -> bool:
    """True if *path* ends with one of :data:`FILE_EXTENSION_BLACKLIST`."""
    stripped = path.strip()
    return any(stripped.endswith("." + ext) for ext in FILE_EXTENSION_BLACKLIST)


def _record(outcome: CommitOutcome, diff: ArtifactDiff, path: str) -> None:
    index = diff.relevant_line_index
    if index is not None:
        outcome.evidence.append(
            Evidence(
                path=path,
                file_type=diff.file_type.value,
                line_index=index,
                line=diff.lines[index],
            )
        )


def analyze_commit(
    commit: Commit,
    vm_pattern: PatternLike,
    code_pattern: PatternLike,
    build_pattern: PatternLike,
    *,
    consider_all_blocks: bool = False,
) -> CommitOutcome:
    """Classify every changed artifact of *commit* and aggregate the verdicts.

    Raises:
        CommitNotAnalyzable: if the commit identifier is empty.
    """
    if not commit.id:
        raise CommitNotAnalyzable("Commit without identifier cannot be analyzed")

    vm_re = re.compile(vm_pattern)
    code_re = re.compile(code_pattern)
    build_re = re.compile(build_pattern)

    outcome = CommitOutcome(commit_id=commit.id)
    for artifact in commit.changed_artifacts:
        path = artifact.path
        if not path or is_excluded(path) or is_blacklisted(path):
            if path:
                outcome.skipped_paths.append(path)
            continue

        if code_re.fullmatch(path):
            diff = ArtifactDiff.create(FileKind.code(consider_all_blocks), artifact.lines, path)
            outcome.analyzed_paths.append(path)
            if diff.relevant:
                outcome.add_relevant_code_path(path)
                _record(outcome, diff, path)
        elif build_re.fullmatch(path):
            if outcome.relevant_build_changes:
                continue
            diff = ArtifactDiff.create(FileKind.build(), artifact.lines, path)
            outcome.analyzed_paths.append(path)
            outcome.relevant_build_changes = diff.relevant
            _record(outcome, diff, path)
        elif vm_re.fullmatch(path):
            if outcome.relevant_model_changes:
                continue
            diff = ArtifactDiff.create(FileKind.variability_model(), artifact.lines, path)
            outcome.analyzed_paths.append(path)
            outcome.relevant_model_changes = diff.relevant
            _record(outcome, diff, path)

    logger.debug(
        "Commit %s: code=%d build=%s model=%s",
        commit.id,
        len(outcome.relevant_code_paths),
        outcome.relevant_build_changes,
        outcome.relevant_model_changes,
    )
    return outcome
