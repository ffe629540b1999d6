"""Artifact diff — the per-file evaluation harness.

An :class:`ArtifactDiff` is assembled first (kind + line buffer) and evaluated
afterwards through :meth:`ArtifactDiff.evaluate`. Evaluation walks the changed
lines in index order, normalizes each one with the kind's normalizer, asks the
kind's classifier and stops at the first relevant line. The verdict is cached;
the value does not change after evaluation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Sequence, Tuple

from deadcodechange.diff import build, code, model
from deadcodechange.diff.kinds import FileKind, FileType, change_marker

logger = logging.getLogger(__name__)

Normalizer = Callable[[str, int, Sequence[str]], str]
Classifier = Callable[[str, int, Sequence[str], FileKind], bool]


def _code_classifier(line: str, index: int, lines: Sequence[str], kind: FileKind) -> bool:
    return code.is_relevant(line, index, lines, consider_all_blocks=kind.consider_all_blocks)


def _build_classifier(line: str, index: int, lines: Sequence[str], kind: FileKind) -> bool:
    return build.is_relevant(line, index, lines)


def _model_classifier(line: str, index: int, lines: Sequence[str], kind: FileKind) -> bool:
    return model.is_relevant(line, index, lines)


_DISPATCH: Dict[FileType, Tuple[Normalizer, Classifier]] = {
    FileType.CODE: (code.normalize, _code_classifier),
    FileType.BUILD: (build.normalize, _build_classifier),
    FileType.VARIABILITY_MODEL: (model.normalize, _model_classifier),
}


def normalize(kind: FileKind, line: str, index: int, lines: Sequence[str]) -> str:
    """Normalize *line* with the normalizer of *kind* (marker strip only for OTHER)."""
    entry = _DISPATCH.get(kind.type)
    if entry is None:
        return line[1:] if change_marker(line) else line
    return entry[0](line, index, lines)


@dataclass
class ArtifactDiff:
    """One changed artifact and its relevance verdict."""

    kind: FileKind
    lines: Tuple[str, ...]
    path: str = ""

    _verdict: Optional[bool] = field(default=None, init=False, repr=False, compare=False)
    _relevant_index: Optional[int] = field(default=None, init=False, repr=False, compare=False)

    @classmethod
    def create(cls, kind: FileKind, lines: Sequence[str], path: str = "") -> "ArtifactDiff":
        """Assemble and evaluate in one step."""
        diff = cls(kind=kind, lines=tuple(lines), path=path)
        diff.evaluate()
        return diff

    @property
    def file_type(self) -> FileType:
        return self.kind.type

    @property
    def evaluated(self) -> bool:
        return self._verdict is not None

    @property
    def relevant(self) -> bool:
        return self.evaluate()

    @property
    def relevant_line_index(self) -> Optional[int]:
        """Index of the first relevant line, if any."""
        self.evaluate()
        return self._relevant_index

    @property
    def relevant_line(self) -> Optional[str]:
        index = self.relevant_line_index
        return None if index is None else self.lines[index]

    def evaluate(self) -> bool:
        """Compute (once) and return the verdict."""
        if self._verdict is not None:
            return self._verdict

        entry = _DISPATCH.get(self.kind.type)
        verdict = False
        if entry is not None:
            normalizer, classifier = entry
            for index, raw in enumerate(self.lines):
                if change_marker(raw) is None or not raw[1:].strip():
                    continue
                clean = normalizer(raw, index, self.lines)
                if not clean.strip():
                    continue
                if classifier(clean, index, self.lines, self.kind):
                    logger.debug(
                        "Relevant change detected in %s (line %d): %s",
                        self.path or self.kind.type.value, index, clean.strip(),
                    )
                    self._relevant_index = index
                    verdict = True
                    break

        self._verdict = verdict
        return verdict
