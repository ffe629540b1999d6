"""Commit outcome and analysis report models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Set


@dataclass(frozen=True)
class Evidence:
    """The first relevant line found in one artifact."""

    path: str
    file_type: str  # 'code' | 'build' | 'variability_model'
    line_index: int
    line: str


@dataclass
class CommitOutcome:
    """Per-commit verdict: which kinds of artifacts changed relevantly."""

    commit_id: str
    relevant_code_paths: Set[str] = field(default_factory=set)
    relevant_build_changes: bool = False
    relevant_model_changes: bool = False
    analyzed_paths: List[str] = field(default_factory=list)
    skipped_paths: List[str] = field(default_factory=list)
    evidence: List[Evidence] = field(default_factory=list)

    def add_relevant_code_path(self, path: str) -> None:
        self.relevant_code_paths.add(path)

    @property
    def relevant_code_changes(self) -> bool:
        return bool(self.relevant_code_paths)

    @property
    def requires_reanalysis(self) -> bool:
        """True if any artifact change may invalidate a prior dead code analysis."""
        return (
            self.relevant_code_changes
            or self.relevant_build_changes
            or self.relevant_model_changes
        )


@dataclass
class AnalysisReport:
    """Complete result of analyzing a sequence of commits."""

    outcomes: List[CommitOutcome] = field(default_factory=list)
    not_analyzed: List[str] = field(default_factory=list)
    duration_ms: float = 0.0

    @property
    def analyzed_commits(self) -> int:
        return len(self.outcomes)

    @property
    def relevant_outcomes(self) -> List[CommitOutcome]:
        return [o for o in self.outcomes if o.requires_reanalysis]

    @property
    def requires_reanalysis(self) -> bool:
        return any(o.requires_reanalysis for o in self.outcomes)

    def get(self, commit_id: str) -> Optional[CommitOutcome]:
        for outcome in self.outcomes:
            if outcome.commit_id == commit_id:
                return outcome
        return None
