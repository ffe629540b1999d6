"""Commit outcomes, reports, and the result store."""

from deadcodechange.results.models import AnalysisReport, CommitOutcome, Evidence
from deadcodechange.results.store import DuplicateOutcomeError, ResultStore

__all__ = [
    "AnalysisReport",
    "CommitOutcome",
    "DuplicateOutcomeError",
    "Evidence",
    "ResultStore",
]
