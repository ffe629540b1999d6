"""JSON reporter for scripts and CI pipelines."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from deadcodechange.results.models import AnalysisReport, CommitOutcome


def _outcome_dict(outcome: CommitOutcome) -> Dict[str, Any]:
    return {
        "commit": outcome.commit_id,
        "requires_reanalysis": outcome.requires_reanalysis,
        "relevant_code_files": sorted(outcome.relevant_code_paths),
        "relevant_build_changes": outcome.relevant_build_changes,
        "relevant_model_changes": outcome.relevant_model_changes,
        "analyzed_files": outcome.analyzed_paths,
        "skipped_files": outcome.skipped_paths,
        "evidence": [
            {
                "file": e.path,
                "type": e.file_type,
                "line_index": e.line_index,
                "line": e.line,
            }
            for e in outcome.evidence
        ],
    }


def to_dict(report: AnalysisReport) -> Dict[str, Any]:
    """Convert an AnalysisReport to a JSON-serialisable dict."""
    commits: List[Dict[str, Any]] = [_outcome_dict(o) for o in report.outcomes]
    return {
        "version": "1.0",
        "analyzed_commits": report.analyzed_commits,
        "relevant_commits": len(report.relevant_outcomes),
        "requires_reanalysis": report.requires_reanalysis,
        "not_analyzed": report.not_analyzed,
        "commits": commits,
        "duration_ms": report.duration_ms,
    }


def render(report: AnalysisReport) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(report), indent=2)
