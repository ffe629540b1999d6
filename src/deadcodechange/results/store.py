"""Thread-safe sink for commit outcomes keyed by commit id."""

from __future__ import annotations

import threading
from typing import Dict, List, Optional

from deadcodechange.results.models import CommitOutcome


class DuplicateOutcomeError(Exception):
    """Raised when a second outcome is stored for the same commit id."""


class ResultStore:
    """Collects outcomes from concurrent workers; each commit id is written once."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._outcomes: Dict[str, CommitOutcome] = {}
        self._not_analyzed: List[str] = []

    def put(self, outcome: CommitOutcome) -> None:
        with self._lock:
            if outcome.commit_id in self._outcomes:
                raise DuplicateOutcomeError(
                    f"Outcome for commit {outcome.commit_id} already recorded"
                )
            self._outcomes[outcome.commit_id] = outcome

    def mark_not_analyzed(self, commit_id: str) -> None:
        with self._lock:
            self._not_analyzed.append(commit_id)

    @property
    def not_analyzed(self) -> List[str]:
        with self._lock:
            return list(self._not_analyzed)

    def get(self, commit_id: str) -> Optional[CommitOutcome]:
        with self._lock:
            return self._outcomes.get(commit_id)

    def __contains__(self, commit_id: object) -> bool:
        with self._lock:
            return commit_id in self._outcomes

    def __len__(self) -> int:
        with self._lock:
            return len(self._outcomes)

    def snapshot(self) -> Dict[str, CommitOutcome]:
        with self._lock:
            return dict(self._outcomes)

    def ordered(self, commit_ids: List[str]) -> List[CommitOutcome]:
        """Outcomes in the order of *commit_ids*, skipping ids without one."""
        with self._lock:
            return [self._outcomes[c] for c in commit_ids if c in self._outcomes]
