"""Analysis engine — drains commits from a queue into a result store.

Each commit is classified independently by :func:`analyze_commit`, so any
number of workers can drain the same :class:`CommitQueue`. Outcomes are
written to a shared :class:`ResultStore`; commits without an identifier are
logged and recorded as not analyzed.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

from deadcodechange.config.schema import FilePatterns
from deadcodechange.diff.analyzer import CommitNotAnalyzable, analyze_commit
from deadcodechange.git.models import Commit
from deadcodechange.pipeline.queue import CommitQueue
from deadcodechange.results.models import AnalysisReport, CommitOutcome
from deadcodechange.results.store import ResultStore

logger = logging.getLogger(__name__)


class AnalysisError(Exception):
    """Raised on an unexpected failure while analyzing a commit."""


class DeadCodeChangeAnalyzer:
    """Classifies commits with one fixed set of path patterns."""

    def __init__(self, patterns: FilePatterns, consider_all_blocks: bool = False) -> None:
        self.patterns = patterns
        self.consider_all_blocks = consider_all_blocks

    def analyze(self, commit: Commit) -> Optional[CommitOutcome]:
        """Classify one commit. Returns ``None`` if it cannot be analyzed."""
        logger.debug("Analyzing commit %s", commit.id)
        try:
            return analyze_commit(
                commit,
                self.patterns.vm,
                self.patterns.code,
                self.patterns.build,
                consider_all_blocks=self.consider_all_blocks,
            )
        except CommitNotAnalyzable as exc:
            logger.warning("Commit %s not analyzed: %s", commit.id or "<no id>", exc)
            return None

    def run(self, commits: CommitQueue, store: ResultStore) -> bool:
        """Drain *commits* into *store*. True if at least one commit was analyzed."""
        analyzed = False
        while (commit := commits.get()) is not None:
            try:
                outcome = self.analyze(commit)
            except Exception as exc:
                raise AnalysisError(f"Failed to analyze commit {commit.id}: {exc}") from exc
            if outcome is None:
                store.mark_not_analyzed(commit.id)
                continue
            store.put(outcome)
            analyzed = True
        return analyzed

    def analyze_commits(self, commits: Iterable[Commit], jobs: int = 1) -> AnalysisReport:
        """Analyze *commits* with *jobs* workers and return an ordered report."""
        start = time.perf_counter()
        jobs = max(1, jobs)
        pending = CommitQueue()
        store = ResultStore()
        order: List[str] = []
        seen: set[str] = set()

        with ThreadPoolExecutor(max_workers=jobs, thread_name_prefix="dcc-worker") as pool:
            workers = [pool.submit(self.run, pending, store) for _ in range(jobs)]
            try:
                for commit in commits:
                    if commit.id and commit.id in seen:
                        logger.info("Skipping duplicate commit %s", commit.id)
                        continue
                    seen.add(commit.id)
                    order.append(commit.id)
                    pending.put(commit)
            finally:
                pending.close()
            for worker in workers:
                worker.result()

        elapsed = (time.perf_counter() - start) * 1000
        report = AnalysisReport(
            outcomes=store.ordered(order),
            not_analyzed=store.not_analyzed,
            duration_ms=round(elapsed, 2),
        )
        logger.info(
            "Analyzed %d commit(s), %d warrant a refresh",
            report.analyzed_commits,
            len(report.relevant_outcomes),
        )
        return report
