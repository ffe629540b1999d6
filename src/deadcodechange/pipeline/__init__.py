"""Commit hand-off queue and the analysis engine."""

from deadcodechange.pipeline.engine import AnalysisError, DeadCodeChangeAnalyzer
from deadcodechange.pipeline.queue import CommitQueue, QueueClosedError

__all__ = ["AnalysisError", "CommitQueue", "DeadCodeChangeAnalyzer", "QueueClosedError"]
