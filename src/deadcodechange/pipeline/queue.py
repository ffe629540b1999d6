"""Blocking hand-off of commits between a producer and analysis workers."""

from __future__ import annotations

import queue
import threading
from typing import Optional

from deadcodechange.git.models import Commit

_CLOSED = object()


class QueueClosedError(Exception):
    """Raised when a commit is put into a closed queue."""


class CommitQueue:
    """FIFO of commits; :meth:`get` returns ``None`` once closed and drained.

    Several consumers may wait on the same queue. The close marker is put
    back after it is taken so that every waiting consumer sees it.
    """

    def __init__(self, maxsize: int = 0) -> None:
        self._queue: "queue.Queue[object]" = queue.Queue(maxsize=maxsize)
        self._closed = threading.Event()

    def put(self, commit: Commit) -> None:
        if self._closed.is_set():
            raise QueueClosedError("Cannot put a commit into a closed queue")
        self._queue.put(commit)

    def close(self) -> None:
        """Signal that no more commits will be produced."""
        if not self._closed.is_set():
            self._closed.set()
            self._queue.put(_CLOSED)

    def get(self) -> Optional[Commit]:
        """Block until a commit is available; ``None`` after closure."""
        item = self._queue.get()
        if item is _CLOSED:
            self._queue.put(_CLOSED)
            return None
        return item  # type: ignore[return-value]

    @property
    def is_open(self) -> bool:
        """True until :meth:`close` is called."""
        return not self._closed.is_set()
