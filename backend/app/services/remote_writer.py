"""Background persistence of optimistic local mutations.

Every mutation of the application state is applied locally first and then
handed to the writer as an independent remote write. Writes of one user action
are unordered; each is retried with exponential backoff and, when it still
fails, logged and recorded in ``failures`` (the reconciliation ledger). Local
state is never rolled back.
"""

import logging
import threading
import time
import uuid
from collections import defaultdict
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class FailedWrite:
    """A remote write that exhausted its retries."""
    id: str
    description: str
    error: str
    attempts: int
    failed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class RemoteWriter:
    """Runs remote writes on a thread pool (``workers=0`` runs them inline)."""

    def __init__(
        self,
        workers: int = 4,
        max_attempts: int = 3,
        backoff_seconds: float = 0.5,
        on_failure: Optional[Callable[[FailedWrite], None]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.workers = workers
        self.max_attempts = max(1, max_attempts)
        self.backoff_seconds = backoff_seconds
        self.on_failure = on_failure
        self._sleep = sleep
        self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="remote-write") if workers > 0 else None
        self._pending: List[Future] = []
        self._lock = threading.Lock()
        self.failures: List[FailedWrite] = []
        self.stats = defaultdict(int)

    def submit(self, description: str, fn: Callable[[], Any]) -> Optional[Future]:
        """Schedule ``fn`` (an idempotent write) and return immediately."""
        self._count("submitted")
        if self._executor is None:
            self._run(description, fn)
            return None
        future = self._executor.submit(self._run, description, fn)
        with self._lock:
            self._pending = [f for f in self._pending if not f.done()]
            self._pending.append(future)
        return future

    def _count(self, key: str) -> None:
        with self._lock:
            self.stats[key] += 1

    def _run(self, description: str, fn: Callable[[], Any]) -> bool:
        last_error: Optional[Exception] = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                fn()
                self._count("succeeded")
                return True
            except Exception as e:
                last_error = e
                if attempt < self.max_attempts:
                    delay = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.warning(
                        f"Remote write '{description}' failed, retry {attempt}/{self.max_attempts - 1} in {delay:.2f}s: {e}"
                    )
                    self._sleep(delay)

        failure = FailedWrite(
            id=str(uuid.uuid4()),
            description=description,
            error=str(last_error),
            attempts=self.max_attempts,
        )
        with self._lock:
            self.failures.append(failure)
            self.stats["failed"] += 1
        logger.error(f"Remote write '{description}' failed after {self.max_attempts} attempts: {last_error}")
        if self.on_failure is not None:
            try:
                self.on_failure(failure)
            except Exception as e:
                logger.error(f"Remote write failure callback raised: {e}")
        return False

    def drain(self, timeout: Optional[float] = None) -> None:
        """Block until every write submitted so far has finished."""
        with self._lock:
            pending = list(self._pending)
        if pending:
            wait(pending, timeout=timeout)

    def clear_failures(self) -> int:
        with self._lock:
            count = len(self.failures)
            self.failures.clear()
        return count

    def get_stats(self) -> Dict[str, Any]:
        with self._lock:
            in_flight = sum(1 for f in self._pending if not f.done())
            return {**dict(self.stats), "in_flight": in_flight, "failures": len(self.failures)}

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            logger.info("Remote writer stopped")
