"""Background, cancellable project scans with incremental results."""

from __future__ import annotations

import enum
import logging
import queue
import threading
import uuid
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime
from typing import Iterator

from code_snippets.languages import LanguageRegistry
from code_snippets.models import (
    ExtractedFunction,
    FileScanEvent,
    ScanConfig,
    ScanResult,
    SkippedFile,
)
from code_snippets.scanner.project_scanner import ProjectScanner

logger = logging.getLogger(__name__)

_DONE = object()


class TaskStatus(enum.Enum):
    PENDING = "pending"
    RUNNING = "running"
    DONE = "done"
    CANCELLED = "cancelled"
    FAILED = "failed"


class ScanTask:
    """Runs a ProjectScanner on a worker thread.

    With stream=True, per-file events are queued as they are produced and
    can be consumed with iter_results(); without it nothing is queued.
    status(), functions() and skipped() give snapshots at any time.
    cancel() stops the scan before the next file.
    """

    def __init__(
        self,
        config: ScanConfig,
        registry: LanguageRegistry | None = None,
        *,
        stream: bool = False,
    ):
        self.id = uuid.uuid4().hex[:12]
        self.config = config
        self.timestamp = datetime.now().isoformat()
        self._scanner = ProjectScanner(config, registry)
        self._cancel = threading.Event()
        self._lock = threading.Lock()
        self._events: queue.Queue | None = queue.Queue() if stream else None
        self._functions: list[ExtractedFunction] = []
        self._skipped: list[SkippedFile] = []
        self._files_done = 0
        self._status = TaskStatus.PENDING
        self._error: str | None = None
        self._future: Future | None = None

    @property
    def project_name(self) -> str:
        return self._scanner.project_name

    def start(self) -> ScanTask:
        if self._future is not None:
            raise RuntimeError(f"Scan {self.id} already started")
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"scan-{self.id}")
        self._future = executor.submit(self._run)
        executor.shutdown(wait=False)
        return self

    def _run(self) -> ScanResult:
        self._set_status(TaskStatus.RUNNING)
        try:
            result = self._scanner.scan(self._cancel, progress=self._record)
        except Exception as e:
            logger.exception("Scan %s failed", self.id)
            with self._lock:
                self._error = str(e)
            self._set_status(TaskStatus.FAILED)
            self._publish(_DONE)
            raise
        self._set_status(TaskStatus.CANCELLED if result.cancelled else TaskStatus.DONE)
        self._publish(_DONE)
        return result

    def _record(self, event: FileScanEvent) -> None:
        with self._lock:
            self._files_done += 1
            self._functions.extend(event.functions)
            if event.skipped:
                self._skipped.append(event.skipped)
        self._publish(event)

    def _publish(self, item) -> None:
        if self._events is not None:
            self._events.put(item)

    def _set_status(self, status: TaskStatus) -> None:
        with self._lock:
            self._status = status

    @property
    def streaming(self) -> bool:
        return self._events is not None

    def cancel(self) -> None:
        self._cancel.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    def status(self) -> TaskStatus:
        with self._lock:
            return self._status

    @property
    def error(self) -> str | None:
        with self._lock:
            return self._error

    @property
    def files_done(self) -> int:
        with self._lock:
            return self._files_done

    def functions(self) -> list[ExtractedFunction]:
        with self._lock:
            return list(self._functions)

    def skipped(self) -> list[SkippedFile]:
        with self._lock:
            return list(self._skipped)

    def done(self) -> bool:
        return self._future is not None and self._future.done()

    def wait(self, timeout: float | None = None) -> ScanResult:
        """Block until the scan ends and return its result."""
        if self._future is None:
            raise RuntimeError(f"Scan {self.id} was never started")
        return self._future.result(timeout=timeout)

    def iter_results(self, timeout: float | None = None) -> Iterator[FileScanEvent]:
        """Stream per-file events in walk order until the scan ends.

        Only for tasks created with stream=True. Meant for a single
        consumer; raises queue.Empty if no event arrives within *timeout*
        seconds.
        """
        if self._events is None:
            raise RuntimeError(f"Scan {self.id} was not started with stream=True")
        while True:
            event = self._events.get(timeout=timeout)
            if event is _DONE:
                return
            yield event
