"""In-memory state for the HTTP API: running and finished scans."""

from __future__ import annotations

import threading

from code_snippets.scanner import ScanTask


class AppState:
    """Registry of scan tasks shared by all API routes."""

    def __init__(self):
        self._scans: dict[str, ScanTask] = {}
        self._lock = threading.Lock()

    def add_scan(self, task: ScanTask) -> None:
        with self._lock:
            self._scans[task.id] = task

    def get_scan(self, scan_id: str) -> ScanTask | None:
        with self._lock:
            return self._scans.get(scan_id)

    def list_scans(self) -> list[ScanTask]:
        with self._lock:
            return list(self._scans.values())

    def delete_scan(self, scan_id: str) -> bool:
        """Cancel a scan and forget it."""
        with self._lock:
            task = self._scans.pop(scan_id, None)
        if task is None:
            return False
        task.cancel()
        return True


# Module-level singleton shared by the routers
state = AppState()
