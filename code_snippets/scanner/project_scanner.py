"""Walk a project folder and extract the functions of every known file."""

from __future__ import annotations

import fnmatch
import logging
import threading
from pathlib import Path
from typing import Callable, Iterator

from code_snippets.extractor import extract_functions
from code_snippets.languages import LanguageRegistry, default_registry
from code_snippets.models import (
    ExtractedFunction,
    FileScanEvent,
    ScanConfig,
    ScanResult,
    SkippedFile,
)
from code_snippets.scanner.language_map import detect_language

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[FileScanEvent], None]


class ProjectScanner:
    """Recursively scans a directory in sorted walk order.

    Files whose language is unknown are passed over silently; files that
    cannot be read are reported as skipped and the scan goes on.
    """

    def __init__(self, config: ScanConfig, registry: LanguageRegistry | None = None):
        self.config = config
        self.root = Path(config.source_dir)
        self.project_name = config.resolved_project_name
        self.registry = registry or default_registry()

    def _walk(self) -> Iterator[tuple[Path, OSError | None]]:
        for path in sorted(self.root.rglob("*")):
            if self._should_skip(path.relative_to(self.root)):
                continue
            try:
                is_file = path.is_file()
            except OSError as e:
                yield path, e
                continue
            if is_file:
                yield path, None

    def iter_files(self) -> Iterator[Path]:
        """Regular files under the root in walk order, minus skipped dirs."""
        for path, error in self._walk():
            if error is None:
                yield path

    def _should_skip(self, relative: Path) -> bool:
        for part in relative.parts:
            for pattern in self.config.skip_dirs:
                if fnmatch.fnmatch(part, pattern):
                    return True
        return False

    def scan_file(self, path: Path) -> FileScanEvent:
        language = detect_language(path.name)
        event = FileScanEvent(path=path, language=language)
        if language is None:
            return event
        try:
            if path.stat().st_size > self.config.max_file_size:
                event.skipped = SkippedFile(path, "file too large")
            else:
                content = path.read_text(encoding="utf-8", errors="replace")
                event.functions = extract_functions(
                    content, language, path, self.project_name, registry=self.registry,
                )
        except OSError as e:
            event.skipped = SkippedFile(path, f"unreadable: {e}")
        if event.skipped:
            logger.warning("Skipping %s: %s", path, event.skipped.reason)
        return event

    def _unreadable(self, path: Path, error: OSError) -> FileScanEvent:
        event = FileScanEvent(path=path, language=detect_language(path.name))
        event.skipped = SkippedFile(path, f"unreadable: {error}")
        logger.warning("Skipping %s: %s", path, event.skipped.reason)
        return event

    def iter_scan(self, cancel_event: threading.Event | None = None) -> Iterator[FileScanEvent]:
        """Yield one event per file; cancellation is checked between files."""
        for path, error in self._walk():
            if cancel_event is not None and cancel_event.is_set():
                logger.info("Scan of %s cancelled", self.root)
                return
            if error is not None:
                yield self._unreadable(path, error)
            else:
                yield self.scan_file(path)

    def scan(
        self,
        cancel_event: threading.Event | None = None,
        progress: ProgressCallback | None = None,
    ) -> ScanResult:
        result = ScanResult(root=self.root)
        logger.info("Scanning %s", self.root)
        for event in self.iter_scan(cancel_event):
            result.files_scanned += 1
            result.functions.extend(event.functions)
            if event.skipped:
                result.skipped.append(event.skipped)
            if progress:
                progress(event)
        result.cancelled = cancel_event is not None and cancel_event.is_set()
        logger.info(
            "Scanned %d files in %s: %d functions, %d skipped",
            result.files_scanned, self.root, len(result.functions), len(result.skipped),
        )
        return result


def scan_directory(directory: Path, skip_dirs: list[str] | None = None) -> list[ExtractedFunction]:
    """Scan a directory and return every extracted function."""
    config = ScanConfig(source_dir=directory)
    if skip_dirs is not None:
        config.skip_dirs = skip_dirs
    return ProjectScanner(config).scan().functions
