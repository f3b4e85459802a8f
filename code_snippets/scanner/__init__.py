"""Language detection, project scanning and background scan tasks."""

from __future__ import annotations

from code_snippets.scanner.language_map import EXT_TO_LANGUAGE, detect_language
from code_snippets.scanner.project_scanner import ProjectScanner, scan_directory
from code_snippets.scanner.task import ScanTask, TaskStatus

__all__ = [
    "EXT_TO_LANGUAGE",
    "ProjectScanner",
    "ScanTask",
    "TaskStatus",
    "detect_language",
    "scan_directory",
]
