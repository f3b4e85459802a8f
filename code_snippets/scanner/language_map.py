"""Shared extension-to-language mapping for the scanner and extractor."""

from __future__ import annotations

from pathlib import PurePath

# Maps file extension -> language key in the registry
EXT_TO_LANGUAGE: dict[str, str] = {
    ".java": "java",
    ".py": "python",
    ".pyw": "python",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "javascript",
    ".tsx": "javascript",
    ".c": "cpp",
    ".h": "cpp",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".cxx": "cpp",
    ".hpp": "cpp",
    ".hh": "cpp",
    ".cs": "csharp",
    ".sql": "sql",
    ".html": "html",
    ".htm": "html",
    ".css": "css",
}


def detect_language(file_name: str | PurePath) -> str | None:
    """Language key for a file name, or None when the extension is unknown."""
    suffix = PurePath(file_name).suffix.lower()
    return EXT_TO_LANGUAGE.get(suffix)
