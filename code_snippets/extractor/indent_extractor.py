"""Extractor for indentation-based languages (Python)."""

from __future__ import annotations

from pathlib import Path

from code_snippets.extractor.base import BaseExtractor, function_name
from code_snippets.models import ExtractedFunction


class IndentExtractor(BaseExtractor):
    """A function runs from its ``def`` line to the next top-level ``def``.

    There is no indentation tracking: a nested or method ``def`` also ends
    at the next top-level ``def`` (or end of file), so it overlaps its
    enclosing function.
    """

    def extract(
        self,
        content: str,
        file_path: Path,
        project_name: str,
    ) -> list[ExtractedFunction]:
        matches = list(self.rule.function_regex.finditer(content))
        top_level = [m.start() for m in matches if not content[m.start():m.start() + 1].isspace()]

        functions: list[ExtractedFunction] = []
        for m in matches:
            name, _ = function_name(m)
            start = self._strip_indent(content, m.start())
            end = next((s for s in top_level if s > start), len(content))
            code = content[start:end]
            if not code.strip():
                continue
            functions.append(self._make_function(name, code, file_path, project_name))
        return functions
