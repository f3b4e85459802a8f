"""Extractor for brace-delimited languages (Java, C/C++, C#, JavaScript)."""

from __future__ import annotations

from pathlib import Path

from code_snippets.extractor.base import (
    BaseExtractor,
    find_block_end,
    function_name,
    looks_like_declaration,
)
from code_snippets.models import ExtractedFunction


class BraceExtractor(BaseExtractor):
    """Signature regex up to ``{``, then depth counting to the matching ``}``.

    Searching resumes right after each opening brace, so declarations
    nested in a body (methods of an inner class, local functions) are
    reported as well, after their enclosing function.
    """

    def extract(
        self,
        content: str,
        file_path: Path,
        project_name: str,
    ) -> list[ExtractedFunction]:
        functions: list[ExtractedFunction] = []
        for m in self.rule.function_regex.finditer(content):
            name, name_start = function_name(m)
            start = self._strip_indent(content, m.start())
            if not looks_like_declaration(content[start:name_start], name):
                continue
            end = find_block_end(content, m.end() - 1)
            code = content[start:end]
            if not code.strip():
                continue
            functions.append(self._make_function(name, code, file_path, project_name))
        return functions
