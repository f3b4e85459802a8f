"""Abstract base extractor with shared brace matching."""

from __future__ import annotations

import abc
import re
from pathlib import Path

from code_snippets.models import UNKNOWN_FUNCTION, ExtractedFunction, LanguageRule

# Words a signature regex can mistake for a function name, e.g.
# ``else if (x) {``, ``return new Foo() {`` or ``record Point(int x) {``.
_NOT_A_NAME = {
    "if", "for", "foreach", "while", "switch", "catch", "synchronized",
    "return", "new", "else", "do", "try", "throw", "sizeof", "using", "lock",
    "fixed", "when", "with", "function", "typeof", "delete", "await",
    "yield", "case", "elif",
}
_NOT_BEFORE_NAME = {"new", "return", "throw", "else", "case", "await", "yield", "record"}


def find_block_end(text: str, open_index: int) -> int:
    """Return the offset just past the brace matching ``text[open_index]``.

    Counts ``{`` and ``}`` only; braces inside strings or comments are not
    excluded. If the braces never balance, the block runs to end of text.
    """
    if not 0 <= open_index < len(text) or text[open_index] != "{":
        raise ValueError(f"No opening brace at offset {open_index}")
    depth = 0
    for pos in range(open_index, len(text)):
        ch = text[pos]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return pos + 1
    return len(text)


def function_name(match: re.Match) -> tuple[str, int]:
    """First capture group that took part in the match, with its offset."""
    for index, group in enumerate(match.groups(), start=1):
        if group:
            return group, match.start(index)
    return UNKNOWN_FUNCTION, match.start()


def looks_like_declaration(prefix: str, name: str) -> bool:
    """False for control-flow headers the signature regex also accepts."""
    if name in _NOT_A_NAME:
        return False
    before = prefix.split()
    return not (before and before[-1] in _NOT_BEFORE_NAME)


class BaseExtractor(abc.ABC):
    """Base class for block-style specific extractors."""

    def __init__(self, rule: LanguageRule):
        if rule.function_regex is None:
            raise ValueError(f"Language {rule.key!r} has no function pattern")
        self.rule = rule

    @abc.abstractmethod
    def extract(
        self,
        content: str,
        file_path: Path,
        project_name: str,
    ) -> list[ExtractedFunction]:
        """Extract the functions of *content* in source order."""

    def _make_function(
        self,
        name: str,
        code: str,
        file_path: Path,
        project_name: str,
    ) -> ExtractedFunction:
        return ExtractedFunction(
            project_name=project_name,
            file_name=file_path.name,
            language=self.rule.key,
            function_name=name,
            code=code,
            source_path=file_path,
            extension=self.rule.extension,
        )

    @staticmethod
    def _strip_indent(content: str, start: int) -> int:
        while start < len(content) and content[start] in " \t":
            start += 1
        return start
