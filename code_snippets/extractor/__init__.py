"""Extractor registry and dispatcher."""

from __future__ import annotations

import logging
from pathlib import Path

from code_snippets.extractor.base import BaseExtractor, find_block_end
from code_snippets.extractor.brace_extractor import BraceExtractor
from code_snippets.extractor.indent_extractor import IndentExtractor
from code_snippets.languages import LanguageRegistry, default_registry
from code_snippets.models import ExtractedFunction, LanguageRule

logger = logging.getLogger(__name__)

_BLOCK_EXTRACTORS: dict[str, type[BaseExtractor]] = {
    "brace": BraceExtractor,
    "indent": IndentExtractor,
}


def get_extractor(rule: LanguageRule) -> BaseExtractor | None:
    """Return the extractor for a rule, or None if it has no function pattern."""
    if rule.function_regex is None:
        return None
    return _BLOCK_EXTRACTORS[rule.block_style](rule)


def extract_functions(
    content: str,
    language: str | None,
    file_path: Path | str,
    project_name: str | None = None,
    *,
    registry: LanguageRegistry | None = None,
) -> list[ExtractedFunction]:
    """Extract function-like blocks from *content*.

    Unknown languages and languages without an extraction pattern give an
    empty list.
    """
    registry = registry or default_registry()
    file_path = Path(file_path)
    rule = registry.get(language)
    if rule is None:
        logger.debug("No rule for language %r (%s)", language, file_path)
        return []
    extractor = get_extractor(rule)
    if extractor is None:
        return []
    return extractor.extract(content, file_path, project_name or file_path.parent.name)


def extract_file(
    file_path: Path,
    project_name: str | None = None,
    *,
    registry: LanguageRegistry | None = None,
) -> list[ExtractedFunction]:
    """Read a source file, detect its language and extract its functions."""
    from code_snippets.scanner.language_map import detect_language

    language = detect_language(file_path.name)
    if language is None:
        return []
    content = file_path.read_text(encoding="utf-8", errors="replace")
    return extract_functions(content, language, file_path, project_name, registry=registry)


__all__ = [
    "BaseExtractor",
    "BraceExtractor",
    "IndentExtractor",
    "extract_file",
    "extract_functions",
    "find_block_end",
    "get_extractor",
]
