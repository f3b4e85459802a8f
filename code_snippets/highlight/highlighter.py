"""Apply tokenizer spans to a text buffer's presentation attributes."""

from __future__ import annotations

import abc
import logging
from typing import Iterable

from code_snippets.highlight.tokenizer import Tokenizer
from code_snippets.languages import LanguageRegistry
from code_snippets.models import DEFAULT_TAG, StyledSpan

logger = logging.getLogger(__name__)


class TextBuffer(abc.ABC):
    """Something whose character ranges can carry a style tag."""

    @abc.abstractmethod
    def set_tag(self, start: int, end: int, tag: str) -> None:
        """Tag the half-open range ``[start, end)``."""


class TagBuffer(TextBuffer):
    """In-memory buffer holding one tag per character of a text."""

    def __init__(self, length: int):
        if length < 0:
            raise ValueError("Buffer length must be >= 0")
        self.tags: list[str] = [DEFAULT_TAG] * length

    @classmethod
    def for_text(cls, text: str) -> TagBuffer:
        return cls(len(text))

    def __len__(self) -> int:
        return len(self.tags)

    def set_tag(self, start: int, end: int, tag: str) -> None:
        if start < 0 or end > len(self.tags) or start > end:
            raise ValueError(f"Range {start}..{end} outside buffer of {len(self.tags)}")
        self.tags[start:end] = [tag] * (end - start)

    def tag_at(self, offset: int) -> str:
        return self.tags[offset]

    def runs(self) -> list[tuple[int, int, str]]:
        """Coalesce consecutive equal tags into ``(start, end, tag)`` runs."""
        runs: list[tuple[int, int, str]] = []
        start = 0
        for i in range(1, len(self.tags) + 1):
            if i == len(self.tags) or self.tags[i] != self.tags[start]:
                runs.append((start, i, self.tags[start]))
                start = i
        return runs


def apply_highlighting(buffer: TextBuffer, text: str, spans: Iterable[StyledSpan]) -> None:
    """Reset *buffer* to the default tag, then apply each span in order.

    Only presentation changes; *text* is used for its length and never
    modified. Applying the same spans twice gives the same result.
    """
    buffer.set_tag(0, len(text), DEFAULT_TAG)
    for span in spans:
        buffer.set_tag(span.start, span.end, span.tag)


class Highlighter:
    """Tokenizes text for a language and applies the spans to a buffer."""

    def __init__(self, registry: LanguageRegistry | None = None):
        self.tokenizer = Tokenizer(registry)

    @property
    def registry(self) -> LanguageRegistry:
        return self.tokenizer.registry

    def highlight(self, buffer: TextBuffer, text: str, language: str | None) -> list[StyledSpan]:
        spans = self.tokenizer.tokenize(text, language)
        apply_highlighting(buffer, text, spans)
        logger.debug("Applied %d spans over %d chars", len(spans), len(text))
        return spans

    def highlight_text(self, text: str, language: str | None) -> TagBuffer:
        buffer = TagBuffer.for_text(text)
        self.highlight(buffer, text, language)
        return buffer
