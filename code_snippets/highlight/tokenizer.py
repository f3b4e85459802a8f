"""Single-pass regex tokenizer producing style-tagged spans."""

from __future__ import annotations

import logging
from typing import Iterator

from code_snippets.languages import LanguageRegistry, default_registry
from code_snippets.models import LanguageRule, StyledSpan

logger = logging.getLogger(__name__)


def iter_tokens(text: str, rule: LanguageRule) -> Iterator[tuple[StyledSpan, str]]:
    """Yield ``(span, lexeme)`` pairs for every token in *text*.

    The rule's alternation is searched from the scan cursor; the leftmost
    match wins and, at the same offset, the earliest declared category.
    Characters no category matches are skipped and keep the default tag.
    """
    pattern = rule.token_regex
    if pattern is None or not text:
        return
    style_map = rule.style_map
    pos = 0
    length = len(text)
    while pos < length:
        m = pattern.search(text, pos)
        if m is None:
            return
        start, end = m.span()
        if end == start:
            # Empty match: never emit, step past it
            pos = start + 1
            continue
        yield StyledSpan(start, end, style_map[m.lastgroup]), m.group()
        pos = end


def tokenize(text: str, rule: LanguageRule) -> Iterator[StyledSpan]:
    """Yield the ordered, non-overlapping spans of *text* under *rule*."""
    for span, _ in iter_tokens(text, rule):
        yield span


class Tokenizer:
    """Tokenizer bound to a registry, resolving languages by key."""

    def __init__(self, registry: LanguageRegistry | None = None):
        self.registry = registry or default_registry()

    def rule_for(self, language: str | None) -> LanguageRule:
        rule = self.registry.get(language)
        if rule is None:
            logger.debug(
                "Unknown language %r, using default rule %r",
                language, self.registry.default.key,
            )
            return self.registry.default
        return rule

    def tokenize(self, text: str, language: str | None) -> list[StyledSpan]:
        return list(tokenize(text, self.rule_for(language)))
