"""Language registry: language key -> LanguageRule."""

from __future__ import annotations

import functools
from types import MappingProxyType
from typing import Iterable, Iterator

from code_snippets.models import LanguageRule
from code_snippets.languages.rules import BUILTIN_RULES


class LanguageRegistry:
    """Read-only mapping of language keys and aliases to rules.

    The first registered rule is the default used when a caller asks for a
    language the registry does not know.
    """

    def __init__(self, rules: Iterable[LanguageRule]):
        by_key: dict[str, LanguageRule] = {}
        lookup: dict[str, str] = {}
        for rule in rules:
            key = rule.key.lower()
            if key in by_key:
                raise ValueError(f"Duplicate language key: {rule.key!r}")
            by_key[key] = rule
            lookup[key] = key
            for alias in rule.aliases:
                lookup.setdefault(alias.lower(), key)
        if not by_key:
            raise ValueError("A language registry needs at least one rule")
        self._rules = MappingProxyType(by_key)
        self._lookup = MappingProxyType(lookup)

    @property
    def default(self) -> LanguageRule:
        return next(iter(self._rules.values()))

    def get(self, language: str | None) -> LanguageRule | None:
        """Return the rule for a key or alias, or None if unknown."""
        if not language:
            return None
        key = self._lookup.get(language.strip().lower())
        return self._rules[key] if key else None

    def resolve(self, language: str | None) -> LanguageRule:
        """Like get(), but fall back to the default rule."""
        return self.get(language) or self.default

    def keys(self) -> list[str]:
        return list(self._rules)

    def __contains__(self, language: object) -> bool:
        return isinstance(language, str) and self.get(language) is not None

    def __iter__(self) -> Iterator[LanguageRule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)


@functools.lru_cache(maxsize=None)
def default_registry() -> LanguageRegistry:
    """The built-in registry, constructed once per process."""
    return LanguageRegistry(BUILTIN_RULES)


__all__ = ["LanguageRegistry", "default_registry", "BUILTIN_RULES"]
