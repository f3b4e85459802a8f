"""Data models for the code-snippets engine."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

DEFAULT_TAG = "default"
UNKNOWN_FUNCTION = "unknown"

_SLUG_RE = re.compile(r"[^a-z0-9]+")


@dataclass(frozen=True)
class TokenCategory:
    """A named token class with its regex and display tag."""
    name: str
    pattern: str
    tag: str
    flags: int = 0

    def __post_init__(self):
        if not self.name.isidentifier():
            raise ValueError(f"Category name must be an identifier: {self.name!r}")
        compiled = re.compile(self.pattern, self.flags)
        if compiled.groups:
            raise ValueError(
                f"Category {self.name!r} must use non-capturing groups only"
            )

    def group(self) -> str:
        """Render this category as a named alternative."""
        if self.flags:
            return f"(?P<{self.name}>{_scoped(self.pattern, self.flags)})"
        return f"(?P<{self.name}>{self.pattern})"


def _scoped(pattern: str, flags: int) -> str:
    letters = ""
    if flags & re.IGNORECASE:
        letters += "i"
    if flags & re.MULTILINE:
        letters += "m"
    if flags & re.DOTALL:
        letters += "s"
    return f"(?{letters}:{pattern})" if letters else pattern


@dataclass(frozen=True)
class LanguageRule:
    """Tokenizer categories, extraction pattern and style map for one language.

    Categories are kept in declaration order, which is also their priority:
    they are joined into one alternation so that at a given offset the
    earliest declared category that matches wins.
    """
    key: str
    categories: tuple[TokenCategory, ...]
    aliases: tuple[str, ...] = ()
    function_pattern: str | None = None
    block_style: str | None = None  # "brace" or "indent"
    extension: str = ".txt"
    _token_re: re.Pattern = field(init=False, repr=False, compare=False)
    _function_re: re.Pattern | None = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        names = [c.name for c in self.categories]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate token category in rule {self.key!r}")
        if self.function_pattern and self.block_style not in ("brace", "indent"):
            raise ValueError(f"Rule {self.key!r} needs a block style for extraction")
        token_re = re.compile("|".join(c.group() for c in self.categories)) if names else None
        function_re = (
            re.compile(self.function_pattern, re.MULTILINE)
            if self.function_pattern else None
        )
        object.__setattr__(self, "_token_re", token_re)
        object.__setattr__(self, "_function_re", function_re)

    @property
    def token_regex(self) -> re.Pattern | None:
        return self._token_re

    @property
    def function_regex(self) -> re.Pattern | None:
        return self._function_re

    @property
    def style_map(self) -> Mapping[str, str]:
        return MappingProxyType({c.name: c.tag for c in self.categories})

    @property
    def tags(self) -> tuple[str, ...]:
        return tuple(dict.fromkeys(c.tag for c in self.categories))


@dataclass(frozen=True, order=True)
class StyledSpan:
    """Half-open ``[start, end)`` range of the original text with a tag."""
    start: int
    end: int
    tag: str

    def __post_init__(self):
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid span offsets: {self.start}..{self.end}")

    def __len__(self) -> int:
        return self.end - self.start


def slugify(name: str, max_length: int = 40) -> str:
    slug = _SLUG_RE.sub("-", name.lower())[:max_length].strip("-")
    return slug or "snippet"


@dataclass
class ExtractedFunction:
    """A function-like block found in a source file."""
    project_name: str
    file_name: str
    language: str
    function_name: str
    code: str
    source_path: Path
    extension: str = ""

    @property
    def gist_filename(self) -> str:
        """A file name safe to publish the code under."""
        return slugify(self.function_name) + (self.extension or ".txt")

    def to_dict(self) -> dict:
        return {
            "project_name": self.project_name,
            "file_name": self.file_name,
            "language": self.language,
            "function_name": self.function_name,
            "code": self.code,
            "source_path": str(self.source_path),
            "gist_filename": self.gist_filename,
        }

    def __str__(self) -> str:
        return f"{self.function_name} ({self.file_name})"


@dataclass
class SkippedFile:
    """A file the scanner could not process."""
    path: Path
    reason: str


@dataclass
class FileScanEvent:
    """Outcome of scanning a single file."""
    path: Path
    language: str | None
    functions: list[ExtractedFunction] = field(default_factory=list)
    skipped: SkippedFile | None = None


@dataclass
class ScanResult:
    """Aggregated result of a project scan."""
    root: Path
    functions: list[ExtractedFunction] = field(default_factory=list)
    skipped: list[SkippedFile] = field(default_factory=list)
    files_scanned: int = 0
    cancelled: bool = False


DEFAULT_SKIP_DIRS = [
    "node_modules", ".git", "__pycache__", ".dart_tool",
    "build", "dist", ".next", ".venv", "venv", "env",
    ".eggs", "*.egg-info", ".idea", ".gradle", "target",
]


@dataclass
class ScanConfig:
    """Configuration for a project scan."""
    source_dir: Path = field(default_factory=lambda: Path("."))
    project_name: str | None = None
    skip_dirs: list[str] = field(default_factory=lambda: list(DEFAULT_SKIP_DIRS))
    max_file_size: int = 2 * 1024 * 1024

    @property
    def resolved_project_name(self) -> str:
        if self.project_name:
            return self.project_name
        return Path(self.source_dir).resolve().name or "project"
