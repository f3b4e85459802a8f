"""Render highlighted text as HTML or ANSI terminal output."""

from __future__ import annotations

import html
from typing import Iterable

import click

from code_snippets.models import DEFAULT_TAG, StyledSpan

# Editor dark-theme colours
PALETTE: dict[str, tuple[int, int, int]] = {
    "keyword": (86, 156, 214),
    "string": (206, 145, 120),
    "comment": (106, 153, 85),
    "number": (181, 206, 168),
    "operator": (212, 212, 212),
    "builtin": (220, 220, 170),
    "annotation": (220, 220, 170),
    "preprocessor": (197, 134, 192),
    "tag": (86, 156, 214),
    "attribute": (156, 220, 254),
    DEFAULT_TAG: (212, 212, 212),
}


def _segments(text: str, spans: Iterable[StyledSpan]):
    pos = 0
    for span in spans:
        if span.start > pos:
            yield text[pos:span.start], DEFAULT_TAG
        yield text[span.start:span.end], span.tag
        pos = span.end
    if pos < len(text):
        yield text[pos:], DEFAULT_TAG


def render_html(text: str, spans: Iterable[StyledSpan], css_prefix: str = "tok-") -> str:
    parts: list[str] = []
    for chunk, tag in _segments(text, spans):
        escaped = html.escape(chunk, quote=False)
        if tag == DEFAULT_TAG:
            parts.append(escaped)
        else:
            parts.append(f'<span class="{css_prefix}{tag}">{escaped}</span>')
    return "".join(parts)


def render_ansi(
    text: str,
    spans: Iterable[StyledSpan],
    palette: dict[str, tuple[int, int, int]] | None = None,
) -> str:
    palette = palette or PALETTE
    parts: list[str] = []
    for chunk, tag in _segments(text, spans):
        colour = palette.get(tag, palette.get(DEFAULT_TAG))
        parts.append(click.style(chunk, fg=colour, bold=tag == "keyword"))
    return "".join(parts)
