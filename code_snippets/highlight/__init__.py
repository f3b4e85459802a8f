"""Syntax highlighting: tokenizer, buffer highlighter and renderers."""

from __future__ import annotations

from code_snippets.highlight.highlighter import (
    Highlighter,
    TagBuffer,
    TextBuffer,
    apply_highlighting,
)
from code_snippets.highlight.render import render_ansi, render_html
from code_snippets.highlight.tokenizer import Tokenizer, iter_tokens, tokenize

__all__ = [
    "Highlighter",
    "TagBuffer",
    "TextBuffer",
    "Tokenizer",
    "apply_highlighting",
    "iter_tokens",
    "render_ansi",
    "render_html",
    "tokenize",
]
