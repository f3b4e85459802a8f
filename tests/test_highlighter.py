"""Tests for buffer highlighting and rendering."""

import click
import pytest

from code_snippets.highlight import (
    Highlighter,
    TagBuffer,
    TextBuffer,
    apply_highlighting,
    render_ansi,
    render_html,
)
from code_snippets.models import DEFAULT_TAG, StyledSpan


class RecordingBuffer(TextBuffer):
    def __init__(self):
        self.calls = []

    def set_tag(self, start, end, tag):
        self.calls.append((start, end, tag))


def test_highlight_text_tags_each_character():
    text = "int x = 42;"
    buffer = Highlighter().highlight_text(text, "java")
    assert buffer.runs() == [
        (0, 3, "keyword"),
        (3, 6, DEFAULT_TAG),
        (6, 7, "operator"),
        (7, 8, DEFAULT_TAG),
        (8, 10, "number"),
        (10, 11, DEFAULT_TAG),
    ]
    assert buffer.tag_at(0) == "keyword"
    assert len(buffer) == len(text)


def test_highlight_resets_previous_tags():
    buffer = TagBuffer(4)
    buffer.set_tag(0, 4, "string")
    Highlighter().highlight(buffer, "abcd", "java")
    assert buffer.tags == [DEFAULT_TAG] * 4


def test_highlight_is_idempotent():
    highlighter = Highlighter()
    text = 'if (x) { return "y"; } /* z */'
    buffer = TagBuffer.for_text(text)
    first = highlighter.highlight(buffer, text, "javascript")
    once = list(buffer.tags)
    second = highlighter.highlight(buffer, text, "javascript")
    assert first == second
    assert buffer.tags == once


def test_highlight_unknown_language_uses_default_rule():
    highlighter = Highlighter()
    text = "public class A {}"
    assert highlighter.highlight_text(text, "klingon").tags == \
        highlighter.highlight_text(text, "java").tags


def test_apply_highlighting_resets_first_then_applies_spans():
    buffer = RecordingBuffer()
    spans = [StyledSpan(0, 2, "keyword"), StyledSpan(3, 5, "string")]
    apply_highlighting(buffer, "ab cd", spans)
    assert buffer.calls == [
        (0, 5, DEFAULT_TAG),
        (0, 2, "keyword"),
        (3, 5, "string"),
    ]


def test_highlighting_never_changes_text():
    text = "x = 'a'  # c"
    buffer = Highlighter().highlight_text(text, "python")
    assert len(buffer) == len(text)


def test_tag_buffer_rejects_out_of_range():
    buffer = TagBuffer(3)
    with pytest.raises(ValueError):
        buffer.set_tag(1, 5, "keyword")
    with pytest.raises(ValueError):
        buffer.set_tag(2, 1, "keyword")
    with pytest.raises(ValueError):
        TagBuffer(-1)


def test_empty_text():
    buffer = Highlighter().highlight_text("", "python")
    assert buffer.tags == []
    assert buffer.runs() == []


def test_render_html_escapes_and_wraps():
    text = 'a < "b"'
    spans = [StyledSpan(2, 3, "operator"), StyledSpan(4, 7, "string")]
    assert render_html(text, spans) == (
        'a <span class="tok-operator">&lt;</span> '
        '<span class="tok-string">"b"</span>'
    )


def test_render_html_custom_prefix():
    assert render_html("if", [StyledSpan(0, 2, "keyword")], css_prefix="hl-") == \
        '<span class="hl-keyword">if</span>'


def test_render_ansi_preserves_text():
    text = "return 1; // done"
    spans = Highlighter().tokenizer.tokenize(text, "java")
    rendered = render_ansi(text, spans)
    assert click.unstyle(rendered) == text
    assert "\x1b[" in rendered
