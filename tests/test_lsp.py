"""Tests for the sumlang LSP helpers."""

from __future__ import annotations

from lsprotocol import types as lsp

from sumlang.lsp import analyze, span_to_range, token_to_range
from sumlang.source import Span
from sumlang.tokenizer import Tokenizer

URI = "file:///tmp/expr.sum"


class TestSpanConversion:
    def test_span_to_range_basic(self):
        r = span_to_range(Span(1, 1, 1, 5))
        assert (r.start.line, r.start.character) == (0, 0)
        assert (r.end.line, r.end.character) == (0, 5)

    def test_span_to_range_multiline(self):
        r = span_to_range(Span(5, 3, 7, 10))
        assert (r.start.line, r.start.character) == (4, 2)
        assert (r.end.line, r.end.character) == (6, 10)

    def test_token_to_range(self):
        tok = list(Tokenizer("a\n  foo").tokens())[1]
        r = token_to_range(tok)
        assert (r.start.line, r.start.character) == (1, 2)
        assert (r.end.line, r.end.character) == (1, 5)

    def test_multiline_string_range(self):
        tok = list(Tokenizer('x "ab\ncd" y').tokens())[1]
        assert tok.span == Span(1, 3, 2, 3)
        r = token_to_range(tok)
        assert (r.start.line, r.start.character) == (0, 2)
        assert (r.end.line, r.end.character) == (1, 3)

    def test_unterminated_multiline_string_range(self):
        tok = list(Tokenizer('"ab\nc').tokens())[0]
        assert tok.span == Span(1, 1, 2, 1)


class TestAnalyze:
    def test_valid_source_has_no_diagnostics(self):
        assert analyze(URI, "2 + 3") == []

    def test_unclosed_group(self):
        diags = analyze(URI, "(2 + 3")
        assert len(diags) == 1
        diag = diags[0]
        assert diag.code == "E202"
        assert diag.severity == lsp.DiagnosticSeverity.Error
        assert diag.source == "sumlang"
        assert diag.range.start.character == 5
        related = diag.related_information
        assert related is not None
        assert related[0].message.startswith("add:")
        assert related[0].location.uri == URI

    def test_trailing_range_spans_all_targets(self):
        diag = analyze(URI, "2 3 4")[0]
        hint_range = diag.related_information[0].location.range
        assert (hint_range.start.character, hint_range.end.character) == (2, 5)
        assert diag.related_information[0].message.startswith("remove:")
