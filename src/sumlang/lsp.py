"""Sumlang Language Server: pygls-based LSP publishing parse diagnostics.

Each open document holds one expression. On open and on every change the
document is parsed and the first syntax error (if any) is published, with
its fix-it hints attached as related information.
"""

from __future__ import annotations

import logging

from lsprotocol import types as lsp
from pygls.lsp.server import LanguageServer

from sumlang import __version__
from sumlang.errors import CompileError, Diagnostic, HintKind
from sumlang.parser import Parser
from sumlang.source import Span
from sumlang.tokenizer import Tokenizer
from sumlang.tokens import Token

logger = logging.getLogger(__name__)

_HINT_PREFIX = {
    HintKind.ADD: "add",
    HintKind.REMOVE: "remove",
}


# ── Conversion helpers ────────────────────────────────────────────


def span_to_range(span: Span) -> lsp.Range:
    """Convert a 1-indexed Span to a 0-indexed LSP Range."""
    return lsp.Range(
        start=lsp.Position(line=span.start_line - 1, character=span.start_col - 1),
        end=lsp.Position(line=span.end_line - 1, character=span.end_col),
    )


def token_to_range(token: Token) -> lsp.Range:
    return span_to_range(token.span)


def _tokens_range(tokens: tuple[Token, ...]) -> lsp.Range:
    first, last = tokens[0].span, tokens[-1].span
    return span_to_range(Span(first.start_line, first.start_col, last.end_line, last.end_col))


def to_lsp_diagnostic(diag: Diagnostic, uri: str) -> lsp.Diagnostic:
    """Convert a sumlang Diagnostic to an LSP Diagnostic."""
    related = [
        lsp.DiagnosticRelatedInformation(
            location=lsp.Location(uri=uri, range=_tokens_range(hint.targets)),
            message=f"{_HINT_PREFIX[hint.kind]}: {hint.help}",
        )
        for hint in diag.hints
    ]
    return lsp.Diagnostic(
        range=token_to_range(diag.token),
        severity=lsp.DiagnosticSeverity.Error,
        source="sumlang",
        code=diag.code,
        message=f"[{diag.code}] {diag.message}",
        related_information=related or None,
    )


def analyze(uri: str, source: str) -> list[lsp.Diagnostic]:
    """Parse ``source`` and return the diagnostics to publish."""
    try:
        Parser(Tokenizer(source, uri)).parse()
    except CompileError as e:
        return [to_lsp_diagnostic(e.diagnostic, uri)]
    return []


# ── Server ────────────────────────────────────────────────────────

server = LanguageServer(
    "sumlang-lsp", __version__,
    text_document_sync_kind=lsp.TextDocumentSyncKind.Full,
)


def _publish(uri: str, source: str) -> None:
    diagnostics = analyze(uri, source)
    logger.debug("publishing %d diagnostic(s) for %s", len(diagnostics), uri)
    server.text_document_publish_diagnostics(lsp.PublishDiagnosticsParams(
        uri=uri,
        diagnostics=diagnostics,
    ))


@server.feature(lsp.TEXT_DOCUMENT_DID_OPEN)
def did_open(params: lsp.DidOpenTextDocumentParams) -> None:
    _publish(params.text_document.uri, params.text_document.text)


@server.feature(lsp.TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: lsp.DidChangeTextDocumentParams) -> None:
    # Full sync: the last change holds the whole document
    source = params.content_changes[-1].text if params.content_changes else ""
    _publish(params.text_document.uri, source)


@server.feature(lsp.TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: lsp.DidCloseTextDocumentParams) -> None:
    server.text_document_publish_diagnostics(lsp.PublishDiagnosticsParams(
        uri=params.text_document.uri,
        diagnostics=[],
    ))


# ── Entry point ──────────────────────────────────────────────────


def main() -> None:
    """Start the sumlang language server on stdio."""
    server.start_io()
