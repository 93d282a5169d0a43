"""Tokenizer for sumlang expressions.

A pull-based scanner over an immutable byte buffer. Callers ask for one
token at a time with ``next()`` and look ahead with ``peek()``, which never
moves the cursor. Columns count bytes, one per byte.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import NamedTuple

from sumlang.source import as_buffer, decode, line_text
from sumlang.tokens import Token, TokenKind

_NEWLINE = 0x0A
_SKIPPED = frozenset(b" \t\r")
_QUOTES = frozenset(b"\"'")

_SINGLE_CHAR: dict[int, TokenKind] = {
    ord("("): TokenKind.LPAREN,
    ord(")"): TokenKind.RPAREN,
}

# Operators that become a two-byte token when the byte repeats.
_DOUBLED: dict[int, tuple[TokenKind, TokenKind]] = {
    ord("+"): (TokenKind.PLUS, TokenKind.INCREMENT),
    ord("-"): (TokenKind.MINUS, TokenKind.DECREMENT),
}


def _is_digit(c: int) -> bool:
    return 0x30 <= c <= 0x39


def _is_alpha(c: int) -> bool:
    return 0x41 <= c <= 0x5A or 0x61 <= c <= 0x7A


def _is_alnum(c: int) -> bool:
    return _is_digit(c) or _is_alpha(c)


class Cursor(NamedTuple):
    """Snapshot of the tokenizer's mutable state."""

    offset: int
    line: int
    column: int
    after_line: bool


class Tokenizer:
    """Scans sumlang source into tokens on demand."""

    def __init__(self, source: str | bytes, filename: str = "<input>") -> None:
        self.buffer = as_buffer(source)
        self.filename = filename
        self.offset = 0
        self.line = 1
        self.column = 1
        self.after_line = False
        # Cursor at the first byte of the lexeme being scanned.
        self._start = self.state

    def __iter__(self) -> Iterator[Token]:
        return self.tokens()

    # ── Cursor state ─────────────────────────────────────────────

    @property
    def state(self) -> Cursor:
        return Cursor(self.offset, self.line, self.column, self.after_line)

    def _restore(self, cursor: Cursor) -> None:
        self.offset, self.line, self.column, self.after_line = cursor

    # ── Helpers ──────────────────────────────────────────────────

    def _peekc(self) -> int | None:
        if self.offset >= len(self.buffer):
            return None
        return self.buffer[self.offset]

    def _advance(self) -> int | None:
        if self.offset >= len(self.buffer):
            return None
        c = self.buffer[self.offset]
        self.offset += 1
        if c == _NEWLINE:
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return c

    def _skip_whitespace(self) -> None:
        while True:
            c = self._peekc()
            if c == _NEWLINE:
                self.after_line = True
            elif c not in _SKIPPED:
                return
            self._advance()

    def _emit(self, kind: TokenKind, begin: int | None = None, end: int | None = None) -> Token:
        """Build a token positioned at the start of the current lexeme.

        ``begin``/``end`` narrow the value to a slice of the lexeme (string
        contents without their quotes); line and column stay at the lexeme.
        """
        start = self._start
        begin = start.offset if begin is None else begin
        end = self.offset if end is None else end
        value = decode(self.buffer[begin:end])
        return Token(kind, begin, end, start.line, start.column, value, start.after_line)

    # ── Public API ───────────────────────────────────────────────

    def peek(self) -> Token:
        """Return the next token without consuming it."""
        saved, start = self.state, self._start
        token = self.next()
        self._restore(saved)
        self._start = start
        return token

    def next(self) -> Token:
        """Consume and return the next token."""
        self._skip_whitespace()

        self._start = self.state
        self.after_line = False

        c = self._peekc()
        if c is None:
            return self._emit(TokenKind.EOF)

        if c in _DOUBLED:
            single, double = _DOUBLED[c]
            self._advance()
            if self._peekc() == c:
                self._advance()
                return self._emit(double)
            return self._emit(single)

        if c in _SINGLE_CHAR:
            self._advance()
            return self._emit(_SINGLE_CHAR[c])

        if c in _QUOTES:
            return self._scan_string(c)

        if _is_digit(c):
            while (c := self._peekc()) is not None and _is_digit(c):
                self._advance()
            return self._emit(TokenKind.NUM_LIT)

        if _is_alpha(c):
            while (c := self._peekc()) is not None and _is_alnum(c):
                self._advance()
            return self._emit(TokenKind.IDENT)

        self._advance()
        return self._emit(TokenKind.UNKNOWN)

    def _scan_string(self, quote: int) -> Token:
        self._advance()  # opening quote
        content_start = self.offset
        while True:
            c = self._peekc()
            if c is None:
                return self._emit(TokenKind.NON_TERMINATED_STRING, content_start)
            if c == quote:
                content_end = self.offset
                self._advance()  # closing quote
                return self._emit(TokenKind.STRING, content_start, content_end)
            self._advance()

    def tokens(self) -> Iterator[Token]:
        """Yield every remaining token, ending with (and including) EOF."""
        while True:
            token = self.next()
            yield token
            if token.kind == TokenKind.EOF:
                return

    def line_of(self, token: Token) -> str:
        """Return the full source line containing ``token``'s start offset."""
        return line_text(self.buffer, token.start)
