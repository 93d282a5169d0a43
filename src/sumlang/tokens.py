"""Token kinds and token representation for the sumlang tokenizer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from sumlang.source import Span


class TokenKind(Enum):
    # Literals
    NUM_LIT = auto()
    STRING = auto()
    NON_TERMINATED_STRING = auto()

    # Operators
    PLUS = auto()
    INCREMENT = auto()
    MINUS = auto()
    DECREMENT = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()

    # Identifiers
    IDENT = auto()

    # Special
    UNKNOWN = auto()
    EOF = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    start: int
    end: int
    line: int
    column: int
    value: str
    after_line: bool = False

    @property
    def width(self) -> int:
        """Columns the lexeme occupies in the source, quotes included.

        String values exclude their quotes, so the offsets alone are short
        by the delimiters. EOF still occupies one column so it can be marked.
        """
        width = self.end - self.start
        if self.kind == TokenKind.STRING:
            width += 2
        elif self.kind == TokenKind.NON_TERMINATED_STRING:
            width += 1
        return max(1, width)

    @property
    def span(self) -> Span:
        if "\n" not in self.value:
            return Span(self.line, self.column, self.line, self.column + self.width - 1)
        # Only string lexemes cross lines; the end column restarts after
        # the last newline and counts bytes.
        tail = self.value.rsplit("\n", 1)[1]
        end_col = len(tail.encode("utf-8"))
        if self.kind == TokenKind.STRING:
            end_col += 1
        end_line = self.line + self.value.count("\n")
        return Span(self.line, self.column, end_line, max(1, end_col))


# Tokens that may stand alone as a literal operand.
LITERAL_KINDS: frozenset[TokenKind] = frozenset({
    TokenKind.NUM_LIT,
    TokenKind.STRING,
    TokenKind.IDENT,
})

# Operators written after (or before) a literal to step it by one.
STEP_KINDS: frozenset[TokenKind] = frozenset({
    TokenKind.INCREMENT,
    TokenKind.DECREMENT,
})
