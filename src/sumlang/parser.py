"""Parser for sumlang expressions.

Recursive descent over a ``Tokenizer`` with one token of lookahead.
Binary operators go through a small Pratt loop driven by ``_INFIX_BP`` so
that new precedence tiers only need a table entry and a node type.

Grammar, highest binding last::

    expr     := unary (PLUS unary)*
    unary    := MINUS literal | prefix
    prefix   := (INCREMENT | DECREMENT) literal | postfix
    postfix  := literal (INCREMENT | DECREMENT)?
    literal  := LPAREN expr RPAREN | NUM_LIT | STRING | IDENT

Every rule either returns a node or raises ``CompileError``; nothing is
recovered mid-expression and no partial tree escapes.
"""

from __future__ import annotations

import logging
from typing import NoReturn

from sumlang.ast_nodes import (
    Add,
    Expr,
    Group,
    Literal,
    PostDecrement,
    PostIncrement,
    PreDecrement,
    PreIncrement,
    UnaryNegate,
    last_token,
)
from sumlang.errors import CompileError, Diagnostic, ErrorKind, Hint
from sumlang.tokenizer import Tokenizer
from sumlang.tokens import LITERAL_KINDS, STEP_KINDS, Token, TokenKind

logger = logging.getLogger(__name__)

# ── Binding powers for the infix loop ───────────────────────────

# (left_bp, right_bp); left < right makes the operator left-associative
_INFIX_BP: dict[TokenKind, tuple[int, int]] = {
    TokenKind.PLUS: (1, 2),
}

_INFIX_NODES: dict[TokenKind, type] = {
    TokenKind.PLUS: Add,
}

_PREFIX_NODES: dict[TokenKind, type] = {
    TokenKind.INCREMENT: PreIncrement,
    TokenKind.DECREMENT: PreDecrement,
}

_POSTFIX_NODES: dict[TokenKind, type] = {
    TokenKind.INCREMENT: PostIncrement,
    TokenKind.DECREMENT: PostDecrement,
}


# Deepest run of nested groups accepted before the parser gives up.
MAX_NESTING = 100


def _describe(token: Token) -> str:
    if token.kind == TokenKind.EOF:
        return "end of input"
    if token.kind == TokenKind.STRING:
        quote = "'" if '"' in token.value else '"'
        return f"`{quote}{token.value}{quote}`"
    return f"`{token.value}`"


class Parser:
    """Parses one sumlang expression from a tokenizer."""

    def __init__(self, tokenizer: Tokenizer, *, strict: bool = True) -> None:
        self.tokenizer = tokenizer
        self.strict = strict
        self._depth = 0

    # ── Token access ─────────────────────────────────────────────

    def _peek(self) -> Token:
        return self.tokenizer.peek()

    def _advance(self) -> Token:
        return self.tokenizer.next()

    def _at(self, kind: TokenKind) -> bool:
        return self._peek().kind == kind

    def _fail(self, kind: ErrorKind, message: str, token: Token, *hints: Hint) -> NoReturn:
        logger.debug(
            "%s at %d:%d: %s", kind.code, token.line, token.column, message,
        )
        raise CompileError(Diagnostic(kind, message, token, list(hints)))

    # ── Entry points ─────────────────────────────────────────────

    def parse(self) -> Expr:
        """Parse an expression; in strict mode the input must end after it."""
        expr = self.parse_expression()
        if self.strict and not self._at(TokenKind.EOF):
            self._reject_trailing()
        return expr

    def parse_expression(self) -> Expr:
        return self._parse_expression(0)

    def _reject_trailing(self) -> NoReturn:
        leftover: list[Token] = []
        while (tok := self._advance()).kind != TokenKind.EOF:
            leftover.append(tok)
        for tok in leftover:
            if tok.kind == TokenKind.NON_TERMINATED_STRING:
                self._unterminated(tok)
        first = leftover[0]
        self._fail(
            ErrorKind.TRAILING_INPUT,
            f"unexpected {_describe(first)} after expression",
            first,
            Hint.remove(leftover, "remove the trailing input"),
        )

    # ── Expressions ──────────────────────────────────────────────

    def _parse_expression(self, min_bp: int) -> Expr:
        left = self._parse_unary()

        while True:
            op = self._peek()
            bp = _INFIX_BP.get(op.kind)
            if bp is None:
                break
            l_bp, r_bp = bp
            if l_bp < min_bp:
                break
            self._advance()
            right = self._parse_expression(r_bp)
            left = _INFIX_NODES[op.kind](left, right)

        return left

    def _parse_unary(self) -> Expr:
        if self._at(TokenKind.MINUS):
            self._advance()
            return UnaryNegate(self._parse_literal())
        return self._parse_prefix()

    def _parse_prefix(self) -> Expr:
        op = self._peek()
        if op.kind not in _PREFIX_NODES:
            return self._parse_postfix()

        self._advance()
        operand = self._parse_literal()
        trailing = self._peek()
        if trailing.kind in STEP_KINDS:
            # Consume it so the caller never spins on the same token.
            self._advance()
            self._fail(
                ErrorKind.PREFIX_POSTFIX,
                f"prefix {_describe(op)} cannot be combined with a postfix {_describe(trailing)}",
                trailing,
                Hint.remove(trailing, f"remove the trailing {_describe(trailing)}"),
            )
        return _PREFIX_NODES[op.kind](operand)

    def _parse_postfix(self) -> Expr:
        expr = self._parse_literal()
        op = self._peek()
        if op.kind in _POSTFIX_NODES:
            self._advance()
            return _POSTFIX_NODES[op.kind](expr)
        return expr

    def _parse_literal(self) -> Expr:
        tok = self._advance()

        if tok.kind == TokenKind.LPAREN:
            if self._depth >= MAX_NESTING:
                self._fail(
                    ErrorKind.NESTING_TOO_DEEP,
                    f"groups nested more than {MAX_NESTING} levels deep",
                    tok,
                    Hint.remove(tok, "remove this `(` and its matching `)`"),
                )
            self._depth += 1
            inner = self._parse_expression(0)
            self._depth -= 1
            if self._advance().kind != TokenKind.RPAREN:
                anchor = last_token(inner)
                self._fail(
                    ErrorKind.UNCLOSED_GROUP,
                    "expected `)` to close the group",
                    anchor,
                    Hint.add(anchor, "insert `)` after this"),
                )
            return Group(inner)

        if tok.kind in LITERAL_KINDS:
            return Literal(tok)

        if tok.kind == TokenKind.NON_TERMINATED_STRING:
            self._unterminated(tok)

        self._fail(
            ErrorKind.UNEXPECTED_TOKEN,
            f"expected an expression, found {_describe(tok)}",
            tok,
            Hint.add(tok, "an operand is required here"),
        )

    def _unterminated(self, tok: Token) -> NoReturn:
        quote = self.tokenizer.buffer[tok.start - 1:tok.start].decode("ascii")
        self._fail(
            ErrorKind.UNTERMINATED_STRING,
            "unterminated string literal",
            tok,
            Hint.add(tok, f"insert a closing {quote} at the end of the string"),
        )


def parse(source: str | bytes, filename: str = "<input>", *, strict: bool = True) -> Expr:
    """Tokenize and parse ``source`` in one call."""
    return Parser(Tokenizer(source, filename), strict=strict).parse()
