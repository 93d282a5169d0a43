"""Canonical source and tree rendering for parsed expressions."""

from __future__ import annotations

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
)
from sumlang.tokens import TokenKind

# Operator precedence table (higher binds tighter)
_ADD_PREC = 1

_PREFIX_OPS: dict[type, str] = {
    UnaryNegate: "-",
    PreIncrement: "++",
    PreDecrement: "--",
}

_POSTFIX_OPS: dict[type, str] = {
    PostIncrement: "++",
    PostDecrement: "--",
}


class ExprFormatter:
    """Format an expression tree back to source text, or dump its shape."""

    # ── Public API ─────────────────────────────────────────────

    def format(self, expr: Expr) -> str:
        return self._format_expr(expr)

    def dump(self, expr: Expr) -> str:
        """Indented one-node-per-line view, two spaces per level."""
        lines: list[str] = []
        self._dump(expr, 0, lines)
        return "\n".join(lines)

    # ── Source text ────────────────────────────────────────────

    def _format_expr(self, expr: Expr, parent_prec: int = 0) -> str:
        if isinstance(expr, Literal):
            return self._format_literal(expr)
        if isinstance(expr, Group):
            return f"({self._format_expr(expr.inner)})"
        if isinstance(expr, Add):
            # Walk the left spine iteratively; parsed chains lean left.
            rights: list[Expr] = []
            node: Expr = expr
            while isinstance(node, Add):
                rights.append(node.right)
                node = node.left
            parts = [self._format_expr(node, _ADD_PREC)]
            # A right-nested Add only comes from hand-built trees.
            parts.extend(self._format_expr(r, _ADD_PREC + 1) for r in reversed(rights))
            result = " + ".join(parts)
            if _ADD_PREC < parent_prec:
                return f"({result})"
            return result
        if type(expr) in _PREFIX_OPS:
            return f"{_PREFIX_OPS[type(expr)]}{self._format_expr(expr.operand, 99)}"
        if type(expr) in _POSTFIX_OPS:
            return f"{self._format_expr(expr.operand, 99)}{_POSTFIX_OPS[type(expr)]}"
        raise TypeError(f"cannot format {type(expr).__name__}")

    def _format_literal(self, lit: Literal) -> str:
        tok = lit.token
        if tok.kind == TokenKind.STRING:
            quote = "'" if '"' in tok.value else '"'
            return f"{quote}{tok.value}{quote}"
        return tok.value

    # ── Tree dump ──────────────────────────────────────────────

    def _dump(self, expr: Expr, depth: int, lines: list[str]) -> None:
        pad = "  " * depth
        if isinstance(expr, Literal):
            lines.append(f"{pad}Literal {expr.token.kind.name} {expr.token.value!r}")
            return
        if isinstance(expr, Add):
            self._dump_add(expr, depth, lines)
            return
        lines.append(f"{pad}{type(expr).__name__}")
        if isinstance(expr, Group):
            self._dump(expr.inner, depth + 1, lines)
        else:
            self._dump(expr.operand, depth + 1, lines)

    def _dump_add(self, expr: Add, depth: int, lines: list[str]) -> None:
        spine: list[Add] = []
        node: Expr = expr
        while isinstance(node, Add):
            lines.append(f"{'  ' * (depth + len(spine))}Add")
            spine.append(node)
            node = node.left
        self._dump(node, depth + len(spine), lines)
        for level in range(len(spine), 0, -1):
            self._dump(spine[level - 1].right, depth + level, lines)
