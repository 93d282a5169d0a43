"""AST node definitions for sumlang expressions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from sumlang.tokens import Token


@dataclass(frozen=True)
class Literal:
    token: Token


@dataclass(frozen=True)
class UnaryNegate:
    operand: Expr


@dataclass(frozen=True)
class Group:
    inner: Expr


@dataclass(frozen=True)
class Add:
    left: Expr
    right: Expr


@dataclass(frozen=True)
class PreIncrement:
    operand: Expr


@dataclass(frozen=True)
class PostIncrement:
    operand: Expr


@dataclass(frozen=True)
class PreDecrement:
    operand: Expr


@dataclass(frozen=True)
class PostDecrement:
    operand: Expr


Expr = Union[
    Literal, UnaryNegate, Group, Add,
    PreIncrement, PostIncrement, PreDecrement, PostDecrement,
]


def last_token(expr: Expr) -> Token:
    """Return the source token that ends ``expr``.

    Follows the grammar: the right side of an addition, the inside of a
    group or unary node, the token of a literal. New node kinds must be
    added here or the lookup falls through to ``TypeError``.
    """
    match expr:
        case Literal(token=token):
            return token
        case Add(right=right):
            return last_token(right)
        case Group(inner=inner):
            return last_token(inner)
        case (UnaryNegate(operand=operand) | PreIncrement(operand=operand)
              | PostIncrement(operand=operand) | PreDecrement(operand=operand)
              | PostDecrement(operand=operand)):
            return last_token(operand)
    raise TypeError(f"not an expression node: {type(expr).__name__}")

