"""Sumlang: scanner, expression parser and fix-it diagnostics."""

__version__ = "0.1.0"

from sumlang.errors import (  # noqa: E402
    CompileError,
    Diagnostic,
    DiagnosticRenderer,
    ErrorKind,
    Hint,
    HintKind,
    Style,
)
from sumlang.parser import Parser, parse  # noqa: E402
from sumlang.tokenizer import Tokenizer  # noqa: E402
from sumlang.tokens import Token, TokenKind  # noqa: E402

__all__ = [
    "CompileError",
    "Diagnostic",
    "DiagnosticRenderer",
    "ErrorKind",
    "Hint",
    "HintKind",
    "Parser",
    "Style",
    "Token",
    "TokenKind",
    "Tokenizer",
    "parse",
]
