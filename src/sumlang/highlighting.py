"""Pygments lexer for sumlang expressions."""

from pygments.lexer import RegexLexer
from pygments.token import Error, Name, Number, Operator, Punctuation, String, Text


class SumlangLexer(RegexLexer):
    """Pygments lexer for sumlang expressions."""

    name = "Sumlang"
    aliases = ["sumlang"]
    filenames = ["*.sum"]
    mimetypes = ["text/x-sumlang"]

    tokens = {
        "root": [
            # Whitespace
            (r"\s+", Text),
            # Strings (no escapes; either quote)
            (r'"[^"]*"', String.Double),
            (r"'[^']*'", String.Single),
            # Unterminated strings run to end of input
            (r"[\"'][\s\S]*", Error),
            # Numbers
            (r"[0-9]+", Number.Integer),
            # Operators (multi-char before single-char)
            (r"\+\+|--", Operator),
            (r"[+\-]", Operator),
            # Identifiers
            (r"[A-Za-z][A-Za-z0-9]*", Name),
            # Punctuation
            (r"[()]", Punctuation),
            # Anything else the scanner reports as unknown
            (r".", Error),
        ],
    }
