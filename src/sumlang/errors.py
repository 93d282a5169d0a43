"""Rust-style diagnostics with fix-it hints.

The data model (``Diagnostic``, ``Hint``) knows nothing about terminals.
``DiagnosticRenderer`` turns it into text and resolves the semantic
``Style`` roles to ANSI sequences only when ``color`` is on.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from pygments.console import ansiformat

from sumlang.tokens import Token

if TYPE_CHECKING:
    from sumlang.tokenizer import Tokenizer


class ErrorKind(Enum):
    UNTERMINATED_STRING = "E101"
    UNEXPECTED_TOKEN = "E201"
    UNCLOSED_GROUP = "E202"
    PREFIX_POSTFIX = "E203"
    TRAILING_INPUT = "E204"
    NESTING_TOO_DEEP = "E205"

    @property
    def code(self) -> str:
        return self.value


class HintKind(Enum):
    ADD = "add"
    REMOVE = "remove"


class Style(Enum):
    """Semantic roles a renderer may style."""

    ERROR = "error"
    MESSAGE = "message"
    LOCATION = "location"
    SUGGEST_ADD = "suggest-add"
    SUGGEST_REMOVE = "suggest-remove"
    HELP = "help"


# pygments.console attribute strings; *x* is bold.
_ANSI: dict[Style, str] = {
    Style.ERROR: "*red*",
    Style.MESSAGE: "*white*",
    Style.LOCATION: "*blue*",
    Style.SUGGEST_ADD: "*green*",
    Style.SUGGEST_REMOVE: "*brightred*",
    Style.HELP: "*cyan*",
}

_HINT_STYLES = {
    HintKind.ADD: Style.SUGGEST_ADD,
    HintKind.REMOVE: Style.SUGGEST_REMOVE,
}


@dataclass(frozen=True)
class Hint:
    """A suggested edit anchored to one or more tokens."""

    kind: HintKind
    targets: tuple[Token, ...]
    help: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "targets", tuple(self.targets))
        if not self.targets:
            raise ValueError("a hint needs at least one target token")

    @classmethod
    def add(cls, target: Token, help: str) -> Hint:
        return cls(HintKind.ADD, (target,), help)

    @classmethod
    def remove(cls, targets: Token | Iterable[Token], help: str) -> Hint:
        if isinstance(targets, Token):
            targets = (targets,)
        return cls(HintKind.REMOVE, tuple(targets), help)

    @property
    def line(self) -> int:
        return self.targets[0].line

    @property
    def column(self) -> int:
        return self.targets[0].column


@dataclass
class Diagnostic:
    """A syntax error: stable kind, message, anchor token and fix-it hints."""

    kind: ErrorKind
    message: str
    token: Token
    hints: list[Hint] = field(default_factory=list)

    @property
    def code(self) -> str:
        return self.kind.code


class CompileError(Exception):
    """Raised when scanning or parsing fails; carries one diagnostic."""

    def __init__(self, diagnostic: Diagnostic) -> None:
        self.diagnostic = diagnostic
        super().__init__(f"{diagnostic.code}: {diagnostic.message}")

    @property
    def kind(self) -> ErrorKind:
        return self.diagnostic.kind


def _marker(targets: Iterable[Token], line_len: int) -> tuple[int, str]:
    """Build a ``^~~`` marker covering each target's columns.

    Returns the column the marker starts at and the marker text.
    """
    covered: list[int] = []
    for tok in targets:
        end = min(tok.column + tok.width - 1, line_len + 1)
        covered.extend(range(tok.column, max(end, tok.column) + 1))
    if not covered:
        return 1, ""
    first = min(covered)
    cols = set(covered)
    chars = [" "] * max(cols)
    for col in cols:
        chars[col - 1] = "^" if col == first else "~"
    return first, "".join(chars[first - 1:])


class DiagnosticRenderer:
    """Renders diagnostics and hints against the tokenizer's source."""

    def __init__(self, *, color: bool = True, locator: bool = True) -> None:
        self.color = color
        self.locator = locator

    def _s(self, style: Style, text: str) -> str:
        if not self.color or not text:
            return text
        return ansiformat(_ANSI[style], text)

    def _marker_line(self, hint: Hint, source_line: str, targets: Iterable[Token]) -> str:
        first, marker = _marker(targets, len(source_line))
        padding = " " * (first - 1)
        return padding + self._s(_HINT_STYLES[hint.kind], marker)

    # ── Hint rendering ───────────────────────────────────────────

    def render_hint(self, hint: Hint, tokenizer: Tokenizer) -> str:
        """Source line, marker under the first target, help text."""
        source_line = tokenizer.line_of(hint.targets[0])
        return "\n".join([
            source_line,
            self._marker_line(hint, source_line, hint.targets[:1]),
            self._s(Style.HELP, hint.help),
        ])

    def render_hint_targets(self, hint: Hint, tokenizer: Tokenizer) -> str:
        """Like ``render_hint`` with a ``line:column:`` locator, marking every target.

        Targets on a later line than the first are not marked.
        """
        source_line = tokenizer.line_of(hint.targets[0])
        locator = f"{hint.line}:{hint.column}: "
        on_line = [t for t in hint.targets if t.line == hint.line]
        return "\n".join([
            self._s(Style.LOCATION, locator) + source_line,
            " " * len(locator) + self._marker_line(hint, source_line, on_line),
            self._s(Style.HELP, hint.help),
        ])

    # ── Diagnostic rendering ─────────────────────────────────────

    def render(self, diag: Diagnostic, tokenizer: Tokenizer) -> str:
        lines: list[str] = []
        token = diag.token

        # Header: error[E202]: message
        lines.append(
            self._s(Style.ERROR, f"error[{diag.code}]")
            + self._s(Style.MESSAGE, f": {diag.message}")
        )

        if self.locator:
            loc = f"{tokenizer.filename}:{token.line}:{token.column}"
            lines.append(f"  {self._s(Style.LOCATION, '-->')} {loc}")

        gutter = f"{token.line:>4}"
        blank = " " * len(gutter)
        source_line = tokenizer.line_of(token)
        lines.append(f"  {self._s(Style.LOCATION, blank + ' |')}")
        lines.append(f"  {self._s(Style.LOCATION, gutter + ' |')} {source_line}")

        # Underlines first, then explanations.
        for hint in diag.hints:
            on_line = [t for t in hint.targets if t.line == token.line]
            if not on_line:
                continue
            lines.append(
                f"  {self._s(Style.LOCATION, blank + ' |')} "
                f"{self._marker_line(hint, source_line, on_line)}"
            )
        for hint in diag.hints:
            lines.append(
                f"  {self._s(Style.LOCATION, blank + ' =')} "
                f"{self._s(Style.HELP, 'help')}: {hint.help}"
            )

        return "\n".join(lines)
