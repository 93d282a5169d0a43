"""Sumlang command-line interface."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from sumlang import __version__
from sumlang.ast_nodes import Expr
from sumlang.config import SumlangConfig, discover_config
from sumlang.errors import CompileError, DiagnosticRenderer
from sumlang.formatter import ExprFormatter
from sumlang.parser import Parser
from sumlang.tokenizer import Tokenizer

logger = logging.getLogger(__name__)


def _load_source(source: str | None, expr: str | None) -> tuple[bytes, str]:
    """Return ``(buffer, filename)`` from a file argument or ``-e`` text."""
    if expr is not None:
        return expr.encode("utf-8"), "<expr>"
    if source is None:
        raise click.UsageError("give a SOURCE file or an expression with -e")
    return Path(source).read_bytes(), source


def _config_for(source: str | None) -> SumlangConfig:
    start = Path(source) if source is not None else None
    return discover_config(start)


def _renderer(config: SumlangConfig, color: bool | None) -> DiagnosticRenderer:
    return DiagnosticRenderer(
        color=config.render.color if color is None else color,
        locator=config.render.locator,
    )


def _parse_or_report(
    buffer: bytes, filename: str, config: SumlangConfig, renderer: DiagnosticRenderer,
) -> Expr | None:
    """Parse one buffer; render its diagnostic to stderr and return None on failure."""
    tokenizer = Tokenizer(buffer, filename)
    try:
        return Parser(tokenizer, strict=config.parse.strict).parse()
    except CompileError as e:
        logger.debug("parse of %s failed: %s", filename, e)
        click.echo(renderer.render(e.diagnostic, tokenizer), err=True)
        return None


@click.group()
@click.version_option(__version__, prog_name="sumlang")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Scan, parse and check sumlang expressions."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("source", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option("-e", "--expr", help="Scan this text instead of a file.")
def tokens(source: str | None, expr: str | None) -> None:
    """Print the token stream, one token per line."""
    buffer, filename = _load_source(source, expr)
    for tok in Tokenizer(buffer, filename):
        marker = " (after newline)" if tok.after_line else ""
        click.echo(f"{tok.line}:{tok.column} {tok.kind.name} {tok.value!r}{marker}")


@main.command()
@click.argument("source", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option("-e", "--expr", help="Parse this text instead of a file.")
@click.option("--tree", is_flag=True, help="Print the syntax tree instead of source.")
@click.option("--color/--no-color", default=None, help="Override colored diagnostics.")
def parse(source: str | None, expr: str | None, tree: bool, color: bool | None) -> None:
    """Parse one expression and print it in canonical form."""
    buffer, filename = _load_source(source, expr)
    config = _config_for(source)
    result = _parse_or_report(buffer, filename, config, _renderer(config, color))
    if result is None:
        raise SystemExit(1)
    formatter = ExprFormatter()
    click.echo(formatter.dump(result) if tree else formatter.format(result))


@main.command()
@click.argument(
    "sources", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False),
)
@click.option("--color/--no-color", default=None, help="Override colored diagnostics.")
def check(sources: tuple[str, ...], color: bool | None) -> None:
    """Parse each file; exit non-zero if any has a syntax error."""
    failed = 0
    for source in sources:
        config = _config_for(source)
        buffer, filename = _load_source(source, None)
        if _parse_or_report(buffer, filename, config, _renderer(config, color)) is None:
            failed += 1
    if failed:
        click.echo(f"{failed} of {len(sources)} file(s) failed", err=True)
        raise SystemExit(1)
    click.echo(f"checked {len(sources)} file(s), no errors")


@main.command()
@click.argument("source", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option("-e", "--expr", help="Highlight this text instead of a file.")
def highlight(source: str | None, expr: str | None) -> None:
    """Print the source with terminal syntax highlighting."""
    from pygments import highlight as pyg_highlight
    from pygments.formatters import TerminalFormatter

    from sumlang.highlighting import SumlangLexer

    buffer, _ = _load_source(source, expr)
    text = buffer.decode("utf-8", errors="replace")
    click.echo(pyg_highlight(text, SumlangLexer(), TerminalFormatter()), nl=False)


@main.command()
def lsp() -> None:
    """Start the sumlang language server (stdio)."""
    from sumlang.lsp import main as lsp_main

    lsp_main()
