"""Tests for the sumlang CLI and config."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from sumlang.cli import main
from sumlang.config import (
    SumlangConfig,
    discover_config,
    find_config,
    load_config,
)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def tmp_project(tmp_path):
    """Create a directory with a config and a few expression files."""
    (tmp_path / "sumlang.toml").write_text(
        "[render]\ncolor = false\nlocator = true\n"
        "[parse]\nstrict = true\n"
    )
    (tmp_path / "good.sum").write_text("1 + 2 + x\n")
    (tmp_path / "bad.sum").write_text("++x++\n")
    return tmp_path


# --- CLI tests ---


class TestCLI:
    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        for command in ("tokens", "parse", "check", "highlight", "lsp"):
            assert command in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_tokens(self, runner):
        result = runner.invoke(main, ["tokens", "-e", "a++"])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "1:1 IDENT 'a'",
            "1:2 INCREMENT '++'",
            "1:4 EOF ''",
        ]

    def test_tokens_marks_newlines(self, runner):
        result = runner.invoke(main, ["tokens", "-e", "a\nb"])
        assert "2:1 IDENT 'b' (after newline)" in result.output

    def test_parse_prints_canonical_form(self, runner):
        result = runner.invoke(main, ["parse", "-e", "2+3+4"])
        assert result.exit_code == 0
        assert result.output.strip() == "2 + 3 + 4"

    def test_parse_tree(self, runner):
        result = runner.invoke(main, ["parse", "--tree", "-e", "2 + 3"])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "Add",
            "  Literal NUM_LIT '2'",
            "  Literal NUM_LIT '3'",
        ]

    def test_parse_error(self, runner):
        result = runner.invoke(main, ["parse", "--no-color", "-e", "(2 + 3"])
        assert result.exit_code == 1
        assert "error[E202]" in result.output
        assert "<expr>:1:6" in result.output

    def test_parse_needs_input(self, runner):
        result = runner.invoke(main, ["parse"])
        assert result.exit_code == 2

    def test_parse_file(self, runner, tmp_project):
        result = runner.invoke(main, ["parse", str(tmp_project / "good.sum")])
        assert result.exit_code == 0
        assert result.output.strip() == "1 + 2 + x"

    def test_check_reports_failures(self, runner, tmp_project):
        result = runner.invoke(
            main, ["check", str(tmp_project / "good.sum"), str(tmp_project / "bad.sum")],
        )
        assert result.exit_code == 1
        assert "error[E203]" in result.output
        assert "1 of 2 file(s) failed" in result.output
        assert "\x1b[" not in result.output

    def test_check_all_good(self, runner, tmp_project):
        result = runner.invoke(main, ["check", str(tmp_project / "good.sum")])
        assert result.exit_code == 0
        assert "checked 1 file(s)" in result.output

    def test_lenient_config(self, runner, tmp_path):
        (tmp_path / "sumlang.toml").write_text("[parse]\nstrict = false\n")
        (tmp_path / "two.sum").write_text("2 3\n")
        result = runner.invoke(main, ["parse", str(tmp_path / "two.sum")])
        assert result.exit_code == 0
        assert result.output.strip() == "2"

    def test_highlight(self, runner):
        result = runner.invoke(main, ["highlight", "-e", "a + 1"])
        assert result.exit_code == 0
        assert "a" in result.output
        assert "1" in result.output

    def test_verbose_flag(self, runner):
        result = runner.invoke(main, ["-v", "parse", "--no-color", "-e", "(1"])
        assert result.exit_code == 1


# --- Config tests ---


class TestConfig:
    def test_find_config(self, tmp_project):
        nested = tmp_project / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config(nested) == (tmp_project / "sumlang.toml").resolve()

    def test_find_config_from_file(self, tmp_project):
        assert find_config(tmp_project / "good.sum") == (tmp_project / "sumlang.toml").resolve()

    def test_load_config(self, tmp_project):
        config = load_config(tmp_project / "sumlang.toml")
        assert config.render.color is False
        assert config.render.locator is True
        assert config.parse.strict is True

    def test_load_partial_config(self, tmp_path):
        path = tmp_path / "sumlang.toml"
        path.write_text("[render]\nlocator = false\n")
        config = load_config(path)
        assert config.render.color is True
        assert config.render.locator is False
        assert config.parse.strict is True

    def test_defaults(self):
        config = SumlangConfig()
        assert config.render.color is True
        assert config.parse.strict is True

    def test_discover_falls_back_to_defaults(self, tmp_path, monkeypatch):
        def missing(start_path=None):
            raise FileNotFoundError

        monkeypatch.setattr("sumlang.config.find_config", missing)
        assert discover_config(tmp_path) == SumlangConfig()
