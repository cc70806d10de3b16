"""Tests for the command-line interface."""

import io
import json
import logging

import pytest
from rich.console import Console

from noteclip.cli import create_parser, load_config, main
from noteclip.doctor import check_block_parsing, check_dependency, check_html_conversion, run_doctor
from noteclip.models import InlineMode

PAGE_ID = "0123456789abcdef0123456789abcdef"


@pytest.fixture(autouse=True)
def reset_logging():
    """Remove handlers main() attaches so they do not outlive captured streams."""
    yield
    logger = logging.getLogger("noteclip")
    logger.handlers.clear()
    logger.propagate = True


@pytest.fixture
def html_file(tmp_path):
    path = tmp_path / "selection.html"
    path.write_text('<p>Hello <strong>world</strong> and <a href="/docs">docs</a></p>', encoding="utf-8")
    return path


@pytest.fixture
def markdown_file(tmp_path):
    path = tmp_path / "note.md"
    path.write_text("# Title\n\n- item\n", encoding="utf-8")
    return path


class TestParser:
    """Tests for argument parsing and config loading."""

    def test_overrides(self):
        """Test that CLI flags override config values."""
        args = create_parser().parse_args(["--inline-mode", "delimiter", "-v", "html", "--base-url", "https://e.x"])

        config = load_config(args)

        assert config.inline_mode == InlineMode.DELIMITER
        assert config.base_url == "https://e.x"
        assert config.log_level == "DEBUG"

    def test_config_file(self, tmp_path):
        """Test loading a YAML config file."""
        path = tmp_path / "noteclip.yaml"
        path.write_text("inline_mode: delimiter\nlog_level: WARNING\n")
        args = create_parser().parse_args(["--config", str(path), "-q", "strip"])

        config = load_config(args)

        assert config.inline_mode == InlineMode.DELIMITER
        assert config.log_level == "ERROR"


class TestCommands:
    """Tests for the subcommands."""

    def test_html(self, html_file, capsys):
        """Test HTML to Markdown conversion."""
        exit_code = main(["-q", "html", str(html_file), "--base-url", "https://example.com/a"])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert out.strip() == "Hello **world** and [docs](https://example.com/docs)"

    def test_strip(self, html_file, capsys):
        """Test plain text extraction."""
        assert main(["-q", "strip", str(html_file)]) == 0

        assert capsys.readouterr().out.strip() == "Hello world and docs"

    def test_html_keeps_tabs_in_code(self, tmp_path, capsys):
        """Test that code output is written exactly as converted."""
        path = tmp_path / "code.html"
        path.write_text("<pre><code>all:\n\tmake build</code></pre>", encoding="utf-8")

        assert main(["-q", "html", str(path)]) == 0

        assert capsys.readouterr().out == "```\nall:\n\tmake build\n```\n"

    def test_stdin(self, monkeypatch, capsys):
        """Test reading input from stdin."""
        monkeypatch.setattr("sys.stdin", io.StringIO("<em>hi</em>"))

        assert main(["-q", "html"]) == 0
        assert capsys.readouterr().out.strip() == "*hi*"

    def test_blocks(self, markdown_file, capsys):
        """Test Markdown to block requests."""
        assert main(["-q", "blocks", str(markdown_file)]) == 0

        data = json.loads(capsys.readouterr().out)
        assert [block["type"] for block in data] == ["heading_1", "bulleted_list_item"]

    def test_blocks_with_page(self, markdown_file, capsys):
        """Test wrapping blocks in an append request."""
        url = f"https://www.notion.so/Notes-{PAGE_ID}"

        assert main(["-q", "blocks", str(markdown_file), "--page", url]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["block_id"] == PAGE_ID
        assert len(data["children"]) == 2

    def test_blocks_invalid_page(self, markdown_file, capsys):
        """Test that an unparseable page identifier fails."""
        assert main(["-q", "blocks", str(markdown_file), "--page", "nope"]) == 1

        assert "Invalid page identifier" in capsys.readouterr().err

    def test_blocks_delimiter_mode(self, tmp_path, capsys):
        """Test the inline mode flag."""
        path = tmp_path / "note.md"
        path.write_text("**a *b* c**")

        assert main(["-q", "--inline-mode", "delimiter", "blocks", str(path)]) == 0

        data = json.loads(capsys.readouterr().out)
        spans = data[0]["paragraph"]["rich_text"]
        assert [span["text"]["content"] for span in spans] == ["a ", "b", " c"]
        assert spans[1]["annotations"]["italic"] is True

    def test_clip_markdown(self, html_file, capsys):
        """Test clip output as Markdown."""
        exit_code = main(["-q", "clip", str(html_file), "--title", "Article", "--url", "https://example.com/a"])

        assert exit_code == 0
        out = capsys.readouterr().out.strip()
        assert out == (
            "- [Article](https://example.com/a)\n"
            "  > Hello **world** and [docs](https://example.com/docs)"
        )

    def test_clip_json(self, html_file, capsys):
        """Test clip output as block requests."""
        exit_code = main(
            ["-q", "clip", str(html_file), "--title", "Article", "--url", "https://example.com/a", "--json"]
        )

        assert exit_code == 0
        data = json.loads(capsys.readouterr().out)
        assert len(data) == 1
        bullet = data[0]["bulleted_list_item"]
        assert bullet["rich_text"][0]["text"]["link"] == {"url": "https://example.com/a"}
        assert bullet["children"][0]["type"] == "quote"


class TestErrors:
    """Tests for error exits."""

    def test_no_command(self, capsys):
        """Test that running without a command prints help."""
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()

    def test_missing_file(self, tmp_path, capsys):
        """Test a missing input file."""
        assert main(["-q", "html", str(tmp_path / "missing.html")]) == 1
        assert "Error" in capsys.readouterr().err

    def test_undecodable_input(self, tmp_path, capsys):
        """Test that a file that is not UTF-8 is reported, not raised."""
        path = tmp_path / "latin.html"
        path.write_bytes(b"<p>\xff\xfe bad</p>")

        assert main(["-q", "html", str(path)]) == 1
        assert "Error" in capsys.readouterr().err

    def test_bad_config(self, tmp_path, capsys):
        """Test that an invalid config file is reported."""
        path = tmp_path / "noteclip.yaml"
        path.write_text("inline_mode: sideways\n")

        assert main(["--config", str(path), "strip"]) == 1
        assert "Configuration error" in capsys.readouterr().err


class TestDoctor:
    """Tests for the diagnostic checks."""

    def test_check_dependency(self):
        """Test dependency checks."""
        assert check_dependency("json")[0] is True
        ok, message = check_dependency("not_a_real_module_xyz", "fake", optional=True)
        assert ok is False
        assert "optional" in message

    def test_self_tests(self):
        """Test the conversion self-tests."""
        assert check_html_conversion()[0] is True
        assert check_block_parsing()[0] is True

    def test_run_doctor(self):
        """Test the full doctor run."""
        buffer = io.StringIO()

        assert run_doctor(console=Console(file=buffer, width=100)) == 0
        assert "[OK] beautifulsoup4" in buffer.getvalue()
