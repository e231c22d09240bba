#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_cli.py
"""Unit tests for the md2dita command."""

import io
import logging
import sys
from unittest.mock import patch

import pytest

from md2dita import __version__
from md2dita.cli import create_parser, main
from md2dita.constants import (
    EXIT_ACQUISITION_ERROR,
    EXIT_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from md2dita.exceptions import RenderingError, ValidationError


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo the root logger changes main() makes."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def guide_file(tmp_path):
    """Write a small Markdown file with front matter."""
    path = tmp_path / "guide.md"
    path.write_text("---\nid: user-guide\nauthor: Jane\n---\n# Guide\n\nWelcome.\n", encoding="utf-8")
    return path


@pytest.mark.unit
@pytest.mark.cli
class TestArgumentParser:
    """Test argument parsing."""

    def test_defaults(self):
        """Test default argument values."""
        args = create_parser().parse_args(["notes.md"])

        assert args.input == "notes.md"
        assert args.out is None
        assert args.encoding is None
        assert args.parse_frontmatter is True
        assert args.id_from_metadata is False
        assert args.log_level == "WARNING"

    def test_log_level_case_insensitive(self):
        """Test that log level names are upper-cased."""
        assert create_parser().parse_args(["a.md", "--log-level", "debug"]).log_level == "DEBUG"

    def test_version(self, capsys):
        """Test --version output."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_missing_input(self):
        """Test that INPUT is required."""
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 2


@pytest.mark.unit
@pytest.mark.cli
class TestConversion:
    """Test successful conversions."""

    def test_stdout(self, guide_file, capsys):
        """Test writing the topic to standard output."""
        assert main([str(guide_file)]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert out.startswith("<?xml")
        assert "<!DOCTYPE topic" in out
        assert 'id="guide"' in out
        assert "<author" in out

    def test_output_file(self, guide_file, tmp_path, capsys):
        """Test writing the topic to a file."""
        target = tmp_path / "guide.dita"

        assert main([str(guide_file), "-o", str(target)]) == EXIT_SUCCESS
        assert target.read_bytes().startswith(b"<?xml")
        assert capsys.readouterr().out == ""

    def test_id_from_metadata(self, guide_file, capsys):
        """Test taking the topic id from front matter."""
        main([str(guide_file), "--id-from-metadata"])

        assert 'id="user-guide"' in capsys.readouterr().out

    def test_no_doctype_no_pretty(self, guide_file, capsys):
        """Test compact output without a DOCTYPE."""
        main([str(guide_file), "--no-doctype", "--no-pretty"])

        out = capsys.readouterr().out
        assert "<!DOCTYPE" not in out
        assert 'id="guide"><title class="- topic/title ">Guide</title><prolog' in out

    def test_no_parse_frontmatter(self, guide_file, capsys):
        """Test that the front-matter block can be left as Markdown."""
        main([str(guide_file), "--no-parse-frontmatter"])

        assert "<prolog" not in capsys.readouterr().out

    def test_stdin(self, capsys):
        """Test reading Markdown bytes from standard input."""
        stdin = io.TextIOWrapper(io.BytesIO(b"\xef\xbb\xbf# From stdin\n"), encoding="utf-8")
        with patch.object(sys, "stdin", stdin):
            assert main(["-"]) == EXIT_SUCCESS

        assert 'id="from-stdin"' in capsys.readouterr().out

    def test_stdin_declared_encoding(self, capsys):
        """Test --encoding for standard input."""
        stdin = io.TextIOWrapper(io.BytesIO("# Café".encode("latin-1")), encoding="latin-1")
        with patch.object(sys, "stdin", stdin):
            assert main(["-", "--encoding", "latin-1"]) == EXIT_SUCCESS

        assert "Café" in capsys.readouterr().out


@pytest.mark.unit
@pytest.mark.cli
class TestExitCodes:
    """Test error reporting and exit codes."""

    def test_missing_file(self, tmp_path, capsys):
        """Test that an unreadable input exits with the acquisition code."""
        assert main([str(tmp_path / "missing.md")]) == EXIT_ACQUISITION_ERROR
        assert capsys.readouterr().err.startswith("Error:")

    def test_unknown_encoding(self, guide_file):
        """Test that an unknown encoding is an acquisition failure."""
        assert main([str(guide_file), "--encoding", "no-such-codec"]) == EXIT_ACQUISITION_ERROR

    def test_invalid_front_matter(self, tmp_path, capsys):
        """Test that broken front matter exits with the general error code."""
        path = tmp_path / "broken.md"
        path.write_text("---\nkey: [unclosed\n---\n# Title\n", encoding="utf-8")

        assert main([str(path)]) == EXIT_ERROR
        assert "front matter" in capsys.readouterr().err

    def test_validation_error(self, guide_file):
        """Test the validation exit code."""
        with patch("md2dita.cli.to_dita", side_effect=ValidationError("bad option")):
            assert main([str(guide_file)]) == EXIT_VALIDATION_ERROR

    def test_missing_http_dependency(self):
        """Test that a URL without httpx installed is a dependency failure."""
        with patch.dict(sys.modules, {"httpx": None}):
            assert main(["https://example.com/notes.md"]) == EXIT_VALIDATION_ERROR

    def test_rendering_error(self, guide_file):
        """Test the rendering exit code."""
        with patch("md2dita.cli.to_dita", side_effect=RenderingError("no rule")):
            assert main([str(guide_file)]) == EXIT_RENDERING_ERROR

    def test_unexpected_error(self, guide_file, capsys):
        """Test that unexpected exceptions are reported."""
        with patch("md2dita.cli.to_dita", side_effect=RuntimeError("boom")):
            assert main([str(guide_file)]) == EXIT_ERROR

        assert "Unexpected error: boom" in capsys.readouterr().err
