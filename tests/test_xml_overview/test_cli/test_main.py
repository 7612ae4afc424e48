"""Tests for the xml-overview command-line tool."""

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from xml_overview import __version__
from xml_overview.api import XMLOverview
from xml_overview.cli.main import create_argument_parser, load_config, main
from xml_overview.shared import ConfigError, OverviewConfig

DOCUMENT = "<r>\n  <i/>\n  <i/>\n</r>"


@pytest.fixture
def document(tmp_path: Path) -> Path:
    path = tmp_path / "doc.xml"
    path.write_text(DOCUMENT, encoding="utf-8")
    return path


class TestArgumentParser:
    """Test command-line argument parsing."""

    def test_file_is_required(self) -> None:
        """Test running without --file is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            create_argument_parser().parse_args([])
        assert exc_info.value.code == 2

    def test_short_and_long_options(self) -> None:
        """Test every option parses."""
        args = create_argument_parser().parse_args(
            ["-f", "in.xml", "-d", "3", "-o", "out.xml", "-v", "--strict", "-q"]
        )
        assert args.file == Path("in.xml")
        assert args.depth == 3
        assert args.output == Path("out.xml")
        assert args.verbose
        assert args.strict
        assert args.quiet

    def test_depth_must_be_an_integer(self) -> None:
        """Test a non-numeric depth is rejected."""
        with pytest.raises(SystemExit):
            create_argument_parser().parse_args(["-f", "in.xml", "-d", "deep"])

    def test_version(self, capsys: pytest.CaptureFixture) -> None:
        """Test --version prints the package version."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestLoadConfig:
    """Test configuration assembly from files and flags."""

    def _args(self, *extra: str):
        return create_argument_parser().parse_args(["-f", "in.xml", *extra])

    def test_defaults(self) -> None:
        """Test no flags give the default configuration."""
        assert load_config(self._args()) == OverviewConfig()

    def test_flags_override(self) -> None:
        """Test flags map onto configuration fields."""
        config = load_config(self._args("-v", "-d", "2", "--strict"))

        assert config.verbose
        assert config.max_depth == 2
        assert config.validate_closing_names

    def test_config_file(self, tmp_path: Path) -> None:
        """Test settings are read from a JSON file and flags win."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"max_depth": 5, "minimize": False}))

        config = load_config(self._args("-c", str(path), "-d", "2"))

        assert config.max_depth == 2
        assert not config.minimize

    def test_missing_config_file(self, tmp_path: Path) -> None:
        """Test an unreadable config file is a configuration error."""
        with pytest.raises(ConfigError):
            load_config(self._args("-c", str(tmp_path / "missing.json")))


class TestMain:
    """Test end-to-end runs of the tool."""

    def test_writes_overview_to_stdout(
        self, document: Path, capsys: pytest.CaptureFixture
    ) -> None:
        """Test the overview is printed with a trailing newline."""
        assert main(["-f", str(document)]) == 0
        assert capsys.readouterr().out == "<r>\n  <i/>\n  \n</r>\n"

    def test_writes_overview_to_file(
        self, document: Path, tmp_path: Path, capsys: pytest.CaptureFixture
    ) -> None:
        """Test --output writes the overview and prints nothing."""
        output = tmp_path / "overview.xml"

        assert main(["-f", str(document), "-o", str(output)]) == 0
        assert output.read_text() == "<r>\n  <i/>\n  \n</r>"
        assert capsys.readouterr().out == ""

    def test_verbose(self, document: Path, capsys: pytest.CaptureFixture) -> None:
        """Test --verbose annotates collapsed siblings."""
        assert main(["-f", str(document), "-v"]) == 0
        assert "<!-- 1 more <i> omitted -->" in capsys.readouterr().out

    def test_depth(self, document: Path, capsys: pytest.CaptureFixture) -> None:
        """Test --depth limits the rendered levels."""
        assert main(["-f", str(document), "-d", "1"]) == 0
        assert capsys.readouterr().out == "<r/>\n"

    def test_invalid_depth(self, document: Path, capsys: pytest.CaptureFixture) -> None:
        """Test a depth below one is a configuration error."""
        assert main(["-f", str(document), "-d", "0"]) == 1
        assert "Configuration error" in capsys.readouterr().err

    def test_invalid_config_file(
        self, document: Path, tmp_path: Path, capsys: pytest.CaptureFixture
    ) -> None:
        """Test malformed JSON configuration is reported."""
        path = tmp_path / "config.json"
        path.write_text("{not json")

        assert main(["-f", str(document), "-c", str(path)]) == 1
        assert "Configuration error" in capsys.readouterr().err

    def test_missing_input(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        """Test a missing input file fails with a message."""
        assert main(["-f", str(tmp_path / "missing.xml")]) == 1
        assert "Could not read" in capsys.readouterr().err

    def test_malformed_document(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        """Test conversion errors fail with a message and no output."""
        path = tmp_path / "bad.xml"
        path.write_text("<a><b></a>")

        assert main(["-f", str(path)]) == 1
        captured = capsys.readouterr()
        assert "Failed to convert" in captured.err
        assert captured.out == ""

    def test_strict(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        """Test --strict rejects mismatched closing tags."""
        path = tmp_path / "mismatch.xml"
        path.write_text("<a></b>")

        assert main(["-f", str(path)]) == 0
        assert main(["-f", str(path), "--strict"]) == 1
        assert "does not match" in capsys.readouterr().err

    def test_unwritable_output(
        self, document: Path, tmp_path: Path, capsys: pytest.CaptureFixture
    ) -> None:
        """Test a write failure is reported."""
        assert main(["-f", str(document), "-o", str(tmp_path)]) == 1
        assert "Error writing output" in capsys.readouterr().err

    def test_keyboard_interrupt(self, document: Path, capsys: pytest.CaptureFixture) -> None:
        """Test interruption exits with the conventional status."""
        with patch.object(XMLOverview, "convert_file", side_effect=KeyboardInterrupt):
            assert main(["-f", str(document)]) == 130

        assert "interrupted" in capsys.readouterr().err

    def test_invalid_utf8_input(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        """Test undecodable input fails with a message instead of replacement text."""
        path = tmp_path / "latin1.xml"
        path.write_bytes(b"<a>caf\xe9</a>")

        assert main(["-f", str(path)]) == 1
        captured = capsys.readouterr()
        assert "not valid UTF-8" in captured.err
        assert captured.out == ""


class TestConfigureLogging:
    """Test the logging level chosen by the tool."""

    def _level(self, document: Path, *extra: str) -> int:
        with patch("logging.basicConfig") as basic_config:
            assert main(["-f", str(document), *extra]) == 0
        return basic_config.call_args.kwargs["level"]

    def test_default_level(self, document: Path) -> None:
        """Test the configured level is used by default."""
        assert self._level(document) == logging.INFO

    def test_verbose_does_not_change_level(self, document: Path) -> None:
        """Test --verbose only affects the overview text."""
        assert self._level(document, "-v") == logging.INFO

    def test_quiet(self, document: Path) -> None:
        """Test --quiet only logs errors."""
        assert self._level(document, "-q") == logging.ERROR

    def test_level_from_config_file(self, document: Path, tmp_path: Path) -> None:
        """Test logging_level is read from the config file."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"logging_level": "WARNING"}))

        assert self._level(document, "-c", str(path)) == logging.WARNING
