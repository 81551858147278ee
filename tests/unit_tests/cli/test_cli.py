"""Unit tests for CLI command behavior."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from plain_codec.cli import cli as cli_module

runner = CliRunner()


def test_help_shows_commands() -> None:
    """Ensure top-level help lists the codec subcommands."""
    result = runner.invoke(cli_module.app, ["--help"])
    assert result.exit_code == 0
    assert "decode" in result.output
    assert "encode" in result.output
    assert "charsets" in result.output


def test_decode_file_with_charset(tmp_path: Path) -> None:
    """Decode a Latin-1 file into UTF-8 text."""
    source = tmp_path / "latin1.txt"
    source.write_bytes(b"\xe0 Montr\xe9al")
    result = runner.invoke(
        cli_module.app, ["decode", str(source), "--charset", "ISO-8859-1"]
    )
    assert result.exit_code == 0, result.output
    assert "à Montréal" in result.stdout


def test_decode_stdin_escapes_invalid_bytes() -> None:
    """Escape invalid UTF-8 read from stdin."""
    result = runner.invoke(cli_module.app, ["decode"], input=b"foo \xed\xb9\x81\xc3")
    assert result.exit_code == 0, result.output
    assert "foo \\xED\\xB9\\x81\\xC3" in result.stdout


def test_decode_json_with_ecs() -> None:
    """Print the full record as JSON."""
    result = runner.invoke(
        cli_module.app,
        ["decode", "--json", "--ecs-compatibility", "v1"],
        input=b"hello",
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["message"] == "hello"
    assert payload["event"] == {"original": "hello"}
    assert payload["@timestamp"].endswith("Z")


def test_decode_unknown_charset_fails_cleanly() -> None:
    """Surface configuration errors with their exit code."""
    result = runner.invoke(cli_module.app, ["decode", "--charset", "NOPE-42"], input=b"x")
    assert result.exit_code == 2
    assert "ConfigurationError" in result.output


def test_encode_with_format() -> None:
    """Render a JSON record through a template."""
    record = {"hello": "world", "something": {"fancy": 123}}
    result = runner.invoke(
        cli_module.app,
        ["encode", "--format", "%{[hello]} %{[something][fancy]}"],
        input=json.dumps(record),
    )
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "world 123"


def test_encode_default_rendering_parses_timestamp(tmp_path: Path) -> None:
    """Parse @timestamp strings for the default rendering."""
    source = tmp_path / "record.json"
    source.write_text(
        json.dumps({"@timestamp": "2024-01-02T03:04:05.678Z", "host": "h", "message": "m"}),
        encoding="utf-8",
    )
    result = runner.invoke(cli_module.app, ["encode", str(source)])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "2024-01-02T03:04:05.678Z h m"


def test_encode_malformed_template_exit_code() -> None:
    """Exit with the template error code for malformed templates."""
    result = runner.invoke(
        cli_module.app, ["encode", "--format", "%{[oops}"], input="{}"
    )
    assert result.exit_code == 4
    assert "TemplateExpansionError" in result.output


def test_encode_rejects_invalid_json() -> None:
    """Reject input that is not a JSON object."""
    assert runner.invoke(cli_module.app, ["encode"], input="not json").exit_code != 0
    assert runner.invoke(cli_module.app, ["encode"], input="[1, 2]").exit_code != 0


def test_charsets_lists_names() -> None:
    """List supported charset names."""
    result = runner.invoke(cli_module.app, ["charsets"])
    assert result.exit_code == 0
    names = result.stdout.split()
    assert "utf-8" in names
    assert "ASCII-8BIT" in names
