#!/usr/bin/env python3
"""
plain_codec.cli.cli

Typer-based CLI around the plain codec.

Each input file (or stdin) is treated as exactly one message; the CLI does
not split streams into lines or frames.

Examples
--------
Decode a Latin-1 file:

    plain-codec decode notes.txt --charset ISO-8859-1

Render a JSON record through a template:

    echo '{"hello": "world"}' | plain-codec encode --format '%{hello}!'
"""

from __future__ import annotations

import json
import logging
import traceback
from datetime import datetime
from pathlib import Path

import typer

from plain_codec.adapters.diagnostics import LoggingSink
from plain_codec.adapters.events import TIMESTAMP_FIELD, Event
from plain_codec.adapters.interpolation import json_default
from plain_codec.application.options import EcsCompatibility
from plain_codec.charset import DEFAULT_CHARSET, supported_charsets
from plain_codec.codecs.plain import PlainCodec
from plain_codec.errors import PlainCodecError

app = typer.Typer(
    name="plain-codec",
    help="Decode bytes of any charset into records and render records as text.",
    no_args_is_help=True,
)

logger = logging.getLogger("plain_codec.cli")

CHARSET_HELP = "Source charset of the input (see `plain-codec charsets`)."
INPUT_HELP = "Input file. Reads stdin when omitted."


def _print_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly error.

    Parameters
    ----------
    exc : Exception
        Exception raised by the command.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"✗ {type(exc).__name__}: {exc}", err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _read_input(path: Path | None) -> bytes:
    if path is None:
        return typer.get_binary_stream("stdin").read()
    return path.read_bytes()


def _event_from_json(raw: bytes) -> Event:
    """Parse one JSON object into an event."""
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise typer.BadParameter(f"Input is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise typer.BadParameter("Input must be a JSON object.")
    stamp = payload.get(TIMESTAMP_FIELD)
    if isinstance(stamp, str):
        try:
            payload[TIMESTAMP_FIELD] = datetime.fromisoformat(stamp)
        except ValueError as exc:
            raise typer.BadParameter(f"Invalid {TIMESTAMP_FIELD}: {stamp}") from exc
    return Event(payload)


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks and debug logs."),
) -> None:
    """Initialize shared CLI state.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug output.
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG)
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("decode")
def decode_cmd(
    ctx: typer.Context,
    input_path: Path | None = typer.Argument(
        None,
        exists=True,
        readable=True,
        dir_okay=False,
        help=INPUT_HELP,
    ),
    charset: str = typer.Option(DEFAULT_CHARSET, "--charset", help=CHARSET_HELP),
    ecs_compatibility: EcsCompatibility = typer.Option(
        EcsCompatibility.DISABLED,
        "--ecs-compatibility",
        help="Also keep the decoded text under [event][original] (v1/v8).",
    ),
    as_json: bool = typer.Option(
        False, "--json", help="Print the whole record as JSON instead of the message."
    ),
) -> None:
    """Decode one message into a record and print it."""
    debug: bool = bool(ctx.obj.get("debug", False))

    try:
        codec = PlainCodec(
            charset=charset,
            ecs_compatibility=ecs_compatibility,
            sink=LoggingSink(logger),
        )
        data = _read_input(input_path)

        def _emit(record: Event) -> None:
            if as_json:
                typer.echo(
                    json.dumps(record.to_dict(), default=json_default, ensure_ascii=False)
                )
            else:
                typer.echo(record.get("message"))

        codec.decode(data, _emit)
    except PlainCodecError as exc:
        raise typer.Exit(code=_print_error(exc, debug))


@app.command("encode")
def encode_cmd(
    ctx: typer.Context,
    input_path: Path | None = typer.Argument(
        None,
        exists=True,
        readable=True,
        dir_okay=False,
        help="JSON object file. Reads stdin when omitted.",
    ),
    format: str | None = typer.Option(
        None,
        "--format",
        help="Output template, e.g. '%{[hello]} %{[something][fancy]}'.",
    ),
) -> None:
    """Render one JSON record as text."""
    debug: bool = bool(ctx.obj.get("debug", False))

    event = _event_from_json(_read_input(input_path))
    try:
        codec = PlainCodec(format=format)
        codec.encode(event, lambda _record, text: typer.echo(text))
    except PlainCodecError as exc:
        raise typer.Exit(code=_print_error(exc, debug))


@app.command("charsets")
def charsets_cmd() -> None:
    """List supported charset names."""
    for name in supported_charsets():
        typer.echo(name)


if __name__ == "__main__":
    app()
