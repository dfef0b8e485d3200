"""Machine-readable output switch shared by every cfix command."""

from __future__ import annotations

from typing import Any

import orjson
import typer

# Set by ``cfix --json`` or by any command's own ``--json``
_json_mode: bool = False


def set_json_flag(value: bool) -> None:
    """Reset the output mode at the start of each invocation."""
    global _json_mode  # noqa: PLW0603
    _json_mode = value


def is_json_output(local_flag: bool = False) -> bool:
    """Return True when the command should print JSON.

    Passing a command's own ``--json`` turns JSON mode on for the rest of the
    invocation, so later errors are reported as JSON too.
    """
    global _json_mode  # noqa: PLW0603
    _json_mode = _json_mode or local_flag
    return _json_mode


def echo_json(data: Any) -> None:
    """Print *data* as indented JSON on stdout."""
    typer.echo(orjson.dumps(data, option=orjson.OPT_INDENT_2).decode())


def echo_error(message: str) -> None:
    """Report a failed command on stderr.

    Prints ``{"error": message}`` in JSON mode and ``Error: message``
    otherwise.
    """
    if _json_mode:
        typer.echo(orjson.dumps({"error": message}).decode(), err=True)
    else:
        typer.echo(f"Error: {message}", err=True)
