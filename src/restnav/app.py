"""Typer application and CLI entry point for restnav.

This module wires together the top-level Typer application and registers the
built-in sub-commands: ``init``, ``config`` and the resource commands
(``list``, ``fetch``, ``total``, ``create``, ``update``, ``delete``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
:class:`~restnav.exceptions.RestnavError` instances exit with their own exit
code; any other exception is written to a crash log under the data
directory.

See Also:
    :mod:`restnav.config`: Profile and global configuration resolution.
    :mod:`restnav.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from restnav import __version__
from restnav.exit_codes import EXIT_GENERIC_FAILURE, EXIT_SUCCESS


app = typer.Typer(
    name="restnav",
    help="Browse and modify tree-shaped REST APIs by resource path.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"restnav {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    profile: Optional[str] = typer.Option(
        None, "--profile", "-p", help="Profile name to use."
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Override the profile's API base URL."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Skip confirmations."
    ),
) -> None:
    """Install the output manager and share the connection flags via ``ctx.obj``."""
    from restnav.output import OutputFormat, OutputManager, set_output

    if json_output and plain_output:
        raise typer.BadParameter("--json and --plain cannot be combined")
    fmt = OutputFormat.JSON if json_output else OutputFormat.PLAIN if plain_output else OutputFormat.AUTO
    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))

    ctx.ensure_object(dict)
    ctx.obj.update(profile=profile, base_url=base_url, force=force, verbose=verbose)


def _register_commands() -> None:
    from restnav.commands.config import config_app
    from restnav.commands.init import init_command
    from restnav.commands.resources import (
        create_command,
        delete_command,
        fetch_command,
        list_command,
        total_command,
        update_command,
    )

    app.command("init")(init_command)
    app.add_typer(config_app, name="config", help="Global settings and saved profiles.")
    app.command("list")(list_command)
    app.command("fetch")(fetch_command)
    app.command("total")(total_command)
    app.command("create")(create_command)
    app.command("update")(update_command)
    app.command("delete")(delete_command)


_register_commands()


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from restnav.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def run(args: Optional[list[str]] = None) -> int:
    """Invoke the Typer app and translate errors into an exit code.

    :class:`~restnav.exceptions.RestnavError` is reported on stderr and
    mapped to its ``exit_code``. Anything else produces a crash log and
    :data:`~restnav.exit_codes.EXIT_GENERIC_FAILURE`.
    """
    from restnav.exceptions import RestnavError
    from restnav.output import error

    try:
        app(args=args, prog_name="restnav")
    except SystemExit as exc:
        # Usage errors, typer.Exit and aborted prompts all end here.
        if exc.code is None:
            return EXIT_SUCCESS
        return exc.code if isinstance(exc.code, int) else EXIT_GENERIC_FAILURE
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        return 130
    except RestnavError as exc:
        error(str(exc))
        return exc.exit_code
    except Exception as exc:
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        return EXIT_GENERIC_FAILURE
    return EXIT_SUCCESS


def main() -> None:
    """CLI entry point invoked by the ``restnav`` console script."""
    _setup_signal_handlers()
    sys.exit(run())
