"""Typer application and CLI entry point for specquery.

This module wires together the top-level Typer application and registers the
built-in sub-commands (``generate``, ``inspect``). Global flags controlling
output (``--json``, ``--plain``, ``--no-color``, ``--quiet``, ``--verbose``)
are handled by :func:`main_callback` before any sub-command runs.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app,
mapping :class:`~specquery.exceptions.SpecQueryError` to its exit code.
"""

from __future__ import annotations

import signal
import sys
from typing import Any

import typer

from specquery import __version__
from specquery.commands.generate import generate_command
from specquery.commands.inspect import inspect_app
from specquery.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED


app = typer.Typer(
    name="specquery",
    help="Generate TanStack Query hooks from OpenAPI 3.0/3.1 specs.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("generate")(generate_command)
app.add_typer(inspect_app, name="inspect", help="Inspect operations and preview requests.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"specquery {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
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
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~specquery.output.OutputManager` from
    CLI flags.
    """
    from specquery.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(
        OutputManager(
            format=fmt,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
        )
    )


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``specquery`` console script.

    Unhandled :class:`~specquery.exceptions.SpecQueryError` instances
    cause a clean exit with the error's ``exit_code``. Any other exception
    is reported as an unexpected error with a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        from specquery.exceptions import SpecQueryError
        from specquery.output import error

        if isinstance(exc, SpecQueryError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            error(f"Unexpected error: {exc}")
            error("Re-run with --verbose and report the output if the problem persists.")
            sys.exit(EXIT_GENERIC_FAILURE)
