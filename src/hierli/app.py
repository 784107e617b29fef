"""Typer application and CLI entry point for hierli.

This module wires together the top-level Typer application and registers the
built-in sub-commands (``hierarchy``, ``verbs``, ``tree``, ``run`` and
``config``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
:class:`~hierli.exceptions.HierliError` exits with the error's code;
any other unhandled exception is written to a crash log under the data
directory.

See Also:
    :mod:`hierli.config`: Configuration resolution.
    :mod:`hierli.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from hierli import __version__
from hierli.commands.config import config_app
from hierli.commands.inspect import (
    hierarchy_command,
    run_command,
    tree_command,
    verbs_command,
)
from hierli.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="hierli",
    help="Infer a command hierarchy from OpenAPI 3.0/3.1 specs.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("hierarchy")(hierarchy_command)
app.command("verbs")(verbs_command)
app.command("tree")(tree_command)
app.command(
    "run",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)(run_command)
app.add_typer(config_app, name="config", help="Configuration management.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"hierli {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Send ``hierli.*`` log records to stderr through Rich; DEBUG with ``--verbose``."""
    logger = logging.getLogger("hierli")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(
            RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
        )


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
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Output file path."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~hierli.output.OutputManager` from CLI
    flags and configures :mod:`logging`. When neither ``--json`` nor
    ``--plain`` is given, ``output.format`` from the resolved config is used.
    """
    from hierli.config import resolve_config
    from hierli.exceptions import ConfigError
    from hierli.output import OutputFormat, OutputManager, set_output

    _configure_logging(verbose)

    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    else:
        try:
            fmt = OutputFormat(resolve_config().output.format)
        except (ConfigError, ValueError):
            fmt = OutputFormat.AUTO

    set_output(
        OutputManager(
            format=fmt,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
            output_file=output_file,
        )
    )


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from hierli.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``hierli`` console script.

    Unhandled :class:`~hierli.exceptions.HierliError` instances cause a clean
    exit with the error's ``exit_code``. All other exceptions produce a crash
    log and a generic failure exit.

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
        sys.exit(130)
    except Exception as exc:
        from hierli.exceptions import HierliError
        from hierli.output import error

        if isinstance(exc, HierliError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
