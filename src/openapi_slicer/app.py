"""Typer application and CLI entry point for openapi-slicer.

The CLI is a single command::

    openapi-slicer --input FILE --regex REGEX [--output FILE]

Without ``--output`` the sliced document is written to stdout; with it the
document is exported to the given file (format chosen by extension) and a
confirmation line is printed.

The core never formats errors for humans. This module maps each failure
class to a message on stderr and an exit code from
:mod:`openapi_slicer.exit_codes`. The :func:`main` function is the
console-script entry point declared in ``pyproject.toml``.
"""

from __future__ import annotations

import json
import logging
import re
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional, cast

import typer
import yaml
from rich.logging import RichHandler

from openapi_slicer import __version__
from openapi_slicer.config import get_data_dir, resolve_config
from openapi_slicer.exceptions import InvalidUsageError, SlicerError
from openapi_slicer.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_IO_ERROR,
    EXIT_SPEC_PARSE_ERROR,
)
from openapi_slicer.output import (
    OutputFormat,
    OutputManager,
    debug,
    error,
    format_document,
    set_output,
    success,
    warning,
)
from openapi_slicer.slicer.pipeline import OpenapiSlicer
from openapi_slicer.slicer.selector import compile_pattern

app = typer.Typer(
    name="openapi-slicer",
    help="Extract a self-contained subset of an OpenAPI document by path regex.",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

_LOGGER_NAME = "openapi_slicer"


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"openapi-slicer {__version__}")
        raise typer.Exit()


def _configure_logging(output: OutputManager) -> None:
    """Route library debug logging to stderr when ``--verbose`` is set."""
    logger = logging.getLogger(_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    if not output.is_verbose:
        logger.setLevel(logging.NOTSET)
        return
    handler = RichHandler(
        console=output.stderr_console, show_time=False, show_path=False
    )
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


def _fail(message: str, code: int) -> typer.Exit:
    """Print each line of *message* as an error and return the Exit to raise."""
    for line in message.splitlines():
        error(line)
    return typer.Exit(code=code)


def _required_options(
    input_file: Optional[str], regex: Optional[str]
) -> tuple[str, str]:
    """Return ``(input_file, regex)`` once both were given on the command line.

    An empty regex is a valid pattern (it matches every path); only an
    option that was not passed at all counts as missing.

    Raises:
        InvalidUsageError: Listing one ``Missing option`` line per absent flag.
    """
    missing = [
        flag
        for flag, value in (("--input", input_file), ("--regex", regex))
        if value is None
    ]
    if missing:
        raise InvalidUsageError(
            "\n".join(f"Missing option: {flag}" for flag in missing)
        )
    return cast(str, input_file), cast(str, regex)


def _compile_regex(regex: str) -> re.Pattern[str]:
    try:
        return compile_pattern(regex)
    except re.error as exc:
        raise InvalidUsageError(f"Invalid regex {regex!r}: {exc}") from exc


@app.command()
def slice_command(
    input_file: Optional[str] = typer.Option(
        None,
        "--input",
        "-i",
        help="Input OpenAPI file path (.json, .yml, .yaml) or URL.",
    ),
    regex: Optional[str] = typer.Option(
        None, "--regex", "-r", help="Regex pattern for filtering paths."
    ),
    output_file: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output file path; prints to stdout if omitted."
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", help="Stdout format: auto, json or yaml."
    ),
    indent: Optional[int] = typer.Option(
        None, "--indent", help="JSON indentation width (0 for compact)."
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Fail on references to missing components."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Slice an OpenAPI document down to the paths matching a regex.

    Keeps the matching path items plus every component they transitively
    reference and the tags their operations use.

    Example::

        openapi-slicer -i openapi.yaml -r '^/pets' -o pets.yaml
    """
    output = OutputManager(no_color=no_color, quiet=quiet, verbose=verbose)
    set_output(output)

    try:
        source, regex_text = _required_options(input_file, regex)
        config = resolve_config(
            cli_strict=True if strict else None,
            cli_indent=indent,
            cli_format=output_format,
        )
    except SlicerError as exc:
        raise _fail(str(exc), exc.exit_code) from None

    output = OutputManager(
        format=OutputFormat(config.output_format),
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
        indent=config.indent,
    )
    set_output(output)
    _configure_logging(output)

    result: Optional[dict[str, Any]] = None
    try:
        pattern = _compile_regex(regex_text)
        slicer = OpenapiSlicer(source, strict=config.strict, indent=config.indent)
        debug(f"Loaded {source}")
        if output_file:
            slicer.export(pattern, output_file)
        else:
            result = slicer.filter(pattern)
    except SlicerError as exc:
        raise _fail(str(exc), exc.exit_code) from None
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise _fail(f"Failed to parse {source}: {exc}", EXIT_SPEC_PARSE_ERROR) from None
    except OSError as exc:
        raise _fail(str(exc), EXIT_IO_ERROR) from None

    deps = slicer.last_dependencies
    if deps is not None:
        for name in deps.dangling:
            warning(f"Dropped reference to missing component '{name}'")
        debug(f"Kept {len(deps.components) - len(deps.dangling)} component(s)")

    if output_file:
        success(f"File created: {output_file}")
    elif result is not None:
        format_document(result)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``openapi-slicer`` console script.

    Expected failures are reported by the command itself. Anything else
    produces a crash log and a generic failure exit.

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
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
