"""Terminal output for the slicer CLI.

The sliced document is the only thing written to stdout, so the command can
be piped straight into ``jq`` or another tool. Status lines, warnings about
dropped references, errors and debug traces all go to stderr.

Colour follows `clig.dev <https://clig.dev/>`_: it is turned off by
``--no-color``, by a ``NO_COLOR`` environment variable of any value, or by
``TERM=dumb``. When colour is off, diagnostics are printed as plain text with
a ``Warning:`` / ``Error:`` / ``[debug]`` prefix.

:class:`OutputManager` holds the per-run preferences. The CLI installs one
with :func:`set_output`; the module-level helpers (:func:`warning`,
:func:`error`, ...) forward to it.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax

from openapi_slicer.models import DocumentFormat
from openapi_slicer.parser.writer import render


class OutputFormat(str, Enum):
    """How the sliced document is rendered on stdout.

    ``AUTO`` becomes ``RICH`` (syntax-highlighted JSON) on an interactive,
    colour-capable terminal and ``JSON`` everywhere else.
    """

    AUTO = "auto"
    JSON = "json"
    YAML = "yaml"
    RICH = "rich"


# (label, rich style, hidden by --quiet, shown only with --verbose)
_LEVELS: dict[str, tuple[str, str, bool, bool]] = {
    "success": ("", "green", True, False),
    "warning": ("Warning:", "yellow", False, False),
    "error": ("Error:", "bold red", False, False),
    "debug": ("[debug]", "dim", False, True),
}


class OutputManager:
    """Per-run output preferences and the consoles bound to them.

    Args:
        format: Stdout format for the sliced document.
        no_color: Force plain, uncoloured diagnostics.
        quiet: Hide success lines. Warnings and errors still show.
        verbose: Show debug lines.
        indent: JSON indentation used when printing the document.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
        indent: int = 2,
    ) -> None:
        self._plain = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._indent = indent

        if format is OutputFormat.AUTO:
            interactive = _is_tty() and not self._plain
            format = OutputFormat.RICH if interactive else OutputFormat.JSON
        self._format = format

        self._data_console = Console(
            file=sys.stdout,
            no_color=self._plain,
            force_terminal=format is OutputFormat.RICH,
            soft_wrap=True,
        )
        self._diag_console = Console(
            file=sys.stderr, no_color=self._plain, stderr=True, soft_wrap=True
        )

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    @property
    def stderr_console(self) -> Console:
        """Console bound to stderr; log handlers write through it."""
        return self._diag_console

    # -- stdout ------------------------------------------------------------

    def format_document(self, data: dict[str, Any]) -> None:
        """Write *data* to stdout in the resolved format."""
        if self._format is OutputFormat.YAML:
            self.print_data(render(data, DocumentFormat.YAML))
        elif self._format is OutputFormat.JSON:
            self.print_data(render(data, DocumentFormat.JSON, indent=self._indent))
        else:
            text = render(data, DocumentFormat.JSON, indent=self._indent or 2)
            self._data_console.print(
                Syntax(text, "json", theme="monokai", word_wrap=True)
            )

    def print_data(self, text: str) -> None:
        """Write *text* to stdout unchanged, newline-terminated."""
        if not text.endswith("\n"):
            text += "\n"
        sys.stdout.write(text)
        sys.stdout.flush()

    # -- stderr ------------------------------------------------------------

    def _emit(self, level: str, message: str) -> None:
        label, style, quiet_hides, verbose_only = _LEVELS[level]
        if (quiet_hides and self._quiet) or (verbose_only and not self._verbose):
            return
        if self._plain:
            line = f"{label} {message}" if label else message
            print(line, file=sys.stderr, flush=True)
            return
        body = escape(message)
        if level == "debug":
            self._diag_console.print(f"[{style}]\\{label} {body}[/{style}]")
        elif label:
            self._diag_console.print(f"[{style}]{label}[/{style}] {body}")
        else:
            self._diag_console.print(f"[{style}]{body}[/{style}]")

    def success(self, message: str) -> None:
        """Confirmation line, e.g. ``File created: out.yaml``."""
        self._emit("success", message)

    def warning(self, message: str) -> None:
        self._emit("warning", message)

    def error(self, message: str) -> None:
        self._emit("error", message)

    def debug(self, message: str) -> None:
        self._emit("debug", message)


def _is_tty() -> bool:
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set (to anything) or ``TERM`` is ``dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# -- process-wide instance -------------------------------------------------

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, creating a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Drop the installed manager so the next call builds a fresh one."""
    global _output
    _output = None


def format_document(data: dict[str, Any]) -> None:
    get_output().format_document(data)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
