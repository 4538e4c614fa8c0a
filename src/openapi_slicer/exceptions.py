"""Exception hierarchy for openapi-slicer.

All exceptions inherit from :class:`SlicerError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`openapi_slicer.exit_codes`. The CLI catches ``SlicerError`` and exits
with the appropriate code.

Parser errors raised by :mod:`json` and :mod:`yaml` are deliberately *not*
part of this hierarchy: they propagate unchanged from the loader.

Subclass hierarchy::

    SlicerError (exit 1)
    +-- InvalidUsageError       (exit 2)
    +-- InvalidFileTypeError    (exit 2)
    +-- SpecParseError          (exit 7)
    +-- DanglingReferenceError  (exit 8)
    +-- ConfigError             (exit 1)
"""

from __future__ import annotations

from openapi_slicer.exit_codes import (
    EXIT_DANGLING_REFERENCE,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SPEC_PARSE_ERROR,
)


class SlicerError(Exception):
    """Base exception for all openapi-slicer errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SlicerError):
    """Raised for invalid CLI arguments or missing required options."""

    exit_code = EXIT_INVALID_USAGE


class InvalidFileTypeError(SlicerError, ValueError):
    """Raised when a source or target path is not ``.json``, ``.yml`` or ``.yaml``."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(SlicerError):
    """Raised when a loaded document does not have the shape of an OpenAPI document."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class DanglingReferenceError(SlicerError):
    """Raised in strict mode when selected operations reference missing components.

    Args:
        names: Component names that could not be found, in discovery order.
    """

    exit_code = EXIT_DANGLING_REFERENCE

    def __init__(self, names: list[str]):
        self.names = list(names)
        super().__init__(
            "Unresolved component reference(s): " + ", ".join(self.names)
        )


class ConfigError(SlicerError):
    """Raised for configuration problems (invalid JSON, bad values)."""
