"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~openapi_slicer.exceptions.SlicerError` subclass.
Shell wrappers can inspect the exit code to tell a bad invocation apart
from an unreadable document without parsing stderr.

Example::

    $ openapi-slicer -i api.txt -r '^/pets'
    $ echo $?
    2   # EXIT_INVALID_USAGE -- unsupported file extension
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""Invalid arguments: missing flags, bad regex, or unsupported file type."""

EXIT_SPEC_PARSE_ERROR = 7
"""The OpenAPI document could not be loaded or parsed."""

EXIT_DANGLING_REFERENCE = 8
"""Strict mode found ``$ref`` pointers to components that do not exist."""

EXIT_IO_ERROR = 9
"""Reading the input or writing the output file failed."""
