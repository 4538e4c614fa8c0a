"""openapi-slicer -- Extract self-contained subsets of OpenAPI documents.

Given a regular expression over path strings, the slicer keeps only the
matching path items plus every schema, parameter, response, and request
body definition they transitively reference, and the tags their operations
use. The result is a smaller, still-valid OpenAPI document suitable for
partial documentation, mocking, or client generation.

Typical workflow::

    openapi-slicer --input openapi.yaml --regex '^/pets' --output pets.yaml

Modules:
    app: Typer application and CLI entry point.
    slicer: Path selection, dependency resolution, and document assembly.
    parser: JSON/YAML loading, export, and ``$ref`` parsing.
    document: Read-only accessors over the raw document tree.
    models: Pydantic models shared across the package.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.1"

from openapi_slicer.slicer.pipeline import OpenapiSlicer  # noqa: E402

__all__ = ["OpenapiSlicer", "__version__"]
