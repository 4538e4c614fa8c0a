"""OpenAPI document I/O -- load, write, and parse ``$ref`` pointers.

This sub-package is the I/O half of the openapi-slicer pipeline: it turns a
JSON or YAML file (or URL) into the plain ``dict`` tree consumed by
:mod:`openapi_slicer.slicer`, and serialises sliced documents back out.

Typical usage::

    from openapi_slicer.parser import load_document, write_document

    raw = load_document("petstore.yaml")
    write_document(raw, "copy.json")

Sub-modules:

* :mod:`~openapi_slicer.parser.loader` -- File/URL loading and format
  detection by extension.
* :mod:`~openapi_slicer.parser.writer` -- JSON/YAML rendering and export.
* :mod:`~openapi_slicer.parser.refs` -- ``$ref`` string parsing.
"""

from openapi_slicer.parser.loader import detect_format, load_document
from openapi_slicer.parser.refs import component_name, parse_ref, ref_of
from openapi_slicer.parser.writer import render, write_document

__all__ = [
    "detect_format",
    "load_document",
    "component_name",
    "parse_ref",
    "ref_of",
    "render",
    "write_document",
]
