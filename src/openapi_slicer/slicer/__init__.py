"""Slice an OpenAPI document down to the paths matching a regular expression.

This sub-package holds the core pipeline::

    select_paths  ->  DependencyResolver.resolve  ->  slice_document

Typical usage::

    from openapi_slicer.slicer import OpenapiSlicer

    subset = OpenapiSlicer("petstore.yaml").filter(r"^/pets")

Sub-modules:

* :mod:`~openapi_slicer.slicer.selector` -- Regex selection over path keys.
* :mod:`~openapi_slicer.slicer.resolver` -- Transitive ``$ref`` closure and
  tag collection.
* :mod:`~openapi_slicer.slicer.assembler` -- Builds the minimal output
  document.
* :mod:`~openapi_slicer.slicer.pipeline` -- The :class:`OpenapiSlicer`
  facade tying the steps to file I/O.
"""

from openapi_slicer.slicer.assembler import slice_document
from openapi_slicer.slicer.pipeline import OpenapiSlicer
from openapi_slicer.slicer.resolver import Dependencies, DependencyResolver
from openapi_slicer.slicer.selector import select_paths

__all__ = [
    "OpenapiSlicer",
    "Dependencies",
    "DependencyResolver",
    "select_paths",
    "slice_document",
]
