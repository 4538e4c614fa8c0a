"""The :class:`OpenapiSlicer` facade: load once, slice many times."""

from __future__ import annotations

import logging
from typing import Any

from openapi_slicer.document import OpenAPIDocument
from openapi_slicer.exceptions import DanglingReferenceError
from openapi_slicer.parser.loader import detect_format, load_document
from openapi_slicer.parser.writer import write_document
from openapi_slicer.slicer.assembler import slice_document
from openapi_slicer.slicer.resolver import Dependencies, DependencyResolver
from openapi_slicer.slicer.selector import Pattern, select_paths

logger = logging.getLogger(__name__)


class OpenapiSlicer:
    """Extract a self-contained subset of an OpenAPI document.

    The document is read and parsed once, at construction. Every call to
    :meth:`filter` or :meth:`export` works on that in-memory copy and
    starts from a fresh dependency and tag set, so results never leak
    between calls.

    Args:
        file_path: Path (or http(s) URL) of a ``.json``, ``.yml`` or
            ``.yaml`` document.
        strict: Raise :class:`~openapi_slicer.exceptions.DanglingReferenceError`
            instead of silently dropping references to missing components.
        indent: JSON indentation used by :meth:`export`.

    Raises:
        InvalidFileTypeError: If *file_path* has an unsupported extension.
            Nothing is read in that case.

    Example::

        slicer = OpenapiSlicer("petstore.yaml")
        subset = slicer.filter(r"^/pets")
        slicer.export(r"^/pets", "pets.json")
    """

    def __init__(self, file_path: str, strict: bool = False, indent: int = 2) -> None:
        detect_format(file_path)
        self.file_path = file_path
        self.strict = strict
        self.indent = indent
        self.spec: dict[str, Any] = load_document(file_path)
        self._document = OpenAPIDocument(self.spec)
        self.last_dependencies: Dependencies | None = None

    def filter(self, regex: Pattern) -> dict[str, Any]:
        """Return the slice of the document whose paths match *regex*.

        Args:
            regex: Regular expression searched for anywhere in each path
                string, as a string or compiled pattern.

        Returns:
            A new document with the matching paths, their transitive
            component dependencies, and their referenced tags.

        Raises:
            re.error: If *regex* is not a valid pattern.
            DanglingReferenceError: In strict mode, when a reference points
                to a component that does not exist.
        """
        paths = select_paths(self._document.paths, regex)
        deps = DependencyResolver(self._document).resolve(paths)
        self.last_dependencies = deps

        if deps.dangling:
            if self.strict:
                raise DanglingReferenceError(deps.dangling)
            logger.debug("Dropping dangling reference(s): %s", ", ".join(deps.dangling))

        return slice_document(self._document, paths, deps)

    def export(self, regex: Pattern, target_file: str) -> None:
        """Slice the document and write it to *target_file*.

        The output format follows *target_file*'s extension; an existing
        file is overwritten.

        Raises:
            InvalidFileTypeError: If *target_file* has an unsupported
                extension. Nothing is written in that case.
            OSError: If the file cannot be written.
        """
        detect_format(target_file)
        result = self.filter(regex)
        write_document(result, target_file, indent=self.indent)
