"""Assemble the sliced document from a selection and its dependencies.

The output is built from scratch and deep-copied, so callers may modify it
freely without affecting the source document. Key order of paths,
components, and tags follows the source.
"""

from __future__ import annotations

import copy
from typing import Any, Optional

from openapi_slicer.document import COMPONENT_CATEGORIES, OpenAPIDocument
from openapi_slicer.slicer.resolver import Dependencies


def slice_components(
    document: OpenAPIDocument, names: set[str]
) -> dict[str, dict[str, Any]]:
    """Keep only the components whose name is in *names*.

    A category appears in the result exactly when the source declares it,
    so a category present upstream may come back as an empty mapping while
    an absent one stays absent. Dangling names match nothing and are
    dropped here.
    """
    sliced: dict[str, dict[str, Any]] = {}
    for category in COMPONENT_CATEGORIES:
        entries = document.category(category)
        if entries is None:
            continue
        sliced[category] = {
            name: data for name, data in entries.items() if name in names
        }
    return sliced


def slice_tags(document: OpenAPIDocument, tag_names: set[str]) -> Optional[list[Any]]:
    """Keep only the tag objects whose ``name`` is in *tag_names*.

    Returns ``None`` when the source has no ``tags`` list; tags referenced
    by operations but never declared are not synthesised.
    """
    tags = document.tags
    if tags is None:
        return None
    return [
        tag for tag in tags if isinstance(tag, dict) and tag.get("name") in tag_names
    ]


def slice_document(
    document: OpenAPIDocument, paths: dict[str, Any], deps: Dependencies
) -> dict[str, Any]:
    """Build the sliced document.

    ``openapi``, ``info`` and ``servers`` are copied verbatim when present
    in the source; nothing is emitted for an absent key.

    Args:
        document: The source document.
        paths: The selected path items.
        deps: The resolved dependency closure of *paths*.

    Returns:
        A new document containing *paths*, the required components, and
        the referenced tags.
    """
    result: dict[str, Any] = {}
    for key in ("openapi", "info", "servers"):
        if key in document and document.get(key) is not None:
            result[key] = document.get(key)

    result["paths"] = paths
    result["components"] = slice_components(document, deps.components)

    tags = slice_tags(document, deps.tags)
    if tags is not None:
        result["tags"] = tags

    return copy.deepcopy(result)
