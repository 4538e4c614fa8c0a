"""Read-only view over a parsed OpenAPI document.

The document is kept as the untyped ``dict``/``list`` tree produced by the
loader. :class:`OpenAPIDocument` adds shape-checked accessors for the parts
the slicer needs, so traversal code can ask "is this key present and is it a
mapping" without ``isinstance`` checks scattered across the pipeline.

Components are looked up by *name only*, probing the categories in
:data:`COMPONENT_CATEGORIES` order. When two categories contain the same
name, the first category in that order wins.
"""

from __future__ import annotations

from typing import Any, Optional

from openapi_slicer.exceptions import SpecParseError

COMPONENT_CATEGORIES: tuple[str, ...] = (
    "schemas",
    "responses",
    "parameters",
    "requestBodies",
)
"""Component categories understood by the slicer, in lookup priority order."""


def mapping_at(node: Any, key: str) -> Optional[dict[str, Any]]:
    """Return ``node[key]`` if *node* is a mapping and the value is a mapping."""
    if isinstance(node, dict):
        value = node.get(key)
        if isinstance(value, dict):
            return value
    return None


def sequence_at(node: Any, key: str) -> Optional[list[Any]]:
    """Return ``node[key]`` if *node* is a mapping and the value is a list."""
    if isinstance(node, dict):
        value = node.get(key)
        if isinstance(value, list):
            return value
    return None


class OpenAPIDocument:
    """Shape-checked accessors over a raw OpenAPI document.

    The wrapped dictionary is never modified.

    Args:
        data: The parsed document root.
    """

    def __init__(self, data: dict[str, Any]) -> None:
        self._data = data

    def get(self, key: str, default: Any = None) -> Any:
        """Return a top-level value, or *default* when absent."""
        return self._data.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    @property
    def paths(self) -> dict[str, Any]:
        """The ``paths`` mapping; an absent section is treated as empty.

        Raises:
            SpecParseError: If ``paths`` is present but not a mapping.
        """
        paths = self._data.get("paths")
        if paths is None:
            return {}
        if not isinstance(paths, dict):
            raise SpecParseError(
                f"'paths' must be a mapping (got {type(paths).__name__})"
            )
        return paths

    @property
    def components(self) -> dict[str, Any]:
        """The ``components`` mapping, or an empty mapping when absent."""
        return mapping_at(self._data, "components") or {}

    def category(self, name: str) -> Optional[dict[str, Any]]:
        """Return the ``components.<name>`` mapping, or ``None`` if absent upstream."""
        return mapping_at(self.components, name)

    def find_component(self, name: str) -> Optional[Any]:
        """Return the definition of component *name*, or ``None`` if dangling.

        Categories are probed in :data:`COMPONENT_CATEGORIES` order and the
        first category containing a non-null entry for *name* wins.
        """
        for category in COMPONENT_CATEGORIES:
            entries = self.category(category)
            if entries is None:
                continue
            data = entries.get(name)
            if data is not None:
                return data
        return None

    @property
    def tags(self) -> Optional[list[Any]]:
        """The top-level ``tags`` list, or ``None`` when absent."""
        return sequence_at(self._data, "tags")
