"""Parse ``$ref`` pointers that target the ``components`` section.

Only internal references of the form ``#/components/<category>/<name>`` carry
meaning for slicing. Components are tracked by their trailing *name* alone,
so a pointer that does not follow that shape still yields a usable name: the
trailing ``/``-delimited segment, or the whole string when there is none.
Such names simply fail the component lookup later and are treated as
dangling.
"""

from __future__ import annotations

from typing import Any, Optional

from openapi_slicer.models import ComponentRef

_COMPONENTS_PREFIX = "#/components/"


def component_name(ref: str) -> str:
    """Return the component name a ``$ref`` string points to.

    Args:
        ref: The ``$ref`` string (e.g., ``"#/components/schemas/Pet"``).

    Returns:
        The trailing path segment (``"Pet"``). Strings without a non-empty
        trailing segment (``"Pet"``, ``"#/components/schemas/"``) are
        returned unchanged.
    """
    name = ref.rsplit("/", 1)[-1]
    return name or ref


def parse_ref(ref: str) -> ComponentRef:
    """Parse *ref* into a :class:`~openapi_slicer.models.ComponentRef`.

    Example::

        >>> parse_ref("#/components/parameters/PetId").category
        'parameters'
        >>> parse_ref("Pet").category is None
        True
    """
    category: Optional[str] = None
    if ref.startswith(_COMPONENTS_PREFIX):
        segments = ref[len(_COMPONENTS_PREFIX):].split("/")
        if len(segments) == 2 and all(segments):
            category = segments[0]
    return ComponentRef(ref=ref, category=category, name=component_name(ref))


def ref_of(node: Any) -> Optional[str]:
    """Return the ``$ref`` string carried by *node*, if any.

    Non-mapping nodes, mappings without ``$ref``, and non-string ``$ref``
    values all yield ``None``.
    """
    if not isinstance(node, dict):
        return None
    ref = node.get("$ref")
    if isinstance(ref, str) and ref:
        return ref
    return None
