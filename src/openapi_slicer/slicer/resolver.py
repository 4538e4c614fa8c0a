"""Compute the dependency closure of a set of selected path items.

Starting from the operations of the selected path items, every ``$ref``
found in parameters, request bodies, and responses is followed into the
document's ``components`` section. Each resolved component is then searched
for further references under ``properties`` and ``allOf`` until no new
names are discovered.

Components are tracked by name only. A name is marked as visited the moment
it is discovered, before its definition is looked up, so cyclic ``allOf`` or
self-referential schemas terminate and every name is processed once. Names
whose definition cannot be found in any category (dangling references) are
still marked as visited, and are additionally recorded in
:attr:`Dependencies.dangling`.

Other composition keywords (``oneOf``, ``anyOf``, ``items``,
``additionalProperties``) are not followed.

The traversal uses an explicit stack instead of recursion, so deep
reference chains cannot exhaust the interpreter's recursion limit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from openapi_slicer.document import OpenAPIDocument, mapping_at, sequence_at
from openapi_slicer.parser.refs import component_name, ref_of

logger = logging.getLogger(__name__)


@dataclass
class Dependencies:
    """Traversal context accumulated while resolving one selection.

    Attributes:
        components: Names of every component reached, including dangling
            names.
        tags: Tag names referenced by any visited operation.
        dangling: Names that matched no component, in discovery order.
    """

    components: set[str] = field(default_factory=set)
    tags: set[str] = field(default_factory=set)
    dangling: list[str] = field(default_factory=list)


class DependencyResolver:
    """Walk selected operations and collect the components and tags they need.

    The resolver holds no state between calls; each :meth:`resolve` call
    starts from a fresh :class:`Dependencies` unless one is supplied.

    Args:
        document: The source document. It is only read.

    Example::

        resolver = DependencyResolver(OpenAPIDocument(raw))
        deps = resolver.resolve(select_paths(raw["paths"], r"^/pets"))
        sorted(deps.components)   # ['Pet', 'PetId']
    """

    def __init__(self, document: OpenAPIDocument) -> None:
        self._document = document

    def resolve(
        self, paths: dict[str, Any], deps: Optional[Dependencies] = None
    ) -> Dependencies:
        """Resolve every operation of every path item in *paths*.

        Args:
            paths: Selected path items, keyed by path string.
            deps: Context to accumulate into; a new one is created when
                omitted.

        Returns:
            The populated :class:`Dependencies`.
        """
        if deps is None:
            deps = Dependencies()

        for path_item in paths.values():
            if not isinstance(path_item, dict):
                continue
            # Path-level parameters apply to every operation of the item.
            self._resolve_parameters(sequence_at(path_item, "parameters"), deps)
            for key, operation in path_item.items():
                if key == "parameters" or not isinstance(operation, dict):
                    continue
                self.resolve_operation(operation, deps)

        logger.debug(
            "Resolved %d component(s), %d tag(s), %d dangling",
            len(deps.components),
            len(deps.tags),
            len(deps.dangling),
        )
        return deps

    def resolve_operation(self, operation: dict[str, Any], deps: Dependencies) -> None:
        """Collect the references and tags of a single operation."""
        self._resolve_parameters(sequence_at(operation, "parameters"), deps)

        request_body = operation.get("requestBody")
        if isinstance(request_body, dict):
            self.resolve_response_refs(request_body, deps)

        responses = mapping_at(operation, "responses")
        if responses is not None:
            for response in responses.values():
                self.resolve_response_refs(response, deps)

        tags = sequence_at(operation, "tags")
        if tags is not None:
            deps.tags.update(tag for tag in tags if isinstance(tag, str))

    def resolve_response_refs(self, response: Any, deps: Dependencies) -> None:
        """Resolve a response (or request body) and its media-type schemas.

        The object's own ``$ref`` and each ``content[<media type>].schema``
        ``$ref`` are resolved independently.
        """
        ref = ref_of(response)
        if ref is not None:
            self.resolve_ref(ref, deps)

        content = mapping_at(response, "content")
        if content is None:
            return
        for media_type in content.values():
            schema_ref = ref_of(mapping_at(media_type, "schema"))
            if schema_ref is not None:
                self.resolve_ref(schema_ref, deps)

    def resolve_ref(self, ref: str, deps: Dependencies) -> None:
        """Add the component *ref* points to, and everything it needs, to *deps*."""
        pending = [ref]
        while pending:
            name = component_name(pending.pop())
            if name in deps.components:
                continue
            deps.components.add(name)

            data = self._document.find_component(name)
            if data is None:
                logger.debug("Dangling reference to component %r", name)
                deps.dangling.append(name)
                continue

            nested = list(_nested_refs(data))
            pending.extend(reversed(nested))

    def _resolve_parameters(
        self, parameters: Optional[list[Any]], deps: Dependencies
    ) -> None:
        if parameters is None:
            return
        for parameter in parameters:
            ref = ref_of(parameter)
            if ref is not None:
                self.resolve_ref(ref, deps)


def _nested_refs(component: Any) -> Iterator[str]:
    """Yield references under a component's ``properties`` and ``allOf``."""
    properties = mapping_at(component, "properties")
    if properties is not None:
        for prop in properties.values():
            ref = ref_of(prop)
            if ref is not None:
                yield ref

    all_of = sequence_at(component, "allOf")
    if all_of is not None:
        for sub in all_of:
            ref = ref_of(sub)
            if ref is not None:
                yield ref
