"""Tests for openapi_slicer.slicer.resolver."""

from __future__ import annotations

from typing import Any

from openapi_slicer.document import OpenAPIDocument
from openapi_slicer.slicer.resolver import (
    Dependencies,
    DependencyResolver,
)
from openapi_slicer.slicer.selector import select_paths


def _ref(category: str, name: str) -> dict[str, str]:
    return {"$ref": f"#/components/{category}/{name}"}


def _json_response(schema: dict[str, Any]) -> dict[str, Any]:
    return {"description": "OK", "content": {"application/json": {"schema": schema}}}


def _resolve(raw: dict[str, Any], pattern: str = "") -> Dependencies:
    document = OpenAPIDocument(raw)
    return DependencyResolver(document).resolve(select_paths(document.paths, pattern))


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


class TestOperationWalk:
    """References reachable from operations."""

    def test_petstore_closure(self, petstore_raw: dict[str, Any]) -> None:
        deps = _resolve(petstore_raw, r"^/pets")
        assert deps.components == {"Pet", "PetId"}
        assert deps.tags == {"Pets"}
        assert deps.dangling == []

    def test_inline_schema_contributes_nothing(self, petstore_raw: dict[str, Any]) -> None:
        deps = _resolve(petstore_raw, r"/health$")
        assert deps.components == {"PetId"}

    def test_tags_collected_without_references(self) -> None:
        raw = {
            "paths": {
                "/ping": {"get": {"tags": ["Health", "Ops"], "responses": {"200": {}}}}
            }
        }
        deps = _resolve(raw)
        assert deps.tags == {"Health", "Ops"}
        assert deps.components == set()

    def test_inline_parameters_ignored(self) -> None:
        raw = {
            "paths": {
                "/a": {
                    "get": {
                        "parameters": [
                            {"name": "q", "in": "query", "schema": _ref("schemas", "Q")},
                            _ref("parameters", "Limit"),
                        ]
                    }
                }
            },
            "components": {"parameters": {"Limit": {"name": "limit", "in": "query"}}},
        }
        # Only parameter-level $refs are followed, not schemas nested in
        # inline parameters.
        assert _resolve(raw).components == {"Limit"}

    def test_response_ref_and_content_schema_both_resolved(self) -> None:
        raw = {
            "paths": {
                "/a": {
                    "get": {
                        "responses": {
                            "200": {
                                "$ref": "#/components/responses/Ok",
                                "content": {
                                    "application/json": {"schema": _ref("schemas", "A")},
                                    "application/xml": {"schema": _ref("schemas", "B")},
                                },
                            }
                        }
                    }
                }
            },
            "components": {
                "schemas": {"A": {}, "B": {}},
                "responses": {"Ok": {"description": "OK"}},
            },
        }
        assert _resolve(raw).components == {"Ok", "A", "B"}

    def test_request_body_ref_and_schema(self, bookstore_raw: dict[str, Any]) -> None:
        deps = _resolve(bookstore_raw, r"^/books$")
        assert "NewBook" in deps.components

        deps = _resolve(bookstore_raw, r"^/orders")
        assert {"OrderRequest", "Receipt"} <= deps.components

    def test_path_level_parameters(self, bookstore_raw: dict[str, Any]) -> None:
        deps = _resolve(bookstore_raw, r"\{bookId\}")
        assert "BookId" in deps.components
        assert "NotFound" in deps.components

    def test_non_operation_members_skipped(self) -> None:
        raw = {
            "paths": {
                "/a": {
                    "summary": "text",
                    "servers": [{"url": "https://x"}],
                    "$ref": "#/components/pathItems/A",
                    "get": {"tags": ["A"]},
                }
            }
        }
        deps = _resolve(raw)
        assert deps.tags == {"A"}
        assert deps.components == set()

    def test_malformed_operation_shapes_tolerated(self) -> None:
        raw = {
            "paths": {
                "/a": {
                    "get": {
                        "tags": "not-a-list",
                        "parameters": {"not": "a list"},
                        "responses": ["not", "a", "mapping"],
                    }
                },
                "/b": None,
            }
        }
        deps = _resolve(raw)
        assert deps.components == set()
        assert deps.tags == set()


# ---------------------------------------------------------------------------
# Closure over components
# ---------------------------------------------------------------------------


class TestComponentClosure:
    """Transitive walk through properties and allOf."""

    def test_properties_and_all_of_followed(self, bookstore_raw: dict[str, Any]) -> None:
        deps = _resolve(bookstore_raw, r"^/books$")
        assert deps.components == {
            "PageSize",
            "BookList",
            "Cursor",
            "Error",
            "NewBook",
            "Book",
            "BaseEntity",
            "Author",
        }
        assert deps.tags == {"Books"}

    def test_items_not_followed(self, bookstore_raw: dict[str, Any]) -> None:
        deps = _resolve(bookstore_raw, r"^/books$")
        assert "Publisher" not in deps.components

    def test_response_component_content_not_followed(self) -> None:
        raw = {
            "paths": {"/a": {"get": {"responses": {"200": _ref("responses", "Ok")}}}},
            "components": {
                "responses": {"Ok": _json_response(_ref("schemas", "Payload"))},
                "schemas": {"Payload": {"type": "object"}},
            },
        }
        assert _resolve(raw).components == {"Ok"}

    def test_all_of_cycle_terminates(self, bookstore_raw: dict[str, Any]) -> None:
        deps = _resolve(bookstore_raw, r"^/trees")
        assert deps.components == {"TreeA", "TreeB"}
        assert deps.tags == {"Trees"}

    def test_self_reference_terminates(self) -> None:
        raw = {
            "paths": {"/n": {"get": {"responses": {"200": _json_response(_ref("schemas", "Node"))}}}},
            "components": {
                "schemas": {
                    "Node": {
                        "type": "object",
                        "properties": {"parent": _ref("schemas", "Node")},
                        "allOf": [_ref("schemas", "Node")],
                    }
                }
            },
        }
        assert _resolve(raw).components == {"Node"}

    def test_deep_chain_does_not_recurse(self) -> None:
        depth = 5000
        schemas = {
            f"S{i}": {"properties": {"next": _ref("schemas", f"S{i + 1}")}}
            for i in range(depth)
        }
        schemas[f"S{depth}"] = {"type": "string"}
        raw = {
            "paths": {"/deep": {"get": {"responses": {"200": _json_response(_ref("schemas", "S0"))}}}},
            "components": {"schemas": schemas},
        }
        assert len(_resolve(raw).components) == depth + 1

    def test_name_collision_uses_first_category(self) -> None:
        raw = {
            "paths": {"/a": {"get": {"parameters": [_ref("parameters", "Item")]}}},
            "components": {
                "schemas": {
                    "Item": {"properties": {"owner": _ref("schemas", "Owner")}},
                    "Owner": {"type": "object"},
                },
                "parameters": {
                    "Item": {"properties": {"other": _ref("schemas", "Other")}},
                },
            },
        }
        # The parameter ref resolves to the schema definition of "Item".
        deps = _resolve(raw)
        assert deps.components == {"Item", "Owner"}


# ---------------------------------------------------------------------------
# Dangling references
# ---------------------------------------------------------------------------


class TestDanglingReferences:
    """Missing components are tolerated and recorded."""

    def test_dangling_marked_visited_and_recorded(self, bookstore_raw: dict[str, Any]) -> None:
        deps = _resolve(bookstore_raw, r"^/orders")
        assert "Coupon" in deps.components
        assert deps.dangling == ["Coupon"]

    def test_dangling_recorded_once(self) -> None:
        raw = {
            "paths": {
                "/a": {"get": {"parameters": [_ref("parameters", "Gone")]}},
                "/b": {"get": {"parameters": [_ref("parameters", "Gone")]}},
            }
        }
        deps = _resolve(raw)
        assert deps.dangling == ["Gone"]

    def test_malformed_ref_treated_as_dangling(self) -> None:
        raw = {"paths": {"/a": {"get": {"parameters": [{"$ref": "Nowhere"}]}}}}
        deps = _resolve(raw)
        assert deps.dangling == ["Nowhere"]

    def test_no_components_section(self, petstore_raw: dict[str, Any]) -> None:
        del petstore_raw["components"]
        deps = _resolve(petstore_raw, r"^/pets")
        assert deps.components == {"Pet", "PetId"}
        assert sorted(deps.dangling) == ["Pet", "PetId"]


# ---------------------------------------------------------------------------
# Context handling
# ---------------------------------------------------------------------------


class TestContext:
    """Traversal context ownership."""

    def test_fresh_context_per_call(self, bookstore_raw: dict[str, Any]) -> None:
        document = OpenAPIDocument(bookstore_raw)
        resolver = DependencyResolver(document)
        first = resolver.resolve(select_paths(document.paths, r"^/trees"))
        second = resolver.resolve(select_paths(document.paths, r"^/authors"))
        assert first.tags == {"Trees"}
        assert second.tags == {"Authors"}
        assert "TreeA" not in second.components

    def test_accumulates_into_supplied_context(self, bookstore_raw: dict[str, Any]) -> None:
        document = OpenAPIDocument(bookstore_raw)
        resolver = DependencyResolver(document)
        deps = Dependencies()
        resolver.resolve(select_paths(document.paths, r"^/trees"), deps)
        resolver.resolve(select_paths(document.paths, r"^/authors"), deps)
        assert {"TreeA", "TreeB", "AuthorId", "Author"} <= deps.components
        assert deps.tags == {"Trees", "Authors"}

    def test_source_not_mutated(self, bookstore_raw: dict[str, Any]) -> None:
        import copy

        before = copy.deepcopy(bookstore_raw)
        DependencyResolver(OpenAPIDocument(bookstore_raw)).resolve(bookstore_raw["paths"])
        assert bookstore_raw == before
