"""
Post-processing of generated schemas.

allOf parts are merged into their parent when that does not change the
meaning of the schema, and nested anyOf wrappers are flattened.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any

from .keywords import SUBSCHEMA_ARRAY_KEYWORDS, SUBSCHEMA_KEYWORDS, SUBSCHEMA_MAP_KEYWORDS

if TYPE_CHECKING:
    from .config import SchemaGeneratorConfig


def _subschemas(node: dict) -> Iterator[dict]:
    for keyword, value in node.items():
        if keyword in SUBSCHEMA_KEYWORDS:
            if isinstance(value, dict):
                yield value
            elif isinstance(value, list):
                # draft 4 tuple form of "items"
                yield from (item for item in value if isinstance(item, dict))
        elif keyword in SUBSCHEMA_ARRAY_KEYWORDS and isinstance(value, list):
            yield from (item for item in value if isinstance(item, dict))
        elif keyword in SUBSCHEMA_MAP_KEYWORDS and isinstance(value, dict):
            yield from (item for item in value.values() if isinstance(item, dict))


class SchemaCleanUpUtils:
    """Simplifications applied to the finished schemas of one run."""

    def __init__(self, config: SchemaGeneratorConfig):
        self._allows_ref_siblings = config.schema_version.allows_ref_siblings

    def reduce_all_of_nodes(self, schemas: list[dict]) -> None:
        """Merge "allOf" parts into the containing node where no keyword conflicts."""
        self._apply_bottom_up(schemas, self._merge_all_of)

    def reduce_any_of_nodes(self, schemas: list[dict]) -> None:
        """Inline "anyOf" entries that only wrap another "anyOf"."""
        self._apply_bottom_up(schemas, self._flatten_any_of)

    def _apply_bottom_up(self, schemas: list[dict], reduce: Callable[[dict], None]) -> None:
        visited: set[int] = set()

        def visit(node: dict) -> None:
            if id(node) in visited:
                return
            visited.add(id(node))
            for child in list(_subschemas(node)):
                visit(child)
            reduce(node)

        for schema in schemas:
            visit(schema)

    def _merge_all_of(self, node: dict) -> None:
        parts = node.get("allOf")
        if not isinstance(parts, list) or not all(isinstance(part, dict) for part in parts):
            return
        merged: dict[str, Any] = {key: value for key, value in node.items() if key != "allOf"}
        for part in parts:
            for key, value in part.items():
                if key in merged and merged[key] != value:
                    return
                merged[key] = value
        if "$ref" in merged and len(merged) > 1 and not self._allows_ref_siblings:
            # older dialects ignore everything next to a $ref
            return
        node.clear()
        node.update(merged)

    def _flatten_any_of(self, node: dict) -> None:
        parts = node.get("anyOf")
        if not isinstance(parts, list):
            return
        flattened: list[Any] = []
        for part in parts:
            nested = part.get("anyOf") if isinstance(part, dict) and len(part) == 1 else None
            candidates = nested if isinstance(nested, list) else [part]
            for candidate in candidates:
                if candidate not in flattened:
                    flattened.append(candidate)
        if len(flattened) == 1 and isinstance(flattened[0], dict) and len(node) == 1:
            node.clear()
            node.update(flattened[0])
        else:
            node["anyOf"] = flattened
