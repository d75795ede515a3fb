"""
Collects the schema attributes configured for a type or a member.
"""

from __future__ import annotations

import dataclasses
import datetime
import decimal
import enum
import pathlib
import uuid
from typing import TYPE_CHECKING, Any

from loguru import logger

from ..resolution import NoneType
from .keywords import SchemaKeyword

if TYPE_CHECKING:
    from ..resolution import MemberScope, TypeScope
    from .config_part import TypeConfigPart
    from .context import SchemaGenerationContext

_STRING_ATTRIBUTES = (
    ("string_min_length", SchemaKeyword.TAG_LENGTH_MIN),
    ("string_max_length", SchemaKeyword.TAG_LENGTH_MAX),
    ("string_format", SchemaKeyword.TAG_FORMAT),
    ("string_pattern", SchemaKeyword.TAG_PATTERN),
)

_ARRAY_ATTRIBUTES = (
    ("array_min_items", SchemaKeyword.TAG_ITEMS_MIN),
    ("array_max_items", SchemaKeyword.TAG_ITEMS_MAX),
    ("array_unique_items", SchemaKeyword.TAG_ITEMS_UNIQUE),
)


def to_json_value(value: Any) -> Any:
    """Convert a Python value to its JSON representation, or None if there is none."""
    if isinstance(value, enum.Enum):
        return to_json_value(value.value)
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_json_value(item) for item in value]
    if isinstance(value, dict):
        return {str(key): to_json_value(item) for key, item in value.items()}
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, decimal.Decimal):
        return float(value)
    if isinstance(value, (uuid.UUID, pathlib.PurePath)):
        return str(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_json_value(dataclasses.asdict(value))
    logger.debug("No JSON representation for value {!r}", value)
    return None


def json_type_of(value: Any) -> str | None:
    """JSON type name of a JSON compatible value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return None


def merge_missing_attributes(target: dict, attributes: dict) -> None:
    """Copy attributes into the target node, never replacing existing keys."""
    for key, value in attributes.items():
        if key not in target:
            target[key] = value


def allowed_types_of(node: dict) -> set[str] | None:
    """The "type" values of a node, or None if it does not restrict the type."""
    declared = node.get("type")
    if declared is None:
        return None
    return {declared} if isinstance(declared, str) else set(declared)


class AttributeCollector:
    """Resolves all attributes of one scope against a config part."""

    def __init__(self, context: SchemaGenerationContext):
        self._context = context
        self._config = context.generator_config

    def collect_type_attributes(self, scope: TypeScope, allowed_types: set[str] | None = None) -> dict:
        node: dict[str, Any] = {}
        part = self._config.type_part
        self._set_value(node, SchemaKeyword.TAG_ID, part.resolve("id", scope))
        if self._config.schema_version.supports_anchor:
            self._set_value(node, SchemaKeyword.TAG_ANCHOR, part.resolve("anchor", scope))
        self._collect(node, part, scope, allowed_types)
        return node

    def collect_member_attributes(self, member: MemberScope, allowed_types: set[str] | None = None) -> dict:
        node: dict[str, Any] = {}
        part = self._config.part_for(member)
        self._collect(node, part, member, allowed_types)
        if not member.is_fake_container_item_scope:
            if part.is_read_only(member):
                node[SchemaKeyword.TAG_READ_ONLY.value] = True
            if part.is_write_only(member):
                node[SchemaKeyword.TAG_WRITE_ONLY.value] = True
        return node

    def _collect(self, node: dict, part: TypeConfigPart, scope: TypeScope, allowed_types: set[str] | None) -> None:
        def allows(*types: str) -> bool:
            return allowed_types is None or any(t in allowed_types for t in types)

        self._set_value(node, SchemaKeyword.TAG_TITLE, part.resolve("title", scope))
        self._set_value(node, SchemaKeyword.TAG_DESCRIPTION, part.resolve("description", scope))
        self._set_default(node, part.resolve("default", scope))
        self._set_enum(node, part.resolve("enum", scope))
        if allows("object"):
            self._set_additional_properties(node, part.resolve("additional_properties", scope))
            self._set_pattern_properties(node, part.resolve("pattern_properties", scope))
        if allows("string"):
            for attribute, keyword in _STRING_ATTRIBUTES:
                self._set_value(node, keyword, part.resolve(attribute, scope))
        if allows("integer", "number"):
            self._set_number_bounds(node, part, scope)
        if allows("array"):
            for attribute, keyword in _ARRAY_ATTRIBUTES:
                self._set_value(node, keyword, part.resolve(attribute, scope))

    def _set_value(self, node: dict, keyword: SchemaKeyword, value: Any) -> None:
        if value is not None:
            node[self._config.keyword(keyword)] = value

    def _set_default(self, node: dict, value: Any) -> None:
        if value is not None:
            node[SchemaKeyword.TAG_DEFAULT.value] = to_json_value(value)

    def _set_enum(self, node: dict, values: list | None) -> None:
        if values is None:
            return
        values = [to_json_value(value) for value in values]
        if len(values) == 1 and self._config.should_use_const():
            node[SchemaKeyword.TAG_CONST.value] = values[0]
        elif values:
            node[SchemaKeyword.TAG_ENUM.value] = values

    def _set_additional_properties(self, node: dict, value: Any) -> None:
        if value is None:
            return
        key = SchemaKeyword.TAG_ADDITIONAL_PROPERTIES.value
        if value is False or value is NoneType:
            node[key] = False
        elif value is True:
            return
        else:
            value_type = self._context.type_context.resolve(value)
            if value_type.erased_type is not object:
                node[key] = self._context.create_definition_reference(value_type)

    def _set_pattern_properties(self, node: dict, patterns: dict | None) -> None:
        if not patterns:
            return
        node[SchemaKeyword.TAG_PATTERN_PROPERTIES.value] = {
            pattern: self._context.create_definition_reference(self._context.type_context.resolve(value_type))
            for pattern, value_type in patterns.items()
        }

    def _set_number_bounds(self, node: dict, part: TypeConfigPart, scope: TypeScope) -> None:
        minimum = part.resolve("number_inclusive_minimum", scope)
        exclusive_minimum = part.resolve("number_exclusive_minimum", scope)
        maximum = part.resolve("number_inclusive_maximum", scope)
        exclusive_maximum = part.resolve("number_exclusive_maximum", scope)
        self._set_bound(node, SchemaKeyword.TAG_MINIMUM, SchemaKeyword.TAG_MINIMUM_EXCLUSIVE, minimum, exclusive_minimum)
        self._set_bound(node, SchemaKeyword.TAG_MAXIMUM, SchemaKeyword.TAG_MAXIMUM_EXCLUSIVE, maximum, exclusive_maximum)
        self._set_value(node, SchemaKeyword.TAG_MULTIPLE_OF, _number(part.resolve("number_multiple_of", scope)))

    def _set_bound(
        self, node: dict, inclusive_keyword: SchemaKeyword, exclusive_keyword: SchemaKeyword, inclusive: Any, exclusive: Any
    ) -> None:
        inclusive, exclusive = _number(inclusive), _number(exclusive)
        if self._config.schema_version.has_numeric_exclusive_bounds:
            self._set_value(node, inclusive_keyword, inclusive)
            self._set_value(node, exclusive_keyword, exclusive)
        elif inclusive is not None:
            # boolean flag form: an inclusive bound takes precedence
            node[inclusive_keyword.value] = inclusive
        elif exclusive is not None:
            node[inclusive_keyword.value] = exclusive
            node[exclusive_keyword.value] = True


def _number(value: Any) -> Any:
    if isinstance(value, decimal.Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value
