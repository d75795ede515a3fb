"""
Enum classes and Literal types as "enum"/"const" schemas.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any

from ..generator.attribute_collector import json_type_of, to_json_value
from ..generator.custom_definition import CustomDefinition, DefinitionType
from ..generator.module import Module

if TYPE_CHECKING:
    from ..generator.config_builder import SchemaGeneratorConfigBuilder
    from ..generator.context import SchemaGenerationContext
    from ..resolution import ResolvedType


class EnumModule(Module):
    """Describes an Enum class by the values (or names) of its members.

    Enum classes become standard definitions, so that an enum used in several
    places is named once. Literal types are always inlined.
    """

    def __init__(self, from_names: bool = False):
        self.from_names = from_names

    def apply_to_config_builder(self, builder: SchemaGeneratorConfigBuilder) -> None:
        builder.for_types_in_general().with_custom_definition_provider(self.provide_custom_schema_definition)

    def provide_custom_schema_definition(
        self, type_: ResolvedType, context: SchemaGenerationContext
    ) -> CustomDefinition | None:
        if type_.is_literal:
            values = [self._member_value(value) for value in type_.literal_values]
            return CustomDefinition(self._values_schema(values, context), DefinitionType.INLINE)
        if type_.is_enum:
            values = [self._member_value(member) for member in type_.erased_type]
            return CustomDefinition(self._values_schema(values, context))
        return None

    def _member_value(self, value: Any) -> Any:
        if isinstance(value, enum.Enum) and self.from_names:
            return value.name
        return to_json_value(value)

    def _values_schema(self, values: list, context: SchemaGenerationContext) -> dict:
        schema: dict[str, Any] = {}
        types: list[str] = []
        for value in values:
            json_type = json_type_of(value)
            if json_type is not None and json_type not in types:
                types.append(json_type)
        if types:
            schema["type"] = types[0] if len(types) == 1 else types
        if len(values) == 1 and context.generator_config.should_use_const():
            schema["const"] = values[0]
        else:
            schema["enum"] = values
        return schema
