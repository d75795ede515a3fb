"""
"additionalProperties" for mappings and closed object types.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..generator.module import Module

if TYPE_CHECKING:
    from ..generator.config_builder import SchemaGeneratorConfigBuilder
    from ..resolution import TypeScope


class AdditionalPropertiesModule(Module):
    """Mapping value types as "additionalProperties", and/or false for all other objects."""

    def __init__(self, mapping_values: bool = False, forbidden_by_default: bool = False):
        self.mapping_values = mapping_values
        self.forbidden_by_default = forbidden_by_default

    @classmethod
    def for_mapping_values(cls) -> AdditionalPropertiesModule:
        return cls(mapping_values=True)

    @classmethod
    def forbidden_additional_properties_by_default(cls) -> AdditionalPropertiesModule:
        return cls(forbidden_by_default=True)

    def apply_to_config_builder(self, builder: SchemaGeneratorConfigBuilder) -> None:
        builder.for_types_in_general().with_additional_properties_resolver(self.resolve_additional_properties)

    def resolve_additional_properties(self, scope: TypeScope) -> Any:
        type_ = scope.type
        if type_.is_mapping:
            if not self.mapping_values or len(type_.type_args) != 2:
                return None
            value_type = type_.type_args[1]
            return None if value_type.erased_type is object else value_type
        # object and Any stay open to every value
        if type_.erased_type is object:
            return None
        if self.forbidden_by_default and type_.is_class and not type_.is_array:
            return False
        return None
