"""
Modules deriving member attributes from the way members are declared.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..generator.attribute_collector import to_json_value
from ..generator.module import Module
from ..utils import snake_to_camel_case

if TYPE_CHECKING:
    from ..generator.config_builder import SchemaGeneratorConfigBuilder
    from ..resolution import FieldScope, MemberScope, MethodScope


class RequiredFieldsModule(Module):
    """Attributes without a default value are required."""

    def apply_to_config_builder(self, builder: SchemaGeneratorConfigBuilder) -> None:
        builder.for_fields().with_required_check(self.is_required)

    def is_required(self, field: FieldScope) -> bool:
        return not field.has_default and not field.is_static


class DefaultValuesModule(Module):
    """Attribute default values as "default", where they can be represented in JSON."""

    def apply_to_config_builder(self, builder: SchemaGeneratorConfigBuilder) -> None:
        builder.for_fields().with_default_resolver(self.resolve_default)

    def resolve_default(self, field: FieldScope) -> Any:
        if field.is_fake_container_item_scope or not field.has_default:
            return None
        return to_json_value(field.default_value)


class ReadOnlyModule(Module):
    """Final attributes and properties without setter are readOnly."""

    def apply_to_config_builder(self, builder: SchemaGeneratorConfigBuilder) -> None:
        builder.for_fields().with_read_only_check(self.is_read_only_field)
        builder.for_methods().with_read_only_check(self.is_read_only_method)

    def is_read_only_field(self, field: FieldScope) -> bool:
        return field.is_final and not field.is_fake_container_item_scope

    def is_read_only_method(self, method: MethodScope) -> bool:
        return not method.has_setter and not method.is_fake_container_item_scope


class CamelCasePropertyNamesModule(Module):
    """snake_case member names become camelCase property names."""

    def apply_to_config_builder(self, builder: SchemaGeneratorConfigBuilder) -> None:
        builder.for_fields().with_property_name_overrides(self.camel_case_name)
        builder.for_methods().with_property_name_overrides(self.camel_case_name)

    def camel_case_name(self, member: MemberScope) -> str | None:
        name = snake_to_camel_case(member.name)
        return name if name != member.name else None
