"""
References to schemas published elsewhere.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..generator.custom_definition import AttributeInclusion, CustomDefinition, DefinitionType
from ..generator.module import Module

if TYPE_CHECKING:
    from ..generator.config_builder import SchemaGeneratorConfigBuilder
    from ..generator.context import SchemaGenerationContext
    from ..resolution import ResolvedType


class ExternalRefModule(Module):
    """Replaces types with a known external schema by a "$ref" to its URI.

    The type a document is generated for is always described in full, so
    that the same configuration can produce each of the referenced schemas.
    """

    def __init__(self, refs: dict[type, str]):
        self.refs = dict(refs)

    def apply_to_config_builder(self, builder: SchemaGeneratorConfigBuilder) -> None:
        builder.for_types_in_general().with_custom_definition_provider(self.provide_custom_schema_definition)

    def provide_custom_schema_definition(
        self, type_: ResolvedType, context: SchemaGenerationContext
    ) -> CustomDefinition | None:
        uri = self.refs.get(type_.erased_type)
        if uri is None or type_ == context.main_type:
            return None
        return CustomDefinition({"$ref": uri}, DefinitionType.INLINE, AttributeInclusion.NO)
