"""
Fixed schemas for builtin and standard library value types.
"""

from __future__ import annotations

import datetime
import decimal
import fractions
import ipaddress
import pathlib
import re
import uuid
from typing import TYPE_CHECKING

from ..generator.custom_definition import CustomDefinition, DefinitionType
from ..generator.module import Module
from ..resolution import NoneType

if TYPE_CHECKING:
    from ..generator.config_builder import SchemaGeneratorConfigBuilder
    from ..generator.context import SchemaGenerationContext
    from ..resolution import ResolvedType

_PRIMITIVE_SCHEMAS: dict[type, dict] = {
    str: {"type": "string"},
    bool: {"type": "boolean"},
    int: {"type": "integer"},
    float: {"type": "number"},
    NoneType: {"type": "null"},
}

_ADDITIONAL_SCHEMAS: dict[type, dict] = {
    bytes: {"type": "string", "contentEncoding": "base64"},
    bytearray: {"type": "string", "contentEncoding": "base64"},
    decimal.Decimal: {"type": "number"},
    fractions.Fraction: {"type": "number"},
    datetime.datetime: {"type": "string", "format": "date-time"},
    datetime.date: {"type": "string", "format": "date"},
    datetime.time: {"type": "string", "format": "time"},
    datetime.timedelta: {"type": "string", "format": "duration"},
    uuid.UUID: {"type": "string", "format": "uuid"},
    pathlib.PurePath: {"type": "string"},
    ipaddress.IPv4Address: {"type": "string", "format": "ipv4"},
    ipaddress.IPv6Address: {"type": "string", "format": "ipv6"},
    re.Pattern: {"type": "string", "format": "regex"},
}


class SimpleTypeModule(Module):
    """Inline schemas for value types that have no members worth describing.

    object and typing.Any map to the empty schema. Subclasses of the mapped
    types (other than enums) use the schema of their closest mapped base.
    """

    def __init__(self, additional_fixed_types: bool = True):
        self.schemas = dict(_PRIMITIVE_SCHEMAS)
        if additional_fixed_types:
            self.schemas.update(_ADDITIONAL_SCHEMAS)

    def with_fixed_type(self, cls: type, schema: dict) -> SimpleTypeModule:
        """Register an additional fixed schema."""
        self.schemas[cls] = schema
        return self

    def apply_to_config_builder(self, builder: SchemaGeneratorConfigBuilder) -> None:
        builder.for_types_in_general().with_custom_definition_provider(self.provide_custom_schema_definition)

    def provide_custom_schema_definition(
        self, type_: ResolvedType, context: SchemaGenerationContext
    ) -> CustomDefinition | None:
        if type_.erased_type is object:
            return CustomDefinition({}, DefinitionType.INLINE)
        if not type_.is_class or type_.is_enum:
            return None
        for cls in type_.erased_type.__mro__:
            schema = self.schemas.get(cls)
            if schema is not None:
                return CustomDefinition(dict(schema), DefinitionType.INLINE)
        return None
