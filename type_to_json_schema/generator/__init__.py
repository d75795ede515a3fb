"""
Generator - type to JSON Schema engine.

A generation run goes through three phases:

1. Configuration: modules and resolvers are registered on a
   SchemaGeneratorConfigBuilder and frozen into a SchemaGeneratorConfig
2. Traversal: the SchemaGenerationContext walks the type graph depth-first,
   producing one definition per distinct type
3. Assembly: the SchemaBuilder names shared definitions, inlines the
   others and cleans up the resulting document
"""

from __future__ import annotations

from .config import SchemaGeneratorConfig
from .config_builder import SchemaGeneratorConfigBuilder
from .config_part import GeneralConfigPart, MemberConfigPart, TypeConfigPart
from .context import DefinitionKey, SchemaGenerationContext
from .custom_definition import (
    AttributeInclusion,
    CustomDefinition,
    CustomDefinitionProvider,
    CustomPropertyDefinition,
    CustomPropertyDefinitionProvider,
    DefinitionType,
    StatefulConfig,
)
from .generator import SchemaGenerator
from .keywords import SchemaKeyword, SchemaVersion
from .module import Module
from .naming import (
    CleanSchemaDefinitionNamingStrategy,
    DefaultSchemaDefinitionNamingStrategy,
    FullTypeNamingStrategy,
    SchemaDefinitionNamingStrategy,
)
from .options import Option, OptionPreset
from .schema_builder import SchemaBuilder
from .subtypes import SubtypeResolver

__all__ = [
    "SchemaGenerator",
    "SchemaGeneratorConfig",
    "SchemaGeneratorConfigBuilder",
    "SchemaBuilder",
    "SchemaGenerationContext",
    "DefinitionKey",
    "TypeConfigPart",
    "MemberConfigPart",
    "GeneralConfigPart",
    "SchemaVersion",
    "SchemaKeyword",
    "Option",
    "OptionPreset",
    "Module",
    "CustomDefinition",
    "CustomPropertyDefinition",
    "CustomDefinitionProvider",
    "CustomPropertyDefinitionProvider",
    "DefinitionType",
    "AttributeInclusion",
    "StatefulConfig",
    "SubtypeResolver",
    "SchemaDefinitionNamingStrategy",
    "DefaultSchemaDefinitionNamingStrategy",
    "FullTypeNamingStrategy",
    "CleanSchemaDefinitionNamingStrategy",
]
