"""
Custom definitions: provider supplied replacements for the default schema of a type.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..resolution import MemberScope, ResolvedType
    from .context import SchemaGenerationContext


class DefinitionType(str, Enum):
    """How a custom definition is embedded into the document."""

    # Named or inlined depending on how often it is referenced
    STANDARD = "standard"
    # Always embedded at the use site, never named
    INLINE = "inline"
    # Always named, even if referenced only once
    ALWAYS_REF = "always_ref"


class AttributeInclusion(str, Enum):
    """Whether configured attributes are merged over a custom definition."""

    YES = "yes"
    NO = "no"


@dataclass(frozen=True)
class CustomDefinition:
    """A replacement for the default schema of a type.

    Attributes:
        value: The schema node; top-level keys are copied into the generated node
        definition_type: How the definition is embedded
        attribute_inclusion: Whether attributes from configured resolvers are merged in
    """

    value: dict[str, Any]
    definition_type: DefinitionType = DefinitionType.STANDARD
    attribute_inclusion: AttributeInclusion = AttributeInclusion.YES

    @property
    def should_inline(self) -> bool:
        return self.definition_type is DefinitionType.INLINE

    @property
    def should_always_ref(self) -> bool:
        return self.definition_type is DefinitionType.ALWAYS_REF

    @property
    def include_attributes(self) -> bool:
        return self.attribute_inclusion is AttributeInclusion.YES


@dataclass(frozen=True)
class CustomPropertyDefinition(CustomDefinition):
    """A replacement for the schema of a single member; always embedded inline."""

    definition_type: DefinitionType = DefinitionType.INLINE

    @property
    def should_inline(self) -> bool:
        return True


class StatefulConfig(ABC):
    """A configuration collaborator holding state within one generation run.

    The generator calls reset_after_schema_generation_finished() after every
    run, whether it succeeded or not.
    """

    @abstractmethod
    def reset_after_schema_generation_finished(self) -> None:
        """Drop all state collected during the last generation run."""
        pass


class CustomDefinitionProvider(ABC):
    """Supplies custom definitions for types; plain callables work as well."""

    @abstractmethod
    def provide_custom_schema_definition(
        self, type_: ResolvedType, context: SchemaGenerationContext
    ) -> CustomDefinition | None:
        """Return a custom definition for the type, or None to fall through.

        Args:
            type_: The type to provide a definition for
            context: The running generation context

        Returns:
            A CustomDefinition, or None for the default behavior
        """
        pass

    def __call__(self, type_: ResolvedType, context: SchemaGenerationContext) -> CustomDefinition | None:
        return self.provide_custom_schema_definition(type_, context)


class CustomPropertyDefinitionProvider(ABC):
    """Supplies custom definitions for individual members."""

    @abstractmethod
    def provide_custom_schema_definition(
        self, member: MemberScope, context: SchemaGenerationContext
    ) -> CustomPropertyDefinition | None:
        pass

    def __call__(self, member: MemberScope, context: SchemaGenerationContext) -> CustomPropertyDefinition | None:
        return self.provide_custom_schema_definition(member, context)
