"""
Subtype lookup through the class hierarchy.
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING

from ..generator.subtypes import SubtypeResolver

if TYPE_CHECKING:
    from ..generator.context import SchemaGenerationContext
    from ..resolution import ResolvedType


def _walk_subclasses(cls: type) -> list[type]:
    found: list[type] = []
    for subclass in cls.__subclasses__():
        if subclass not in found:
            found.append(subclass)
        for nested in _walk_subclasses(subclass):
            if nested not in found:
                found.append(nested)
    return found


class SubclassLookupResolver(SubtypeResolver):
    """Expands a class into its concrete subclasses, in definition order.

    Without explicit base classes every user defined class with subclasses
    is expanded. Abstract and still generic subclasses are skipped.
    """

    def __init__(self, *base_classes: type, include_abstract: bool = False):
        self.base_classes = base_classes
        self.include_abstract = include_abstract

    def find_subtypes(self, declared_type: ResolvedType, context: SchemaGenerationContext) -> list[ResolvedType] | None:
        if not declared_type.is_class or declared_type.is_enum:
            return None
        base = declared_type.erased_type
        if self.base_classes and base not in self.base_classes:
            return None
        if base.__module__ == "builtins":
            return None
        subclasses = [
            cls
            for cls in _walk_subclasses(base)
            if (self.include_abstract or not inspect.isabstract(cls)) and not getattr(cls, "__parameters__", ())
        ]
        if not subclasses:
            return None
        return [context.type_context.resolve(cls) for cls in subclasses]
