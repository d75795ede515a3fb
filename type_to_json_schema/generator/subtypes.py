"""
Subtype resolution for polymorphic types.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..resolution import ResolvedType
    from .context import SchemaGenerationContext


class SubtypeResolver(ABC):
    """Expands a declared type into the concrete alternatives it stands for.

    Returning None means "no opinion" and lets the next resolver try. An
    empty list stops the chain and marks the declared type as concrete.
    """

    @abstractmethod
    def find_subtypes(self, declared_type: ResolvedType, context: SchemaGenerationContext) -> list[ResolvedType] | None:
        """Return the subtypes to compose instead of the declared type.

        Args:
            declared_type: The type as declared on the member or referenced
            context: The running generation context

        Returns:
            Ordered subtypes, an empty list, or None
        """
        pass

    def __call__(self, declared_type: ResolvedType, context: SchemaGenerationContext) -> list[ResolvedType] | None:
        return self.find_subtypes(declared_type, context)
