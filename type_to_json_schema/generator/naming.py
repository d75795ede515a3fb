"""
Definition naming strategies.

A naming strategy derives the name of a definition from its key, resolves
collisions between keys with the same candidate name and adjusts the name
of nullable variants. CleanSchemaDefinitionNamingStrategy decorates any
strategy with a clean-up applied to all three kinds of names.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .context import DefinitionKey, SchemaGenerationContext

# Characters allowed in a definition name used within a URI fragment
_URI_ILLEGAL = re.compile(r"[^a-zA-Z0-9.\-_$*(),+]")

# Characters allowed in a plain definition name
_PLAIN_ILLEGAL = re.compile(r"[^a-zA-Z0-9.\-_]")

_BRACKETS = re.compile(r"[\[\]()<>|]")


def ensure_definition_key_is_uri_compatible(definition_key: str) -> str:
    """Rewrite a definition name so that it can be used in a $ref URI fragment.

    Examples:
        "Box[int]" -> "Box(int)"
        "dict[str, Decimal]" -> "dict(str,Decimal)"
        "int | str" -> "int+str"
    """
    cleaned = definition_key.replace("[", "(").replace("]", ")").replace("<", "(").replace(">", ")")
    cleaned = cleaned.replace("|", "+")
    return _URI_ILLEGAL.sub("", cleaned)


def ensure_definition_key_is_plain(definition_key: str) -> str:
    """Rewrite a definition name to letters, digits, dots, dashes and underscores.

    Examples:
        "map(string,big_decimal)" -> "map_string.big_decimal_"
        "dict[str, Decimal]" -> "dict_str.Decimal_"
    """
    cleaned = definition_key.replace("$", "-")
    cleaned = _BRACKETS.sub("_", cleaned)
    cleaned = cleaned.replace(",", ".")
    return _PLAIN_ILLEGAL.sub("", cleaned)


class SchemaDefinitionNamingStrategy(ABC):
    """Assigns names to the definitions of a generated document."""

    @abstractmethod
    def get_definition_name_for_key(self, key: DefinitionKey, context: SchemaGenerationContext) -> str:
        """Return the candidate name for a definition.

        Args:
            key: The definition key
            context: The generation context of the run

        Returns:
            The candidate name, possibly shared with other keys
        """
        pass

    def adjust_duplicate_names(
        self, duplicates: dict[DefinitionKey, str], context: SchemaGenerationContext
    ) -> dict[DefinitionKey, str]:
        """Resolve keys sharing the same candidate name.

        The first key keeps the name, subsequent ones (in encounter order)
        get a "-1", "-2", ... suffix.

        Args:
            duplicates: Keys in encounter order mapped to their common candidate name
            context: The generation context of the run

        Returns:
            The same keys mapped to distinct names
        """
        adjusted: dict[DefinitionKey, str] = {}
        for index, (key, name) in enumerate(duplicates.items()):
            adjusted[key] = name if index == 0 else f"{name}-{index}"
        return adjusted

    def adjust_nullable_name(self, key: DefinitionKey, definition_name: str, context: SchemaGenerationContext) -> str:
        """Return the name of the nullable variant of a definition."""
        return f"{definition_name}-nullable"


class DefaultSchemaDefinitionNamingStrategy(SchemaDefinitionNamingStrategy):
    """Names definitions after the simple description of their type, e.g. Box[int]."""

    def get_definition_name_for_key(self, key: DefinitionKey, context: SchemaGenerationContext) -> str:
        return context.type_context.get_simple_type_description(key.type)


class FullTypeNamingStrategy(SchemaDefinitionNamingStrategy):
    """Names definitions after the qualified description of their type."""

    def get_definition_name_for_key(self, key: DefinitionKey, context: SchemaGenerationContext) -> str:
        return context.type_context.get_full_type_description(key.type)


class CleanSchemaDefinitionNamingStrategy(SchemaDefinitionNamingStrategy):
    """Applies a clean-up to every name produced by the wrapped strategy."""

    def __init__(self, strategy: SchemaDefinitionNamingStrategy, clean_up_task: Callable[[str], str]):
        self.strategy = strategy
        self.clean_up_task = clean_up_task

    def get_definition_name_for_key(self, key: DefinitionKey, context: SchemaGenerationContext) -> str:
        return self.clean_up_task(self.strategy.get_definition_name_for_key(key, context))

    def adjust_duplicate_names(
        self, duplicates: dict[DefinitionKey, str], context: SchemaGenerationContext
    ) -> dict[DefinitionKey, str]:
        adjusted = self.strategy.adjust_duplicate_names(duplicates, context)
        return {key: self.clean_up_task(name) for key, name in adjusted.items()}

    def adjust_nullable_name(self, key: DefinitionKey, definition_name: str, context: SchemaGenerationContext) -> str:
        return self.clean_up_task(self.strategy.adjust_nullable_name(key, definition_name, context))
