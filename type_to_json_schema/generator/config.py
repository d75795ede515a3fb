"""
The frozen generator configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from loguru import logger

from ..resolution import MethodScope
from .custom_definition import StatefulConfig
from .keywords import SchemaKeyword, SchemaVersion
from .naming import DefaultSchemaDefinitionNamingStrategy, SchemaDefinitionNamingStrategy
from .options import Option

if TYPE_CHECKING:
    from ..resolution import MemberScope
    from .config_part import GeneralConfigPart, MemberConfigPart


class SchemaGeneratorConfig:
    """Immutable result of SchemaGeneratorConfigBuilder.build().

    Holds the dialect, the enabled options and the three frozen config parts
    (types in general, fields, accessors).
    """

    def __init__(
        self,
        schema_version: SchemaVersion,
        options: frozenset[Option],
        type_part: GeneralConfigPart,
        field_part: MemberConfigPart,
        method_part: MemberConfigPart,
    ):
        self._schema_version = schema_version
        self._options = options
        self._type_part = type_part
        self._field_part = field_part
        self._method_part = method_part
        for part in (type_part, field_part, method_part):
            part.freeze()

    @property
    def schema_version(self) -> SchemaVersion:
        return self._schema_version

    @property
    def options(self) -> frozenset[Option]:
        return self._options

    @property
    def type_part(self) -> GeneralConfigPart:
        return self._type_part

    @property
    def field_part(self) -> MemberConfigPart:
        return self._field_part

    @property
    def method_part(self) -> MemberConfigPart:
        return self._method_part

    def is_enabled(self, option: Option) -> bool:
        return option in self._options

    def keyword(self, keyword: SchemaKeyword) -> str:
        return keyword.for_version(self._schema_version)

    def part_for(self, member: MemberScope) -> MemberConfigPart:
        return self._method_part if isinstance(member, MethodScope) else self._field_part

    def should_use_const(self) -> bool:
        return self._schema_version.supports_const and not self.is_enabled(Option.ENUM_KEYWORD_FOR_SINGLE_VALUES)

    def is_nullable(self, member: MemberScope) -> bool:
        """Decide whether a member's schema admits null.

        Registered nullable checks decide first; otherwise a member declared
        with None in its type is nullable, and the remaining members follow
        the NULLABLE_*_BY_DEFAULT options.
        """
        result = self.part_for(member).is_nullable(member)
        if member.is_fake_container_item_scope:
            if member.is_declared_optional:
                return True
            return bool(result) and self.is_enabled(Option.NULLABLE_ARRAY_ITEMS_ALLOWED)
        if result is not None:
            return result
        if member.is_declared_optional:
            return True
        if isinstance(member, MethodScope):
            return self.is_enabled(Option.NULLABLE_METHOD_RETURN_VALUES_BY_DEFAULT)
        return self.is_enabled(Option.NULLABLE_FIELDS_BY_DEFAULT)

    def definition_naming_strategy(self) -> SchemaDefinitionNamingStrategy:
        return self._type_part.definition_naming_strategy or DefaultSchemaDefinitionNamingStrategy()

    def property_sorter(self) -> Callable[[list[MemberScope]], list[MemberScope]]:
        return self._type_part.property_sorter

    def _collaborators(self) -> list[Any]:
        collaborators: list[Any] = [self._type_part.definition_naming_strategy]
        for part in (self._type_part, self._field_part, self._method_part):
            for chain in part.chains():
                for resolver in chain.resolvers:
                    collaborators.append(resolver)
                    collaborators.append(getattr(resolver, "__self__", None))
        return collaborators

    def reset_after_schema_generation_finished(self) -> None:
        """Reset every stateful resolver, provider and naming strategy."""
        reset: list[StatefulConfig] = []
        for collaborator in self._collaborators():
            if isinstance(collaborator, StatefulConfig) and not any(collaborator is done for done in reset):
                collaborator.reset_after_schema_generation_finished()
                reset.append(collaborator)
        if reset:
            logger.debug("Reset {} stateful configuration object(s)", len(reset))

    def to_dict(self) -> dict:
        """Serializable summary of the dialect and the enabled options."""
        return {
            "schema_version": self._schema_version.value,
            "options": sorted(option.value for option in self._options),
        }
