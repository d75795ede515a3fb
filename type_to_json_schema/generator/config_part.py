"""
Configuration parts: one ordered resolver chain per schema attribute.

Chains are filled while the configuration is assembled and frozen when the
configuration is built. Resolvers registered later are consulted first, and
resolvers registered by the application always precede the defaults
registered by built-in option modules. The first non-None result wins.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator

from ..exceptions import ConfigurationError
from ..resolution import MethodScope

if TYPE_CHECKING:
    from ..resolution import MemberScope, ResolvedType, TypeScope
    from .context import SchemaGenerationContext
    from .custom_definition import CustomDefinition, CustomPropertyDefinition
    from .naming import SchemaDefinitionNamingStrategy


class ResolverChain:
    """Ordered collection of resolver functions for one attribute kind."""

    def __init__(self, attribute: str):
        self.attribute = attribute
        self._defaults: list[Callable] = []
        self._resolvers: list[Callable] = []
        self._frozen: tuple[Callable, ...] | None = None

    def append(self, resolver: Callable, as_default: bool = False) -> None:
        if self._frozen is not None:
            raise ConfigurationError(f"Cannot add a {self.attribute} resolver after the configuration was built")
        (self._defaults if as_default else self._resolvers).append(resolver)

    def freeze(self) -> None:
        self._frozen = self._priority_order()

    def _priority_order(self) -> tuple[Callable, ...]:
        return tuple(reversed(self._resolvers)) + tuple(reversed(self._defaults))

    @property
    def resolvers(self) -> tuple[Callable, ...]:
        """Resolvers in the order they are consulted."""
        return self._frozen if self._frozen is not None else self._priority_order()

    def __iter__(self) -> Iterator[Callable]:
        return iter(self.resolvers)

    def __len__(self) -> int:
        return len(self.resolvers)

    def resolve(self, *args: Any) -> Any:
        """Return the first non-None result."""
        for resolver in self.resolvers:
            result = resolver(*args)
            if result is not None:
                return result
        return None

    def any(self, *args: Any) -> bool:
        """Whether any resolver returns True."""
        return any(resolver(*args) for resolver in self.resolvers)


# Attribute chains shared by types and members
_TYPE_ATTRIBUTES = (
    "title",
    "description",
    "default",
    "enum",
    "additional_properties",
    "pattern_properties",
    "string_min_length",
    "string_max_length",
    "string_format",
    "string_pattern",
    "number_inclusive_minimum",
    "number_exclusive_minimum",
    "number_inclusive_maximum",
    "number_exclusive_maximum",
    "number_multiple_of",
    "array_min_items",
    "array_max_items",
    "array_unique_items",
)


class TypeConfigPart:
    """Attribute resolvers that apply to a scope (a type or a member)."""

    _ATTRIBUTES: tuple[str, ...] = _TYPE_ATTRIBUTES

    def __init__(self):
        self._register_as_default = False
        self._chains: dict[str, ResolverChain] = {name: ResolverChain(name) for name in self._ATTRIBUTES}

    def _add(self, attribute: str, resolver: Callable):
        self._chains[attribute].append(resolver, self._register_as_default)
        return self

    def chain(self, attribute: str) -> ResolverChain:
        return self._chains[attribute]

    def chains(self) -> Iterable[ResolverChain]:
        return self._chains.values()

    def freeze(self) -> None:
        for chain in self._chains.values():
            chain.freeze()

    def set_default_registration(self, enabled: bool) -> None:
        """Route subsequent registrations behind the application's own resolvers."""
        self._register_as_default = enabled

    def resolve(self, attribute: str, scope: TypeScope) -> Any:
        return self._chains[attribute].resolve(scope)

    def with_title_resolver(self, resolver: Callable[[TypeScope], str | None]):
        return self._add("title", resolver)

    def with_description_resolver(self, resolver: Callable[[TypeScope], str | None]):
        return self._add("description", resolver)

    def with_default_resolver(self, resolver: Callable[[TypeScope], Any]):
        return self._add("default", resolver)

    def with_enum_resolver(self, resolver: Callable[[TypeScope], list | None]):
        return self._add("enum", resolver)

    def with_additional_properties_resolver(self, resolver: Callable[[TypeScope], Any]):
        """Resolver returning False (forbidden), a type for the values, or None."""
        return self._add("additional_properties", resolver)

    def with_pattern_properties_resolver(self, resolver: Callable[[TypeScope], dict | None]):
        """Resolver returning a mapping of name patterns to value types."""
        return self._add("pattern_properties", resolver)

    def with_string_min_length_resolver(self, resolver: Callable[[TypeScope], int | None]):
        return self._add("string_min_length", resolver)

    def with_string_max_length_resolver(self, resolver: Callable[[TypeScope], int | None]):
        return self._add("string_max_length", resolver)

    def with_string_format_resolver(self, resolver: Callable[[TypeScope], str | None]):
        return self._add("string_format", resolver)

    def with_string_pattern_resolver(self, resolver: Callable[[TypeScope], str | None]):
        return self._add("string_pattern", resolver)

    def with_number_inclusive_minimum_resolver(self, resolver: Callable[[TypeScope], Any]):
        return self._add("number_inclusive_minimum", resolver)

    def with_number_exclusive_minimum_resolver(self, resolver: Callable[[TypeScope], Any]):
        return self._add("number_exclusive_minimum", resolver)

    def with_number_inclusive_maximum_resolver(self, resolver: Callable[[TypeScope], Any]):
        return self._add("number_inclusive_maximum", resolver)

    def with_number_exclusive_maximum_resolver(self, resolver: Callable[[TypeScope], Any]):
        return self._add("number_exclusive_maximum", resolver)

    def with_number_multiple_of_resolver(self, resolver: Callable[[TypeScope], Any]):
        return self._add("number_multiple_of", resolver)

    def with_array_min_items_resolver(self, resolver: Callable[[TypeScope], int | None]):
        return self._add("array_min_items", resolver)

    def with_array_max_items_resolver(self, resolver: Callable[[TypeScope], int | None]):
        return self._add("array_max_items", resolver)

    def with_array_unique_items_resolver(self, resolver: Callable[[TypeScope], bool | None]):
        return self._add("array_unique_items", resolver)


class MemberConfigPart(TypeConfigPart):
    """Resolvers for one kind of member (fields or accessors)."""

    _ATTRIBUTES = _TYPE_ATTRIBUTES + (
        "ignore",
        "required",
        "nullable",
        "read_only",
        "write_only",
        "property_name_override",
        "target_type_override",
        "custom_definition",
        "instance_attribute_override",
    )

    def with_ignore_check(self, check: Callable[[MemberScope], bool]):
        return self._add("ignore", check)

    def with_required_check(self, check: Callable[[MemberScope], bool]):
        return self._add("required", check)

    def with_nullable_check(self, check: Callable[[MemberScope], bool | None]):
        """Check returning True/False, or None to leave the decision to others."""
        return self._add("nullable", check)

    def with_read_only_check(self, check: Callable[[MemberScope], bool]):
        return self._add("read_only", check)

    def with_write_only_check(self, check: Callable[[MemberScope], bool]):
        return self._add("write_only", check)

    def with_property_name_overrides(self, resolver: Callable[[MemberScope], str | None]):
        return self._add("property_name_override", resolver)

    def with_target_type_overrides_resolver(self, resolver: Callable[[MemberScope], list[ResolvedType] | None]):
        return self._add("target_type_override", resolver)

    def with_custom_definition_provider(
        self, provider: Callable[[MemberScope, SchemaGenerationContext], CustomPropertyDefinition | None]
    ):
        return self._add("custom_definition", provider)

    def with_instance_attribute_override(self, override: Callable[[dict, MemberScope, SchemaGenerationContext], None]):
        """Callback adjusting the member's generated schema node in place."""
        return self._add("instance_attribute_override", override)

    def should_ignore(self, member: MemberScope) -> bool:
        return self._chains["ignore"].any(member)

    def is_required(self, member: MemberScope) -> bool:
        return self._chains["required"].any(member)

    def is_nullable(self, member: MemberScope) -> bool | None:
        return self._chains["nullable"].resolve(member)

    def is_read_only(self, member: MemberScope) -> bool:
        return self._chains["read_only"].any(member)

    def is_write_only(self, member: MemberScope) -> bool:
        return self._chains["write_only"].any(member)

    def resolve_property_name_override(self, member: MemberScope) -> str | None:
        return self._chains["property_name_override"].resolve(member)

    def resolve_target_type_overrides(self, member: MemberScope) -> list[ResolvedType] | None:
        return self._chains["target_type_override"].resolve(member)

    def get_custom_definition(
        self, member: MemberScope, context: SchemaGenerationContext
    ) -> CustomPropertyDefinition | None:
        return self._chains["custom_definition"].resolve(member, context)

    def apply_instance_attribute_overrides(self, node: dict, member: MemberScope, context: SchemaGenerationContext):
        # applied in registration order, each one seeing the previous results
        for override in reversed(self._chains["instance_attribute_override"].resolvers):
            override(node, member, context)


def _sort_members_by_name(members: list[MemberScope]) -> list[MemberScope]:
    # fields before accessors, each group alphabetically
    return sorted(members, key=lambda m: (isinstance(m, MethodScope), m.schema_property_name))


class GeneralConfigPart(TypeConfigPart):
    """Resolvers applying to types in general."""

    _ATTRIBUTES = _TYPE_ATTRIBUTES + (
        "id",
        "anchor",
        "custom_definition",
        "subtypes",
        "type_attribute_override",
    )

    def __init__(self):
        super().__init__()
        self.definition_naming_strategy: SchemaDefinitionNamingStrategy | None = None
        self.property_sorter: Callable[[list[MemberScope]], list[MemberScope]] = _sort_members_by_name

    def with_id_resolver(self, resolver: Callable[[TypeScope], str | None]):
        return self._add("id", resolver)

    def with_anchor_resolver(self, resolver: Callable[[TypeScope], str | None]):
        return self._add("anchor", resolver)

    def with_custom_definition_provider(
        self, provider: Callable[[ResolvedType, SchemaGenerationContext], CustomDefinition | None]
    ):
        return self._add("custom_definition", provider)

    def with_subtype_resolver(
        self, resolver: Callable[[ResolvedType, SchemaGenerationContext], list[ResolvedType] | None]
    ):
        return self._add("subtypes", resolver)

    def with_type_attribute_override(self, override: Callable[[dict, TypeScope, SchemaGenerationContext], None]):
        """Callback adjusting a type's generated definition in place."""
        return self._add("type_attribute_override", override)

    def with_definition_naming_strategy(self, strategy: SchemaDefinitionNamingStrategy):
        self.definition_naming_strategy = strategy
        return self

    def with_property_sorter(self, sorter: Callable[[list[MemberScope]], list[MemberScope]]):
        self.property_sorter = sorter
        return self

    def get_custom_definition(
        self, type_: ResolvedType, context: SchemaGenerationContext, ignored_provider: Any = None
    ) -> CustomDefinition | None:
        """Consult the providers, skipping all up to and including the ignored one."""
        providers = self._chains["custom_definition"].resolvers
        if ignored_provider is not None and ignored_provider in providers:
            providers = providers[providers.index(ignored_provider) + 1 :]
        for provider in providers:
            definition = provider(type_, context)
            if definition is not None:
                return definition
        return None

    def find_subtypes(self, type_: ResolvedType, context: SchemaGenerationContext) -> list[ResolvedType] | None:
        return self._chains["subtypes"].resolve(type_, context)

    def apply_type_attribute_overrides(self, node: dict, scope: TypeScope, context: SchemaGenerationContext):
        # applied in registration order, each one seeing the previous results
        for override in reversed(self._chains["type_attribute_override"].resolvers):
            override(node, scope, context)
