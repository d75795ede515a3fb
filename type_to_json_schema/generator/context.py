"""
Generation context: the depth-first traversal of one generation run.

Every distinct DefinitionKey is generated once. Its definition node is
registered before its members are traversed, so that cyclic references to
it only record a reference node; the SchemaBuilder turns reference nodes
into "$ref"s or inlined content after the traversal has finished.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from loguru import logger

from ..resolution import MemberScope, MethodScope, ResolvedType, TypeContext
from .attribute_collector import AttributeCollector, allowed_types_of, merge_missing_attributes
from .keywords import COMPOSITE_KEYWORDS, SchemaKeyword
from .options import Option

if TYPE_CHECKING:
    from .config import SchemaGeneratorConfig
    from .custom_definition import CustomDefinition


class DefinitionState(Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


@dataclass(frozen=True)
class DefinitionKey:
    """Identity of one generated definition.

    The same type yields distinct keys when a custom definition provider asks
    for the standard definition while ignoring itself.
    """

    type: ResolvedType
    ignored_definition_provider: Any = None


def make_nullable(node: dict) -> dict:
    """Make a schema node admit null, in place.

    Nodes with composite content are wrapped into "anyOf" with a null
    alternative; simple nodes get "null" added to their "type".
    """
    if any(keyword in node for keyword in COMPOSITE_KEYWORDS):
        content = dict(node)
        node.clear()
        node["anyOf"] = [{"type": "null"}, content]
        return node
    declared = node.get("type")
    if declared is None:
        # no type restriction, null is already allowed
        return node
    if isinstance(declared, str):
        if declared != "null":
            node["type"] = [declared, "null"]
    elif "null" not in declared:
        node["type"] = [*declared, "null"]
    return node


class SchemaGenerationContext:
    """Per-run state: definitions, reference nodes and traversal progress."""

    def __init__(self, config: SchemaGeneratorConfig, type_context: TypeContext, main_type: ResolvedType | None = None):
        self._config = config
        self._type_context = type_context
        self._main_type = main_type
        self._attribute_collector = AttributeCollector(self)
        self._states: dict[DefinitionKey, DefinitionState] = {}
        self._definitions: dict[DefinitionKey, dict] = {}
        self._references: dict[DefinitionKey, list[dict]] = {}
        self._nullable_references: dict[DefinitionKey, list[dict]] = {}
        self._always_ref: set[DefinitionKey] = set()

    @property
    def generator_config(self) -> SchemaGeneratorConfig:
        return self._config

    @property
    def type_context(self) -> TypeContext:
        return self._type_context

    @property
    def main_type(self) -> ResolvedType | None:
        """The type the document is generated for (None when building several schemas)."""
        return self._main_type

    def keyword(self, keyword: SchemaKeyword) -> str:
        return self._config.keyword(keyword)

    # Registry

    def definition_keys(self) -> list[DefinitionKey]:
        """All keys in the order they were first encountered."""
        return list(self._definitions)

    def contains_definition(self, key: DefinitionKey) -> bool:
        return key in self._definitions

    def get_definition(self, key: DefinitionKey) -> dict:
        return self._definitions[key]

    def state(self, key: DefinitionKey) -> DefinitionState:
        return self._states.get(key, DefinitionState.NOT_STARTED)

    def references(self, key: DefinitionKey) -> list[dict]:
        return self._references.get(key, [])

    def nullable_references(self, key: DefinitionKey) -> list[dict]:
        return self._nullable_references.get(key, [])

    def is_always_ref(self, key: DefinitionKey) -> bool:
        return key in self._always_ref

    def _add_reference(self, key: DefinitionKey, node: dict | None, is_nullable: bool) -> None:
        if node is None:
            return
        references = self._nullable_references if is_nullable else self._references
        references.setdefault(key, []).append(node)

    # Provider facing API

    def parse_type(self, type_: ResolvedType) -> DefinitionKey:
        """Generate the definition of a type without referencing it."""
        key = DefinitionKey(type_)
        node: dict = {}
        self._traverse_generic_type(type_, node, False, None, register_reference=False)
        if key not in self._definitions:
            # inline content (arrays, unions, inline custom definitions)
            self._definitions[key] = node
            self._states[key] = DefinitionState.COMPLETE
        return key

    def create_definition_reference(self, type_: ResolvedType) -> dict:
        """Return a node standing for the given type, to be embedded by a provider."""
        node: dict = {}
        self._traverse_generic_type(type_, node, False, None)
        return node

    def create_definition(self, type_: ResolvedType) -> dict:
        return self.create_definition_reference(type_)

    def create_standard_definition_reference(self, type_: ResolvedType, ignored_provider: Any) -> dict:
        """Reference node for the type's definition, skipping providers up to the given one."""
        node: dict = {}
        self._traverse_generic_type(type_, node, False, ignored_provider)
        return node

    def create_standard_definition(self, type_: ResolvedType, ignored_provider: Any) -> dict:
        """The type's definition content, skipping providers up to and including the given one.

        Meant for providers that adjust the standard definition of a type
        rather than replacing it. The result is a shallow copy.
        """
        key = DefinitionKey(type_, ignored_provider)
        node: dict = {}
        self._traverse_generic_type(type_, node, False, ignored_provider, register_reference=False)
        if key in self._definitions:
            return dict(self._definitions[key])
        return node

    def make_nullable(self, node: dict) -> dict:
        return make_nullable(node)

    # Traversal

    def _traverse_generic_type(
        self,
        type_: ResolvedType,
        target: dict,
        is_nullable: bool,
        ignored_provider: Any,
        register_reference: bool = True,
    ) -> None:
        key = DefinitionKey(type_, ignored_provider)
        if key in self._states:
            logger.debug("Reference to existing definition of {}", type_)
            if register_reference:
                self._add_reference(key, target, is_nullable)
            return

        type_scope = self._type_context.create_type_scope(type_)
        custom = self._config.type_part.get_custom_definition(type_, self, ignored_provider)
        if custom is not None and custom.should_inline:
            logger.debug("Applying inline custom definition for {}", type_)
            target.update(custom.value)
            if custom.include_attributes:
                attributes = self._attribute_collector.collect_type_attributes(type_scope, allowed_types_of(target))
                merge_missing_attributes(target, attributes)
            if is_nullable:
                make_nullable(target)
            return
        if custom is None and (type_.is_array or type_.is_union):
            if type_.is_array:
                logger.debug("Generating array definition for {}", type_)
                self._generate_array_definition(type_, target)
            else:
                self._generate_union_definition(type_, target, is_nullable)
            attributes = self._attribute_collector.collect_type_attributes(type_scope, allowed_types_of(target))
            merge_missing_attributes(target, attributes)
            self._config.type_part.apply_type_attribute_overrides(target, type_scope, self)
            if is_nullable:
                make_nullable(target)
            return

        definition: dict = {}
        self._definitions[key] = definition
        self._states[key] = DefinitionState.IN_PROGRESS
        if register_reference:
            self._add_reference(key, target, is_nullable)
        self._generate_definition(key, type_scope, definition, custom)
        self._config.type_part.apply_type_attribute_overrides(definition, type_scope, self)
        self._states[key] = DefinitionState.COMPLETE

    def _generate_definition(self, key: DefinitionKey, type_scope, definition: dict, custom: CustomDefinition | None):
        type_ = key.type
        if custom is not None:
            logger.debug("Applying custom definition for {}", type_)
            definition.update(custom.value)
            if custom.should_always_ref:
                self._always_ref.add(key)
            if not custom.include_attributes:
                return
        else:
            subtypes = self._resolve_subtypes(type_)
            if subtypes:
                logger.debug("Generating subtype references for {}: {}", type_, subtypes)
                self._generate_subtype_references(definition, subtypes)
            else:
                logger.debug("Generating object definition for {}", type_)
                self._generate_object_definition(type_, definition)
        attributes = self._attribute_collector.collect_type_attributes(type_scope, allowed_types_of(definition))
        merge_missing_attributes(definition, attributes)

    def _resolve_subtypes(self, type_: ResolvedType) -> list[ResolvedType]:
        subtypes = self._config.type_part.find_subtypes(type_, self)
        if not subtypes:
            return []
        # a type listed as its own subtype would never terminate
        return [subtype for subtype in subtypes if subtype != type_]

    def _composition_keyword(self, count: int) -> str:
        if count == 1:
            return "allOf"
        return "oneOf" if self._config.is_enabled(Option.SUBTYPES_AS_ONE_OF) else "anyOf"

    def _generate_subtype_references(self, definition: dict, subtypes: list[ResolvedType]) -> None:
        alternatives = []
        for subtype in subtypes:
            node: dict = {}
            self._traverse_generic_type(subtype, node, False, None)
            alternatives.append(node)
        definition[self._composition_keyword(len(subtypes))] = alternatives

    def _generate_array_definition(self, type_: ResolvedType, definition: dict) -> None:
        definition["type"] = "array"
        items: dict = {}
        definition["items"] = items
        self._traverse_generic_type(type_.container_item_type(), items, False, None)

    def _generate_union_definition(self, type_: ResolvedType, definition: dict, is_nullable: bool) -> None:
        members = [member for member in type_.type_args if not member.is_none]
        if type_.is_optional and len(members) == 1:
            self._traverse_generic_type(members[0], definition, True, None)
            return
        alternatives = []
        if type_.is_optional and not is_nullable:
            alternatives.append({"type": "null"})
        for member in members:
            node: dict = {}
            self._traverse_generic_type(member, node, False, None)
            alternatives.append(node)
        definition["anyOf"] = alternatives

    def _generate_object_definition(self, type_: ResolvedType, definition: dict) -> None:
        definition["type"] = "object"
        collected: dict[str, MemberScope] = {}
        required: set[str] = set()
        for field in self._type_context.collect_fields(type_):
            self._collect_member(field, collected, required)
        for method in self._type_context.collect_methods(type_):
            self._collect_member(method, collected, required)
        if not collected:
            return
        properties: dict[str, Any] = {}
        for member in self._config.property_sorter()(list(collected.values())):
            # An accessor returning None admits no value
            if isinstance(member, MethodScope) and member.is_void:
                properties[member.schema_property_name] = False
                continue
            node: dict = {}
            self._populate_member_schema(member, node)
            properties[member.schema_property_name] = node
        definition["properties"] = properties
        required_names = [name for name in properties if name in required]
        if required_names:
            definition["required"] = required_names

    def _collect_member(self, member: MemberScope, collected: dict[str, MemberScope], required: set[str]) -> None:
        part = self._config.part_for(member)
        if part.should_ignore(member):
            return
        name_override = part.resolve_property_name_override(member)
        if name_override is not None:
            member = member.with_overridden_name(name_override)
        name = member.schema_property_name
        if name in collected:
            logger.debug("Ignoring member {} hidden by another member named {}", member, name)
            return
        if part.is_required(member):
            required.add(name)
        collected[name] = member

    def _populate_member_schema(self, member: MemberScope, target: dict) -> None:
        part = self._config.part_for(member)
        target_types = part.resolve_target_type_overrides(member)
        if target_types is None:
            subtypes = self._resolve_subtypes(member.type)
            target_types = subtypes or None
        is_nullable = self._config.is_nullable(member)
        if target_types is None:
            self._populate_single_member(member, target, is_nullable)
        elif len(target_types) == 1:
            self._populate_single_member(member.with_overridden_type(target_types[0]), target, is_nullable)
        else:
            alternatives = [{"type": "null"}] if is_nullable else []
            for target_type in target_types:
                node: dict = {}
                self._populate_single_member(member.with_overridden_type(target_type), node, False)
                alternatives.append(node)
            target["anyOf"] = alternatives
        part.apply_instance_attribute_overrides(target, member, self)

    def _populate_single_member(self, member: MemberScope, target: dict, is_nullable: bool) -> None:
        part = self._config.part_for(member)
        custom = part.get_custom_definition(member, self)
        if custom is not None:
            logger.debug("Applying custom definition for member {}", member)
            target.update(custom.value)
            if custom.include_attributes:
                attributes = self._attribute_collector.collect_member_attributes(member, allowed_types_of(target))
                merge_missing_attributes(target, attributes)
            if is_nullable:
                make_nullable(target)
            return

        if member.is_container_type and self._config.type_part.get_custom_definition(member.type, self) is None:
            target["type"] = "array"
            items: dict = {}
            target["items"] = items
            self._populate_member_schema(member.as_fake_container_item_scope(), items)
            attributes = self._attribute_collector.collect_member_attributes(member, {"array"})
            merge_missing_attributes(target, attributes)
            if is_nullable:
                make_nullable(target)
            return

        attributes = self._attribute_collector.collect_member_attributes(member)
        if attributes:
            reference_container: dict = {}
            target["allOf"] = [reference_container, attributes]
        else:
            reference_container = target
        self._traverse_generic_type(member.type, reference_container, is_nullable, None)
