"""
Document assembly: naming definitions and resolving reference nodes.

After the traversal, every definition referenced more than once (or forced
to be named) gets a name in the definitions container and its reference
nodes become "$ref"s; all other definitions are inlined at their single use
site. Nullable references either point to a "-nullable" variant definition
or are wrapped inline.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from loguru import logger

from ..exceptions import DefinitionNamingError, SchemaGenerationError
from .attribute_collector import merge_missing_attributes
from .cleanup import SchemaCleanUpUtils
from .context import DefinitionKey, SchemaGenerationContext, make_nullable
from .keywords import SchemaKeyword
from .naming import (
    CleanSchemaDefinitionNamingStrategy,
    SchemaDefinitionNamingStrategy,
    ensure_definition_key_is_plain,
    ensure_definition_key_is_uri_compatible,
)
from .options import Option

if TYPE_CHECKING:
    from ..resolution import ResolvedType, TypeContext
    from .config import SchemaGeneratorConfig


class SchemaBuilder:
    """Builds one document (or a set of schemas sharing definitions) from a generation context."""

    def __init__(self, config: SchemaGeneratorConfig, type_context: TypeContext, main_type: ResolvedType | None = None):
        self._config = config
        self._type_context = type_context
        self._context = SchemaGenerationContext(config, type_context, main_type)
        self._schema_nodes: list[dict] = []
        self._names: dict[DefinitionKey, str] = {}

    @classmethod
    def for_single_type(
        cls, config: SchemaGeneratorConfig, type_context: TypeContext, main_target_type: Any, *type_parameters: Any
    ) -> SchemaBuilder:
        main_type = type_context.resolve(main_target_type, *type_parameters)
        return cls(config, type_context, main_type)

    @classmethod
    def for_multiple_types(cls, config: SchemaGeneratorConfig, type_context: TypeContext) -> SchemaBuilder:
        return cls(config, type_context)

    @property
    def context(self) -> SchemaGenerationContext:
        return self._context

    def create_single_type_schema(self) -> dict:
        """Generate the document for the builder's main type."""
        main_type = self._context.main_type
        if main_type is None:
            raise SchemaGenerationError("No main type given; use create_schema_reference() for multiple types")
        logger.debug("Generating schema for {}", self._type_context.get_simple_type_description(main_type))
        main_key = self._context.parse_type(main_type)
        definitions_keyword = self._config.keyword(SchemaKeyword.TAG_DEFINITIONS)
        main_as_definition = self._config.is_enabled(Option.DEFINITION_FOR_MAIN_SCHEMA)
        definitions = self._build_definitions_and_resolve_references(
            f"#/{definitions_keyword}/", main_key if not main_as_definition else None, main_key
        )

        document: dict[str, Any] = {}
        if self._config.is_enabled(Option.SCHEMA_VERSION_INDICATOR):
            document["$schema"] = self._config.schema_version.identifier
        if main_as_definition:
            document["$ref"] = f"#/{definitions_keyword}/{self._names[main_key]}"
        else:
            document.update(self._context.get_definition(main_key))
        if definitions:
            document[definitions_keyword] = definitions
        self._clean_up([document])
        return document

    def create_schema_reference(self, target_type: Any, *type_parameters: Any) -> dict:
        """Register a type and return the node standing for it in the final document."""
        resolved = self._type_context.resolve(target_type, *type_parameters)
        node = self._context.create_definition_reference(resolved)
        self._schema_nodes.append(node)
        return node

    def collect_definitions(self, designated_definition_path: str) -> dict:
        """Name and resolve all definitions of the types registered so far.

        Args:
            designated_definition_path: Where the definitions will be placed,
                e.g. "components/schemas" in an OpenAPI document

        Returns:
            The named definitions; the registered nodes now hold "$ref"s or inlined content
        """
        try:
            prefix = f"#/{designated_definition_path.strip('/')}/"
            definitions = self._build_definitions_and_resolve_references(prefix, None, None)
            self._clean_up(self._schema_nodes + list(definitions.values()))
            return definitions
        finally:
            self._config.reset_after_schema_generation_finished()

    def _naming_strategy(self) -> SchemaDefinitionNamingStrategy:
        clean_up = (
            ensure_definition_key_is_plain
            if self._config.is_enabled(Option.PLAIN_DEFINITION_KEYS)
            else ensure_definition_key_is_uri_compatible
        )
        return CleanSchemaDefinitionNamingStrategy(self._config.definition_naming_strategy(), clean_up)

    def _reference_count(self, key: DefinitionKey) -> int:
        return len(self._context.references(key)) + len(self._context.nullable_references(key))

    def _should_produce_definition(self, key: DefinitionKey, main_key: DefinitionKey | None) -> bool:
        if key == main_key:
            return True
        if self._reference_count(key) == 0:
            return False
        if self._context.is_always_ref(key):
            return True
        if self._config.is_enabled(Option.INLINE_ALL_SCHEMAS):
            return False
        if self._config.is_enabled(Option.DEFINITIONS_FOR_ALL_OBJECTS):
            return True
        return self._reference_count(key) > 1

    def _assign_names(self, keys: list[DefinitionKey], naming: SchemaDefinitionNamingStrategy) -> dict[DefinitionKey, str]:
        candidates: dict[str, list[DefinitionKey]] = {}
        for key in keys:
            candidates.setdefault(naming.get_definition_name_for_key(key, self._context), []).append(key)
        names: dict[DefinitionKey, str] = {}
        for name, group in candidates.items():
            if len(group) == 1:
                names[group[0]] = name
                continue
            adjusted = naming.adjust_duplicate_names({key: name for key in group}, self._context)
            if set(adjusted) != set(group):
                raise DefinitionNamingError(f"Naming strategy altered the group of definitions named '{name}'")
            names.update(adjusted)
        seen: dict[str, DefinitionKey] = {}
        for key, name in names.items():
            if name in seen:
                raise DefinitionNamingError(f"Definition name '{name}' is assigned to more than one definition")
            seen[name] = key
        return names

    def _build_definitions_and_resolve_references(
        self, reference_prefix: str, root_key: DefinitionKey | None, main_key: DefinitionKey | None
    ) -> dict[str, dict]:
        """Name definitions, rewrite reference nodes and return the definitions container content.

        Args:
            reference_prefix: Prefix of "$ref" values pointing into the definitions container
            root_key: Key placed at the document root; references to it become "#"
            main_key: Key of the main type, always named
        """
        context = self._context
        naming = self._naming_strategy()
        keys = context.definition_keys()
        produced = [key for key in keys if self._should_produce_definition(key, main_key)]
        if self._config.is_enabled(Option.INLINE_ALL_SCHEMAS):
            self._check_inlining_terminates(keys, set(produced))
        # The root key is written at "#" and never takes a name
        named = [key for key in produced if key != root_key]
        self._names = self._assign_names(named, naming)

        definitions: dict[str, dict] = {self._names[key]: context.get_definition(key) for key in named}

        for key in keys:
            definition = context.get_definition(key)
            references = context.references(key)
            nullable_references = context.nullable_references(key)
            if key == root_key or key in self._names:
                reference = "#" if key == root_key else reference_prefix + self._names[key]
                for node in references:
                    node["$ref"] = reference
            else:
                for node in references:
                    merge_missing_attributes(node, definition)
                reference = None
            if nullable_references:
                self._resolve_nullable_references(
                    key, definition, reference, nullable_references, naming, definitions, reference_prefix
                )

        logger.debug("Produced {} named definition(s) out of {}", len(definitions), len(keys))
        return dict(sorted(definitions.items()))

    def _resolve_nullable_references(
        self,
        key: DefinitionKey,
        definition: dict,
        reference: str | None,
        nullable_references: list[dict],
        naming: SchemaDefinitionNamingStrategy,
        definitions: dict[str, dict],
        reference_prefix: str,
    ) -> None:
        if reference is not None:
            nullable_content = {"anyOf": [{"type": "null"}, {"$ref": reference}]}
        else:
            nullable_content = make_nullable(dict(definition))
        if not self._should_produce_nullable_definition(key, nullable_references):
            for node in nullable_references:
                merge_missing_attributes(node, nullable_content)
            return
        base_name = self._names.get(key) or naming.get_definition_name_for_key(key, self._context)
        nullable_name = naming.adjust_nullable_name(key, base_name, self._context)
        if nullable_name in definitions or nullable_name in self._names.values():
            raise DefinitionNamingError(f"Nullable definition name '{nullable_name}' collides with another definition")
        definitions[nullable_name] = nullable_content
        for node in nullable_references:
            node["$ref"] = reference_prefix + nullable_name

    def _should_produce_nullable_definition(self, key: DefinitionKey, nullable_references: list[dict]) -> bool:
        if self._config.is_enabled(Option.INLINE_NULLABLE_SCHEMAS) or self._config.is_enabled(Option.INLINE_ALL_SCHEMAS):
            return False
        if self._context.is_always_ref(key) or self._config.is_enabled(Option.DEFINITIONS_FOR_ALL_OBJECTS):
            return True
        return len(nullable_references) > 1

    def _check_inlining_terminates(self, keys: list[DefinitionKey], produced: set[DefinitionKey]) -> None:
        owners: dict[int, DefinitionKey] = {}
        for key in keys:
            for node in self._context.references(key) + self._context.nullable_references(key):
                owners[id(node)] = key
        edges = {key: _referenced_keys(self._context.get_definition(key), owners) for key in keys}

        def visit(key: DefinitionKey, path: list[DefinitionKey]) -> None:
            for target in edges[key]:
                if target in produced:
                    continue
                if target in path:
                    raise SchemaGenerationError(
                        f"Cannot inline the circular reference to {target.type}; disable INLINE_ALL_SCHEMAS"
                    )
                visit(target, path + [target])

        for key in keys:
            visit(key, [key])

    def _clean_up(self, schemas: list[dict]) -> None:
        clean_up = SchemaCleanUpUtils(self._config)
        if self._config.is_enabled(Option.ALLOF_CLEANUP_AT_THE_END):
            clean_up.reduce_all_of_nodes(schemas)
        clean_up.reduce_any_of_nodes(schemas)


def _referenced_keys(node: Any, owners: dict[int, DefinitionKey]) -> set[DefinitionKey]:
    found: set[DefinitionKey] = set()
    pending = [node]
    while pending:
        current = pending.pop()
        if isinstance(current, dict):
            if id(current) in owners and current is not node:
                found.add(owners[id(current)])
            pending.extend(current.values())
        elif isinstance(current, list):
            pending.extend(current)
    return found
