"""
Generator options and option presets.

An option either toggles a behavior of the engine itself or enables/disables
one of the built-in modules (see config_builder).
"""

from __future__ import annotations

from enum import Enum


class Option(str, Enum):
    """Switches for the standard generator behavior."""

    # Add "$schema" with the dialect identifier to the document root
    SCHEMA_VERSION_INDICATOR = "schema_version_indicator"
    # Fixed schemas for Decimal, datetime, UUID, Path and the like
    ADDITIONAL_FIXED_TYPES = "additional_fixed_types"
    # Enum members by name instead of by value
    ENUMS_FROM_NAMES = "enums_from_names"
    # Use "enum" with a single entry instead of "const"
    ENUM_KEYWORD_FOR_SINGLE_VALUES = "enum_keyword_for_single_values"
    # Include attributes starting with an underscore
    NONPUBLIC_FIELDS = "nonpublic_fields"
    # Include ClassVar attributes
    STATIC_FIELDS = "static_fields"
    # Include properties and cached properties as accessors
    ACCESSOR_PROPERTIES = "accessor_properties"
    # Properties without setter and Final attributes are readOnly
    READ_ONLY_PROPERTIES = "read_only_properties"
    # Attributes without default value are required
    REQUIRED_FIELDS_WITHOUT_DEFAULT = "required_fields_without_default"
    # Attribute default values as "default"
    DEFAULT_VALUES_FROM_FIELDS = "default_values_from_fields"
    # Class and property docstrings as "description"
    DESCRIPTIONS_FROM_DOCSTRINGS = "descriptions_from_docstrings"
    # snake_case attribute names become camelCase property names
    CAMEL_CASE_PROPERTY_NAMES = "camel_case_property_names"
    # All fields are nullable unless declared otherwise
    NULLABLE_FIELDS_BY_DEFAULT = "nullable_fields_by_default"
    # All accessor values are nullable unless declared otherwise
    NULLABLE_METHOD_RETURN_VALUES_BY_DEFAULT = "nullable_method_return_values_by_default"
    # Array items may be nullable when a resolver says so
    NULLABLE_ARRAY_ITEMS_ALLOWED = "nullable_array_items_allowed"
    # Mapping value types as "additionalProperties"
    MAP_VALUES_AS_ADDITIONAL_PROPERTIES = "map_values_as_additional_properties"
    # "additionalProperties": false on all object definitions
    FORBIDDEN_ADDITIONAL_PROPERTIES_BY_DEFAULT = "forbidden_additional_properties_by_default"
    # Polymorphic types as "oneOf" instead of "anyOf"
    SUBTYPES_AS_ONE_OF = "subtypes_as_one_of"
    # Name every definition, even if it is only referenced once
    DEFINITIONS_FOR_ALL_OBJECTS = "definitions_for_all_objects"
    # Put the main type into the definitions and reference it from the root
    DEFINITION_FOR_MAIN_SCHEMA = "definition_for_main_schema"
    # Never name definitions (fails on circular references)
    INLINE_ALL_SCHEMAS = "inline_all_schemas"
    # Nullable references are inlined instead of getting a "-nullable" definition
    INLINE_NULLABLE_SCHEMAS = "inline_nullable_schemas"
    # Definition names without URI specific characters
    PLAIN_DEFINITION_KEYS = "plain_definition_keys"
    # Merge "allOf" parts where that does not change the semantics
    ALLOF_CLEANUP_AT_THE_END = "allof_cleanup_at_the_end"

    @property
    def overridden_options(self) -> frozenset[Option]:
        """Options that are ignored while this one is enabled."""
        return _OVERRIDES.get(self, frozenset())


_OVERRIDES: dict[Option, frozenset[Option]] = {
    Option.INLINE_ALL_SCHEMAS: frozenset(
        {
            Option.DEFINITIONS_FOR_ALL_OBJECTS,
            Option.DEFINITION_FOR_MAIN_SCHEMA,
        }
    ),
}


class OptionPreset(str, Enum):
    """Predefined sets of enabled options."""

    PLAIN_JSON = "plain-json"
    FULL_DOCUMENTATION = "full-documentation"
    PYTHON_OBJECT = "python-object"

    @property
    def default_options(self) -> frozenset[Option]:
        return _PRESET_OPTIONS[self]

    def is_enabled_by_default(self, option: Option) -> bool:
        return option in self.default_options


_COMMON = frozenset(
    {
        Option.SCHEMA_VERSION_INDICATOR,
        Option.ADDITIONAL_FIXED_TYPES,
        Option.MAP_VALUES_AS_ADDITIONAL_PROPERTIES,
        Option.ALLOF_CLEANUP_AT_THE_END,
    }
)

_PRESET_OPTIONS: dict[OptionPreset, frozenset[Option]] = {
    OptionPreset.PLAIN_JSON: _COMMON | {Option.REQUIRED_FIELDS_WITHOUT_DEFAULT},
    OptionPreset.FULL_DOCUMENTATION: _COMMON
    | {
        Option.REQUIRED_FIELDS_WITHOUT_DEFAULT,
        Option.DEFAULT_VALUES_FROM_FIELDS,
        Option.DESCRIPTIONS_FROM_DOCSTRINGS,
        Option.ACCESSOR_PROPERTIES,
        Option.READ_ONLY_PROPERTIES,
    },
    OptionPreset.PYTHON_OBJECT: _COMMON
    | {
        Option.NONPUBLIC_FIELDS,
        Option.STATIC_FIELDS,
        Option.ACCESSOR_PROPERTIES,
        Option.NULLABLE_FIELDS_BY_DEFAULT,
        Option.NULLABLE_METHOD_RETURN_VALUES_BY_DEFAULT,
    },
}
