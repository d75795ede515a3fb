"""
JSON Schema dialects and their keyword spellings.
"""

from __future__ import annotations

from enum import Enum


class SchemaVersion(str, Enum):
    """Supported JSON Schema dialects."""

    DRAFT_4 = "draft-04"
    DRAFT_6 = "draft-06"
    DRAFT_7 = "draft-07"
    DRAFT_2019_09 = "draft-2019-09"
    DRAFT_2020_12 = "draft-2020-12"

    @property
    def identifier(self) -> str:
        """URI used as $schema value."""
        return _IDENTIFIERS[self]

    @property
    def supports_const(self) -> bool:
        return self is not SchemaVersion.DRAFT_4

    @property
    def has_numeric_exclusive_bounds(self) -> bool:
        """Draft 4 expresses exclusive bounds as boolean flags next to minimum/maximum."""
        return self is not SchemaVersion.DRAFT_4

    @property
    def supports_anchor(self) -> bool:
        return self in (SchemaVersion.DRAFT_2019_09, SchemaVersion.DRAFT_2020_12)

    @property
    def allows_ref_siblings(self) -> bool:
        """Whether keywords next to $ref are evaluated rather than ignored."""
        return self in (SchemaVersion.DRAFT_2019_09, SchemaVersion.DRAFT_2020_12)


_IDENTIFIERS = {
    SchemaVersion.DRAFT_4: "http://json-schema.org/draft-04/schema#",
    SchemaVersion.DRAFT_6: "http://json-schema.org/draft-06/schema#",
    SchemaVersion.DRAFT_7: "http://json-schema.org/draft-07/schema#",
    SchemaVersion.DRAFT_2019_09: "https://json-schema.org/draft/2019-09/schema",
    SchemaVersion.DRAFT_2020_12: "https://json-schema.org/draft/2020-12/schema",
}


class SchemaKeyword(Enum):
    """Keywords and type names, spelled as in the latest dialect."""

    TAG_SCHEMA = "$schema"
    TAG_ID = "$id"
    TAG_ANCHOR = "$anchor"
    TAG_DEFINITIONS = "$defs"
    TAG_REF = "$ref"
    TAG_REF_MAIN = "#"
    TAG_COMMENT = "$comment"

    TAG_TYPE = "type"
    TAG_TYPE_NULL = "null"
    TAG_TYPE_ARRAY = "array"
    TAG_TYPE_OBJECT = "object"
    TAG_TYPE_BOOLEAN = "boolean"
    TAG_TYPE_STRING = "string"
    TAG_TYPE_INTEGER = "integer"
    TAG_TYPE_NUMBER = "number"

    TAG_PROPERTIES = "properties"
    TAG_REQUIRED = "required"
    TAG_ADDITIONAL_PROPERTIES = "additionalProperties"
    TAG_PATTERN_PROPERTIES = "patternProperties"
    TAG_ITEMS = "items"

    TAG_ALLOF = "allOf"
    TAG_ANYOF = "anyOf"
    TAG_ONEOF = "oneOf"
    TAG_NOT = "not"

    TAG_TITLE = "title"
    TAG_DESCRIPTION = "description"
    TAG_DEFAULT = "default"
    TAG_CONST = "const"
    TAG_ENUM = "enum"
    TAG_READ_ONLY = "readOnly"
    TAG_WRITE_ONLY = "writeOnly"

    TAG_FORMAT = "format"
    TAG_PATTERN = "pattern"
    TAG_LENGTH_MIN = "minLength"
    TAG_LENGTH_MAX = "maxLength"

    TAG_MINIMUM = "minimum"
    TAG_MINIMUM_EXCLUSIVE = "exclusiveMinimum"
    TAG_MAXIMUM = "maximum"
    TAG_MAXIMUM_EXCLUSIVE = "exclusiveMaximum"
    TAG_MULTIPLE_OF = "multipleOf"

    TAG_ITEMS_MIN = "minItems"
    TAG_ITEMS_MAX = "maxItems"
    TAG_ITEMS_UNIQUE = "uniqueItems"

    def for_version(self, version: SchemaVersion) -> str:
        """Spelling of this keyword in the given dialect."""
        return _VERSION_SPECIFIC.get(self, {}).get(version, self.value)


_LEGACY_DEFINITIONS = {
    SchemaVersion.DRAFT_4: "definitions",
    SchemaVersion.DRAFT_6: "definitions",
    SchemaVersion.DRAFT_7: "definitions",
}

_VERSION_SPECIFIC: dict[SchemaKeyword, dict[SchemaVersion, str]] = {
    SchemaKeyword.TAG_DEFINITIONS: _LEGACY_DEFINITIONS,
    SchemaKeyword.TAG_ID: {SchemaVersion.DRAFT_4: "id"},
}

# Keywords whose value is a single subschema
SUBSCHEMA_KEYWORDS = frozenset({"items", "additionalProperties", "not", "contains", "propertyNames"})

# Keywords whose value is a list of subschemas
SUBSCHEMA_ARRAY_KEYWORDS = frozenset({"allOf", "anyOf", "oneOf", "prefixItems"})

# Keywords whose value maps names to subschemas
SUBSCHEMA_MAP_KEYWORDS = frozenset({"properties", "patternProperties", "$defs", "definitions", "dependentSchemas"})

# Keywords that make a subschema more than a plain "type" declaration when made nullable
COMPOSITE_KEYWORDS = ("$ref", "allOf", "anyOf", "oneOf", "const", "enum")
