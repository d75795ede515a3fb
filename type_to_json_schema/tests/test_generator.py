#!/usr/bin/env python3

from dataclasses import dataclass, field, make_dataclass
from typing import Generic, Literal, Optional, TypeVar

import pytest

from type_to_json_schema import (
    Option,
    OptionPreset,
    SchemaGenerationError,
    SchemaGenerator,
    SchemaGeneratorConfigBuilder,
    SchemaVersion,
    TypeResolutionError,
)

T = TypeVar("T")

DRAFT_2020_12 = "https://json-schema.org/draft/2020-12/schema"


@dataclass
class Address:
    street: str
    city: str = "Paris"


@dataclass
class Order:
    billing: Address
    shipping: Address


@dataclass
class Invoice:
    billing: Address


@dataclass
class Contact:
    home: Optional[Address] = None
    work: Optional[Address] = None


@dataclass
class Profile:
    home: Optional[Address] = None


@dataclass
class TreeNode:
    value: int
    children: "list[TreeNode]" = field(default_factory=list)


@dataclass
class Forest:
    root: TreeNode
    note: str


@dataclass
class Box(Generic[T]):
    content: T


@dataclass
class IntBox(Box[int]):
    label: str


@dataclass
class Shelf:
    small: Box[int]
    large: Box[str]
    other: Box[int]


@dataclass
class Scores:
    values: dict[str, int]
    anything: dict


@dataclass
class Mixed:
    choice: int | str
    maybe: int | str | None = None
    kind: Literal["a"] = "a"


ItemA = make_dataclass("Item", [("a", int)])
ItemB = make_dataclass("Item", [("b", str)])
ItemPair = make_dataclass("Item", [("first", ItemA), ("second", ItemA)])


@dataclass
class Catalog:
    first: ItemA
    second: ItemB


def generate(
    main_type,
    *type_parameters,
    version=SchemaVersion.DRAFT_2020_12,
    preset=OptionPreset.PLAIN_JSON,
    with_options=(),
    without_options=(),
):
    builder = SchemaGeneratorConfigBuilder(version, preset)
    builder.with_option(*with_options)
    builder.without_option(*without_options)
    return SchemaGenerator(builder.build()).generate_schema(main_type, *type_parameters)


class TestSimpleSchemas:
    """Single type documents"""

    def test_dataclass(self):
        schema = generate(Address)
        assert schema == {
            "$schema": DRAFT_2020_12,
            "type": "object",
            "properties": {
                "city": {"type": "string"},
                "street": {"type": "string"},
            },
            "required": ["street"],
        }

    def test_default_values(self):
        schema = generate(Address, preset=OptionPreset.FULL_DOCUMENTATION)
        assert schema["properties"]["city"] == {"type": "string", "default": "Paris"}
        assert schema["properties"]["street"] == {"type": "string"}

    def test_without_schema_indicator(self):
        schema = generate(Address, without_options=[Option.SCHEMA_VERSION_INDICATOR])
        assert "$schema" not in schema

    def test_primitive_main_type(self):
        assert generate(int, without_options=[Option.SCHEMA_VERSION_INDICATOR]) == {"type": "integer"}

    def test_array_main_type(self):
        schema = generate(list, int, without_options=[Option.SCHEMA_VERSION_INDICATOR])
        assert schema == {"type": "array", "items": {"type": "integer"}}

    def test_unions(self):
        properties = generate(Mixed)["properties"]
        assert properties["choice"] == {"anyOf": [{"type": "integer"}, {"type": "string"}]}
        assert properties["maybe"] == {"anyOf": [{"type": "null"}, {"type": "integer"}, {"type": "string"}]}
        assert properties["kind"] == {"type": "string", "const": "a"}

    def test_mappings(self):
        properties = generate(Scores)["properties"]
        assert properties["values"] == {"type": "object", "additionalProperties": {"type": "integer"}}
        assert properties["anything"] == {"type": "object"}

    def test_mapping_values_option_disabled(self):
        schema = generate(Scores, without_options=[Option.MAP_VALUES_AS_ADDITIONAL_PROPERTIES])
        assert schema["properties"]["values"] == {"type": "object"}


class TestDefinitions:
    """Shared, inlined and nullable definitions"""

    def test_single_use_is_inlined(self):
        schema = generate(Invoice)
        assert "$defs" not in schema
        assert schema["properties"]["billing"] == {
            "type": "object",
            "properties": {"city": {"type": "string"}, "street": {"type": "string"}},
            "required": ["street"],
        }

    def test_shared_definition_is_referenced(self):
        schema = generate(Order)
        assert schema["properties"]["billing"] == {"$ref": "#/$defs/Address"}
        assert schema["properties"]["shipping"] == {"$ref": "#/$defs/Address"}
        assert schema["$defs"]["Address"]["required"] == ["street"]
        assert schema["required"] == ["billing", "shipping"]

    def test_definitions_for_all_objects(self):
        schema = generate(Invoice, with_options=[Option.DEFINITIONS_FOR_ALL_OBJECTS])
        assert schema["properties"]["billing"] == {"$ref": "#/$defs/Address"}
        assert set(schema["$defs"]) == {"Address"}

    def test_definition_for_main_schema(self):
        schema = generate(Invoice, with_options=[Option.DEFINITION_FOR_MAIN_SCHEMA])
        assert schema["$ref"] == "#/$defs/Invoice"
        assert schema["$defs"]["Invoice"]["properties"]["billing"]["type"] == "object"

    def test_inline_all_schemas(self):
        schema = generate(
            Order,
            with_options=[
                Option.INLINE_ALL_SCHEMAS,
                Option.DEFINITIONS_FOR_ALL_OBJECTS,
                Option.DEFINITION_FOR_MAIN_SCHEMA,
            ],
        )
        assert "$defs" not in schema
        assert "$ref" not in schema
        assert schema["properties"]["billing"]["properties"]["street"] == {"type": "string"}
        assert schema["properties"]["shipping"] == schema["properties"]["billing"]

    def test_single_nullable_reference_is_inlined(self):
        schema = generate(Profile)
        home = schema["properties"]["home"]
        assert home["type"] == ["object", "null"]
        assert home["required"] == ["street"]

    def test_nullable_variant_definition(self):
        schema = generate(Contact)
        assert schema["properties"]["home"] == {"$ref": "#/$defs/Address-nullable"}
        assert schema["properties"]["work"] == {"$ref": "#/$defs/Address-nullable"}
        assert schema["$defs"]["Address-nullable"] == {"anyOf": [{"type": "null"}, {"$ref": "#/$defs/Address"}]}
        assert list(schema["$defs"]) == ["Address", "Address-nullable"]

    def test_inline_nullable_schemas(self):
        schema = generate(Contact, with_options=[Option.INLINE_NULLABLE_SCHEMAS])
        assert schema["properties"]["home"] == {"anyOf": [{"type": "null"}, {"$ref": "#/$defs/Address"}]}
        assert set(schema["$defs"]) == {"Address"}

    def test_duplicate_names(self):
        schema = generate(Catalog, with_options=[Option.DEFINITIONS_FOR_ALL_OBJECTS])
        assert schema["properties"]["first"] == {"$ref": "#/$defs/Item"}
        assert schema["properties"]["second"] == {"$ref": "#/$defs/Item-1"}
        assert set(schema["$defs"]["Item"]["properties"]) == {"a"}
        assert set(schema["$defs"]["Item-1"]["properties"]) == {"b"}

    def test_root_does_not_take_a_name(self):
        """Test that a definition sharing the main type's name keeps the plain name"""
        schema = generate(ItemPair)
        assert set(schema["$defs"]) == {"Item"}
        assert schema["properties"]["first"] == {"$ref": "#/$defs/Item"}
        assert schema["properties"]["second"] == {"$ref": "#/$defs/Item"}


class TestCircularReferences:
    """Self references and cycles"""

    def test_self_reference_points_to_root(self):
        schema = generate(TreeNode)
        assert schema["properties"]["children"] == {"type": "array", "items": {"$ref": "#"}}
        assert schema["required"] == ["value"]

    def test_self_reference_with_main_definition(self):
        schema = generate(TreeNode, with_options=[Option.DEFINITION_FOR_MAIN_SCHEMA])
        assert schema["$ref"] == "#/$defs/TreeNode"
        definition = schema["$defs"]["TreeNode"]
        assert definition["properties"]["children"]["items"] == {"$ref": "#/$defs/TreeNode"}
        assert definition["properties"]["value"] == {"type": "integer"}

    def test_nested_cycle_gets_a_definition(self):
        schema = generate(Forest)
        assert schema["properties"]["root"] == {"$ref": "#/$defs/TreeNode"}
        assert schema["$defs"]["TreeNode"]["properties"]["children"]["items"] == {"$ref": "#/$defs/TreeNode"}

    def test_inline_all_fails_on_cycle(self):
        with pytest.raises(SchemaGenerationError, match="circular"):
            generate(Forest, with_options=[Option.INLINE_ALL_SCHEMAS])


class TestGenerics:
    """Generic types and their type arguments"""

    def test_type_parameters(self):
        schema = generate(Box, int)
        assert schema["properties"]["content"] == {"type": "integer"}

    def test_binding_through_inheritance(self):
        schema = generate(IntBox)
        assert schema["properties"]["content"] == {"type": "integer"}
        assert schema["properties"]["label"] == {"type": "string"}
        assert schema["required"] == ["content", "label"]

    def test_parameterized_definitions_are_distinct(self):
        schema = generate(Shelf)
        assert schema["properties"]["small"] == {"$ref": "#/$defs/Box(int)"}
        assert schema["properties"]["other"] == {"$ref": "#/$defs/Box(int)"}
        assert schema["properties"]["large"]["properties"]["content"] == {"type": "string"}
        assert set(schema["$defs"]) == {"Box(int)"}

    def test_plain_definition_keys(self):
        schema = generate(Shelf, with_options=[Option.PLAIN_DEFINITION_KEYS])
        assert schema["properties"]["small"] == {"$ref": "#/$defs/Box_int_"}

    def test_unbound_type_variable(self):
        with pytest.raises(TypeResolutionError):
            generate(Box)

    def test_wrong_number_of_type_parameters(self):
        with pytest.raises(TypeResolutionError):
            generate(Box, int, str)


class TestSchemaVersions:
    """Dialect specific keywords"""

    @pytest.mark.parametrize(
        "version, keyword",
        [
            (SchemaVersion.DRAFT_4, "definitions"),
            (SchemaVersion.DRAFT_6, "definitions"),
            (SchemaVersion.DRAFT_7, "definitions"),
            (SchemaVersion.DRAFT_2019_09, "$defs"),
            (SchemaVersion.DRAFT_2020_12, "$defs"),
        ],
    )
    def test_definitions_keyword(self, version, keyword):
        schema = generate(Order, version=version)
        assert schema["$schema"] == version.identifier
        assert schema["properties"]["billing"] == {"$ref": f"#/{keyword}/Address"}
        assert set(schema[keyword]) == {"Address"}

    def test_draft_4_has_no_const(self):
        schema = generate(Mixed, version=SchemaVersion.DRAFT_4)
        assert schema["properties"]["kind"] == {"type": "string", "enum": ["a"]}

    def test_enum_keyword_for_single_values(self):
        schema = generate(Mixed, with_options=[Option.ENUM_KEYWORD_FOR_SINGLE_VALUES])
        assert schema["properties"]["kind"] == {"type": "string", "enum": ["a"]}

    @pytest.mark.parametrize(
        "version, id_keyword, has_anchor",
        [
            (SchemaVersion.DRAFT_4, "id", False),
            (SchemaVersion.DRAFT_7, "$id", False),
            (SchemaVersion.DRAFT_2019_09, "$id", True),
            (SchemaVersion.DRAFT_2020_12, "$id", True),
        ],
    )
    def test_id_and_anchor(self, version, id_keyword, has_anchor):
        builder = SchemaGeneratorConfigBuilder(version, OptionPreset.PLAIN_JSON)
        builder.for_types_in_general().with_id_resolver(lambda scope: "urn:address")
        builder.for_types_in_general().with_anchor_resolver(lambda scope: "address")
        schema = SchemaGenerator(builder.build()).generate_schema(Address)
        assert schema[id_keyword] == "urn:address"
        assert ("$anchor" in schema) is has_anchor

    def test_identifiers(self):
        assert SchemaVersion.DRAFT_7.identifier == "http://json-schema.org/draft-07/schema#"
        assert SchemaVersion.DRAFT_2019_09.identifier == "https://json-schema.org/draft/2019-09/schema"


class TestMultipleSchemas:
    """Several schemas sharing one definitions container"""

    def test_collect_definitions(self):
        config = SchemaGeneratorConfigBuilder(SchemaVersion.DRAFT_2020_12, OptionPreset.PLAIN_JSON).build()
        builder = SchemaGenerator(config).build_multiple_schema_definitions()
        order = builder.create_schema_reference(Order)
        invoice = builder.create_schema_reference(Invoice)
        definitions = builder.collect_definitions("components/schemas")

        assert order["type"] == "object"
        assert "$ref" not in order
        assert order["properties"]["billing"] == {"$ref": "#/components/schemas/Address"}
        assert invoice["properties"]["billing"] == {"$ref": "#/components/schemas/Address"}
        assert set(definitions) == {"Address"}


if __name__ == "__main__":
    pytest.main([__file__])
