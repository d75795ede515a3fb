#!/usr/bin/env python3

from abc import ABC, abstractmethod
from dataclasses import dataclass

import pytest

from type_to_json_schema import Option, OptionPreset, SchemaGenerator, SchemaGeneratorConfigBuilder, SchemaVersion
from type_to_json_schema.modules import SubclassLookupResolver


@dataclass
class Shape:
    name: str


@dataclass
class Circle(Shape):
    radius: float


@dataclass
class Square(Shape):
    side: float


@dataclass
class Drawing:
    main: Shape
    shapes: list[Shape]


class Animal(ABC):
    @abstractmethod
    def sound(self) -> str:
        pass


@dataclass
class Dog(Animal):
    breed: str

    def sound(self) -> str:
        return "woof"


@dataclass
class Kennel:
    resident: Animal


def generate(main_type, *resolvers, with_options=()):
    builder = SchemaGeneratorConfigBuilder(SchemaVersion.DRAFT_2020_12, OptionPreset.PLAIN_JSON)
    builder.with_option(*with_options)
    for resolver in resolvers:
        builder.for_types_in_general().with_subtype_resolver(resolver)
    return SchemaGenerator(builder.build()).generate_schema(main_type)


class TestSubtypes:
    """Test cases for polymorphic types"""

    def test_member_alternatives(self):
        """Test that a member declared with a base class lists its subclasses"""
        schema = generate(Drawing, SubclassLookupResolver(Shape))
        alternatives = {"anyOf": [{"$ref": "#/$defs/Circle"}, {"$ref": "#/$defs/Square"}]}
        assert schema["properties"]["main"] == alternatives
        assert schema["properties"]["shapes"] == {"type": "array", "items": alternatives}
        assert set(schema["$defs"]) == {"Circle", "Square"}
        assert schema["$defs"]["Circle"]["properties"]["radius"] == {"type": "number"}
        assert schema["$defs"]["Circle"]["required"] == ["name", "radius"]

    def test_main_type_alternatives(self):
        schema = generate(Shape, SubclassLookupResolver(Shape))
        circle, square = schema["anyOf"]
        assert set(circle["properties"]) == {"name", "radius"}
        assert set(square["properties"]) == {"name", "side"}

    def test_one_of(self):
        schema = generate(Shape, SubclassLookupResolver(Shape), with_options=[Option.SUBTYPES_AS_ONE_OF])
        assert len(schema["oneOf"]) == 2
        assert "anyOf" not in schema

    def test_single_subtype_replaces_declared_type(self):
        """Test that a lone subtype replaces the declared type"""
        schema = generate(Kennel, SubclassLookupResolver())
        assert schema["properties"]["resident"] == {
            "type": "object",
            "properties": {"breed": {"type": "string"}},
            "required": ["breed"],
        }

    def test_abstract_subclasses_are_skipped(self):
        @dataclass
        class Base:
            id: int

        class Partial(Base, ABC):
            @abstractmethod
            def run(self) -> None:
                pass

        @dataclass
        class Concrete(Partial):
            extra: str = ""

            def run(self) -> None:
                pass

        resolver = SubclassLookupResolver(Base)
        config = SchemaGeneratorConfigBuilder(SchemaVersion.DRAFT_2020_12, OptionPreset.PLAIN_JSON).build()
        generator = SchemaGenerator(config)
        context = generator.build_multiple_schema_definitions().context
        subtypes = resolver.find_subtypes(generator.type_context.resolve(Base), context)
        assert [subtype.erased_type for subtype in subtypes] == [Concrete]

        with_abstract = SubclassLookupResolver(Base, include_abstract=True)
        subtypes = with_abstract.find_subtypes(generator.type_context.resolve(Base), context)
        assert [subtype.erased_type for subtype in subtypes] == [Partial, Concrete]

    def test_later_resolver_wins(self):
        """Test that an empty list from a later resolver marks the type as concrete"""
        schema = generate(Drawing, SubclassLookupResolver(Shape), lambda type_, context: [])
        assert schema == generate(Drawing)
        assert schema["properties"]["main"] == {"$ref": "#/$defs/Shape"}
        assert schema["$defs"]["Shape"]["properties"] == {"name": {"type": "string"}}

    def test_builtin_types_are_not_expanded(self):
        schema = generate(Drawing, SubclassLookupResolver())
        assert schema["properties"]["main"]["anyOf"][0] == {"$ref": "#/$defs/Circle"}
        assert generate(int, SubclassLookupResolver())["type"] == "integer"


if __name__ == "__main__":
    pytest.main([__file__])
