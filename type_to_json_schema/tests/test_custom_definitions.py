#!/usr/bin/env python3

from dataclasses import dataclass
from typing import Optional

import pytest

from type_to_json_schema import (
    OptionPreset,
    SchemaGenerator,
    SchemaGeneratorConfigBuilder,
    SchemaVersion,
    TypeResolutionError,
)
from type_to_json_schema.generator import (
    AttributeInclusion,
    CustomDefinition,
    CustomDefinitionProvider,
    CustomPropertyDefinition,
    DefinitionType,
    StatefulConfig,
)


@dataclass
class Money:
    amount: int
    currency: str


@dataclass
class Invoice:
    total: Money
    note: str = ""


@dataclass
class Ledger:
    debit: Money
    credit: Money
    balance: Optional[Money] = None


class MoneyAsString(CustomDefinitionProvider):
    def __init__(self, definition_type=DefinitionType.STANDARD, attribute_inclusion=AttributeInclusion.YES):
        self.definition_type = definition_type
        self.attribute_inclusion = attribute_inclusion

    def provide_custom_schema_definition(self, type_, context):
        if type_.erased_type is not Money:
            return None
        schema = {"type": "string", "pattern": "^[0-9]+ [A-Z]{3}$"}
        return CustomDefinition(schema, self.definition_type, self.attribute_inclusion)


class CountingDescriptionProvider(CustomDefinitionProvider, StatefulConfig):
    """Adjusts the standard definition of Money, counting calls within one run"""

    def __init__(self):
        self.seen = []
        self.resets = 0

    def provide_custom_schema_definition(self, type_, context):
        if type_.erased_type is not Money:
            return None
        self.seen.append(type_)
        definition = context.create_standard_definition(type_, self)
        definition["description"] = f"call {len(self.seen)}"
        return CustomDefinition(definition)

    def reset_after_schema_generation_finished(self):
        self.seen = []
        self.resets += 1


class MainTypeTracker(CustomDefinitionProvider, StatefulConfig):
    """Treats the first type of a run as its top-level type"""

    def __init__(self):
        self.main_type = None
        self.outcomes = []

    def provide_custom_schema_definition(self, type_, context):
        if self.main_type is None:
            self.main_type = type_
        self.outcomes.append((type_.erased_type.__name__, type_ == self.main_type, type_ == context.main_type))
        return None

    def reset_after_schema_generation_finished(self):
        self.main_type = None


def create_generator(*providers, version=SchemaVersion.DRAFT_2020_12, type_description=None):
    builder = SchemaGeneratorConfigBuilder(version, OptionPreset.PLAIN_JSON)
    for provider in providers:
        builder.for_types_in_general().with_custom_definition_provider(provider)
    if type_description is not None:
        builder.for_types_in_general().with_description_resolver(type_description)
    return SchemaGenerator(builder.build())


class TestCustomDefinitions:
    """Test cases for provider supplied definitions"""

    def test_standard_definition_is_inlined_once(self):
        """Test that a standard custom definition follows the usual inlining rules"""
        schema = create_generator(MoneyAsString()).generate_schema(Invoice)
        assert schema["properties"]["total"] == {"type": "string", "pattern": "^[0-9]+ [A-Z]{3}$"}
        assert "$defs" not in schema

    def test_standard_definition_is_shared(self):
        schema = create_generator(MoneyAsString()).generate_schema(Ledger)
        assert schema["properties"]["debit"] == {"$ref": "#/$defs/Money"}
        assert schema["properties"]["credit"] == {"$ref": "#/$defs/Money"}
        assert schema["$defs"]["Money"]["type"] == "string"

    def test_always_ref(self):
        schema = create_generator(MoneyAsString(DefinitionType.ALWAYS_REF)).generate_schema(Invoice)
        assert schema["properties"]["total"] == {"$ref": "#/$defs/Money"}
        assert set(schema["$defs"]) == {"Money"}

    def test_always_ref_nullable_variant(self):
        schema = create_generator(MoneyAsString(DefinitionType.ALWAYS_REF)).generate_schema(Ledger)
        assert schema["properties"]["balance"] == {"$ref": "#/$defs/Money-nullable"}
        assert schema["$defs"]["Money-nullable"] == {"anyOf": [{"type": "null"}, {"$ref": "#/$defs/Money"}]}

    def test_inline_definition(self):
        schema = create_generator(MoneyAsString(DefinitionType.INLINE)).generate_schema(Ledger)
        assert "$defs" not in schema
        assert schema["properties"]["debit"]["pattern"] == "^[0-9]+ [A-Z]{3}$"
        assert schema["properties"]["balance"]["type"] == ["string", "null"]

    def test_attributes_are_merged(self):
        generator = create_generator(MoneyAsString(), type_description=lambda scope: "Money amount")
        schema = generator.generate_schema(Invoice)
        assert schema["properties"]["total"]["description"] == "Money amount"

    def test_attributes_are_skipped(self):
        provider = MoneyAsString(attribute_inclusion=AttributeInclusion.NO)
        generator = create_generator(provider, type_description=lambda scope: "Money amount")
        schema = generator.generate_schema(Invoice)
        assert "description" not in schema["properties"]["total"]

    def test_plain_callable_provider(self):
        def provider(type_, context):
            if type_.erased_type is str:
                return CustomDefinition({"type": "string", "minLength": 1}, DefinitionType.INLINE)
            return None

        schema = create_generator(provider).generate_schema(Invoice)
        assert schema["properties"]["note"] == {"type": "string", "minLength": 1}
        assert schema["properties"]["total"]["properties"]["currency"] == {"type": "string", "minLength": 1}

    def test_later_provider_wins(self):
        first = MoneyAsString(DefinitionType.INLINE)

        def second(type_, context):
            return CustomDefinition({"type": "integer"}, DefinitionType.INLINE) if type_.erased_type is Money else None

        schema = create_generator(first, second).generate_schema(Invoice)
        assert schema["properties"]["total"] == {"type": "integer"}


class TestStandardDefinitionAdjustment:
    """Test cases for providers building on the standard definition"""

    def test_adjusted_definition(self):
        provider = CountingDescriptionProvider()
        schema = create_generator(provider).generate_schema(Invoice)
        total = schema["properties"]["total"]
        assert total["description"] == "call 1"
        assert total["type"] == "object"
        assert total["required"] == ["amount", "currency"]

    def test_state_is_reset_after_each_run(self):
        provider = CountingDescriptionProvider()
        generator = create_generator(provider)
        first = generator.generate_schema(Invoice)
        second = generator.generate_schema(Invoice)
        assert first["properties"]["total"]["description"] == "call 1"
        assert second["properties"]["total"]["description"] == "call 1"
        assert provider.resets == 2
        assert provider.seen == []

    def test_top_level_type_is_tracked_per_run(self):
        """Test that a second run with another target sees that target as top-level"""
        tracker = MainTypeTracker()
        generator = create_generator(tracker)
        generator.generate_schema(Invoice)
        first_run = list(tracker.outcomes)
        tracker.outcomes.clear()
        generator.generate_schema(Ledger)
        second_run = tracker.outcomes
        assert first_run[0] == ("Invoice", True, True)
        assert second_run[0] == ("Ledger", True, True)
        assert [name for name, is_main, _ in second_run if is_main] == ["Ledger"]
        assert ("Money", False, False) in second_run
        assert all(is_main == is_context_main for _, is_main, is_context_main in first_run + second_run)

    def test_state_is_reset_after_failure(self):
        provider = CountingDescriptionProvider()
        generator = create_generator(provider)
        with pytest.raises(TypeResolutionError):
            generator.generate_schema("Invoice")
        assert provider.resets == 1


class TestCustomPropertyDefinitions:
    """Test cases for member specific definitions"""

    def test_property_definition(self):
        builder = SchemaGeneratorConfigBuilder(SchemaVersion.DRAFT_2020_12, OptionPreset.PLAIN_JSON)

        def provider(member, context):
            if member.name == "note":
                return CustomPropertyDefinition({"type": "string", "maxLength": 80})
            return None

        builder.for_fields().with_custom_definition_provider(provider)
        schema = SchemaGenerator(builder.build()).generate_schema(Invoice)
        assert schema["properties"]["note"] == {"type": "string", "maxLength": 80}

    def test_instance_attribute_override(self):
        builder = SchemaGeneratorConfigBuilder(SchemaVersion.DRAFT_2020_12, OptionPreset.PLAIN_JSON)

        def mark_deprecated(node, member, context):
            if member.name == "note":
                node["deprecated"] = True

        builder.for_fields().with_instance_attribute_override(mark_deprecated)
        schema = SchemaGenerator(builder.build()).generate_schema(Invoice)
        assert schema["properties"]["note"] == {"type": "string", "deprecated": True}

    def test_type_attribute_override(self):
        builder = SchemaGeneratorConfigBuilder(SchemaVersion.DRAFT_2020_12, OptionPreset.PLAIN_JSON)

        def add_title(node, scope, context):
            if scope.erased_type is Money:
                node["title"] = "Money"

        builder.for_types_in_general().with_type_attribute_override(add_title)
        schema = SchemaGenerator(builder.build()).generate_schema(Invoice)
        assert schema["properties"]["total"]["title"] == "Money"


if __name__ == "__main__":
    pytest.main([__file__])
