#!/usr/bin/env python3

from dataclasses import dataclass
from unittest import TestCase

import pytest

from type_to_json_schema import (
    ConfigurationError,
    GeneratorSettings,
    Option,
    OptionPreset,
    OutputMode,
    SchemaGenerator,
    SchemaGeneratorConfigBuilder,
    SchemaVersion,
)
from type_to_json_schema.generator import Module
from type_to_json_schema.generator.config_part import ResolverChain


@dataclass
class Sample:
    name: str
    size: int = 1


class DescribeNamesModule(Module):
    def __init__(self, text):
        self.text = text

    def apply_to_config_builder(self, builder):
        builder.for_fields().with_description_resolver(lambda field: self.text)


def plain_builder():
    return SchemaGeneratorConfigBuilder(SchemaVersion.DRAFT_2020_12, OptionPreset.PLAIN_JSON)


class TestResolverChain(TestCase):
    """Priority order of resolver chains"""

    def test_later_registration_wins(self):
        chain = ResolverChain("title")
        chain.append(lambda scope: "first")
        chain.append(lambda scope: "second")
        self.assertEqual(chain.resolve(None), "second")

    def test_none_falls_through(self):
        chain = ResolverChain("title")
        chain.append(lambda scope: "fallback")
        chain.append(lambda scope: None)
        self.assertEqual(chain.resolve(None), "fallback")

    def test_application_resolvers_precede_defaults(self):
        chain = ResolverChain("title")
        chain.append(lambda scope: "application")
        chain.append(lambda scope: "default", as_default=True)
        self.assertEqual([resolver(None) for resolver in chain], ["application", "default"])

    def test_frozen_chain_rejects_registration(self):
        chain = ResolverChain("title")
        chain.freeze()
        with pytest.raises(ConfigurationError):
            chain.append(lambda scope: "late")

    def test_any(self):
        chain = ResolverChain("required")
        chain.append(lambda scope: False)
        self.assertFalse(chain.any(None))
        chain.append(lambda scope: True)
        self.assertTrue(chain.any(None))


class TestConfigBuilder(TestCase):
    """Options, presets and freezing"""

    def test_preset_defaults(self):
        builder = SchemaGeneratorConfigBuilder(SchemaVersion.DRAFT_7, OptionPreset.FULL_DOCUMENTATION)
        self.assertTrue(builder.is_enabled(Option.DESCRIPTIONS_FROM_DOCSTRINGS))
        self.assertFalse(builder.is_enabled(Option.NONPUBLIC_FIELDS))

    def test_explicit_options_override_preset(self):
        builder = plain_builder()
        builder.with_option(Option.CAMEL_CASE_PROPERTY_NAMES)
        builder.without_option(Option.SCHEMA_VERSION_INDICATOR)
        config = builder.build()
        self.assertTrue(config.is_enabled(Option.CAMEL_CASE_PROPERTY_NAMES))
        self.assertFalse(config.is_enabled(Option.SCHEMA_VERSION_INDICATOR))

    def test_inline_all_overrides_definition_options(self):
        builder = plain_builder()
        builder.with_option(Option.INLINE_ALL_SCHEMAS, Option.DEFINITIONS_FOR_ALL_OBJECTS)
        self.assertTrue(builder.is_enabled(Option.DEFINITIONS_FOR_ALL_OBJECTS))
        options = builder.enabled_options()
        self.assertIn(Option.INLINE_ALL_SCHEMAS, options)
        self.assertNotIn(Option.DEFINITIONS_FOR_ALL_OBJECTS, options)

    def test_options_accept_names(self):
        builder = plain_builder()
        builder.with_option("plain_definition_keys")
        self.assertTrue(builder.is_enabled(Option.PLAIN_DEFINITION_KEYS))

    def test_build_returns_same_config(self):
        builder = plain_builder()
        self.assertIs(builder.build(), builder.build())

    def test_built_config_is_frozen(self):
        builder = plain_builder()
        builder.build()
        with pytest.raises(ConfigurationError):
            builder.with_option(Option.ENUMS_FROM_NAMES)
        with pytest.raises(ConfigurationError):
            builder.for_fields().with_title_resolver(lambda field: "late")

    def test_to_dict(self):
        builder = SchemaGeneratorConfigBuilder(SchemaVersion.DRAFT_6, OptionPreset.PLAIN_JSON)
        summary = builder.build().to_dict()
        self.assertEqual(summary["schema_version"], "draft-06")
        self.assertIn("required_fields_without_default", summary["options"])
        self.assertEqual(summary["options"], sorted(summary["options"]))

    def test_keyword_spelling(self):
        from type_to_json_schema.generator import SchemaKeyword

        self.assertEqual(SchemaKeyword.TAG_DEFINITIONS.for_version(SchemaVersion.DRAFT_7), "definitions")
        self.assertEqual(SchemaKeyword.TAG_DEFINITIONS.for_version(SchemaVersion.DRAFT_2019_09), "$defs")
        self.assertEqual(SchemaKeyword.TAG_ID.for_version(SchemaVersion.DRAFT_4), "id")


class TestResolverPrecedence(TestCase):
    """Application resolvers against option modules"""

    def test_module_registered_later_wins(self):
        builder = plain_builder()
        builder.with_module(DescribeNamesModule("first"))
        builder.with_module(DescribeNamesModule("second"))
        schema = SchemaGenerator(builder.build()).generate_schema(Sample)
        self.assertEqual(schema["properties"]["name"]["description"], "second")

    def test_application_required_check_adds_to_defaults(self):
        builder = plain_builder()
        builder.for_fields().with_required_check(lambda field: field.name == "size")
        schema = SchemaGenerator(builder.build()).generate_schema(Sample)
        self.assertEqual(schema["required"], ["name", "size"])

    def test_application_default_precedes_option_module(self):
        builder = SchemaGeneratorConfigBuilder(SchemaVersion.DRAFT_2020_12, OptionPreset.FULL_DOCUMENTATION)
        builder.for_fields().with_default_resolver(lambda field: 42 if field.name == "size" else None)
        schema = SchemaGenerator(builder.build()).generate_schema(Sample)
        self.assertEqual(schema["properties"]["size"], {"type": "integer", "default": 42})

    def test_property_sorter(self):
        builder = plain_builder()
        builder.for_types_in_general().with_property_sorter(
            lambda members: sorted(members, key=lambda m: m.name, reverse=True)
        )
        schema = SchemaGenerator(builder.build()).generate_schema(Sample)
        self.assertEqual(list(schema["properties"]), ["size", "name"])


class TestGeneratorSettings(TestCase):
    """File based settings"""

    def test_defaults(self):
        settings = GeneratorSettings()
        self.assertEqual(settings.schema_version, SchemaVersion.DRAFT_2020_12)
        self.assertEqual(settings.preset, OptionPreset.FULL_DOCUMENTATION)
        self.assertEqual(settings.output.mode, OutputMode.ERROR_IF_EXISTS)
        self.assertEqual(settings.output.indent, 2)

    def test_from_dict(self):
        settings = GeneratorSettings.from_dict(
            {
                "schema_version": "draft-07",
                "preset": "plain-json",
                "with_options": ["forbidden_additional_properties_by_default"],
                "without_options": ["schema_version_indicator"],
                "output": {"mode": "force", "indent": 4},
            }
        )
        self.assertEqual(settings.schema_version, SchemaVersion.DRAFT_7)
        self.assertEqual(settings.preset, OptionPreset.PLAIN_JSON)
        self.assertEqual(settings.with_options, [Option.FORBIDDEN_ADDITIONAL_PROPERTIES_BY_DEFAULT])
        self.assertEqual(settings.output.mode, OutputMode.FORCE)
        self.assertEqual(settings.output.indent, 4)
        self.assertTrue(settings.output.atomic_write)

    def test_round_trip(self):
        settings = GeneratorSettings(preset=OptionPreset.PYTHON_OBJECT, with_options=[Option.ENUMS_FROM_NAMES])
        self.assertEqual(GeneratorSettings.from_dict(settings.to_dict()), settings)

    def test_unknown_setting(self):
        with pytest.raises(ConfigurationError, match="Unknown setting"):
            GeneratorSettings.from_dict({"dialect": "draft-07"})

    def test_invalid_option(self):
        with pytest.raises(ConfigurationError, match="Invalid option 'no_such_option'"):
            GeneratorSettings.from_dict({"with_options": ["no_such_option"]})

    def test_create_config_builder(self):
        settings = GeneratorSettings.from_dict(
            {
                "schema_version": "draft-07",
                "preset": "plain-json",
                "with_options": ["forbidden_additional_properties_by_default"],
                "without_options": ["schema_version_indicator"],
            }
        )
        schema = SchemaGenerator(settings.create_config_builder().build()).generate_schema(Sample)
        self.assertNotIn("$schema", schema)
        self.assertIs(schema["additionalProperties"], False)


if __name__ == "__main__":
    pytest.main([__file__])
