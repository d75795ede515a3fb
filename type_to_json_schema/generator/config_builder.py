"""
Mutable builder producing the frozen SchemaGeneratorConfig.
"""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger

from ..exceptions import ConfigurationError
from .config import SchemaGeneratorConfig
from .config_part import GeneralConfigPart, MemberConfigPart
from .keywords import SchemaVersion
from .module import Module
from .options import Option, OptionPreset


def _option_modules() -> dict[Option, Callable[[], Module]]:
    from ..modules.additional_properties import AdditionalPropertiesModule
    from ..modules.docstrings import DocstringModule
    from ..modules.fields import CamelCasePropertyNamesModule, DefaultValuesModule, ReadOnlyModule, RequiredFieldsModule

    return {
        Option.REQUIRED_FIELDS_WITHOUT_DEFAULT: RequiredFieldsModule,
        Option.DEFAULT_VALUES_FROM_FIELDS: DefaultValuesModule,
        Option.DESCRIPTIONS_FROM_DOCSTRINGS: DocstringModule,
        Option.READ_ONLY_PROPERTIES: ReadOnlyModule,
        Option.CAMEL_CASE_PROPERTY_NAMES: CamelCasePropertyNamesModule,
        Option.MAP_VALUES_AS_ADDITIONAL_PROPERTIES: AdditionalPropertiesModule.for_mapping_values,
        Option.FORBIDDEN_ADDITIONAL_PROPERTIES_BY_DEFAULT: AdditionalPropertiesModule.forbidden_additional_properties_by_default,
    }


class SchemaGeneratorConfigBuilder:
    """Collects the dialect, options, modules and individual resolvers.

    Resolvers registered directly by the application (or through
    with_module()) always take precedence over the ones contributed by the
    enabled options, and among each other the later registration wins.

    Example:
        builder = SchemaGeneratorConfigBuilder(SchemaVersion.DRAFT_7, OptionPreset.PLAIN_JSON)
        builder.with_option(Option.FORBIDDEN_ADDITIONAL_PROPERTIES_BY_DEFAULT)
        builder.for_fields().with_description_resolver(lambda field: field.get_annotation(str))
        config = builder.build()
    """

    def __init__(
        self,
        schema_version: SchemaVersion = SchemaVersion.DRAFT_2020_12,
        preset: OptionPreset = OptionPreset.FULL_DOCUMENTATION,
    ):
        self._schema_version = SchemaVersion(schema_version)
        self._preset = OptionPreset(preset)
        self._options: dict[Option, bool] = {}
        self._type_part = GeneralConfigPart()
        self._field_part = MemberConfigPart()
        self._method_part = MemberConfigPart()
        self._config: SchemaGeneratorConfig | None = None

    @property
    def schema_version(self) -> SchemaVersion:
        return self._schema_version

    def _check_not_built(self) -> None:
        if self._config is not None:
            raise ConfigurationError("The configuration has already been built")

    def with_option(self, *options: Option):
        self._check_not_built()
        for option in options:
            self._options[Option(option)] = True
        return self

    def without_option(self, *options: Option):
        self._check_not_built()
        for option in options:
            self._options[Option(option)] = False
        return self

    def with_module(self, module: Module):
        """Apply a module; its resolvers rank like the application's own."""
        self._check_not_built()
        module.apply_to_config_builder(self)
        return self

    def for_fields(self) -> MemberConfigPart:
        return self._field_part

    def for_methods(self) -> MemberConfigPart:
        return self._method_part

    def for_types_in_general(self) -> GeneralConfigPart:
        return self._type_part

    def is_enabled(self, option: Option) -> bool:
        """Whether the option is set, explicitly or by the preset (ignoring overrides)."""
        return self._options.get(option, self._preset.is_enabled_by_default(option))

    def enabled_options(self) -> frozenset[Option]:
        enabled = {option for option in Option if self.is_enabled(option)}
        for option in list(enabled):
            enabled -= option.overridden_options
        return frozenset(enabled)

    def _default_modules(self, options: frozenset[Option]) -> list[Module]:
        from ..modules.enums import EnumModule
        from ..modules.exclusions import MemberExclusionModule
        from ..modules.simple_types import SimpleTypeModule

        modules: list[Module] = [
            SimpleTypeModule(additional_fixed_types=Option.ADDITIONAL_FIXED_TYPES in options),
            EnumModule(from_names=Option.ENUMS_FROM_NAMES in options),
            MemberExclusionModule(
                include_nonpublic=Option.NONPUBLIC_FIELDS in options,
                include_static=Option.STATIC_FIELDS in options,
                include_accessors=Option.ACCESSOR_PROPERTIES in options,
            ),
        ]
        for option, factory in _option_modules().items():
            if option in options:
                modules.append(factory())
        return modules

    def build(self) -> SchemaGeneratorConfig:
        """Freeze the configuration; later calls return the same instance."""
        if self._config is not None:
            return self._config
        options = self.enabled_options()
        parts = (self._type_part, self._field_part, self._method_part)
        for part in parts:
            part.set_default_registration(True)
        try:
            for module in self._default_modules(options):
                module.apply_to_config_builder(self)
        finally:
            for part in parts:
                part.set_default_registration(False)
        logger.debug(
            "Built configuration for {} with options {}",
            self._schema_version.value,
            sorted(option.value for option in options),
        )
        self._config = SchemaGeneratorConfig(
            self._schema_version, options, self._type_part, self._field_part, self._method_part
        )
        return self._config
