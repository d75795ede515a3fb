"""
Entry point of the engine.
"""

from __future__ import annotations

from typing import Any

from ..resolution import TypeContext
from .config import SchemaGeneratorConfig
from .schema_builder import SchemaBuilder


class SchemaGenerator:
    """Generates JSON Schema documents from Python types.

    Example:
        config = SchemaGeneratorConfigBuilder(SchemaVersion.DRAFT_2020_12, OptionPreset.PLAIN_JSON).build()
        generator = SchemaGenerator(config)
        schema = generator.generate_schema(Order)
    """

    def __init__(self, config: SchemaGeneratorConfig, type_context: TypeContext | None = None):
        self._config = config
        self._type_context = type_context or TypeContext()

    @property
    def config(self) -> SchemaGeneratorConfig:
        return self._config

    @property
    def type_context(self) -> TypeContext:
        return self._type_context

    def generate_schema(self, main_target_type: Any, *type_parameters: Any) -> dict:
        """Generate the complete document for one type.

        Args:
            main_target_type: The class (or typing construct) to describe
            *type_parameters: Arguments for a generic main_target_type, e.g.
                generate_schema(Page, Order) for Page[Order]

        Returns:
            The document as a JSON compatible dict
        """
        try:
            builder = SchemaBuilder.for_single_type(
                self._config, self._type_context, main_target_type, *type_parameters
            )
            return builder.create_single_type_schema()
        finally:
            self._config.reset_after_schema_generation_finished()

    def build_multiple_schema_definitions(self) -> SchemaBuilder:
        """Builder for several schemas sharing one definitions container.

        Register each type with create_schema_reference(), then call
        collect_definitions() once.
        """
        return SchemaBuilder.for_multiple_types(self._config, self._type_context)
