"""Type to JSON Schema Generator

A Python package for generating JSON Schema documents from Python types:
dataclasses, plain annotated classes, enums, generics and typing constructs.
Supports draft-04 up to draft 2020-12 with configurable resolvers and modules.
"""

__version__ = "1.0.0"

from loguru import logger

from .exceptions import (
    ConfigurationError,
    DefinitionNamingError,
    SchemaGenerationError,
    SchemaOutputError,
    TypeResolutionError,
)
from .generator import (
    Option,
    OptionPreset,
    SchemaGenerator,
    SchemaGeneratorConfig,
    SchemaGeneratorConfigBuilder,
    SchemaVersion,
)
from .resolution import TypeContext
from .settings import GeneratorSettings, OutputConfig, OutputMode
from .writer import SchemaWriter

# Library logging stays silent until an application enables it
logger.disable(__name__)

__all__ = [
    "SchemaGenerator",
    "SchemaGeneratorConfig",
    "SchemaGeneratorConfigBuilder",
    "SchemaVersion",
    "Option",
    "OptionPreset",
    "TypeContext",
    "GeneratorSettings",
    "OutputConfig",
    "OutputMode",
    "SchemaWriter",
    "SchemaGenerationError",
    "TypeResolutionError",
    "DefinitionNamingError",
    "ConfigurationError",
    "SchemaOutputError",
]
