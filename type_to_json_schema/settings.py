"""
File based configuration for the command line tool.

A settings file is a JSON object, e.g.:

    {
        "schema_version": "draft-07",
        "preset": "plain-json",
        "with_options": ["forbidden_additional_properties_by_default"],
        "without_options": ["schema_version_indicator"],
        "output": {"mode": "force", "indent": 4}
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .exceptions import ConfigurationError
from .generator.config_builder import SchemaGeneratorConfigBuilder
from .generator.keywords import SchemaVersion
from .generator.options import Option, OptionPreset


class OutputMode(str, Enum):
    """Behavior when the output file already exists."""

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        indent: Indentation of the written JSON
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    indent: int = 2
    atomic_write: bool = True


def _enum_value(enum_class: type[Enum], value: str, setting: str):
    try:
        return enum_class(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_class)
        raise ConfigurationError(f"Invalid {setting} '{value}', expected one of: {allowed}") from None


@dataclass
class GeneratorSettings:
    """Dialect, preset and option switches of one generator setup."""

    schema_version: SchemaVersion = SchemaVersion.DRAFT_2020_12

    preset: OptionPreset = OptionPreset.FULL_DOCUMENTATION

    # Options enabled on top of the preset
    with_options: list[Option] = field(default_factory=list)

    # Options of the preset to disable
    without_options: list[Option] = field(default_factory=list)

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> GeneratorSettings:
        """Create settings from a dictionary, rejecting unknown names."""
        settings = GeneratorSettings()
        for k, v in d.items():
            if k == "schema_version":
                settings.schema_version = _enum_value(SchemaVersion, v, "schema version")
            elif k == "preset":
                settings.preset = _enum_value(OptionPreset, v, "preset")
            elif k in ("with_options", "without_options"):
                setattr(settings, k, [_enum_value(Option, name, "option") for name in v])
            elif k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.ERROR_IF_EXISTS)
                if isinstance(mode, str):
                    mode = _enum_value(OutputMode, mode, "output mode")
                settings.output = OutputConfig(
                    mode=mode,
                    indent=v.get("indent", 2),
                    atomic_write=v.get("atomic_write", True),
                )
            else:
                raise ConfigurationError(f"Unknown setting '{k}'")
        return settings

    def to_dict(self) -> dict:
        """Convert settings to a dictionary."""
        return {
            "schema_version": self.schema_version.value,
            "preset": self.preset.value,
            "with_options": [option.value for option in self.with_options],
            "without_options": [option.value for option in self.without_options],
            "output": {
                "mode": self.output.mode.value,
                "indent": self.output.indent,
                "atomic_write": self.output.atomic_write,
            },
        }

    def create_config_builder(self) -> SchemaGeneratorConfigBuilder:
        builder = SchemaGeneratorConfigBuilder(self.schema_version, self.preset)
        builder.with_option(*self.with_options)
        builder.without_option(*self.without_options)
        return builder
