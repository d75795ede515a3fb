import json
from pathlib import Path

import click
from loguru import logger

from .cli_utils import configure_logging, import_target, reconstruct_command_line
from .exceptions import ConfigurationError, SchemaGenerationError
from .generator import Option, OptionPreset, SchemaGenerator, SchemaVersion
from .modules import AnnotatedMetadataModule
from .settings import GeneratorSettings, OutputMode
from .writer import SchemaWriter, serialize_schema

_VERSIONS = [version.value for version in SchemaVersion]
_PRESETS = [preset.value for preset in OptionPreset]
_OPTIONS = [option.value for option in Option]


def _load_settings(config: str | None) -> GeneratorSettings:
    if config is None:
        return GeneratorSettings()
    try:
        with open(config) as f:
            return GeneratorSettings.from_dict(json.load(f))
    except (ConfigurationError, json.JSONDecodeError) as e:
        raise click.BadParameter(str(e), param_hint="--config") from e


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--schema-version", "-s", default=None, type=click.Choice(_VERSIONS), help="JSON Schema dialect")
@click.option("--preset", "-p", default=None, type=click.Choice(_PRESETS), help="Initial set of enabled options")
@click.option("--with-option", "-w", multiple=True, type=click.Choice(_OPTIONS), help="Enable an option")
@click.option("--without-option", "-x", multiple=True, type=click.Choice(_OPTIONS), help="Disable an option")
@click.option(
    "--type-parameter",
    "-t",
    multiple=True,
    type=str,
    help="Type argument for a generic target, as module:QualifiedName",
)
@click.option("--indent", "-i", default=None, type=int, help="Indentation of the JSON output")
@click.option("--force", "-f", is_flag=True, default=False, help="Overwrite an existing output file")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log traversal decisions to stderr")
@click.argument("target", type=str)
@click.argument("output", default=None, required=False, type=click.Path(resolve_path=True))
def type_to_json_schema(
    config, schema_version, preset, with_option, without_option, type_parameter, indent, force, verbose, target, output
):
    """Generate the JSON Schema of TARGET (module:QualifiedName) and write it to OUTPUT or stdout."""
    configure_logging(verbose)
    logger.debug("Running: {}", reconstruct_command_line(type_to_json_schema))

    settings = _load_settings(config)

    # Command line flags override the config file
    if schema_version is not None:
        settings.schema_version = SchemaVersion(schema_version)
    if preset is not None:
        settings.preset = OptionPreset(preset)
    settings.with_options.extend(Option(name) for name in with_option)
    settings.without_options.extend(Option(name) for name in without_option)
    if indent is not None:
        settings.output.indent = indent
    if force:
        settings.output.mode = OutputMode.FORCE

    main_type = import_target(target)
    type_arguments = [import_target(argument) for argument in type_parameter]

    builder = settings.create_config_builder()
    builder.with_module(AnnotatedMetadataModule())
    generator = SchemaGenerator(builder.build())
    try:
        schema = generator.generate_schema(main_type, *type_arguments)
        if output is None:
            click.echo(serialize_schema(schema, settings.output.indent), nl=False)
        else:
            SchemaWriter(settings.output).write(Path(output), schema)
    except SchemaGenerationError as e:
        raise click.ClickException(str(e)) from e
