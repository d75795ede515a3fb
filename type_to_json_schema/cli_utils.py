"""
CLI utilities for command line reconstruction, target lookup and logging.
"""

import importlib
import sys
from pathlib import Path

import click
from loguru import logger


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct command line from current Click context using introspection.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string
    """
    # Try to get current Click context for parameter values
    try:
        ctx = click.get_current_context()
        cli_args = ctx.params
    except RuntimeError:
        # No active context, return basic command
        return "type_to_json_schema"

    if not cli_args:
        return "type_to_json_schema"

    cmd_parts = ["type_to_json_schema"]
    arguments = []
    options = []

    for param in click_command.params:
        param_name = param.name
        if param_name not in cli_args:
            continue

        value = cli_args[param_name]
        if not value:
            continue
        if isinstance(param, click.Option) and value == param.default:
            continue

        values = value if isinstance(value, (list, tuple)) else [value]
        formatted_values = []
        for item in values:
            # File paths are shown by name only
            if isinstance(item, Path) or (isinstance(item, str) and Path(item).is_absolute()):
                formatted_values.append(Path(item).name)
            else:
                formatted_values.append(str(item))

        if isinstance(param, click.Argument):
            arguments.extend(formatted_values)
        elif isinstance(param, click.Option):
            flag = param.opts[0] if param.opts else f"--{param_name}"
            if param.is_flag:
                options.append(flag)
            else:
                for formatted_value in formatted_values:
                    options.extend([flag, formatted_value])

    cmd_parts.extend(arguments)
    cmd_parts.extend(options)

    return " ".join(cmd_parts)


def import_target(target: str) -> object:
    """
    Import the object named by a "package.module:QualifiedName" reference.

    Args:
        target: Module path and attribute path separated by a colon

    Returns:
        The referenced object

    Raises:
        click.BadParameter: If the reference is malformed or cannot be imported
    """
    module_name, separator, qualified_name = target.partition(":")
    if not separator or not module_name or not qualified_name:
        raise click.BadParameter(f"expected 'module:QualifiedName', got '{target}'", param_hint="TARGET")

    # Allow targets defined in modules of the current directory
    if "" not in sys.path and str(Path.cwd()) not in sys.path:
        sys.path.insert(0, str(Path.cwd()))

    try:
        obj = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"cannot import module '{module_name}': {e}", param_hint="TARGET") from e
    for attribute in qualified_name.split("."):
        try:
            obj = getattr(obj, attribute)
        except AttributeError:
            raise click.BadParameter(
                f"module '{module_name}' has no attribute '{qualified_name}'", param_hint="TARGET"
            ) from None
    return obj


def configure_logging(verbose: bool) -> None:
    """Send warnings (or, when verbose, debug output) to stderr."""
    logger.enable("type_to_json_schema")
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        format="{level: <8} | {name} | {message}",
        colorize=False,
    )
