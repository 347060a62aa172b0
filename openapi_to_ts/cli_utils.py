"""
CLI utilities for command line reconstruction, used in generated file headers.
"""

from pathlib import Path

import click

PROGRAM_NAME = "openapi_to_ts"


def _format_value(value) -> str:
    """Show existing paths by file name only, so headers do not leak local directories."""
    if isinstance(value, (str, Path)):
        path_obj = Path(str(value))
        if path_obj.is_absolute() and path_obj.exists():
            return path_obj.name
    return str(value)


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Rebuild the invoking command line from the active Click context.

    Arguments come first, then options that differ from their defaults.
    Boolean flags are shown by their flag name alone.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string, or the bare program name
        when no Click context is active
    """
    ctx = click.get_current_context(silent=True)
    if ctx is None or not ctx.params:
        return PROGRAM_NAME

    arguments = []
    options = []

    for param in click_command.params:
        value = ctx.params.get(param.name)
        if value is None or value is False or value == ():
            continue

        if isinstance(param, click.Argument):
            arguments.append(_format_value(value))
        elif isinstance(param, click.Option):
            if value == param.default:
                continue
            flag = param.opts[0] if param.opts else f"--{param.name}"
            if param.is_flag:
                options.append(flag)
            else:
                options.extend([flag, _format_value(value)])

    return " ".join([PROGRAM_NAME, *arguments, *options])
