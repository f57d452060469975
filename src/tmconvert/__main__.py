"""
CLI entrypoints for tmconvert.

This module provides a command-line interface for converting Turing machine
descriptions between the Infinite (two-way tape) and Sipser (one-way tape)
models. The CLI is built using Typer.

The CLI can be accessed through the `tmconvert` command after installation, or by
running this module directly with `python -m tmconvert`.

Commands:
    convert: Convert a machine file to the other tape model
    config: Print the active settings in .env format

Usage:
    $ tmconvert --help
    $ tmconvert --version
    $ tmconvert
    $ tmconvert convert [INPUT] [OPTIONS]
"""

from importlib.metadata import version as pkg_version
from typing import Annotated, Optional

import typer  # type: ignore[import-not-found]

from tmconvert.convert import convert_file
from tmconvert.errors import MachineError
from tmconvert.logging import logger
from tmconvert.settings import print_config, settings

__all__ = ["app"]

app = typer.Typer(
    name="tmconvert",
    help="tmconvert - Convert Turing machines between Infinite and Sipser tapes",
    add_completion=False,
)


def version_callback(value: bool):
    """
    Print the installed tmconvert version and stop processing the command line.

    :param value: True when --version was passed
    """
    if value:
        typer.echo(f"tmconvert version: {pkg_version('tmconvert')}")
        raise typer.Exit


@app.callback(invoke_without_command=True)
def tmconvert(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        help="Show the installed version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
):
    """
    Convert Turing machine tables between the Infinite and Sipser tape models.

    Without a command the configured default input (example.in) is converted.

    :param ctx: The Typer context of the invocation
    :param version: Handled eagerly by `version_callback`
    """
    if ctx.invoked_subcommand is None:
        convert()


@app.command()
def convert(
    input_path: Annotated[
        Optional[str],
        typer.Argument(
            help=(
                "Machine file to convert, must end with the input suffix (.in). "
                "Defaults to the configured default input (example.in)."
            ),
            show_default=False,
        ),
    ] = None,
    output: Annotated[
        Optional[str],
        typer.Option(
            "--output",
            "-o",
            help="Output path. Defaults to the input path with the .out suffix.",
        ),
    ] = None,
    alphabet: Annotated[
        Optional[str],
        typer.Option(
            help=(
                "Extra input symbols the table never names, e.g. 'abc'. Infinite "
                "machines get setup and wildcard rows for them; for Sipser "
                "machines the boundary marker avoids them."
            ),
        ),
    ] = None,
    compact: Annotated[
        Optional[bool],
        typer.Option(
            "--compact/--no-compact",
            help="Write '*' for unchanged symbols and states.",
            show_default=False,
        ),
    ] = None,
):
    """
    Convert a machine file to the other tape model.

    The model is read from the file header: ';I' files are converted to the
    Sipser model, ';S' files to the Infinite model. The result is written with
    the header of the other model.

    \b
    Examples:
        tmconvert convert
        tmconvert convert machines/binary_add.in
        tmconvert convert machines/binary_add.in -o folded.out --compact
    """
    input_path = input_path or settings.conversion.default_input

    try:
        output_path, converted = convert_file(
            input_path,
            output_path=output,
            extra_symbols=alphabet,
            compact=compact,
        )
    except (MachineError, OSError) as err:
        logger.error(f"Conversion of {input_path} failed: {err}")
        typer.echo(f"Error: {err}", err=True)
        raise typer.Exit(code=1) from err

    typer.echo(
        f"Successfully converted to {converted.model.display_name} model.\n"
        f" Input: {input_path}\n"
        f" Output: {output_path}"
    )


@app.command()
def config():
    """
    Print the active settings in .env format.
    """
    print_config()


if __name__ == "__main__":
    app()
