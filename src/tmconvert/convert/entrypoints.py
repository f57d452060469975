"""
Provides the entry points for converting Turing machine tables between the
Infinite (two-way tape) and Sipser (one-way tape) models.

Functions:
    convert_machine: Converts an in-memory Machine to the other tape model.
    convert_file: Loads a machine file, converts it, and writes the result.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from loguru import logger

from tmconvert.convert.converters import MachineConverter
from tmconvert.formats import (
    check_input_path,
    load_machine,
    output_path_for,
    save_machine,
)
from tmconvert.machine import Machine
from tmconvert.settings import ConversionSettings, settings

__all__ = ["convert_file", "convert_machine"]


def convert_machine(
    machine: Machine,
    algorithm: str = "auto",
    extra_symbols: Iterable[str] = (),
    **kwargs: Any,
) -> Machine:
    """
    Convert a machine to the other tape model.

    ::
        # Infinite -> Sipser (fold construction)
        sipser_machine = convert_machine(infinite_machine)
        # Sipser -> Infinite, forcing the converter and choosing the marker
        infinite_machine = convert_machine(
            sipser_machine, algorithm="sipser", boundary_marker="@"
        )

    :param machine: The machine to convert, left unchanged
    :param algorithm: The source model name or "auto" to use the machine's tag
    :param extra_symbols: Input symbols the table never names
    :param kwargs: Converter specific options, ``boundary_marker`` for Sipser
        machines and ``write_legend`` for Infinite machines
    :return: The equivalent machine tagged with the other model
    """
    converter_cls = MachineConverter.resolve_converter(algorithm, machine)
    converter = converter_cls(machine, extra_symbols=extra_symbols, **kwargs)

    return converter()


def convert_file(
    input_path: str | os.PathLike,
    output_path: str | os.PathLike | None = None,
    extra_symbols: Iterable[str] | None = None,
    compact: bool | None = None,
    conversion: ConversionSettings | None = None,
) -> tuple[Path, Machine]:
    """
    Convert a machine file and write the result next to it.

    The input suffix is checked before the file is opened, and the output file
    is only written once the whole conversion succeeded.

    :param input_path: Path to the machine file, must end with the input suffix
    :param output_path: Destination path, defaults to the input path with the
        output suffix
    :param extra_symbols: Input symbols the table never names, defaults to
        the configured extra symbols
    :param compact: True to write ``*`` for unchanged symbols and states,
        defaults to the configured value
    :param conversion: Conversion settings, defaults to the global settings
    :return: The output path and the converted machine
    :raises BadInputExtension: If the input path has the wrong suffix
    :raises UnknownModelTag: If the file header is not a model marker
    :raises MalformedTransition: If a transition line is malformed
    """
    conversion = conversion or settings.conversion
    source_path = check_input_path(input_path, conversion.input_suffix)
    destination = (
        Path(output_path)
        if output_path is not None
        else output_path_for(
            source_path, conversion.input_suffix, conversion.output_suffix
        )
    )
    if extra_symbols is None:
        extra_symbols = conversion.extra_symbols
    if compact is None:
        compact = conversion.compact_output

    logger.info(f"Loading machine from {source_path}")
    machine = load_machine(
        source_path, blank=conversion.blank, halt_prefix=conversion.halt_prefix
    )
    converter_cls = MachineConverter.resolve_converter("auto", machine)
    converted = convert_machine(
        machine,
        algorithm="auto",
        extra_symbols=extra_symbols,
        **converter_cls.options_from_settings(conversion),
    )
    save_machine(converted, destination, compact=compact)
    logger.success(f"Saved {converted.model.display_name} machine to: {destination}")

    return destination, converted
