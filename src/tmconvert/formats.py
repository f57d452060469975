"""
Reading and writing Turing machine tables in the five-field text format.

A machine file starts with a header line naming the tape model (``;I`` for
Infinite, ``;S`` for Sipser) followed by one transition per line::

    <state> <read-symbol> <write-symbol> <direction> <next-state>

Blank lines are ignored and ``;`` starts a comment anywhere after the header.
A ``*`` write symbol or next state repeats the read symbol or current state; a
``*`` read symbol matches any symbol without an explicit row.
"""

from __future__ import annotations

import os
from pathlib import Path

from loguru import logger

from tmconvert.errors import (
    BadInputExtension,
    MalformedTransition,
    UnknownModelTag,
    UnsupportedDirection,
)
from tmconvert.machine import (
    BLANK,
    HALT_PREFIX,
    WILDCARD,
    Direction,
    Machine,
    TapeModel,
    Transition,
)

__all__ = [
    "check_input_path",
    "dump_machine",
    "format_transition",
    "load_machine",
    "output_path_for",
    "parse_line",
    "parse_machine",
    "save_machine",
]

COMMENT = ";"
FIELD_COUNT = 5


def parse_line(line: str, line_number: int | None = None) -> Transition | None:
    """
    Parse a single transition line.

    :param line: The raw line, possibly carrying a trailing ``;`` comment
    :param line_number: Optional 1-based line number used in error messages
    :return: The parsed Transition, or None for blank and comment-only lines
    :raises MalformedTransition: If the line does not hold exactly five
        well-formed fields
    """
    content = line.split(COMMENT, 1)[0].strip()
    if not content:
        return None

    parts = content.split()
    if len(parts) != FIELD_COUNT:
        raise MalformedTransition(
            line.strip(),
            f"expected {FIELD_COUNT} fields, got {len(parts)}",
            line_number,
        )

    state, read, write, direction_token, next_state = parts
    for symbol in (read, write):
        if len(symbol) != 1:
            raise MalformedTransition(
                line.strip(),
                f"symbols must be a single character, got {symbol!r}",
                line_number,
            )

    try:
        direction = Direction.from_token(direction_token)
    except UnsupportedDirection as err:
        raise MalformedTransition(line.strip(), str(err), line_number) from err

    if write == WILDCARD and read != WILDCARD:
        write = read
    if next_state == WILDCARD:
        next_state = state

    return Transition(
        state=state,
        read=read,
        write=write,
        direction=direction,
        next_state=next_state,
    )


def parse_machine(
    text: str, blank: str = BLANK, halt_prefix: str = HALT_PREFIX
) -> Machine:
    """
    Parse the full contents of a machine file.

    :param text: The file contents
    :param blank: The blank symbol of the machine
    :param halt_prefix: Prefix that marks named halting states
    :return: The validated Machine
    :raises UnknownModelTag: If the first non-empty line is not a model header
    :raises MalformedTransition: If any transition line is malformed
    :raises NonDeterministicTable: If two rows share a (state, symbol) pair
    """
    lines = text.splitlines()
    header_index = next(
        (index for index, line in enumerate(lines) if line.strip()), None
    )
    if header_index is None:
        raise UnknownModelTag("")

    model = TapeModel.from_header(lines[header_index])
    transitions = []
    for index in range(header_index + 1, len(lines)):
        transition = parse_line(lines[index], line_number=index + 1)
        if transition is not None:
            transitions.append(transition)

    logger.debug(f"Parsed {len(transitions)} transitions for a {model.value} machine")

    return Machine(
        model=model,
        transitions=tuple(transitions),
        blank=blank,
        halt_prefix=halt_prefix,
    )


def format_transition(transition: Transition, compact: bool = False) -> str:
    """
    Render a transition as a five-field line.

    :param transition: The row to render
    :param compact: True to write ``*`` for an unchanged symbol or state
    :return: The rendered line without a trailing newline
    """
    write = transition.write
    next_state = transition.next_state
    if compact:
        if write == transition.read:
            write = WILDCARD
        if next_state == transition.state:
            next_state = WILDCARD

    return (
        f"{transition.state} {transition.read} {write} "
        f"{transition.direction} {next_state}"
    )


def dump_machine(machine: Machine, compact: bool = False) -> str:
    """
    Serialize a machine: header, comment lines, then one row per transition.

    :param machine: The machine to serialize
    :param compact: True to write ``*`` for unchanged symbols and states
    :return: The file contents, ending with a newline
    """
    lines = [machine.model.header]
    lines.extend(f"{COMMENT} {comment}" for comment in machine.comments)
    lines.extend(
        format_transition(transition, compact) for transition in machine.transitions
    )

    return "\n".join(lines) + "\n"


def check_input_path(path: str | os.PathLike, suffix: str = ".in") -> Path:
    """
    Validate that a path names a machine description file.

    :param path: The input path
    :param suffix: The required file suffix
    :return: The path as a Path
    :raises BadInputExtension: If the file name does not end with the suffix
    """
    input_path = Path(path)
    name = input_path.name
    if len(name) <= len(suffix) or not name.endswith(suffix):
        raise BadInputExtension(str(path), suffix)

    return input_path


def output_path_for(
    path: str | os.PathLike, input_suffix: str = ".in", output_suffix: str = ".out"
) -> Path:
    """
    Derive the output path by swapping the input suffix for the output suffix.

    :param path: A valid input path
    :param input_suffix: The suffix of the input file
    :param output_suffix: The suffix of the output file
    :return: The output path next to the input file
    """
    input_path = check_input_path(path, input_suffix)
    stem = input_path.name[: -len(input_suffix)]

    return input_path.with_name(f"{stem}{output_suffix}")


def load_machine(
    path: str | os.PathLike, blank: str = BLANK, halt_prefix: str = HALT_PREFIX
) -> Machine:
    """
    Read and parse a machine file.

    :param path: Path to the machine file
    :param blank: The blank symbol of the machine
    :param halt_prefix: Prefix that marks named halting states
    :return: The validated Machine
    """
    text = Path(path).read_text(encoding="utf-8")

    return parse_machine(text, blank=blank, halt_prefix=halt_prefix)


def save_machine(
    machine: Machine, path: str | os.PathLike, compact: bool = False
) -> Path:
    """
    Serialize a machine and write it to a file.

    :param machine: The machine to write
    :param path: Destination path, overwritten if it exists
    :param compact: True to write ``*`` for unchanged symbols and states
    :return: The destination path
    """
    output_path = Path(path)
    output_path.write_text(dump_machine(machine, compact), encoding="utf-8")

    return output_path
