"""
tmconvert: Tape model conversion for Turing machine transition tables

tmconvert converts a Turing machine description between two tape formalisms:
the Infinite model, whose tape is unbounded in both directions, and the Sipser
model, whose tape has a fixed left end where Left moves are clamped. The
converted machine halts, accepts, and rejects on exactly the same inputs.

The library offers:
- A validated, immutable transition table model (`Machine`).
- Registry-based converters for both directions.
- Reading and writing of the five-field text format used by online Turing
  machine simulators.
"""

from .convert import convert_file, convert_machine
from .errors import (
    BadInputExtension,
    MachineError,
    MalformedTransition,
    NonDeterministicTable,
    UnknownModelTag,
    UnsupportedDirection,
)
from .formats import dump_machine, load_machine, parse_machine, save_machine
from .logging import configure_logger
from .machine import Direction, Machine, TapeModel, Transition

__all__ = [
    "BadInputExtension",
    "Direction",
    "Machine",
    "MachineError",
    "MalformedTransition",
    "NonDeterministicTable",
    "TapeModel",
    "Transition",
    "UnknownModelTag",
    "UnsupportedDirection",
    "configure_logger",
    "convert_file",
    "convert_machine",
    "dump_machine",
    "load_machine",
    "parse_machine",
    "save_machine",
]
