"""
Tape model conversion for Turing machine tables.

Provides the converters between the two-way (Infinite) and one-way (Sipser)
tape models and the entry points that run them on in-memory machines or on
machine files.
"""

from .converters import (
    InfiniteToSipserConverter,
    MachineConverter,
    SipserToInfiniteConverter,
)
from .entrypoints import convert_file, convert_machine

__all__ = [
    "InfiniteToSipserConverter",
    "MachineConverter",
    "SipserToInfiniteConverter",
    "convert_file",
    "convert_machine",
]
