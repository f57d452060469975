"""
Registry-based converters between the Infinite and Sipser tape models.

Each converter registers under the name of the model it converts from, so
`MachineConverter.resolve_converter` can pick the right construction from a
machine's model tag. Importing this package registers both converters.
"""

from __future__ import annotations

from .base import MachineConverter, validate_machine
from .infinite import InfiniteToSipserConverter
from .sipser import SipserToInfiniteConverter

__all__ = [
    "InfiniteToSipserConverter",
    "MachineConverter",
    "SipserToInfiniteConverter",
    "validate_machine",
]
