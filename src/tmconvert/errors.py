"""
Error taxonomy for loading, validating, and converting Turing machine tables.

All errors derive from `MachineError`. They intentionally do not derive from
`ValueError` so that raising them inside pydantic validators surfaces the
error itself rather than a wrapped `ValidationError`.
"""

from __future__ import annotations

__all__ = [
    "BadInputExtension",
    "MachineError",
    "MalformedTransition",
    "NonDeterministicTable",
    "UnknownModelTag",
    "UnsupportedDirection",
]


class MachineError(Exception):
    """Base class for every user-facing tmconvert failure."""


class BadInputExtension(MachineError):
    """The input path does not end with the recognized input suffix."""

    def __init__(self, path: str, suffix: str):
        self.path = path
        self.suffix = suffix
        super().__init__(f"Input file name must end with '{suffix}': {path}")


class UnknownModelTag(MachineError):
    """The header line is not one of the recognized model markers."""

    def __init__(self, header: str):
        self.header = header
        super().__init__(f"Invalid machine type header: {header!r}")


class MalformedTransition(MachineError):
    """A transition line does not decompose into five well-formed fields."""

    def __init__(self, line: str, reason: str, line_number: int | None = None):
        self.line = line
        self.reason = reason
        self.line_number = line_number
        location = f" (line {line_number})" if line_number is not None else ""
        super().__init__(f"Failed to parse transition{location} {line!r}: {reason}")


class UnsupportedDirection(MachineError):
    """A transition carries a head direction outside of Left/Right."""

    def __init__(self, direction: object):
        self.direction = direction
        super().__init__(f"Invalid direction: {direction!r}")


class NonDeterministicTable(MachineError):
    """Two transitions share the same (state, read symbol) pair."""

    def __init__(self, state: str, symbol: str):
        self.state = state
        self.symbol = symbol
        super().__init__(
            f"Multiple transitions for state {state!r} reading symbol {symbol!r}"
        )
