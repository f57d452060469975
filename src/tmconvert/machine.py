"""
In-memory representation of a Turing machine transition table.

A `Machine` is a validated, immutable value: a deterministic partial mapping
from (state, read symbol) to (write symbol, direction, next state) tagged with
the tape model its transitions are interpreted under. The start state is the
explicit `initial_state` field and is always ``"0"``.

Core Interfaces:
- Direction: Head movement, Left or Right.
- TapeModel: The tape formalism, Infinite (two-way) or Sipser (one-way).
- Transition: A single table row.
- Machine: The table plus its model tag, blank symbol, and comments.

Example Usage:
```python
from tmconvert.machine import Direction, Machine, TapeModel, Transition

machine = Machine(
    model=TapeModel.INFINITE,
    transitions=(
        Transition(state="0", read="0", write="1", direction=Direction.RIGHT,
                   next_state="1"),
        Transition(state="1", read="1", write="1", direction=Direction.LEFT,
                   next_state="0"),
    ),
)
```
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from tmconvert.errors import (
    MalformedTransition,
    NonDeterministicTable,
    UnknownModelTag,
    UnsupportedDirection,
)

__all__ = [
    "BLANK",
    "HALT_PREFIX",
    "START_STATE",
    "WILDCARD",
    "Direction",
    "Machine",
    "TapeModel",
    "Transition",
]


START_STATE = "0"
"""The initial state of every machine."""
BLANK = "_"
"""Default blank tape symbol."""
WILDCARD = "*"
"""Matches any symbol (read), repeats the read symbol (write) or state (next)."""
HALT_PREFIX = "halt"
"""States whose name starts with this prefix are named halting states."""


class Direction(str, Enum):
    """Head movement of a transition."""

    LEFT = "l"
    RIGHT = "r"

    @classmethod
    def from_token(cls, token: str) -> Direction:
        """
        Parse a direction token as it appears in the text format.

        :param token: The raw direction field, ``l`` or ``r``
        :return: The matching Direction
        :raises UnsupportedDirection: If the token is not a recognized direction
        """
        try:
            return cls(token)
        except ValueError as err:
            raise UnsupportedDirection(token) from err

    @property
    def mirrored(self) -> Direction:
        return Direction.RIGHT if self is Direction.LEFT else Direction.LEFT

    def __str__(self) -> str:
        return self.value


class TapeModel(str, Enum):
    """The tape formalism a machine's transitions are interpreted under."""

    INFINITE = "infinite"
    SIPSER = "sipser"

    @classmethod
    def from_header(cls, header: str) -> TapeModel:
        """
        Parse the model marker found on the first line of a machine file.

        :param header: The header line, e.g. ``;I`` or ``;S``
        :return: The matching TapeModel
        :raises UnknownModelTag: If the header is not a recognized marker
        """
        for model in cls:
            if model.header == header.strip():
                return model

        raise UnknownModelTag(header)

    @property
    def header(self) -> str:
        return ";I" if self is TapeModel.INFINITE else ";S"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def other(self) -> TapeModel:
        return TapeModel.SIPSER if self is TapeModel.INFINITE else TapeModel.INFINITE


def _check_state_name(name: str) -> str:
    if not name or any(char.isspace() for char in name):
        raise MalformedTransition(name, "state names must be non-empty tokens")

    return name


def _check_symbol(symbol: str) -> str:
    if len(symbol) != 1 or symbol.isspace():
        raise MalformedTransition(
            symbol, "symbols must be a single non-whitespace character"
        )

    return symbol


class Transition(BaseModel):
    """
    A single row of a transition table:
    ``(state, read) -> (write, direction, next_state)``.

    A read symbol of ``*`` marks a wildcard row that applies to every symbol
    without an explicit row for the same state. A write symbol of ``*`` is only
    meaningful on wildcard rows and writes back whatever was read.
    """

    model_config = ConfigDict(frozen=True)

    state: str = Field(description="The state the machine must be in.")
    read: str = Field(description="The symbol under the head.")
    write: str = Field(description="The symbol written before moving.")
    direction: Direction = Field(description="Where the head moves after writing.")
    next_state: str = Field(description="The state entered after moving.")

    @field_validator("state", "next_state")
    @classmethod
    def validate_state(cls, value: str) -> str:
        return _check_state_name(value)

    @field_validator("read", "write")
    @classmethod
    def validate_symbol(cls, value: str) -> str:
        return _check_symbol(value)

    @model_validator(mode="after")
    def validate_write_wildcard(self) -> Transition:
        if self.write == WILDCARD and self.read != WILDCARD:
            raise MalformedTransition(
                f"{self.state} {self.read} {self.write}",
                "a '*' write symbol requires a '*' read symbol",
            )

        return self

    @property
    def key(self) -> tuple[str, str]:
        return self.state, self.read

    @property
    def is_wildcard(self) -> bool:
        return self.read == WILDCARD


class Machine(BaseModel):
    """
    A deterministic Turing machine transition table tagged with its tape model.

    Construction rejects tables where two rows share a (state, read symbol)
    pair with `NonDeterministicTable`. Instances are immutable; every
    transformation returns a new Machine.
    """

    model_config = ConfigDict(frozen=True)

    model: TapeModel = Field(description="The tape formalism of the transitions.")
    transitions: tuple[Transition, ...] = Field(
        default=(), description="The table rows in file order."
    )
    initial_state: Literal["0"] = Field(
        default=START_STATE, description="The start state, always '0'."
    )
    blank: str = Field(default=BLANK, description="The blank tape symbol.")
    halt_prefix: str = Field(
        default=HALT_PREFIX,
        description="States starting with this prefix are named halting states.",
    )
    comments: tuple[str, ...] = Field(
        default=(), description="Free-text lines written as ';' comments."
    )

    @field_validator("blank")
    @classmethod
    def validate_blank(cls, value: str) -> str:
        _check_symbol(value)
        if value == WILDCARD:
            raise MalformedTransition(value, "the blank cannot be the wildcard")

        return value

    @model_validator(mode="after")
    def validate_deterministic(self) -> Machine:
        seen: set[tuple[str, str]] = set()
        for transition in self.transitions:
            if transition.key in seen:
                raise NonDeterministicTable(*transition.key)
            seen.add(transition.key)

        return self

    @property
    def table(self) -> dict[tuple[str, str], Transition]:
        """Mapping of (state, read symbol) to the row that handles it."""
        return {transition.key: transition for transition in self.transitions}

    @property
    def states(self) -> list[str]:
        """Every state named by the table in first-seen order, start state first."""
        found = {self.initial_state: None}
        for transition in self.transitions:
            found.setdefault(transition.state)
            found.setdefault(transition.next_state)

        return list(found)

    @property
    def alphabet(self) -> frozenset[str]:
        """Concrete symbols read or written by the table, plus the blank."""
        symbols = {self.blank}
        for transition in self.transitions:
            symbols.update((transition.read, transition.write))
        symbols.discard(WILDCARD)

        return frozenset(symbols)

    @property
    def has_wildcards(self) -> bool:
        return any(transition.is_wildcard for transition in self.transitions)

    def is_halt_state(self, state: str) -> bool:
        return state.startswith(self.halt_prefix)

    def rows_for(self, state: str) -> list[Transition]:
        return [row for row in self.transitions if row.state == state]

    def expand_wildcards(self, extra_symbols: Iterable[str] = ()) -> Machine:
        """
        Replace every wildcard row with concrete rows over the alphabet.

        Each wildcard row ``(q, *)`` expands into one row per symbol of the
        alphabet (extended by ``extra_symbols``) that has no explicit row for
        ``q``. A wildcard write becomes the symbol that was read.

        :param extra_symbols: Additional input symbols the table never names
        :return: A new Machine without wildcard rows, or self if none exist
        """
        if not self.has_wildcards:
            return self

        alphabet = sorted(self.alphabet.union(extra_symbols) - {WILDCARD})
        explicit = self.table
        expanded: list[Transition] = []

        for row in self.transitions:
            if not row.is_wildcard:
                expanded.append(row)
                continue

            expanded.extend(
                Transition(
                    state=row.state,
                    read=symbol,
                    write=symbol if row.write == WILDCARD else row.write,
                    direction=row.direction,
                    next_state=row.next_state,
                )
                for symbol in alphabet
                if (row.state, symbol) not in explicit
            )

        return self.model_copy(update={"transitions": tuple(expanded)})
