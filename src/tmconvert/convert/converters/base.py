"""
Abstract base converter for transforming a machine between tape models.

This module provides the registry-based converter architecture. Each converter
registers under the name of the tape model it converts from, and
`MachineConverter.resolve_converter` picks the implementation either by that
name or automatically from the machine's model tag.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, ClassVar

from loguru import logger

from tmconvert.errors import (
    MalformedTransition,
    NonDeterministicTable,
    UnsupportedDirection,
)
from tmconvert.machine import Direction, Machine, TapeModel, Transition
from tmconvert.symbols import is_writable_symbol
from tmconvert.utils import RegistryMixin

if TYPE_CHECKING:
    from tmconvert.settings import ConversionSettings

__all__ = ["MachineConverter", "validate_machine"]


def validate_machine(machine: Machine):
    """
    Re-check the structural invariants the converters depend on.

    Machines built through the normal constructor already satisfy them, but
    instances created with ``model_construct`` skip validation.

    :param machine: The machine to check
    :raises UnsupportedDirection: If a row carries a direction other than l/r
    :raises NonDeterministicTable: If two rows share a (state, symbol) pair
    """
    seen: set[tuple[str, str]] = set()
    for transition in machine.transitions:
        if not isinstance(transition.direction, Direction):
            raise UnsupportedDirection(transition.direction)
        if transition.key in seen:
            raise NonDeterministicTable(*transition.key)
        seen.add(transition.key)


class MachineConverter(ABC, RegistryMixin):
    """
    Abstract base converter producing an equivalent machine under the other
    tape model.

    Subclasses set `source` and `target`, register themselves under the source
    model name, and implement `convert`. Calling a converter validates the
    input, expands wildcard rows over the alphabet unless the subclass keeps
    them (`expands_wildcards`), and delegates to `convert`. The input machine
    is never modified.

    Example:
    ::
        converter_cls = MachineConverter.resolve_converter("auto", machine)
        converted = converter_cls(machine, extra_symbols="ab")()
    """

    source: ClassVar[TapeModel]
    target: ClassVar[TapeModel]
    expands_wildcards: ClassVar[bool] = True

    @classmethod
    def resolve_converter(
        cls, algorithm: str, machine: Machine | None = None
    ) -> type[MachineConverter]:
        """
        Resolve the converter class for the given source model name.

        :param algorithm: Source model name (``infinite``/``sipser``) or ``auto``
            to detect it from the machine's model tag
        :param machine: The machine to convert, required for ``auto``
        :return: Converter class for the specified or detected model
        :raises ValueError: If the name is not registered or no converter
            supports the machine
        """
        if cls.registry is None:
            raise ValueError(
                "No converters registered. Please ensure that the MachineConverter "
                "subclasses have registered using the @register decorator."
            )

        algorithm = algorithm.lower()

        if algorithm != "auto":
            if not cls.is_registered(algorithm):
                raise ValueError(
                    f"Algorithm '{algorithm}' is not registered. "
                    f"Available algorithms: {', '.join(cls.registry.keys())}"
                )
            return cls.get_registered_object(algorithm)  # type: ignore[return-value]

        if machine is None:
            raise ValueError("A machine is required to resolve the 'auto' algorithm")

        for converter in cls.registered_objects():
            if converter.is_supported(machine):  # type: ignore[attr-defined]
                return converter  # type: ignore[return-value]

        raise ValueError(
            f"No supported converter found for a {machine.model.value} machine. "
            f"Available algorithms: {', '.join(cls.registry.keys())}"
        )

    @classmethod
    def is_supported(cls, machine: Machine) -> bool:
        """
        Check if this converter accepts the given machine.

        :param machine: The machine to check
        :return: True if the machine is tagged with this converter's source model
        """
        return machine.model is cls.source

    @classmethod
    def options_from_settings(cls, conversion: ConversionSettings) -> dict[str, Any]:
        """Converter specific keyword arguments taken from the conversion settings."""
        return {}

    def __init__(self, machine: Machine, extra_symbols: Iterable[str] = ()):
        """
        :param machine: The machine to convert
        :param extra_symbols: Input symbols the table never names that may
            still appear on the tape
        :raises ValueError: If the machine is None
        :raises MalformedTransition: If an extra symbol could not be written
            back as a symbol field (whitespace, ';', '*' or several characters)
        """
        if machine is None:
            raise ValueError("A machine must be provided to convert")

        symbols = frozenset(extra_symbols)
        for symbol in sorted(symbols):
            if not is_writable_symbol(symbol):
                raise MalformedTransition(
                    symbol,
                    "extra input symbols must be single characters other than "
                    "whitespace, ';' and '*'",
                )

        self.machine = machine
        self.extra_symbols = symbols

    def __call__(self) -> Machine:
        """
        Validate the input and run the conversion.

        :return: A new machine tagged with the target model
        :raises ValueError: If the machine is not tagged with the source model
        """
        validate_machine(self.machine)
        if not self.is_supported(self.machine):
            raise ValueError(
                f"{type(self).__name__} converts {self.source.value} machines, "
                f"got a {self.machine.model.value} machine"
            )

        logger.info(
            f"Converting {self.source.display_name} machine with "
            f"{len(self.machine.transitions)} transitions to {self.target.display_name}"
        )
        prepared = (
            self.machine.expand_wildcards(self.extra_symbols)
            if self.expands_wildcards
            else self.machine
        )
        converted = self.convert(prepared, prepared.alphabet | self.extra_symbols)
        logger.info(
            f"Converted to {len(converted.transitions)} transitions over "
            f"{len(converted.states)} states"
        )

        return converted

    @abstractmethod
    def convert(self, machine: Machine, alphabet: frozenset[str]) -> Machine:
        """
        Build the equivalent machine under the target model.

        :param machine: The validated source machine, without wildcard rows
            when `expands_wildcards` is set
        :param alphabet: Every concrete symbol the table or the extra symbols
            name, blank included
        :return: The converted machine
        """
        ...

    @staticmethod
    def state_name(tag: str, state: str) -> str:
        """Name of the generated state pairing a bookkeeping tag with a state."""
        return f"{tag}:{state}"

    @staticmethod
    def runnable_transitions(machine: Machine) -> list[Transition]:
        """
        Rows that can fire: rows leaving a named halt state are unreachable
        because the machine stops as soon as it enters such a state.
        """
        rows = []
        for transition in machine.transitions:
            if machine.is_halt_state(transition.state):
                logger.warning(
                    f"Dropping transition out of halt state {transition.state!r} "
                    f"reading {transition.read!r}"
                )
                continue
            rows.append(transition)

        return rows
