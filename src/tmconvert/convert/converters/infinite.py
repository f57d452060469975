"""
Infinite to Sipser conversion by folding the two-way tape onto a one-way tape.

The two-way tape is cut at the start cell. One-way cell 0 becomes the fold
cell holding original cell 0. Every later one-way cell ``j`` holds a pair: the
upper symbol is original cell ``j`` and the lower symbol is original cell
``-j``. Each original state is split into an upper-track and a lower-track
state. Upper-track rows move in the original direction, lower-track rows move
in the mirrored direction, and moving Left off the fold cell continues on the
lower track.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from tmconvert.convert.converters.base import MachineConverter
from tmconvert.machine import START_STATE, Direction, Machine, TapeModel, Transition
from tmconvert.symbols import SymbolCodec

if TYPE_CHECKING:
    from tmconvert.settings import ConversionSettings

__all__ = ["InfiniteToSipserConverter"]


@MachineConverter.register("infinite")
class InfiniteToSipserConverter(MachineConverter):
    """
    Converts a two-way tape (Infinite) machine into a one-way tape (Sipser)
    machine with the same halting behavior.

    Generated states:
    - ``0``: setup, rewrites the first cell as the fold cell. Its Left move is
      clamped by the one-way tape, so the head stays on cell 0.
    - ``up:<q>``: the original state ``q`` reading the upper track.
    - ``dn:<q>``: the original state ``q`` reading the lower track. On the
      fold cell it behaves exactly like ``up:<q>``.

    Named halt states keep their names. The symbol encoding is available as
    `codec` after the conversion ran.
    """

    source = TapeModel.INFINITE
    target = TapeModel.SIPSER

    UPPER = "up"
    LOWER = "dn"

    def __init__(
        self,
        machine: Machine,
        extra_symbols: Iterable[str] = (),
        write_legend: bool = True,
    ):
        """
        :param machine: The Infinite machine to convert
        :param extra_symbols: Input symbols the table never names
        :param write_legend: True to describe every generated symbol in the
            output comments
        """
        super().__init__(machine, extra_symbols)
        self.write_legend = write_legend
        self.codec: SymbolCodec | None = None

    @classmethod
    def options_from_settings(cls, conversion: ConversionSettings) -> dict[str, Any]:
        return {"write_legend": conversion.write_legend}

    def convert(self, machine: Machine, alphabet: frozenset[str]) -> Machine:
        codec = SymbolCodec(alphabet, machine.blank)
        self.codec = codec

        def enter(track: str, state: str) -> str:
            if machine.is_halt_state(state):
                return state
            return self.state_name(track, state)

        transitions = [
            Transition(
                state=START_STATE,
                read=symbol,
                write=codec.fold(symbol),
                direction=Direction.LEFT,
                next_state=enter(self.UPPER, machine.initial_state),
            )
            for symbol in codec.alphabet
        ]

        for row in self.runnable_transitions(machine):
            upper_state = self.state_name(self.UPPER, row.state)
            lower_state = self.state_name(self.LOWER, row.state)

            # the fold cell always continues on cell 1, on the track the
            # original move lands on
            fold_track = self.UPPER if row.direction is Direction.RIGHT else self.LOWER
            transitions.extend(
                Transition(
                    state=state,
                    read=codec.fold(row.read),
                    write=codec.fold(row.write),
                    direction=Direction.RIGHT,
                    next_state=enter(fold_track, row.next_state),
                )
                for state in (upper_state, lower_state)
            )
            transitions.extend(
                Transition(
                    state=upper_state,
                    read=codec.pair(row.read, lower),
                    write=codec.pair(row.write, lower),
                    direction=row.direction,
                    next_state=enter(self.UPPER, row.next_state),
                )
                for lower in codec.alphabet
            )
            transitions.extend(
                Transition(
                    state=lower_state,
                    read=codec.pair(upper, row.read),
                    write=codec.pair(upper, row.write),
                    direction=row.direction.mirrored,
                    next_state=enter(self.LOWER, row.next_state),
                )
                for upper in codec.alphabet
            )

        comments = [
            "--- Infinite-to-Sipser Simulation ---",
            f"Start state: {START_STATE}",
            f"Tracks: '{self.UPPER}:<state>' upper, '{self.LOWER}:<state>' lower",
        ]
        if self.write_legend:
            comments.extend(codec.legend())

        return Machine(
            model=self.target,
            transitions=tuple(transitions),
            blank=machine.blank,
            halt_prefix=machine.halt_prefix,
            comments=tuple(comments),
        )
