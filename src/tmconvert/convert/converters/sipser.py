"""
Sipser to Infinite conversion by tracking the left boundary of the tape.

On a one-way tape a Left move from the first cell leaves the head in place. A
two-way tape has no such clamp, so the converted machine writes a boundary
marker just left of the input during setup and routes every Left move through
a boundary-tracking state that steps back onto the first cell whenever it
finds the marker under the head.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from loguru import logger

from tmconvert.convert.converters.base import MachineConverter
from tmconvert.machine import (
    START_STATE,
    WILDCARD,
    Direction,
    Machine,
    TapeModel,
    Transition,
)
from tmconvert.symbols import fresh_symbols

if TYPE_CHECKING:
    from tmconvert.settings import ConversionSettings

__all__ = ["SipserToInfiniteConverter"]


@MachineConverter.register("sipser")
class SipserToInfiniteConverter(MachineConverter):
    """
    Converts a one-way tape (Sipser) machine into a two-way tape (Infinite)
    machine with the same halting behavior.

    Generated states:
    - ``0``: setup, steps left of the first cell whatever it holds.
    - ``setup:wall``: writes the boundary marker and returns to the first cell.
    - ``sim:<q>``: the original state ``q``.
    - ``wall:<q>``: entered after every Left move into ``q``; clamps the head
      back onto the first cell on the marker, otherwise acts as ``q``.

    Named halt states keep their names. Wildcard rows are copied through
    unexpanded, so symbols the table never names behave as on the source tape.
    """

    source = TapeModel.SIPSER
    target = TapeModel.INFINITE
    expands_wildcards = False

    SIMULATE = "sim"
    WALL = "wall"
    SETUP_WALL = "setup:wall"

    def __init__(
        self,
        machine: Machine,
        extra_symbols: Iterable[str] = (),
        boundary_marker: str = "#",
    ):
        """
        :param machine: The Sipser machine to convert
        :param extra_symbols: Input symbols the table never names, kept clear
            of when allocating the boundary marker
        :param boundary_marker: Preferred symbol for the left boundary; a fresh
            symbol is used if the alphabet already contains it
        """
        super().__init__(machine, extra_symbols)
        self.boundary_marker = boundary_marker

    @classmethod
    def options_from_settings(cls, conversion: ConversionSettings) -> dict[str, Any]:
        return {"boundary_marker": conversion.boundary_marker}

    def convert(self, machine: Machine, alphabet: frozenset[str]) -> Machine:
        marker = fresh_symbols(alphabet, preferred=[self.boundary_marker])[0]
        rows = self.runnable_transitions(machine)
        active_states = {row.state for row in rows}

        def tracks_boundary(state: str) -> bool:
            return state in active_states

        def enter(state: str, direction: Direction) -> str:
            if machine.is_halt_state(state):
                return state
            if direction is Direction.LEFT and tracks_boundary(state):
                return self.state_name(self.WALL, state)
            return self.state_name(self.SIMULATE, state)

        def replay(from_state: str, row: Transition) -> Transition:
            return Transition(
                state=from_state,
                read=row.read,
                write=row.write,
                direction=row.direction,
                next_state=enter(row.next_state, row.direction),
            )

        transitions = [
            Transition(
                state=START_STATE,
                read=WILDCARD,
                write=WILDCARD,
                direction=Direction.LEFT,
                next_state=self.SETUP_WALL,
            ),
            Transition(
                state=self.SETUP_WALL,
                read=machine.blank,
                write=marker,
                direction=Direction.RIGHT,
                next_state=enter(machine.initial_state, Direction.RIGHT),
            ),
        ]
        transitions.extend(
            replay(self.state_name(self.SIMULATE, row.state), row) for row in rows
        )

        # states entered by a Left move, in first-seen order
        wall_states = dict.fromkeys(
            row.next_state
            for row in rows
            if row.direction is Direction.LEFT and tracks_boundary(row.next_state)
        )
        for state in wall_states:
            wall_state = self.state_name(self.WALL, state)
            logger.debug(f"Adding boundary-tracking state {wall_state!r}")
            # the explicit marker row takes precedence over a '*' row of the state
            transitions.append(
                Transition(
                    state=wall_state,
                    read=marker,
                    write=marker,
                    direction=Direction.RIGHT,
                    next_state=self.state_name(self.SIMULATE, state),
                )
            )
            transitions.extend(
                replay(wall_state, row) for row in machine.rows_for(state)
            )

        return Machine(
            model=self.target,
            transitions=tuple(transitions),
            blank=machine.blank,
            halt_prefix=machine.halt_prefix,
            comments=(
                "--- Sipser-to-Infinite Simulation ---",
                f"Start state: {START_STATE}",
                f"Boundary marker: {marker}",
            ),
        )
