"""
Unit tests for the machine module in the tmconvert package.
"""

import pytest

from tmconvert.errors import (
    MalformedTransition,
    NonDeterministicTable,
    UnknownModelTag,
    UnsupportedDirection,
)
from tmconvert.machine import Direction, Machine, TapeModel, Transition


def row(state, read, write, direction, next_state):
    return Transition(
        state=state,
        read=read,
        write=write,
        direction=Direction(direction),
        next_state=next_state,
    )


@pytest.mark.smoke
@pytest.mark.parametrize(
    ("token", "expected"), [("l", Direction.LEFT), ("r", Direction.RIGHT)]
)
def test_direction_from_token(token, expected):
    assert Direction.from_token(token) is expected
    assert str(expected) == token


@pytest.mark.sanity
@pytest.mark.parametrize("token", ["L", "R", "*", "left", ""])
def test_direction_from_token_invalid(token):
    with pytest.raises(UnsupportedDirection):
        Direction.from_token(token)


@pytest.mark.smoke
def test_direction_mirrored():
    assert Direction.LEFT.mirrored is Direction.RIGHT
    assert Direction.RIGHT.mirrored is Direction.LEFT


@pytest.mark.smoke
@pytest.mark.parametrize(
    ("header", "expected"),
    [(";I", TapeModel.INFINITE), (";S", TapeModel.SIPSER), (" ;S \n", TapeModel.SIPSER)],
)
def test_tape_model_from_header(header, expected):
    model = TapeModel.from_header(header)

    assert model is expected
    assert model.header == header.strip()


@pytest.mark.sanity
@pytest.mark.parametrize("header", [";X", "I", ";i", "", "0 0 1 r 1"])
def test_tape_model_from_header_invalid(header):
    with pytest.raises(UnknownModelTag) as exc_info:
        TapeModel.from_header(header)

    assert exc_info.value.header == header


@pytest.mark.smoke
def test_tape_model_other_and_display_name():
    assert TapeModel.INFINITE.other is TapeModel.SIPSER
    assert TapeModel.SIPSER.other is TapeModel.INFINITE
    assert TapeModel.INFINITE.display_name == "Infinite"
    assert TapeModel.SIPSER.display_name == "Sipser"


@pytest.mark.smoke
def test_transition_key_and_immutability():
    transition = row("0", "a", "b", "r", "1")

    assert transition.key == ("0", "a")
    assert not transition.is_wildcard
    with pytest.raises(Exception):  # noqa: B017
        transition.state = "2"  # type: ignore[misc]


@pytest.mark.sanity
@pytest.mark.parametrize(
    "fields",
    [
        {"read": "ab"},
        {"write": ""},
        {"read": " "},
        {"state": ""},
        {"next_state": "q 1"},
        {"read": "a", "write": "*"},
    ],
)
def test_transition_invalid_fields(fields):
    values = {
        "state": "0",
        "read": "*",
        "write": "b",
        "direction": Direction.RIGHT,
        "next_state": "1",
    }
    values.update(fields)

    with pytest.raises(MalformedTransition):
        Transition(**values)


@pytest.mark.smoke
def test_machine_defaults():
    machine = Machine(model=TapeModel.INFINITE)

    assert machine.initial_state == "0"
    assert machine.blank == "_"
    assert machine.transitions == ()
    assert machine.states == ["0"]
    assert machine.alphabet == frozenset({"_"})


@pytest.mark.sanity
def test_machine_initial_state_is_fixed():
    with pytest.raises(Exception):  # noqa: B017
        Machine(model=TapeModel.INFINITE, initial_state="1")  # type: ignore[arg-type]


@pytest.mark.smoke
def test_machine_rejects_duplicate_pairs():
    with pytest.raises(NonDeterministicTable) as exc_info:
        Machine(
            model=TapeModel.SIPSER,
            transitions=(row("0", "a", "b", "r", "1"), row("0", "a", "c", "l", "2")),
        )

    assert exc_info.value.state == "0"
    assert exc_info.value.symbol == "a"


@pytest.mark.sanity
def test_machine_rejects_duplicate_wildcards():
    with pytest.raises(NonDeterministicTable):
        Machine(
            model=TapeModel.INFINITE,
            transitions=(row("0", "*", "*", "r", "0"), row("0", "*", "x", "l", "1")),
        )


@pytest.mark.smoke
def test_machine_states_and_alphabet():
    machine = Machine(
        model=TapeModel.INFINITE,
        transitions=(
            row("q", "a", "b", "r", "halt"),
            row("0", "*", "*", "r", "q"),
        ),
    )

    assert machine.states == ["0", "q", "halt"]
    assert machine.alphabet == frozenset({"_", "a", "b"})
    assert machine.has_wildcards
    assert machine.is_halt_state("halt")
    assert machine.is_halt_state("halt-accept")
    assert not machine.is_halt_state("q")
    assert machine.rows_for("q") == [machine.transitions[0]]


@pytest.mark.sanity
def test_machine_expand_wildcards():
    machine = Machine(
        model=TapeModel.INFINITE,
        transitions=(
            row("0", "_", "_", "l", "1"),
            row("0", "*", "*", "r", "0"),
            row("1", "*", "x", "r", "halt"),
        ),
    )

    expanded = machine.expand_wildcards(extra_symbols="z")

    assert not expanded.has_wildcards
    assert expanded.model is TapeModel.INFINITE
    table = expanded.table
    assert table[("0", "_")].direction is Direction.LEFT
    assert table[("0", "x")].write == "x"
    assert table[("0", "z")].write == "z"
    assert table[("0", "z")].next_state == "0"
    assert {symbol for state, symbol in table if state == "1"} == {"_", "x", "z"}
    assert all(table[("1", symbol)].write == "x" for symbol in ("_", "x", "z"))
    # the source machine is left untouched
    assert machine.has_wildcards


@pytest.mark.smoke
def test_machine_expand_wildcards_without_wildcards_returns_self():
    machine = Machine(
        model=TapeModel.SIPSER, transitions=(row("0", "a", "b", "r", "1"),)
    )

    assert machine.expand_wildcards("xyz") is machine
