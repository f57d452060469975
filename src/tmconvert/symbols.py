"""
Symbol allocation utilities for the tape constructions.

Both conversions need tape symbols the source table never uses: a boundary
marker for the one-way tape embedding and a paired symbol per (upper, lower)
combination for the fold construction. Symbols must stay single printable
characters so the result remains writable in the five-field text format.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import NamedTuple

__all__ = [
    "RESERVED_SYMBOLS",
    "FoldedSymbol",
    "SymbolCodec",
    "fresh_symbols",
    "is_writable_symbol",
]


RESERVED_SYMBOLS = frozenset({";", "*"})
"""Characters with a meaning of their own in the text format."""
ALLOCATION_START = 0x0100
"""First code point used for generated symbols (Latin Extended-A)."""


def is_writable_symbol(symbol: str) -> bool:
    """True if ``symbol`` survives as a symbol field of the text format."""
    return (
        len(symbol) == 1 and not symbol.isspace() and symbol not in RESERVED_SYMBOLS
    )


def _candidates(preferred: Iterable[str]) -> Iterator[str]:
    yield from preferred

    code_point = ALLOCATION_START
    while code_point <= 0x10FFFF:
        char = chr(code_point)
        if char.isalpha():
            yield char
        code_point += 1


def fresh_symbols(
    taken: Iterable[str], count: int = 1, preferred: Iterable[str] = ()
) -> list[str]:
    """
    Allocate symbols that do not collide with any already taken symbol.

    Candidates from ``preferred`` are tried first, followed by letters from
    U+0100 upward. The result is deterministic for equal inputs.

    :param taken: Symbols already in use
    :param count: How many fresh symbols to allocate
    :param preferred: Symbols to try before the generated range
    :return: ``count`` distinct single-character symbols
    """
    used = set(taken) | RESERVED_SYMBOLS
    allocated: list[str] = []

    for candidate in _candidates(preferred):
        if len(allocated) == count:
            break
        if len(candidate) != 1 or candidate in used:
            continue
        used.add(candidate)
        allocated.append(candidate)

    return allocated


class FoldedSymbol(NamedTuple):
    """Decoded content of a folded tape cell."""

    upper: str
    lower: str
    is_fold: bool


class SymbolCodec:
    """
    Encodes the cells of a folded two-way tape as single tape symbols.

    A regular cell carries an (upper, lower) pair: the upper symbol is the
    original cell at the same distance right of the start, the lower symbol the
    one at the same distance left of it. A pair whose lower symbol is blank is
    encoded as the upper symbol itself, so untouched input needs no rewriting.
    The fold cell (one-way cell 0) only carries an upper symbol and is encoded
    with a distinct symbol per upper value.

    Example:
    ::
        codec = SymbolCodec(["_", "0", "1"], blank="_")
        symbol = codec.pair("1", "0")
        assert codec.decode(symbol) == ("1", "0", False)
        assert codec.pair("1", "_") == "1"
    """

    def __init__(self, alphabet: Iterable[str], blank: str):
        self.blank = blank
        self.alphabet: tuple[str, ...] = tuple(sorted(set(alphabet) | {blank}))

        pairs = [
            (upper, lower)
            for upper in self.alphabet
            for lower in self.alphabet
            if lower != blank
        ]
        codes = fresh_symbols(self.alphabet, count=len(pairs) + len(self.alphabet))
        self._pairs: dict[tuple[str, str], str] = dict(zip(pairs, codes))
        self._folds: dict[str, str] = dict(zip(self.alphabet, codes[len(pairs) :]))
        self._decoded: dict[str, FoldedSymbol] = {
            symbol: FoldedSymbol(symbol, self.blank, False) for symbol in self.alphabet
        }
        self._decoded.update(
            {
                code: FoldedSymbol(upper, lower, False)
                for (upper, lower), code in self._pairs.items()
            }
        )
        self._decoded.update(
            {
                code: FoldedSymbol(upper, self.blank, True)
                for upper, code in self._folds.items()
            }
        )

    def pair(self, upper: str, lower: str) -> str:
        """Symbol for a regular cell holding ``upper`` and ``lower``."""
        if lower == self.blank:
            return upper

        return self._pairs[(upper, lower)]

    def fold(self, upper: str) -> str:
        """Symbol for the fold cell holding ``upper``."""
        return self._folds[upper]

    def decode(self, symbol: str) -> FoldedSymbol:
        """
        Recover the cell content a symbol encodes.

        :param symbol: A symbol produced by this codec or a source symbol
        :return: The decoded ``(upper, lower, is_fold)`` triple
        :raises KeyError: If the symbol was not produced by this codec
        """
        return self._decoded[symbol]

    @property
    def symbols(self) -> frozenset[str]:
        """Every symbol that may appear on the folded tape."""
        return frozenset(self._decoded)

    def legend(self) -> list[str]:
        """Human readable description of every generated symbol."""
        lines = [
            f"{code} = [{upper}|{lower}]"
            for (upper, lower), code in self._pairs.items()
        ]
        lines.extend(f"{code} = [{upper}|fold]" for upper, code in self._folds.items())

        return lines
