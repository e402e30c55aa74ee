"""Exception hierarchy shared by the ukechord engine and its CLI."""

from __future__ import annotations

from typing import Any


class UkeChordError(Exception):
    """Base class for every error raised by ukechord."""


class UnknownChordSymbol(UkeChordError, ValueError):
    """A chord symbol names no known root note or chord type."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"Unknown chord symbol: '{symbol}'")
        self.symbol = symbol


class UnknownTuning(UkeChordError, ValueError):
    """A tuning name is not one of the supported tunings."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tuning: '{name}'")
        self.name = name


class InvalidTuning(UkeChordError, ValueError):
    """Open-string pitch classes do not describe a four-string tuning."""


class InvalidStringIndex(UkeChordError, ValueError):
    """A string index lies outside the instrument's string range."""

    def __init__(self, index: int, string_count: int) -> None:
        super().__init__(
            f"String index {index} out of range (instrument has {string_count} strings)"
        )
        self.index = index


class InvalidFretPattern(UkeChordError, ValueError):
    """A fret pattern could not be parsed or holds impossible fret values."""


class InvalidFretPatternLength(InvalidFretPattern):
    """A fret pattern does not have one entry per string."""

    def __init__(self, length: int, string_count: int) -> None:
        super().__init__(
            f"Fret pattern has {length} entries, expected {string_count} (one per string)"
        )
        self.length = length


class InvalidConstraints(UkeChordError, ValueError):
    """Voicing constraints contradict each other (e.g. min_fret > max_fret)."""


class NoVoicingAvailable(UkeChordError):
    """A chord in a sequence has no voicing satisfying the constraints."""

    def __init__(self, chord_index: int, chord: Any = None) -> None:
        label = f" ({chord.symbol})" if chord is not None else ""
        super().__init__(
            f"No voicing available for chord #{chord_index + 1}{label} "
            "under the given constraints"
        )
        self.chord_index = chord_index
        self.chord = chord
