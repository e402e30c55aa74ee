"""Voicing and Fingering value types plus the compact fret-pattern format."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

from ukechord.errors import InvalidFretPattern, InvalidFretPatternLength
from ukechord.instrument import FINGER_COUNT, STRING_COUNT, Tuning, sounding_pitch_class

#: Marker for a string that is not played.
MUTED = None

#: One entry per string: ``None`` for muted, 0 for open, otherwise the fret pressed.
Fret = Optional[int]

_MUTED_SYMBOLS = frozenset({"x", "X"})
# Sort value of a muted string in the left-to-right comparison: after every fret.
_MUTED_SORT_VALUE = 1_000


def _check_frets(frets: Sequence[Fret]) -> None:
    if len(frets) != STRING_COUNT:
        raise InvalidFretPatternLength(len(frets), STRING_COUNT)
    for fret in frets:
        if fret is not None and (isinstance(fret, bool) or not isinstance(fret, int) or fret < 0):
            raise InvalidFretPattern(f"Invalid fret value {fret!r} in {list(frets)}")


@dataclass(frozen=True)
class Voicing:
    """
    One way of playing a chord: the state of every string.

    Attributes:
        frets: Per string, lowest-sounding string first as tuned:
               ``None`` (muted), ``0`` (open) or the fret pressed (>= 1).
    """

    frets: tuple[Fret, ...]

    def __post_init__(self) -> None:
        _check_frets(self.frets)

    @classmethod
    def of(cls, *frets: Fret) -> Voicing:
        return cls(tuple(frets))

    def __iter__(self) -> Iterator[Fret]:
        return iter(self.frets)

    def __len__(self) -> int:
        return len(self.frets)

    def __str__(self) -> str:
        return format_fret_pattern(self.frets)

    @property
    def pressed_frets(self) -> list[int]:
        """Frets pressed down, in string order (open and muted strings skipped)."""
        return [f for f in self.frets if f]

    @property
    def sounding_frets(self) -> list[int]:
        return [f for f in self.frets if f is not None]

    @property
    def min_fret(self) -> int | None:
        """Lowest pressed fret, ``None`` when no string is pressed."""
        pressed = self.pressed_frets
        return min(pressed) if pressed else None

    @property
    def max_fret(self) -> int:
        """Highest pressed fret, 0 when no string is pressed."""
        return max(self.pressed_frets, default=0)

    @property
    def lowest_fret(self) -> int | None:
        """Lowest fret that sounds (0 if any string rings open), ``None`` if all muted."""
        return min(self.sounding_frets, default=None)

    @property
    def span(self) -> int:
        min_fret = self.min_fret
        return 0 if min_fret is None else self.max_fret - min_fret

    @property
    def muted_count(self) -> int:
        return sum(1 for f in self.frets if f is None)

    def pitch_classes(self, tuning: Tuning) -> frozenset[int]:
        """Distinct pitch classes sounded by this voicing under ``tuning``."""
        return frozenset(
            sounding_pitch_class(tuning, string, fret)
            for string, fret in enumerate(self.frets)
            if fret is not None
        )

    def sort_key(self) -> tuple[int, int, tuple[int, ...]]:
        """
        Canonical ordering: lowest pressed fret, then span, then frets left to right.

        A voicing without pressed frets sorts as if its lowest fret were 0;
        muted strings sort after any fret value.
        """
        min_fret = self.min_fret
        return (
            0 if min_fret is None else min_fret,
            self.span,
            tuple(_MUTED_SORT_VALUE if f is None else f for f in self.frets),
        )


@dataclass(frozen=True)
class Fingering:
    """
    Finger used on each string of a voicing.

    Attributes:
        fingers: Per string: 0 (open or muted string) or 1-4 (index to pinky).
                 A finger on several strings forms a barre at a single fret.
    """

    fingers: tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.fingers) != STRING_COUNT:
            raise InvalidFretPatternLength(len(self.fingers), STRING_COUNT)
        if any(not 0 <= f <= FINGER_COUNT for f in self.fingers):
            raise ValueError(f"Finger identifiers must be in 0-4, got {self.fingers}")

    def __iter__(self) -> Iterator[int]:
        return iter(self.fingers)

    def __str__(self) -> str:
        return "".join(str(f) for f in self.fingers)

    def positions(self, voicing: Voicing) -> dict[int, tuple[int, int]]:
        """
        Map each finger in use to ``(lowest string, fret)`` on ``voicing``.

        For a barre only the first string the finger covers is recorded.
        """
        result: dict[int, tuple[int, int]] = {}
        for string, (finger, fret) in enumerate(zip(self.fingers, voicing.frets)):
            if finger and finger not in result:
                result[finger] = (string, fret or 0)
        return result

    def frets_by_finger(self, voicing: Voicing) -> dict[int, set[int]]:
        """Every fret each finger is placed on; a valid fingering has one fret per finger."""
        result: dict[int, set[int]] = {}
        for finger, fret in zip(self.fingers, voicing.frets):
            if finger:
                result.setdefault(finger, set()).add(fret or 0)
        return result


# ── Fret pattern text format ────────────────────────────────────────────────

def parse_fret_pattern(text: str) -> list[Fret]:
    """
    Parse a compact fret pattern into per-string fret values.

    Accepts ``"2220"`` (one character per string), ``"2 2 2 0"`` or
    ``"7 8 9 10"`` (space separated, needed for frets above 9). ``x`` or
    ``X`` marks a muted string.

    Raises:
        InvalidFretPattern:       If an entry is neither a number nor ``x``.
        InvalidFretPatternLength: If there is not exactly one entry per string.
    """
    stripped = text.strip()
    tokens = stripped.split() if re.search(r"\s", stripped) else list(stripped)

    frets: list[Fret] = []
    for token in tokens:
        if token in _MUTED_SYMBOLS:
            frets.append(MUTED)
        elif token.isascii() and token.isdigit():
            frets.append(int(token))
        else:
            raise InvalidFretPattern(
                f"Fret pattern '{text}' has wrong format "
                "(should be something like 2220, x232 or \"7 8 9 10\")"
            )

    if len(frets) != STRING_COUNT:
        raise InvalidFretPatternLength(len(frets), STRING_COUNT)
    return frets


def format_fret_pattern(frets: Sequence[Fret]) -> str:
    """Inverse of :func:`parse_fret_pattern`; spaces are used once a fret exceeds 9."""
    tokens = ["x" if f is None else str(f) for f in frets]
    separator = " " if any(len(t) > 1 for t in tokens) else ""
    return separator.join(tokens)
