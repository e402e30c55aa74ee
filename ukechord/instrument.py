"""Instrument model: four-string tunings and the pitch sounding at each fret."""

from __future__ import annotations

from dataclasses import dataclass

from ukechord.errors import InvalidStringIndex, InvalidTuning, UnknownTuning
from ukechord.pitch_model import PITCH_CLASS_COUNT, pitch_class_name, transpose

# ── Instrument constants ────────────────────────────────────────────────────
STRING_COUNT = 4  # strings, ordered as printed on a chord chart from left to right
FINGER_COUNT = 4  # index to pinky, the thumb is never used
MAX_FRET = 21     # a baritone ukulele has 21 frets
MAX_SPAN = 5      # anything wider is not playable with one hand


@dataclass(frozen=True)
class Tuning:
    """
    Open-string pitch classes of the instrument, one per string.

    Attributes:
        name:         Short name shown to users, e.g. "C".
        open_strings: Pitch class of each string played open.
    """

    name: str
    open_strings: tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.open_strings) != STRING_COUNT:
            raise InvalidTuning(
                f"Tuning '{self.name}' has {len(self.open_strings)} strings, "
                f"expected {STRING_COUNT}"
            )
        if any(not 0 <= pc < PITCH_CLASS_COUNT for pc in self.open_strings):
            raise InvalidTuning(
                f"Tuning '{self.name}' has pitch classes outside 0-11: {self.open_strings}"
            )

    @property
    def string_count(self) -> int:
        return len(self.open_strings)

    def string_names(self, prefer_flats: bool = False) -> list[str]:
        return [pitch_class_name(pc, prefer_flats) for pc in self.open_strings]

    def shifted(self, semitones: int, name: str | None = None) -> Tuning:
        """Return this tuning with every string raised by ``semitones``."""
        return Tuning(
            name if name is not None else self.name,
            tuple(transpose(pc, semitones) for pc in self.open_strings),
        )


def sounding_pitch_class(tuning: Tuning, string: int, fret: int) -> int:
    """
    Pitch class heard when ``string`` is pressed at ``fret`` (0 = open).

    Raises:
        InvalidStringIndex: If ``string`` is not a valid string index.
    """
    if not 0 <= string < tuning.string_count:
        raise InvalidStringIndex(string, tuning.string_count)
    return transpose(tuning.open_strings[string], fret)


# ── Supported tunings ───────────────────────────────────────────────────────

#: Standard soprano/concert/tenor tuning G C E A (re-entrant).
TUNING_C = Tuning("C", (7, 0, 4, 9))

TUNINGS: dict[str, Tuning] = {
    "C": TUNING_C,
    "D": TUNING_C.shifted(2, "D"),  # A D F# B
    "G": TUNING_C.shifted(7, "G"),  # D G B E, baritone
}


def get_tuning(name: str) -> Tuning:
    """
    Look up one of the supported tunings by name (case-insensitive).

    Raises:
        UnknownTuning: If ``name`` is not in :data:`TUNINGS`.
    """
    tuning = TUNINGS.get(name.upper())
    if tuning is None:
        raise UnknownTuning(name)
    return tuning
