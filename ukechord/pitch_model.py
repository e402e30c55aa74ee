"""PitchModel: pitch-class arithmetic, chord types and chord symbols."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from ukechord.errors import UnknownChordSymbol

# ── Pitch classes ───────────────────────────────────────────────────────────
PITCH_CLASS_COUNT = 12

# Chromatic pitch class names (index 0 = C)
NOTE_NAMES: list[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
FLAT_NOTE_NAMES: list[str] = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]

_NATURALS: dict[str, int] = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}
_ACCIDENTALS: dict[str, int] = {"": 0, "#": 1, "♯": 1, "b": -1, "♭": -1}

# Root letter (case-sensitive), optional accidental, then the chord suffix.
_CHORD_SYMBOL_RE = re.compile(r"^([A-G])([#♯b♭]?)(.*)$")


def transpose(pitch_class: int, semitones: int) -> int:
    """Return the pitch class ``semitones`` above (or below, if negative) ``pitch_class``."""
    return (pitch_class + semitones) % PITCH_CLASS_COUNT


def pitch_class_name(pitch_class: int, prefer_flats: bool = False) -> str:
    """Human-readable name of a pitch class, e.g. 'C#' or 'Db'."""
    names = FLAT_NOTE_NAMES if prefer_flats else NOTE_NAMES
    return names[pitch_class % PITCH_CLASS_COUNT]


def parse_note(symbol: str) -> int:
    """
    Parse a note name such as ``C``, ``F#`` or ``Bb`` into a pitch class.

    Note letters are case-sensitive: ``c`` is not a note.

    Raises:
        UnknownChordSymbol: If ``symbol`` is not a note name.
    """
    match = _CHORD_SYMBOL_RE.match(symbol)
    if match is None or match.group(3):
        raise UnknownChordSymbol(symbol)
    letter, accidental, _suffix = match.groups()
    return transpose(_NATURALS[letter], _ACCIDENTALS[accidental])


# ── Chord types ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ChordType:
    """
    A named set of intervals above a chord root.

    Attributes:
        name:      Canonical English name, e.g. "minor 7th".
        intervals: Unique semitone offsets from the root, ascending, 0 first.
        aliases:   Accepted suffix spellings; the first is the canonical suffix.
    """

    name: str
    intervals: tuple[int, ...]
    aliases: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.aliases:
            raise ValueError(f"Chord type '{self.name}' needs at least one alias")
        if not self.intervals or self.intervals[0] != 0:
            raise ValueError(f"Chord type '{self.name}' must start at the root (0)")
        if len(set(self.intervals)) != len(self.intervals) or any(
            not 0 <= i < PITCH_CLASS_COUNT for i in self.intervals
        ):
            raise ValueError(f"Chord type '{self.name}' has invalid intervals {self.intervals}")

    @property
    def suffix(self) -> str:
        return self.aliases[0]


#: Every chord type fits on four strings (at most four distinct tones).
CHORD_TYPES: tuple[ChordType, ...] = (
    ChordType("major", (0, 4, 7), ("", "maj", "M")),
    ChordType("major 7th", (0, 4, 7, 11), ("maj7", "M7", "Maj7", "Δ7", "Δ")),
    ChordType("major 6th", (0, 4, 7, 9), ("6", "maj6", "M6")),
    ChordType("dominant 7th", (0, 4, 7, 10), ("7", "dom7")),
    ChordType("suspended 4th", (0, 5, 7), ("sus4", "sus")),
    ChordType("suspended 2nd", (0, 2, 7), ("sus2",)),
    ChordType("dominant 7th suspended 4th", (0, 5, 7, 10), ("7sus4", "7sus")),
    ChordType("dominant 7th suspended 2nd", (0, 2, 7, 10), ("7sus2",)),
    ChordType("minor", (0, 3, 7), ("m", "min", "-")),
    ChordType("minor 7th", (0, 3, 7, 10), ("m7", "min7", "-7")),
    ChordType("minor/major 7th", (0, 3, 7, 11), ("mMaj7", "mM7", "minMaj7", "m(maj7)")),
    ChordType("diminished", (0, 3, 6), ("dim", "°")),
    ChordType("diminished 7th", (0, 3, 6, 9), ("dim7", "°7")),
    ChordType("half-diminished 7th", (0, 3, 6, 10), ("m7b5", "ø", "ø7", "-7b5")),
    ChordType("augmented", (0, 4, 8), ("aug", "+")),
    ChordType("augmented 7th", (0, 4, 8, 10), ("aug7", "+7", "7#5")),
    ChordType("augmented major 7th", (0, 4, 8, 11), ("augMaj7", "+M7", "maj7#5")),
)

# Unicode spellings folded onto ASCII before alias lookup.
_SUFFIX_TRANSLATION = str.maketrans({"♯": "#", "♭": "b"})


def normalize_suffix(suffix: str) -> str:
    """Strip whitespace and fold unicode accidentals; case is preserved."""
    return "".join(suffix.split()).translate(_SUFFIX_TRANSLATION)


class ChordTypeDictionary(Mapping[str, ChordType]):
    """
    Read-only mapping from normalized suffix alias to :class:`ChordType`.

    Built once and passed explicitly to the functions that resolve chord
    symbols. Iteration order over :attr:`chord_types` is the definition order,
    which is also the order used when several names match a fingering.
    """

    def __init__(self, chord_types: Iterable[ChordType]) -> None:
        types = tuple(chord_types)
        aliases: dict[str, ChordType] = {}
        for chord_type in types:
            for alias in chord_type.aliases:
                key = normalize_suffix(alias)
                if key in aliases and aliases[key] != chord_type:
                    raise ValueError(
                        f"Alias '{alias}' is used by both '{aliases[key].name}' "
                        f"and '{chord_type.name}'"
                    )
                aliases[key] = chord_type
        self._types = types
        self._aliases = MappingProxyType(aliases)

    @property
    def chord_types(self) -> tuple[ChordType, ...]:
        return self._types

    def __getitem__(self, alias: str) -> ChordType:
        return self._aliases[alias]

    def __iter__(self) -> Iterator[str]:
        return iter(self._aliases)

    def __len__(self) -> int:
        return len(self._aliases)

    def resolve(self, suffix: str) -> ChordType:
        """
        Look up a chord type by suffix.

        Raises:
            UnknownChordSymbol: If no alias matches the normalized suffix.
        """
        chord_type = self._aliases.get(normalize_suffix(suffix))
        if chord_type is None:
            raise UnknownChordSymbol(suffix)
        return chord_type


DEFAULT_CHORD_TYPES = ChordTypeDictionary(CHORD_TYPES)


def resolve_chord_type(
    symbol: str, chord_types: ChordTypeDictionary = DEFAULT_CHORD_TYPES
) -> ChordType:
    """Resolve a suffix symbol (e.g. ``"maj7"``) to its :class:`ChordType`."""
    return chord_types.resolve(symbol)


# ── Chords ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Chord:
    """
    A chord: a root pitch class plus a chord type.

    Attributes:
        root:         Pitch class of the root (0=C, ..., 11=B).
        chord_type:   The chord's :class:`ChordType`.
        prefer_flats: Spell notes with flats (set when the symbol used one).
                      Ignored by equality and hashing.
    """

    root: int
    chord_type: ChordType
    prefer_flats: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        if not 0 <= self.root < PITCH_CLASS_COUNT:
            raise ValueError(f"Root pitch class must be in 0-11, got {self.root}")

    @property
    def root_symbol(self) -> str:
        return pitch_class_name(self.root, self.prefer_flats)

    @property
    def suffix(self) -> str:
        return self.chord_type.suffix

    @property
    def symbol(self) -> str:
        """Chord symbol, e.g. 'C#m7'."""
        return f"{self.root_symbol}{self.suffix}"

    @property
    def english_name(self) -> str:
        """English chord name, e.g. 'C# minor 7th'."""
        return f"{self.root_symbol} {self.chord_type.name}"

    def __str__(self) -> str:
        return f"{self.symbol} - {self.english_name}"

    def pitch_classes(self) -> frozenset[int]:
        return required_pitch_classes(self)

    def transpose(self, semitones: int) -> Chord:
        return Chord(transpose(self.root, semitones), self.chord_type, self.prefer_flats)


def required_pitch_classes(chord: Chord) -> frozenset[int]:
    """Set of pitch classes a voicing of ``chord`` must sound, and nothing else."""
    return frozenset(transpose(chord.root, i) for i in chord.chord_type.intervals)


def parse_chord(symbol: str, chord_types: ChordTypeDictionary = DEFAULT_CHORD_TYPES) -> Chord:
    """
    Parse a chord symbol such as ``"C"``, ``"F#m7"`` or ``"Bbmaj7"``.

    Raises:
        UnknownChordSymbol: If the root or the suffix is not recognised.
    """
    match = _CHORD_SYMBOL_RE.match(symbol.strip())
    if match is None:
        raise UnknownChordSymbol(symbol)
    letter, accidental, suffix = match.groups()
    try:
        chord_type = chord_types.resolve(suffix)
    except UnknownChordSymbol:
        raise UnknownChordSymbol(symbol) from None
    root = transpose(_NATURALS[letter], _ACCIDENTALS[accidental])
    return Chord(root, chord_type, prefer_flats=_ACCIDENTALS[accidental] < 0)


def parse_chord_sequence(
    text: str, chord_types: ChordTypeDictionary = DEFAULT_CHORD_TYPES
) -> list[Chord]:
    """Parse a whitespace-separated chord sequence, e.g. ``"C Am F G7"``."""
    return [parse_chord(symbol, chord_types) for symbol in text.split()]
