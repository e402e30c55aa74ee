"""NameResolver: name the chord(s) a fret pattern sounds."""

from __future__ import annotations

import logging
from typing import Sequence

from ukechord.errors import InvalidFretPatternLength
from ukechord.instrument import Tuning
from ukechord.pitch_model import (
    DEFAULT_CHORD_TYPES,
    Chord,
    ChordTypeDictionary,
    required_pitch_classes,
)
from ukechord.voicing import Fret, Voicing

logger = logging.getLogger(__name__)


def resolve(
    fret_pattern: Sequence[Fret],
    tuning: Tuning,
    chord_types: ChordTypeDictionary = DEFAULT_CHORD_TYPES,
) -> set[Chord]:
    """
    Return every chord whose pitch-class set equals the one ``fret_pattern`` sounds.

    A pattern can have several names, e.g. ``0233`` on C tuning is both
    Csus2 and Gsus4. No match gives an empty set.

    Args:
        fret_pattern: Per string a fret (0 = open) or ``None`` for muted.
        tuning:       Tuning the pattern is played on.
        chord_types:  Chord types to consider.

    Raises:
        InvalidFretPatternLength: If the pattern does not have one entry per string.
        InvalidFretPattern:       If a fret value is negative or not an integer.
    """
    if len(fret_pattern) != tuning.string_count:
        raise InvalidFretPatternLength(len(fret_pattern), tuning.string_count)

    sounding = Voicing(tuple(fret_pattern)).pitch_classes(tuning)
    if not sounding:
        return set()

    matches: set[Chord] = set()
    # The root always sounds, so only sounding pitch classes can be roots.
    for root in sorted(sounding):
        for chord_type in chord_types.chord_types:
            chord = Chord(root, chord_type)
            if required_pitch_classes(chord) == sounding:
                matches.add(chord)

    logger.debug("Pattern %s sounds %s: %d match(es)", list(fret_pattern), sorted(sounding),
                 len(matches))
    return matches


def sorted_chords(
    chords: set[Chord], chord_types: ChordTypeDictionary = DEFAULT_CHORD_TYPES
) -> list[Chord]:
    """Order chords by root, then by the chord types' definition order."""
    rank = {chord_type: i for i, chord_type in enumerate(chord_types.chord_types)}
    return sorted(chords, key=lambda c: (c.root, rank.get(c.chord_type, len(rank))))
