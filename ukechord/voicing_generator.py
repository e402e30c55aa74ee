"""VoicingGenerator: every way to play a chord within a region of the fretboard."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import NamedTuple

from ukechord.errors import InvalidConstraints
from ukechord.fingering import assign_fingering
from ukechord.instrument import STRING_COUNT, Tuning, sounding_pitch_class
from ukechord.pitch_model import Chord, required_pitch_classes
from ukechord.voicing import MUTED, Fingering, Fret, Voicing

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VoicingConfig:
    """
    Region of the fretboard a voicing must fit into.

    Attributes:
        min_fret:    Lowest fret that may be pressed (open strings are always
                     allowed next to pressed frets; an all-open voicing only
                     when this is 0).
        max_fret:    Highest fret that may be pressed.
        max_span:    Largest distance between the lowest and highest pressed fret.
        allow_muted: Whether strings may be left unplayed (off by default).
    """

    min_fret: int = 0
    max_fret: int = 12
    max_span: int = 4
    allow_muted: bool = False

    def validate(self) -> None:
        """
        Raises:
            InvalidConstraints: For negative values or ``min_fret > max_fret``.
        """
        for name in ("min_fret", "max_fret", "max_span"):
            if getattr(self, name) < 0:
                raise InvalidConstraints(f"{name} must not be negative, got {getattr(self, name)}")
        if self.min_fret > self.max_fret:
            raise InvalidConstraints(
                f"min_fret ({self.min_fret}) is greater than max_fret ({self.max_fret})"
            )


class VoicingCandidate(NamedTuple):
    """A voicing together with the fingering used to play it."""

    voicing: Voicing
    fingering: Fingering


class VoicingGenerator:
    """
    Enumerates the voicings of a chord on one tuning under one :class:`VoicingConfig`.

    Algorithm overview
    ------------------
    Strings are filled in one at a time (depth-first). Each string may only
    take values that sound a chord tone, or be muted, so a partial voicing
    never holds a foreign tone. A branch is cut as soon as

    1. the pressed frets already exceed ``max_span``, or
    2. the strings left cannot cover the chord tones still missing.

    Complete voicings that sound exactly the chord's pitch-class set are
    kept, deduplicated and sorted into canonical order (lowest pressed fret,
    span, frets left to right). :meth:`generate_exhaustive` walks the full
    cross product instead and yields the same result; it exists as a
    reference for tests.
    """

    def __init__(self, tuning: Tuning, config: VoicingConfig | None = None) -> None:
        """
        Args:
            tuning: Open-string pitch classes of the instrument.
            config: Fretboard constraints; defaults to :class:`VoicingConfig`.

        Raises:
            InvalidConstraints: If the constraints contradict each other.
        """
        self.tuning = tuning
        self.config = config if config is not None else VoicingConfig()
        self.config.validate()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _playable_frets(self) -> list[int]:
        """Open string plus every fret between the configured bounds."""
        return [0, *range(max(1, self.config.min_fret), self.config.max_fret + 1)]

    def _string_options(self, string: int, required: frozenset[int]) -> list[Fret]:
        options: list[Fret] = [
            fret
            for fret in self._playable_frets()
            if sounding_pitch_class(self.tuning, string, fret) in required
        ]
        if self.config.allow_muted:
            options.append(MUTED)
        return options

    def _accepts(self, voicing: Voicing, required: frozenset[int]) -> bool:
        """Full constraint check of a complete voicing."""
        cfg = self.config
        if not cfg.allow_muted and voicing.muted_count:
            return False
        if voicing.max_fret > cfg.max_fret:
            return False
        if voicing.min_fret is None:
            if cfg.min_fret != 0:
                return False
        elif voicing.min_fret < cfg.min_fret:
            return False
        if voicing.span > cfg.max_span:
            return False
        return voicing.pitch_classes(self.tuning) == required

    def _search(
        self,
        options: list[list[Fret]],
        required: frozenset[int],
        frets: list[Fret],
        covered: frozenset[int],
        low: int | None,
        high: int | None,
        found: list[Voicing],
    ) -> None:
        string = len(frets)
        if string == STRING_COUNT:
            voicing = Voicing(tuple(frets))
            if covered == required and self._accepts(voicing, required):
                found.append(voicing)
            return

        # Not enough strings left to sound the missing chord tones.
        if len(required - covered) > STRING_COUNT - string:
            return

        for fret in options[string]:
            new_low, new_high, new_covered = low, high, covered
            if fret:
                new_low = fret if low is None else min(low, fret)
                new_high = fret if high is None else max(high, fret)
                if new_high - new_low > self.config.max_span:
                    continue
            if fret is not None:
                new_covered = covered | {sounding_pitch_class(self.tuning, string, fret)}

            frets.append(fret)
            self._search(options, required, frets, new_covered, new_low, new_high, found)
            frets.pop()

    def _finish(self, chord: Chord, voicings: list[Voicing]) -> list[VoicingCandidate]:
        unique = sorted(dict.fromkeys(voicings), key=Voicing.sort_key)
        logger.debug(
            "%s: %d voicing(s) on tuning %s with %s", chord.symbol, len(unique), self.tuning.name,
            self.config,
        )
        return [VoicingCandidate(v, assign_fingering(v)) for v in unique]

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def generate(self, chord: Chord) -> list[VoicingCandidate]:
        """
        Return all voicings of ``chord`` satisfying the constraints.

        Args:
            chord: The chord to play.

        Returns:
            Candidates in canonical order; empty if the chord cannot be
            played within the constraints.
        """
        required = required_pitch_classes(chord)
        options = [self._string_options(s, required) for s in range(STRING_COUNT)]

        found: list[Voicing] = []
        self._search(options, required, [], frozenset(), None, None, found)
        return self._finish(chord, found)

    def generate_exhaustive(self, chord: Chord) -> list[VoicingCandidate]:
        """Same result as :meth:`generate`, by filtering the full cross product."""
        required = required_pitch_classes(chord)
        domain: list[Fret] = [MUTED, *range(self.config.max_fret + 1)]
        found = [
            voicing
            for voicing in map(Voicing, itertools.product(domain, repeat=STRING_COUNT))
            if self._accepts(voicing, required)
        ]
        return self._finish(chord, found)


def generate(
    chord: Chord,
    tuning: Tuning,
    min_fret: int = 0,
    max_fret: int = 12,
    max_span: int = 4,
    allow_muted: bool = False,
) -> list[VoicingCandidate]:
    """Shortcut for ``VoicingGenerator(tuning, VoicingConfig(...)).generate(chord)``."""
    config = VoicingConfig(min_fret, max_fret, max_span, allow_muted)
    return VoicingGenerator(tuning, config).generate(chord)
