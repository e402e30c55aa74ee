"""VoiceLeadingOptimizer: pick the smoothest sequence of voicings for a progression."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ukechord.errors import InvalidConstraints, NoVoicingAvailable
from ukechord.instrument import FINGER_COUNT, Tuning
from ukechord.pitch_model import Chord
from ukechord.voicing import Voicing
from ukechord.voicing_generator import VoicingCandidate, VoicingConfig, VoicingGenerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CostWeights:
    """
    Relative importance of the two parts of a transition cost.

    Sound comes first, so the tonal term weighs more by default; the
    fingering term mostly separates voicings that sound equally close.
    """

    tonal: float = 1.0
    fingering: float = 0.5

    def __post_init__(self) -> None:
        if self.tonal < 0 or self.fingering < 0:
            raise InvalidConstraints(f"Cost weights must not be negative: {self}")


@dataclass(frozen=True)
class TransitionCosts:
    """Flat penalties for moves that have no meaningful semitone or fret distance."""

    muted: int = 2           # a string starts or stops sounding
    open: int = 1            # a string moves between open and pressed
    finger_placed: int = 1   # a finger is put down or lifted


def tonal_distance(a: Voicing, b: Voicing, costs: TransitionCosts = TransitionCosts()) -> int:
    """
    Semitones each string moves between two voicings, summed over strings.

    Strings are compared positionally. Moves from or to a muted string cost
    ``costs.muted``, moves between open and pressed cost ``costs.open``.
    """
    total = 0
    for fret_a, fret_b in zip(a.frets, b.frets):
        if fret_a == fret_b:
            continue
        if fret_a is None or fret_b is None:
            total += costs.muted
        elif fret_a == 0 or fret_b == 0:
            total += costs.open
        else:
            total += abs(fret_a - fret_b)
    return total


def fingering_distance(
    a: VoicingCandidate, b: VoicingCandidate, costs: TransitionCosts = TransitionCosts()
) -> int:
    """
    How far the fingers travel from one fingering to the next.

    A finger kept in place costs nothing, a finger that moves costs its fret
    distance plus its string distance, a finger placed or lifted costs
    ``costs.finger_placed``.
    """
    positions_a = a.fingering.positions(a.voicing)
    positions_b = b.fingering.positions(b.voicing)

    total = 0
    for finger in range(1, FINGER_COUNT + 1):
        pos_a, pos_b = positions_a.get(finger), positions_b.get(finger)
        if pos_a is None and pos_b is None:
            continue
        if pos_a is None or pos_b is None:
            total += costs.finger_placed
            continue
        (string_a, fret_a), (string_b, fret_b) = pos_a, pos_b
        total += abs(fret_a - fret_b) + abs(string_a - string_b)
    return total


class VoiceLeadingOptimizer:
    """
    Selects one voicing per chord so the summed transition cost is minimal.

    Algorithm overview
    ------------------
    The candidates of chord *i* form layer *i* of a graph; every candidate of
    layer *i* is connected to every candidate of layer *i + 1* by an edge
    weighted with :meth:`transition_cost`. Candidates carry no cost of their
    own. A backward pass keeps, per candidate, the cheapest cost from it to
    the end of the sequence and its best successor; the first layer's
    cheapest candidate is then followed forward to the last layer.

    ``numpy.argmin`` returns the first of several equal minima. Walking
    forward from the first chord, every choice among equally cheap paths
    therefore goes to the candidate that comes first in canonical order
    (lower frets first), so of all optimal paths the one with the smallest
    candidate indices, compared chord by chord, is returned.
    """

    def __init__(
        self,
        weights: CostWeights | None = None,
        costs: TransitionCosts | None = None,
    ) -> None:
        self.weights = weights if weights is not None else CostWeights()
        self.costs = costs if costs is not None else TransitionCosts()

    # ------------------------------------------------------------------
    # Cost model
    # ------------------------------------------------------------------

    def transition_cost(self, a: VoicingCandidate, b: VoicingCandidate) -> float:
        """Weighted sum of tonal and fingering distance from ``a`` to ``b``."""
        return (
            self.weights.tonal * tonal_distance(a.voicing, b.voicing, self.costs)
            + self.weights.fingering * fingering_distance(a, b, self.costs)
        )

    def cost_matrix(
        self, left: Sequence[VoicingCandidate], right: Sequence[VoicingCandidate]
    ) -> np.ndarray:
        """Transition costs, shape ``(len(left), len(right))``."""
        return np.array(
            [[self.transition_cost(a, b) for b in right] for a in left],
            dtype=float,
        ).reshape(len(left), len(right))

    def path_cost(self, path: Sequence[VoicingCandidate]) -> float:
        """Total cost of consecutive transitions along ``path``."""
        return float(sum(self.transition_cost(a, b) for a, b in zip(path, path[1:])))

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def select_path(
        self, candidate_sets: Sequence[Sequence[VoicingCandidate]]
    ) -> list[VoicingCandidate]:
        """
        Run the layered shortest-path search over precomputed candidates.

        Args:
            candidate_sets: Per chord, its candidates in canonical order.

        Returns:
            One candidate per chord; empty for an empty sequence.

        Raises:
            NoVoicingAvailable: If any chord has no candidate.
        """
        if not candidate_sets:
            return []
        for index, candidates in enumerate(candidate_sets):
            if not candidates:
                raise NoVoicingAvailable(index)

        # cost[j]: cheapest remaining cost from candidate j of the current layer.
        cost = np.zeros(len(candidate_sets[-1]))
        successors: list[np.ndarray] = []

        for cur, nxt in reversed(list(zip(candidate_sets, candidate_sets[1:]))):
            total = self.cost_matrix(cur, nxt) + cost[np.newaxis, :]
            best_next = np.argmin(total, axis=1)
            cost = total[np.arange(len(cur)), best_next]
            successors.append(best_next)
        successors.reverse()

        index = int(np.argmin(cost))
        logger.debug("Best voice leading over %d chord(s) costs %.2f", len(candidate_sets),
                     cost[index])

        indices = [index]
        for best_next in successors:
            index = int(best_next[index])
            indices.append(index)

        return [candidates[i] for candidates, i in zip(candidate_sets, indices)]

    def optimize(
        self,
        chords: Sequence[Chord],
        tuning: Tuning,
        config: VoicingConfig | None = None,
    ) -> list[VoicingCandidate]:
        """
        Generate the candidates of every chord, then select the cheapest path.

        Raises:
            InvalidConstraints: If ``config`` is contradictory.
            NoVoicingAvailable: If a chord cannot be played under ``config``;
                                carries the chord's index in ``chords``.
        """
        generator = VoicingGenerator(tuning, config)

        candidate_sets: list[list[VoicingCandidate]] = []
        for index, chord in enumerate(chords):
            candidates = generator.generate(chord)
            if not candidates:
                raise NoVoicingAvailable(index, chord)
            candidate_sets.append(candidates)

        return self.select_path(candidate_sets)


def optimize(
    chords: Sequence[Chord],
    tuning: Tuning,
    min_fret: int = 0,
    max_fret: int = 12,
    max_span: int = 4,
    weights: CostWeights | None = None,
    allow_muted: bool = False,
) -> list[VoicingCandidate]:
    """Shortcut for :meth:`VoiceLeadingOptimizer.optimize` with plain constraint values."""
    config = VoicingConfig(min_fret, max_fret, max_span, allow_muted)
    return VoiceLeadingOptimizer(weights).optimize(chords, tuning, config)
