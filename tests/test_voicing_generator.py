"""Unit tests for VoicingGenerator."""

import pytest

from ukechord.errors import InvalidConstraints
from ukechord.instrument import TUNING_C, TUNINGS
from ukechord.pitch_model import parse_chord, required_pitch_classes
from ukechord.voicing import Voicing
from ukechord.voicing_generator import VoicingConfig, VoicingGenerator, generate

CHORD_SYMBOLS = ["C", "G", "Am7", "Bdim", "Fsus2", "E7", "Caug", "Dbmaj7", "F#m7b5"]


@pytest.mark.parametrize("symbol", CHORD_SYMBOLS)
@pytest.mark.parametrize(
    "config",
    [
        VoicingConfig(),
        VoicingConfig(min_fret=3, max_fret=10, max_span=3),
        VoicingConfig(max_fret=5, max_span=2, allow_muted=True),
    ],
    ids=["default", "high", "mute"],
)
def test_every_voicing_satisfies_the_constraints(symbol: str, config: VoicingConfig) -> None:
    chord = parse_chord(symbol)
    required = required_pitch_classes(chord)

    for voicing, _fingering in VoicingGenerator(TUNING_C, config).generate(chord):
        assert voicing.pitch_classes(TUNING_C) == required
        assert voicing.max_fret <= config.max_fret
        assert voicing.span <= config.max_span
        if voicing.min_fret is None:
            assert config.min_fret == 0
        else:
            assert voicing.min_fret >= config.min_fret
        if not config.allow_muted:
            assert voicing.muted_count == 0


@pytest.mark.parametrize("symbol", CHORD_SYMBOLS)
def test_output_is_sorted_and_unique(symbol: str) -> None:
    candidates = generate(parse_chord(symbol), TUNING_C)
    voicings = [c.voicing for c in candidates]
    assert len(set(voicings)) == len(voicings)
    assert voicings == sorted(voicings, key=Voicing.sort_key)


@pytest.mark.parametrize("symbol", ["C", "Am7", "Bdim", "E7", "Gsus4"])
@pytest.mark.parametrize(
    "config",
    [
        VoicingConfig(max_fret=7),
        VoicingConfig(min_fret=3, max_fret=7, max_span=2),
        VoicingConfig(max_fret=6, max_span=3, allow_muted=True),
    ],
)
def test_pruned_search_matches_exhaustive_search(symbol: str, config: VoicingConfig) -> None:
    generator = VoicingGenerator(TUNING_C, config)
    chord = parse_chord(symbol)
    assert generator.generate(chord) == generator.generate_exhaustive(chord)


def test_g_major_starts_in_open_position() -> None:
    candidates = generate(parse_chord("G"), TUNING_C, min_fret=0, max_fret=12, max_span=4)
    assert candidates
    first = candidates[0].voicing
    assert first.lowest_fret == 0
    assert first.frets == (0, 2, 3, 2)


def test_strings_are_never_muted_by_default() -> None:
    for symbol in ("C", "G", "Am", "F", "G7"):
        assert all(c.voicing.muted_count == 0 for c in generate(parse_chord(symbol), TUNING_C))


def test_muted_voicings_when_muting_is_allowed() -> None:
    voicings = [c.voicing for c in generate(parse_chord("G"), TUNING_C, allow_muted=True)]
    assert voicings[0].frets == (0, 2, None, 2)
    assert Voicing.of(0, 2, 3, 2) in voicings
    assert Voicing.of(None, 2, 3, 2) in voicings


def test_c_major_up_to_fifth_fret() -> None:
    candidates = generate(parse_chord("C"), TUNING_C, min_fret=0, max_fret=5, max_span=4)
    voicings = [c.voicing for c in candidates]
    assert len(set(voicings)) >= 4
    assert all(v.max_fret <= 5 and v.span <= 4 for v in voicings)
    assert Voicing.of(0, 0, 0, 3) in voicings
    assert Voicing.of(5, 4, 3, 3) in voicings


def test_c_major_first_voicings() -> None:
    assert generate(parse_chord("C"), TUNING_C)[0].voicing.frets == (0, 0, 0, 3)
    assert generate(parse_chord("Am"), TUNING_C)[0].voicing.frets == (2, 0, 0, 0)
    assert generate(parse_chord("F"), TUNING_C)[0].voicing.frets == (2, 0, 1, 0)
    assert generate(parse_chord("C"), TUNING_C, allow_muted=True)[0].voicing.frets == (0, 0, 0, None)


def test_candidates_carry_fingerings() -> None:
    candidates = generate(parse_chord("C"), TUNING_C)
    assert str(candidates[0].fingering) == "0001"


def test_min_fret_excludes_open_position_only_voicings() -> None:
    candidates = generate(parse_chord("C"), TUNING_C, min_fret=1)
    assert candidates
    assert all(c.voicing.min_fret is not None for c in candidates)


def test_min_fret_is_a_floor_for_pressed_frets() -> None:
    candidates = generate(parse_chord("C"), TUNING_C, min_fret=7)
    assert candidates
    assert all(min(c.voicing.pressed_frets) >= 7 for c in candidates)


def test_zero_span_means_one_pressed_fret() -> None:
    candidates = generate(parse_chord("F"), TUNING_C, max_span=0)
    assert candidates
    assert all(len(set(c.voicing.pressed_frets)) <= 1 for c in candidates)


def test_unplayable_chord_gives_empty_result() -> None:
    assert generate(parse_chord("C7"), TUNING_C, max_fret=0) == []


def test_other_tunings() -> None:
    voicings = [c.voicing for c in generate(parse_chord("D"), TUNINGS["D"])]
    assert voicings[0] == Voicing.of(0, 0, 0, 3)


@pytest.mark.parametrize(
    "config",
    [
        VoicingConfig(min_fret=5, max_fret=3),
        VoicingConfig(min_fret=-1),
        VoicingConfig(max_fret=-2),
        VoicingConfig(max_span=-1),
    ],
)
def test_contradictory_constraints_fail_fast(config: VoicingConfig) -> None:
    with pytest.raises(InvalidConstraints):
        VoicingGenerator(TUNING_C, config)


def test_generate_shortcut_validates_constraints() -> None:
    with pytest.raises(InvalidConstraints):
        generate(parse_chord("C"), TUNING_C, min_fret=6, max_fret=5)
