"""Unit tests for Voicing/Fingering value types and the fret-pattern format."""

import pytest

from ukechord.errors import InvalidFretPattern, InvalidFretPatternLength
from ukechord.instrument import TUNING_C
from ukechord.voicing import Fingering, Voicing, format_fret_pattern, parse_fret_pattern


@pytest.mark.parametrize(
    "frets, min_fret, max_fret, span, lowest_fret",
    [
        ((0, 0, 0, 0), None, 0, 0, 0),
        ((1, 1, 1, 1), 1, 1, 0, 1),
        ((2, 0, 1, 3), 1, 3, 2, 0),
        ((5, 5, 5, 6), 5, 6, 1, 5),
        ((3, 0, 0, 12), 3, 12, 9, 0),
        ((None, 2, 3, 2), 2, 3, 1, 2),
        ((None, None, None, None), None, 0, 0, None),
    ],
)
def test_fret_statistics(
    frets: tuple, min_fret: int | None, max_fret: int, span: int, lowest_fret: int | None
) -> None:
    voicing = Voicing(frets)
    assert voicing.min_fret == min_fret
    assert voicing.max_fret == max_fret
    assert voicing.span == span
    assert voicing.lowest_fret == lowest_fret


def test_pitch_classes_skip_muted_strings() -> None:
    assert Voicing.of(None, 2, 3, 2).pitch_classes(TUNING_C) == {2, 7, 11}
    assert Voicing.of(0, 0, 0, 3).pitch_classes(TUNING_C) == {7, 0, 4}


def test_voicing_needs_one_entry_per_string() -> None:
    with pytest.raises(InvalidFretPatternLength):
        Voicing.of(1, 2, 3)


@pytest.mark.parametrize("bad", [-1, 1.5, "2", True])
def test_voicing_rejects_bad_fret_values(bad: object) -> None:
    with pytest.raises(InvalidFretPattern):
        Voicing.of(bad, 0, 0, 0)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "smaller, larger",
    [
        ((0, 0, 0, 0), (0, 0, 0, 1)),
        ((0, 3, 3, 3), (0, 0, 3, 6)),
        ((0, 0, 8, 6), (0, 7, 8, 6)),
        ((0, 0, 0, None), (0, 0, 0, 3)),
        ((0, 2, 3, 2), (None, 2, 3, 2)),
        ((0, 2, None, 2), (0, 2, 3, 2)),
    ],
)
def test_canonical_order(smaller: tuple, larger: tuple) -> None:
    assert Voicing(smaller).sort_key() < Voicing(larger).sort_key()


@pytest.mark.parametrize(
    "text, frets",
    [
        ("2220", [2, 2, 2, 0]),
        ("2 2 2 0", [2, 2, 2, 0]),
        ("7 8 9 10", [7, 8, 9, 10]),
        ("x232", [None, 2, 3, 2]),
        ("X 2 3 2", [None, 2, 3, 2]),
        (" 0003 ", [0, 0, 0, 3]),
    ],
)
def test_parse_fret_pattern(text: str, frets: list) -> None:
    assert parse_fret_pattern(text) == frets


@pytest.mark.parametrize("text", ["", "Cm", "222", "22201", "2 2 -2 0", "2²20"])
def test_parse_fret_pattern_rejects_malformed_text(text: str) -> None:
    with pytest.raises(InvalidFretPattern):
        parse_fret_pattern(text)


def test_parse_fret_pattern_reports_wrong_length() -> None:
    with pytest.raises(InvalidFretPatternLength):
        parse_fret_pattern("22201")


@pytest.mark.parametrize(
    "frets, text",
    [([2, 2, 2, 0], "2220"), ([None, 2, 3, 2], "x232"), ([7, 8, 9, 10], "7 8 9 10")],
)
def test_format_fret_pattern(frets: list, text: str) -> None:
    assert format_fret_pattern(frets) == text
    assert str(Voicing(tuple(frets))) == text


def test_fingering_positions_record_first_string_of_a_barre() -> None:
    voicing = Voicing.of(2, 2, 2, 3)
    fingering = Fingering((1, 1, 1, 2))
    assert fingering.positions(voicing) == {1: (0, 2), 2: (3, 3)}
    assert fingering.frets_by_finger(voicing) == {1: {2}, 2: {3}}


@pytest.mark.parametrize("fingers", [(0, 1, 2), (0, 1, 2, 5), (-1, 0, 0, 0)])
def test_fingering_validates_fingers(fingers: tuple) -> None:
    with pytest.raises(ValueError):
        Fingering(fingers)
