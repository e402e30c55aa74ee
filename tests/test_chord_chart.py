"""Unit tests for the ASCII chord chart renderer."""

from ukechord.chord_chart import MIN_CHART_WIDTH, ChordChartRenderer
from ukechord.fingering import assign_fingering
from ukechord.instrument import TUNING_C, TUNINGS
from ukechord.pitch_model import parse_chord
from ukechord.voicing import Fingering, Voicing


def _render(frets: tuple, symbol: str | None = None, width: int = MIN_CHART_WIDTH, **kwargs) -> str:
    voicing = Voicing(frets)
    chord = parse_chord(symbol) if symbol is not None else None
    renderer = ChordChartRenderer(TUNING_C, width)
    return renderer.render(voicing, assign_fingering(voicing), chord, **kwargs)


def test_open_position_chart() -> None:
    assert _render((0, 0, 0, 3), "C") == (
        "[C - C major]\n"
        "\n"
        "A  ||---|---|-1-|---|- C\n"
        "E o||---|---|---|---|- E\n"
        "C o||---|---|---|---|- C\n"
        "G o||---|---|---|---|- G\n"
    )


def test_header_can_be_left_out() -> None:
    chart = _render((0, 0, 0, 3), "C", show_header=False)
    assert chart.splitlines()[0] == "A  ||---|---|-1-|---|- C"


def test_chart_without_chord_has_no_header() -> None:
    assert not _render((2, 2, 2, 0)).startswith("[")


def test_higher_position_prints_base_fret() -> None:
    assert _render((5, 4, 3, 3)).splitlines() == [
        "A  -|-1-|---|---|---|- C",
        "E  -|-1-|---|---|---|- G",
        "C  -|---|-2-|---|---|- E",
        "G  -|---|---|-3-|---|- C",
        "      3",
    ]


def test_voicing_fitting_the_chart_starts_at_the_nut() -> None:
    renderer = ChordChartRenderer(TUNING_C)
    assert renderer.base_fret(Voicing.of(2, 4, 3, 4)) == 1
    assert renderer.base_fret(Voicing.of(0, 0, 0, 0)) == 1
    assert renderer.base_fret(Voicing.of(7, 7, 7, 5)) == 5


def test_muted_string_has_no_note() -> None:
    lines = _render((None, 2, 3, 2)).splitlines()
    assert lines[-1] == "G x||---|---|---|---|-"
    assert lines[0] == "A  ||---|-1-|---|---|- B"


def test_flat_chord_uses_flat_note_names() -> None:
    assert _render((3, 2, 1, 1), "Bb").splitlines() == [
        "[Bb - Bb major]",
        "",
        "A  ||-1-|---|---|---|- Bb",
        "E  ||-1-|---|---|---|- F",
        "C  ||---|-2-|---|---|- D",
        "G  ||---|---|-3-|---|- Bb",
    ]


def test_chart_width_has_a_minimum() -> None:
    assert ChordChartRenderer(TUNING_C, 2).width == MIN_CHART_WIDTH
    lines = _render((0, 0, 0, 3), width=5).splitlines()
    assert lines[0] == "A  ||---|---|-1-|---|---|- C"


def test_finger_numbers_come_from_the_fingering() -> None:
    renderer = ChordChartRenderer(TUNING_C)
    chart = renderer.render(Voicing.of(0, 0, 0, 3), Fingering((0, 0, 0, 3)))
    assert chart.splitlines()[0] == "A  ||---|---|-3-|---|- C"


def test_string_names_are_aligned_for_other_tunings() -> None:
    renderer = ChordChartRenderer(TUNINGS["D"])
    voicing = Voicing.of(2, 2, 2, 0)
    lines = renderer.render(voicing, assign_fingering(voicing)).splitlines()
    assert lines == [
        "B  o||---|---|---|---|- B",
        "F#  ||---|-1-|---|---|- G#",
        "D   ||---|-1-|---|---|- E",
        "A   ||---|-1-|---|---|- B",
    ]
