"""ASCII chord charts for a voicing and its fingering."""

from __future__ import annotations

from ukechord.instrument import Tuning
from ukechord.pitch_model import Chord, pitch_class_name
from ukechord.voicing import Fingering, Voicing

MIN_CHART_WIDTH = 4  # frets shown on a chart


class ChordChartRenderer:
    """
    Renders a voicing as a horizontal fretboard, highest string on top.

    Example (C major, C tuning)::

        A  ||---|---|-1-|---|- C
        E o||---|---|---|---|- E
        C o||---|---|---|---|- C
        G o||---|---|---|---|- G

    Open strings are marked ``o``, muted strings ``x``. The pressed fret
    shows the finger number. When the chart does not start at the nut, the
    nut ``||`` becomes ``-|`` and the first fret shown is printed below.
    """

    def __init__(self, tuning: Tuning, width: int = MIN_CHART_WIDTH) -> None:
        """
        Args:
            tuning: Tuning the voicings are played on.
            width:  Number of frets to show; never less than MIN_CHART_WIDTH.
        """
        self.tuning = tuning
        self.width = max(width, MIN_CHART_WIDTH)

    def base_fret(self, voicing: Voicing) -> int:
        """First fret shown: 1 if the highest pressed fret fits, else the lowest pressed fret."""
        if voicing.max_fret <= self.width:
            return 1
        return voicing.min_fret or 1

    def _format_line(
        self,
        string: int,
        fret: int | None,
        finger: int,
        base_fret: int,
        root_width: int,
        prefer_flats: bool,
    ) -> str:
        root = pitch_class_name(self.tuning.open_strings[string], prefer_flats)
        nut = "||" if base_fret == 1 else "-|"

        if fret is None:
            sym = "x"
        elif fret == 0:
            sym = "o"
        else:
            sym = " "

        cells = "".join(
            f"-{finger if fret == i else '-'}-|" for i in range(base_fret, base_fret + self.width)
        )
        line = f"{root:<{root_width}} {sym}{nut}{cells}-"

        if fret is None:
            return line
        note = pitch_class_name(self.tuning.open_strings[string] + fret, prefer_flats)
        return f"{line} {note}"

    def render(
        self,
        voicing: Voicing,
        fingering: Fingering,
        chord: Chord | None = None,
        show_header: bool = True,
    ) -> str:
        """
        Render one chart.

        Args:
            voicing:     Frets to show.
            fingering:   Finger numbers shown on the pressed frets.
            chord:       Optional chord; picks sharp or flat note names.
            show_header: Start with a ``[C - C major]`` line when ``chord`` is given.

        Returns:
            Chart text, one line per string, ending with a newline.
        """
        prefer_flats = chord.prefer_flats if chord is not None else False
        base_fret = self.base_fret(voicing)
        root_width = max(len(name) for name in self.tuning.string_names(prefer_flats))

        lines = [
            self._format_line(string, fret, finger, base_fret, root_width, prefer_flats)
            for string, (fret, finger) in enumerate(zip(voicing.frets, fingering.fingers))
        ]
        lines.reverse()

        if base_fret > 1:
            lines.append(f"{base_fret:>{root_width + 6}}")

        if chord is not None and show_header:
            lines[:0] = [f"[{chord}]", ""]

        return "\n".join(lines) + "\n"
