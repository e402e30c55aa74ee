"""ukechord CLI entry point."""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable, NoReturn

import click

from ukechord import __version__
from ukechord.chord_chart import ChordChartRenderer
from ukechord.errors import UkeChordError
from ukechord.instrument import MAX_FRET, MAX_SPAN, TUNINGS, Tuning, get_tuning
from ukechord.name_resolver import resolve, sorted_chords
from ukechord.pitch_model import Chord, parse_chord
from ukechord.voice_leading import CostWeights, VoiceLeadingOptimizer
from ukechord.voicing import parse_fret_pattern
from ukechord.voicing_generator import VoicingConfig, VoicingGenerator

DEFAULT_CONFIG = VoicingConfig()


def _fail(message: str) -> NoReturn:
    click.echo(f"ERROR: {message}", err=True)
    sys.exit(1)


def _parse_chord_argument(ctx: click.Context, param: click.Parameter, value: str) -> Chord:
    try:
        return parse_chord(value)
    except UkeChordError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param) from exc


def _parse_chord_sequence_argument(
    ctx: click.Context, param: click.Parameter, value: tuple[str, ...]
) -> list[Chord]:
    # Accept both `C F G` and a single quoted "C F G".
    symbols = " ".join(value).split()
    if not symbols:
        raise click.BadParameter("at least one chord is required", ctx=ctx, param=param)
    try:
        return [parse_chord(symbol) for symbol in symbols]
    except UkeChordError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param) from exc


def _voicing_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by every command that searches for voicings."""
    options = [
        click.option(
            "--min-fret",
            type=click.IntRange(0, MAX_FRET),
            default=DEFAULT_CONFIG.min_fret,
            show_default=True,
            metavar="FRET_ID",
            help="Minimal fret (= minimal position) from which to play the chord.",
        ),
        click.option(
            "--max-fret",
            type=click.IntRange(0, MAX_FRET),
            default=DEFAULT_CONFIG.max_fret,
            show_default=True,
            metavar="FRET_ID",
            help="Maximal fret up to which to play the chord.",
        ),
        click.option(
            "--max-span",
            type=click.IntRange(0, MAX_SPAN),
            default=DEFAULT_CONFIG.max_span,
            show_default=True,
            metavar="FRET_COUNT",
            help="Maximal span between the first and the last fret pressed down.",
        ),
        click.option(
            "--transpose",
            type=int,
            default=0,
            show_default=True,
            metavar="SEMITONES",
            help="Number of semitones to add (e.g. 1) or to subtract (e.g. -1).",
        ),
        click.option(
            "--mute/--no-mute",
            default=DEFAULT_CONFIG.allow_muted,
            show_default=True,
            help="Also list voicings that leave strings unplayed.",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(
    context_settings={"help_option_names": ["-h", "--help"], "auto_envvar_prefix": "UKECHORD"}
)
@click.version_option(version=__version__, prog_name="ukechord")
@click.option(
    "--tuning",
    "-t",
    type=click.Choice(sorted(TUNINGS), case_sensitive=False),
    default="C",
    show_default=True,
    help="Type of tuning to be used (C = G C E A, D = A D F# B, G = D G B E).",
)
@click.option("--verbose", "-v", is_flag=True, help="Log search details to stderr.")
@click.pass_context
def main(ctx: click.Context, tuning: str, verbose: bool) -> None:
    """ukechord — ukulele chord charts, chord names and voice leading."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = get_tuning(tuning)


# ── chart subcommand ───────────────────────────────────────────────────────────

@main.command()
@click.argument("chord", callback=_parse_chord_argument)
@click.option(
    "--all",
    "-a",
    "show_all",
    is_flag=True,
    help="Print out all voicings of CHORD that fulfill the given conditions.",
)
@_voicing_options
@click.pass_obj
def chart(
    tuning: Tuning,
    chord: Chord,
    show_all: bool,
    min_fret: int,
    max_fret: int,
    max_span: int,
    transpose: int,
    mute: bool,
) -> None:
    """
    Chord chart lookup.

    CHORD is the name of the chord to be shown, e.g. C, F#m7 or Bbsus2.

    \b
    Examples:
      ukechord chart G
      ukechord chart --all --max-fret 5 C
      ukechord --tuning D chart Am7 --transpose -2
    """
    chord = chord.transpose(transpose)
    config = VoicingConfig(min_fret, max_fret, max_span, mute)

    try:
        candidates = VoicingGenerator(tuning, config).generate(chord)
    except UkeChordError as exc:
        _fail(str(exc))

    if not candidates:
        click.echo("No matching chord voicing was found")
        return

    click.echo(f"[{chord}]\n")
    renderer = ChordChartRenderer(tuning, max_span)
    for voicing, fingering in candidates if show_all else candidates[:1]:
        click.echo(renderer.render(voicing, fingering, chord, show_header=False))


# ── name subcommand ────────────────────────────────────────────────────────────

@main.command()
@click.argument("fret_pattern")
@click.pass_obj
def name(tuning: Tuning, fret_pattern: str) -> None:
    """
    Chord name lookup.

    FRET_PATTERN is a compact chart of the frets pressed, one entry per
    string from G to A on C tuning: 2220, x232 or "7 8 9 10".
    """
    try:
        frets = parse_fret_pattern(fret_pattern)
    except UkeChordError as exc:
        raise click.BadParameter(str(exc), param_hint="FRET_PATTERN") from exc

    chords = sorted_chords(resolve(frets, tuning))
    if not chords:
        click.echo("No matching chord was found")
        return

    for chord in chords:
        click.echo(str(chord))


# ── voice-lead subcommand ──────────────────────────────────────────────────────

@main.command(name="voice-lead")
@click.argument("chords", nargs=-1, required=True, callback=_parse_chord_sequence_argument)
@_voicing_options
@click.option(
    "--tonal-weight",
    type=click.FloatRange(min=0),
    default=CostWeights().tonal,
    show_default=True,
    help="Weight of the semitone distance between consecutive voicings.",
)
@click.option(
    "--fingering-weight",
    type=click.FloatRange(min=0),
    default=CostWeights().fingering,
    show_default=True,
    help="Weight of the finger movement between consecutive voicings.",
)
@click.pass_obj
def voice_lead(
    tuning: Tuning,
    chords: list[Chord],
    min_fret: int,
    max_fret: int,
    max_span: int,
    transpose: int,
    mute: bool,
    tonal_weight: float,
    fingering_weight: float,
) -> None:
    """
    Voice leading for a sequence of chords.

    CHORDS is the chord sequence; one voicing is chosen per chord so that
    moving from one to the next is as smooth as possible.

    \b
    Examples:
      ukechord voice-lead C F G
      ukechord voice-lead "C Am F G7" --max-fret 7
    """
    chords = [chord.transpose(transpose) for chord in chords]
    config = VoicingConfig(min_fret, max_fret, max_span, mute)
    optimizer = VoiceLeadingOptimizer(CostWeights(tonal_weight, fingering_weight))

    try:
        path = optimizer.optimize(chords, tuning, config)
    except UkeChordError as exc:
        _fail(str(exc))

    renderer = ChordChartRenderer(tuning, max_span)
    for chord, (voicing, fingering) in zip(chords, path):
        click.echo(renderer.render(voicing, fingering, chord))
