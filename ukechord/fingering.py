"""FingeringAssigner: which left-hand finger presses each string of a voicing."""

from ukechord.voicing import Fingering, Voicing

OPEN_OR_MUTED = 0


def assign_fingering(voicing: Voicing) -> Fingering:
    """
    Assign fingers 1, 2, 3, ... to the distinct pressed frets in ascending order.

    Every string pressed at the same fret receives the same finger, so a
    shared fret becomes a barre. Fingers are handed out per fret rather than
    per string, hence no finger can ever end up on two different frets.
    Open and muted strings get finger 0.

    Args:
        voicing: Any voicing; at most four distinct frets can be pressed on
                 four strings, so a finger is always available.

    Returns:
        Fingering parallel to ``voicing.frets``.
    """
    finger_for_fret = {
        fret: finger for finger, fret in enumerate(sorted(set(voicing.pressed_frets)), start=1)
    }
    return Fingering(
        tuple(finger_for_fret.get(fret, OPEN_OR_MUTED) if fret else OPEN_OR_MUTED
              for fret in voicing.frets)
    )


def is_valid_fingering(voicing: Voicing, fingering: Fingering) -> bool:
    """
    Check a fingering against a voicing.

    Pressed strings need a finger and open/muted strings none, no finger may
    sit on two different frets, and higher frets need higher fingers.
    """
    for fret, finger in zip(voicing.frets, fingering.fingers):
        if bool(fret) != bool(finger):
            return False

    frets_by_finger = fingering.frets_by_finger(voicing)
    if any(len(frets) != 1 for frets in frets_by_finger.values()):
        return False

    ordered = sorted((next(iter(frets)), finger) for finger, frets in frets_by_finger.items())
    return all(f1 < f2 for (_, f1), (_, f2) in zip(ordered, ordered[1:]))
