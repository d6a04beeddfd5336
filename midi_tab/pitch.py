"""Absolute note specifications for pitched tab lines.

Guitar tab lines are named after the open-string pitch (e.g. ``E2``, ``A2``)
and piano tab lines after the key they play. This module converts those
names to MIDI note numbers and back, using scientific pitch notation
(middle C is ``C4`` = 60).
"""

from __future__ import annotations

import re

from pychord.constants.scales import SCALE_VAL_DICT
from pychord.utils import note_to_val

# Note spec pattern: letter, optional accidental, octave digits.
# "s"/"f" are accepted as sharp/flat so that names fit the alphanumeric
# line-name grammar (e.g. "Fs3" for F#3).
NOTE_SPEC_RE = re.compile(r"^([A-G])(#|b|s|f)?(\d+)$")

# Note letter with an optional accidental, no octave
NOTE_RE = re.compile(r"^([A-G])(#|b|s|f)?$")

# Accidental spelling to semitone offset
ACCIDENTALS: dict[str, int] = {
    "": 0,
    "#": 1,
    "s": 1,
    "b": -1,
    "f": -1,
}

MIDI_NOTE_MAX = 127


def note_offset(note: str) -> int | None:
    """Semitones from C of a note letter with an optional accidental.

    The result is not wrapped to 0-11: "Cb" is -1 and "B#" is 12, so adding
    it to an octave's C lands in the right octave.

    Parameters
    ----------
    note : str
        Note name without octave (e.g., "C", "F#", "Bf").

    Returns
    -------
    int | None
        Semitones above C, or None if ``note`` is not a note name.

    Examples
    --------
    >>> note_offset("F#")
    6
    >>> note_offset("Cb")
    -1
    >>> note_offset("H") is None
    True
    """
    match = NOTE_RE.match(note)
    if not match:
        return None
    try:
        letter_pc = note_to_val(match.group(1))
    except ValueError:
        return None
    return letter_pc + ACCIDENTALS[match.group(2) or ""]


def parse_note_spec(spec: str) -> int | None:
    """Convert an absolute note spec to a MIDI note number.

    Parameters
    ----------
    spec : str
        Note name with octave (e.g., "A2", "Bb3", "Fs4").

    Returns
    -------
    int | None
        The MIDI note number, or None if ``spec`` is not an absolute note
        spec or falls outside the MIDI range.

    Examples
    --------
    >>> parse_note_spec("C4")
    60
    >>> parse_note_spec("A2")
    45
    >>> parse_note_spec("Cs4")
    61
    >>> parse_note_spec("BD") is None
    True
    """
    match = NOTE_SPEC_RE.match(spec)
    if not match:
        return None

    offset = note_offset(match.group(1) + (match.group(2) or ""))
    if offset is None:
        return None
    number = (int(match.group(3)) + 1) * 12 + offset

    if not 0 <= number <= MIDI_NOTE_MAX:
        return None
    return number


def note_name(number: int) -> str:
    """Name a MIDI note number in scientific pitch notation.

    Parameters
    ----------
    number : int
        MIDI note number (0-127).

    Returns
    -------
    str
        Note name with octave (e.g., "C4").

    Raises
    ------
    ValueError
        If the number is outside the MIDI range.

    Examples
    --------
    >>> note_name(60)
    'C4'
    >>> note_name(50)
    'D3'
    """
    if not 0 <= number <= MIDI_NOTE_MAX:
        msg = f"MIDI note number out of range: {number}"
        raise ValueError(msg)
    return f"{SCALE_VAL_DICT['C'][number % 12]}{number // 12 - 1}"


def transpose(base: int, semitones: int) -> int:
    """Transpose a MIDI note number by a number of semitones (frets)."""
    return base + semitones
