"""Modifier codes understood by the score.

Modifiers are short strings passed alongside tab text, in the style of
MIDI::Simple: a duration (``qn``, ``sn``, ``ten`` ...), a channel
(``c9``), a volume (``V96``) or an octave (``o4``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from fractions import Fraction
from typing import Literal

from midi_tab.errors import ModifierError

ModifierKind = Literal["duration", "ticks", "channel", "volume", "octave"]

# Base durations in quarter notes
DURATIONS: dict[str, Fraction] = {
    "wn": Fraction(4),
    "hn": Fraction(2),
    "qn": Fraction(1),
    "en": Fraction(1, 2),
    "sn": Fraction(1, 4),
    "tn": Fraction(1, 8),
}

# Duration prefixes: dotted, double dotted, triplet
DURATION_PREFIXES: dict[str, Fraction] = {
    "": Fraction(1),
    "d": Fraction(3, 2),
    "dd": Fraction(7, 4),
    "t": Fraction(2, 3),
}

DURATION_RE = re.compile(r"^(dd|d|t)?(wn|hn|qn|en|sn|tn)$")
TICKS_RE = re.compile(r"^d(\d+)$")
CHANNEL_RE = re.compile(r"^c(\d+)$")
VOLUME_RE = re.compile(r"^V(\d+)$")
OCTAVE_RE = re.compile(r"^o(\d+)$")

# Inclusive ranges for the numeric modifiers
LIMITS: dict[str, tuple[int, int]] = {
    "channel": (0, 15),
    "volume": (0, 127),
    "octave": (0, 10),
}


@dataclass(frozen=True)
class Modifier:
    """A parsed modifier code.

    Parameters
    ----------
    kind : ModifierKind
        What the modifier changes.
    value : Fraction | int
        Quarter notes for "duration", ticks for "ticks", otherwise the
        channel, volume or octave number.
    """

    kind: ModifierKind
    value: Fraction | int


def _bounded(kind: str, raw: str, code: str) -> Modifier:
    value = int(raw)
    low, high = LIMITS[kind]
    if not low <= value <= high:
        msg = f"{kind.capitalize()} out of range in modifier: {code}"
        raise ModifierError(msg)
    return Modifier(kind=kind, value=value)  # type: ignore[arg-type]


def parse_modifier(code: str) -> Modifier:
    """Parse one modifier code.

    Parameters
    ----------
    code : str
        The modifier (e.g., "sn", "ten", "c9", "V96").

    Returns
    -------
    Modifier
        The parsed modifier.

    Raises
    ------
    ModifierError
        If the code is not recognized or out of range.

    Examples
    --------
    >>> parse_modifier("ten")
    Modifier(kind='duration', value=Fraction(1, 3))
    >>> parse_modifier("c9")
    Modifier(kind='channel', value=9)
    """
    match = DURATION_RE.match(code)
    if match:
        prefix, name = match.group(1) or "", match.group(2)
        return Modifier(kind="duration", value=DURATIONS[name] * DURATION_PREFIXES[prefix])

    match = TICKS_RE.match(code)
    if match:
        return Modifier(kind="ticks", value=int(match.group(1)))

    for kind, pattern in (
        ("channel", CHANNEL_RE),
        ("volume", VOLUME_RE),
        ("octave", OCTAVE_RE),
    ):
        match = pattern.match(code)
        if match:
            return _bounded(kind, match.group(1), code)

    msg = f"Unknown modifier: {code}"
    raise ModifierError(msg)
