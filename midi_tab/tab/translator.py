"""Line translator.

Turns the symbol string of one tab line into a sequence of time-steps, one
per character. Playable lines produce note and rest descriptors; the
control line produces control modifiers. The two are kept as separate
functions so that a control line can never be mistaken for a note stream.
"""

from __future__ import annotations

from typing import Iterator

from midi_tab.config import VolumePolicy, legacy_piano_volume, raw_volume
from midi_tab.pitch import transpose
from midi_tab.tab.models import ControlModifier, EventDescriptor, LineKind, Note, Rest

TRIPLET_SYMBOL = "3"

DIGITS = frozenset("0123456789")


def iter_control(symbols: str) -> Iterator[ControlModifier]:
    """Yield one control modifier per control line symbol."""
    for symbol in symbols:
        if symbol == TRIPLET_SYMBOL:
            yield ControlModifier.TRIPLET
        else:
            yield ControlModifier.NONE


def translate_control(symbols: str) -> tuple[ControlModifier, ...]:
    """Translate a control line.

    Parameters
    ----------
    symbols : str
        The control line symbols.

    Returns
    -------
    tuple[ControlModifier, ...]
        TRIPLET for each "3", NONE for anything else.

    Examples
    --------
    >>> [m.value for m in translate_control("-3-")]
    ['none', 'triplet', 'none']
    """
    return tuple(iter_control(symbols))


def iter_events(
    symbols: str,
    *,
    base: int | None = None,
    voice: int | None = None,
    designator: int | str | None = None,
    volume: VolumePolicy | None = None,
) -> Iterator[EventDescriptor]:
    """Yield one note or rest per symbol of a playable line.

    Exactly one of ``base`` (guitar), ``voice`` (drum) or ``designator``
    (piano) selects how a digit becomes a note:

    - ``base``: the digit is a fret, the note is ``base + digit``.
    - ``voice``: digits 1-9 hit the voice at ``volume(digit)``; "0" rests.
    - ``designator``: the digit is a volume, ``volume(digit)``.

    Any non-digit symbol is a rest.

    Parameters
    ----------
    symbols : str
        The line symbols.
    base : int | None
        Open-string MIDI note number.
    voice : int | None
        Percussion key number.
    designator : int | str | None
        Pitch used as-is for every note.
    volume : VolumePolicy | None
        Digit to volume mapping. Defaults to the raw digit for drum lines
        and to the legacy x12 scaling otherwise.

    Yields
    ------
    EventDescriptor
        A Note or Rest for each symbol.

    Raises
    ------
    ValueError
        If not exactly one of base, voice and designator is given.
    """
    selected = [arg for arg in (base, voice, designator) if arg is not None]
    if len(selected) != 1:
        msg = "Exactly one of base, voice or designator is required"
        raise ValueError(msg)

    if voice is not None:
        scale = volume or raw_volume
    else:
        scale = volume or legacy_piano_volume

    for symbol in symbols:
        if symbol not in DIGITS:
            yield Rest()
        elif base is not None:
            yield Note(designator=transpose(base, int(symbol)))
        elif voice is not None:
            digit = int(symbol)
            if digit == 0:
                yield Rest()
            else:
                yield Note(designator=voice, volume=scale(digit))
        else:
            yield Note(designator=designator, volume=scale(int(symbol)))


def translate_notes(
    symbols: str,
    *,
    base: int | None = None,
    voice: int | None = None,
    designator: int | str | None = None,
    volume: VolumePolicy | None = None,
) -> tuple[EventDescriptor, ...]:
    """Translate a playable line into note and rest descriptors.

    See :func:`iter_events` for the meaning of the arguments.

    Examples
    --------
    >>> translate_notes("5-", base=45)
    (Note(designator=50, volume=None), Rest())
    >>> translate_notes("8-0", voice=36)
    (Note(designator=36, volume=8), Rest(), Rest())
    >>> translate_notes("5", designator="A5")
    (Note(designator='A5', volume=60),)
    """
    return tuple(
        iter_events(
            symbols, base=base, voice=voice, designator=designator, volume=volume
        )
    )


def translate(
    symbols: str,
    kind: LineKind,
    base: int | str | None = None,
    volume: VolumePolicy | None = None,
) -> tuple[EventDescriptor, ...] | tuple[ControlModifier, ...]:
    """Translate a line of any kind.

    Parameters
    ----------
    symbols : str
        The line symbols.
    kind : LineKind
        "control", "percussion" or "pitched".
    base : int | str | None
        For "percussion", the voice key number. For "pitched", an int
        open-string note number (guitar) or the line name used as pitch
        (piano). Ignored for "control".
    volume : VolumePolicy | None
        Digit to volume mapping for percussion and piano lines.

    Returns
    -------
    tuple[EventDescriptor, ...] | tuple[ControlModifier, ...]
        Control modifiers for "control", descriptors otherwise.

    Raises
    ------
    ValueError
        If the kind is unknown, or a percussion line has no integer voice.
    """
    if kind == "control":
        return translate_control(symbols)
    if kind == "percussion":
        if not isinstance(base, int):
            msg = f"Percussion lines need an integer voice, got {base!r}"
            raise ValueError(msg)
        return translate_notes(symbols, voice=base, volume=volume)
    if kind == "pitched":
        if isinstance(base, int):
            return translate_notes(symbols, base=base)
        return translate_notes(symbols, designator=base, volume=volume)
    msg = f"Unknown line kind: {kind}"
    raise ValueError(msg)
