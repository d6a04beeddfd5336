"""Tab renderers for guitar, drum and piano tablature.

Each renderer parses a tab block, validates its line names, translates
every line and hands the sink one producer per line. The producers are
meant to be played together from the same start time; the renderers never
merge timing across lines themselves.

Modifiers passed after the tab text are applied once as a preamble and
then used as the default modifiers of every time-step. A control line
("CTL") replaces those defaults for the time-steps it marks with "3".
"""

from __future__ import annotations

import logging
import re
from typing import Sequence

from midi_tab.config import DEFAULT_CONFIG, TabConfig
from midi_tab.errors import FretRangeError, InvalidBaseError, InvalidDrumError
from midi_tab.pitch import MIDI_NOTE_MAX, note_name, parse_note_spec
from midi_tab.sink import Producer, Sink
from midi_tab.tab.models import (
    ControlModifier,
    EventDescriptor,
    LineStream,
    Note,
    RenderJob,
    TabKind,
    TabLine,
)
from midi_tab.tab.parser import parse_tab, split_control
from midi_tab.tab.translator import DIGITS, translate_control, translate_notes
from midi_tab.voices import resolve_voice

logger = logging.getLogger(__name__)

# Channel selector modifier (e.g. "c9")
CHANNEL_RE = re.compile(r"^(c\d+)$")


def resolve_modifiers(
    index: int,
    control: tuple[ControlModifier, ...],
    defaults: tuple[str, ...],
    config: TabConfig = DEFAULT_CONFIG,
) -> tuple[str, ...]:
    """Pick the modifiers for one time-step.

    Parameters
    ----------
    index : int
        The time-step.
    control : tuple[ControlModifier, ...]
        The control line's modifiers (may be shorter or longer than the
        line being played).
    defaults : tuple[str, ...]
        The caller's modifiers.
    config : TabConfig
        Supplies the triplet modifiers.

    Returns
    -------
    tuple[str, ...]
        The triplet modifiers if the control line marks ``index``,
        otherwise ``defaults``.

    Examples
    --------
    >>> control = (ControlModifier.NONE, ControlModifier.TRIPLET)
    >>> resolve_modifiers(1, control, ("sn",))
    ('ten',)
    >>> resolve_modifiers(2, control, ("sn",))
    ('sn',)
    """
    if index < len(control) and control[index] is ControlModifier.TRIPLET:
        return config.triplet_modifiers
    return defaults


def build_stream(
    name: str,
    descriptors: tuple[EventDescriptor, ...],
    control: tuple[ControlModifier, ...],
    defaults: tuple[str, ...],
    config: TabConfig = DEFAULT_CONFIG,
) -> LineStream:
    """Zip a line's descriptors with the modifiers active at each step."""
    events = tuple(
        (descriptor, resolve_modifiers(i, control, defaults, config))
        for i, descriptor in enumerate(descriptors)
    )
    return LineStream(name=name, events=events)


def promote_channel(
    modifiers: Sequence[str], default: str
) -> tuple[str, tuple[str, ...]]:
    """Find the drum channel among the caller's modifiers.

    Every channel selector is kept where it is and also copied to the front
    of the list; the last one found becomes the channel.

    Parameters
    ----------
    modifiers : Sequence[str]
        The caller's modifiers.
    default : str
        Channel used when no selector is present.

    Returns
    -------
    tuple[str, tuple[str, ...]]
        The channel and the rewritten modifier list.

    Examples
    --------
    >>> promote_channel(["sn", "c3"], "c9")
    ('c3', ('c3', 'sn', 'c3'))
    >>> promote_channel(["sn"], "c9")
    ('c9', ('sn',))
    """
    channel = default
    promoted = list(modifiers)
    for modifier in modifiers:
        match = CHANNEL_RE.match(modifier)
        if match:
            channel = match.group(1)
            promoted.insert(0, channel)
    return channel, tuple(promoted)


def check_frets(line: TabLine, base: int) -> None:
    """Reject a guitar line whose highest fret is above the MIDI range."""
    frets = [int(symbol) for symbol in line.symbols if symbol in DIGITS]
    if frets and base + max(frets) > MIDI_NOTE_MAX:
        msg = (
            f"Fret {max(frets)} on {line.name} is above {note_name(MIDI_NOTE_MAX)}"
        )
        raise FretRangeError(msg)


def _control_for(control_line: TabLine | None) -> tuple[ControlModifier, ...]:
    if control_line is None:
        return ()
    return translate_control(control_line.symbols)


def build_guitar_job(
    text: str, *modifiers: str, config: TabConfig = DEFAULT_CONFIG
) -> RenderJob:
    """Build the render job for guitar tab.

    Each line is a string named after its open pitch (e.g. "E2"); digits
    are frets.

    Raises
    ------
    InvalidBaseError
        If a line name is not an absolute note spec.
    FretRangeError
        If a fret puts a note above the MIDI range.
    """
    lines = parse_tab(text, "standard", strict=config.strict)
    control_line, playable = split_control(lines, config.control_name)

    bases: list[tuple[TabLine, int]] = []
    for line in playable:
        base = parse_note_spec(line.name)
        if base is None:
            msg = f"Invalid base type: {line.name}"
            raise InvalidBaseError(msg)
        check_frets(line, base)
        bases.append((line, base))

    control = _control_for(control_line)
    streams = tuple(
        build_stream(
            line.name,
            translate_notes(line.symbols, base=base),
            control,
            modifiers,
            config,
        )
        for line, base in bases
    )
    return RenderJob(
        kind="guitar",
        modifiers=modifiers,
        lines=lines,
        control=control,
        streams=streams,
    )


def build_drum_job(
    text: str, *modifiers: str, config: TabConfig = DEFAULT_CONFIG
) -> RenderJob:
    """Build the render job for drum tab.

    Each line is named after a percussion voice (e.g. "BD", "SD"); digits
    1-9 are hit volumes. Every note and rest of the job carries the drum
    channel as its first modifier.

    Raises
    ------
    InvalidDrumError
        If a line name is not in the configured voice table.
    """
    channel, promoted = promote_channel(modifiers, config.drum_channel)
    lines = parse_tab(text, "drum", strict=config.strict)
    control_line, playable = split_control(lines, config.control_name)

    voices: list[tuple[TabLine, int]] = []
    for line in playable:
        voice = resolve_voice(line.name, config.voices)
        if voice is None:
            msg = f"Invalid drum type: {line.name}"
            raise InvalidDrumError(msg)
        voices.append((line, voice))

    control = _control_for(control_line)
    streams: list[LineStream] = []
    for line, voice in voices:
        stream = build_stream(
            line.name,
            translate_notes(line.symbols, voice=voice, volume=config.drum_volume),
            control,
            promoted,
            config,
        )
        events = tuple((event, (channel, *active)) for event, active in stream.events)
        streams.append(LineStream(name=line.name, events=events))

    return RenderJob(
        kind="drum",
        modifiers=promoted,
        lines=lines,
        control=control,
        streams=tuple(streams),
    )


def build_piano_job(
    text: str, *modifiers: str, config: TabConfig = DEFAULT_CONFIG
) -> RenderJob:
    """Build the render job for piano tab.

    Each line is named after the key it plays (e.g. "A4"); digits are
    volumes, scaled by ``config.piano_volume``. Line names are not
    validated: the name is handed to the sink as the note's pitch.
    """
    lines = parse_tab(text, "standard", strict=config.strict)
    control_line, playable = split_control(lines, config.control_name)

    control = _control_for(control_line)
    streams = tuple(
        build_stream(
            line.name,
            translate_notes(
                line.symbols, designator=line.name, volume=config.piano_volume
            ),
            control,
            modifiers,
            config,
        )
        for line in playable
    )
    return RenderJob(
        kind="piano",
        modifiers=modifiers,
        lines=lines,
        control=control,
        streams=streams,
    )


def stream_producer(stream: LineStream) -> Producer:
    """Create a producer that plays one line stream into a sink."""

    def play(sink: Sink) -> None:
        for event, modifiers in stream.events:
            if isinstance(event, Note):
                sink.note(event.designator, event.volume, modifiers)
            else:
                sink.rest(modifiers)

    return play


def emit(sink: Sink, job: RenderJob) -> None:
    """Hand every line stream of a job to the sink as one synchronized group."""
    logger.debug(
        "Rendering %s tab: %d lines, control=%s",
        job.kind,
        len(job.streams),
        bool(job.control),
    )
    sink.synch([stream_producer(stream) for stream in job.streams])


def render_tab(
    sink: Sink,
    text: str,
    kind: TabKind,
    *modifiers: str,
    config: TabConfig = DEFAULT_CONFIG,
) -> RenderJob:
    """Render tab of any kind into a sink.

    The preamble is emitted first; validation errors raised while building
    the job abort the render before any note reaches the sink.

    Parameters
    ----------
    sink : Sink
        The event consumer.
    text : str
        The tab block.
    kind : TabKind
        "guitar", "drum" or "piano".
    *modifiers : str
        Default modifiers (e.g. "sn", "c1").
    config : TabConfig
        Rendering settings.

    Returns
    -------
    RenderJob
        The job that was emitted.

    Raises
    ------
    ValueError
        If the kind is unknown.
    """
    if kind == "guitar":
        sink.preamble(modifiers)
        job = build_guitar_job(text, *modifiers, config=config)
    elif kind == "drum":
        _, promoted = promote_channel(modifiers, config.drum_channel)
        sink.preamble(promoted)
        job = build_drum_job(text, *modifiers, config=config)
    elif kind == "piano":
        sink.preamble(modifiers)
        job = build_piano_job(text, *modifiers, config=config)
    else:
        msg = f"Unknown tab kind: {kind}"
        raise ValueError(msg)

    emit(sink, job)
    return job


def render_guitar_tab(
    sink: Sink, text: str, *modifiers: str, config: TabConfig = DEFAULT_CONFIG
) -> RenderJob:
    """Render guitar tab into a sink.

    Examples
    --------
    >>> from midi_tab.score import Score
    >>> score = Score()
    >>> job = render_guitar_tab(score, "A2: 5-3\\n", "qn")
    >>> [note.pitch for note in score.notes]
    [50, 48]
    """
    return render_tab(sink, text, "guitar", *modifiers, config=config)


def render_drum_tab(
    sink: Sink, text: str, *modifiers: str, config: TabConfig = DEFAULT_CONFIG
) -> RenderJob:
    """Render drum tab into a sink."""
    return render_tab(sink, text, "drum", *modifiers, config=config)


def render_piano_tab(
    sink: Sink, text: str, *modifiers: str, config: TabConfig = DEFAULT_CONFIG
) -> RenderJob:
    """Render piano tab into a sink."""
    return render_tab(sink, text, "piano", *modifiers, config=config)
