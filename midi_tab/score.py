"""In-memory score that collects rendered tab events.

:class:`Score` implements the :class:`midi_tab.sink.Sink` interface. It
keeps a cursor (current time, duration, channel, volume and octave) that
modifiers update, records every note, and writes the result as a Standard
MIDI File with mido.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import mido

from midi_tab.errors import UnresolvedNoteError
from midi_tab.modifiers import parse_modifier
from midi_tab.pitch import MIDI_NOTE_MAX, note_offset, parse_note_spec
from midi_tab.sink import Producer

logger = logging.getLogger(__name__)

DEFAULT_TICKS_PER_QUARTER = 96
DEFAULT_TEMPO = 500000  # microseconds per quarter note (120 bpm)
DEFAULT_VOLUME = 64
DEFAULT_OCTAVE = 4


@dataclass(frozen=True)
class ScoreNote:
    """A note placed on the score.

    Parameters
    ----------
    start : int
        Start time in ticks.
    duration : int
        Length in ticks.
    pitch : int
        MIDI note number.
    channel : int
        MIDI channel (0-15).
    volume : int
        Velocity (0-127).
    """

    start: int
    duration: int
    pitch: int
    channel: int
    volume: int

    @property
    def end(self) -> int:
        return self.start + self.duration


class Score:
    """A sink that lays tab events out in time.

    Modifiers persist on the cursor once applied, so a time-step that
    passes "ten" keeps triplet timing until another duration is given.

    Parameters
    ----------
    ticks_per_quarter : int
        Timing resolution.
    tempo : int
        Microseconds per quarter note, written to the MIDI file.

    Examples
    --------
    >>> score = Score()
    >>> score.preamble(["en", "c1"])
    >>> score.note(60, 90, [])
    >>> score.rest([])
    >>> score.time
    96
    >>> score.notes[0]
    ScoreNote(start=0, duration=48, pitch=60, channel=1, volume=90)
    """

    def __init__(
        self,
        ticks_per_quarter: int = DEFAULT_TICKS_PER_QUARTER,
        tempo: int = DEFAULT_TEMPO,
    ) -> None:
        self.ticks_per_quarter = ticks_per_quarter
        self.tempo = tempo
        self.time = 0
        self.duration = ticks_per_quarter
        self.channel = 0
        self.volume = DEFAULT_VOLUME
        self.octave = DEFAULT_OCTAVE
        self._notes: list[ScoreNote] = []

    @property
    def notes(self) -> tuple[ScoreNote, ...]:
        """Every recorded note ordered by start time."""
        return tuple(sorted(self._notes, key=lambda n: n.start))

    def apply(self, modifiers: Sequence[str]) -> None:
        """Update the cursor from modifier codes."""
        for code in modifiers:
            modifier = parse_modifier(code)
            if modifier.kind == "duration":
                self.duration = round(modifier.value * self.ticks_per_quarter)
            elif modifier.kind == "ticks":
                self.duration = int(modifier.value)
            elif modifier.kind == "channel":
                self.channel = int(modifier.value)
            elif modifier.kind == "volume":
                self.volume = int(modifier.value)
            else:
                self.octave = int(modifier.value)

    def resolve_pitch(self, designator: int | str) -> int:
        """Convert a note designator to a MIDI note number.

        Parameters
        ----------
        designator : int | str
            A MIDI note number, an absolute note spec ("A4"), or a note
            letter ("A") played in the cursor octave.

        Returns
        -------
        int
            The MIDI note number.

        Raises
        ------
        UnresolvedNoteError
            If the designator cannot be resolved to a MIDI note.
        """
        if isinstance(designator, int):
            pitch: int | None = designator
        else:
            pitch = parse_note_spec(designator)
            if pitch is None:
                # Bare note letter, played in the cursor octave
                offset = note_offset(designator)
                if offset is not None:
                    pitch = (self.octave + 1) * 12 + offset

        if pitch is None or not 0 <= pitch <= MIDI_NOTE_MAX:
            msg = f"Cannot resolve note: {designator!r}"
            raise UnresolvedNoteError(msg)
        return pitch

    def preamble(self, modifiers: Sequence[str]) -> None:
        self.apply(modifiers)

    def note(
        self, designator: int | str, volume: int | None, modifiers: Sequence[str]
    ) -> None:
        self.apply(modifiers)
        velocity = self.volume if volume is None else min(max(volume, 0), 127)
        self._notes.append(
            ScoreNote(
                start=self.time,
                duration=self.duration,
                pitch=self.resolve_pitch(designator),
                channel=self.channel,
                volume=velocity,
            )
        )
        self.time += self.duration

    def rest(self, modifiers: Sequence[str]) -> None:
        self.apply(modifiers)
        self.time += self.duration

    def synch(self, producers: Sequence[Producer]) -> None:
        """Run producers side by side from the current time.

        Each producer gets its own cursor; afterwards the score's time moves
        to the latest point any producer reached.
        """
        start = self.time
        end = start
        for producer in producers:
            voice = self._fork()
            producer(voice)
            end = max(end, voice.time)
        logger.debug("Synchronized %d parts from tick %d to %d", len(producers), start, end)
        self.time = end

    def _fork(self) -> Score:
        voice = Score(self.ticks_per_quarter, self.tempo)
        voice.time = self.time
        voice.duration = self.duration
        voice.channel = self.channel
        voice.volume = self.volume
        voice.octave = self.octave
        voice._notes = self._notes
        return voice

    def to_midi(self) -> mido.MidiFile:
        """Build a single-track MIDI file from the recorded notes."""
        mid = mido.MidiFile(type=0, ticks_per_beat=self.ticks_per_quarter)
        track = mido.MidiTrack()
        track.append(mido.MetaMessage("set_tempo", tempo=self.tempo, time=0))

        # (tick, order, message type, note); note-offs sort before note-ons
        events: list[tuple[int, int, str, ScoreNote]] = []
        for n in self._notes:
            if n.volume == 0 or n.duration == 0:
                continue  # silent
            events.append((n.start, 1, "note_on", n))
            events.append((n.end, 0, "note_off", n))
        events.sort(key=lambda e: (e[0], e[1]))

        prev_tick = 0
        for tick, _, kind, n in events:
            track.append(
                mido.Message(
                    kind,
                    note=n.pitch,
                    velocity=n.volume if kind == "note_on" else 0,
                    channel=n.channel,
                    time=tick - prev_tick,
                )
            )
            prev_tick = tick
        track.append(mido.MetaMessage("end_of_track", time=0))
        mid.tracks.append(track)
        return mid

    def write(self, path: str | Path) -> None:
        """Save the score as a Standard MIDI File."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.to_midi().save(path)
        logger.debug("Wrote %d notes to %s", len(self._notes), path)
