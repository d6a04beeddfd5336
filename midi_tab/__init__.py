"""Generate MIDI from ASCII tablature.

This library renders guitar, drum and piano tab into note and rest events.
Each horizontal tab line is a string, drum or key, and each character is a
time-step. Events go to a sink; :class:`Score` collects them and writes a
MIDI file.

Examples
--------
>>> from midi_tab import Score, render_drum_tab
>>> score = Score()
>>> job = render_drum_tab(score, "BD: 8-4-\\nSD: --8-\\n", "sn")
>>> [(n.pitch, n.start) for n in score.notes]
[(36, 0), (36, 48), (38, 48)]

>>> # A control line marks triplet time-steps
>>> from midi_tab import build_drum_job
>>> job = build_drum_job("CTL: -3\\nHH:  99\\n", "sn")
>>> [modifiers for _, modifiers in job.streams[0].events]
[('c9', 'sn'), ('c9', 'ten')]
"""

from midi_tab.config import DEFAULT_CONFIG, TabConfig
from midi_tab.errors import (
    FretRangeError,
    InvalidBaseError,
    InvalidDrumError,
    ModifierError,
    TabError,
    TabParseError,
    UnresolvedNoteError,
)
from midi_tab.score import Score, ScoreNote
from midi_tab.tab import (
    ControlModifier,
    Note,
    RenderJob,
    Rest,
    TabLine,
    build_drum_job,
    build_guitar_job,
    build_piano_job,
    parse_tab,
    render_drum_tab,
    render_guitar_tab,
    render_piano_tab,
)
from midi_tab.voices import DRUM_VOICES

__all__ = [
    "DEFAULT_CONFIG",
    "DRUM_VOICES",
    "ControlModifier",
    "FretRangeError",
    "InvalidBaseError",
    "InvalidDrumError",
    "ModifierError",
    "Note",
    "RenderJob",
    "Rest",
    "Score",
    "ScoreNote",
    "TabConfig",
    "TabError",
    "TabLine",
    "TabParseError",
    "UnresolvedNoteError",
    "build_drum_job",
    "build_guitar_job",
    "build_piano_job",
    "parse_tab",
    "render_drum_tab",
    "render_guitar_tab",
    "render_piano_tab",
]
