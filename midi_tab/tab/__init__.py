"""Tablature parsing, translation and rendering.

This module turns ASCII guitar, drum and piano tab into note and rest
events for a sink, with an optional control line for triplet timing.
"""

from midi_tab.tab.models import (
    ControlModifier,
    EventDescriptor,
    LineStream,
    Note,
    RenderJob,
    Rest,
    TabLine,
)
from midi_tab.tab.parser import parse_tab, parse_tab_lines
from midi_tab.tab.renderer import (
    build_drum_job,
    build_guitar_job,
    build_piano_job,
    render_drum_tab,
    render_guitar_tab,
    render_piano_tab,
    render_tab,
)
from midi_tab.tab.translator import translate, translate_control, translate_notes

__all__ = [
    "ControlModifier",
    "EventDescriptor",
    "LineStream",
    "Note",
    "RenderJob",
    "Rest",
    "TabLine",
    "build_drum_job",
    "build_guitar_job",
    "build_piano_job",
    "parse_tab",
    "parse_tab_lines",
    "render_drum_tab",
    "render_guitar_tab",
    "render_piano_tab",
    "render_tab",
    "translate",
    "translate_control",
    "translate_notes",
]
