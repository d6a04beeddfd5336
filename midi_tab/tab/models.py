"""Data models for tablature rendering.

This module defines the structures that flow from the tab block parser,
through the line translator, to the renderers: named tab lines, note and
rest descriptors, control modifiers, and the per-line streams of a render
job.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

TabMode = Literal["standard", "drum"]

TabKind = Literal["guitar", "drum", "piano"]

LineKind = Literal["control", "percussion", "pitched"]


@dataclass(frozen=True)
class TabLine:
    """A named line of tab symbols.

    Parameters
    ----------
    name : str
        The line name (e.g., "BD", "A2", "CTL").
    symbols : str
        The symbol run, one character per time-step.

    Examples
    --------
    >>> line = TabLine(name="BD", symbols="8-4-")
    >>> len(line)
    4
    """

    name: str
    symbols: str

    def __len__(self) -> int:
        return len(self.symbols)


@dataclass(frozen=True)
class Note:
    """A sounding time-step.

    Parameters
    ----------
    designator : int | str
        MIDI note number (guitar), percussion key number (drum), or the
        line name used as a pitch (piano).
    volume : int | None
        Note volume, or None when the line does not carry volumes (guitar).
    """

    designator: int | str
    volume: int | None = None


@dataclass(frozen=True)
class Rest:
    """A silent time-step."""

    pass


EventDescriptor = Note | Rest


class ControlModifier(Enum):
    """Per time-step modifier read from the control line."""

    NONE = "none"
    TRIPLET = "triplet"


@dataclass(frozen=True)
class LineStream:
    """The resolved events of one tab line.

    Parameters
    ----------
    name : str
        The line name.
    events : tuple[tuple[EventDescriptor, tuple[str, ...]], ...]
        Each time-step's descriptor with the modifiers active for it.
    """

    name: str
    events: tuple[tuple[EventDescriptor, tuple[str, ...]], ...]

    def __len__(self) -> int:
        return len(self.events)

    @property
    def descriptors(self) -> tuple[EventDescriptor, ...]:
        """The descriptors without their modifiers."""
        return tuple(event for event, _ in self.events)


@dataclass(frozen=True)
class RenderJob:
    """One tab rendering, ready to be emitted to a sink.

    Parameters
    ----------
    kind : TabKind
        The tab type.
    modifiers : tuple[str, ...]
        Modifiers for the preamble, and the default for every time-step.
    lines : tuple[TabLine, ...]
        Every parsed line, in discovery order (control line included).
    control : tuple[ControlModifier, ...]
        The control line's modifiers, empty when there is no control line.
    streams : tuple[LineStream, ...]
        One stream per non-control line, in discovery order.
    """

    kind: TabKind
    modifiers: tuple[str, ...]
    lines: tuple[TabLine, ...]
    control: tuple[ControlModifier, ...]
    streams: tuple[LineStream, ...]
