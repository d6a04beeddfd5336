"""The interface between tab renderers and whatever plays their events.

A sink receives the events of a render job. The renderers only ever call
the four methods of :class:`Sink`; :class:`midi_tab.score.Score` is the
implementation shipped with this package.
"""

from __future__ import annotations

from typing import Callable, Protocol, Sequence


class Sink(Protocol):
    """Consumer of rendered tab events."""

    def preamble(self, modifiers: Sequence[str]) -> None:
        """Apply modifiers (duration, channel, ...) before any line plays."""
        ...

    def note(
        self, designator: int | str, volume: int | None, modifiers: Sequence[str]
    ) -> None:
        """Play one time-step."""
        ...

    def rest(self, modifiers: Sequence[str]) -> None:
        """Stay silent for one time-step."""
        ...

    def synch(self, producers: Sequence[Producer]) -> None:
        """Run every producer from the same start time."""
        ...


# Plays one tab line into the sink it is given
Producer = Callable[[Sink], None]
