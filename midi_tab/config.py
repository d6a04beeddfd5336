"""Rendering configuration for tablature.

All settings live on an immutable :class:`TabConfig`. Callers that need a
different percussion mapping, control line name or volume scaling build
their own config instead of mutating module state.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Mapping

from midi_tab.voices import DRUM_VOICES, merge_voices

# Reserved name of the control line
CONTROL = "CTL"

# Modifier applied to a time-step marked "3" on the control line
TRIPLET_MODIFIERS: tuple[str, ...] = ("ten",)

# Conventional percussion channel selector
DRUM_CHANNEL = "c9"

VolumePolicy = Callable[[int], int]


def legacy_piano_volume(digit: int) -> int:
    """Scale a piano tab digit to a volume.

    Multiplies by 12, so "9" gives 108. This is the historical behaviour of
    piano tab and is kept as the default; digits are not clamped here.

    Examples
    --------
    >>> legacy_piano_volume(8)
    96
    """
    return digit * 12


def raw_volume(digit: int) -> int:
    """Pass a tab digit through unchanged."""
    return digit


@dataclass(frozen=True)
class TabConfig:
    """Settings shared by the tab parser, translator and renderers.

    Parameters
    ----------
    voices : Mapping[str, int]
        Drum code to percussion key number.
    control_name : str
        Name of the control line.
    triplet_modifiers : tuple[str, ...]
        Modifiers emitted for a control-line "3".
    drum_channel : str
        Channel selector used by drum tab when the caller supplies none.
    piano_volume : VolumePolicy
        Maps a piano digit (0-9) to a note volume.
    drum_volume : VolumePolicy
        Maps a drum digit (1-9) to a note volume.
    strict : bool
        Raise TabParseError when non-blank text yields no tab lines.

    Examples
    --------
    >>> config = TabConfig().with_voices({"KIK": 36})
    >>> config.voices["KIK"]
    36
    """

    voices: Mapping[str, int] = field(default_factory=lambda: DRUM_VOICES)
    control_name: str = CONTROL
    triplet_modifiers: tuple[str, ...] = TRIPLET_MODIFIERS
    drum_channel: str = DRUM_CHANNEL
    piano_volume: VolumePolicy = legacy_piano_volume
    drum_volume: VolumePolicy = raw_volume
    strict: bool = False

    def with_voices(self, voices: Mapping[str, int]) -> TabConfig:
        """Return a copy whose voice table adds or overrides ``voices``."""
        return replace(self, voices=merge_voices(self.voices, voices))


DEFAULT_CONFIG = TabConfig()
