"""General MIDI percussion voices for drum tablature.

Drum tab lines are named with a two or three letter code (e.g. ``BD`` for
"Bass Drum 1"). This module maps those codes to General MIDI percussion
key numbers, which are played on the percussion channel.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

# Percussion code to General MIDI key number.
# CY2 and RI2 contain a digit, so the drum line grammar (2-3 uppercase
# letters) never reaches them; they are kept for callers using the table.
_DRUM_VOICES: dict[str, int] = {
    "ABD": 35,  # Acoustic Bass Drum
    "BD": 36,  # Bass Drum 1
    "CA": 69,  # Cabasa
    "CB": 56,  # Cowbell
    "CC": 52,  # Chinese Cymbal
    "CL": 75,  # Claves
    "CY2": 57,  # Crash Cymbal 2
    "CYM": 49,  # Crash Cymbal 1
    "CYS": 55,  # Splash Cymbal
    "ESD": 40,  # Electric Snare
    "HA": 67,  # High Agogo
    "HB": 60,  # Hi Bongo
    "HC": 39,  # Hand Clap
    "HFT": 43,  # High Floor Tom
    "HH": 42,  # Closed Hi-Hat
    "HMT": 48,  # Hi-Mid Tom
    "HT": 50,  # High Tom
    "HTI": 65,  # High Timbale
    "HWB": 76,  # Hi Wood Block
    "LA": 68,  # Low Agogo
    "LB": 61,  # Low Bongo
    "LC": 64,  # Low Conga
    "LFT": 41,  # Low Floor Tom
    "LG": 74,  # Long Guiro
    "LMT": 47,  # Low-Mid Tom
    "LT": 45,  # Low Tom
    "LTI": 66,  # Low Timbale
    "LW": 72,  # Long Whistle
    "LWB": 77,  # Low Wood Block
    "MA": 70,  # Maracas
    "MC": 78,  # Mute Cuica
    "MHC": 62,  # Mute Hi Conga
    "MT": 80,  # Mute Triangle
    "OC": 79,  # Open Cuica
    "OHC": 63,  # Open Hi Conga
    "OHH": 46,  # Open Hi-Hat
    "OT": 81,  # Open Triangle
    "PH": 44,  # Pedal Hi-Hat
    "RB": 53,  # Ride Bell
    "RI2": 59,  # Ride Cymbal 2
    "RID": 51,  # Ride Cymbal 1
    "SD": 38,  # Acoustic Snare
    "SG": 73,  # Short Guiro
    "SS": 37,  # Side Stick
    "SW": 71,  # Short Whistle
    "TAM": 54,  # Tambourine
    "VS": 58,  # Vibraslap
}

# Read-only view; extend or override through TabConfig.with_voices()
DRUM_VOICES: Mapping[str, int] = MappingProxyType(_DRUM_VOICES)


def resolve_voice(code: str, voices: Mapping[str, int] = DRUM_VOICES) -> int | None:
    """Look up the percussion key number for a drum code.

    Parameters
    ----------
    code : str
        The drum line name (e.g., "BD", "OHH").
    voices : Mapping[str, int]
        The voice table to search.

    Returns
    -------
    int | None
        The General MIDI key number, or None if the code is unknown.

    Examples
    --------
    >>> resolve_voice("BD")
    36
    >>> resolve_voice("ZZ") is None
    True
    """
    return voices.get(code)


def merge_voices(
    base: Mapping[str, int], overrides: Mapping[str, int]
) -> Mapping[str, int]:
    """Return a read-only voice table with ``overrides`` applied over ``base``."""
    merged = dict(base)
    merged.update(overrides)
    return MappingProxyType(merged)
