"""Exceptions raised while rendering tablature."""


class TabError(ValueError):
    """Base class for tablature errors."""


class InvalidBaseError(TabError):
    """A guitar tab line is not named after an absolute note (e.g. "A2")."""


class InvalidDrumError(TabError):
    """A drum tab line is not named after a known percussion voice."""


class TabParseError(TabError):
    """Strict parsing found no tab lines in non-blank text."""


class ModifierError(TabError):
    """A modifier code could not be interpreted."""


class UnresolvedNoteError(TabError):
    """A note designator does not name a MIDI note."""


class FretRangeError(TabError):
    """A fret puts a guitar note above the MIDI range."""
