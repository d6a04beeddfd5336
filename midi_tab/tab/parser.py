"""Tab block parser.

Splits a block of ASCII tablature into named symbol lines. Each line looks
like ``NAME: SYMBOLS`` where SYMBOLS is a run of ``0-9``, ``+`` and ``-``.
Bar lines (``|``) are ignored.
"""

from __future__ import annotations

import logging
import re

from midi_tab.config import CONTROL
from midi_tab.errors import TabParseError
from midi_tab.tab.models import TabLine, TabMode

logger = logging.getLogger(__name__)

BAR = "|"

# Line name character class per mode
NAME_PATTERNS: dict[str, str] = {
    "standard": r"[A-Za-z0-9]+",
    "drum": r"[A-Z]{2,3}",
}

# Name, colon, symbol run, then the rest of the block.
# A symbol run ends at whitespace or at the end of the text.
LINE_TEMPLATE = r"^\s*({name}):\s*([0-9+-]+)(?:\s+(.*))?\Z"


def line_pattern(mode: TabMode) -> re.Pattern[str]:
    """Compile the line pattern for a tab mode.

    Parameters
    ----------
    mode : TabMode
        "standard" (alphanumeric names) or "drum" (2-3 uppercase letters).

    Returns
    -------
    re.Pattern[str]
        Pattern capturing name, symbols and remainder.

    Raises
    ------
    ValueError
        If the mode is unknown.
    """
    if mode not in NAME_PATTERNS:
        msg = f"Unknown tab mode: {mode}"
        raise ValueError(msg)
    # ASCII so that \s and the name classes stay byte-for-byte predictable
    return re.compile(
        LINE_TEMPLATE.format(name=NAME_PATTERNS[mode]), re.DOTALL | re.ASCII
    )


def strip_bars(text: str) -> str:
    """Remove bar line characters.

    Examples
    --------
    >>> strip_bars("BD: |8-4-|8-4-|")
    'BD: 8-4-8-4-'
    """
    return text.replace(BAR, "")


def parse_tab_lines(text: str, mode: TabMode = "standard") -> dict[str, str]:
    """Parse a tab block into a ``name -> symbols`` mapping.

    Lines are matched one after another from the top of the block; parsing
    stops at the first line that does not fit the grammar. A repeated name
    keeps its first position but takes the symbols of its last occurrence.

    Parameters
    ----------
    text : str
        The raw tab block.
    mode : TabMode
        The line name grammar.

    Returns
    -------
    dict[str, str]
        Symbol strings keyed by line name, in discovery order. Empty when
        nothing matches.

    Examples
    --------
    >>> parse_tab_lines("A2: 5-3|\\nE2: --3|\\n")
    {'A2': '5-3', 'E2': '--3'}
    >>> parse_tab_lines("no tab here")
    {}
    """
    pattern = line_pattern(mode)
    remainder: str | None = strip_bars(text)

    lines: dict[str, str] = {}
    while remainder:
        match = pattern.match(remainder)
        if not match:
            break
        name, symbols, remainder = match.group(1), match.group(2), match.group(3)
        if name in lines:
            logger.debug("Tab line %s repeated, keeping the last occurrence", name)
        lines[name] = symbols

    logger.debug("Parsed %d tab lines (%s mode)", len(lines), mode)
    return lines


def parse_tab(
    text: str,
    mode: TabMode = "standard",
    *,
    strict: bool = False,
) -> tuple[TabLine, ...]:
    """Parse a tab block into ordered tab lines.

    This is the main entry point for tab block parsing.

    Parameters
    ----------
    text : str
        The raw tab block.
    mode : TabMode
        The line name grammar: "standard" or "drum".
    strict : bool
        If True, raise instead of returning nothing for non-blank text.

    Returns
    -------
    tuple[TabLine, ...]
        Tab lines in discovery order, each name appearing once.

    Raises
    ------
    TabParseError
        In strict mode, when ``text`` is not blank but no line matches.

    Examples
    --------
    >>> lines = parse_tab("BD: 8-4-\\nSD: --8-\\n", mode="drum")
    >>> [line.name for line in lines]
    ['BD', 'SD']
    """
    lines = parse_tab_lines(text, mode)
    if strict and not lines and text.strip():
        msg = f"No tab lines found ({mode} mode)"
        raise TabParseError(msg)
    return tuple(TabLine(name=name, symbols=symbols) for name, symbols in lines.items())


def split_control(
    lines: tuple[TabLine, ...], control_name: str = CONTROL
) -> tuple[TabLine | None, tuple[TabLine, ...]]:
    """Separate the control line from the playable lines.

    Parameters
    ----------
    lines : tuple[TabLine, ...]
        Parsed tab lines.
    control_name : str
        The reserved control line name.

    Returns
    -------
    tuple[TabLine | None, tuple[TabLine, ...]]
        The control line (or None) and the remaining lines in order.
    """
    control: TabLine | None = None
    playable: list[TabLine] = []
    for line in lines:
        if line.name == control_name:
            control = line
        else:
            playable.append(line)
    return control, tuple(playable)
