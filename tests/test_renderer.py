"""Tests for the guitar, drum and piano tab renderers."""

from __future__ import annotations

from typing import Any, Sequence

import pytest

from midi_tab import (
    ControlModifier,
    FretRangeError,
    InvalidBaseError,
    InvalidDrumError,
    Note,
    Rest,
    TabConfig,
    build_drum_job,
    build_guitar_job,
    build_piano_job,
    render_drum_tab,
    render_guitar_tab,
    render_piano_tab,
)
from midi_tab.errors import TabParseError
from midi_tab.tab import render_tab
from midi_tab.tab.renderer import promote_channel, resolve_modifiers

BD = 36
SD = 38


class RecordingSink:
    """Sink that records every call, tagged with the line being played."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []
        self.groups: list[int] = []
        self._part: int | None = None

    def preamble(self, modifiers: Sequence[str]) -> None:
        self.calls.append(("preamble", tuple(modifiers)))

    def note(self, designator: int | str, volume: int | None, modifiers: Sequence[str]) -> None:
        self.calls.append(("note", self._part, designator, volume, tuple(modifiers)))

    def rest(self, modifiers: Sequence[str]) -> None:
        self.calls.append(("rest", self._part, tuple(modifiers)))

    def synch(self, producers: Sequence[Any]) -> None:
        self.groups.append(len(producers))
        for i, producer in enumerate(producers):
            self._part = i
            producer(self)
        self._part = None

    def part(self, index: int) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] != "preamble" and call[1] == index]

    @property
    def notes(self) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] == "note"]


class TestResolveModifiers:
    """Test per time-step modifier selection."""

    def test_triplet_overrides_defaults(self) -> None:
        """Test a triplet replaces the default modifiers."""
        control = (ControlModifier.TRIPLET,)
        assert resolve_modifiers(0, control, ("sn", "c1")) == ("ten",)

    def test_none_keeps_defaults(self) -> None:
        """Test other control symbols keep the defaults."""
        control = (ControlModifier.NONE,)
        assert resolve_modifiers(0, control, ("sn",)) == ("sn",)

    def test_beyond_control_length(self) -> None:
        """Test steps past the control line fall back to defaults."""
        control = (ControlModifier.TRIPLET,)
        assert resolve_modifiers(5, control, ("sn",)) == ("sn",)

    def test_configured_triplet(self) -> None:
        """Test the triplet modifiers come from the config."""
        config = TabConfig(triplet_modifiers=("tsn",))
        control = (ControlModifier.TRIPLET,)
        assert resolve_modifiers(0, control, ("sn",), config) == ("tsn",)


class TestPromoteChannel:
    """Test drum channel selection."""

    def test_default_channel(self) -> None:
        """Test the percussion channel is used when none is given."""
        assert promote_channel(["sn"], "c9") == ("c9", ("sn",))

    def test_channel_promoted_and_kept(self) -> None:
        """Test a channel is copied to the front and kept in place."""
        assert promote_channel(["sn", "c10"], "c9") == ("c10", ("c10", "sn", "c10"))

    def test_not_a_channel(self) -> None:
        """Test lookalike modifiers are not channels."""
        assert promote_channel(["c", "cx1"], "c9") == ("c9", ("c", "cx1"))


class TestDrumTab:
    """Test drum tab rendering."""

    TAB = "BD:  8-4---8-2-8-\nSD:  ----8-------8-\n"

    def test_reference_scenario(self) -> None:
        """Test the BD/SD pattern produces the expected events."""
        job = build_drum_job(self.TAB, "sn")
        bd, sd = job.streams

        assert bd.name == "BD"
        hits = {0: 8, 2: 4, 6: 8, 8: 2, 10: 8}
        assert bd.descriptors == tuple(
            Note(designator=BD, volume=hits[i]) if i in hits else Rest() for i in range(12)
        )

        assert sd.name == "SD"
        assert len(sd) == 14
        for i, event in enumerate(sd.descriptors):
            if i in (4, 12):
                assert event == Note(designator=SD, volume=8)
            else:
                assert event == Rest()

    def test_emits_to_sink(self) -> None:
        """Test notes and rests reach the sink with the drum channel."""
        sink = RecordingSink()
        render_drum_tab(sink, self.TAB, "sn")

        assert sink.calls[0] == ("preamble", ("sn",))
        assert sink.groups == [2]
        bd = sink.part(0)
        assert len(bd) == 12
        assert bd[0] == ("note", 0, BD, 8, ("c9", "sn"))
        assert bd[1] == ("rest", 0, ("c9", "sn"))
        assert sink.part(1)[4] == ("note", 1, SD, 8, ("c9", "sn"))

    def test_caller_channel(self) -> None:
        """Test a caller-supplied channel is used for notes and rests."""
        sink = RecordingSink()
        render_drum_tab(sink, "HH: 9-\n", "sn", "c10")

        assert sink.calls[0] == ("preamble", ("c10", "sn", "c10"))
        assert sink.part(0) == [
            ("note", 0, 42, 9, ("c10", "c10", "sn", "c10")),
            ("rest", 0, ("c10", "c10", "sn", "c10")),
        ]

    def test_invalid_drum(self) -> None:
        """Test an unknown drum name aborts before any note."""
        sink = RecordingSink()
        with pytest.raises(InvalidDrumError, match="Invalid drum type: ZZ"):
            render_drum_tab(sink, "BD: 8-8-\nZZ: 123\n", "sn")
        assert sink.notes == []
        assert sink.groups == []

    def test_invalid_drum_without_newline(self) -> None:
        """Test a lone unknown drum line without a trailing newline."""
        with pytest.raises(InvalidDrumError):
            render_drum_tab(RecordingSink(), "ZZ: 123")

    def test_digit_code_is_silent_miss(self) -> None:
        """Test a voice code containing a digit does not parse as a drum line."""
        sink = RecordingSink()
        render_drum_tab(sink, "CY2: 8\n", "sn")
        assert sink.calls == [("preamble", ("sn",))]
        assert sink.groups == [0]

    def test_custom_voices(self) -> None:
        """Test an injected voice table."""
        config = TabConfig().with_voices({"KIK": 35})
        job = build_drum_job("KIK: 5\n", config=config)
        assert job.streams[0].descriptors == (Note(designator=35, volume=5),)

    def test_voice_override(self) -> None:
        """Test overriding a standard voice."""
        config = TabConfig().with_voices({"BD": 35})
        job = build_drum_job("BD: 5\n", config=config)
        assert job.streams[0].descriptors == (Note(designator=35, volume=5),)

    def test_control_line_triplets(self) -> None:
        """Test control '3' steps use triplet modifiers on every line."""
        tab = "CTL: --3-\nHH:  9999\nSD:  -8-8\n"
        job = build_drum_job(tab, "sn")

        assert [line.name for line in job.lines] == ["CTL", "HH", "SD"]
        assert [stream.name for stream in job.streams] == ["HH", "SD"]
        for stream in job.streams:
            modifiers = [active for _, active in stream.events]
            assert modifiers == [("c9", "sn"), ("c9", "sn"), ("c9", "ten"), ("c9", "sn")]

    def test_control_line_shorter_than_data(self) -> None:
        """Test steps past the control line use the defaults."""
        job = build_drum_job("CTL: 3\nHH:  999\n", "sn")
        modifiers = [active for _, active in job.streams[0].events]
        assert modifiers == [("c9", "ten"), ("c9", "sn"), ("c9", "sn")]

    def test_control_line_longer_than_data(self) -> None:
        """Test a longer control line does not add events."""
        job = build_drum_job("CTL: 33333\nHH:  9\n", "sn")
        assert len(job.streams[0]) == 1
        assert job.control == (ControlModifier.TRIPLET,) * 5

    def test_control_never_plays(self) -> None:
        """Test a block with only a control line plays nothing."""
        sink = RecordingSink()
        render_drum_tab(sink, "CTL: 333\n", "sn")
        assert sink.groups == [0]
        assert sink.notes == []

    def test_rest_gets_triplet(self) -> None:
        """Test the control modifier applies to rests as well."""
        sink = RecordingSink()
        render_drum_tab(sink, "CTL: 3\nHH:  -\n", "sn")
        assert sink.part(0) == [("rest", 0, ("c9", "ten"))]


class TestGuitarTab:
    """Test guitar tab rendering."""

    BASS = "G3: ----\nD3: ----\nA2: 5--5\nE2: -3--\n"

    def test_frets(self) -> None:
        """Test frets are added to each string's open pitch."""
        job = build_guitar_job(self.BASS, "sn", "c1")
        by_name = {stream.name: stream.descriptors for stream in job.streams}
        assert by_name["A2"] == (Note(designator=50), Rest(), Rest(), Note(designator=50))
        assert by_name["E2"] == (Rest(), Note(designator=43), Rest(), Rest())
        assert by_name["G3"] == (Rest(),) * 4

    def test_emits_defaults(self) -> None:
        """Test default modifiers go to the preamble and each step."""
        sink = RecordingSink()
        render_guitar_tab(sink, "A2: 5-\n", "sn", "c1")
        assert sink.calls == [
            ("preamble", ("sn", "c1")),
            ("note", 0, 50, None, ("sn", "c1")),
            ("rest", 0, ("sn", "c1")),
        ]

    def test_invalid_base(self) -> None:
        """Test a line not named after a note."""
        sink = RecordingSink()
        with pytest.raises(InvalidBaseError, match="Invalid base type: X1Y"):
            render_guitar_tab(sink, "A2: 5\nX1Y: 3\n")
        assert sink.notes == []

    def test_fret_above_midi_range(self) -> None:
        """Test a fret past note 127 aborts before any note."""
        sink = RecordingSink()
        with pytest.raises(FretRangeError, match="Fret 1 on G9"):
            render_guitar_tab(sink, "G9: 01\n", "sn")
        assert sink.notes == []
        assert sink.groups == []

    def test_highest_fret_in_range(self) -> None:
        """Test the top MIDI note is playable."""
        job = build_guitar_job("G9: 0-\n")
        assert job.streams[0].descriptors == (Note(designator=127), Rest())

    def test_octave_crossing_base(self) -> None:
        """Test a B sharp string plays in the next octave."""
        job = build_guitar_job("Bs3: 0\n")
        assert job.streams[0].descriptors == (Note(designator=60),)

    def test_control_line_accepted(self) -> None:
        """Test the control line is not validated as a base."""
        job = build_guitar_job("CTL: 3-\nE2: 00\n", "en")
        assert [stream.name for stream in job.streams] == ["E2"]
        assert [active for _, active in job.streams[0].events] == [("ten",), ("en",)]

    def test_accidentals(self) -> None:
        """Test flat and sharp string names."""
        job = build_guitar_job("Eb2: 0\nFs2: 0\n")
        assert [stream.descriptors[0] for stream in job.streams] == [
            Note(designator=39),
            Note(designator=42),
        ]


class TestPianoTab:
    """Test piano tab rendering."""

    def test_line_name_is_pitch(self) -> None:
        """Test the line name is passed as the designator."""
        sink = RecordingSink()
        render_piano_tab(sink, "A5: 55\nA4: 5-\n", "wn", "c3")
        assert sink.part(0) == [
            ("note", 0, "A5", 60, ("wn", "c3")),
            ("note", 0, "A5", 60, ("wn", "c3")),
        ]
        assert sink.part(1) == [
            ("note", 1, "A4", 60, ("wn", "c3")),
            ("rest", 1, ("wn", "c3")),
        ]

    def test_names_not_validated(self) -> None:
        """Test any alphanumeric name is accepted."""
        job = build_piano_job("Foo: 1\n")
        assert job.streams[0].descriptors == (Note(designator="Foo", volume=12),)

    def test_volume_policy(self) -> None:
        """Test the piano volume scaling is configurable."""
        config = TabConfig(piano_volume=lambda d: d * 14)
        job = build_piano_job("C4: 9\n", config=config)
        assert job.streams[0].descriptors == (Note(designator="C4", volume=126),)


class TestRenderJob:
    """Properties shared by every tab kind."""

    @pytest.mark.parametrize(
        ("render", "text"),
        [
            (render_guitar_tab, "nothing here"),
            (render_drum_tab, "nothing here"),
            (render_piano_tab, "nothing here"),
        ],
    )
    def test_malformed_emits_only_preamble(self, render: Any, text: str) -> None:
        """Test unparseable text yields a preamble and an empty group."""
        sink = RecordingSink()
        render(sink, text, "sn")
        assert sink.calls == [("preamble", ("sn",))]
        assert sink.groups == [0]

    def test_strict_config(self) -> None:
        """Test strict mode reports unparseable text."""
        with pytest.raises(TabParseError):
            render_piano_tab(RecordingSink(), "nothing here", config=TabConfig(strict=True))

    def test_discovery_order(self) -> None:
        """Test streams follow the order lines appear in the block."""
        job = build_piano_job("C5: 1\nA4: 1\nE4: 1\n")
        assert [stream.name for stream in job.streams] == ["C5", "A4", "E4"]

    def test_lines_are_independent(self) -> None:
        """Test reordering lines does not change any line's events."""
        first = build_drum_job("BD: 8-8\nSD: -8-\n", "sn")
        second = build_drum_job("SD: -8-\nBD: 8-8\n", "sn")
        assert {s.name: s.events for s in first.streams} == {
            s.name: s.events for s in second.streams
        }

    def test_stream_lengths(self) -> None:
        """Test each stream matches its own line length."""
        job = build_piano_job("A5: 55\nA4: 5555\n")
        assert [len(stream) for stream in job.streams] == [2, 4]

    def test_unknown_kind(self) -> None:
        """Test an unknown tab kind."""
        with pytest.raises(ValueError, match="Unknown tab kind"):
            render_tab(RecordingSink(), "A2: 5\n", "banjo")  # type: ignore[arg-type]

    def test_returns_job(self) -> None:
        """Test the rendered job is returned."""
        job = render_guitar_tab(RecordingSink(), "A2: 5\n", "sn")
        assert job.kind == "guitar"
        assert job.modifiers == ("sn",)
