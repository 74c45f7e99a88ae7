"""Tests for notes, timed notes and sheet music."""

import pytest

from pitchstaff.core import Accidental, NoteDuration, NoteName, UnparseableNoteName
from pitchstaff.notation import Clef, MusicContext, Note, TimedNote, SheetMusic


@pytest.fixture
def scale():
    return SheetMusic.from_notes(
        "Scale",
        "Nobody",
        [
            ("C4", NoteDuration.QUARTER),
            ("E4", NoteDuration.HALF),
            ("G4", NoteDuration.WHOLE),
        ],
    )


class TestNote:
    """Test Note construction."""

    def test_string_name_parsed(self):
        note = Note("Bb4")
        assert note.name == NoteName.parse("Bb4")
        assert note.duration is NoteDuration.QUARTER

    def test_frequency(self):
        assert Note.quarter("A4").frequency == pytest.approx(440.0)
        assert Note.half("A4", reference_frequency=442.0).frequency == pytest.approx(442.0)

    def test_duration_constructors(self):
        assert Note.whole("C4").duration is NoteDuration.WHOLE
        assert Note.eighth("C4").duration is NoteDuration.EIGHTH
        assert Note.sixteenth("C4").duration is NoteDuration.SIXTEENTH

    def test_invalid_name(self):
        with pytest.raises(UnparseableNoteName):
            Note.quarter("X4")


class TestTimedNote:
    """Test context-derived properties."""

    def test_derived_properties(self):
        context = MusicContext(tempo=60)
        timed = TimedNote(Note.half("C4"), start_time=1.0)
        assert timed.duration(context) == pytest.approx(2.0)
        assert timed.end_time(context) == pytest.approx(3.0)
        assert timed.staff_position(context) == 6.0
        assert timed.ledger_lines(context) == 1

    def test_position_follows_clef(self):
        timed = TimedNote(Note.quarter("C4"), start_time=0.0)
        assert timed.staff_position(MusicContext(clef=Clef.ALTO)) == 0.0
        assert timed.ledger_lines(MusicContext(clef=Clef.BASS)) == 1

    def test_accidental_display(self):
        timed = TimedNote(Note.quarter("F#4"), start_time=0.0)
        assert timed.accidental_display(MusicContext(key_signature="G major")) is Accidental.SHARP


class TestSheetMusic:
    """Test layout and queries."""

    def test_start_times(self, scale):
        assert [tn.start_time for tn in scale.timed_notes] == pytest.approx([0.0, 0.5, 1.5])

    def test_total_duration(self, scale):
        assert scale.total_duration == pytest.approx(3.5)

    def test_empty(self):
        assert SheetMusic("Empty", "Nobody").total_duration == 0.0

    def test_notes_at_is_inclusive(self, scale):
        names = [str(tn.note.name) for tn in scale.notes_at(0.5)]
        assert names == ["C4", "E4"]

    def test_notes_at_gap(self, scale):
        assert scale.notes_at(10.0) == []

    def test_notes_up_to(self, scale):
        assert len(scale.notes_up_to(0.5)) == 2
        assert len(scale.notes_up_to(100.0)) == 3

    def test_context_tempo(self):
        music = SheetMusic.from_notes(
            "Slow",
            "Nobody",
            [("A4", NoteDuration.QUARTER), ("B4", NoteDuration.QUARTER)],
            context=MusicContext(tempo=60, reference_frequency=442.0),
        )
        assert music.timed_notes[1].start_time == pytest.approx(1.0)
        assert music.timed_notes[0].note.frequency == pytest.approx(442.0)
        assert music.time_signature == "4/4"
