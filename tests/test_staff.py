"""Tests for staff position mapping.

Guards the table-driven mapping against regressing to linear semitone
spacing: E-F and B-C must be exactly one staff step apart.
"""

import logging

import pytest

from pitchstaff.core import Accidental, NoteDuration, InvalidInput, InvalidKeySignature, NoteName
from pitchstaff.notation import (
    Clef,
    KeySignature,
    MusicContext,
    StaffPositionMapper,
    SILENT,
    SilentInput,
    pitch_number_to_staff_position,
    note_name_to_staff_position,
    frequency_to_staff_position,
    accidental_for_display,
    ledger_line_count_for,
    ledger_line_positions_for,
)


@pytest.fixture
def treble():
    return MusicContext(clef=Clef.TREBLE)


class TestPitchToStaffPosition:
    """Test the pitch number -> staff position table."""

    @pytest.mark.parametrize("name,position", [
        ("B4", 0.0),
        ("G4", 2.0),
        ("E4", 4.0),
        ("F5", -4.0),
        ("C4", 6.0),
        ("A5", -6.0),
        ("C6", -8.0),
    ])
    def test_treble(self, treble, name, position):
        assert note_name_to_staff_position(name, treble) == position

    @pytest.mark.parametrize("clef,name,position", [
        (Clef.BASS, "D3", 0.0),
        (Clef.BASS, "G2", 4.0),
        (Clef.BASS, "A3", -4.0),
        (Clef.BASS, "C4", -6.0),
        (Clef.ALTO, "C4", 0.0),
        (Clef.TENOR, "C4", -2.0),
    ])
    def test_other_clefs(self, clef, name, position):
        assert note_name_to_staff_position(name, MusicContext(clef=clef)) == position

    def test_semitone_steps_at_e_f_and_b_c(self):
        clef = Clef.TREBLE
        assert pitch_number_to_staff_position(64, clef) - pitch_number_to_staff_position(65, clef) == 1.0
        assert pitch_number_to_staff_position(71, clef) - pitch_number_to_staff_position(72, clef) == 1.0

    def test_fractional_pitch_rounds(self):
        assert pitch_number_to_staff_position(67.3, Clef.TREBLE) == 2.0
        assert pitch_number_to_staff_position(66.6, Clef.TREBLE) == 2.0

    @pytest.mark.parametrize("clef", list(Clef))
    def test_monotonic(self, clef):
        """Rising pitch never moves the note down the staff."""
        for pitch in range(21, 108):
            assert pitch_number_to_staff_position(pitch + 1, clef) <= pitch_number_to_staff_position(pitch, clef)

    @pytest.mark.parametrize("clef", list(Clef))
    def test_octave_is_seven_steps(self, clef):
        for pitch in range(24, 96):
            lower = pitch_number_to_staff_position(pitch, clef)
            upper = pitch_number_to_staff_position(pitch + 12, clef)
            assert lower - upper == 7.0

    def test_non_finite_rejected(self):
        with pytest.raises(InvalidInput):
            pitch_number_to_staff_position(float("nan"), Clef.TREBLE)


class TestDiatonicScales:
    """Scale notes land on half-unit positions one step apart."""

    @pytest.mark.parametrize("key_name", ["C major", "G major", "D major", "F major", "Bb major", "E minor"])
    @pytest.mark.parametrize("clef", list(Clef))
    def test_scale_positions(self, key_name, clef):
        key = KeySignature.parse(key_name)
        context = MusicContext(key_signature=key_name, clef=clef)
        for octave in (3, 4, 5):
            positions = [
                note_name_to_staff_position(f"{key.spell(letter)}{octave}", context)
                for letter in "CDEFGAB"
            ]
            for position in positions:
                assert (position * 2) == int(position * 2)
            steps = [a - b for a, b in zip(positions, positions[1:])]
            assert steps == [1.0] * 6


class TestSpelling:
    """Enharmonic spellings share a pitch number but not a position."""

    def test_flat_sits_on_its_letter(self, treble):
        assert note_name_to_staff_position("Bb4", treble) == 0.0
        assert note_name_to_staff_position("A#4", treble) == 1.0

    def test_db_and_c_sharp(self, treble):
        assert note_name_to_staff_position("Db4", treble) == 5.0
        assert note_name_to_staff_position("C#4", treble) == 6.0

    def test_prefer_flats_flag(self):
        assert pitch_number_to_staff_position(70, Clef.TREBLE, prefer_flats=True) == 0.0
        assert pitch_number_to_staff_position(70, Clef.TREBLE) == 1.0

    def test_accidental_echoes_spelling(self):
        assert accidental_for_display("F#4", "C major") is Accidental.SHARP
        assert accidental_for_display("Bb4") is Accidental.FLAT
        # Not resolved against the key signature
        assert accidental_for_display("F4", "G major") is Accidental.NONE
        assert accidental_for_display("F#4", "G major") is Accidental.SHARP

    def test_ledger_helpers(self, treble):
        assert ledger_line_count_for("C4", treble) == 1
        assert ledger_line_positions_for("C4", treble) == [6.0]
        assert ledger_line_positions_for("C6", treble) == [-6.0, -8.0]
        assert ledger_line_count_for("G4", treble) == 0


class TestFrequencyToStaffPosition:
    """Test frequency placement."""

    def test_g4_end_to_end(self, treble):
        placement = StaffPositionMapper(treble).place_frequency(392.0)
        assert str(placement.note_name) == "G4"
        assert placement.staff_position == 2.0
        assert placement.ledger_lines == 0
        assert placement.is_on_line

    def test_silent_frequency(self, treble):
        mapper = StaffPositionMapper(treble)
        assert mapper.place_frequency(0.0) is SILENT
        assert mapper.place_frequency(-3.0) is SILENT
        assert not SILENT
        assert isinstance(SILENT, SilentInput)

    def test_zero_maps_to_middle_line(self, treble):
        assert frequency_to_staff_position(0.0, treble) == 0.0

    def test_silence_only_detectable_through_mapper(self, treble, caplog):
        """The bare position of silence equals a real middle-line note."""
        mapper = StaffPositionMapper(treble)
        with caplog.at_level(logging.DEBUG, logger="pitchstaff.notation.staff"):
            position = frequency_to_staff_position(0.0, treble)
        assert position == mapper.place_note("B4").staff_position
        assert "non-positive frequency" in caplog.text
        assert mapper.place_frequency(0.0) is SILENT

    def test_reference_frequency(self):
        context = MusicContext(reference_frequency=442.0)
        placement = StaffPositionMapper(context).place_frequency(442.0)
        assert str(placement.note_name) == "A4"
        assert placement.staff_position == 1.0
        assert not placement.is_on_line

    def test_bass_clef(self):
        context = MusicContext(clef=Clef.BASS)
        assert frequency_to_staff_position(98.0, context) == 4.0  # G2

    def test_ledger_positions(self, treble):
        placement = StaffPositionMapper(treble).place_frequency(261.63)
        assert placement.ledger_positions == (6.0,)


class TestStaffPositionMapper:
    """Test mapper conveniences."""

    def test_place_note(self, treble):
        placement = StaffPositionMapper(treble).place_note("Bb4")
        assert placement.note_name == NoteName.parse("Bb4")
        assert placement.pitch_number == 70.0
        assert placement.staff_position == 0.0
        assert placement.accidental is Accidental.FLAT
        assert placement.frequency == pytest.approx(466.16, abs=0.01)

    def test_place_score(self, treble):
        placements = StaffPositionMapper(treble).place_score([
            ("C4", NoteDuration.QUARTER),
            "E4",
            NoteName.parse("G4"),
        ])
        assert [p.staff_position for p in placements] == [6.0, 4.0, 2.0]

    def test_staff_lines(self):
        mapper = StaffPositionMapper(MusicContext(key_signature="F major"))
        assert mapper.staff_lines() == [
            ("F5", 77, -4.0),
            ("D5", 74, -2.0),
            ("Bb4", 70, 0.0),
            ("G4", 67, 2.0),
            ("E4", 64, 4.0),
        ]

    def test_key_signature(self):
        mapper = StaffPositionMapper(MusicContext(key_signature="D major"))
        assert mapper.key_signature() == [(Accidental.SHARP, -4.0), (Accidental.SHARP, -1.0)]

    def test_default_context(self):
        mapper = StaffPositionMapper()
        assert mapper.context.clef is Clef.TREBLE
        assert mapper.context.key_signature == "C major"


class TestMusicContext:
    """Test context validation."""

    def test_defaults(self):
        context = MusicContext()
        assert context.tempo == 120.0
        assert context.reference_frequency == 440.0

    def test_clef_string_coerced(self):
        assert MusicContext(clef="bass").clef is Clef.BASS

    def test_invalid_tempo(self):
        with pytest.raises(InvalidInput):
            MusicContext(tempo=0)

    def test_invalid_reference(self):
        with pytest.raises(InvalidInput):
            MusicContext(reference_frequency=-440.0)

    def test_invalid_key(self):
        with pytest.raises(InvalidKeySignature):
            MusicContext(key_signature="X major")

    def test_replace(self):
        context = MusicContext().replace(clef=Clef.ALTO, tempo=60)
        assert context.clef is Clef.ALTO
        assert context.seconds_for_beats(2) == pytest.approx(2.0)
