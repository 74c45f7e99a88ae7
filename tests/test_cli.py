"""Tests for the pitchstaff command-line interface."""

import json

import pytest
from typer.testing import CliRunner

from pitchstaff.cli import app, read_samples

runner = CliRunner()


@pytest.fixture
def samples_file(tmp_path):
    path = tmp_path / "samples.txt"
    path.write_text(
        "# frequency amplitude\n"
        "440 0.5\n"
        "440.0, 0.5\n"
        "\n"
        "441 0.5\n"
        "0 0\n"
    )
    return path


class TestNoteCommand:
    def test_note(self):
        result = runner.invoke(app, ["note", "C4"])
        assert result.exit_code == 0
        assert "261.63" in result.stdout
        assert "treble" in result.stdout

    def test_bad_note(self):
        result = runner.invoke(app, ["note", "H4"])
        assert result.exit_code == 1
        assert "Error" in result.stdout


class TestFreqCommand:
    def test_freq(self):
        result = runner.invoke(app, ["freq", "392"])
        assert result.exit_code == 0
        assert "G4" in result.stdout

    def test_silent(self):
        result = runner.invoke(app, ["freq", "0"])
        assert result.exit_code == 0
        assert "silent" in result.stdout

    def test_bad_clef(self):
        result = runner.invoke(app, ["freq", "440", "--clef", "soprano"])
        assert result.exit_code == 1


class TestStaffCommand:
    def test_bass(self):
        result = runner.invoke(app, ["staff", "--clef", "bass"])
        assert result.exit_code == 0
        assert "D3" in result.stdout

    def test_key_signature(self):
        result = runner.invoke(app, ["staff", "--key", "D major"])
        assert result.exit_code == 0
        assert "Key signature" in result.stdout
        assert "none" not in result.stdout

    def test_bad_key(self):
        result = runner.invoke(app, ["staff", "--key", "X major"])
        assert result.exit_code == 1


class TestTrackCommand:
    def test_json(self, samples_file):
        result = runner.invoke(app, ["track", str(samples_file), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        samples = data["samples"]
        assert len(samples) == 4
        assert samples[0]["note"] == "A4"
        assert samples[0]["staff_position"] == pytest.approx(1.0)
        # Decays rather than dropping to silence
        assert samples[3]["note"] is not None
        assert data["context"]["clef"] == "treble"

    def test_table(self, samples_file):
        result = runner.invoke(app, ["track", str(samples_file), "-w", "3", "-s", "0.7"])
        assert result.exit_code == 0
        assert "A4" in result.stdout

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["track", str(tmp_path / "nope.txt")])
        assert result.exit_code == 1

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("440 loud\n")
        result = runner.invoke(app, ["track", str(path)])
        assert result.exit_code == 1

    def test_bad_window(self, samples_file):
        result = runner.invoke(app, ["track", str(samples_file), "--window", "0"])
        assert result.exit_code == 1


class TestReadSamples:
    def test_skips_comments_and_blanks(self, samples_file):
        assert read_samples(samples_file) == [
            (440.0, 0.5),
            (440.0, 0.5),
            (441.0, 0.5),
            (0.0, 0.0),
        ]

    def test_wrong_column_count(self, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("440 0.5 1\n")
        with pytest.raises(ValueError):
            read_samples(path)
