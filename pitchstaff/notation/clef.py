"""Clef model - staff geometry per clef and ledger-line computation.

Staff positions count diatonic steps from the clef's middle line: 0 is the
middle line, negative values are above it and positive values below. Lines
fall on even positions, so the five staff lines sit at -4, -2, 0, 2 and 4.
"""

import math
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..core import Accidental, InvalidInput
from ..core.constants import (
    LETTERS,
    LETTER_PITCH_CLASS,
    STAFF_HALF_HEIGHT,
    LEDGER_LINE_STEP,
)
from .key import KeySignature


class Clef(Enum):
    """Supported clefs."""

    TREBLE = "treble"
    BASS = "bass"
    ALTO = "alto"  # C clef on the middle line
    TENOR = "tenor"  # C clef on the fourth line

    @classmethod
    def parse(cls, text: str) -> "Clef":
        """Look up a clef by name (case-insensitive)."""
        try:
            return cls(text.strip().lower())
        except ValueError:
            valid = ", ".join(c.value for c in cls)
            raise InvalidInput(f"Unknown clef {text!r}. Valid: {valid}") from None

    @property
    def middle_line(self) -> Tuple[str, int]:
        """(letter, octave) of the natural note on the middle line."""
        return _MIDDLE_LINE[self]

    @property
    def middle_line_pitch_number(self) -> int:
        """Pitch number of the natural note on the middle line (B4 = 71 for treble)."""
        letter, octave = self.middle_line
        return 12 * (octave + 1) + LETTER_PITCH_CLASS[letter]

    @property
    def middle_line_diatonic_index(self) -> int:
        letter, octave = self.middle_line
        return diatonic_index(letter, octave)

    @property
    def staff_line_pitches(self) -> List[int]:
        """Natural pitch numbers of the five lines, top line first."""
        return list(_NATURAL_STAFF_LINES[self])

    def staff_line_pitches_in(self, key: Optional[KeySignature] = None) -> List[int]:
        """
        Pitch numbers of the five lines in a key, top line first.

        Walks the diatonic scale outward from the middle line and applies the
        key's accidentals, so treble in F major yields F5 D5 Bb4 G4 E4.
        """
        return [
            _line_pitch(letter, octave, key)
            for letter, octave in self._staff_line_letters()
        ]

    def staff_line_names_in(self, key: Optional[KeySignature] = None) -> List[str]:
        """
        Spelled names of the five lines in a key, top line first.

        These are display strings. Keys at the edge of the circle of fifths
        produce spellings such as 'Fb5' or 'E#5' that ``NoteName`` does not
        model; use ``staff_line_pitches_in`` for the pitch.
        """
        names = []
        for letter, octave in self._staff_line_letters():
            spelling = key.spell(letter) if key is not None else letter
            names.append(f"{spelling}{octave}")
        return names

    def _staff_line_letters(self) -> List[Tuple[str, int]]:
        middle = self.middle_line_diatonic_index
        return [_letter_at(middle + step) for step in (4, 2, 0, -2, -4)]

    def position_of(self, letter: str, octave: int) -> float:
        """Staff position of a letter/octave (spelling-independent)."""
        return float(self.middle_line_diatonic_index - diatonic_index(letter, octave))

    def key_signature_positions(self, key: KeySignature) -> List[Tuple[Accidental, float]]:
        """
        Engraved placement of a key signature on this clef.

        Returns:
            (accidental, staff position) pairs in engraving order
        """
        if key.fifths == 0:
            return []
        kind = "sharp" if key.fifths > 0 else "flat"
        placements = _KEY_SIGNATURE_PLACEMENT[self][kind][: abs(key.fifths)]
        return [
            (key.accidental, self.position_of(note[0], int(note[1:])))
            for note in placements
        ]


_MIDDLE_LINE: Dict[Clef, Tuple[str, int]] = {
    Clef.TREBLE: ("B", 4),  # 71
    Clef.BASS: ("D", 3),  # 50
    Clef.ALTO: ("C", 4),  # 60
    Clef.TENOR: ("A", 3),  # 57
}

# Where each sharp/flat of a signature is engraved, per clef
_KEY_SIGNATURE_PLACEMENT: Dict[Clef, Dict[str, Tuple[str, ...]]] = {
    Clef.TREBLE: {
        "sharp": ("F5", "C5", "G5", "D5", "A4", "E5", "B4"),
        "flat": ("B4", "E5", "A4", "D5", "G4", "C5", "F4"),
    },
    Clef.BASS: {
        "sharp": ("F3", "C3", "G3", "D3", "A2", "E3", "B2"),
        "flat": ("B2", "E3", "A2", "D3", "G2", "C3", "F2"),
    },
    Clef.ALTO: {
        "sharp": ("F4", "C4", "G4", "D4", "A3", "E4", "B3"),
        "flat": ("B3", "E4", "A3", "D4", "G3", "C4", "F3"),
    },
    Clef.TENOR: {
        "sharp": ("F3", "C4", "G3", "D4", "A3", "E4", "B3"),
        "flat": ("B3", "E4", "A3", "D4", "G3", "C4", "F3"),
    },
}


def diatonic_index(letter: str, octave: int) -> int:
    """Absolute diatonic step count of a letter/octave (C0 = 7)."""
    return 7 * (octave + 1) + LETTERS.index(letter)


def _letter_at(index: int) -> Tuple[str, int]:
    return LETTERS[index % 7], index // 7 - 1


def _line_pitch(letter: str, octave: int, key: Optional[KeySignature]) -> int:
    pitch = 12 * (octave + 1) + LETTER_PITCH_CLASS[letter]
    if key is not None:
        pitch += key.accidental_for(letter).semitones
    return pitch


_NATURAL_STAFF_LINES = {clef: tuple(clef.staff_line_pitches_in()) for clef in Clef}


def ledger_line_count(staff_position: float) -> int:
    """
    Number of ledger lines needed for a staff position.

    0 within the staff (|p| <= 4), otherwise one per 2.0 units beyond it.
    """
    distance = abs(staff_position) - STAFF_HALF_HEIGHT
    if distance <= 0:
        return 0
    return int(math.ceil(distance / LEDGER_LINE_STEP))


def ledger_line_positions(staff_position: float) -> List[float]:
    """Ledger-line positions from the staff edge outward (e.g. [6.0, 8.0])."""
    count = ledger_line_count(staff_position)
    sign = 1.0 if staff_position > 0 else -1.0
    return [
        sign * (STAFF_HALF_HEIGHT + LEDGER_LINE_STEP * i)
        for i in range(1, count + 1)
    ]
