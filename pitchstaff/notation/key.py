"""Key signatures - parse identifiers like 'D minor' into sharps/flats.

Only the signature itself is modelled (which letters are altered). Resolving
which accidentals a note must *display* against the signature is out of
scope; see ``staff.accidental_for_display``.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List

from ..core import Accidental, InvalidKeySignature
from ..core.constants import DEFAULT_KEY_SIGNATURE, LETTERS, LETTER_PITCH_CLASS


class Mode(Enum):
    """Supported key modes."""
    MAJOR = "major"
    MINOR = "minor"


# Order in which sharps and flats are added to a signature
SHARP_ORDER = ["F", "C", "G", "D", "A", "E", "B"]
FLAT_ORDER = ["B", "E", "A", "D", "G", "C", "F"]

# Position on the circle of fifths (sharps > 0, flats < 0)
MAJOR_FIFTHS = {
    "C": 0, "G": 1, "D": 2, "A": 3, "E": 4, "B": 5, "F#": 6, "C#": 7,
    "F": -1, "Bb": -2, "Eb": -3, "Ab": -4, "Db": -5, "Gb": -6, "Cb": -7,
}
MINOR_FIFTHS = {
    "A": 0, "E": 1, "B": 2, "F#": 3, "C#": 4, "G#": 5, "D#": 6, "A#": 7,
    "D": -1, "G": -2, "C": -3, "F": -4, "Bb": -5, "Eb": -6, "Ab": -7,
}

_KEY_RE = re.compile(r"^\s*([A-Ga-g])([#b♯♭]?)\s*(major|minor|maj|min)?\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class KeySignature:
    """A key: tonic, mode and its place on the circle of fifths."""

    tonic: str  # e.g. "D", "F#", "Bb"
    mode: Mode
    fifths: int

    @classmethod
    def parse(cls, text: str = DEFAULT_KEY_SIGNATURE) -> "KeySignature":
        """
        Parse an identifier such as 'C major', 'D minor', 'F# major' or 'Bb'.

        A bare tonic is read as major.

        Raises:
            InvalidKeySignature: If the identifier is not a known key.
        """
        if not isinstance(text, str):
            raise InvalidKeySignature(f"Key signature must be a string, got {text!r}")
        match = _KEY_RE.match(text)
        if match is None:
            raise InvalidKeySignature(f"Unknown key signature: {text!r}")

        letter, accidental, mode_text = match.groups()
        tonic = letter.upper() + {"♯": "#", "♭": "b"}.get(accidental, accidental)
        mode = Mode.MINOR if (mode_text or "").lower().startswith("min") else Mode.MAJOR

        table = MINOR_FIFTHS if mode is Mode.MINOR else MAJOR_FIFTHS
        if tonic not in table:
            raise InvalidKeySignature(f"Unknown key signature: {text!r}")
        return cls(tonic=tonic, mode=mode, fifths=table[tonic])

    @property
    def name(self) -> str:
        return f"{self.tonic} {self.mode.value}"

    @property
    def accidental(self) -> Accidental:
        """The kind of accidental the signature uses."""
        if self.fifths > 0:
            return Accidental.SHARP
        if self.fifths < 0:
            return Accidental.FLAT
        return Accidental.NONE

    @property
    def altered_letters(self) -> List[str]:
        """Altered letters in engraving order (e.g. ['B', 'E'] for Bb major)."""
        if self.fifths >= 0:
            return SHARP_ORDER[: self.fifths]
        return FLAT_ORDER[: -self.fifths]

    def accidental_for(self, letter: str) -> Accidental:
        """Accidental the signature applies to a letter."""
        if letter in self.altered_letters:
            return self.accidental
        return Accidental.NONE

    def spell(self, letter: str) -> str:
        """Letter with the signature's accidental applied (e.g. 'F#')."""
        return letter + self.accidental_for(letter).value

    @property
    def scale_pitch_classes(self) -> List[int]:
        """The seven pitch classes of the key, starting from the tonic."""
        start = LETTERS.index(self.tonic[0])
        classes = []
        for i in range(7):
            letter = LETTERS[(start + i) % 7]
            classes.append((LETTER_PITCH_CLASS[letter] + self.accidental_for(letter).semitones) % 12)
        return classes

    def __str__(self) -> str:
        return self.name
