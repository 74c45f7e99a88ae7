"""Note name and duration types - the vocabulary every other layer speaks."""

import re
from dataclasses import dataclass
from enum import Enum

from .constants import LETTERS, LETTER_PITCH_CLASS, PITCH_NAMES, DEFAULT_TEMPO
from .errors import InvalidInput, UnparseableNoteName


class Accidental(Enum):
    """Accidentals a note can carry or display."""

    NONE = ""
    SHARP = "#"
    FLAT = "b"
    NATURAL = "n"  # display only

    @property
    def symbol(self) -> str:
        """Engraved symbol (empty for no accidental)."""
        return _SYMBOLS[self]

    @property
    def semitones(self) -> int:
        """Chromatic alteration applied to the letter."""
        if self is Accidental.SHARP:
            return 1
        if self is Accidental.FLAT:
            return -1
        return 0


_SYMBOLS = {
    Accidental.NONE: "",
    Accidental.SHARP: "♯",
    Accidental.FLAT: "♭",
    Accidental.NATURAL: "♮",
}

# Spellings with a chromatic index. Cb, Fb, E# and B# are not supported.
_SPELLING_INDEX = {
    "C": 0, "C#": 1, "Db": 1,
    "D": 2, "D#": 3, "Eb": 3,
    "E": 4,
    "F": 5, "F#": 6, "Gb": 6,
    "G": 7, "G#": 8, "Ab": 8,
    "A": 9, "A#": 10, "Bb": 10,
    "B": 11,
}

_NOTE_RE = re.compile(r"^([A-Z])([#b♯♭]?)(-?\d+)$")
_ACCIDENTAL_ALIASES = {
    "": Accidental.NONE,
    "#": Accidental.SHARP,
    "♯": Accidental.SHARP,
    "b": Accidental.FLAT,
    "♭": Accidental.FLAT,
}


@dataclass(frozen=True)
class NoteName:
    """A spelled pitch: letter, accidental and octave (e.g. 'C#4')."""

    letter: str
    accidental: Accidental = Accidental.NONE
    octave: int = 4

    def __post_init__(self):
        if self.letter not in LETTER_PITCH_CLASS:
            raise UnparseableNoteName(str(self.letter), "unknown letter")
        if self.accidental is Accidental.NATURAL:
            raise UnparseableNoteName(
                f"{self.letter}n{self.octave}", "natural is a display-only accidental"
            )
        if self.spelling not in _SPELLING_INDEX:
            raise UnparseableNoteName(str(self), "unknown letter/accidental combination")

    @classmethod
    def parse(cls, text: str) -> "NoteName":
        """
        Parse a note name such as 'C4', 'Bb5', 'F#3' or 'E-1'.

        Raises:
            UnparseableNoteName: On missing octave, unknown letter or
                unsupported letter/accidental combination.
        """
        if not isinstance(text, str):
            raise UnparseableNoteName(repr(text), "not a string")
        match = _NOTE_RE.match(text.strip())
        if match is None:
            raise UnparseableNoteName(text)
        letter, accidental, octave = match.groups()
        if letter not in LETTER_PITCH_CLASS:
            raise UnparseableNoteName(text, f"unknown letter {letter!r}")
        spelling = letter + _ACCIDENTAL_ALIASES[accidental].value
        if spelling not in _SPELLING_INDEX:
            raise UnparseableNoteName(text, "unknown letter/accidental combination")
        return cls(letter, _ACCIDENTAL_ALIASES[accidental], int(octave))

    @classmethod
    def from_pitch_number(cls, pitch: int) -> "NoteName":
        """Canonical (sharp-preferring) spelling of an integer pitch number."""
        pitch = int(pitch)
        name = PITCH_NAMES[pitch % 12]
        octave = pitch // 12 - 1
        accidental = Accidental.SHARP if len(name) > 1 else Accidental.NONE
        return cls(name[0], accidental, octave)

    @property
    def spelling(self) -> str:
        """Letter plus ASCII accidental, without octave (e.g. 'Bb')."""
        return self.letter + self.accidental.value

    @property
    def chromatic_index(self) -> int:
        """Pitch class (0-11, where 0=C)."""
        return _SPELLING_INDEX[self.spelling]

    @property
    def pitch_number(self) -> int:
        """Exact pitch number: 12 * (octave + 1) + chromatic index."""
        return 12 * (self.octave + 1) + self.chromatic_index

    @property
    def letter_degree(self) -> int:
        """Position of the letter within the octave (C=0 ... B=6)."""
        return LETTERS.index(self.letter)

    @property
    def diatonic_index(self) -> int:
        """Absolute diatonic step count from C-1 (C0 = 7)."""
        return 7 * (self.octave + 1) + self.letter_degree

    def __str__(self) -> str:
        return f"{self.spelling}{self.octave}"


class NoteDuration(Enum):
    """Duration classes, valued in beats."""

    WHOLE = 4.0
    HALF = 2.0
    QUARTER = 1.0
    EIGHTH = 0.5
    SIXTEENTH = 0.25
    THIRTY_SECOND = 0.125

    @property
    def beats(self) -> float:
        return self.value

    def seconds(self, tempo: float = DEFAULT_TEMPO) -> float:
        """Duration in seconds at the given tempo (BPM)."""
        if tempo <= 0:
            raise InvalidInput(f"Tempo must be positive, got {tempo}")
        return self.beats * 60.0 / tempo
