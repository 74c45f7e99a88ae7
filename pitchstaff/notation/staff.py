"""Staff position mapping - place frequencies and note names on a staff.

The mapping is table driven. A pitch is split into octave and pitch class,
and the pitch class is looked up in a 12-entry table of diatonic steps. A
linear semitone-to-position formula puts diatonic notes on fractional
positions (E-F and B-C are a semitone apart yet one full step on the
staff), so no such formula is used anywhere in this module.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ..core import Accidental, NoteName, NoteDuration, InvalidInput
from ..core.constants import DIATONIC_STEPS_PER_OCTAVE, SEMITONES_PER_OCTAVE
from ..analysis.pitch import (
    NoteLike,
    frequency_to_pitch_number,
    pitch_number_to_frequency,
    pitch_number_to_note_name,
    to_note_name,
)
from .clef import Clef, ledger_line_count, ledger_line_positions
from .context import MusicContext

logger = logging.getLogger(__name__)

# Diatonic steps above C for each pitch class, sharp spelling (C# shares C's step)
SHARP_STEPS = {
    0: 0,  # C
    1: 0,  # C#
    2: 1,  # D
    3: 1,  # D#
    4: 2,  # E
    5: 3,  # F
    6: 3,  # F#
    7: 4,  # G
    8: 4,  # G#
    9: 5,  # A
    10: 5,  # A#
    11: 6,  # B
}

# Same, flat spelling (Db shares D's step)
FLAT_STEPS = {
    0: 0,  # C
    1: 1,  # Db
    2: 1,  # D
    3: 2,  # Eb
    4: 2,  # E
    5: 3,  # F
    6: 4,  # Gb
    7: 4,  # G
    8: 5,  # Ab
    9: 5,  # A
    10: 6,  # Bb
    11: 6,  # B
}


class SilentInput:
    """Typed "no pitch detected" result, distinct from a numeric zero."""

    frequency = 0.0
    staff_position = 0.0
    note_name = None

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "SILENT"


SILENT = SilentInput()


@dataclass(frozen=True)
class StaffPlacement:
    """Where a pitch lands on the staff."""

    frequency: float
    pitch_number: float
    note_name: NoteName
    staff_position: float
    ledger_lines: int
    ledger_positions: Tuple[float, ...]

    @property
    def accidental(self) -> Accidental:
        return self.note_name.accidental

    @property
    def is_on_line(self) -> bool:
        """True when the note head sits on a (staff or ledger) line."""
        return self.staff_position % 2 == 0


def _steps(pitch: int, prefer_flats: bool = False) -> int:
    table = FLAT_STEPS if prefer_flats else SHARP_STEPS
    octave, pitch_class = divmod(pitch, SEMITONES_PER_OCTAVE)
    return DIATONIC_STEPS_PER_OCTAVE * octave + table[pitch_class]


def pitch_number_to_staff_position(
    pitch: float,
    clef: Clef,
    prefer_flats: bool = False,
) -> float:
    """
    Convert a pitch number to a staff position for a clef.

    The pitch is rounded to the nearest semitone and looked up by pitch
    class; higher pitches give smaller (higher on screen) positions.

    Args:
        pitch: Pitch number (60 = C4)
        clef: The clef
        prefer_flats: Place black keys on the letter above (Db on D)
            instead of the letter below (C# on C)

    Returns:
        Staff position where 0 = middle line, negative = above
    """
    if not math.isfinite(pitch):
        raise InvalidInput(f"Pitch number must be finite, got {pitch}")
    rounded = int(math.floor(pitch + 0.5))
    middle = _steps(clef.middle_line_pitch_number)
    return float(middle - _steps(rounded, prefer_flats))


def note_name_to_staff_position(name: NoteLike, context: MusicContext) -> float:
    """Staff position of a spelled note; flats sit on the letter they are spelled with."""
    note = to_note_name(name)
    return pitch_number_to_staff_position(
        note.pitch_number,
        context.clef,
        prefer_flats=note.accidental is Accidental.FLAT,
    )


def frequency_to_staff_position(freq: float, context: MusicContext) -> float:
    """
    Staff position of a frequency.

    Black keys are read the way the context's key writes them, so in a flat
    key 466.16 Hz lands on the B line like a written Bb4.

    Returns 0.0 (middle line) for ``freq <= 0``. This is indistinguishable
    from a note on the middle line; callers that need to detect silence
    must use ``StaffPositionMapper.place_frequency``, which returns SILENT.
    """
    if freq <= 0:
        logger.debug("frequency_to_staff_position: non-positive frequency %.3f -> middle line", freq)
        return 0.0
    pitch = frequency_to_pitch_number(freq, context.reference_frequency)
    return pitch_number_to_staff_position(pitch, context.clef, context.prefers_flats)


def accidental_for_display(name: NoteLike, key_signature: Optional[str] = None) -> Accidental:
    """
    Accidental to draw next to a note.

    Echoes the note's own spelling. The key signature is accepted but not
    consulted: implied accidentals and cancelling naturals are not resolved.
    """
    return to_note_name(name).accidental


def ledger_line_count_for(name: NoteLike, context: MusicContext) -> int:
    return ledger_line_count(note_name_to_staff_position(name, context))


def ledger_line_positions_for(name: NoteLike, context: MusicContext) -> List[float]:
    return ledger_line_positions(note_name_to_staff_position(name, context))


class StaffPositionMapper:
    """Place notes and frequencies for one music context."""

    def __init__(self, context: Optional[MusicContext] = None):
        self.context = context if context is not None else MusicContext()

    def place_note(self, name: NoteLike) -> StaffPlacement:
        """Place a spelled note."""
        note = to_note_name(name)
        position = note_name_to_staff_position(note, self.context)
        return StaffPlacement(
            frequency=pitch_number_to_frequency(
                note.pitch_number, self.context.reference_frequency
            ),
            pitch_number=float(note.pitch_number),
            note_name=note,
            staff_position=position,
            ledger_lines=ledger_line_count(position),
            ledger_positions=tuple(ledger_line_positions(position)),
        )

    def place_frequency(self, freq: float) -> Union[StaffPlacement, SilentInput]:
        """
        Place a detected frequency.

        Returns:
            StaffPlacement of the nearest canonical note, or SILENT when
            ``freq <= 0``. The note name is always sharp-spelled; the
            position follows the context's key.
        """
        if freq <= 0:
            logger.debug("place_frequency: non-positive frequency %.3f -> silent", freq)
            return SILENT
        pitch = frequency_to_pitch_number(freq, self.context.reference_frequency)
        position = pitch_number_to_staff_position(
            pitch, self.context.clef, self.context.prefers_flats
        )
        return StaffPlacement(
            frequency=float(freq),
            pitch_number=pitch,
            note_name=pitch_number_to_note_name(pitch),
            staff_position=position,
            ledger_lines=ledger_line_count(position),
            ledger_positions=tuple(ledger_line_positions(position)),
        )

    def place_score(
        self, notes: Iterable[Union[NoteLike, Tuple[NoteLike, NoteDuration]]]
    ) -> List[StaffPlacement]:
        """Place a sequence of notes or (note, duration) pairs."""
        placements = []
        for item in notes:
            name = item[0] if isinstance(item, tuple) else item
            placements.append(self.place_note(name))
        return placements

    def staff_lines(self) -> List[Tuple[str, int, float]]:
        """(name, pitch number, position) of each staff line, top first."""
        key = self.context.key
        clef = self.context.clef
        names = clef.staff_line_names_in(key)
        pitches = clef.staff_line_pitches_in(key)
        positions: Sequence[float] = (-4.0, -2.0, 0.0, 2.0, 4.0)
        return list(zip(names, pitches, positions))

    def key_signature(self) -> List[Tuple[Accidental, float]]:
        """Engraved key signature accidentals for this context."""
        return self.context.clef.key_signature_positions(self.context.key)
