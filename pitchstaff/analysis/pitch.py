"""Pitch math - frequency, pitch number and note name conversions.

All functions are pure. Pitch numbers are real-valued and integer-aligned to
equal-tempered semitones, anchored so that ``reference_frequency`` sits at
``reference_pitch`` (A4 = 440 Hz = 69 by default).
"""

import math
from typing import Union

import numpy as np

from ..core import NoteName, InvalidInput, UnparseableNoteName
from ..core.constants import DEFAULT_REFERENCE_FREQUENCY, DEFAULT_REFERENCE_PITCH

NoteLike = Union[str, NoteName]


def frequency_to_pitch_number(
    freq: float,
    reference_frequency: float = DEFAULT_REFERENCE_FREQUENCY,
    reference_pitch: float = DEFAULT_REFERENCE_PITCH,
) -> float:
    """
    Convert frequency (Hz) to a continuous pitch number.

    Raises:
        InvalidInput: If ``freq`` or ``reference_frequency`` is not positive.
    """
    if freq <= 0:
        raise InvalidInput(f"Frequency must be positive, got {freq}")
    if reference_frequency <= 0:
        raise InvalidInput(f"Reference frequency must be positive, got {reference_frequency}")
    return float(reference_pitch + 12 * np.log2(freq / reference_frequency))


def pitch_number_to_frequency(
    pitch: float,
    reference_frequency: float = DEFAULT_REFERENCE_FREQUENCY,
    reference_pitch: float = DEFAULT_REFERENCE_PITCH,
) -> float:
    """Convert a pitch number to frequency (Hz)."""
    return float(reference_frequency * 2 ** ((pitch - reference_pitch) / 12.0))


def to_note_name(name: NoteLike) -> NoteName:
    """Accept either a parsed NoteName or its string form."""
    if isinstance(name, NoteName):
        return name
    if isinstance(name, str):
        return NoteName.parse(name)
    raise UnparseableNoteName(repr(name), "expected a note name string")


def note_name_to_pitch_number(name: NoteLike) -> int:
    """
    Exact pitch number of a spelled note ('C4' -> 60, 'Db4' -> 61).

    Raises:
        UnparseableNoteName: On malformed input. Never defaults.
    """
    return to_note_name(name).pitch_number


def pitch_number_to_note_name(pitch: float) -> NoteName:
    """
    Nearest canonical note name for a pitch number.

    Rounds half up and always spells with sharps, so this is lossy:
    'Db4' -> 61 -> 'C#4'.
    """
    if not math.isfinite(pitch):
        raise InvalidInput(f"Pitch number must be finite, got {pitch}")
    return NoteName.from_pitch_number(math.floor(pitch + 0.5))


def note_name_to_frequency(
    name: NoteLike,
    reference_frequency: float = DEFAULT_REFERENCE_FREQUENCY,
) -> float:
    """Frequency of a spelled note at the given tuning."""
    return pitch_number_to_frequency(note_name_to_pitch_number(name), reference_frequency)


def cents_offset(
    freq: float,
    reference_frequency: float = DEFAULT_REFERENCE_FREQUENCY,
) -> float:
    """Deviation in cents from the nearest equal-tempered pitch (-50..+50)."""
    pitch = frequency_to_pitch_number(freq, reference_frequency)
    return (pitch - math.floor(pitch + 0.5)) * 100.0
