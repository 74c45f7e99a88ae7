"""Core types, constants and errors for pitchstaff."""

from .note import Accidental, NoteName, NoteDuration
from .constants import (
    PITCH_NAMES,
    LETTERS,
    DEFAULT_REFERENCE_FREQUENCY,
    DEFAULT_REFERENCE_PITCH,
    DEFAULT_TEMPO,
    DEFAULT_KEY_SIGNATURE,
)
from .errors import (
    PitchStaffError,
    InvalidInput,
    UnparseableNoteName,
    InvalidKeySignature,
    InvalidConfiguration,
    StreamStateError,
)

__all__ = [
    "Accidental",
    "NoteName",
    "NoteDuration",
    "PITCH_NAMES",
    "LETTERS",
    "DEFAULT_REFERENCE_FREQUENCY",
    "DEFAULT_REFERENCE_PITCH",
    "DEFAULT_TEMPO",
    "DEFAULT_KEY_SIGNATURE",
    "PitchStaffError",
    "InvalidInput",
    "UnparseableNoteName",
    "InvalidKeySignature",
    "InvalidConfiguration",
    "StreamStateError",
]
