"""Exception types raised by pitchstaff."""


class PitchStaffError(Exception):
    """Base class for all pitchstaff errors."""


class InvalidInput(PitchStaffError, ValueError):
    """A conversion received a value outside its domain (e.g. a non-positive frequency)."""


class UnparseableNoteName(PitchStaffError, ValueError):
    """A note name string could not be parsed."""

    def __init__(self, text: str, reason: str = "malformed note name"):
        self.text = text
        self.reason = reason
        super().__init__(f"Cannot parse note name {text!r}: {reason}")


class InvalidKeySignature(PitchStaffError, ValueError):
    """A key signature identifier is not recognised."""


class InvalidConfiguration(PitchStaffError, ValueError):
    """A config object was constructed with out-of-range values."""


class StreamStateError(PitchStaffError, RuntimeError):
    """A streaming component was used in the wrong lifecycle state."""
