"""Music context - everything needed to position a note on a staff."""

import dataclasses
from dataclasses import dataclass

from ..core import InvalidInput
from ..core.constants import (
    DEFAULT_KEY_SIGNATURE,
    DEFAULT_REFERENCE_FREQUENCY,
    DEFAULT_TEMPO,
)
from .clef import Clef
from .key import KeySignature


@dataclass(frozen=True)
class MusicContext:
    """Immutable notation context.

    Attributes:
        key_signature: Key identifier, e.g. "C major", "D minor" (default: "C major")
        clef: Staff clef (default: treble)
        tempo: Tempo in BPM (default: 120)
        reference_frequency: Frequency of A4 in Hz (default: 440)
    """

    key_signature: str = DEFAULT_KEY_SIGNATURE
    clef: Clef = Clef.TREBLE
    tempo: float = DEFAULT_TEMPO
    reference_frequency: float = DEFAULT_REFERENCE_FREQUENCY

    def __post_init__(self):
        if self.tempo <= 0:
            raise InvalidInput(f"Tempo must be positive, got {self.tempo}")
        if self.reference_frequency <= 0:
            raise InvalidInput(
                f"Reference frequency must be positive, got {self.reference_frequency}"
            )
        if not isinstance(self.clef, Clef):
            object.__setattr__(self, "clef", Clef.parse(str(self.clef)))
        # Fail at construction rather than at first use
        KeySignature.parse(self.key_signature)

    @property
    def key(self) -> KeySignature:
        return KeySignature.parse(self.key_signature)

    @property
    def prefers_flats(self) -> bool:
        """True in flat keys, where black keys are read on the letter above."""
        return self.key.fifths < 0

    def replace(self, **changes) -> "MusicContext":
        """Return a new context with some fields changed."""
        return dataclasses.replace(self, **changes)

    def seconds_for_beats(self, beats: float) -> float:
        """Convert a beat count to seconds at this context's tempo."""
        return beats * 60.0 / self.tempo
