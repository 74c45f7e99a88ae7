"""pitchstaff - Notation positioning and live pitch tracking.

Architecture Layers:
    1. core/      - Note names, durations, constants and errors
    2. analysis/  - Frequency / pitch number / note name conversions
    3. notation/  - Clefs, key signatures, staff positions and scores
    4. tracking/  - Live stream stabilization, cursor interpolation, trail
"""

__version__ = "0.1.0"

# Core types
from .core import Accidental, NoteName, NoteDuration

# Analysis layer
from .analysis import (
    frequency_to_pitch_number,
    pitch_number_to_frequency,
    note_name_to_pitch_number,
    pitch_number_to_note_name,
)

# Notation layer
from .notation import (
    Clef,
    KeySignature,
    MusicContext,
    StaffPositionMapper,
    Note,
    TimedNote,
    SheetMusic,
    SILENT,
)

# Tracking layer
from .tracking import (
    PitchStabilizer,
    StabilizerConfig,
    CursorInterpolator,
    StaffGeometry,
    TrailHistory,
    TrailConfig,
)

__all__ = [
    # Core
    "Accidental",
    "NoteName",
    "NoteDuration",
    # Analysis
    "frequency_to_pitch_number",
    "pitch_number_to_frequency",
    "note_name_to_pitch_number",
    "pitch_number_to_note_name",
    # Notation
    "Clef",
    "KeySignature",
    "MusicContext",
    "StaffPositionMapper",
    "Note",
    "TimedNote",
    "SheetMusic",
    "SILENT",
    # Tracking
    "PitchStabilizer",
    "StabilizerConfig",
    "CursorInterpolator",
    "StaffGeometry",
    "TrailHistory",
    "TrailConfig",
]
