"""Notation layer - clefs, keys and staff positioning.

Maps pitches and note names onto a staff:
- Clef geometry and ledger lines
- Key signatures
- Staff position mapping
- Static score content
"""

from .clef import Clef, ledger_line_count, ledger_line_positions
from .key import KeySignature, Mode
from .context import MusicContext
from .staff import (
    StaffPositionMapper,
    StaffPlacement,
    SilentInput,
    SILENT,
    pitch_number_to_staff_position,
    note_name_to_staff_position,
    frequency_to_staff_position,
    accidental_for_display,
    ledger_line_count_for,
    ledger_line_positions_for,
)
from .score import Note, TimedNote, SheetMusic

__all__ = [
    "Clef",
    "ledger_line_count",
    "ledger_line_positions",
    "KeySignature",
    "Mode",
    "MusicContext",
    "StaffPositionMapper",
    "StaffPlacement",
    "SilentInput",
    "SILENT",
    "pitch_number_to_staff_position",
    "note_name_to_staff_position",
    "frequency_to_staff_position",
    "accidental_for_display",
    "ledger_line_count_for",
    "ledger_line_positions_for",
    "Note",
    "TimedNote",
    "SheetMusic",
]
