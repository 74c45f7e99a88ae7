"""Analysis layer - pitch conversions.

Converts between frequency, pitch number and note name.
"""

from .pitch import (
    frequency_to_pitch_number,
    pitch_number_to_frequency,
    note_name_to_pitch_number,
    pitch_number_to_note_name,
    note_name_to_frequency,
    cents_offset,
    to_note_name,
)

__all__ = [
    "frequency_to_pitch_number",
    "pitch_number_to_frequency",
    "note_name_to_pitch_number",
    "pitch_number_to_note_name",
    "note_name_to_frequency",
    "cents_offset",
    "to_note_name",
]
