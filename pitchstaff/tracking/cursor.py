"""Cursor interpolation - glide a pitch cursor smoothly between staff positions.

Snapping the cursor to the nearest note makes a bending pitch jump from line
to space. Instead the cursor is anchored at the nearest note and moved
toward the next staff position in the direction of the detuning, in
proportion to how far the frequency has travelled toward it. In flat keys
black keys are read on the letter above, as the written staff spells them.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ..core import InvalidConfiguration
from ..analysis.pitch import (
    frequency_to_pitch_number,
    pitch_number_to_frequency,
    pitch_number_to_note_name,
)
from ..notation.clef import Clef
from ..notation.context import MusicContext
from ..notation.staff import pitch_number_to_staff_position

logger = logging.getLogger(__name__)


@dataclass
class StaffGeometry:
    """Screen geometry of a rendered staff.

    Attributes:
        center_y: Pixel Y of the middle staff line (default: 100)
        line_spacing: Pixels between adjacent staff lines (default: 20)
    """

    center_y: float = 100.0
    line_spacing: float = 20.0

    def __post_init__(self):
        if self.line_spacing <= 0:
            raise InvalidConfiguration(f"line_spacing must be positive, got {self.line_spacing}")

    def y_for(self, staff_position: float) -> float:
        """Pixel Y of a staff position (one diatonic step = half a line spacing)."""
        return self.center_y + staff_position * self.line_spacing / 2.0

    def position_for(self, y: float) -> float:
        """Inverse of ``y_for``."""
        return (y - self.center_y) * 2.0 / self.line_spacing


@dataclass
class CursorConfig:
    """Configuration for cursor interpolation.

    Attributes:
        snap_tolerance: Hz within which the cursor snaps to the nearest note (default: 0.5)
        search_limit: Semitones searched for the next staff position (default: 12)
    """

    snap_tolerance: float = 0.5
    search_limit: int = 12

    def __post_init__(self):
        if self.snap_tolerance < 0:
            raise InvalidConfiguration(
                f"snap_tolerance must be non-negative, got {self.snap_tolerance}"
            )
        if self.search_limit < 1:
            raise InvalidConfiguration(f"search_limit must be >= 1, got {self.search_limit}")


class CursorInterpolator:
    """Convert a stabilized frequency into a continuous cursor coordinate."""

    def __init__(
        self,
        geometry: Optional[StaffGeometry] = None,
        config: Optional[CursorConfig] = None,
    ):
        self.geometry = geometry if geometry is not None else StaffGeometry()
        self.config = config if config is not None else CursorConfig()

    def position(self, frequency: float, context: MusicContext) -> float:
        """
        Screen Y for a stabilized frequency.

        Args:
            frequency: Stabilized frequency in Hz (<= 0 means silent)
            context: Music context supplying clef and tuning

        Returns:
            Pixel Y; the middle line for silent input
        """
        return self._interpolate(frequency, context, self.geometry.y_for)

    def staff_position(self, frequency: float, context: MusicContext) -> float:
        """Interpolated (possibly fractional) staff position for a frequency."""
        return self._interpolate(frequency, context, lambda pos: pos)

    def _interpolate(
        self,
        frequency: float,
        context: MusicContext,
        to_y: Callable[[float], float],
    ) -> float:
        if frequency <= 0:
            return to_y(0.0)

        ref = context.reference_frequency
        clef = context.clef
        flats = context.prefers_flats

        pitch = frequency_to_pitch_number(frequency, ref)
        nearest = pitch_number_to_note_name(pitch).pitch_number
        anchor_position = pitch_number_to_staff_position(nearest, clef, flats)
        y_anchor = to_y(anchor_position)

        true_frequency = pitch_number_to_frequency(nearest, ref)
        if abs(frequency - true_frequency) < self.config.snap_tolerance:
            return y_anchor

        direction = 1 if frequency > true_frequency else -1
        next_pitch = self._next_position_pitch(
            nearest, anchor_position, direction, clef, flats
        )

        # Last pitch that still shares the anchor's line or space
        top_frequency = pitch_number_to_frequency(next_pitch - direction, ref)
        next_frequency = pitch_number_to_frequency(next_pitch, ref)

        span = abs(top_frequency - next_frequency)
        ratio = direction * (frequency - top_frequency) / span
        ratio = min(1.0, max(0.0, ratio))

        y_next = to_y(pitch_number_to_staff_position(next_pitch, clef, flats))
        return y_anchor + ratio * (y_next - y_anchor)

    def _next_position_pitch(
        self,
        start: int,
        start_position: float,
        direction: int,
        clef: Clef,
        prefer_flats: bool = False,
    ) -> int:
        """First pitch from ``start`` in ``direction`` on a different staff position."""
        for step in range(1, self.config.search_limit + 1):
            candidate = start + direction * step
            if pitch_number_to_staff_position(candidate, clef, prefer_flats) != start_position:
                return candidate
        logger.debug(
            "No staff position change within %d semitones of %d; stepping one semitone",
            self.config.search_limit,
            start,
        )
        return start + direction
