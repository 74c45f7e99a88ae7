"""Tracking layer - live pitch stream to on-screen cursor.

- Stabilize raw (frequency, amplitude) samples
- Interpolate a cursor position between staff lines
- Keep the scrolling trail behind the cursor
"""

from .stabilizer import (
    PitchStabilizer,
    StabilizerConfig,
    StabilizedSample,
    StreamState,
)
from .cursor import CursorInterpolator, CursorConfig, StaffGeometry
from .trail import TrailHistory, TrailConfig, TrailPoint

__all__ = [
    "PitchStabilizer",
    "StabilizerConfig",
    "StabilizedSample",
    "StreamState",
    "CursorInterpolator",
    "CursorConfig",
    "StaffGeometry",
    "TrailHistory",
    "TrailConfig",
    "TrailPoint",
]
