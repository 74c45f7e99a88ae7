"""Pitch stabilizer - turn a jittery (frequency, amplitude) stream into a steady one.

Each voiced sample goes through a sliding median (robust to single-frame
octave errors and spikes) followed by exponential smoothing. When the
amplitude drops out, the smoothed frequency decays geometrically instead of
jumping to zero, so momentary dropouts do not make the cursor snap.
"""

import logging
import warnings
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Optional

import numpy as np

from ..core import NoteName, InvalidConfiguration, StreamStateError
from ..core.constants import DEFAULT_REFERENCE_FREQUENCY
from ..analysis.pitch import frequency_to_pitch_number, pitch_number_to_note_name

logger = logging.getLogger(__name__)

MIN_MEDIAN_WINDOW = 1
MAX_MEDIAN_WINDOW = 15
MAX_SMOOTHING = 0.95


@dataclass
class StabilizerConfig:
    """Configuration for the pitch stabilizer.

    Attributes:
        median_window: Samples in the median filter, 1-15; odd avoids ties (default: 5)
        smoothing: Weight of the previous value in exponential smoothing, 0.0-0.95 (default: 0.5)
        amplitude_threshold: Amplitude below which a sample is silent, > 0 (default: 0.001)
        silence_decay: Per-sample decay factor while silent, 0 < d < 1 (default: 0.9)
        silence_floor: Decayed frequency (Hz) below which output is silent (default: 50)
        min_frequency: Lowest plausible voiced frequency in Hz (default: 50)
        max_frequency: Highest plausible voiced frequency in Hz (default: 4000)
        reference_frequency: A4 tuning used for note names (default: 440)
    """

    median_window: int = 5
    smoothing: float = 0.5
    amplitude_threshold: float = 0.001
    silence_decay: float = 0.9
    silence_floor: float = 50.0
    min_frequency: float = 50.0
    max_frequency: float = 4000.0
    reference_frequency: float = DEFAULT_REFERENCE_FREQUENCY

    def __post_init__(self):
        if not isinstance(self.median_window, int) or isinstance(self.median_window, bool):
            raise InvalidConfiguration(
                f"median_window must be an integer, got {self.median_window!r}"
            )
        if not MIN_MEDIAN_WINDOW <= self.median_window <= MAX_MEDIAN_WINDOW:
            raise InvalidConfiguration(
                f"median_window must be in [{MIN_MEDIAN_WINDOW}, {MAX_MEDIAN_WINDOW}], "
                f"got {self.median_window}"
            )
        if self.median_window % 2 == 0:
            warnings.warn(
                f"Even median_window ({self.median_window}) averages the two middle samples"
            )
        if not 0.0 <= self.smoothing <= MAX_SMOOTHING:
            raise InvalidConfiguration(
                f"smoothing must be in [0.0, {MAX_SMOOTHING}], got {self.smoothing}"
            )
        if self.amplitude_threshold <= 0:
            raise InvalidConfiguration(
                f"amplitude_threshold must be positive, got {self.amplitude_threshold}"
            )
        if not 0.0 < self.silence_decay < 1.0:
            raise InvalidConfiguration(
                f"silence_decay must be in (0, 1), got {self.silence_decay}"
            )
        if self.silence_floor < 0:
            raise InvalidConfiguration(
                f"silence_floor must be non-negative, got {self.silence_floor}"
            )
        if not 0 < self.min_frequency < self.max_frequency:
            raise InvalidConfiguration(
                f"Need 0 < min_frequency < max_frequency, got "
                f"{self.min_frequency}, {self.max_frequency}"
            )
        if self.reference_frequency <= 0:
            raise InvalidConfiguration(
                f"reference_frequency must be positive, got {self.reference_frequency}"
            )


class StreamState(Enum):
    """Lifecycle of a stabilizer session."""
    IDLE = "idle"
    ACTIVE = "active"


@dataclass(frozen=True)
class StabilizedSample:
    """One stabilized output sample.

    A silent sample has frequency 0.0 and no pitch or note name; check
    ``is_silent`` rather than comparing the frequency with zero.
    """

    frequency: float
    amplitude: float
    pitch_number: Optional[float] = None
    note_name: Optional[NoteName] = None

    @property
    def is_silent(self) -> bool:
        return self.note_name is None

    @classmethod
    def silent(cls, amplitude: float) -> "StabilizedSample":
        return cls(frequency=0.0, amplitude=amplitude)


class PitchStabilizer:
    """Median + exponential smoothing filter for a live pitch stream.

    One instance per stream. Call ``start()`` before feeding samples and
    ``stop()`` when the stream ends so no history leaks into the next session.
    """

    def __init__(
        self,
        median_window: int = 5,
        smoothing: float = 0.5,
        amplitude_threshold: float = 0.001,
        config: Optional[StabilizerConfig] = None,
    ):
        """
        Initialize PitchStabilizer.

        Args:
            median_window: Samples in the median filter (1-15)
            smoothing: Exponential smoothing factor (0.0-0.95)
            amplitude_threshold: Minimum amplitude for a voiced sample
            config: Optional StabilizerConfig for advanced settings

        Raises:
            InvalidConfiguration: If any setting is out of range
        """
        if config is not None:
            self.config = config
        else:
            self.config = StabilizerConfig(
                median_window=median_window,
                smoothing=smoothing,
                amplitude_threshold=amplitude_threshold,
            )

        self.state = StreamState.IDLE
        self._window: Deque[float] = deque(maxlen=self.config.median_window)
        self._smoothed = 0.0

    @property
    def is_active(self) -> bool:
        return self.state is StreamState.ACTIVE

    @property
    def smoothed_frequency(self) -> float:
        """Current smoothed frequency (0.0 when silent or idle)."""
        return self._smoothed

    @property
    def buffered_samples(self) -> int:
        return len(self._window)

    def start(self) -> None:
        """Begin a stream with empty filter history."""
        self.reset()
        self.state = StreamState.ACTIVE
        logger.debug("Stabilizer started (window=%d)", self.config.median_window)

    def stop(self) -> None:
        """End the stream and discard filter history."""
        self.reset()
        self.state = StreamState.IDLE
        logger.debug("Stabilizer stopped")

    def reset(self) -> None:
        """Clear filter history without changing state."""
        self._window.clear()
        self._smoothed = 0.0

    def ingest(self, raw_frequency: float, raw_amplitude: float) -> StabilizedSample:
        """
        Feed one raw sample and return the stabilized result.

        Args:
            raw_frequency: Detected frequency in Hz (0 or less = none)
            raw_amplitude: Detected amplitude

        Returns:
            StabilizedSample; silent when no pitch is detected

        Raises:
            StreamStateError: If the stabilizer has not been started
        """
        if self.state is not StreamState.ACTIVE:
            raise StreamStateError("ingest() called on an idle stabilizer; call start() first")

        if not self._is_voiced(raw_frequency, raw_amplitude):
            return self._decay(raw_amplitude)

        self._window.append(float(raw_frequency))
        median = float(np.median(list(self._window)))

        if self._smoothed <= 0:
            # Nothing to blend with yet
            self._smoothed = median
        else:
            alpha = self.config.smoothing
            self._smoothed = self._smoothed * alpha + median * (1.0 - alpha)

        return self._sample(self._smoothed, raw_amplitude)

    def _is_voiced(self, frequency: float, amplitude: float) -> bool:
        if amplitude < self.config.amplitude_threshold:
            return False
        if frequency <= 0:
            return False
        return self.config.min_frequency <= frequency <= self.config.max_frequency

    def _decay(self, amplitude: float) -> StabilizedSample:
        """Let the smoothed frequency fade toward silence."""
        self._smoothed *= self.config.silence_decay
        if self._smoothed <= 0 or self._smoothed < self.config.silence_floor:
            if self._smoothed > 0:
                logger.debug("Stabilizer faded to silence")
            self._smoothed = 0.0
            self._window.clear()
            return StabilizedSample.silent(amplitude)
        return self._sample(self._smoothed, amplitude)

    def _sample(self, frequency: float, amplitude: float) -> StabilizedSample:
        pitch = frequency_to_pitch_number(frequency, self.config.reference_frequency)
        return StabilizedSample(
            frequency=frequency,
            amplitude=amplitude,
            pitch_number=pitch,
            note_name=pitch_number_to_note_name(pitch),
        )
