"""Trail history - the scrolling line drawn behind the pitch cursor."""

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, NamedTuple, Optional, Tuple

from ..core import InvalidConfiguration


class TrailPoint(NamedTuple):
    """A point of the trail in screen coordinates."""
    x: float
    y: float


@dataclass
class TrailConfig:
    """Configuration for the cursor trail.

    Attributes:
        cursor_x: Fixed screen X of the cursor, where new points are added (default: 80)
        visibility_floor: Points scrolled left of this X are dropped (default: -50)
        vertical_threshold: Y change (px) that starts a new point (default: 2.0)
        min_scroll_delta: Scroll (px) that starts a new point (default: 1.0)
        max_points: Maximum points kept; oldest are evicted first (default: 150)
    """

    cursor_x: float = 80.0
    visibility_floor: float = -50.0
    vertical_threshold: float = 2.0
    min_scroll_delta: float = 1.0
    max_points: int = 150

    def __post_init__(self):
        if self.max_points < 1:
            raise InvalidConfiguration(f"max_points must be >= 1, got {self.max_points}")
        if self.vertical_threshold < 0 or self.min_scroll_delta < 0:
            raise InvalidConfiguration("Trail thresholds must be non-negative")


class TrailHistory:
    """Bounded, scroll-synchronized trail of cursor positions.

    Points are ordered oldest first. Each update scrolls existing points left,
    then either appends the cursor position or, if nothing moved enough,
    overwrites the newest point in place.
    """

    def __init__(self, config: Optional[TrailConfig] = None):
        self.config = config if config is not None else TrailConfig()
        self._points: Deque[TrailPoint] = deque(maxlen=self.config.max_points)
        self._last_offset = 0.0

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[TrailPoint]:
        return iter(self._points)

    @property
    def points(self) -> Tuple[TrailPoint, ...]:
        return tuple(self._points)

    def reset(self) -> None:
        """Forget all points and the last scroll offset."""
        self._points.clear()
        self._last_offset = 0.0

    def update(self, scroll_delta: float, screen_y: float) -> Tuple[TrailPoint, ...]:
        """
        Advance the trail by one render tick.

        Args:
            scroll_delta: Horizontal scroll (px) since the previous update
            screen_y: Current cursor Y

        Returns:
            The trail points, oldest first
        """
        cfg = self.config

        shifted = (TrailPoint(p.x - scroll_delta, p.y) for p in self._points)
        self._points = deque(
            (p for p in shifted if p.x >= cfg.visibility_floor),
            maxlen=cfg.max_points,
        )

        current = TrailPoint(cfg.cursor_x, screen_y)
        if (
            not self._points
            or abs(self._points[-1].y - screen_y) > cfg.vertical_threshold
            or scroll_delta > cfg.min_scroll_delta
        ):
            self._points.append(current)
        else:
            self._points[-1] = current

        return self.points

    def scroll_to(self, scroll_offset: float, screen_y: float) -> Tuple[TrailPoint, ...]:
        """Like ``update`` but takes the absolute scroll offset."""
        delta = scroll_offset - self._last_offset
        self._last_offset = scroll_offset
        return self.update(delta, screen_y)
