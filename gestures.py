"""Turn raw pointer press/release pairs into swipe directions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SwipeDirection(str, Enum):
    LEFT = "SWIPE_LEFT"
    RIGHT = "SWIPE_RIGHT"
    UP = "SWIPE_UP"
    DOWN = "SWIPE_DOWN"


@dataclass
class SwipeConfig:
    velocity_threshold: float = 0.3           # px per ms
    directional_offset_threshold: float = 80  # px of drift on the cross axis
    click_radius: float = 5                   # px


class SwipeRecognizer:
    """Track one pointer gesture at a time.

    ``press`` records the start; ``release`` returns the recognized
    direction or None (click, too slow or too diagonal).
    """

    def __init__(self, config: SwipeConfig | None = None) -> None:
        self.config = config or SwipeConfig()
        self._start: tuple[float, float, float] | None = None

    @property
    def active(self) -> bool:
        return self._start is not None

    def press(self, x: float, y: float, time_ms: float) -> None:
        self._start = (x, y, time_ms)

    def cancel(self) -> None:
        self._start = None

    def moved_beyond_click(self, x: float, y: float) -> bool:
        if self._start is None:
            return False
        x0, y0, _ = self._start
        r = self.config.click_radius
        return abs(x - x0) >= r or abs(y - y0) >= r

    def release(self, x: float, y: float, time_ms: float) -> SwipeDirection | None:
        if self._start is None:
            return None
        x0, y0, t0 = self._start
        self._start = None
        return self.direction(x - x0, y - y0, max(time_ms - t0, 1))

    def direction(self, dx: float, dy: float,
                  duration_ms: float) -> SwipeDirection | None:
        cfg = self.config
        if abs(dx) < cfg.click_radius and abs(dy) < cfg.click_radius:
            return None
        vx = dx / duration_ms
        vy = dy / duration_ms
        if abs(vx) > cfg.velocity_threshold and abs(dy) < cfg.directional_offset_threshold:
            return SwipeDirection.RIGHT if dx > 0 else SwipeDirection.LEFT
        if abs(vy) > cfg.velocity_threshold and abs(dx) < cfg.directional_offset_threshold:
            return SwipeDirection.DOWN if dy > 0 else SwipeDirection.UP
        return None
