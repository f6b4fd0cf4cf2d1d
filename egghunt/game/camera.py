"""Camera — drag-to-pan view over the world.

Scroll is stored as the world-space position of the viewport's top-left
corner.  Dragging moves the world under the pointer, so scroll moves
opposite to the pointer and is divided by zoom.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp ``value`` into ``[lo, hi]``."""
    return min(max(value, lo), hi)


@dataclass
class Camera:
    """A zoomable, bounded viewport.

    Attributes:
        world_width: World width in pixels.
        world_height: World height in pixels.
        view_width: Viewport width in screen pixels.
        view_height: Viewport height in screen pixels.
        zoom: Screen pixels per world pixel.
        scroll_x: World x at the viewport's left edge.
        scroll_y: World y at the viewport's top edge.
        dragging: Whether a pointer drag is in progress.
    """

    world_width: float
    world_height: float
    view_width: float
    view_height: float
    zoom: float = 1.0
    scroll_x: float = 0.0
    scroll_y: float = 0.0
    dragging: bool = field(default=False, init=False)
    _drag_start: tuple[float, float] = field(default=(0.0, 0.0), init=False, repr=False)
    _scroll_start: tuple[float, float] = field(default=(0.0, 0.0), init=False, repr=False)
    _drag_distance: float = field(default=0.0, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.zoom <= 0:
            msg = f"zoom must be positive, got {self.zoom}"
            raise ValueError(msg)
        self._clamp_scroll()

    @property
    def max_scroll(self) -> tuple[float, float]:
        """Largest scroll that keeps the viewport inside the world."""
        return (
            max(0.0, self.world_width - self.view_width / self.zoom),
            max(0.0, self.world_height - self.view_height / self.zoom),
        )

    @property
    def drag_distance(self) -> float:
        """Furthest the pointer has moved from where the current drag began."""
        return self._drag_distance

    def _clamp_scroll(self) -> None:
        max_x, max_y = self.max_scroll
        self.scroll_x = clamp(self.scroll_x, 0.0, max_x)
        self.scroll_y = clamp(self.scroll_y, 0.0, max_y)

    def start_drag(self, px: float, py: float) -> None:
        """Begin a drag at screen position ``(px, py)``."""
        self.dragging = True
        self._drag_start = (px, py)
        self._scroll_start = (self.scroll_x, self.scroll_y)
        self._drag_distance = 0.0

    def drag_to(self, px: float, py: float) -> None:
        """Pan so the world point under the drag start follows the pointer."""
        if not self.dragging:
            return
        dx = px - self._drag_start[0]
        dy = py - self._drag_start[1]
        self._drag_distance = max(self._drag_distance, math.hypot(dx, dy))
        self.scroll_x = self._scroll_start[0] - dx / self.zoom
        self.scroll_y = self._scroll_start[1] - dy / self.zoom
        self._clamp_scroll()

    def end_drag(self) -> None:
        self.dragging = False

    def resize(self, view_width: float, view_height: float) -> None:
        """Change the viewport size, keeping scroll within bounds."""
        self.view_width = view_width
        self.view_height = view_height
        self._clamp_scroll()

    def screen_to_world(self, px: float, py: float) -> tuple[float, float]:
        return (self.scroll_x + px / self.zoom, self.scroll_y + py / self.zoom)

    def world_to_screen(self, wx: float, wy: float) -> tuple[float, float]:
        return ((wx - self.scroll_x) * self.zoom, (wy - self.scroll_y) * self.zoom)
