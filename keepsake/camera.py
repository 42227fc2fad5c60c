"""Camera over the virtual canvas and the world-space viewport it shows."""

import logging
from dataclasses import dataclass

from keepsake.config import CameraConfig, CanvasConfig, LayoutConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Viewport:
    """Visible world rectangle plus the margins layouts must respect."""

    left: float
    top: float
    width: float
    height: float
    margin: float = 0.0
    ui_reserved: float = 0.0
    zoom: float = 1.0

    @property
    def available_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def available_height(self) -> float:
        return self.height - 2 * self.margin - self.ui_reserved

    @property
    def inner_left(self) -> float:
        return self.left + self.margin

    @property
    def inner_top(self) -> float:
        return self.top + self.margin


def _constrain(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


class Camera:
    """Screen-space camera offset with a fixed zoom.

    World point (wx, wy) appears on screen at
    (wx * zoom + camera_x, wy * zoom + camera_y).
    """

    def __init__(self, canvas: CanvasConfig, config: CameraConfig) -> None:
        self.canvas = canvas
        self.config = config
        self.zoom = canvas.zoom
        self.screen_width = config.screen_width
        self.screen_height = config.screen_height
        self.locked = False
        self.x = 0.0
        self.y = 0.0
        self.reset()

    def reset(self) -> None:
        """Centre the camera on the virtual canvas."""
        self.x = -self.canvas.width * self.zoom / 2 + self.screen_width / 2
        self.y = -self.canvas.height * self.zoom / 2 + self.screen_height / 2

    def resize(self, width: float, height: float) -> None:
        self.screen_width = width
        self.screen_height = height
        logger.debug("Screen resized to %.0fx%.0f", width, height)

    def pan(self, dx: float, dy: float) -> bool:
        """Move by a screen-space delta. Returns False when the camera is locked."""
        if self.locked:
            return False

        self.x += dx / self.zoom
        self.y += dy / self.zoom

        # Keep part of the canvas on screen
        padding = self.screen_width / (4 * self.zoom)
        self.x = _constrain(self.x, -self.canvas.width * self.zoom + padding, padding)
        self.y = _constrain(self.y, -self.canvas.height * self.zoom + padding, padding)
        return True

    def edge_velocity(self, mouse_x: float, mouse_y: float) -> tuple[float, float]:
        """Pan speed from pointer distance into the screen-edge bands."""
        threshold = self.config.edge_threshold
        speed = self.config.max_speed
        dx = dy = 0.0

        if mouse_x < threshold:
            dx = (threshold - mouse_x) / threshold * speed
        elif mouse_x > self.screen_width - threshold:
            dx = -(mouse_x - (self.screen_width - threshold)) / threshold * speed

        if mouse_y < threshold:
            dy = (threshold - mouse_y) / threshold * speed
        elif mouse_y > self.screen_height - threshold:
            dy = -(mouse_y - (self.screen_height - threshold)) / threshold * speed

        return dx, dy

    def edge_navigate(self, mouse_x: float, mouse_y: float) -> bool:
        dx, dy = self.edge_velocity(mouse_x, mouse_y)
        if dx == 0 and dy == 0:
            return False
        return self.pan(dx, dy)

    def viewport(self, layout: LayoutConfig, ui_reserved: float | None = None) -> Viewport:
        """World-space rectangle currently on screen.

        ui_reserved is in screen pixels; defaults to layout.ui_reserved.
        """
        reserved = layout.ui_reserved if ui_reserved is None else ui_reserved
        return Viewport(
            left=-self.x / self.zoom,
            top=-self.y / self.zoom,
            width=self.screen_width / self.zoom,
            height=self.screen_height / self.zoom,
            margin=layout.margin / self.zoom,
            ui_reserved=reserved / self.zoom,
            zoom=self.zoom,
        )

    def to_screen(self, wx: float, wy: float) -> tuple[float, float]:
        return wx * self.zoom + self.x, wy * self.zoom + self.y
