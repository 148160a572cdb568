"""Pannable, zoomable view over world coordinates."""

import logging
from typing import Optional, Tuple

from .config import settings
from .models import Position

logger = logging.getLogger(__name__)


class Viewport:
    """Maps between screen pixels and world units.

    Screen coordinates are relative to the top-left of the display surface.
    `view_box_x`/`view_box_y` is the world point shown at the screen's
    top-left and `zoom_level` is the number of screen pixels per world unit.
    """

    def __init__(
        self,
        host_width: float,
        host_height: float,
        min_zoom: float = settings.MIN_ZOOM,
        max_zoom: float = settings.MAX_ZOOM,
    ):
        """Initialize the viewport at the world origin, at zoom 1 or the nearest allowed level.

        Args:
            host_width: Width of the display surface in screen pixels.
            host_height: Height of the display surface in screen pixels.
            min_zoom: Lowest allowed zoom level.
            max_zoom: Highest allowed zoom level.
        """
        self.host_width = host_width
        self.host_height = host_height
        self.min_zoom = min_zoom
        self.max_zoom = max_zoom
        self.view_box_x = 0.0
        self.view_box_y = 0.0
        self.zoom_level = self._clamp_zoom(1.0)

    def _clamp_zoom(self, zoom: float) -> float:
        return max(self.min_zoom, min(zoom, self.max_zoom))

    def to_world_coordinates(self, screen_x: float, screen_y: float) -> Position:
        """Convert a screen point to world coordinates."""
        return Position(
            screen_x / self.zoom_level + self.view_box_x,
            screen_y / self.zoom_level + self.view_box_y,
        )

    def to_screen_coordinates(self, world_x: float, world_y: float) -> Position:
        """Convert a world point to screen coordinates."""
        return Position(
            (world_x - self.view_box_x) * self.zoom_level,
            (world_y - self.view_box_y) * self.zoom_level,
        )

    def pan(self, dx: float, dy: float) -> None:
        """Pan by a screen-space delta; dragging right moves the view window left."""
        self.view_box_x -= dx / self.zoom_level
        self.view_box_y -= dy / self.zoom_level
        logger.debug("Panned by (%.1f, %.1f), view box now (%.1f, %.1f)", dx, dy, self.view_box_x, self.view_box_y)

    def zoom(
        self,
        factor: float,
        pointer_x: Optional[float] = None,
        pointer_y: Optional[float] = None,
    ) -> bool:
        """Zoom by a factor, keeping the world point under the pointer fixed on screen.

        Args:
            factor: Zoom multiplier (e.g. 1.25 to zoom in, 0.8 to zoom out).
            pointer_x: Screen X of the anchor; defaults to the host centre.
            pointer_y: Screen Y of the anchor; defaults to the host centre.

        Returns:
            True if the zoom level changed, False if it was already at the clamp limit.
        """
        if factor <= 0:
            logger.warning("Ignoring non-positive zoom factor %s", factor)
            return False

        previous_zoom = self.zoom_level
        new_zoom = self._clamp_zoom(previous_zoom * factor)
        if new_zoom == previous_zoom:
            return False

        anchor_x = self.host_width / 2 if pointer_x is None else pointer_x
        anchor_y = self.host_height / 2 if pointer_y is None else pointer_y

        # World point under the anchor before the change
        anchor = self.to_world_coordinates(anchor_x, anchor_y)

        self.zoom_level = new_zoom
        self.view_box_x = anchor.x - anchor_x / new_zoom
        self.view_box_y = anchor.y - anchor_y / new_zoom

        logger.debug("Zoom %.3f -> %.3f around screen (%.1f, %.1f)", previous_zoom, new_zoom, anchor_x, anchor_y)
        return True

    def set_view(self, x: float, y: float, zoom_level: float) -> None:
        """Set the view box origin and zoom level directly (zoom is clamped)."""
        self.view_box_x = x
        self.view_box_y = y
        self.zoom_level = self._clamp_zoom(zoom_level)

    def set_host_dimensions(self, width: float, height: float) -> None:
        self.host_width = width
        self.host_height = height

    def center_on(self, world: Position) -> None:
        """Move the view so a world point appears at the centre of the host."""
        # screen = (world - view_box) * zoom  =>  view_box = world - screen / zoom
        self.view_box_x = world.x - (self.host_width / 2) / self.zoom_level
        self.view_box_y = world.y - (self.host_height / 2) / self.zoom_level

    def visible_world_bounds(self) -> Tuple[Position, Position]:
        """Return the world-space (top-left, bottom-right) corners currently on screen."""
        return (
            self.to_world_coordinates(0.0, 0.0),
            self.to_world_coordinates(self.host_width, self.host_height),
        )

    def __repr__(self) -> str:
        return f"Viewport(x={self.view_box_x:.1f}, y={self.view_box_y:.1f}, zoom={self.zoom_level:.3f})"
