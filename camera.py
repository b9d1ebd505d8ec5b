"""Orthographic camera used to map between screen pixels and campus world units."""

from dataclasses import dataclass


def clamp(value: float, min_value: float, max_value: float) -> float:
    """Clamp value between bounds."""
    return max(min_value, min(value, max_value))


@dataclass
class Camera:
    x: float = 0.0
    y: float = 0.0
    zoom: float = 1.0
    viewport_width: float = 800.0
    viewport_height: float = 600.0

    def unproject(self, screen_x: float, screen_y: float) -> tuple[float, float]:
        """Convert a screen pixel (y grows downward) to world units (y grows upward)."""
        world_x = self.x + (screen_x - self.viewport_width / 2) * self.zoom
        world_y = self.y + (self.viewport_height / 2 - screen_y) * self.zoom
        return world_x, world_y

    def project(self, world_x: float, world_y: float) -> tuple[float, float]:
        """Convert world units back to screen pixels."""
        screen_x = (world_x - self.x) / self.zoom + self.viewport_width / 2
        screen_y = self.viewport_height / 2 - (world_y - self.y) / self.zoom
        return screen_x, screen_y

    def resize(self, width: float, height: float) -> None:
        self.viewport_width = width
        self.viewport_height = height
