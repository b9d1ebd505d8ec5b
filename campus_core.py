"""Core interaction logic for the campus builder.

Input arbitration and building inventory live here, away from the pygame
front-end, so they can be unit tested without a display.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Protocol, Tuple

from camera import clamp

logger = logging.getLogger(__name__)

MIN_ZOOM = 0.5
ZOOM_SPEED = 0.1

# pygame mouse button numbering
PRIMARY_BUTTON = 1

BUILDING_TYPES: Tuple[str, ...] = ("Accommodation", "Learning", "Dining", "Recreation")

PlacementCallback = Callable[[float, float], None]


class CameraLike(Protocol):
    x: float
    y: float
    zoom: float

    def unproject(self, screen_x: float, screen_y: float) -> Tuple[float, float]: ...


class DisplayHandle(Protocol):
    def set_text(self, text: str) -> None: ...


@dataclass(frozen=True)
class BuildingTemplate:
    building_type: str
    cost: int
    satisfaction: int
    maintenance: int


BUILDING_TEMPLATES: Dict[str, BuildingTemplate] = {
    building_type: BuildingTemplate(building_type, cost=50000, satisfaction=10, maintenance=5000)
    for building_type in BUILDING_TYPES
}


@dataclass
class Building:
    """A building chosen from the inventory, positioned once it is placed."""

    building_type: str
    cost: int
    satisfaction: int
    maintenance: int
    x: Optional[float] = None
    y: Optional[float] = None

    @classmethod
    def from_template(cls, template: BuildingTemplate) -> "Building":
        return cls(template.building_type, template.cost, template.satisfaction, template.maintenance)

    def placed_at(self, x: float, y: float) -> "Building":
        return Building(self.building_type, self.cost, self.satisfaction, self.maintenance, x, y)


BuildingSelectionCallback = Callable[[Building], None]


class InteractionMode(Enum):
    FREE_CAMERA = "free-camera"
    PLACING_BUILDING = "placing-building"


@dataclass
class DragState:
    last_x: float
    last_y: float


class InteractionController:
    """Turns pointer and scroll input into camera movement or placement requests."""

    def __init__(self, camera: CameraLike, place_building: PlacementCallback, max_zoom: float):
        if max_zoom < MIN_ZOOM:
            raise ValueError(f"max_zoom {max_zoom} is below minimum zoom {MIN_ZOOM}")
        self.camera = camera
        self.place_building = place_building
        self.max_zoom = max_zoom
        self._mode = InteractionMode.FREE_CAMERA
        self._drag: Optional[DragState] = None
        self.camera.zoom = clamp(self.camera.zoom, MIN_ZOOM, self.max_zoom)

    @property
    def mode(self) -> InteractionMode:
        return self._mode

    @property
    def is_dragging(self) -> bool:
        return self._drag is not None

    def on_pointer_press(self, screen_x: float, screen_y: float, button: int) -> bool:
        if button == PRIMARY_BUTTON:
            return self.on_primary_press(screen_x, screen_y)
        return True

    def on_pointer_release(self, button: int) -> bool:
        if button == PRIMARY_BUTTON:
            return self.on_primary_release()
        return True

    def on_primary_press(self, screen_x: float, screen_y: float) -> bool:
        """Place a building in placement mode, otherwise begin a camera drag."""
        if self._mode is InteractionMode.PLACING_BUILDING:
            world_x, world_y = self.camera.unproject(screen_x, screen_y)
            logger.info("Placement requested at world (%.1f, %.1f)", world_x, world_y)
            self.place_building(world_x, world_y)
            return True
        self._drag = DragState(screen_x, screen_y)
        logger.debug("Drag started at screen (%s, %s)", screen_x, screen_y)
        return True

    def on_primary_release(self) -> bool:
        if self._drag is not None:
            logger.debug("Drag ended at screen (%s, %s)", self._drag.last_x, self._drag.last_y)
        self._drag = None
        return True

    def on_pointer_move(self, screen_x: float, screen_y: float) -> bool:
        """Pan the camera by the pointer delta, scaled so speed matches the zoom level."""
        if self._drag is None or self._mode is not InteractionMode.FREE_CAMERA:
            return False
        zoom = self.camera.zoom
        # Screen y grows downward while world y grows upward.
        self.camera.x += (self._drag.last_x - screen_x) * zoom
        self.camera.y += (screen_y - self._drag.last_y) * zoom
        self._drag.last_x = screen_x
        self._drag.last_y = screen_y
        return True

    def on_scroll(self, amount: float) -> bool:
        self.camera.zoom = clamp(self.camera.zoom + amount * ZOOM_SPEED, MIN_ZOOM, self.max_zoom)
        return True

    def set_placing_building(self, is_placing: bool) -> None:
        new_mode = InteractionMode.PLACING_BUILDING if is_placing else InteractionMode.FREE_CAMERA
        if new_mode is not self._mode:
            logger.debug("Interaction mode %s -> %s", self._mode.value, new_mode.value)
        self._mode = new_mode

    def is_placing_building(self) -> bool:
        return self._mode is InteractionMode.PLACING_BUILDING


class InventoryCoordinator:
    """Tracks placed counts per building type and keeps the counter labels current."""

    def __init__(
        self,
        controller: InteractionController,
        on_building_selected: BuildingSelectionCallback,
        labels: Dict[str, DisplayHandle],
        building_types: Iterable[str] = BUILDING_TYPES,
        templates: Dict[str, BuildingTemplate] = BUILDING_TEMPLATES,
    ):
        self.controller = controller
        self.on_building_selected = on_building_selected
        self.building_types: Tuple[str, ...] = tuple(building_types)
        missing = [t for t in self.building_types if t not in labels]
        if missing:
            raise ValueError(f"No counter label for building types: {', '.join(missing)}")
        missing = [t for t in self.building_types if t not in templates]
        if missing:
            raise ValueError(f"No template for building types: {', '.join(missing)}")
        self.templates = {t: templates[t] for t in self.building_types}
        self.labels = {t: labels[t] for t in self.building_types}
        self._counts: Dict[str, int] = {t: 0 for t in self.building_types}
        self.selected_type: Optional[str] = None
        for label in self.labels.values():
            label.set_text("0")

    @property
    def counts(self) -> Dict[str, int]:
        return dict(self._counts)

    def on_building_type_selected(self, building_type: str) -> Building:
        template = self.templates[building_type]
        building = Building.from_template(template)
        self.selected_type = building_type
        logger.info("Selected %s (cost %d)", building_type, building.cost)
        self.on_building_selected(building)
        self.controller.set_placing_building(True)
        return building

    def on_building_placed(self, building_type: str) -> int:
        if building_type not in self._counts:
            raise KeyError(f"Unknown building type: {building_type!r}")
        return self.update_building_count(building_type, self._counts[building_type] + 1)

    def update_building_count(self, building_type: str, count: int) -> int:
        if building_type not in self._counts:
            raise KeyError(f"Unknown building type: {building_type!r}")
        if count < 0:
            raise ValueError(f"Building count for {building_type} cannot be negative: {count}")
        self._counts[building_type] = count
        self.labels[building_type].set_text(str(count))
        return count

    def get_count(self, building_type: str) -> int:
        if building_type not in self._counts:
            raise KeyError(f"Unknown building type: {building_type!r}")
        return self._counts[building_type]

    def clear_selection(self) -> None:
        self.selected_type = None
