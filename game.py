import logging
import sys

import pygame

from camera import Camera
from campus_core import (
    BUILDING_TYPES,
    PRIMARY_BUTTON,
    Building,
    InteractionController,
    InventoryCoordinator,
)

# ==========================================
# CONFIGURATION
# ==========================================
SCREEN_W, SCREEN_H = 1280, 720
FPS = 60
MAX_ZOOM = 3.0
STARTING_BALANCE = 500000
STICKY_PLACEMENT = False  # True keeps placement mode active until cancelled
GRID_SPACING = 64  # world units between grid lines
BUILDING_SIZE = 48  # world units per side of a placed building
SIDEBAR_W = 180
BUTTON_SIZE = 100
BUTTON_PAD = 10
SECONDARY_BUTTON = 3
WHEEL_BUTTONS = (4, 5)  # pygame also reports wheel steps as button presses

# Color Palette
C_GROUND = (96, 150, 86)
C_GRID   = (84, 134, 76)
C_PANEL  = (30, 30, 36)
WHITE    = (255, 255, 255)
GOLD     = (255, 215, 0)
BUILDING_COLORS = {
    "Accommodation": (200, 120, 80),
    "Learning": (80, 120, 200),
    "Dining": (220, 180, 60),
    "Recreation": (120, 200, 120),
}

logger = logging.getLogger(__name__)


class CounterLabel:
    """Sidebar text showing how many of one building type have been placed."""

    def __init__(self, font, color=WHITE):
        self.font = font
        self.color = color
        self.text = ""
        self.surface = None

    def set_text(self, text):
        self.text = text
        self.surface = self.font.render(text, True, self.color)


# ==========================================
# GRAPHICS DRAWING HELPERS
# ==========================================
def draw_ground(surf, camera):
    surf.fill(C_GROUND)
    left, top = camera.unproject(0, 0)
    right, bottom = camera.unproject(camera.viewport_width, camera.viewport_height)
    gx = int(left // GRID_SPACING) * GRID_SPACING
    while gx <= right:
        sx, _ = camera.project(gx, 0)
        pygame.draw.line(surf, C_GRID, (sx, 0), (sx, camera.viewport_height), 1)
        gx += GRID_SPACING
    gy = int(bottom // GRID_SPACING) * GRID_SPACING
    while gy <= top:
        _, sy = camera.project(0, gy)
        pygame.draw.line(surf, C_GRID, (0, sy), (camera.viewport_width, sy), 1)
        gy += GRID_SPACING


def draw_building(surf, camera, building):
    sx, sy = camera.project(building.x, building.y)
    size = BUILDING_SIZE / camera.zoom
    rect = (sx - size / 2, sy - size / 2, size, size)
    pygame.draw.rect(surf, BUILDING_COLORS.get(building.building_type, WHITE), rect)
    pygame.draw.rect(surf, (20, 20, 20), rect, 1)


def button_rect(index):
    return pygame.Rect(BUTTON_PAD, BUTTON_PAD + index * (BUTTON_SIZE + BUTTON_PAD), BUTTON_SIZE, BUTTON_SIZE)


# ==========================================
# MAIN GAME CLASS
# ==========================================
class CampusGame:
    def __init__(self, font, screen_size=(SCREEN_W, SCREEN_H), max_zoom=MAX_ZOOM,
                 building_types=BUILDING_TYPES, sticky_placement=STICKY_PLACEMENT):
        self.font = font
        self.camera = Camera(viewport_width=screen_size[0], viewport_height=screen_size[1])
        self.controller = InteractionController(self.camera, self.place_building, max_zoom)
        labels = {t: CounterLabel(font) for t in building_types}
        self.inventory = InventoryCoordinator(self.controller, self.select_building, labels, building_types)
        self.sticky_placement = sticky_placement
        self.balance = STARTING_BALANCE
        self.buildings = []
        self.pending = None
        self.running = True

    # --- callbacks from the core ---
    def select_building(self, building: Building):
        self.pending = building

    def place_building(self, world_x: float, world_y: float):
        if self.pending is None:
            logger.warning("Placement at (%.1f, %.1f) with no building selected", world_x, world_y)
            return
        building = self.pending.placed_at(world_x, world_y)
        self.buildings.append(building)
        self.balance -= building.cost
        count = self.inventory.on_building_placed(building.building_type)
        logger.info("Placed %s #%d at (%.1f, %.1f); balance %d",
                    building.building_type, count, world_x, world_y, self.balance)
        if not self.sticky_placement:
            self.cancel_placement()

    def cancel_placement(self):
        self.controller.set_placing_building(False)
        self.inventory.clear_selection()
        self.pending = None

    def sidebar_hit(self, pos):
        for index, building_type in enumerate(self.inventory.building_types):
            if button_rect(index).collidepoint(pos):
                return building_type
        return None

    def handle_event(self, event):
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.cancel_placement()
        elif event.type == pygame.MOUSEBUTTONDOWN:
            if event.button in WHEEL_BUTTONS:
                return
            if event.button == PRIMARY_BUTTON:
                building_type = self.sidebar_hit(event.pos)
                if building_type is not None:
                    self.inventory.on_building_type_selected(building_type)
                    return
                if event.pos[0] < SIDEBAR_W:
                    return
            if event.button == SECONDARY_BUTTON and self.controller.is_placing_building():
                self.cancel_placement()
                return
            self.controller.on_pointer_press(event.pos[0], event.pos[1], event.button)
        elif event.type == pygame.MOUSEBUTTONUP:
            if event.button not in WHEEL_BUTTONS:
                self.controller.on_pointer_release(event.button)
        elif event.type == pygame.MOUSEMOTION:
            self.controller.on_pointer_move(*event.pos)
        elif event.type == pygame.MOUSEWHEEL:
            # Wheel up zooms in, which lowers the world-units-per-pixel zoom.
            self.controller.on_scroll(-event.y)

    def draw(self, screen):
        draw_ground(screen, self.camera)
        for building in self.buildings:
            draw_building(screen, self.camera, building)

        pygame.draw.rect(screen, C_PANEL, (0, 0, SIDEBAR_W, self.camera.viewport_height))
        for index, building_type in enumerate(self.inventory.building_types):
            rect = button_rect(index)
            pygame.draw.rect(screen, BUILDING_COLORS.get(building_type, WHITE), rect)
            if building_type == self.inventory.selected_type:
                pygame.draw.rect(screen, GOLD, rect, 3)
            label = self.inventory.labels[building_type]
            if label.surface is not None:
                screen.blit(label.surface, (rect.right + BUTTON_PAD, rect.centery - label.surface.get_height() // 2))

        status = "PLACING - click to build, Esc to cancel" if self.controller.is_placing_building() else "Drag to pan, scroll to zoom"
        screen.blit(self.font.render(f"Balance: {self.balance}", True, GOLD), (SIDEBAR_W + 20, 10))
        screen.blit(self.font.render(status, True, WHITE), (SIDEBAR_W + 20, 34))


def main():
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption("UniSim Campus Builder")
    font = pygame.font.SysFont("Verdana", 16)
    game = CampusGame(font)
    clock = pygame.time.Clock()
    logger.info("Campus builder started with %d building types", len(game.inventory.building_types))

    while game.running:
        for event in pygame.event.get():
            game.handle_event(event)
        game.draw(screen)
        pygame.display.flip()
        clock.tick(FPS)

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
