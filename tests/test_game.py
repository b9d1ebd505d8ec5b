import pygame
import pytest

import game
from campus_core import InteractionMode


def _click(pos, button=1):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=button, pos=pos)


def _release(pos, button=1):
    return pygame.event.Event(pygame.MOUSEBUTTONUP, button=button, pos=pos)


def _sidebar_center(index):
    return game.button_rect(index).center


def test_sidebar_click_selects_type_without_dragging(font):
    campus = game.CampusGame(font)
    campus.handle_event(_click(_sidebar_center(2)))

    assert campus.controller.is_placing_building()
    assert campus.pending.building_type == campus.inventory.building_types[2]
    assert not campus.controller.is_dragging


def test_single_shot_placement_builds_once_and_returns_to_free_camera(font):
    campus = game.CampusGame(font, screen_size=(800, 600))
    dining = campus.inventory.building_types.index("Dining")
    campus.handle_event(_click(_sidebar_center(dining)))

    campus.handle_event(_click((400, 300)))

    assert len(campus.buildings) == 1
    placed = campus.buildings[0]
    assert (placed.x, placed.y) == pytest.approx((0, 0))
    assert campus.balance == game.STARTING_BALANCE - placed.cost
    assert campus.inventory.get_count("Dining") == 1
    assert campus.inventory.labels["Dining"].text == "1"
    assert campus.controller.mode is InteractionMode.FREE_CAMERA
    assert campus.inventory.selected_type is None


def test_sticky_placement_keeps_placing(font):
    campus = game.CampusGame(font, sticky_placement=True)
    campus.handle_event(_click(_sidebar_center(0)))
    for x in (300, 500, 700):
        campus.handle_event(_click((x, 400)))
        campus.handle_event(_release((x, 400)))

    building_type = campus.inventory.building_types[0]
    assert campus.inventory.get_count(building_type) == 3
    assert campus.controller.is_placing_building()

    campus.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
    assert not campus.controller.is_placing_building()


def test_right_click_cancels_placement(font):
    campus = game.CampusGame(font)
    campus.handle_event(_click(_sidebar_center(1)))
    campus.handle_event(_click((600, 300), button=game.SECONDARY_BUTTON))
    assert not campus.controller.is_placing_building()
    assert campus.buildings == []


def test_drag_and_wheel_drive_camera(font):
    campus = game.CampusGame(font)
    campus.handle_event(_click((400, 400)))
    campus.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(380, 430), rel=(-20, 30), buttons=(1, 0, 0)))
    campus.handle_event(_release((380, 430)))
    assert (campus.camera.x, campus.camera.y) == pytest.approx((20, 30))

    campus.handle_event(pygame.event.Event(pygame.MOUSEWHEEL, x=0, y=1, flipped=False))
    assert campus.camera.zoom == pytest.approx(0.9)


def test_wheel_button_presses_are_ignored(font):
    campus = game.CampusGame(font)
    campus.handle_event(_click((400, 400), button=4))
    assert not campus.controller.is_dragging


def test_quit_stops_loop(font):
    campus = game.CampusGame(font)
    campus.handle_event(pygame.event.Event(pygame.QUIT))
    assert campus.running is False


def test_draw_renders_without_display(font):
    campus = game.CampusGame(font, screen_size=(640, 480))
    campus.handle_event(_click(_sidebar_center(0)))
    campus.handle_event(_click((400, 240)))
    surface = pygame.Surface((640, 480))
    campus.draw(surface)
    assert tuple(surface.get_at((2, 2)))[:3] == game.C_PANEL


def test_sidebar_background_click_neither_places_nor_drags(font):
    campus = game.CampusGame(font)
    campus.handle_event(_click(_sidebar_center(0)))

    campus.handle_event(_click((90, 650)))

    assert campus.buildings == []
    assert campus.balance == game.STARTING_BALANCE
    assert campus.inventory.get_count(campus.inventory.building_types[0]) == 0
    assert campus.controller.is_placing_building()

    campus.cancel_placement()
    campus.handle_event(_click((90, 650)))
    assert not campus.controller.is_dragging
