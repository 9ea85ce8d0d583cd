import math

import pygame
import pytest

from factori.drawable import make_placeholder_texture
from factori.scene import CLEAR_COLOR, MAX_ZOOM, MIN_ZOOM, MOVE_SPEED, Scene


def _transparent(chunk_x, chunk_y):
    return make_placeholder_texture((0, 0, 0, 0), 64, 64)


@pytest.fixture
def scene():
    return Scene(width=200, height=100, seed=1, chunk_texture=_transparent)


def _bounds_ok(scene):
    cx, cy = scene.current_chunk
    m = math.trunc(scene.zoom_value)
    return all(
        cx - 3 * m - 1 <= x <= cx + 3 * m + 1 and cy - 2 * m - 1 <= y <= cy + 2 * m + 1
        for x, y in scene.chunks
    )


def test_initial_chunks(scene):
    assert len(scene.chunks) == 247
    assert (0, 0) in scene.chunks
    assert _bounds_ok(scene)
    for key, chunk in scene.chunks.items():
        assert chunk.position == key
        assert chunk.size == (1, 1)


def test_zoom_clamps(scene):
    scene.zoom(100)
    assert scene.zoom_value == MAX_ZOOM
    scene.zoom(-100)
    assert scene.zoom_value == MIN_ZOOM


def test_zoom_in_drops_far_chunks(scene):
    before = len(scene.chunks)
    scene.zoom(-2)
    assert scene.zoom_value == MIN_ZOOM
    assert len(scene.chunks) < before
    assert _bounds_ok(scene)


def test_move_right_changes_texture(scene):
    scene.key_press(pygame.K_d)
    assert scene.update_movement(True) is True
    assert scene.player.position == pytest.approx((MOVE_SPEED, 0.0))
    assert scene.player.texture is scene.player.texture_at(3)


def test_cyrillic_up_key(scene):
    scene.key_press(1062)
    assert scene.update_movement(True)
    assert scene.player.y == pytest.approx(MOVE_SPEED)
    assert scene.player.texture is scene.player.texture_at(0)


def test_diagonal_is_normalised(scene):
    scene.key_press(pygame.K_w)
    scene.key_press(pygame.K_d)
    scene.update_movement(True)
    x, y = scene.player.position
    assert x == pytest.approx(y)
    assert math.hypot(x, y) == pytest.approx(MOVE_SPEED)


def test_opposite_keys_cancel(scene):
    scene.key_press(pygame.K_a)
    scene.key_press(pygame.K_d)
    assert scene.update_movement(True) is False
    assert scene.player.position == (0.0, 0.0)


def test_no_keyboard_clears_keys(scene):
    scene.key_press(pygame.K_d)
    assert scene.update_movement(False) is False
    assert scene.keys_pressed == set()
    assert scene.player.position == (0.0, 0.0)


def test_key_release(scene):
    scene.key_press(pygame.K_s)
    scene.key_release(pygame.K_s)
    assert scene.update_movement(True) is False
    assert scene.player.position == (0.0, 0.0)


def test_plus_key_zooms_in(scene):
    scene.key_press(pygame.K_PLUS)
    scene.update_movement(True)
    assert scene.zoom_value == pytest.approx(3.0 - 0.1)


def test_crossing_chunk_boundary_reloads(scene):
    max_before = max(x for x, _ in scene.chunks)
    scene.player.x = 0.99
    scene.key_press(pygame.K_d)
    scene.update_movement(True)
    assert scene.current_chunk == (1, 0)
    assert max(x for x, _ in scene.chunks) == max_before + 1
    assert _bounds_ok(scene)


def test_mouse_at_centre_snaps_to_player_cell(scene):
    scene.player.position = (2.3, -1.6)
    scene.mouse_move(100, 50)
    assert scene.mouse_grid_position() == (2.0, -2.0)
    assert scene.mouse_world_pos == pytest.approx((2.3, -1.6))


def test_mouse_press_requires_edit_mode(scene):
    scene.mouse_move(100, 50)
    assert scene.mouse_press() is False
    assert scene.placed_objects == []


def test_mouse_press_places_once(scene):
    scene.edit_mode = True
    scene.mouse_move(100, 50)
    assert scene.mouse_press() is True
    assert scene.mouse_press() is False
    assert scene.placed_objects == [(0, 0)]


def test_render_draws_background_and_player(scene):
    surface = pygame.Surface((200, 100))
    scene.render(surface)
    assert tuple(surface.get_at((2, 2)))[:3] == CLEAR_COLOR
    expected = tuple(scene.player.texture.get_at((0, 0)))[:3]
    assert tuple(surface.get_at((100, 50)))[:3] == expected


def test_render_draws_placed_objects(scene):
    scene.placed_objects.append((2, 0))
    surface = pygame.Surface((200, 100))
    scene.render(surface)
    assert tuple(surface.get_at((133, 50)))[:3] == (255, 0, 0)


def test_grid_only_in_edit_mode(scene):
    surface = pygame.Surface((200, 100))
    scene.render(surface)
    white = (255, 255, 255)
    assert not any(tuple(surface.get_at((x, 40)))[:3] == white for x in range(200))
    scene.edit_mode = True
    scene.render(surface)
    assert any(tuple(surface.get_at((x, 40)))[:3] == white for x in range(200))


def test_default_chunk_textures_are_deterministic():
    first = Scene(width=200, height=100, seed=7)
    second = Scene(width=200, height=100, seed=7)
    a = first.chunks[(0, 0)].texture
    b = second.chunks[(0, 0)].texture
    assert a.get_size() == (64, 64)
    assert all(a.get_at((x, y)) == b.get_at((x, y)) for x in range(0, 64, 8) for y in range(0, 64, 8))
    assert first.chunks[(0, 0)].size == (1, 1)