"""The world view: terrain chunks, the player, the build grid and placed objects."""

from __future__ import annotations

import logging
import math
import time
from typing import Callable

import pygame

from factori.drawable import DrawableObject, make_placeholder_texture
from factori.noise import TILE_SIZE, PerlinNoiseGenerator, build_atlas

_log = logging.getLogger(__name__)

CLEAR_COLOR = (51, 77, 77)
GRID_COLOR = (255, 255, 255)
CURSOR_COLOR = (255, 0, 0, 128)
PLACED_COLOR = (255, 0, 0)

DEFAULT_ZOOM = 3.0
MIN_ZOOM = 1.0
MAX_ZOOM = 15.0
ZOOM_STEP = 0.1
MOVE_SPEED = 0.05
CHUNK_SIZE = 2
CELL_SIZE = 1.0

# Latin keys and their Cyrillic-layout counterparts.
UP_KEYS = frozenset({pygame.K_w, 1062})
DOWN_KEYS = frozenset({pygame.K_s, 1067})
LEFT_KEYS = frozenset({pygame.K_a, 1060})
RIGHT_KEYS = frozenset({pygame.K_d, 1042})
ZOOM_IN_KEYS = frozenset({pygame.K_PLUS, pygame.K_EQUALS})
ZOOM_OUT_KEYS = frozenset({pygame.K_MINUS})

_PLAYER_COLORS = {
    "up": (240, 200, 60),
    "down": (230, 120, 40),
    "left": (200, 80, 160),
    "right": (80, 160, 220),
}

ChunkTextureFactory = Callable[[int, int], pygame.Surface]


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


class Scene:
    """State and rendering of the game world around the player."""

    def __init__(
        self,
        width: int = 800,
        height: int = 600,
        seed: int | None = None,
        chunk_texture: ChunkTextureFactory | None = None,
    ) -> None:
        self.width = width
        self.height = height
        self.zoom_value = DEFAULT_ZOOM
        self.seed = int(time.time()) if seed is None else seed
        self.chunk_size = CHUNK_SIZE
        self.cell_size = CELL_SIZE
        self.edit_mode = False
        self.keys_pressed: set[int] = set()
        self.chunks: dict[tuple[int, int], DrawableObject] = {}
        self.placed_objects: list[tuple[int, int]] = []
        self.current_chunk: tuple[int, int] = (0, 0)
        self.mouse_pos: tuple[float, float] = (0.0, 0.0)
        self.mouse_world_pos: tuple[float, float] = (0.0, 0.0)
        self.mouse_grid_pos: tuple[float, float] = (0.0, 0.0)

        self._atlas: pygame.Surface | None = None
        self._chunk_texture = chunk_texture or self._generate_chunk_texture
        self._placed_texture = make_placeholder_texture(PLACED_COLOR, TILE_SIZE, TILE_SIZE)

        def sprite(name: str) -> pygame.Surface:
            return make_placeholder_texture(_PLAYER_COLORS[name], TILE_SIZE, TILE_SIZE)

        self.player = DrawableObject(sprite("down"))
        for name in ("up", "down", "left", "right"):
            self.player.append_texture(sprite(name))

        self.chunk_loader()

    def _generate_chunk_texture(self, chunk_x: int, chunk_y: int) -> pygame.Surface:
        if self._atlas is None:
            self._atlas = build_atlas()
        generator = PerlinNoiseGenerator(
            chunk_x, chunk_y, self.chunk_size, self.chunk_size, self.seed
        )
        return generator.generate_texture(self._atlas)

    def zoom(self, value: float) -> None:
        """Change the zoom by ``value``, clamped to the allowed range, and reload chunks."""
        self.zoom_value = min(max(self.zoom_value + value, MIN_ZOOM), MAX_ZOOM)
        self.chunk_loader()

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def key_press(self, key: int) -> None:
        self.keys_pressed.add(key)

    def key_release(self, key: int) -> None:
        self.keys_pressed.discard(key)

    def update_movement(self, has_keyboard: bool) -> bool:
        """Apply one tick of held keys; returns True when the player moved."""
        if not has_keyboard:
            self.keys_pressed.clear()
            return False

        keys = self.keys_pressed
        dx = dy = 0.0
        texture = None
        if keys & UP_KEYS:
            dy += MOVE_SPEED
            texture = self.player.texture_at(0)
        if keys & DOWN_KEYS:
            dy -= MOVE_SPEED
            texture = self.player.texture_at(1)
        if keys & LEFT_KEYS:
            dx -= MOVE_SPEED
            texture = self.player.texture_at(2)
        if keys & RIGHT_KEYS:
            dx += MOVE_SPEED
            texture = self.player.texture_at(3)

        if keys & ZOOM_IN_KEYS:
            self.zoom(-ZOOM_STEP)
        if keys & ZOOM_OUT_KEYS:
            self.zoom(ZOOM_STEP)

        if dx != 0.0 and dy != 0.0:
            norm = 1.0 / math.sqrt(2.0)
            dx *= norm
            dy *= norm

        if dx == 0.0 and dy == 0.0:
            return False

        self.player.move(dx, dy)
        if texture is not None:
            self.player.texture = texture
        if self.current_chunk != (math.trunc(self.player.x), math.trunc(self.player.y)):
            self.chunk_loader()
        return True

    def chunk_loader(self) -> None:
        """Drop chunks out of range and create the missing ones around the player."""
        cx, cy = math.trunc(self.player.x), math.trunc(self.player.y)
        self.current_chunk = (cx, cy)
        mult = math.trunc(self.zoom_value)

        min_x, max_x = cx - 3 * mult - 1, cx + 3 * mult + 1
        min_y, max_y = cy - 2 * mult - 1, cy + 2 * mult + 1

        kept: dict[tuple[int, int], DrawableObject] = {}
        for chunk in self.chunks.values():
            key = (math.trunc(chunk.x), math.trunc(chunk.y))
            if min_x <= key[0] <= max_x and min_y <= key[1] <= max_y:
                kept[key] = chunk

        half = self.chunk_size // 2
        for i in range(-3 * mult, 3 * mult + 1):
            for j in range(-2 * mult, 2 * mult + 1):
                key = (cx + i, cy + j)
                if key in kept:
                    continue
                texture = self._chunk_texture(*key)
                chunk = DrawableObject(texture)
                if i == 0 and j == 0:
                    chunk.position = key
                else:
                    chunk.position = (key[0] + half * i - i, key[1] + half * j - j)
                chunk.size = (
                    texture.get_width() // (TILE_SIZE * 2),
                    texture.get_height() // (TILE_SIZE * 2),
                )
                kept[key] = chunk

        self.chunks = kept

    def mouse_move(self, x: float, y: float) -> None:
        self.mouse_pos = (x, y)

    def mouse_grid_position(self) -> tuple[float, float]:
        """Map the mouse to world space and snap it to the build grid."""
        mx, my = self.mouse_pos
        aspect = self.width / self.height
        world_x = ((2.0 * mx) / self.width - 1.0) * self.zoom_value * aspect + self.player.x
        world_y = (1.0 - 2.0 * my / self.height) * self.zoom_value + self.player.y
        self.mouse_world_pos = (world_x, world_y)
        cell = self.cell_size
        self.mouse_grid_pos = (
            _round_half_away(world_x / cell) * cell,
            _round_half_away(world_y / cell) * cell,
        )
        return self.mouse_grid_pos

    def mouse_press(self) -> bool:
        """In edit mode, place an object in the cell under the mouse; True if added."""
        if not self.edit_mode:
            return False
        gx, gy = self.mouse_grid_position()
        cell = (int(gx), int(gy))
        if cell in self.placed_objects:
            return False
        self.placed_objects.append(cell)
        _log.debug("Appended: %d | %d", *cell)
        return True

    def _half_extents(self) -> tuple[float, float]:
        aspect = self.width / self.height
        if self.width >= self.height:
            return self.zoom_value * aspect, self.zoom_value
        return self.zoom_value, self.zoom_value / aspect

    def _to_screen(self, x: float, y: float) -> tuple[float, float]:
        half_w, _ = self._half_extents()
        ppu = self.width / (2.0 * half_w)
        return (
            (x - self.player.x) * ppu + self.width / 2.0,
            self.height / 2.0 - (y - self.player.y) * ppu,
        )

    def render(self, surface: pygame.Surface) -> None:
        """Draw the whole scene onto ``surface``."""
        surface.fill(CLEAR_COLOR)
        half_w, _ = self._half_extents()
        ppu = self.width / (2.0 * half_w)

        for chunk in self.chunks.values():
            chunk.draw(surface, self._to_screen, ppu)

        marker = DrawableObject(self._placed_texture)
        for position in self.placed_objects:
            marker.position = position
            marker.draw(surface, self._to_screen, ppu)

        if self.edit_mode:
            self._draw_grid(surface, ppu)
        self.player.draw(surface, self._to_screen, ppu)

    def _draw_grid(self, surface: pygame.Surface, ppu: float) -> None:
        cell = self.cell_size
        half_w, half_h = self._half_extents()
        start_x = _round_half_away(self.player.x) - self.width / 2 - cell / 2
        end_x = start_x + self.width
        start_y = _round_half_away(self.player.y) - self.height / 2 - cell / 2
        end_y = start_y + self.height

        view_left, view_right = self.player.x - half_w, self.player.x + half_w
        view_bottom, view_top = self.player.y - half_h, self.player.y + half_h

        def screen(x: float, y: float) -> tuple[int, int]:
            sx, sy = self._to_screen(x, y)
            return round(sx), round(sy)

        top = min(end_y, view_top)
        bottom = max(start_y, view_bottom)
        x = start_x + max(0, math.ceil((view_left - start_x) / cell)) * cell
        while x <= min(end_x, view_right):
            pygame.draw.line(surface, GRID_COLOR, screen(x, bottom), screen(x, top))
            x += cell

        left = max(start_x, view_left)
        right = min(end_x, view_right)
        y = start_y + max(0, math.ceil((view_bottom - start_y) / cell)) * cell
        while y <= min(end_y, view_top):
            pygame.draw.line(surface, GRID_COLOR, screen(left, y), screen(right, y))
            y += cell

        gx, gy = self.mouse_grid_position()
        side = max(1, round(cell * ppu))
        highlight = pygame.Surface((side, side), pygame.SRCALPHA)
        highlight.fill(CURSOR_COLOR)
        surface.blit(highlight, highlight.get_rect(center=screen(gx, gy)))