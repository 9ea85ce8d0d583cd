"""Perlin-noise terrain chunks built from a tile atlas."""

from __future__ import annotations

import math
import random

import pygame

TILE_SIZE = 32

WATER = (TILE_SIZE * 2, TILE_SIZE)
SAND = (TILE_SIZE, TILE_SIZE)
SAND_ALT = (TILE_SIZE, 0)
ROCK = (TILE_SIZE * 3, TILE_SIZE)
ROCK_ALT = (TILE_SIZE * 3, 0)
GRASS = (0, TILE_SIZE)
GRASS_ALT = (0, 0)

TILE_CURSORS = (WATER, SAND, SAND_ALT, ROCK, ROCK_ALT, GRASS, GRASS_ALT)

# Colours by column: (common variant, rare variant).
_ATLAS_COLORS = (
    ((76, 153, 0), (60, 130, 20)),
    ((222, 200, 130), (200, 180, 110)),
    ((30, 90, 200), (30, 90, 200)),
    ((120, 120, 120), (230, 230, 240)),
)


def fade(t: float) -> float:
    return t * t * t * (t * (t * 6 - 15) + 10)


def lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


def grad(hash_value: int, x: float, y: float) -> float:
    h = hash_value & 15
    u = x if h < 4 else y
    v = y if h < 4 else x
    return (-u if h & 1 else u) + (-2.0 * v if h & 2 else 2.0 * v)


def build_atlas() -> pygame.Surface:
    """Build the 4x2 tile atlas; cursors address it after a vertical flip."""
    atlas = pygame.Surface((TILE_SIZE * 4, TILE_SIZE * 2), pygame.SRCALPHA)
    for column, (common, rare) in enumerate(_ATLAS_COLORS):
        left = column * TILE_SIZE
        atlas.fill(common, pygame.Rect(left, 0, TILE_SIZE, TILE_SIZE))
        atlas.fill(rare, pygame.Rect(left, TILE_SIZE, TILE_SIZE, TILE_SIZE))
    return atlas


class PerlinNoiseGenerator:
    """Noise field and tile texture for one chunk of the world."""

    def __init__(self, chunk_x: int, chunk_y: int, width: int, height: int, seed: int = 0) -> None:
        self.chunk_x = chunk_x
        self.chunk_y = chunk_y
        self.width = width
        self.height = height
        base = list(range(256))
        random.Random(seed).shuffle(base)
        self.permutation = base + base

    def noise(self, x: float, y: float) -> float:
        x += self.chunk_x * (self.width / 100.0)
        y += self.chunk_y * (self.height / 100.0)

        xi = math.floor(x) & 255
        yi = math.floor(y) & 255
        x -= math.floor(x)
        y -= math.floor(y)
        u = fade(x)
        v = fade(y)
        p = self.permutation
        a = p[xi] + yi
        b = p[xi + 1] + yi

        return lerp(
            lerp(grad(p[a], x, y), grad(p[b], x - 1, y), u),
            lerp(grad(p[a + 1], x, y - 1), grad(p[b + 1], x - 1, y - 1), u),
            v,
        )

    def tile_at(self, x: int, y: int) -> tuple[int, int]:
        """Return the atlas cursor (pixel offset) of the tile at (x, y)."""
        roll = random.Random(self.chunk_x * self.chunk_y + x + y).random()
        value = self.noise(x * 0.01, y * 0.01) * 0.75 + 0.75
        common = roll < 0.8
        if value < 0.4:
            return WATER
        if value < 0.5:
            return SAND if common else SAND_ALT
        if value > 0.95:
            return ROCK if common else ROCK_ALT
        return GRASS if common else GRASS_ALT

    def tile_map(self) -> list[list[tuple[int, int]]]:
        """Return the atlas cursors row by row."""
        return [[self.tile_at(x, y) for x in range(self.width)] for y in range(self.height)]

    def generate_texture(self, atlas: pygame.Surface | None = None) -> pygame.Surface:
        """Compose the chunk texture; row 0 of the map ends up at the bottom."""
        source = pygame.transform.flip(atlas if atlas is not None else build_atlas(), False, True)
        image = pygame.Surface((self.width * TILE_SIZE, self.height * TILE_SIZE), pygame.SRCALPHA)
        for y, row in enumerate(self.tile_map()):
            for x, (ax, ay) in enumerate(row):
                image.blit(
                    source,
                    (x * TILE_SIZE, y * TILE_SIZE),
                    pygame.Rect(ax, ay, TILE_SIZE, TILE_SIZE),
                )
        return pygame.transform.flip(image, False, True)