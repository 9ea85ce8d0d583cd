import pygame
import pytest

from factori.noise import (
    TILE_CURSORS,
    TILE_SIZE,
    PerlinNoiseGenerator,
    build_atlas,
    fade,
    grad,
    lerp,
)


def test_fade_endpoints():
    assert fade(0.0) == 0.0
    assert fade(1.0) == 1.0
    assert fade(0.5) == pytest.approx(0.5)


def test_lerp_endpoints():
    assert lerp(3.0, 7.0, 0.0) == 3.0
    assert lerp(3.0, 7.0, 1.0) == 7.0


@pytest.mark.parametrize("h", range(16))
def test_grad_symmetries(h):
    assert grad(h ^ 3, 0.3, 0.7) == pytest.approx(-grad(h, 0.3, 0.7))
    assert grad(h + 16, 0.3, 0.7) == grad(h, 0.3, 0.7)


def test_permutation_shape():
    gen = PerlinNoiseGenerator(0, 0, 2, 2, seed=42)
    assert sorted(gen.permutation[:256]) == list(range(256))
    assert gen.permutation[256:] == gen.permutation[:256]


def test_noise_deterministic_and_zero_on_lattice():
    a = PerlinNoiseGenerator(1, -2, 2, 2, seed=7)
    b = PerlinNoiseGenerator(1, -2, 2, 2, seed=7)
    assert a.noise(0.37, 0.81) == b.noise(0.37, 0.81)
    lattice = PerlinNoiseGenerator(0, 0, 2, 2, seed=7)
    assert lattice.noise(3.0, 5.0) == 0.0


def test_tiles_are_known_cursors():
    gen = PerlinNoiseGenerator(3, 4, 5, 3, seed=1)
    tiles = gen.tile_map()
    assert len(tiles) == 3
    assert all(len(row) == 5 for row in tiles)
    assert all(cursor in TILE_CURSORS for row in tiles for cursor in row)
    assert tiles[1][2] == gen.tile_at(2, 1)


def test_build_atlas_size():
    assert build_atlas().get_size() == (TILE_SIZE * 4, TILE_SIZE * 2)


def test_generate_texture_uses_atlas_tiles():
    gen = PerlinNoiseGenerator(0, 0, 2, 2, seed=5)
    atlas = build_atlas()
    texture = gen.generate_texture(atlas)
    assert texture.get_size() == (2 * TILE_SIZE, 2 * TILE_SIZE)
    ax, ay = gen.tile_at(0, 0)
    flipped = pygame.transform.flip(atlas, False, True)
    expected = flipped.get_at((ax + TILE_SIZE // 2, ay + TILE_SIZE // 2))
    bottom_left = texture.get_at((TILE_SIZE // 2, TILE_SIZE + TILE_SIZE // 2))
    assert bottom_left == expected