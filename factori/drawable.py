"""Textured, positioned quads drawn in world coordinates."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

import pygame

_log = logging.getLogger(__name__)

WHITE = (255, 255, 255)


def make_placeholder_texture(color, width: int, height: int) -> pygame.Surface:
    """Create a solid-colour texture with per-pixel alpha."""
    surface = pygame.Surface((width, height), pygame.SRCALPHA)
    surface.fill(color)
    return surface


@dataclass(eq=False)
class DrawableObject:
    """A texture placed at a world position, centred on (x, y)."""

    texture: pygame.Surface | None
    x: float = 0.0
    y: float = 0.0
    width: float = 1.0
    height: float = 1.0
    rotation: float = 0.0
    opacity: float = 1.0
    tint: tuple[int, int, int] = WHITE
    textures: list[pygame.Surface] = field(default_factory=list)

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    @position.setter
    def position(self, value: tuple[float, float]) -> None:
        self.x, self.y = value

    @property
    def size(self) -> tuple[float, float]:
        return (self.width, self.height)

    @size.setter
    def size(self, value: tuple[float, float]) -> None:
        self.width, self.height = value

    def move(self, dx: float, dy: float) -> None:
        self.x += dx
        self.y += dy

    def rotate(self, angle: float) -> None:
        self.rotation += angle

    def append_texture(self, texture: pygame.Surface) -> None:
        self.textures.append(texture)

    def remove_texture(self, index: int) -> None:
        """Remove a buffered texture; indexes out of range are ignored."""
        if 0 <= index < len(self.textures):
            del self.textures[index]

    def texture_at(self, index: int) -> pygame.Surface | None:
        """Return a buffered texture, or None when the index is out of range."""
        if 0 <= index < len(self.textures):
            return self.textures[index]
        return None

    def draw(
        self,
        surface: pygame.Surface,
        to_screen: Callable[[float, float], tuple[float, float]],
        pixels_per_unit: float,
    ) -> bool:
        """Blit onto ``surface``; returns False when there is no texture."""
        if self.texture is None:
            _log.error("GLObj: texture is not loaded")
            return False

        w = max(1, round(abs(self.width) * pixels_per_unit))
        h = max(1, round(abs(self.height) * pixels_per_unit))
        image = pygame.transform.scale(self.texture, (w, h))
        if self.width < 0 or self.height < 0:
            image = pygame.transform.flip(image, self.width < 0, self.height < 0)

        tint = tuple(self.tint)[:3]
        if tint != WHITE:
            image.fill((*tint, 255), special_flags=pygame.BLEND_RGBA_MULT)
        if self.rotation:
            image = pygame.transform.rotate(image, self.rotation)
        if self.opacity < 1.0:
            image.set_alpha(round(max(0.0, self.opacity) * 255))

        cx, cy = to_screen(self.x, self.y)
        surface.blit(image, image.get_rect(center=(round(cx), round(cy))))
        return True