"""Mapping between arena units and window pixels."""
from __future__ import annotations

from dataclasses import dataclass

import pygame
from pygame.math import Vector2

from turret.engine.settings import ARENA_HEIGHT, ARENA_WIDTH


def _convert(pos: float, bound_window: float, bound_arena: float) -> float:
    tile_size = bound_window / bound_arena
    return pos / bound_arena * bound_window - (bound_window / 2.0) + (tile_size / 2.0)


@dataclass(frozen=True)
class Viewport:
    """Arena to window transform.

    Centred coordinates put the window centre at the origin with y up; surface
    coordinates are pygame's top-left origin with y down. Arena positions are
    offset by half a tile so cell ``(0, 0)`` sits fully inside the window.
    """

    window_width: float
    window_height: float
    arena_width: float = ARENA_WIDTH
    arena_height: float = ARENA_HEIGHT

    @classmethod
    def for_surface(
        cls,
        surface: pygame.Surface,
        arena_width: float = ARENA_WIDTH,
        arena_height: float = ARENA_HEIGHT,
    ) -> "Viewport":
        width, height = surface.get_size()
        return cls(float(width), float(height), arena_width, arena_height)

    def to_centered(self, x: float, y: float) -> Vector2:
        return Vector2(
            _convert(x, self.window_width, self.arena_width),
            _convert(y, self.window_height, self.arena_height),
        )

    def to_surface(self, x: float, y: float) -> Vector2:
        centered = self.to_centered(x, y)
        return Vector2(
            centered.x + self.window_width / 2.0,
            self.window_height / 2.0 - centered.y,
        )

    def scale(self, width: float, height: float) -> Vector2:
        return Vector2(
            width / self.arena_width * self.window_width,
            height / self.arena_height * self.window_height,
        )

    def rect_for(self, x: float, y: float, size: float) -> pygame.Rect:
        center = self.to_surface(x, y)
        extent = self.scale(size, size)
        rect = pygame.Rect(0, 0, max(1, round(extent.x)), max(1, round(extent.y)))
        rect.center = (round(center.x), round(center.y))
        return rect


__all__ = ["Viewport"]
