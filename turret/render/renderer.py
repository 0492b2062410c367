"""Top-down pygame drawing of the arena."""
from __future__ import annotations

from typing import List, Optional, Tuple

import pygame
from pygame.math import Vector3

from turret.math.ballistics import AimGeometry
from turret.render.viewport import Viewport
from turret.world.arena import ArenaWorld
from turret.world.bodies import EntityKind

Color = Tuple[int, int, int]

BACKGROUND_COLOR: Color = (102, 102, 102)
ENTITY_COLORS = {
    EntityKind.SHOOTER: (255, 51, 51),
    EntityKind.TARGET: (0, 255, 51),
    EntityKind.PROJECTILE: (0, 51, 255),
}

RAW_AIM_COLOR: Color = (0, 255, 0)
TARGET_LINE_COLOR: Color = (255, 20, 148)
DRIFT_COLOR: Color = (0, 0, 255)
PREDICTED_LINE_COLOR: Color = (255, 255, 0)
CORNER_FROM_TARGET_COLOR: Color = (25, 25, 112)
CORNER_FROM_PREDICTED_COLOR: Color = (64, 224, 208)
CORRECTED_AIM_COLOR: Color = (0, 0, 0)

Segment = Tuple[Color, Vector3, Vector3]


def debug_segments(geometry: Optional[AimGeometry]) -> List[Segment]:
    """Lines explaining a solve, in draw order (last drawn on top)."""

    if geometry is None:
        return []
    return [
        (RAW_AIM_COLOR, geometry.origin, geometry.raw_aim_end),
        (TARGET_LINE_COLOR, geometry.target, geometry.origin),
        (DRIFT_COLOR, geometry.origin, geometry.predicted),
        (PREDICTED_LINE_COLOR, geometry.target, geometry.predicted),
        (CORNER_FROM_TARGET_COLOR, geometry.target, geometry.corner),
        (CORNER_FROM_PREDICTED_COLOR, geometry.predicted, geometry.corner),
        (CORRECTED_AIM_COLOR, geometry.origin, geometry.corrected_aim_end),
    ]


class ArenaRenderer:
    def __init__(self, surface: pygame.Surface, viewport: Optional[Viewport] = None) -> None:
        self.surface = surface
        self.viewport = viewport or Viewport.for_surface(surface)
        self.debug_lines = True

    def set_surface(self, surface: pygame.Surface) -> None:
        self.surface = surface
        self.viewport = Viewport.for_surface(
            surface, self.viewport.arena_width, self.viewport.arena_height
        )

    def draw(self, world: ArenaWorld) -> None:
        self.surface.fill(BACKGROUND_COLOR)
        for entity in world.entities():
            rect = self.viewport.rect_for(entity.position.x, entity.position.y, entity.visual_size)
            pygame.draw.rect(self.surface, ENTITY_COLORS[entity.kind], rect)
        if self.debug_lines and world.last_solution.valid:
            for color, start, end in debug_segments(world.last_solution.geometry):
                pygame.draw.line(
                    self.surface,
                    color,
                    self.viewport.to_surface(start.x, start.y),
                    self.viewport.to_surface(end.x, end.y),
                )


__all__ = ["ArenaRenderer", "debug_segments"]
