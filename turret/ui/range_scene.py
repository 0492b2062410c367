"""Firing range scene: drive the robot and lob shots at the target."""
from __future__ import annotations

from typing import Optional

import pygame

from turret.engine.input import InputMapper
from turret.engine.logger import GameLogger
from turret.engine.scene import Scene
from turret.engine.settings import SimulationConfig
from turret.render.renderer import ArenaRenderer
from turret.render.viewport import Viewport
from turret.world.arena import ArenaWorld, StepReport


class RangeScene(Scene):
    def __init__(self) -> None:
        self.input: InputMapper | None = None
        self.logger: GameLogger | None = None
        self.world: ArenaWorld | None = None
        self.renderer: ArenaRenderer | None = None
        self.last_report: StepReport | None = None

    def on_enter(self, **kwargs) -> None:
        self.input = kwargs["input"]
        self.logger = kwargs["logger"]
        config: SimulationConfig = kwargs.get("config") or SimulationConfig()
        self.world = kwargs.get("world") or ArenaWorld(config, self.logger)
        surface: Optional[pygame.Surface] = kwargs.get("surface")
        if surface is not None:
            viewport = Viewport.for_surface(surface, config.arena_width, config.arena_height)
            self.renderer = ArenaRenderer(surface, viewport)
            self.renderer.debug_lines = config.debug_lines

    def handle_event(self, event: pygame.event.Event) -> None:
        if self.input:
            self.input.handle_event(event)

    def update(self, dt: float) -> None:
        if not self.world or not self.input:
            raise RuntimeError("RangeScene requires a world and an input mapper")
        intents = self.input.snapshot()
        if self.renderer and self.input.just_pressed("toggle_debug"):
            self.renderer.debug_lines = not self.renderer.debug_lines
        self.last_report = self.world.step(intents, dt)

    def render(self, surface: pygame.Surface, alpha: float) -> None:
        if not self.world:
            return
        if self.renderer is None:
            self.renderer = ArenaRenderer(
                surface,
                Viewport.for_surface(surface, self.world.config.arena_width, self.world.config.arena_height),
            )
        elif self.renderer.surface is not surface:
            self.renderer.set_surface(surface)
        self.renderer.draw(self.world)


__all__ = ["RangeScene"]
