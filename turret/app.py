"""Application entry point for the ballistic turret range."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

import pygame

from turret.engine.input import InputBindings, InputMapper
from turret.engine.logger import GameLogger, init_logger
from turret.engine.loop import FrameLoop
from turret.engine.settings import SETTINGS_PATH, SimulationConfig, load_settings
from turret.ui.range_scene import RangeScene
from turret.world.arena import ArenaWorld, Intents

USAGE = "A/D turn, W/S drive, Space fire, F3 toggle aim lines, Esc quit."


def run_headless(config: SimulationConfig, logger: GameLogger, ticks: int, dt: float) -> ArenaWorld:
    """Fire one shot on the first tick and simulate ``ticks`` ticks without a window."""

    world = ArenaWorld(config, logger)
    for index in range(ticks):
        world.step(Intents(fire=index == 0), dt)
    snapshot = world.telemetry.snapshot()
    logger.channel("telemetry").info(
        "Headless run: ticks=%d shots=%d landed=%d mean_miss=%.4f",
        ticks,
        snapshot.shots,
        snapshot.impacts,
        snapshot.mean_miss,
    )
    return world


def run_window(settings: dict, config: SimulationConfig, logger: GameLogger, settings_path: Path) -> None:
    pygame.init()
    resolution = tuple(settings.get("resolution", [1280, 640]))
    surface = pygame.display.set_mode(resolution)
    pygame.display.set_caption("Ballistic Turret Range")
    clock = pygame.time.Clock()

    input_mapper = InputMapper(InputBindings.load(settings_path))
    scene = RangeScene()
    scene.on_enter(input=input_mapper, logger=logger, config=config, surface=surface)

    def process_events() -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT or (event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE):
                loop.stop()
                return
            scene.handle_event(event)

    def render(alpha: float) -> None:
        scene.render(surface, alpha)
        pygame.display.flip()
        clock.tick(settings.get("maxFps", 120))

    loop = FrameLoop(
        scene.update,
        render,
        process_events,
        fixed_hz=settings.get("simHz", 60),
    )
    try:
        loop.run()
    finally:
        scene.on_exit()
        pygame.quit()
        print(f"\nUsage: {USAGE}")


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Lob shots at a target from a driveable turret.")
    parser.add_argument(
        "--settings",
        type=Path,
        default=SETTINGS_PATH,
        help="Path to settings.json (default: ./settings.json)",
    )
    parser.add_argument(
        "--headless-ticks",
        type=int,
        default=0,
        help="Simulate this many ticks without opening a window",
    )
    parser.add_argument(
        "--dt",
        type=float,
        default=1.0 / 60.0,
        help="Tick length in seconds for headless runs",
    )
    args = parser.parse_args(argv)
    if args.dt <= 0.0:
        parser.error("--dt must be positive")

    settings = load_settings(args.settings)
    logger = init_logger(args.settings)
    config = SimulationConfig.from_settings(settings)

    if args.headless_ticks > 0:
        run_headless(config, logger, args.headless_ticks, args.dt)
        return
    run_window(settings, config, logger, args.settings)


__all__ = ["main", "run_headless", "run_window"]
