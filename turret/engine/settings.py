"""Runtime settings loaded from ``settings.json``."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from pygame.math import Vector3

from turret.math.ballistics import LeadModel, SolverConfig, TARGET_LEAD_TIME, UP, G
from turret.world.bodies import PROJECTILE_DRAG, PROJECTILE_GRAVITY
from turret.world.kinematics import AIR_RESISTANCE

SETTINGS_PATH = Path("settings.json")

ARENA_WIDTH = 40.0
ARENA_HEIGHT = 20.0
SHOOTER_SPEED = 2.0
TURN_STEP = 0.1

DEFAULT_SETTINGS: Dict[str, Any] = {
    "resolution": [1280, 640],
    "simHz": 60,
    "maxFps": 120,
}


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    path = path or SETTINGS_PATH
    settings = dict(DEFAULT_SETTINGS)
    if not path.exists():
        return settings
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError:
        return settings
    if isinstance(data, dict):
        settings.update(data)
    return settings


def _vector(value: Optional[Sequence[float]], default: Optional[Vector3]) -> Optional[Vector3]:
    if value is None:
        return default
    return Vector3(*(float(component) for component in value))


@dataclass
class SimulationConfig:
    """Everything the arena needs to run one range session."""

    arena_width: float = ARENA_WIDTH
    arena_height: float = ARENA_HEIGHT
    solver: SolverConfig = field(default_factory=SolverConfig)
    drag_enabled: bool = True
    air_resistance: float = AIR_RESISTANCE
    projectile_gravity: float = PROJECTILE_GRAVITY
    projectile_drag: float = PROJECTILE_DRAG
    shooter_speed: float = SHOOTER_SPEED
    turn_step: float = TURN_STEP
    shooter_start: Vector3 = field(default_factory=Vector3)
    target_position: Optional[Vector3] = None
    target_velocity: Vector3 = field(default_factory=Vector3)
    debug_lines: bool = True

    def __post_init__(self) -> None:
        if self.target_position is None:
            self.target_position = Vector3(self.arena_width / 2.0, self.arena_height / 2.0, 0.0)

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> "SimulationConfig":
        data = settings.get("simulation", {}) or {}
        solver = SolverConfig(
            up=float(data.get("up", UP)),
            gravity=float(data.get("gravity", -G)),
            lead_model=LeadModel.parse(data.get("leadModel", LeadModel.SELF_MOTION)),
            target_lead_time=float(data.get("targetLeadTime", TARGET_LEAD_TIME)),
        )
        return cls(
            arena_width=float(data.get("arenaWidth", ARENA_WIDTH)),
            arena_height=float(data.get("arenaHeight", ARENA_HEIGHT)),
            solver=solver,
            drag_enabled=bool(data.get("dragEnabled", True)),
            air_resistance=float(data.get("airResistance", AIR_RESISTANCE)),
            projectile_gravity=float(data.get("projectileGravity", PROJECTILE_GRAVITY)),
            projectile_drag=float(data.get("projectileDrag", PROJECTILE_DRAG)),
            shooter_speed=float(data.get("shooterSpeed", SHOOTER_SPEED)),
            turn_step=float(data.get("turnStep", TURN_STEP)),
            shooter_start=_vector(data.get("shooterStart"), Vector3()),
            target_position=_vector(data.get("targetPosition"), None),
            target_velocity=_vector(data.get("targetVelocity"), Vector3()),
            debug_lines=bool(data.get("debugLines", True)),
        )


__all__ = [
    "ARENA_HEIGHT",
    "ARENA_WIDTH",
    "DEFAULT_SETTINGS",
    "SETTINGS_PATH",
    "SimulationConfig",
    "load_settings",
]
