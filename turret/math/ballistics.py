"""Math helpers for lobbed shots and lead correction.

Shots use a fixed apex policy: the vertical launch speed is pinned to a
climb rate ``UP`` so the flight time is known up front, and only the
horizontal speed is scaled with range. Motion accumulated during the flight
is compensated with a single law-of-cosines / law-of-sines pass instead of
an iterative intercept solve.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol

from pygame.math import Vector3

G = -9.8
UP = 10.0
TARGET_LEAD_TIME = 2.0
AIM_LINE_LENGTH = 2.0


class VectorLike(Protocol):
    x: float
    y: float
    z: float


class ShooterLike(Protocol):
    bearing: float
    speed: float


class BodyLike(Protocol):
    position: Vector3
    velocity: Vector3


class LeadModel(Enum):
    """Which motion the lead triangle compensates for."""

    NONE = "none"
    SELF_MOTION = "self_motion"
    TARGET_MOTION = "target_motion"

    @classmethod
    def parse(cls, value: "str | LeadModel") -> "LeadModel":
        if isinstance(value, LeadModel):
            return value
        key = str(value).strip().lower().replace("_", "").replace("-", "")
        if key.endswith("only"):
            key = key[: -len("only")]
        for model in cls:
            if model.value.replace("_", "") == key:
                return model
        raise ValueError(f"Unknown lead model {value!r}")


@dataclass
class SolverConfig:
    up: float = UP
    gravity: float = -G
    lead_model: LeadModel = LeadModel.SELF_MOTION
    target_lead_time: float = TARGET_LEAD_TIME

    def __post_init__(self) -> None:
        self.lead_model = LeadModel.parse(self.lead_model)
        if self.up <= 0.0:
            raise ValueError(f"Climb rate must be positive, got {self.up!r}")
        if self.gravity <= 0.0:
            raise ValueError(f"Gravity magnitude must be positive, got {self.gravity!r}")


@dataclass
class AimGeometry:
    """Intermediate points of a solve, kept for debug overlays only."""

    origin: Vector3
    target: Vector3
    raw_aim_end: Vector3
    corrected_aim_end: Vector3
    predicted: Vector3
    corner: Vector3


@dataclass
class FiringSolution:
    """Launch speeds and aim for the current tick.

    ``lead_angle`` is the corrected turret angle, relative to the shooter's
    bearing. ``launch_velocity`` already includes the shooter's own velocity.
    """

    horizontal_speed: float
    vertical_speed: float
    lead_angle: float
    raw_angle: float = 0.0
    correction: float = 0.0
    flight_time: float = 0.0
    corrected_distance: float = 0.0
    launch_velocity: Vector3 = field(default_factory=Vector3)
    geometry: Optional[AimGeometry] = None
    valid: bool = True

    @classmethod
    def no_solution(cls) -> "FiringSolution":
        return cls(0.0, 0.0, 0.0, valid=False)


def planar_distance(p1: VectorLike, p2: VectorLike) -> float:
    """Distance in the horizontal (x, y) plane."""

    return math.hypot(p1.x - p2.x, p1.y - p2.y)


def law_of_cosines(d1: float, d2: float, angle: float) -> float:
    """Length of the side opposite ``angle`` given the two adjacent sides."""

    squared = d1 * d1 + d2 * d2 - 2.0 * d1 * d2 * math.cos(angle)
    if squared < 0.0:
        # Rounding can leave a hair below zero for collinear sides.
        squared = 0.0
    return math.sqrt(squared)


def law_of_sines(d1: float, angle: float, d2: float) -> float:
    """Angle opposite side ``d2`` when ``angle`` is opposite side ``d1``.

    A zero-length ``d1`` has no defined answer and yields no correction; the
    ``asin`` argument is clamped to its domain.
    """

    if d1 == 0.0:
        return 0.0
    ratio = d2 * math.sin(angle) / d1
    if not math.isfinite(ratio):
        return 0.0
    return math.asin(max(-1.0, min(1.0, ratio)))


def heading(dx: float, dy: float) -> Optional[float]:
    """World angle of the planar offset ``(dx, dy)``, ``None`` when it is zero."""

    if dx == 0.0:
        if dy == 0.0:
            return None
        return math.copysign(math.pi / 2.0, dy)
    angle = math.atan(dy / dx)
    if dx < 0.0:
        angle += math.pi
    return angle


def bearing_to_target(origin: VectorLike, target: VectorLike) -> Optional[float]:
    return heading(target.x - origin.x, target.y - origin.y)


def flight_time(up: float = UP, gravity: float = -G) -> float:
    """Flight duration under the fixed apex policy, independent of range."""

    return (-up - math.sqrt(up * up + 2.0 * gravity)) / (-gravity)


def apex_launch_speed(distance: float, up: float = UP, gravity: float = -G) -> tuple[float, float]:
    """Return ``(horizontal, vertical)`` launch speeds that carry ``distance``."""

    return gravity * distance / (2.0 * up), up


def _lead_leg(
    model: LeadModel,
    shooter: ShooterLike,
    raw_world: float,
    flight: float,
    target_velocity: Optional[VectorLike],
    lead_time: float,
) -> tuple[float, float]:
    """Return the displacement side ``d1`` and its angle to the target line."""

    if model is LeadModel.SELF_MOTION:
        return shooter.speed * flight, raw_world - shooter.bearing
    if model is LeadModel.TARGET_MOTION and target_velocity is not None:
        # A moving target is the mirror image of a shooter moving the other way.
        away = heading(-target_velocity.x, -target_velocity.y)
        if away is not None:
            speed = math.hypot(target_velocity.x, target_velocity.y)
            return speed * lead_time, raw_world - away
    return 0.0, raw_world - shooter.bearing


def _aim_end(origin: Vector3, angle: float) -> Vector3:
    return Vector3(
        origin.x + AIM_LINE_LENGTH * math.cos(angle),
        origin.y + AIM_LINE_LENGTH * math.sin(angle),
        origin.z,
    )


def solve(
    shooter: ShooterLike,
    shooter_body: BodyLike,
    target_position: VectorLike,
    *,
    config: Optional[SolverConfig] = None,
    target_velocity: Optional[VectorLike] = None,
) -> FiringSolution:
    """Compute this tick's launch vector for ``shooter`` against a target.

    Degenerate geometry never raises: coincident shooter and target aim along
    the bearing, and anything that would produce a non-finite launch vector
    comes back as :meth:`FiringSolution.no_solution`.
    """

    config = config or SolverConfig()
    origin = shooter_body.position
    raw_world = bearing_to_target(origin, target_position)
    if raw_world is None:
        raw_world = shooter.bearing
    raw_angle = raw_world - shooter.bearing

    flight = flight_time(config.up, config.gravity)
    distance = planar_distance(target_position, origin)
    displacement, included = _lead_leg(
        config.lead_model,
        shooter,
        raw_world,
        flight,
        target_velocity,
        config.target_lead_time,
    )
    corrected_distance = law_of_cosines(displacement, distance, included)
    correction = law_of_sines(corrected_distance, included, displacement)
    lead_angle = raw_angle + correction

    horizontal, vertical = apex_launch_speed(corrected_distance, config.up, config.gravity)
    aim = shooter.bearing + lead_angle
    velocity = shooter_body.velocity
    launch = Vector3(
        math.cos(aim) * horizontal + velocity.x,
        math.sin(aim) * horizontal + velocity.y,
        vertical,
    )
    checks = (raw_angle, correction, corrected_distance, horizontal, launch.x, launch.y)
    if not all(math.isfinite(value) for value in checks):
        return FiringSolution.no_solution()

    target = Vector3(target_position.x, target_position.y, target_position.z)
    if config.lead_model is LeadModel.TARGET_MOTION and target_velocity is not None:
        predicted = target + Vector3(target_velocity.x, target_velocity.y, 0.0) * config.target_lead_time
    else:
        predicted = Vector3(origin.x + velocity.x * flight, origin.y + velocity.y * flight, origin.z)
    geometry = AimGeometry(
        origin=Vector3(origin.x, origin.y, origin.z),
        target=target,
        raw_aim_end=_aim_end(origin, raw_world),
        corrected_aim_end=_aim_end(origin, aim),
        predicted=predicted,
        corner=target + predicted - Vector3(origin.x, origin.y, origin.z),
    )
    return FiringSolution(
        horizontal_speed=horizontal,
        vertical_speed=vertical,
        lead_angle=lead_angle,
        raw_angle=raw_angle,
        correction=correction,
        flight_time=flight,
        corrected_distance=corrected_distance,
        launch_velocity=launch,
        geometry=geometry,
    )


__all__ = [
    "AimGeometry",
    "FiringSolution",
    "G",
    "LeadModel",
    "SolverConfig",
    "UP",
    "apex_launch_speed",
    "bearing_to_target",
    "flight_time",
    "heading",
    "law_of_cosines",
    "law_of_sines",
    "planar_distance",
    "solve",
]
