"""Point-mass bodies and the entities that own them."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pygame.math import Vector3

PROJECTILE_GRAVITY = 9.81
PROJECTILE_DRAG = 0.1

SHOOTER_SIZE = 2.0
TARGET_SIZE = 2.0
PROJECTILE_SIZE = 1.0


@dataclass
class Body:
    """A simulated point mass; ``drag_coefficient`` is surface area over mass."""

    position: Vector3 = field(default_factory=Vector3)
    velocity: Vector3 = field(default_factory=Vector3)
    acceleration: Vector3 = field(default_factory=Vector3)
    drag_coefficient: float = 0.0

    def copy(self) -> "Body":
        return Body(
            Vector3(self.position),
            Vector3(self.velocity),
            Vector3(self.acceleration),
            self.drag_coefficient,
        )


@dataclass
class Shooter:
    """Aiming state layered on the controlled body.

    ``turret_angle`` is relative to ``bearing`` and is recomputed every tick.
    """

    bearing: float = 0.0
    turret_angle: float = 0.0
    speed: float = 0.0


class EntityKind(Enum):
    SHOOTER = "shooter"
    TARGET = "target"
    PROJECTILE = "projectile"


@dataclass
class Entity:
    kind: EntityKind
    body: Body
    visual_size: float
    age: float = 0.0

    @property
    def position(self) -> Vector3:
        return self.body.position


def make_projectile(
    position: Vector3,
    velocity: Vector3,
    *,
    gravity: float = PROJECTILE_GRAVITY,
    drag: float = PROJECTILE_DRAG,
) -> Entity:
    body = Body(
        position=Vector3(position.x, position.y, 0.0),
        velocity=Vector3(velocity),
        acceleration=Vector3(0.0, 0.0, -gravity),
        drag_coefficient=drag,
    )
    return Entity(EntityKind.PROJECTILE, body, PROJECTILE_SIZE)


__all__ = [
    "Body",
    "Entity",
    "EntityKind",
    "PROJECTILE_DRAG",
    "PROJECTILE_GRAVITY",
    "PROJECTILE_SIZE",
    "SHOOTER_SIZE",
    "Shooter",
    "TARGET_SIZE",
    "make_projectile",
]
