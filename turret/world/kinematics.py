"""Body integration under gravity and air drag."""
from __future__ import annotations

import math
from typing import Optional

from pygame.math import Vector3

from turret.engine.logger import ChannelLogger
from turret.world.bodies import Body

AIR_RESISTANCE = 0.5 * 0.47 * 1.28


def apply_drag(velocity: Vector3, coefficient: float, dt: float) -> None:
    """Slow ``velocity`` in place by ``coefficient`` times the step speed.

    The drag magnitude is ``|v| * dt``, so it scales with the frame time.
    """

    speed = velocity.length() * dt
    if velocity.x != 0.0:
        angle = math.atan2(velocity.y, velocity.x)
        velocity.x -= coefficient * speed * math.cos(angle)
    else:
        velocity.y -= coefficient * speed
    velocity.z -= coefficient * speed


def advance_body(
    body: Body,
    dt: float,
    *,
    air_resistance: float = AIR_RESISTANCE,
    drag_enabled: bool = True,
    logger: Optional[ChannelLogger] = None,
) -> bool:
    """Step ``body`` by ``dt`` with semi-implicit Euler.

    Returns ``True`` once the body has dropped below the ground plane; the
    caller decides what to do with it.
    """

    body.velocity += body.acceleration * dt
    if drag_enabled and body.drag_coefficient > 0.0:
        apply_drag(body.velocity, air_resistance * body.drag_coefficient, dt)
    body.position += body.velocity * dt
    grounded = body.position.z < 0.0
    if logger and logger.enabled:
        logger.debug(
            "Body update pos=%s vel=%s grounded=%s",
            body.position,
            body.velocity,
            grounded,
        )
    return grounded


def ground_crossing(previous: Vector3, current: Vector3) -> Vector3:
    """Point where the straight step from ``previous`` to ``current`` meets z=0."""

    drop = previous.z - current.z
    if drop <= 0.0:
        return Vector3(current.x, current.y, 0.0)
    fraction = max(0.0, min(1.0, previous.z / drop))
    point = previous + (current - previous) * fraction
    point.z = 0.0
    return point


__all__ = ["AIR_RESISTANCE", "advance_body", "apply_drag", "ground_crossing"]
