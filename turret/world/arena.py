"""Arena world: the shooter, the target and every projectile in flight."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from pygame.math import Vector3

from turret.engine.logger import GameLogger
from turret.engine.settings import SimulationConfig
from turret.engine.telemetry import ShotTelemetry
from turret.math.ballistics import FiringSolution, LeadModel, planar_distance, solve
from turret.world.bodies import (
    SHOOTER_SIZE,
    TARGET_SIZE,
    Body,
    Entity,
    EntityKind,
    Shooter,
    make_projectile,
)
from turret.world.kinematics import advance_body, ground_crossing


@dataclass(frozen=True)
class Intents:
    """Per-tick control snapshot; ``fire`` means "pressed this tick"."""

    turn_left: bool = False
    turn_right: bool = False
    move_forward: bool = False
    move_backward: bool = False
    fire: bool = False


@dataclass
class ImpactRecord:
    position: Vector3
    ground_point: Vector3
    flight_time: float
    miss_distance: float


@dataclass
class StepReport:
    tick: int
    solution: FiringSolution
    spawned: Optional[Entity] = None
    removed: List[Entity] = field(default_factory=list)
    impacts: List[ImpactRecord] = field(default_factory=list)


class ArenaWorld:
    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        logger: Optional[GameLogger] = None,
    ) -> None:
        self.config = config or SimulationConfig()
        self.logger = logger or GameLogger()
        self.shooter = Shooter()
        self.shooter_entity = Entity(
            EntityKind.SHOOTER,
            Body(position=Vector3(self.config.shooter_start)),
            SHOOTER_SIZE,
        )
        self.target_entity = Entity(
            EntityKind.TARGET,
            Body(
                position=Vector3(self.config.target_position),
                velocity=Vector3(self.config.target_velocity),
            ),
            TARGET_SIZE,
        )
        self.projectiles: List[Entity] = []
        self.telemetry = ShotTelemetry()
        self.tick = 0
        self.last_solution: FiringSolution = FiringSolution.no_solution()

    @property
    def shooter_body(self) -> Body:
        return self.shooter_entity.body

    @property
    def target_body(self) -> Body:
        return self.target_entity.body

    def entities(self) -> Iterable[Entity]:
        yield self.target_entity
        yield self.shooter_entity
        yield from self.projectiles

    def solve(self) -> FiringSolution:
        target_velocity = None
        if self.config.solver.lead_model is LeadModel.TARGET_MOTION:
            target_velocity = self.target_body.velocity
        return solve(
            self.shooter,
            self.shooter_body,
            self.target_body.position,
            config=self.config.solver,
            target_velocity=target_velocity,
        )

    def step(self, intents: Optional[Intents], dt: float) -> StepReport:
        """Advance the arena by one tick.

        Order within a tick: controls, solve, queue the shot, integrate the
        bodies already alive, then add the new projectile.
        """

        if intents is None:
            raise ValueError("step() requires the intent snapshot for this tick")
        if not math.isfinite(dt) or dt <= 0.0:
            raise ValueError(f"dt must be a positive finite number, got {dt!r}")

        self.tick += 1
        solver_log = self.logger.channel("solver")
        spawn_log = self.logger.channel("spawn")

        self._apply_intents(intents)
        solution = self.solve()
        if solution.valid:
            self.shooter.turret_angle = solution.lead_angle
        report = StepReport(self.tick, solution)

        pending: Optional[Entity] = None
        if intents.fire:
            if solution.valid:
                pending = make_projectile(
                    self.shooter_body.position,
                    solution.launch_velocity,
                    gravity=self.config.projectile_gravity,
                    drag=self.config.projectile_drag,
                )
            else:
                self.telemetry.record_invalid()
                solver_log.warning("No firing solution on tick %d; shot skipped", self.tick)

        self._integrate(dt, report)

        if pending is not None:
            self.projectiles.append(pending)
            self.telemetry.record_shot()
            report.spawned = pending
            spawn_log.info(
                "Shot %d fired: vel=%s turret=%.4f correction=%.4f",
                self.telemetry.shots,
                pending.body.velocity,
                solution.lead_angle,
                solution.correction,
            )

        self.telemetry.advance_time(dt, self.logger.channel("telemetry"))
        self.last_solution = solution
        return report

    def _apply_intents(self, intents: Intents) -> None:
        shooter = self.shooter
        if intents.turn_left:
            shooter.bearing += self.config.turn_step
        elif intents.turn_right:
            shooter.bearing -= self.config.turn_step
        if intents.move_backward:
            shooter.speed = -self.config.shooter_speed
        elif intents.move_forward:
            shooter.speed = self.config.shooter_speed
        else:
            shooter.speed = 0.0
        self.shooter_body.velocity = Vector3(
            shooter.speed * math.cos(shooter.bearing),
            shooter.speed * math.sin(shooter.bearing),
            0.0,
        )
        input_log = self.logger.channel("input")
        if input_log.enabled:
            input_log.debug(
                "Tick %d intents=%s bearing=%.3f speed=%.2f",
                self.tick,
                intents,
                shooter.bearing,
                shooter.speed,
            )

    def _integrate(self, dt: float, report: StepReport) -> None:
        physics_log = self.logger.channel("physics")
        for entity in (self.shooter_entity, self.target_entity):
            advance_body(entity.body, dt, drag_enabled=False, logger=physics_log)
            entity.age += dt

        target = self.target_body.position
        for projectile in list(self.projectiles):
            previous = Vector3(projectile.body.position)
            grounded = advance_body(
                projectile.body,
                dt,
                air_resistance=self.config.air_resistance,
                drag_enabled=self.config.drag_enabled,
                logger=physics_log,
            )
            projectile.age += dt
            if not grounded:
                continue
            self.projectiles.remove(projectile)
            ground_point = ground_crossing(previous, projectile.body.position)
            impact = ImpactRecord(
                position=Vector3(projectile.body.position),
                ground_point=ground_point,
                flight_time=projectile.age,
                miss_distance=planar_distance(ground_point, target),
            )
            self.telemetry.record_impact(impact.miss_distance)
            report.removed.append(projectile)
            report.impacts.append(impact)
            if physics_log.enabled:
                physics_log.info(
                    "Projectile landed at (%.3f, %.3f) after %.3fs, miss=%.3f",
                    ground_point.x,
                    ground_point.y,
                    impact.flight_time,
                    impact.miss_distance,
                )


__all__ = ["ArenaWorld", "ImpactRecord", "Intents", "StepReport"]
