"""Firing solution geometry."""
from __future__ import annotations

import math
import sys
from math import isclose
from pathlib import Path

import pytest
from pygame.math import Vector3

sys.path.append(str(Path(__file__).resolve().parents[1]))

from turret.math.ballistics import (
    FiringSolution,
    LeadModel,
    SolverConfig,
    apex_launch_speed,
    bearing_to_target,
    flight_time,
    law_of_cosines,
    law_of_sines,
    planar_distance,
    solve,
)
from turret.world.bodies import Body, Shooter


def _static(position=(0.0, 0.0, 0.0), bearing: float = 0.0) -> tuple[Shooter, Body]:
    return Shooter(bearing=bearing), Body(position=Vector3(position))


def _moving(speed: float, bearing: float = 0.0) -> tuple[Shooter, Body]:
    shooter = Shooter(bearing=bearing, speed=speed)
    body = Body(velocity=Vector3(speed * math.cos(bearing), speed * math.sin(bearing), 0.0))
    return shooter, body


def test_flight_time_matches_apex_quadratic() -> None:
    expected = (10.0 + math.sqrt(100.0 + 19.6)) / 9.8
    assert isclose(flight_time(), expected)
    assert isclose(flight_time(), 2.136345, rel_tol=1e-5)


def test_apex_launch_speed_scales_with_range() -> None:
    horizontal, vertical = apex_launch_speed(20.0)
    assert isclose(horizontal, 9.8)
    assert vertical == 10.0
    assert apex_launch_speed(0.0) == (0.0, 10.0)


def test_bearing_to_target_resolves_quadrants() -> None:
    origin = Vector3()
    assert isclose(bearing_to_target(origin, Vector3(20.0, 10.0, 0.0)), math.atan(0.5))
    assert isclose(bearing_to_target(origin, Vector3(-10.0, 0.0, 0.0)), math.pi)
    assert isclose(bearing_to_target(origin, Vector3(-10.0, -10.0, 0.0)), math.pi + math.pi / 4)
    assert isclose(bearing_to_target(origin, Vector3(0.0, 5.0, 0.0)), math.pi / 2)
    assert isclose(bearing_to_target(origin, Vector3(0.0, -5.0, 0.0)), -math.pi / 2)
    assert bearing_to_target(origin, Vector3(0.0, 0.0, 3.0)) is None


def test_law_of_cosines_and_sines() -> None:
    assert isclose(law_of_cosines(3.0, 4.0, math.pi / 2), 5.0)
    assert isclose(law_of_cosines(2.0, 2.0, 0.0), 0.0, abs_tol=1e-12)
    # Angle opposite the 3 side of a 3-4-5 triangle.
    assert isclose(law_of_sines(5.0, math.pi / 2, 3.0), math.asin(0.6))


def test_law_of_sines_guards_domain() -> None:
    assert law_of_sines(0.0, 1.0, 5.0) == 0.0
    assert isclose(law_of_sines(1.0, math.pi / 2, 1.0000001), math.pi / 2)
    assert isclose(law_of_sines(1.0, -math.pi / 2, 3.0), -math.pi / 2)


def test_static_scenario_aims_straight_at_target() -> None:
    shooter, body = _static()
    solution = solve(shooter, body, Vector3(20.0, 10.0, 0.0))

    assert solution.valid
    assert isclose(solution.raw_angle, 0.4636476, rel_tol=1e-6)
    assert isclose(solution.correction, 0.0, abs_tol=1e-12)
    assert isclose(solution.lead_angle, solution.raw_angle)
    assert isclose(solution.corrected_distance, math.sqrt(500.0))
    assert isclose(solution.horizontal_speed, 9.8 * math.sqrt(500.0) / 20.0)
    assert solution.vertical_speed == 10.0
    assert isclose(solution.launch_velocity.x, 9.8, rel_tol=1e-9)
    assert isclose(solution.launch_velocity.y, 4.9, rel_tol=1e-9)
    assert solution.launch_velocity.z == 10.0


def test_coincident_shooter_and_target_stays_finite() -> None:
    shooter, body = _static((5.0, 5.0, 0.0), bearing=0.3)
    solution = solve(shooter, body, Vector3(5.0, 5.0, 0.0))

    assert solution.valid
    assert solution.horizontal_speed == 0.0
    assert solution.launch_velocity == Vector3(0.0, 0.0, 10.0)

    shooter, body = _moving(2.0, bearing=0.3)
    solution = solve(shooter, body, Vector3(0.0, 0.0, 0.0))
    assert solution.valid
    assert all(math.isfinite(value) for value in solution.launch_velocity)


def test_target_directly_ahead_on_y_axis() -> None:
    shooter, body = _static()
    solution = solve(shooter, body, Vector3(0.0, 10.0, 0.0))
    assert isclose(solution.raw_angle, math.pi / 2)
    assert isclose(solution.launch_velocity.x, 0.0, abs_tol=1e-9)
    assert solution.launch_velocity.y > 0.0


def test_target_behind_shooter() -> None:
    shooter, body = _static()
    solution = solve(shooter, body, Vector3(-10.0, 0.0, 0.0))
    assert isclose(solution.raw_angle, math.pi)
    assert isclose(solution.launch_velocity.x, -solution.horizontal_speed)


@pytest.mark.parametrize("bearing", [0.0, 0.7, -2.0, 3.0])
def test_static_aim_is_bearing_independent(bearing: float) -> None:
    reference = solve(*_static(), Vector3(12.0, -4.0, 0.0))
    shooter, body = _static(bearing=bearing)
    solution = solve(shooter, body, Vector3(12.0, -4.0, 0.0))

    assert isclose(solution.horizontal_speed, reference.horizontal_speed)
    assert isclose(
        math.cos(bearing + solution.lead_angle), math.cos(reference.lead_angle), abs_tol=1e-9
    )
    assert isclose(
        math.sin(bearing + solution.lead_angle), math.sin(reference.lead_angle), abs_tol=1e-9
    )
    assert (solution.launch_velocity - reference.launch_velocity).length() < 1e-9


def test_self_motion_lead_compensates_drift() -> None:
    shooter, body = _moving(2.0)
    solution = solve(shooter, body, Vector3(0.0, 10.0, 0.0))

    drift = 2.0 * flight_time()
    assert isclose(solution.corrected_distance, math.hypot(drift, 10.0))
    assert isclose(solution.lead_angle, math.pi / 2 + math.atan(drift / 10.0))
    # The aim leans back against the shooter's forward motion.
    aim = solution.launch_velocity - body.velocity
    assert aim.x < 0.0


def test_negative_speed_leads_the_other_way() -> None:
    shooter, body = _moving(-2.0)
    solution = solve(shooter, body, Vector3(0.0, 10.0, 0.0))
    assert solution.lead_angle < math.pi / 2


def test_lead_model_none_ignores_motion() -> None:
    shooter, body = _moving(2.0)
    config = SolverConfig(lead_model=LeadModel.NONE)
    solution = solve(shooter, body, Vector3(0.0, 10.0, 0.0), config=config)
    assert isclose(solution.lead_angle, math.pi / 2)
    assert isclose(solution.corrected_distance, 10.0)
    # Shooter momentum is still inherited.
    assert isclose(solution.launch_velocity.x, 2.0, abs_tol=1e-9)


def test_target_motion_lead_aims_at_predicted_point() -> None:
    shooter, body = _static()
    config = SolverConfig(lead_model=LeadModel.TARGET_MOTION, target_lead_time=2.0)
    solution = solve(
        shooter,
        body,
        Vector3(10.0, 0.0, 0.0),
        config=config,
        target_velocity=Vector3(0.0, 1.0, 0.0),
    )
    assert isclose(solution.corrected_distance, math.sqrt(104.0))
    assert isclose(solution.lead_angle, math.atan(0.2))
    assert solution.geometry is not None
    assert solution.geometry.predicted == Vector3(10.0, 2.0, 0.0)


def test_target_motion_with_still_target_matches_no_lead() -> None:
    shooter, body = _static()
    config = SolverConfig(lead_model=LeadModel.TARGET_MOTION)
    solution = solve(shooter, body, Vector3(8.0, 6.0, 0.0), config=config, target_velocity=Vector3())
    assert isclose(solution.corrected_distance, 10.0)
    assert isclose(solution.correction, 0.0, abs_tol=1e-12)


def test_non_finite_input_yields_no_solution() -> None:
    shooter, body = _static()
    solution = solve(shooter, body, Vector3(float("nan"), 3.0, 0.0))
    assert not solution.valid
    assert solution.launch_velocity == Vector3()

    sentinel = FiringSolution.no_solution()
    assert not sentinel.valid
    assert sentinel.horizontal_speed == 0.0


def test_debug_geometry_describes_the_triangle() -> None:
    shooter, body = _moving(2.0)
    target = Vector3(6.0, 8.0, 0.0)
    solution = solve(shooter, body, target)
    geometry = solution.geometry

    assert geometry is not None
    assert geometry.target == target
    assert isclose(geometry.predicted.x, 2.0 * flight_time())
    assert geometry.corner == target + geometry.predicted - geometry.origin
    assert isclose(planar_distance(geometry.origin, geometry.raw_aim_end), 2.0)
    assert isclose(planar_distance(geometry.origin, geometry.corrected_aim_end), 2.0)


def test_lead_model_parse_accepts_config_spellings() -> None:
    assert LeadModel.parse("selfMotionOnly") is LeadModel.SELF_MOTION
    assert LeadModel.parse("target_motion") is LeadModel.TARGET_MOTION
    assert LeadModel.parse("NONE") is LeadModel.NONE
    with pytest.raises(ValueError):
        LeadModel.parse("predictive")


def test_solver_config_rejects_non_positive_climb_rate() -> None:
    with pytest.raises(ValueError):
        SolverConfig(up=0.0)
