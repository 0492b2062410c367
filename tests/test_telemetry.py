from __future__ import annotations

import logging
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from turret.app import main, run_headless
from turret.engine.logger import GameLogger, LoggerConfig
from turret.engine.settings import SimulationConfig
from turret.engine.telemetry import ShotTelemetry


def test_snapshot_aggregates_misses() -> None:
    telemetry = ShotTelemetry()
    assert telemetry.snapshot().mean_miss == 0.0
    assert telemetry.snapshot().best_miss == 0.0

    telemetry.record_shot()
    telemetry.record_shot()
    telemetry.record_impact(0.5)
    telemetry.record_impact(1.5)
    telemetry.record_invalid()
    snapshot = telemetry.snapshot()
    assert snapshot.shots == 2
    assert snapshot.impacts == 2
    assert snapshot.invalid_solutions == 1
    assert snapshot.mean_miss == 1.0
    assert snapshot.best_miss == 0.5


def test_periodic_log_line(caplog) -> None:
    logger = GameLogger(LoggerConfig(channels={"telemetry": True}))
    telemetry = ShotTelemetry()
    telemetry.record_shot()
    with caplog.at_level(logging.INFO, logger="turret.telemetry"):
        telemetry.advance_time(1.0, logger.channel("telemetry"))
        assert not caplog.records
        telemetry.advance_time(2.0, logger.channel("telemetry"))
    assert any("fired=1" in record.getMessage() for record in caplog.records)


def test_headless_run_lands_the_opening_shot() -> None:
    logger = GameLogger(LoggerConfig(channels={}))
    world = run_headless(SimulationConfig(), logger, ticks=180, dt=1.0 / 60.0)
    snapshot = world.telemetry.snapshot()
    assert snapshot.shots == 1
    assert snapshot.impacts == 1
    assert world.projectiles == []
    assert world.tick == 180


def test_main_headless_flag(tmp_path: Path, caplog) -> None:
    settings = tmp_path / "settings.json"
    settings.write_text('{"simulation": {"dragEnabled": false}}')
    with caplog.at_level(logging.INFO, logger="turret.telemetry"):
        main(["--settings", str(settings), "--headless-ticks", "200"])
    assert any("Headless run" in record.getMessage() for record in caplog.records)
