"""Running shot statistics for the range."""
from __future__ import annotations

from dataclasses import dataclass

from turret.engine.logger import ChannelLogger

LOG_INTERVAL = 2.5


@dataclass
class ShotTelemetrySnapshot:
    shots: int
    impacts: int
    invalid_solutions: int
    mean_miss: float
    best_miss: float


@dataclass
class ShotTelemetry:
    """Counts shots and how far from the target they came down."""

    shots: int = 0
    impacts: int = 0
    invalid_solutions: int = 0
    total_miss: float = 0.0
    best_miss: float = float("inf")
    _log_accumulator: float = 0.0

    def record_shot(self) -> None:
        self.shots += 1

    def record_invalid(self) -> None:
        self.invalid_solutions += 1

    def record_impact(self, miss_distance: float) -> None:
        self.impacts += 1
        self.total_miss += miss_distance
        self.best_miss = min(self.best_miss, miss_distance)

    @property
    def mean_miss(self) -> float:
        if self.impacts <= 0:
            return 0.0
        return self.total_miss / self.impacts

    def advance_time(self, dt: float, logger: ChannelLogger | None = None) -> None:
        self._log_accumulator += dt
        if self._log_accumulator >= LOG_INTERVAL:
            self._log_accumulator = 0.0
            if logger and logger.enabled and self.shots:
                logger.info(
                    "Shots: fired=%d landed=%d invalid=%d mean_miss=%.3f",
                    self.shots,
                    self.impacts,
                    self.invalid_solutions,
                    self.mean_miss,
                )

    def snapshot(self) -> ShotTelemetrySnapshot:
        return ShotTelemetrySnapshot(
            shots=self.shots,
            impacts=self.impacts,
            invalid_solutions=self.invalid_solutions,
            mean_miss=self.mean_miss,
            best_miss=self.best_miss if self.impacts else 0.0,
        )


__all__ = ["ShotTelemetry", "ShotTelemetrySnapshot"]
