"""Frame loop driving simulation ticks and rendering."""
from __future__ import annotations

import time
from typing import Callable, Optional


class FrameLoop:
    """Runs update ticks and renders once per frame.

    With ``fixed_hz`` set, measured frame time is fed into an accumulator and
    drained in fixed ``1 / fixed_hz`` ticks. With ``fixed_hz`` of ``None`` or
    ``0`` each frame becomes a single tick of the measured duration. Frame
    time is clamped to ``max_frame_time`` in both modes.
    """

    def __init__(
        self,
        update: Callable[[float], None],
        render: Callable[[float], None],
        process_events: Callable[[], None],
        fixed_hz: Optional[float] = 60.0,
        max_frame_time: float = 0.25,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.update = update
        self.render = render
        self.process_events = process_events
        self.fixed_dt = 1.0 / fixed_hz if fixed_hz else None
        self.max_frame_time = max_frame_time
        self.clock = clock
        self.frames = 0
        self.ticks = 0
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        self._running = False

    def run(self, max_frames: Optional[int] = None) -> None:
        self._running = True
        accumulator = 0.0
        last_time = self.clock()
        while self._running:
            now = self.clock()
            frame_time = min(now - last_time, self.max_frame_time)
            last_time = now
            self.process_events()
            if not self._running:
                break
            if self.fixed_dt is None:
                alpha = 0.0
                if frame_time > 0.0:
                    self.update(frame_time)
                    self.ticks += 1
            else:
                accumulator += frame_time
                while accumulator >= self.fixed_dt:
                    self.update(self.fixed_dt)
                    self.ticks += 1
                    accumulator -= self.fixed_dt
                alpha = accumulator / self.fixed_dt
            self.render(alpha)
            self.frames += 1
            if max_frames is not None and self.frames >= max_frames:
                self._running = False


__all__ = ["FrameLoop"]
