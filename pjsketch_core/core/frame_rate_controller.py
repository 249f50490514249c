from __future__ import annotations

from dataclasses import dataclass


@dataclass
class FrameRateController:
    """Frame cadence shared between the sketch and the loop that drives it.

    ``target_fps == 0`` pauses the loop (``no_loop``); any positive value resumes it.
    """

    target_fps: float
    _next_present_at: float | None = None

    def __post_init__(self) -> None:
        if self.target_fps < 0:
            raise ValueError("target_fps must be >= 0")

    @property
    def paused(self) -> bool:
        return self.target_fps == 0

    @property
    def target_dt(self) -> float:
        if self.paused:
            return float("inf")
        return 1.0 / float(self.target_fps)

    def set_target_fps(self, fps: float) -> None:
        if fps < 0:
            raise ValueError("target_fps must be >= 0")
        self.target_fps = fps
        self._next_present_at = None

    def should_present(self, now: float) -> bool:
        if self.paused:
            return False
        if self._next_present_at is None:
            self._next_present_at = now
        if now < self._next_present_at:
            return False
        dt = self.target_dt
        while self._next_present_at <= now:
            self._next_present_at += dt
        return True

    def compute_sleep(self, loop_started_at: float, loop_finished_at: float, throttle_multiplier: float = 1.0) -> float:
        if throttle_multiplier <= 0:
            raise ValueError("throttle_multiplier must be > 0")
        if self.paused:
            return 0.0
        elapsed = max(0.0, loop_finished_at - loop_started_at)
        return max(0.0, (self.target_dt * throttle_multiplier) - elapsed)
