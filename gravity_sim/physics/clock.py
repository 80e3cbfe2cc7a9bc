"""Wall-time to simulation-time scaling, pause state and step cadence."""

from enum import Enum
import logging
from typing import List

import numpy as np


logger = logging.getLogger(__name__)

MIN_TIME_SCALE = 1e-6
MAX_TIME_SCALE = 1e6


class ClockMode(Enum):
    RUNNING = "running"
    PAUSED = "paused"


class SimulationClock:
    """Turns a frame's wall-clock delta into integrator sub-steps.

    The frame's simulated time is ``wall_dt * time_scale``, clamped to
    ``max_dt`` (large steps at high time scales blow up the integrator),
    then split evenly into ``substeps`` integrator steps. The clamped-off
    time is dropped, not carried over to later frames.

    The time scale and pause flag live on the SimulationState; the clock
    only reads and changes them.
    """

    def __init__(self, max_dt: float = 0.01, substeps: int = 4):
        if not np.isfinite(max_dt) or max_dt <= 0.0:
            raise ValueError(f"max_dt must be positive and finite, got {max_dt}")
        if substeps < 1:
            raise ValueError(f"substeps must be >= 1, got {substeps}")
        self.max_dt = float(max_dt)
        self.substeps = int(substeps)

    def mode(self, state) -> ClockMode:
        return ClockMode.PAUSED if state.paused else ClockMode.RUNNING

    def frame_steps(self, state, wall_dt: float) -> List[float]:
        """Sub-step sizes to integrate for one frame (empty while paused)."""
        if state.paused:
            return []
        wall_dt = float(wall_dt)
        if not np.isfinite(wall_dt) or wall_dt <= 0.0:
            return []
        dt = wall_dt * state.time_scale
        if dt > self.max_dt:
            logger.warning(
                "Frame dt %.4g (wall %.4g x scale %.4g) clamped to %.4g",
                dt, wall_dt, state.time_scale, self.max_dt,
            )
            dt = self.max_dt
        sub_dt = dt / self.substeps
        return [sub_dt] * self.substeps

    def pause(self, state):
        state.paused = True

    def resume(self, state):
        state.paused = False

    def toggle(self, state):
        state.paused = not state.paused

    def scale_time(self, state, factor: float) -> float:
        """Multiply the time scale by ``factor``; returns the new scale."""
        factor = float(factor)
        if not np.isfinite(factor) or factor <= 0.0:
            raise ValueError(f"Time scale factor must be positive and finite, got {factor}")
        state.time_scale = float(np.clip(state.time_scale * factor, MIN_TIME_SCALE, MAX_TIME_SCALE))
        logger.info("Time scale: %.4gx", state.time_scale)
        return state.time_scale
