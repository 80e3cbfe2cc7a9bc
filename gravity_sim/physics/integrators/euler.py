"""Semi-implicit Euler integrator (baseline, O(h) accuracy)."""

import numpy as np

from gravity_sim.physics.integrators.base import Integrator


class EulerIntegrator(Integrator):
    """Semi-implicit (symplectic) Euler: kick with a(x), then drift with v_new.

    Cheap but first order; orbits visibly precess and their energy wanders
    within tens of orbits. Kept as a baseline for comparison with leapfrog.
    """

    @property
    def name(self) -> str:
        return "euler"

    @property
    def order(self) -> int:
        return 1

    def step(self, state, dt: float) -> None:
        dt = self.check_dt(dt)
        system = state.system
        movable = system.movable[:, np.newaxis]

        with np.errstate(invalid="ignore", over="ignore"):
            acc = self.accelerations(state, system.positions)
            new_velocities = system.velocities + np.where(movable, acc * dt, 0.0)
            new_positions = system.positions + np.where(movable, new_velocities * dt, 0.0)

        self.commit(state, new_positions, new_velocities, dt)
