"""Abstract base class for numerical integrators."""

from abc import ABC, abstractmethod
from typing import Optional
import numpy as np

from gravity_sim.errors import NumericDivergence
from gravity_sim.physics.force_calculator import ForceCalculator


class Integrator(ABC):
    """Abstract interface for numerical integrators.

    ``step`` either advances the whole state by ``dt`` or leaves it
    untouched: new positions and velocities are computed off to the side and
    only committed once they are all finite.
    """

    def __init__(self, force_calculator: Optional[ForceCalculator] = None):
        self.force_calculator = force_calculator or ForceCalculator()

    @abstractmethod
    def step(self, state, dt: float) -> None:
        """Advance every non-fixed body by dt and the clock by dt.

        Args:
            state: SimulationState to advance in place
            dt: Time step (positive, finite)

        Raises:
            ValueError: If dt is not positive and finite
            NumericDivergence: If the step produced NaN/Inf (state unchanged)
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this integrator."""
        pass

    @property
    @abstractmethod
    def order(self) -> int:
        """Return the order of accuracy (1 for Euler, 2 for leapfrog)."""
        pass

    def accelerations(self, state, positions: np.ndarray) -> np.ndarray:
        system = state.system
        return self.force_calculator.compute_accelerations(
            positions,
            system.masses,
            G=state.G,
            epsilon=state.softening,
            fixed=system.fixed,
        )

    @staticmethod
    def check_dt(dt: float) -> float:
        dt = float(dt)
        if not np.isfinite(dt) or dt <= 0.0:
            raise ValueError(f"dt must be positive and finite, got {dt}")
        return dt

    def commit(self, state, new_positions: np.ndarray, new_velocities: np.ndarray, dt: float):
        """Write a finished step into the state, or raise without writing."""
        finite = np.all(np.isfinite(new_positions), axis=1) & np.all(np.isfinite(new_velocities), axis=1)
        if not np.all(finite):
            bad = np.flatnonzero(~finite)
            raise NumericDivergence(
                f"{self.name} step at t={state.time:.6g} (dt={dt:.3g}) produced non-finite "
                f"state for bodies {bad.tolist()}",
                bad_bodies=bad.tolist(),
            )
        state.system.set_state(new_positions, new_velocities)
        state.time += dt
        state.step_count += 1
