"""Aggregate simulation state owned by the simulation loop."""

from dataclasses import dataclass
from typing import Optional
import numpy as np

from gravity_sim.physics.nbody import NBodySystem
from gravity_sim.physics.spaceship import ShipState


@dataclass
class SimulationState:
    """Everything one step reads and writes.

    Several instances may coexist; nothing here is global. ``copy`` gives a
    fully independent value, which is what the simulator keeps as its
    rollback point before each step.
    """
    system: NBodySystem
    G: float = 1.0
    softening: float = 0.1
    time: float = 0.0
    time_scale: float = 1.0
    paused: bool = False
    speed_of_light: float = np.inf
    step_count: int = 0
    ship: Optional[ShipState] = None

    def copy(self) -> "SimulationState":
        return SimulationState(
            system=self.system.copy(),
            G=self.G,
            softening=self.softening,
            time=self.time,
            time_scale=self.time_scale,
            paused=self.paused,
            speed_of_light=self.speed_of_light,
            step_count=self.step_count,
            ship=self.ship.copy() if self.ship is not None else None,
        )

    def equals(self, other: "SimulationState") -> bool:
        """Exact equality of the physical state (used to verify rollbacks)."""
        if not self.system.equals(other.system):
            return False
        scalars = (self.G, self.softening, self.time, self.time_scale, self.paused,
                   self.speed_of_light, self.step_count)
        other_scalars = (other.G, other.softening, other.time, other.time_scale, other.paused,
                         other.speed_of_light, other.step_count)
        if scalars != other_scalars:
            return False
        if (self.ship is None) != (other.ship is None):
            return False
        if self.ship is None:
            return True
        a, b = self.ship, other.ship
        return (
            a.index == b.index
            and np.array_equal(a.orientation, b.orientation)
            and np.array_equal(a.throttle, b.throttle)
            and np.array_equal(a.angular_rate, b.angular_rate)
            and (a.fuel, a.beta, a.gamma, a.gravitational_factor, a.proper_time, a.coordinate_time)
            == (b.fuel, b.beta, b.gamma, b.gravitational_factor, b.proper_time, b.coordinate_time)
        )
