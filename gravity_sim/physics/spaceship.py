"""Relativistic kinematics for the powered ship body.

The ship is an ordinary body in the Body Store (it feels and exerts gravity).
This module adds what only the ship has: an orientation, player thrust and
rotation intents, and the relativistic scalars derived from its motion.

Per sub-step the simulator calls ``apply_controls`` before the gravity step
and ``update`` after it.
"""

from dataclasses import dataclass, field
from typing import Optional
import logging
import numpy as np

from gravity_sim.physics import quaternion
from gravity_sim.physics.relativity import (
    cap_speed,
    beta_of,
    lorentz_factor,
    celerity,
    velocity_from_celerity,
    gravitational_time_factor,
    doppler_factor,
    aberration_compression,
)


logger = logging.getLogger(__name__)


# Body-frame axes: x = right, y = up, z = forward.
THRUST_AXES = {"right": 0, "up": 1, "forward": 2}
ROTATION_AXES = {"pitch": 0, "yaw": 1, "roll": 2}


@dataclass
class ShipState:
    """Orientation, control intents and derived relativistic state of the ship."""
    index: int
    orientation: np.ndarray = field(default_factory=lambda: quaternion.IDENTITY.copy())
    throttle: np.ndarray = field(default_factory=lambda: np.zeros(3))
    angular_rate: np.ndarray = field(default_factory=lambda: np.zeros(3))
    max_acceleration: float = 1.0
    max_angular_rate: float = 1.0
    # Fraction of the tank left, and what full throttle burns per time unit
    fuel: float = 1.0
    fuel_consumption: float = 0.001

    # Derived every step; not set by callers.
    beta: float = 0.0
    gamma: float = 1.0
    gravitational_factor: float = 1.0
    proper_time: float = 0.0
    coordinate_time: float = 0.0

    def forward(self) -> np.ndarray:
        return quaternion.rotate(self.orientation, [0.0, 0.0, 1.0])

    def right(self) -> np.ndarray:
        return quaternion.rotate(self.orientation, [1.0, 0.0, 0.0])

    def up(self) -> np.ndarray:
        return quaternion.rotate(self.orientation, [0.0, 1.0, 0.0])

    @property
    def time_dilation_factor(self) -> float:
        """d(tau)/dt, combining kinematic and gravitational dilation."""
        return self.gravitational_factor / self.gamma

    @property
    def length_contraction(self) -> float:
        return 1.0 / self.gamma

    def copy(self) -> "ShipState":
        return ShipState(
            index=self.index,
            orientation=self.orientation.copy(),
            throttle=self.throttle.copy(),
            angular_rate=self.angular_rate.copy(),
            max_acceleration=self.max_acceleration,
            max_angular_rate=self.max_angular_rate,
            fuel=self.fuel,
            fuel_consumption=self.fuel_consumption,
            beta=self.beta,
            gamma=self.gamma,
            gravitational_factor=self.gravitational_factor,
            proper_time=self.proper_time,
            coordinate_time=self.coordinate_time,
        )


class SpaceshipKinematics:
    """Applies ship intents and derives gamma, tau and the view scalars."""

    @staticmethod
    def set_throttle(ship: ShipState, axis: str, magnitude: float):
        """Hold a throttle level in [-1, 1] along a body axis until changed."""
        if axis not in THRUST_AXES:
            raise ValueError(f"Unknown thrust axis: {axis!r}. Available: {list(THRUST_AXES)}")
        ship.throttle[THRUST_AXES[axis]] = float(np.clip(magnitude, -1.0, 1.0))

    @staticmethod
    def set_rotation(ship: ShipState, axis: str, magnitude: float):
        """Hold a rotation rate (fraction of max_angular_rate) about a body axis."""
        if axis not in ROTATION_AXES:
            raise ValueError(f"Unknown rotation axis: {axis!r}. Available: {list(ROTATION_AXES)}")
        ship.angular_rate[ROTATION_AXES[axis]] = float(np.clip(magnitude, -1.0, 1.0)) * ship.max_angular_rate

    def apply_controls(self, state, dt: float):
        """Rotate the ship and apply thrust ahead of the gravity term.

        Thrust is a proper acceleration added to the celerity u = gamma * v,
        then mapped back to a velocity, so |v| < c holds by construction.
        Thrust burns fuel in proportion to |throttle| * dt; with an empty
        tank only rotation still works.
        """
        ship = state.ship
        if ship is None:
            return
        if np.any(ship.angular_rate):
            dq = quaternion.from_rotation_vector(ship.angular_rate * dt)
            ship.orientation = quaternion.normalize(quaternion.multiply(ship.orientation, dq))

        system = state.system
        if not np.any(ship.throttle) or system.fixed[ship.index] or ship.fuel <= 0.0:
            return
        c = state.speed_of_light
        thrust = quaternion.rotate(ship.orientation, ship.throttle) * ship.max_acceleration
        u = celerity(system.velocities[ship.index], c) + thrust * dt
        system.velocities[ship.index] = cap_speed(velocity_from_celerity(u, c), c)

        ship.fuel = max(ship.fuel - ship.fuel_consumption * float(np.linalg.norm(ship.throttle)) * dt, 0.0)
        if ship.fuel == 0.0:
            logger.info("Ship out of fuel at t=%.4g", state.time)

    def update(self, state, dt: float):
        """Re-derive beta/gamma after the gravity term and advance proper time."""
        ship = state.ship
        if ship is None:
            return
        self.refresh(state)
        ship.proper_time += dt * ship.time_dilation_factor
        ship.coordinate_time += dt

    def refresh(self, state):
        """Recompute beta, gamma and the gravitational factor from the body store."""
        ship = state.ship
        if ship is None:
            return
        system = state.system
        c = state.speed_of_light
        idx = ship.index
        system.velocities[idx] = cap_speed(system.velocities[idx], c)
        ship.beta = beta_of(system.velocities[idx], c)
        ship.gamma = lorentz_factor(ship.beta)

        others = np.arange(system.n_bodies) != idx
        ship.gravitational_factor = gravitational_time_factor(
            system.positions[idx],
            system.positions[others],
            system.masses[others],
            state.G,
            c,
        )

    def view_scalars(self, state) -> Optional[dict]:
        """Doppler/aberration parameters for the ship's forward view.

        Returns None when the scenario has no ship.
        """
        ship = state.ship
        if ship is None:
            return None
        velocity = state.system.velocities[ship.index]
        forward = ship.forward()
        speed = np.linalg.norm(velocity)
        cos_theta = float(np.dot(velocity, forward) / speed) if speed > 0.0 else 1.0
        cos_theta = float(np.clip(cos_theta, -1.0, 1.0))
        return {
            "beta_forward": ship.beta * cos_theta,
            "forward_doppler": doppler_factor(ship.beta, cos_theta),
            "aberration_compression": aberration_compression(ship.beta, cos_theta),
        }
