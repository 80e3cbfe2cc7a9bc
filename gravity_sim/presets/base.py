"""Preset kinds, rendering/clock hints and the state-building boundary."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple
import numpy as np

from gravity_sim.errors import DegenerateConfiguration
from gravity_sim.physics.nbody import Body, NBodySystem
from gravity_sim.physics.spaceship import ShipState
from gravity_sim.physics.state import SimulationState


class PresetKind(Enum):
    """Named scenarios the simulator can load."""
    SOLAR_SYSTEM = "solar_system"
    ACCRETION_DISK = "accretion_disk"
    GALAXY_COLLISION = "galaxy_collision"
    TWO_BODY = "two_body"

    @classmethod
    def names(cls):
        return [kind.value for kind in cls]


@dataclass(frozen=True)
class PresetHints:
    """Recommended physical constants and view settings for a preset.

    Attributes:
        name: Preset name
        G: Gravitational constant in the preset's units
        softening: Plummer softening length
        time_scale: Initial simulated time per wall-clock second
        max_dt: Upper bound on simulated time per frame
        substeps: Integrator sub-steps per frame
        speed_of_light: c in the preset's units (inf = Newtonian only)
        camera_focus: Point the camera should look at
        camera_distance: Suggested camera distance from the focus
        ship_max_acceleration: Full-throttle proper acceleration of the ship
        ship_max_angular_rate: Full-rate rotation speed of the ship (rad per time unit)
        ship_fuel_consumption: Fuel fraction burned per time unit at full throttle
            (0 = unlimited)
        black_hole: Optional body the host can toggle into the scene
    """
    name: str
    G: float
    softening: float
    time_scale: float = 1.0
    max_dt: float = 0.01
    substeps: int = 4
    speed_of_light: float = float("inf")
    camera_focus: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    camera_distance: float = 50.0
    ship_max_acceleration: float = 1.0
    ship_max_angular_rate: float = 1.0
    ship_fuel_consumption: float = 0.001
    black_hole: Optional[Body] = None


def validate_bodies(bodies: Sequence[Body], G: float, softening: float):
    """Reject non-physical scenario parameters.

    Raises:
        DegenerateConfiguration: On non-positive or non-finite mass, G or
            softening, non-finite vectors, or more than one ship.
    """
    if not np.isfinite(G) or G <= 0.0:
        raise DegenerateConfiguration(f"G must be positive and finite, got {G}")
    if not np.isfinite(softening) or softening <= 0.0:
        raise DegenerateConfiguration(f"Softening must be positive and finite, got {softening}")

    n_ships = 0
    for i, body in enumerate(bodies):
        label = body.name or f"body {i}"
        if not np.isfinite(body.mass) or body.mass <= 0.0:
            raise DegenerateConfiguration(f"{label}: mass must be positive and finite, got {body.mass}")
        if not (np.all(np.isfinite(body.position)) and np.all(np.isfinite(body.velocity))):
            raise DegenerateConfiguration(f"{label}: position and velocity must be finite")
        if body.is_ship:
            n_ships += 1
    if n_ships > 1:
        raise DegenerateConfiguration(f"At most one ship per scenario, got {n_ships}")


def build_state(bodies: Sequence[Body], hints: PresetHints) -> SimulationState:
    """Validate a body list and wrap it in a fresh SimulationState."""
    validate_bodies(bodies, hints.G, hints.softening)
    system = NBodySystem.from_bodies(bodies)
    state = SimulationState(
        system=system,
        G=hints.G,
        softening=hints.softening,
        time_scale=hints.time_scale,
        speed_of_light=hints.speed_of_light,
    )
    if system.ship_index is not None:
        state.ship = ShipState(
            index=system.ship_index,
            max_acceleration=hints.ship_max_acceleration,
            max_angular_rate=hints.ship_max_angular_rate,
            fuel_consumption=hints.ship_fuel_consumption,
        )
    return state
