"""Circular binary in its center-of-mass frame."""

from typing import List, Tuple
import numpy as np

from gravity_sim.errors import DegenerateConfiguration
from gravity_sim.physics.nbody import Body
from gravity_sim.presets.base import PresetHints


def generate_two_body(
    primary_mass: float = 1000.0,
    secondary_mass: float = 1.0,
    separation: float = 10.0,
    G: float = 1.0,
    softening: float = 0.01,
) -> Tuple[List[Body], PresetHints]:
    """Generate a circular binary orbiting in the x-z plane.

    The relative speed is the circular speed of the softened force law,
    v^2 = G (m1 + m2) r^2 / (r^2 + eps^2)^(3/2), so the orbit stays circular
    for any softening. Both bodies start on the x axis with zero total
    momentum.

    Returns:
        Tuple of (bodies, hints)

    Raises:
        DegenerateConfiguration: If a mass, the separation, G or the softening
            is not positive and finite
    """
    for label, value in (('primary_mass', primary_mass), ('secondary_mass', secondary_mass),
                         ('separation', separation), ('G', G), ('softening', softening)):
        if not np.isfinite(value) or value <= 0.0:
            raise DegenerateConfiguration(f"{label} must be positive and finite, got {value}")

    total = primary_mass + secondary_mass
    r = separation
    v_rel = np.sqrt(G * total * r ** 2 / (r ** 2 + softening ** 2) ** 1.5)

    # Positions and velocities about the center of mass
    x1 = -secondary_mass / total * r
    x2 = primary_mass / total * r
    v1 = -secondary_mass / total * v_rel
    v2 = primary_mass / total * v_rel

    bodies = [
        Body(mass=primary_mass, position=(x1, 0.0, 0.0), velocity=(0.0, 0.0, v1),
             radius=0.5, color=(1.0, 0.9, 0.4, 1.0), name="Primary"),
        Body(mass=secondary_mass, position=(x2, 0.0, 0.0), velocity=(0.0, 0.0, v2),
             radius=0.2, color=(0.4, 0.6, 1.0, 1.0), name="Secondary"),
    ]

    period = 2.0 * np.pi * r / v_rel if v_rel > 0.0 else np.inf
    hints = PresetHints(
        name="two_body",
        G=G,
        softening=softening,
        time_scale=1.0,
        max_dt=period / 100.0 if np.isfinite(period) else 0.01,
        substeps=4,
        camera_distance=3.0 * r,
    )
    return bodies, hints
