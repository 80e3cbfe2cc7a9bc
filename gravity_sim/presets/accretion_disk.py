"""Thin disk of light satellites on circular orbits around a fixed heavy center."""

from typing import List, Tuple
import numpy as np

from gravity_sim.errors import ConfigurationError
from gravity_sim.physics.nbody import Body
from gravity_sim.presets.base import PresetHints
from gravity_sim.presets.utils import circular_velocity, generate_disk_particles, tangential_directions


SEED = 42


def generate_accretion_disk(
    n_particles: int = 500,
    central_mass: float = 50000.0,
    r_min: float = 2.0,
    r_max: float = 17.0,
    thickness: float = 0.5,
    speed_jitter: float = 0.0,
    G: float = 100.0,
    seed: int = SEED,
) -> Tuple[List[Body], PresetHints]:
    """Generate a fixed central mass surrounded by ``n_particles`` satellites.

    Radii are uniform in [r_min, r_max]; heights fall off linearly towards
    the outer edge. Each satellite moves tangentially at sqrt(G M / r),
    with r its full 3D distance to the center, optionally scaled by a
    uniform factor in [1 - speed_jitter, 1 + speed_jitter].

    Args:
        n_particles: Number of satellites
        central_mass: Mass of the fixed center
        r_min: Inner disk radius
        r_max: Outer disk radius
        thickness: Peak-to-peak height at the inner edge
        speed_jitter: Relative speed perturbation (0 = exact circular speed)
        G: Gravitational constant
        seed: Random seed

    Returns:
        Tuple of (bodies, hints)

    Raises:
        ConfigurationError: If speed_jitter is outside [0, 1)
    """
    if not 0.0 <= speed_jitter < 1.0:
        raise ConfigurationError(f"speed_jitter must be in [0, 1), got {speed_jitter}")
    rng = np.random.default_rng(seed)

    radii, angles = generate_disk_particles(n_particles, r_min, r_max, rng)
    heights = (rng.random(n_particles) - 0.5) * thickness * (1.0 - radii / (r_max + 3.0))
    masses = 5.0 + rng.random(n_particles) * 10.0
    jitter = 1.0 + speed_jitter * (2.0 * rng.random(n_particles) - 1.0)

    positions = np.column_stack([radii * np.cos(angles), heights, radii * np.sin(angles)])
    distances = np.linalg.norm(positions, axis=1)
    speeds = circular_velocity(distances, central_mass, G) * jitter
    velocities = tangential_directions(angles) * speeds[:, np.newaxis]

    bodies = [Body(
        mass=central_mass,
        radius=0.8,
        color=(1.0, 0.9, 0.3, 1.0),
        fixed=True,
        name="Center",
    )]
    span = r_max - r_min
    for i in range(n_particles):
        t = (radii[i] - r_min) / span if span > 0.0 else 0.0
        bodies.append(Body(
            mass=float(masses[i]),
            position=tuple(positions[i]),
            velocity=tuple(velocities[i]),
            radius=0.08,
            color=(1.0 - 0.3 * t, 0.5 + 0.3 * t, 0.2 + 0.6 * t, 0.9),
        ))

    hints = PresetHints(
        name="accretion_disk",
        G=G,
        softening=0.1,
        time_scale=0.1,
        max_dt=0.002,
        substeps=4,
        camera_distance=40.0,
    )
    return bodies, hints
