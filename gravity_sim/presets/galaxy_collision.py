"""Two black-hole-anchored disks on a fly-by trajectory."""

from typing import List, Tuple
import numpy as np

from gravity_sim.physics import quaternion
from gravity_sim.physics.nbody import Body
from gravity_sim.presets.base import PresetHints
from gravity_sim.presets.utils import generate_disk_particles, softened_circular_velocity, tangential_directions


SEED = 7
SOFTENING = 0.3

# center, center-of-mass velocity, disk color
GALAXIES = [
    ((-15.0, 2.0, 0.0), (1.0, -0.2, 0.5), (0.4, 0.6, 1.0, 1.0)),
    ((15.0, -2.0, 0.0), (-1.0, 0.2, -0.5), (1.0, 0.6, 0.4, 1.0)),
]


def generate_galaxy_collision(
    particles_per_galaxy: int = 300,
    black_hole_mass: float = 30000.0,
    r_min: float = 1.0,
    r_max: float = 9.0,
    G: float = 100.0,
    seed: int = SEED,
) -> Tuple[List[Body], PresetHints]:
    """Generate two galaxies, each a central black hole plus a rotating disk.

    Disk particles orbit their own black hole at the local circular speed of
    the softened point-mass potential; each disk is tilted by a random angle
    and the whole galaxy moves with its center-of-mass velocity.

    Returns:
        Tuple of (bodies, hints)
    """
    rng = np.random.default_rng(seed)
    bodies = []

    for g, (center, center_vel, color) in enumerate(GALAXIES):
        center = np.asarray(center)
        center_vel = np.asarray(center_vel)
        bodies.append(Body(
            mass=black_hole_mass,
            position=tuple(center),
            velocity=tuple(center_vel),
            radius=1.5,
            color=(1.0, 1.0, 0.9, 1.0),
            name=f"Black Hole {g + 1}",
        ))

        axis_tilt = rng.random() * 0.3
        radii, angles = generate_disk_particles(particles_per_galaxy, r_min, r_max, rng)
        heights = (rng.random(particles_per_galaxy) - 0.5) * 0.3
        masses = 3.0 + rng.random(particles_per_galaxy) * 10.0

        flat_pos = np.column_stack([radii * np.cos(angles), heights, radii * np.sin(angles)])
        speeds = softened_circular_velocity(radii, black_hole_mass, G, SOFTENING)
        flat_vel = tangential_directions(angles) * speeds[:, np.newaxis]

        # Tilt the whole disk about the x axis; orbits stay circular
        tilt = quaternion.rotation_matrix(quaternion.from_axis_angle([1.0, 0.0, 0.0], axis_tilt))
        local_pos = flat_pos @ tilt.T
        local_vel = flat_vel @ tilt.T

        positions = center + local_pos
        velocities = center_vel + local_vel
        for i in range(particles_per_galaxy):
            bodies.append(Body(
                mass=float(masses[i]),
                position=tuple(positions[i]),
                velocity=tuple(velocities[i]),
                radius=0.1,
                color=color,
            ))

    hints = PresetHints(
        name="galaxy_collision",
        G=G,
        softening=SOFTENING,
        time_scale=0.05,
        max_dt=0.001,
        substeps=4,
        camera_distance=60.0,
    )
    return bodies, hints
