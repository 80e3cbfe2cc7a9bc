"""Sun and eight planets in AU / year / solar-mass units, with a launchable ship."""

from typing import List, Tuple
import numpy as np

from gravity_sim.errors import ConfigurationError
from gravity_sim.physics.nbody import Body
from gravity_sim.presets.base import PresetHints
from gravity_sim.presets.utils import escape_speed, perihelion_state


G_SOLAR = 4.0 * np.pi ** 2
SPEED_OF_LIGHT_AU_PER_YEAR = 63241.077

SUN = dict(name="Sun", mass=1.0, radius=0.00465, color=(1.0, 0.95, 0.8, 1.0))

# name, mass (M_sun), semi-major axis (AU), eccentricity, angle, inclination (rad), radius, color
PLANETS = [
    ("Mercury", 1.66e-7, 0.387, 0.2056, 0.0, 0.122, 0.0024, (0.7, 0.7, 0.7, 1.0)),
    ("Venus", 2.45e-6, 0.723, 0.0068, 0.8, 0.059, 0.006, (0.9, 0.7, 0.5, 1.0)),
    ("Earth", 3.0e-6, 1.0, 0.0167, 1.5, 0.0, 0.0064, (0.2, 0.4, 0.8, 1.0)),
    ("Mars", 3.23e-7, 1.524, 0.0934, 2.3, 0.032, 0.0034, (0.8, 0.4, 0.2, 1.0)),
    ("Jupiter", 9.55e-4, 5.203, 0.0489, 3.5, 0.023, 0.07, (0.9, 0.8, 0.6, 1.0)),
    ("Saturn", 2.86e-4, 9.537, 0.0565, 4.2, 0.043, 0.058, (0.9, 0.85, 0.6, 1.0)),
    ("Uranus", 4.37e-5, 19.19, 0.0457, 5.0, 0.013, 0.025, (0.6, 0.8, 0.9, 1.0)),
    ("Neptune", 5.15e-5, 30.07, 0.0113, 5.8, 0.031, 0.024, (0.3, 0.4, 0.8, 1.0)),
]

SHIP_MASS = 1e-20
SHIP_LAUNCH_BODY = "Earth"
SHIP_ESCAPE_MULTIPLE = 1.1

BLACK_HOLE_MASS = 10.0
BLACK_HOLE_POSITION = (50.0, 5.0, 30.0)
BLACK_HOLE_VELOCITY = (-2.0, -0.2, -1.0)


def black_hole_body(mass: float = BLACK_HOLE_MASS,
                    position=BLACK_HOLE_POSITION,
                    velocity=BLACK_HOLE_VELOCITY) -> Body:
    """A rogue stellar-mass black hole on a course through the inner system."""
    return Body(
        mass=mass,
        position=tuple(position),
        velocity=tuple(velocity),
        radius=mass ** 0.3 * 0.01,
        color=(0.0, 0.0, 0.0, 1.0),
        name="Black Hole",
    )


def generate_solar_system(with_ship: bool = True, ship_escape_multiple: float = SHIP_ESCAPE_MULTIPLE,
                          planets: int = len(PLANETS)) -> Tuple[List[Body], PresetHints]:
    """Generate the Sun, ``planets`` planets at perihelion and optionally a ship.

    Planets start at perihelion with the vis-viva speed of their real
    orbit. The ship starts just above Earth's surface (on the +y side)
    moving at ``ship_escape_multiple`` times Earth's escape speed along +y,
    on top of Earth's orbital velocity.

    Args:
        with_ship: Include the ship body
        ship_escape_multiple: Launch speed as a multiple of Earth's escape speed
        planets: How many planets to include, innermost first

    Returns:
        Tuple of (bodies, hints)

    Raises:
        ConfigurationError: If planets is out of range, or the ship is requested but
            Earth is left out
    """
    if not 0 <= planets <= len(PLANETS):
        raise ConfigurationError(f"planets must be in [0, {len(PLANETS)}], got {planets}")
    sun_mass = SUN["mass"]
    bodies = [Body(position=(0.0, 0.0, 0.0), velocity=(0.0, 0.0, 0.0), **SUN)]

    for name, mass, a, e, angle, incl, radius, color in PLANETS[:planets]:
        position, velocity = perihelion_state(a, e, angle, incl, sun_mass, G_SOLAR)
        bodies.append(Body(
            mass=mass,
            position=tuple(position),
            velocity=tuple(velocity),
            radius=radius,
            color=color,
            name=name,
        ))

    if with_ship:
        launch = next((b for b in bodies if b.name == SHIP_LAUNCH_BODY), None)
        if launch is None:
            raise ConfigurationError(f"Ship launch body {SHIP_LAUNCH_BODY!r} not in scenario (planets={planets})")
        v_launch = ship_escape_multiple * escape_speed(launch.mass, launch.radius, G_SOLAR)
        offset = np.array([0.0, launch.radius + 0.01, 0.0])
        bodies.append(Body(
            mass=SHIP_MASS,
            position=tuple(np.asarray(launch.position) + offset),
            velocity=tuple(np.asarray(launch.velocity) + np.array([0.0, v_launch, 0.0])),
            radius=0.02,
            color=(0.2, 0.8, 0.2, 1.0),
            is_ship=True,
            name="Ship",
        ))

    hints = PresetHints(
        name="solar_system",
        G=G_SOLAR,
        softening=1e-3,
        time_scale=0.5,
        max_dt=0.01,
        substeps=4,
        speed_of_light=SPEED_OF_LIGHT_AU_PER_YEAR,
        camera_focus=(0.0, 0.0, 0.0),
        camera_distance=5.0,
        ship_max_acceleration=1e4,
        ship_max_angular_rate=1.0,
        ship_fuel_consumption=0.05,
        black_hole=black_hole_body(),
    )
    return bodies, hints
