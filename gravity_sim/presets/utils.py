"""Utility functions for scenario generation."""

import numpy as np
from typing import Tuple


def circular_velocity(r: np.ndarray, enclosed_mass: np.ndarray, G: float = 1.0) -> np.ndarray:
    """Calculate circular velocity from enclosed mass.

    v_circ(r) = sqrt(G * M_enc(r) / r)

    Args:
        r: Radial distances
        enclosed_mass: Enclosed mass at each radius
        G: Gravitational constant

    Returns:
        Circular velocity at each radius
    """
    # Avoid division by zero
    r_safe = np.maximum(r, 1e-6)
    return np.sqrt(G * enclosed_mass / r_safe)


def softened_circular_velocity(r: np.ndarray, mass: float, G: float = 1.0, eps: float = 0.0) -> np.ndarray:
    """Circular speed around a point mass under the Plummer-softened force law.

    v^2 / r = G * M * r / (r^2 + eps^2)^(3/2)
    """
    r = np.asarray(r, dtype=np.float64)
    return np.sqrt(G * mass * r ** 2 / (r ** 2 + eps ** 2) ** 1.5)


def vis_viva_speed(r: float, semi_major_axis: float, central_mass: float, G: float = 1.0) -> float:
    """Orbital speed at distance r on a Kepler orbit: v = sqrt(G M (2/r - 1/a))."""
    return float(np.sqrt(G * central_mass * (2.0 / r - 1.0 / semi_major_axis)))


def escape_speed(mass: float, radius: float, G: float = 1.0) -> float:
    """v_esc = sqrt(2 G M / R)."""
    return float(np.sqrt(2.0 * G * mass / radius))


def perihelion_state(
    semi_major_axis: float,
    eccentricity: float,
    angle: float,
    inclination: float,
    central_mass: float,
    G: float = 1.0,
) -> Tuple[np.ndarray, np.ndarray]:
    """Position and velocity of a body at perihelion, relative to its primary.

    The orbit lies in the x-z plane rotated by ``angle`` about y, tilted by
    ``inclination`` out of that plane. The body moves counter-clockwise
    seen from +y.

    Returns:
        Tuple of (position, velocity)
    """
    r_peri = semi_major_axis * (1.0 - eccentricity)
    speed = vis_viva_speed(r_peri, semi_major_axis, central_mass, G)

    radial = np.array([
        np.cos(angle) * np.cos(inclination),
        np.sin(inclination),
        np.sin(angle) * np.cos(inclination),
    ])
    tangential = np.array([-np.sin(angle), 0.0, np.cos(angle)])
    return r_peri * radial, speed * tangential


def generate_disk_particles(
    n: int,
    r_min: float,
    r_max: float,
    rng: np.random.Generator,
) -> Tuple[np.ndarray, np.ndarray]:
    """Uniform-in-radius ring sampling.

    Args:
        n: Number of particles
        r_min: Inner radius
        r_max: Outer radius
        rng: NumPy random generator

    Returns:
        Tuple of (radii, angles)
    """
    radii = r_min + rng.random(n) * (r_max - r_min)
    angles = rng.random(n) * 2.0 * np.pi
    return radii, angles


def tangential_directions(angles: np.ndarray) -> np.ndarray:
    """Unit vectors perpendicular to the radius in the x-z plane, (n, 3)."""
    return np.column_stack([-np.sin(angles), np.zeros_like(angles), np.cos(angles)])
