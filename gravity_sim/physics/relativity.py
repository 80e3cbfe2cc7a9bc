"""Special- and weak-field general-relativistic scalars.

All functions are pure; speeds are given as fractions of light speed
(beta) or as vectors together with the light speed ``c`` of the scenario's
unit system.
"""

import numpy as np


# Largest beta the engine ever represents; keeps gamma finite in float64.
BETA_MAX = 1.0 - 1e-9

# Gravitational clock-rate factor never drops below this.
MIN_GRAVITATIONAL_FACTOR = 1e-3


def lorentz_factor(beta: float) -> float:
    """gamma = 1 / sqrt(1 - beta^2), for 0 <= beta < 1."""
    beta = float(beta)
    if not (0.0 <= beta < 1.0):
        raise ValueError(f"beta must be in [0, 1), got {beta}")
    return 1.0 / np.sqrt(1.0 - beta * beta)


def beta_of(velocity: np.ndarray, c: float) -> float:
    return float(np.linalg.norm(velocity) / c)


def cap_speed(velocity: np.ndarray, c: float, beta_max: float = BETA_MAX) -> np.ndarray:
    """Scale velocity down so that |v| <= beta_max * c."""
    velocity = np.asarray(velocity, dtype=float)
    speed = np.linalg.norm(velocity)
    limit = beta_max * c
    if speed > limit:
        return velocity * (limit / speed)
    return velocity


def celerity(velocity: np.ndarray, c: float) -> np.ndarray:
    """Proper velocity u = gamma * v."""
    velocity = cap_speed(velocity, c)
    return lorentz_factor(beta_of(velocity, c)) * velocity


def velocity_from_celerity(u: np.ndarray, c: float) -> np.ndarray:
    """Inverse of celerity: v = u / sqrt(1 + |u|^2 / c^2), always below c."""
    u = np.asarray(u, dtype=float)
    return u / np.sqrt(1.0 + np.dot(u, u) / (c * c))


def length_contraction(gamma: float) -> float:
    return 1.0 / gamma


def schwarzschild_radius(mass: float, G: float, c: float) -> float:
    """r_s = 2GM / c^2."""
    return 2.0 * G * mass / (c * c)


def gravitational_time_factor(
    position: np.ndarray,
    source_positions: np.ndarray,
    source_masses: np.ndarray,
    G: float,
    c: float,
) -> float:
    """Weak-field clock rate sqrt(1 - 2 * sum(G M_j / r_j) / c^2).

    Each source contributes with its distance clamped to just outside its
    Schwarzschild radius, and the result is clamped to
    [MIN_GRAVITATIONAL_FACTOR, 1] so the factor stays defined at the horizon.
    """
    source_positions = np.asarray(source_positions, dtype=float).reshape(-1, 3)
    source_masses = np.asarray(source_masses, dtype=float).reshape(-1)
    if source_masses.size == 0:
        return 1.0
    r = np.linalg.norm(source_positions - np.asarray(position, dtype=float), axis=1)
    r_s = 2.0 * G * source_masses / (c * c)
    r_safe = np.maximum(r, np.maximum(r_s * (1.0 + 1e-9), 1e-12))
    potential = np.sum(G * source_masses / r_safe)
    arg = 1.0 - 2.0 * potential / (c * c)
    factor = np.sqrt(max(arg, MIN_GRAVITATIONAL_FACTOR ** 2))
    return float(min(factor, 1.0))


def doppler_factor(beta: float, cos_theta: float) -> float:
    """Frequency ratio f_observed / f_emitted for a moving observer.

    cos_theta is the cosine between the observer's velocity and the
    direction it looks in. Looking straight ahead (cos_theta = 1) gives the
    forward blueshift sqrt((1 + beta) / (1 - beta)).
    """
    gamma = lorentz_factor(beta)
    return 1.0 / (gamma * (1.0 - beta * cos_theta))


def aberrated_cosine(beta: float, cos_theta: float) -> float:
    """Apparent direction cosine in the moving frame.

    cos_theta' = (cos_theta + beta) / (1 + beta * cos_theta)
    """
    return (cos_theta + beta) / (1.0 + beta * cos_theta)


def aberration_compression(beta: float, cos_theta: float) -> float:
    """Solid-angle compression factor dOmega_rest / dOmega_moving = D^2."""
    return doppler_factor(beta, cos_theta) ** 2
