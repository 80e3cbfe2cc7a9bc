"""Diagnostics for N-body simulations."""

from typing import Tuple
import numpy as np

from gravity_sim.physics.force_calculator import ForceCalculator


class Diagnostics:
    """Compute consistent energy diagnostics matching the force law."""

    def __init__(self, G: float = 1.0, epsilon: float = 0.1, force_calculator: ForceCalculator = None):
        """Initialize diagnostics.

        Args:
            G: Gravitational constant
            epsilon: Softening parameter (must match force calculation)
            force_calculator: Source of the softened potential
        """
        self.G = G
        self.epsilon = epsilon
        self.force_calculator = force_calculator or ForceCalculator()

    @classmethod
    def for_state(cls, state) -> "Diagnostics":
        return cls(G=state.G, epsilon=state.softening)

    def compute_energies(self, positions, velocities, masses) -> Tuple[float, float, float]:
        """Compute kinetic, potential, and total energy using consistent potential.

        Potential uses the same Plummer softening as force law:
        U = -G * sum_{i<j} m_i * m_j / sqrt(r_ij^2 + eps^2)

        Returns:
            Tuple of (kinetic_energy, potential_energy, total_energy)
        """
        velocities = np.asarray(velocities, dtype=np.float64)
        masses = np.asarray(masses, dtype=np.float64).flatten()

        # Kinetic energy: K = 0.5 * sum m_i * v_i^2
        v_sq = np.sum(velocities ** 2, axis=1)
        K = 0.5 * np.sum(masses * v_sq)
        U = self.force_calculator.compute_potential_energy(positions, masses, G=self.G, epsilon=self.epsilon)
        return float(K), float(U), float(K + U)

    def compute_angular_momentum(self, positions, velocities, masses) -> np.ndarray:
        """Total angular momentum L = sum m_i * (r_i x v_i)."""
        positions = np.asarray(positions, dtype=np.float64)
        velocities = np.asarray(velocities, dtype=np.float64)
        masses = np.asarray(masses, dtype=np.float64).flatten()
        if masses.size == 0:
            return np.zeros(3)
        return np.sum(masses[:, np.newaxis] * np.cross(positions, velocities), axis=0)

    def compute_virial_ratio(self, positions, velocities, masses) -> float:
        """Compute virial ratio Q = 2K / |U|."""
        K, U, _ = self.compute_energies(positions, velocities, masses)
        if abs(U) < 1e-10:
            return float('inf')
        return float(2.0 * K / abs(U))

    def summary(self, system) -> dict:
        """Energies and angular momentum of a Body Store in one dict."""
        K, U, E = self.compute_energies(system.positions, system.velocities, system.masses)
        L = self.compute_angular_momentum(system.positions, system.velocities, system.masses)
        return {
            "kinetic": K,
            "potential": U,
            "total": E,
            "angular_momentum": L,
            "angular_momentum_magnitude": float(np.linalg.norm(L)),
        }


def relative_drift(initial: float, current: float) -> float:
    """|current - initial| / |initial|, or the absolute change when initial is 0."""
    if initial == 0.0:
        return abs(current)
    return abs(current - initial) / abs(initial)
