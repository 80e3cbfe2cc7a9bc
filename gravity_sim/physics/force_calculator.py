"""Pairwise Newtonian gravity with Plummer softening.

Direct O(n^2) summation over an (n, n, 3) separation tensor. Intended for
body counts in the low hundreds; no tree or mesh approximation.
"""

from typing import Optional
import numpy as np


class ForceCalculator:
    """Vectorized softened-gravity evaluation on NumPy arrays."""

    def compute_accelerations(
        self,
        positions: np.ndarray,
        masses: np.ndarray,
        G: float = 1.0,
        epsilon: float = 1e-3,
        fixed: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        """Compute gravitational acceleration on every body.

        a_i = sum_{j != i} G * m_j * (r_j - r_i) / (|r_j - r_i|^2 + eps^2)^(3/2)

        Fixed bodies act as sources but get a zero acceleration. With
        eps > 0 coincident bodies yield a finite (zero) pull; eps == 0 is not
        rejected here, so singular configurations come back as NaN/Inf for
        the integrator to detect.

        Args:
            positions: (n, 3) positions
            masses: (n,) masses
            G: Gravitational constant
            epsilon: Softening length
            fixed: Optional (n,) bool mask of bodies that do not move

        Returns:
            (n, 3) accelerations
        """
        positions = np.asarray(positions, dtype=np.float64)
        masses = np.asarray(masses, dtype=np.float64)
        n = positions.shape[0]
        if n == 0:
            return np.zeros((0, 3))

        # r_diff[i, j] = r_j - r_i
        r_diff = positions[np.newaxis, :, :] - positions[:, np.newaxis, :]
        r_sq = np.sum(r_diff ** 2, axis=2)

        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            inv_r_soft_cubed = 1.0 / (r_sq + epsilon ** 2) ** 1.5
            np.fill_diagonal(inv_r_soft_cubed, 0.0)
            weights = G * masses[np.newaxis, :] * inv_r_soft_cubed
            acc = np.sum(weights[:, :, np.newaxis] * r_diff, axis=1)

        if fixed is not None:
            acc[np.asarray(fixed, dtype=bool)] = 0.0
        return acc

    def compute_potential_energy(
        self,
        positions: np.ndarray,
        masses: np.ndarray,
        G: float = 1.0,
        epsilon: float = 1e-3,
    ) -> float:
        """Plummer potential energy matching the force law.

        U = -G * sum_{i<j} m_i * m_j / sqrt(r_ij^2 + eps^2)
        """
        positions = np.asarray(positions, dtype=np.float64)
        masses = np.asarray(masses, dtype=np.float64)
        n = positions.shape[0]
        if n < 2:
            return 0.0
        r_diff = positions[np.newaxis, :, :] - positions[:, np.newaxis, :]
        r_sq = np.sum(r_diff ** 2, axis=2)
        i_upper, j_upper = np.triu_indices(n, k=1)
        with np.errstate(divide="ignore", invalid="ignore"):
            pair_terms = masses[i_upper] * masses[j_upper] / np.sqrt(r_sq[i_upper, j_upper] + epsilon ** 2)
        return float(-G * np.sum(pair_terms))
