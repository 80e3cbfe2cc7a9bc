"""Bounded per-body position history for fading-trail display."""

from typing import List
import numpy as np


DEFAULT_TRAIL_CAPACITY = 200


class TrailRecorder:
    """Ring buffers of past positions, one per body.

    All trails share one (n_bodies, capacity, 3) buffer and one write head,
    since every body is sampled at the same instants. Once a buffer is full
    the oldest sample is overwritten. Trails are display data only and are
    never read by the integrator.
    """

    def __init__(self, n_bodies: int, capacity: int = DEFAULT_TRAIL_CAPACITY, sample_interval: int = 1):
        """Initialize the recorder.

        Args:
            n_bodies: Number of bodies to track
            capacity: Samples kept per body (N_TRAIL)
            sample_interval: Record on every N-th call to record()
        """
        if capacity < 1:
            raise ValueError(f"Trail capacity must be >= 1, got {capacity}")
        if sample_interval < 1:
            raise ValueError(f"Trail sample interval must be >= 1, got {sample_interval}")
        self.capacity = int(capacity)
        self.sample_interval = int(sample_interval)
        self.enabled = True
        self._buffer = np.zeros((n_bodies, self.capacity, 3))
        self._head = 0
        self._count = 0
        self._calls = 0

    @property
    def n_bodies(self) -> int:
        return self._buffer.shape[0]

    def __len__(self) -> int:
        """Number of samples currently held per body."""
        return self._count

    def record(self, positions: np.ndarray) -> bool:
        """Offer the positions after an accepted step.

        Returns True if a sample was stored.
        """
        if not self.enabled:
            return False
        self._calls += 1
        if (self._calls - 1) % self.sample_interval != 0:
            return False
        positions = np.asarray(positions, dtype=np.float64)
        if positions.shape != (self.n_bodies, 3):
            raise ValueError(
                f"Expected positions of shape {(self.n_bodies, 3)}, got {positions.shape}"
            )
        self._buffer[:, self._head, :] = positions
        self._head = (self._head + 1) % self.capacity
        self._count = min(self._count + 1, self.capacity)
        return True

    def trail(self, index: int) -> np.ndarray:
        """Samples of body ``index``, oldest first, as a (k, 3) copy."""
        return self._ordered()[index].copy()

    def trails(self) -> List[np.ndarray]:
        ordered = self._ordered()
        return [ordered[i].copy() for i in range(self.n_bodies)]

    def _ordered(self) -> np.ndarray:
        if self._count < self.capacity:
            return self._buffer[:, :self._count, :]
        # Full: the head points at the oldest sample
        return np.roll(self._buffer, -self._head, axis=1)

    def clear(self):
        """Drop all samples (scenario reset)."""
        self._buffer[:] = 0.0
        self._head = 0
        self._count = 0
        self._calls = 0

    def resize(self, n_bodies: int):
        """Track a different number of bodies; existing samples are dropped."""
        self._buffer = np.zeros((n_bodies, self.capacity, 3))
        self._head = 0
        self._count = 0
        self._calls = 0
