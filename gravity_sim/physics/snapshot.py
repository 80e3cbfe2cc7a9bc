"""Immutable per-frame view of the simulation for a rendering collaborator."""

from dataclasses import dataclass
from typing import Any, Optional, Tuple
import numpy as np


def _frozen(array) -> np.ndarray:
    out = np.array(array, copy=True)
    out.setflags(write=False)
    return out


@dataclass(frozen=True)
class RelativisticUniforms:
    """Scalars a renderer needs to draw the ship's relativistic view."""
    gamma: float = 1.0
    beta: float = 0.0
    beta_forward: float = 0.0
    proper_time: float = 0.0
    forward_doppler: float = 1.0
    aberration_compression: float = 1.0
    gravitational_factor: float = 1.0
    elapsed_time: float = 0.0
    fuel: float = 1.0


@dataclass(frozen=True, eq=False)
class FrameSnapshot:
    """Read-only copy of the Body Store plus frame metadata.

    Arrays are copies with the write flag cleared, so holding on to a
    snapshot never observes later steps.
    """
    positions: np.ndarray
    velocities: np.ndarray
    radii: np.ndarray
    colors: np.ndarray
    is_ship: np.ndarray
    names: Tuple[Optional[str], ...]
    trails: Tuple[np.ndarray, ...]
    relativistic: Optional[RelativisticUniforms]
    elapsed_time: float
    step_count: int
    paused: bool
    show_trails: bool
    show_grid: bool
    preset: str
    hints: Any = None

    @classmethod
    def capture(cls, state, trails, preset: str, hints=None, relativistic=None,
                show_trails: bool = True, show_grid: bool = False) -> "FrameSnapshot":
        system = state.system
        return cls(
            positions=_frozen(system.positions),
            velocities=_frozen(system.velocities),
            radii=_frozen(system.radii),
            colors=_frozen(system.colors),
            is_ship=_frozen(system.is_ship),
            names=tuple(system.names),
            trails=tuple(_frozen(t) for t in trails),
            relativistic=relativistic,
            elapsed_time=float(state.time),
            step_count=int(state.step_count),
            paused=bool(state.paused),
            show_trails=show_trails,
            show_grid=show_grid,
            preset=preset,
            hints=hints,
        )

    @property
    def n_bodies(self) -> int:
        return self.positions.shape[0]

    @property
    def ship_index(self) -> Optional[int]:
        idx = np.flatnonzero(self.is_ship)
        return int(idx[0]) if idx.size else None
