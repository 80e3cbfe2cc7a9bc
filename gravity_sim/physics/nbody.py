"""Body Store: per-body physical state for N-body simulations."""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import numpy as np


DEFAULT_COLOR = (0.6, 0.7, 1.0, 1.0)


@dataclass
class Body:
    """One simulated mass point, as produced by a preset.

    The simulation itself stores bodies column-wise in an NBodySystem; this
    record is the construction-time description of a single body.
    """
    mass: float
    position: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    velocity: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    radius: float = 0.1
    color: Tuple[float, float, float, float] = DEFAULT_COLOR
    fixed: bool = False
    is_ship: bool = False
    name: Optional[str] = None


def radius_from_mass(mass: float) -> float:
    """Display radius proportional to the cube root of mass."""
    return float((mass / 1000.0) ** (1.0 / 3.0) * 0.5)


def color_from_mass(mass: float) -> Tuple[float, float, float, float]:
    """Blue for light bodies, red for heavy ones."""
    t = float(np.clip(mass / 10000.0, 0.0, 1.0))
    return (0.2 + 0.8 * t, 0.4 + 0.3 * (1.0 - t), 1.0 - 0.6 * t, 1.0)


class NBodySystem:
    """Ordered column store of body state.

    Insertion order is stable and defines the iteration order everywhere
    (force sums, trails, snapshots), which keeps runs deterministic.
    Masses are stored read-only; only positions and velocities change
    during a run.
    """

    def __init__(
        self,
        positions,
        velocities,
        masses,
        radii=None,
        colors=None,
        fixed=None,
        is_ship=None,
        names: Optional[Sequence[Optional[str]]] = None,
    ):
        """Initialize the store from column arrays.

        Args:
            positions: (n, 3) positions
            velocities: (n, 3) velocities
            masses: (n,) masses
            radii: (n,) display radii (default derived from mass)
            colors: (n, 4) RGBA colors (default derived from mass)
            fixed: (n,) bool, bodies that exert force but never move
            is_ship: (n,) bool, at most one True
            names: Optional per-body names
        """
        self.positions = np.array(positions, dtype=np.float64).reshape(-1, 3)
        n = self.positions.shape[0]
        self.velocities = np.array(velocities, dtype=np.float64).reshape(n, 3)
        masses = np.array(masses, dtype=np.float64).reshape(n)
        masses.flags.writeable = False
        self.masses = masses

        if radii is None:
            radii = [radius_from_mass(m) for m in masses]
        if colors is None:
            colors = [color_from_mass(m) for m in masses]
        self.radii = np.array(radii, dtype=np.float64).reshape(n)
        self.colors = np.array(colors, dtype=np.float64).reshape(n, 4)
        self.fixed = np.zeros(n, dtype=bool) if fixed is None else np.array(fixed, dtype=bool).reshape(n)
        self.is_ship = np.zeros(n, dtype=bool) if is_ship is None else np.array(is_ship, dtype=bool).reshape(n)
        self.names: List[Optional[str]] = list(names) if names is not None else [None] * n

    @classmethod
    def from_bodies(cls, bodies: Sequence[Body]) -> "NBodySystem":
        """Build a store from an ordered list of Body records."""
        if len(bodies) == 0:
            return cls(np.zeros((0, 3)), np.zeros((0, 3)), np.zeros(0), radii=[], colors=np.zeros((0, 4)))
        return cls(
            positions=[b.position for b in bodies],
            velocities=[b.velocity for b in bodies],
            masses=[b.mass for b in bodies],
            radii=[b.radius for b in bodies],
            colors=[b.color for b in bodies],
            fixed=[b.fixed for b in bodies],
            is_ship=[b.is_ship for b in bodies],
            names=[b.name for b in bodies],
        )

    @property
    def n_bodies(self) -> int:
        return self.positions.shape[0]

    def __len__(self) -> int:
        return self.n_bodies

    def body(self, index: int) -> Body:
        """Return body ``index`` as a standalone Body record."""
        return Body(
            mass=float(self.masses[index]),
            position=tuple(float(x) for x in self.positions[index]),
            velocity=tuple(float(x) for x in self.velocities[index]),
            radius=float(self.radii[index]),
            color=tuple(float(c) for c in self.colors[index]),
            fixed=bool(self.fixed[index]),
            is_ship=bool(self.is_ship[index]),
            name=self.names[index],
        )

    def bodies(self) -> List[Body]:
        return [self.body(i) for i in range(self.n_bodies)]

    def copy(self) -> "NBodySystem":
        """Deep copy (arrays are not shared)."""
        return NBodySystem(
            self.positions.copy(),
            self.velocities.copy(),
            self.masses.copy(),
            radii=self.radii.copy(),
            colors=self.colors.copy(),
            fixed=self.fixed.copy(),
            is_ship=self.is_ship.copy(),
            names=list(self.names),
        )

    def append(self, body: Body) -> int:
        """Append a body at the end of the ordering and return its index.

        Only valid between steps.
        """
        bodies = self.bodies()
        bodies.append(body)
        rebuilt = NBodySystem.from_bodies(bodies)
        self.__dict__.update(rebuilt.__dict__)
        return self.n_bodies - 1

    def remove(self, index: int) -> Body:
        """Remove body ``index``, preserving the order of the others."""
        bodies = self.bodies()
        removed = bodies.pop(index)
        rebuilt = NBodySystem.from_bodies(bodies)
        self.__dict__.update(rebuilt.__dict__)
        return removed

    def index_of(self, name: str) -> Optional[int]:
        """Index of the first body called ``name``, or None."""
        for i, body_name in enumerate(self.names):
            if body_name == name:
                return i
        return None

    @property
    def ship_index(self) -> Optional[int]:
        indices = np.flatnonzero(self.is_ship)
        if indices.size == 0:
            return None
        return int(indices[0])

    @property
    def movable(self) -> np.ndarray:
        """Boolean mask of bodies the integrator advances."""
        return ~self.fixed

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.positions)) and np.all(np.isfinite(self.velocities)))

    def non_finite_bodies(self) -> np.ndarray:
        """Indices of bodies with a NaN/Inf position or velocity."""
        bad = ~(np.all(np.isfinite(self.positions), axis=1) & np.all(np.isfinite(self.velocities), axis=1))
        return np.flatnonzero(bad)

    def total_mass(self) -> float:
        return float(np.sum(self.masses))

    def center_of_mass(self) -> np.ndarray:
        total = self.total_mass()
        if total <= 0.0:
            return np.zeros(3)
        return np.sum(self.masses[:, np.newaxis] * self.positions, axis=0) / total

    def center_of_mass_velocity(self) -> np.ndarray:
        total = self.total_mass()
        if total <= 0.0:
            return np.zeros(3)
        return np.sum(self.masses[:, np.newaxis] * self.velocities, axis=0) / total

    def get_state(self):
        """Get current state (positions, velocities, masses) as copies."""
        return self.positions.copy(), self.velocities.copy(), self.masses.copy()

    def set_state(self, positions, velocities):
        """Replace positions and velocities; masses are immutable."""
        positions = np.array(positions, dtype=np.float64).reshape(self.n_bodies, 3)
        velocities = np.array(velocities, dtype=np.float64).reshape(self.n_bodies, 3)
        self.positions = positions
        self.velocities = velocities

    def equals(self, other: "NBodySystem") -> bool:
        """Bitwise equality of every column (NaN never compares equal)."""
        return (
            self.n_bodies == other.n_bodies
            and np.array_equal(self.positions, other.positions)
            and np.array_equal(self.velocities, other.velocities)
            and np.array_equal(self.masses, other.masses)
            and np.array_equal(self.radii, other.radii)
            and np.array_equal(self.colors, other.colors)
            and np.array_equal(self.fixed, other.fixed)
            and np.array_equal(self.is_ship, other.is_ship)
            and self.names == other.names
        )
