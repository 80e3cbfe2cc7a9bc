"""Player/host intents consumed by the simulator between steps.

Each command is a small immutable value; the simulator dispatches on its
type in ``Simulator.apply``. Mapping keys or buttons to these is left to the
host application.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SelectPreset:
    name: str


@dataclass(frozen=True)
class Pause:
    pass


@dataclass(frozen=True)
class Resume:
    pass


@dataclass(frozen=True)
class TogglePause:
    pass


@dataclass(frozen=True)
class Reset:
    """Regenerate the active preset and clear trails and elapsed time."""
    pass


@dataclass(frozen=True)
class ScaleTime:
    """Multiply the time scale by ``factor`` (e.g. 2.0 faster, 0.5 slower)."""
    factor: float


@dataclass(frozen=True)
class Thrust:
    """Hold a throttle level in [-1, 1] along a ship axis: forward, right or up."""
    axis: str
    magnitude: float


@dataclass(frozen=True)
class Rotate:
    """Hold a rotation rate in [-1, 1] about pitch, yaw or roll."""
    axis: str
    magnitude: float


@dataclass(frozen=True)
class ToggleTrails:
    pass


@dataclass(frozen=True)
class ToggleGrid:
    pass


@dataclass(frozen=True)
class ToggleBlackHole:
    """Drop the preset's rogue black hole into the scene, or take it out again."""
    pass


ALL_COMMANDS = (
    SelectPreset, Pause, Resume, TogglePause, Reset, ScaleTime,
    Thrust, Rotate, ToggleTrails, ToggleGrid, ToggleBlackHole,
)
