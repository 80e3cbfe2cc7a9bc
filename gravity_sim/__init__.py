"""
Gravity Simulator - real-time N-body engine with a relativistic spaceship.

Features:
- Plummer-softened pairwise gravity, vectorized with NumPy
- Leapfrog (kick-drift-kick) and semi-implicit Euler integrators
- Atomic steps with rollback on numeric divergence
- Relativistic ship kinematics (Lorentz factor, proper time, Doppler)
- Preset scenarios (solar system, accretion disk, galaxy collision, binary)
- Immutable per-frame snapshots for an external renderer
"""

__version__ = "0.1.0"

from gravity_sim.physics.simulator import Simulator
from gravity_sim.presets import PresetKind, generate

__all__ = [
    "Simulator",
    "PresetKind",
    "generate",
]
