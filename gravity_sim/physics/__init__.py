"""Physics engine for N-body simulations."""

from gravity_sim.physics.nbody import Body, NBodySystem
from gravity_sim.physics.state import SimulationState
from gravity_sim.physics.simulator import Simulator

__all__ = ["Body", "NBodySystem", "SimulationState", "Simulator"]
