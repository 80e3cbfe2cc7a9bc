"""Numerical integrators for N-body simulations."""

from gravity_sim.physics.integrators.base import Integrator
from gravity_sim.physics.integrators.euler import EulerIntegrator
from gravity_sim.physics.integrators.leapfrog import LeapfrogIntegrator

INTEGRATORS = {
    "leapfrog": LeapfrogIntegrator,
    "euler": EulerIntegrator,
}


def get_integrator(name: str) -> Integrator:
    """Get an integrator instance by name."""
    integrator_class = INTEGRATORS.get(name.lower())
    if integrator_class is None:
        raise ValueError(f"Unknown integrator: {name}. Available: {list(INTEGRATORS)}")
    return integrator_class()


__all__ = ["Integrator", "EulerIntegrator", "LeapfrogIntegrator", "INTEGRATORS", "get_integrator"]
