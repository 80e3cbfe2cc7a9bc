"""Tests for numerical integrators."""

import numpy as np
import pytest

from gravity_sim.errors import NumericDivergence
from gravity_sim.physics.diagnostics import Diagnostics, relative_drift
from gravity_sim.physics.integrators import (
    EulerIntegrator,
    LeapfrogIntegrator,
    get_integrator,
)
from gravity_sim.physics.nbody import Body, NBodySystem
from gravity_sim.physics.state import SimulationState
from gravity_sim.presets import generate


def energy_and_momentum(state):
    diagnostics = Diagnostics.for_state(state)
    system = state.system
    _, _, E = diagnostics.compute_energies(system.positions, system.velocities, system.masses)
    L = diagnostics.compute_angular_momentum(system.positions, system.velocities, system.masses)
    return E, L


def eccentric_binary_state():
    """Two bodies released at 0.7x circular speed (e ~ 0.5)."""
    M, m, r = 1000.0, 1.0, 10.0
    v = 0.7 * np.sqrt((M + m) / r)
    bodies = [
        Body(mass=M, position=(-m / (M + m) * r, 0.0, 0.0), velocity=(0.0, 0.0, -m / (M + m) * v)),
        Body(mass=m, position=(M / (M + m) * r, 0.0, 0.0), velocity=(0.0, 0.0, M / (M + m) * v)),
    ]
    return SimulationState(system=NBodySystem.from_bodies(bodies), G=1.0, softening=0.01)


def test_integrator_metadata():
    """Names and orders, and lookup by name."""
    assert LeapfrogIntegrator().name == "leapfrog"
    assert LeapfrogIntegrator().order == 2
    assert EulerIntegrator().name == "euler"
    assert EulerIntegrator().order == 1
    assert isinstance(get_integrator("LEAPFROG"), LeapfrogIntegrator)
    with pytest.raises(ValueError):
        get_integrator("rk4")


def test_step_advances_time():
    """A step moves bodies and advances the clock and counter."""
    state, _ = generate("two_body")
    before = state.system.positions.copy()

    LeapfrogIntegrator().step(state, 0.01)

    assert not np.allclose(state.system.positions, before)
    assert state.time == pytest.approx(0.01)
    assert state.step_count == 1


@pytest.mark.parametrize("dt", [0.0, -0.01, np.inf, np.nan])
def test_invalid_dt_rejected(dt):
    """Non-positive or non-finite dt raises ValueError and changes nothing."""
    state, _ = generate("two_body")
    snapshot = state.copy()

    with pytest.raises(ValueError):
        LeapfrogIntegrator().step(state, dt)

    assert state.equals(snapshot)


def test_leapfrog_conservation_two_body():
    """Energy and angular momentum drift stay below 1% over 1000 steps."""
    state, _ = generate("two_body")
    integrator = LeapfrogIntegrator()
    E0, L0 = energy_and_momentum(state)

    for _ in range(1000):
        integrator.step(state, 0.01)

    E, L = energy_and_momentum(state)
    dE = relative_drift(E0, E)
    dL = np.linalg.norm(L - L0) / np.linalg.norm(L0)
    assert dE < 0.01, f"Energy drift {dE:.3e}"
    assert dL < 0.01, f"Angular momentum drift {dL:.3e}"


def test_leapfrog_closes_circular_orbit():
    """The secondary keeps its orbital radius over several orbits."""
    state, _ = generate("two_body")
    integrator = LeapfrogIntegrator()
    r0 = np.linalg.norm(state.system.positions[1] - state.system.positions[0])

    radii = []
    for _ in range(1000):
        integrator.step(state, 0.01)
        radii.append(np.linalg.norm(state.system.positions[1] - state.system.positions[0]))

    assert max(abs(r - r0) for r in radii) / r0 < 0.01


def test_euler_drifts_more_than_leapfrog():
    """On an eccentric orbit the first-order scheme has a larger energy error."""
    errors = {}
    for integrator in (LeapfrogIntegrator(), EulerIntegrator()):
        state = eccentric_binary_state()
        E0, _ = energy_and_momentum(state)
        worst = 0.0
        for _ in range(1000):
            integrator.step(state, 0.01)
            E, _ = energy_and_momentum(state)
            worst = max(worst, relative_drift(E0, E))
        errors[integrator.name] = worst

    assert errors["euler"] > 2.0 * errors["leapfrog"], f"Errors: {errors}"


def test_fixed_body_stays_put():
    """Fixed bodies keep position and velocity."""
    state, _ = generate("accretion_disk", n_particles=10)
    center = state.system.positions[0].copy()

    for _ in range(10):
        LeapfrogIntegrator().step(state, 1e-4)

    assert np.array_equal(state.system.positions[0], center)
    assert np.array_equal(state.system.velocities[0], np.zeros(3))


def test_divergence_leaves_state_untouched():
    """A singular step raises NumericDivergence without committing anything."""
    bodies = [Body(mass=1.0), Body(mass=1.0)]
    state = SimulationState(system=NBodySystem.from_bodies(bodies), G=1.0, softening=0.0)
    snapshot = state.copy()

    for integrator in (LeapfrogIntegrator(), EulerIntegrator()):
        with pytest.raises(NumericDivergence) as excinfo:
            integrator.step(state, 0.01)
        assert excinfo.value.bad_bodies == [0, 1]
        assert state.equals(snapshot)


def test_deterministic_trajectories():
    """Same preset and dt sequence give bit-identical results."""
    dts = [0.001, 0.002, 0.0015] * 20
    results = []
    for _ in range(2):
        state, _ = generate("solar_system")
        integrator = LeapfrogIntegrator()
        for dt in dts:
            integrator.step(state, dt)
        results.append(state)

    assert results[0].equals(results[1])


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
