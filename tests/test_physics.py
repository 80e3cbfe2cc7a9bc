"""Tests for the Body Store and the softened force model."""

import numpy as np
import pytest

from gravity_sim.physics.nbody import Body, NBodySystem
from gravity_sim.physics.force_calculator import ForceCalculator


def make_system():
    return NBodySystem.from_bodies([
        Body(mass=10.0, position=(0.0, 0.0, 0.0), name="A"),
        Body(mass=1.0, position=(1.0, 0.0, 0.0), velocity=(0.0, 0.0, 1.0), name="B"),
        Body(mass=2.0, position=(0.0, 3.0, 0.0), fixed=True, name="C"),
    ])


def test_nbody_initialization():
    """Test Body Store construction from Body records."""
    system = make_system()

    assert system.n_bodies == 3
    assert len(system) == 3
    assert system.positions.shape == (3, 3)
    assert system.colors.shape == (3, 4)
    assert system.names == ["A", "B", "C"]
    assert system.index_of("B") == 1
    assert system.index_of("missing") is None
    assert system.ship_index is None
    assert list(system.movable) == [True, True, False]
    assert system.body(1).velocity == (0.0, 0.0, 1.0)


def test_masses_are_read_only():
    """Masses never change after creation."""
    system = make_system()
    with pytest.raises(ValueError):
        system.masses[0] = 5.0


def test_empty_system():
    """An empty body list gives an empty, finite store."""
    system = NBodySystem.from_bodies([])
    assert system.n_bodies == 0
    assert system.is_finite()
    assert np.allclose(system.center_of_mass(), 0.0)


def test_copy_is_independent():
    """Mutating a copy leaves the original untouched."""
    system = make_system()
    clone = system.copy()
    clone.positions[0] = [9.0, 9.0, 9.0]
    clone.names[0] = "Z"

    assert np.allclose(system.positions[0], 0.0)
    assert system.names[0] == "A"
    assert not system.equals(clone)
    assert system.equals(system.copy())


def test_append_and_remove_keep_order():
    """Appending goes to the end; removal preserves the order of the rest."""
    system = make_system()
    idx = system.append(Body(mass=5.0, position=(7.0, 0.0, 0.0), name="D"))

    assert idx == 3
    assert system.names == ["A", "B", "C", "D"]
    assert not system.masses.flags.writeable

    removed = system.remove(1)
    assert removed.name == "B"
    assert system.names == ["A", "C", "D"]
    assert np.allclose(system.positions[2], [7.0, 0.0, 0.0])
    assert bool(system.fixed[1])


def test_center_of_mass():
    """Mass-weighted centroid of positions and velocities."""
    system = make_system()
    expected = (1.0 * np.array([1.0, 0.0, 0.0]) + 2.0 * np.array([0.0, 3.0, 0.0])) / 13.0
    assert np.allclose(system.center_of_mass(), expected)
    assert np.allclose(system.center_of_mass_velocity(), [0.0, 0.0, 1.0 / 13.0])


def test_non_finite_detection():
    """NaN in any body is detected and located."""
    system = make_system()
    assert system.is_finite()
    system.velocities[2, 1] = np.nan
    assert not system.is_finite()
    assert list(system.non_finite_bodies()) == [2]


def test_force_calculation():
    """Two unit masses one unit apart attract each other with a = G m / r^2."""
    calc = ForceCalculator()
    positions = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]])
    masses = np.array([1.0, 1.0])

    acc = calc.compute_accelerations(positions, masses, G=1.0, epsilon=0.0)

    assert np.allclose(acc[0], [1.0, 0.0, 0.0])
    assert np.allclose(acc[1], [-1.0, 0.0, 0.0])


def test_softening_reduces_force():
    """Plummer softening weakens the pull at short range."""
    calc = ForceCalculator()
    positions = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]])
    masses = np.array([1.0, 1.0])
    eps = 0.5

    acc = calc.compute_accelerations(positions, masses, G=2.0, epsilon=eps)

    expected = 2.0 / (1.0 + eps ** 2) ** 1.5
    assert np.isclose(acc[0, 0], expected), f"Expected {expected}, got {acc[0, 0]}"


def test_momentum_conservation_of_forces():
    """Pairwise forces cancel: sum m_i a_i = 0."""
    rng = np.random.default_rng(3)
    positions = rng.normal(size=(20, 3))
    masses = rng.uniform(1.0, 5.0, size=20)

    acc = ForceCalculator().compute_accelerations(positions, masses, G=1.0, epsilon=0.1)

    net = np.sum(masses[:, np.newaxis] * acc, axis=0)
    assert np.allclose(net, 0.0, atol=1e-10), f"Net force {net}"


def test_coincident_bodies_are_finite_with_softening():
    """Coincident bodies with eps > 0 feel zero, finite acceleration."""
    positions = np.array([[1.0, 2.0, 3.0], [1.0, 2.0, 3.0]])
    masses = np.array([1.0, 1.0])

    acc = ForceCalculator().compute_accelerations(positions, masses, G=1.0, epsilon=0.1)

    assert np.all(np.isfinite(acc))
    assert np.allclose(acc, 0.0)


def test_coincident_bodies_without_softening_are_non_finite():
    """eps = 0 is allowed here; the singular result is left for the integrator to catch."""
    positions = np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 0.0]])
    masses = np.array([1.0, 1.0])

    acc = ForceCalculator().compute_accelerations(positions, masses, G=1.0, epsilon=0.0)

    assert not np.all(np.isfinite(acc))


def test_fixed_bodies_receive_no_acceleration():
    """Fixed bodies still attract others."""
    positions = np.array([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0]])
    masses = np.array([100.0, 1.0])

    acc = ForceCalculator().compute_accelerations(
        positions, masses, G=1.0, epsilon=0.0, fixed=np.array([True, False])
    )

    assert np.allclose(acc[0], 0.0)
    assert np.allclose(acc[1], [-25.0, 0.0, 0.0])


def test_potential_energy():
    """Plummer potential matches -G m1 m2 / sqrt(r^2 + eps^2)."""
    positions = np.array([[0.0, 0.0, 0.0], [3.0, 4.0, 0.0]])
    masses = np.array([2.0, 3.0])

    U = ForceCalculator().compute_potential_energy(positions, masses, G=1.5, epsilon=0.1)

    expected = -1.5 * 2.0 * 3.0 / np.sqrt(25.0 + 0.01)
    assert np.isclose(U, expected)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
