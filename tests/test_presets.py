"""Tests for preset scenarios."""

import numpy as np
import pytest

from gravity_sim.errors import ConfigurationError, DegenerateConfiguration, InvalidPreset
from gravity_sim.physics.nbody import Body
from gravity_sim.presets import PresetKind, black_hole_body, generate, validate_bodies
from gravity_sim.presets.solar_system import G_SOLAR, PLANETS, SPEED_OF_LIGHT_AU_PER_YEAR
from gravity_sim.presets.utils import vis_viva_speed


def test_all_presets_generate():
    """Every preset kind builds a finite, validated state."""
    for kind in PresetKind:
        state, hints = generate(kind)
        assert state.system.n_bodies > 0
        assert state.system.is_finite()
        assert hints.name == kind.value
        assert state.G == hints.G
        assert state.softening == hints.softening > 0.0


def test_unknown_preset():
    """Unknown names raise InvalidPreset, which is also a ValueError."""
    with pytest.raises(InvalidPreset) as excinfo:
        generate("andromeda")
    assert isinstance(excinfo.value, ValueError)
    assert "solar_system" in str(excinfo.value)


def test_unknown_option():
    """Options a preset does not take are rejected before generation."""
    with pytest.raises(ConfigurationError):
        generate("two_body", n_particles=3)


def test_preset_reproducibility():
    """Generating twice gives bit-identical bodies."""
    for name in ("solar_system", "accretion_disk", "galaxy_collision"):
        state1, _ = generate(name)
        state2, _ = generate(name)
        assert state1.system.equals(state2.system), name


def test_solar_system_layout():
    """Sun, eight planets and the ship, in AU / yr / M_sun units."""
    state, hints = generate("solar_system")
    system = state.system

    assert system.n_bodies == 10
    assert system.names[:3] == ["Sun", "Mercury", "Venus"]
    assert system.ship_index == 9
    assert state.ship is not None and state.ship.index == 9
    assert np.isclose(state.G, 4.0 * np.pi ** 2)
    assert state.speed_of_light == SPEED_OF_LIGHT_AU_PER_YEAR
    assert hints.black_hole is not None


def test_solar_system_planets_at_perihelion():
    """Each planet starts at r = a(1 - e) with the vis-viva speed."""
    state, _ = generate("solar_system", with_ship=False)
    system = state.system

    for i, (name, _, a, e, *_rest) in enumerate(PLANETS, start=1):
        r = np.linalg.norm(system.positions[i])
        v = np.linalg.norm(system.velocities[i])
        assert np.isclose(r, a * (1.0 - e)), f"{name}: r={r}"
        assert np.isclose(v, vis_viva_speed(r, a, 1.0, G_SOLAR)), f"{name}: v={v}"
        # Perihelion: velocity perpendicular to the radius vector
        assert abs(np.dot(system.positions[i], system.velocities[i])) < 1e-9 * r * v


def test_solar_system_without_ship():
    state, _ = generate("solar_system", with_ship=False)
    assert state.ship is None
    assert state.system.n_bodies == 9


def test_ship_launch_speed():
    """The ship leaves Earth at 1.1x Earth's escape speed along +y."""
    state, _ = generate("solar_system")
    system = state.system
    earth = system.index_of("Earth")
    ship = system.ship_index

    rel_v = system.velocities[ship] - system.velocities[earth]
    v_esc = np.sqrt(2.0 * G_SOLAR * system.masses[earth] / system.radii[earth])
    assert np.allclose(rel_v, [0.0, 1.1 * v_esc, 0.0])
    assert system.positions[ship][1] > system.positions[earth][1]


def test_accretion_disk_circular_speeds():
    """Every satellite starts at exactly sqrt(G M / r) around the fixed center."""
    state, _ = generate("accretion_disk", n_particles=200)
    system = state.system
    M = system.masses[0]

    assert bool(system.fixed[0])
    assert not np.any(system.fixed[1:])
    r = np.linalg.norm(system.positions[1:] - system.positions[0], axis=1)
    speeds = np.linalg.norm(system.velocities[1:], axis=1)
    expected = np.sqrt(state.G * M / r)
    assert np.allclose(speeds, expected, rtol=1e-12)

    # Tangential: no radial velocity component
    radial = np.sum(system.velocities[1:] * system.positions[1:], axis=1) / r
    assert np.allclose(radial, 0.0, atol=1e-9 * expected.max())


def test_accretion_disk_jitter():
    """Jitter perturbs speeds within the requested fraction."""
    state, _ = generate("accretion_disk", n_particles=200, speed_jitter=0.05)
    system = state.system
    r = np.linalg.norm(system.positions[1:], axis=1)
    ratio = np.linalg.norm(system.velocities[1:], axis=1) / np.sqrt(state.G * system.masses[0] / r)

    assert np.all(ratio >= 0.95 - 1e-12) and np.all(ratio <= 1.05 + 1e-12)
    assert not np.allclose(ratio, 1.0)


def test_galaxy_collision():
    """Two black holes with their disks, moving towards each other."""
    state, _ = generate("galaxy_collision", particles_per_galaxy=20)
    system = state.system

    assert system.n_bodies == 42
    assert system.names[0] == "Black Hole 1"
    assert system.names[21] == "Black Hole 2"
    assert system.velocities[0][0] > 0.0 > system.velocities[21][0]
    assert system.ship_index is None


def test_galaxy_disks_are_rotated_not_sheared():
    """Each tilted disk keeps its particles on circular orbits in one plane."""
    n = 50
    state, _ = generate("galaxy_collision", particles_per_galaxy=n)
    system = state.system

    for hole in (0, n + 1):
        rel_pos = system.positions[hole + 1:hole + 1 + n] - system.positions[hole]
        rel_vel = system.velocities[hole + 1:hole + 1 + n] - system.velocities[hole]

        # Velocities are tangential and all lie in the tilted disk plane
        radial = np.sum(rel_pos * rel_vel, axis=1)
        assert np.allclose(radial, 0.0, atol=1e-9 * np.max(np.abs(rel_vel)) * np.max(np.abs(rel_pos)))
        assert np.linalg.matrix_rank(rel_vel, tol=1e-9 * np.max(np.abs(rel_vel))) == 2
        # The plane is tipped out of x-z
        assert np.any(np.abs(rel_vel[:, 1]) > 1e-6)


def test_two_body_center_of_mass_frame():
    """The binary has zero total momentum and its COM at the origin."""
    state, _ = generate("two_body")
    system = state.system

    assert np.allclose(system.center_of_mass(), 0.0)
    assert np.allclose(system.center_of_mass_velocity(), 0.0)


def test_degenerate_parameters():
    """Non-physical options are rejected at the preset boundary."""
    with pytest.raises(DegenerateConfiguration):
        generate("two_body", G=0.0)
    with pytest.raises(DegenerateConfiguration):
        generate("two_body", softening=0.0)
    with pytest.raises(DegenerateConfiguration):
        generate("two_body", secondary_mass=-1.0)
    with pytest.raises(DegenerateConfiguration):
        generate("two_body", separation=np.inf)


def test_two_body_rejects_masses_that_cancel():
    """A zero total mass is a degenerate scenario, not a division error."""
    with pytest.raises(DegenerateConfiguration):
        generate("two_body", primary_mass=1.0, secondary_mass=-1.0)
    with pytest.raises(DegenerateConfiguration):
        generate("two_body", primary_mass=0.0)
    with pytest.raises(DegenerateConfiguration):
        generate("two_body", separation=0.0)
    with pytest.raises(DegenerateConfiguration):
        generate("two_body", G=-1.0)


def test_invalid_preset_options_are_configuration_errors():
    """Bad options surface as ConfigurationError (a SimulationError)."""
    with pytest.raises(ConfigurationError):
        generate("solar_system", planets=2)
    with pytest.raises(ConfigurationError):
        generate("solar_system", planets=9)
    with pytest.raises(ConfigurationError):
        generate("accretion_disk", speed_jitter=2.0)
    with pytest.raises(ConfigurationError):
        generate("accretion_disk", speed_jitter=-0.1)

    # Earth is the third planet, so three is enough for the ship
    state, _ = generate("solar_system", planets=3)
    assert state.ship is not None
    state, _ = generate("solar_system", planets=2, with_ship=False)
    assert state.system.n_bodies == 3


def test_validate_rejects_two_ships():
    bodies = [Body(mass=1.0, is_ship=True), Body(mass=1.0, position=(1.0, 0.0, 0.0), is_ship=True)]
    with pytest.raises(DegenerateConfiguration):
        validate_bodies(bodies, G=1.0, softening=0.1)


def test_black_hole_recipe():
    """Only presets with a recipe offer a black hole."""
    _, solar_hints = generate("solar_system")
    _, binary_hints = generate("two_body")

    body = black_hole_body(solar_hints)
    assert body.mass == 10.0
    assert body.name == "Black Hole"
    assert body is not solar_hints.black_hole
    assert black_hole_body(binary_hints) is None


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
