"""Preset scenario generators."""

import dataclasses
import inspect
import logging
from typing import Optional, Tuple, Union

from gravity_sim.errors import ConfigurationError, InvalidPreset
from gravity_sim.physics.nbody import Body
from gravity_sim.physics.state import SimulationState
from gravity_sim.presets.base import PresetHints, PresetKind, build_state, validate_bodies
from gravity_sim.presets.accretion_disk import generate_accretion_disk
from gravity_sim.presets.galaxy_collision import generate_galaxy_collision
from gravity_sim.presets.solar_system import generate_solar_system
from gravity_sim.presets.two_body import generate_two_body


logger = logging.getLogger(__name__)

GENERATORS = {
    PresetKind.SOLAR_SYSTEM: generate_solar_system,
    PresetKind.ACCRETION_DISK: generate_accretion_disk,
    PresetKind.GALAXY_COLLISION: generate_galaxy_collision,
    PresetKind.TWO_BODY: generate_two_body,
}


def get_kind(name: Union[str, PresetKind]) -> PresetKind:
    """Resolve a preset name (case-insensitive) to its kind."""
    if isinstance(name, PresetKind):
        return name
    try:
        return PresetKind(str(name).lower())
    except ValueError:
        raise InvalidPreset(name, PresetKind.names()) from None


def generate(name: Union[str, PresetKind], **options) -> Tuple[SimulationState, PresetHints]:
    """Build a fresh, validated state for a named preset.

    Deterministic: the same name and options always give bit-identical
    bodies.

    Raises:
        InvalidPreset: Unknown preset name
        ConfigurationError: Option not accepted by the preset
        DegenerateConfiguration: Options produced a non-physical scenario
    """
    kind = get_kind(name)
    generator = GENERATORS[kind]
    unknown = set(options) - set(inspect.signature(generator).parameters)
    if unknown:
        raise ConfigurationError(f"Unknown options for preset {kind.value!r}: {sorted(unknown)}")
    bodies, hints = generator(**options)
    state = build_state(bodies, hints)
    logger.debug("Generated preset %s with %d bodies", kind.value, state.system.n_bodies)
    return state, hints


def black_hole_body(hints: PresetHints) -> Optional[Body]:
    """The rogue black hole a preset offers for toggling, or None."""
    if hints.black_hole is None:
        return None
    return dataclasses.replace(hints.black_hole)


__all__ = [
    "PresetKind",
    "PresetHints",
    "GENERATORS",
    "build_state",
    "validate_bodies",
    "get_kind",
    "generate",
    "black_hole_body",
    "generate_solar_system",
    "generate_accretion_disk",
    "generate_galaxy_collision",
    "generate_two_body",
]
