"""Main simulator controller."""

import logging
from typing import Optional
import numpy as np

from gravity_sim import commands
from gravity_sim.errors import NumericDivergence
from gravity_sim.physics.clock import SimulationClock
from gravity_sim.physics.diagnostics import Diagnostics
from gravity_sim.physics.integrators import get_integrator
from gravity_sim.physics.snapshot import FrameSnapshot, RelativisticUniforms
from gravity_sim.physics.spaceship import SpaceshipKinematics
from gravity_sim.physics.state import SimulationState
from gravity_sim.physics.trails import TrailRecorder
from gravity_sim.presets import PresetHints, black_hole_body, generate, get_kind
from gravity_sim.utils.config import Config


logger = logging.getLogger(__name__)


class Simulator:
    """Main simulation controller.

    Owns one scenario: its SimulationState, the clock, the integrator, the
    ship kinematics and the trail recorder. Every step is atomic; a step
    that diverges is rolled back and reported as rejected.
    """

    def __init__(self, preset: Optional[str] = None, config: Optional[Config] = None, **preset_options):
        """Initialize simulator.

        Args:
            preset: Name of the scenario to load (default: config.preset)
            config: Engine configuration (defaults if None)
            **preset_options: Passed to the preset generator, on top of
                ``config.preset_params``
        """
        self.config = config or Config()
        preset = preset or self.config.preset
        self.integrator = get_integrator(self.config.integrator)
        self.kinematics = SpaceshipKinematics()
        self.show_trails = self.config.show_trails
        self.show_grid = self.config.show_grid
        self.rejected_steps = 0

        self.state: Optional[SimulationState] = None
        self.hints: Optional[PresetHints] = None
        self.clock: Optional[SimulationClock] = None
        self.trails: Optional[TrailRecorder] = None
        self.preset_name: Optional[str] = None
        self.preset_options = {}
        self.black_hole_index: Optional[int] = None

        options = dict(self.config.preset_params)
        options.update(preset_options)
        self.load_preset(preset, **options)

    @classmethod
    def from_config(cls, config: Config) -> "Simulator":
        return cls(config=config)

    # -- scenario lifecycle -------------------------------------------------

    def load_preset(self, name: str, **options):
        """Replace the current scenario with a freshly generated one.

        Raises:
            InvalidPreset: Unknown name (the running scenario is kept)
            DegenerateConfiguration: Non-physical options (same)
        """
        kind = get_kind(name)
        state, hints = generate(kind, **options)

        self.state = state
        self.hints = hints
        self.preset_name = kind.value
        self.preset_options = dict(options)
        self.black_hole_index = None
        if self.config.time_scale is not None:
            state.time_scale = self.config.time_scale
        self.clock = SimulationClock(
            max_dt=self.config.max_dt if self.config.max_dt is not None else hints.max_dt,
            substeps=self.config.substeps if self.config.substeps is not None else hints.substeps,
        )
        self.trails = TrailRecorder(
            state.system.n_bodies,
            capacity=self.config.trail_capacity,
            sample_interval=self.config.trail_interval,
        )
        self.trails.enabled = self.show_trails
        self.kinematics.refresh(state)
        self.rejected_steps = 0
        logger.info("Loaded preset %s: %d bodies, G=%.4g, eps=%.4g",
                    self.preset_name, state.system.n_bodies, state.G, state.softening)

    def reset(self):
        """Regenerate the active preset; trails and elapsed time start over."""
        logger.info("Resetting preset %s", self.preset_name)
        self.load_preset(self.preset_name, **self.preset_options)

    # -- intents --------------------------------------------------------------

    def apply(self, command):
        """Apply a command between steps.

        Raises:
            TypeError: If ``command`` is not one of gravity_sim.commands
        """
        state = self.state
        if isinstance(command, commands.SelectPreset):
            self.load_preset(command.name)
        elif isinstance(command, commands.Pause):
            self.clock.pause(state)
        elif isinstance(command, commands.Resume):
            self.clock.resume(state)
        elif isinstance(command, commands.TogglePause):
            self.clock.toggle(state)
        elif isinstance(command, commands.Reset):
            self.reset()
        elif isinstance(command, commands.ScaleTime):
            self.clock.scale_time(state, command.factor)
        elif isinstance(command, commands.Thrust):
            if state.ship is None:
                logger.warning("Ignoring thrust: preset %s has no ship", self.preset_name)
                return
            self.kinematics.set_throttle(state.ship, command.axis, command.magnitude)
        elif isinstance(command, commands.Rotate):
            if state.ship is None:
                logger.warning("Ignoring rotation: preset %s has no ship", self.preset_name)
                return
            self.kinematics.set_rotation(state.ship, command.axis, command.magnitude)
        elif isinstance(command, commands.ToggleTrails):
            self.show_trails = not self.show_trails
            self.trails.enabled = self.show_trails
        elif isinstance(command, commands.ToggleGrid):
            self.show_grid = not self.show_grid
        elif isinstance(command, commands.ToggleBlackHole):
            self.toggle_black_hole()
        else:
            raise TypeError(f"Unknown command: {command!r}")

    def toggle_black_hole(self) -> bool:
        """Add the preset's rogue black hole, or remove it if present.

        Returns True if a black hole is in the scene afterwards.
        """
        system = self.state.system
        if self.black_hole_index is not None:
            system.remove(self.black_hole_index)
            self.black_hole_index = None
            logger.info("Black hole removed")
        else:
            body = black_hole_body(self.hints)
            if body is None:
                logger.warning("Preset %s has no black hole to add", self.preset_name)
                return False
            self.black_hole_index = system.append(body)
            logger.info("Black hole of %.3g mass units added at %s", body.mass, body.position)
        # Insertion order is stable and the black hole is always last, so the
        # ship index is unchanged; only the trail buffers need a new shape.
        self.trails.resize(system.n_bodies)
        self.kinematics.refresh(self.state)
        return self.black_hole_index is not None

    # -- stepping -------------------------------------------------------------

    def step(self, dt: float) -> bool:
        """Advance one atomic sub-step of size dt.

        Returns:
            True if the step was accepted, False if it diverged and the
            state was rolled back.

        Raises:
            ValueError: If dt is not positive and finite (no state change)
        """
        dt = self.integrator.check_dt(dt)
        checkpoint = self.state.copy()
        try:
            self.kinematics.apply_controls(self.state, dt)
            self.integrator.step(self.state, dt)
            self.kinematics.update(self.state, dt)
            if not self.state.system.is_finite():
                bad = self.state.system.non_finite_bodies()
                raise NumericDivergence(
                    f"Non-finite state after ship update for bodies {bad.tolist()}",
                    bad_bodies=bad.tolist(),
                )
        except NumericDivergence as exc:
            self.state = checkpoint
            self.rejected_steps += 1
            logger.warning("Step rejected and rolled back (%d so far): %s", self.rejected_steps, exc)
            return False

        self.trails.record(self.state.system.positions)
        return True

    def advance(self, wall_dt: float) -> FrameSnapshot:
        """Run one frame: scale/clamp wall time, sub-step, then snapshot."""
        for dt in self.clock.frame_steps(self.state, wall_dt):
            self.step(dt)
        return self.snapshot()

    def run(self, n_frames: int, wall_dt: float = 1.0 / 60.0) -> FrameSnapshot:
        """Advance ``n_frames`` frames at a fixed wall-clock delta."""
        snapshot = self.snapshot()
        for _ in range(n_frames):
            snapshot = self.advance(wall_dt)
        return snapshot

    # -- read-out -------------------------------------------------------------

    def relativistic_uniforms(self) -> Optional[RelativisticUniforms]:
        ship = self.state.ship
        if ship is None:
            return None
        view = self.kinematics.view_scalars(self.state)
        return RelativisticUniforms(
            gamma=float(ship.gamma),
            beta=float(ship.beta),
            beta_forward=float(view["beta_forward"]),
            proper_time=float(ship.proper_time),
            forward_doppler=float(view["forward_doppler"]),
            aberration_compression=float(view["aberration_compression"]),
            gravitational_factor=float(ship.gravitational_factor),
            elapsed_time=float(self.state.time),
            fuel=float(ship.fuel),
        )

    def snapshot(self) -> FrameSnapshot:
        """Immutable copy of the current frame for rendering."""
        return FrameSnapshot.capture(
            self.state,
            self.trails.trails(),
            preset=self.preset_name,
            hints=self.hints,
            relativistic=self.relativistic_uniforms(),
            show_trails=self.show_trails,
            show_grid=self.show_grid,
        )

    def energy(self):
        """(kinetic, potential, total) energy with the softened potential."""
        system = self.state.system
        return Diagnostics.for_state(self.state).compute_energies(
            system.positions, system.velocities, system.masses
        )

    def angular_momentum(self) -> np.ndarray:
        system = self.state.system
        return Diagnostics.for_state(self.state).compute_angular_momentum(
            system.positions, system.velocities, system.masses
        )

    @property
    def paused(self) -> bool:
        return self.state.paused

    @property
    def time(self) -> float:
        return self.state.time
