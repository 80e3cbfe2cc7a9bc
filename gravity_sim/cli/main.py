"""CLI main entry point."""

import argparse
import logging
import sys
from dataclasses import replace

import yaml

from gravity_sim import commands
from gravity_sim.errors import SimulationError
from gravity_sim.physics.diagnostics import relative_drift
from gravity_sim.physics.integrators import INTEGRATORS
from gravity_sim.physics.simulator import Simulator
from gravity_sim.presets import PresetKind
from gravity_sim.utils.config import Config, LOG_LEVELS, load_config


logger = logging.getLogger(__name__)


def build_config(args) -> Config:
    """Config file values, overridden by any flags given on the command line."""
    config = load_config(args.config) if args.config else Config()
    overrides = {}
    if args.preset is not None:
        overrides['preset'] = args.preset
    if args.time_scale is not None:
        overrides['time_scale'] = args.time_scale
    if args.integrator is not None:
        overrides['integrator'] = args.integrator
    if args.log_level is not None:
        overrides['log_level'] = args.log_level
    if args.preset is not None and args.preset != config.preset:
        # Options of one preset are meaningless for another
        overrides['preset_params'] = {}
    return replace(config, **overrides)


def print_row(sim: Simulator, frame: int, E0: float):
    K, U, E = sim.energy()
    Ly = float(sim.angular_momentum()[1])
    dE = relative_drift(E0, E) * 100
    row = f"{frame:<8} {sim.time:<12.4f} {K:<14.6g} {U:<14.6g} {E:<14.6g} {Ly:<14.6g} {dE:<10.4f}%"
    ship = sim.state.ship
    if ship is not None:
        row += f" {ship.beta:<10.3e} {ship.gamma:<12.9f} {ship.proper_time:<12.4f} {ship.fuel * 100:<6.1f}%"
    print(row)


def run_simulation(args, config: Config):
    """Run a headless simulation and print a diagnostics table."""
    sim = Simulator.from_config(config)

    if args.black_hole:
        sim.apply(commands.ToggleBlackHole())
    if args.thrust:
        sim.apply(commands.Thrust('forward', args.thrust))

    print(f"Running simulation: {sim.preset_name} with {sim.state.system.n_bodies} bodies")
    print(f"Integrator: {sim.integrator.name}, time scale: {sim.state.time_scale:.4g}, "
          f"max dt: {sim.clock.max_dt:.4g}, substeps: {sim.clock.substeps}, eps: {sim.state.softening:.4g}")

    _, _, E0 = sim.energy()
    header = f"{'Frame':<8} {'Time':<12} {'K':<14} {'U':<14} {'E':<14} {'Ly':<14} {'dE/E0':<10}"
    if sim.state.ship is not None:
        header += f" {'beta':<10} {'gamma':<12} {'tau':<12} {'fuel':<7}"
    print(header)
    print("-" * len(header))
    print_row(sim, 0, E0)

    wall_dt = 1.0 / args.fps
    for frame in range(1, args.frames + 1):
        sim.advance(wall_dt)
        if frame % args.debug_every == 0 or frame == args.frames:
            print_row(sim, frame, E0)

    if sim.rejected_steps:
        print(f"Rejected steps: {sim.rejected_steps}")
    print("Simulation complete!")
    return sim


def main(argv=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Gravity Simulator - headless N-body runner")

    parser.add_argument('--preset', type=str, default=None,
                       choices=PresetKind.names(),
                       help='Preset scenario (default: solar_system, or the config file value)')
    parser.add_argument('--frames', type=int, default=600,
                       help='Number of frames to simulate')
    parser.add_argument('--fps', type=float, default=60.0,
                       help='Simulated wall-clock frame rate')
    parser.add_argument('--time-scale', type=float, default=None,
                       help='Simulated time per wall-clock second (default: preset hint)')
    parser.add_argument('--integrator', type=str, default=None,
                       choices=list(INTEGRATORS),
                       help='Numerical integrator (default: leapfrog)')
    parser.add_argument('--thrust', type=float, default=0.0,
                       help='Hold the ship forward throttle at this level in [-1, 1]')
    parser.add_argument('--black-hole', action='store_true',
                       help="Drop the preset's rogue black hole into the scene")
    parser.add_argument('--config', type=str, default=None,
                       help='Config file (.json or .yaml)')
    parser.add_argument('--debug-every', type=int, default=60,
                       help='Print diagnostics every N frames')
    parser.add_argument('--log-level', type=str, default=None,
                       choices=LOG_LEVELS,
                       help='Logging level (default: INFO)')
    parser.add_argument('--list-presets', action='store_true',
                       help='List available presets and exit')

    args = parser.parse_args(argv)

    if args.list_presets:
        print("Available presets:")
        for name in PresetKind.names():
            print(f"  - {name}")
        return 0

    if args.frames < 0 or args.fps <= 0 or args.debug_every < 1:
        parser.error("--frames must be >= 0, --fps > 0 and --debug-every >= 1")

    try:
        config = build_config(args)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"Invalid configuration: {exc}")
        return 1

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        run_simulation(args, config)
    except SimulationError as exc:
        logger.error("Simulation failed: %s", exc)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
