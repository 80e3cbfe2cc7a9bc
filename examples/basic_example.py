"""Basic example of using the gravity simulator."""

from gravity_sim import Simulator
from gravity_sim import commands


def main():
    """Fly the ship out of the solar system with the rogue black hole on its way in."""
    sim = Simulator("solar_system")
    sim.apply(commands.ToggleBlackHole())
    sim.apply(commands.Thrust("forward", 1.0))

    print("Running simulation...")
    _, _, E = sim.energy()
    print(f"Initial energy: {E:.6e}")

    for step in range(600):
        frame = sim.advance(1.0 / 60.0)
        if step % 100 == 0:
            rel = frame.relativistic
            print(f"Frame {step}: Time={frame.elapsed_time:.3f} yr, beta={rel.beta:.4f}, "
                  f"gamma={rel.gamma:.4f}, tau={rel.proper_time:.3f}, "
                  f"doppler={rel.forward_doppler:.3f}, fuel={rel.fuel:.1%}")

    print(f"Final energy: {sim.energy()[2]:.6e}")
    print(f"Rejected steps: {sim.rejected_steps}")
    print("Simulation complete!")


if __name__ == "__main__":
    main()
