"""Exception hierarchy for the gravity simulator.

Configuration problems are raised synchronously when a scenario is loaded.
Numeric problems during integration are raised by the integrator and
contained by the simulator, which rolls the state back.
"""


class SimulationError(Exception):
    """Base exception for simulation-related errors."""
    pass


class NumericDivergence(SimulationError, ArithmeticError):
    """Raised when a step produces NaN or infinite positions/velocities."""

    def __init__(self, message: str, bad_bodies=None):
        super().__init__(message)
        self.bad_bodies = list(bad_bodies) if bad_bodies is not None else []


class InvalidPreset(SimulationError, ValueError):
    """Raised when an unknown scenario name is requested."""

    def __init__(self, name: str, available=None):
        self.name = name
        self.available = list(available) if available is not None else []
        message = f"Unknown preset: {name!r}"
        if self.available:
            message += f". Available: {self.available}"
        super().__init__(message)


class DegenerateConfiguration(SimulationError, ValueError):
    """Raised when a scenario carries non-physical parameters (mass, softening, G)."""
    pass


class ConfigurationError(SimulationError, ValueError):
    """Raised when a configuration file or Config object is invalid."""
    pass
