"""Configuration management."""

import json
import yaml
from typing import Dict, Any, Optional
from pathlib import Path
from dataclasses import dataclass, asdict, fields

from gravity_sim.errors import ConfigurationError
from gravity_sim.physics.integrators import INTEGRATORS


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """Engine configuration (not a save file)."""
    # Scenario
    preset: str = "solar_system"
    preset_params: Dict[str, Any] = None

    # Clock; None means "use the preset's hint"
    time_scale: Optional[float] = None
    max_dt: Optional[float] = None
    substeps: Optional[int] = None
    integrator: str = "leapfrog"

    # Trails
    trail_capacity: int = 200
    trail_interval: int = 1

    # Display flags passed through to snapshots
    show_trails: bool = True
    show_grid: bool = False

    log_level: str = "INFO"

    def __post_init__(self):
        if self.preset_params is None:
            self.preset_params = {}
        self.validate()

    def validate(self):
        """Raise ConfigurationError on values the engine cannot run with."""
        if not isinstance(self.preset_params, dict):
            raise ConfigurationError(f"preset_params must be a mapping, got {type(self.preset_params).__name__}")
        for key in ("time_scale", "max_dt"):
            value = getattr(self, key)
            if value is not None and not value > 0:
                raise ConfigurationError(f"{key} must be positive, got {value}")
        if self.substeps is not None and self.substeps < 1:
            raise ConfigurationError(f"substeps must be >= 1, got {self.substeps}")
        if self.trail_capacity < 1:
            raise ConfigurationError(f"trail_capacity must be >= 1, got {self.trail_capacity}")
        if self.trail_interval < 1:
            raise ConfigurationError(f"trail_interval must be >= 1, got {self.trail_interval}")
        if self.integrator.lower() not in INTEGRATORS:
            raise ConfigurationError(
                f"Unknown integrator: {self.integrator}. Available: {list(INTEGRATORS)}"
            )
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level: {self.log_level}")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Config":
        """Build a Config, rejecting keys it does not know."""
        data = data or {}
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {unknown}")
        return cls(**data)


def load_config(config_path: str) -> Config:
    """Load configuration from file.

    Args:
        config_path: Path to config file (.json or .yaml)

    Returns:
        Config object
    """
    config_path = Path(config_path)

    with open(config_path, 'r') as f:
        if config_path.suffix == '.yaml' or config_path.suffix == '.yml':
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    if data is not None and not isinstance(data, dict):
        raise ConfigurationError(f"{config_path}: top level must be a mapping")
    return Config.from_dict(data)


def save_config(config: Config, output_path: str):
    """Save configuration to file.

    Args:
        config: Config object
        output_path: Output file path (.json or .yaml)
    """
    output_path = Path(output_path)
    data = asdict(config)

    with open(output_path, 'w') as f:
        if output_path.suffix == '.yaml' or output_path.suffix == '.yml':
            yaml.dump(data, f, default_flow_style=False)
        else:
            json.dump(data, f, indent=2)
