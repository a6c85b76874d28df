"""
core/config.py

The fixed laws of the dish.

Every constant the simulation depends on lives here, with its default.
Nothing else in the package hard-codes a number.
"""

from __future__ import annotations
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging
import math
import os

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# The literal the growth rules were tuned with; not math.pi.
PI = 3.1415926535


def _as_int(name: str, value: Any) -> int:
    """Integral value or ConfigurationError; 64.0 and "64" pass, 64.7 does not."""
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid value for {name}: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid value for {name}: {value!r}") from e
    if not math.isfinite(number) or number != int(number):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    return int(number)


@dataclass
class SimulationConfig:
    """Configuration for one slime field simulation."""
    width: int = 512                        # Grid cells along x
    height: int = 512                       # Grid cells along y
    agent_count: int = 10000                # Organisms created on init/reset
    sensor_length: float = 2.0              # Probe distance ahead of an organism
    sensor_angle: float = PI * 2.0 * 0.1    # Angular offset of left/right probes
    turn_rate: float = PI * 2.0 * 0.05      # Heading change per steering decision
    speed: float = 2.0                      # Distance moved per step
    deposit_amount: float = 0.3             # Pheromone added per organism per step
    decay: float = 0.02                     # Fraction of pheromone lost per step
    diffusion_dx: float = 2.0               # Grid spacing of the Laplacian stencil
    diffusion_mix: float = 0.1              # Weight of the Laplacian added per step

    def validate(self) -> SimulationConfig:
        """Refuse configurations no simulation can be built from."""
        self.width = _as_int("width", self.width)
        self.height = _as_int("height", self.height)
        self.agent_count = _as_int("agent_count", self.agent_count)

        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"Grid size must be positive, got {self.width}x{self.height}"
            )
        if self.agent_count < 0:
            raise ConfigurationError(
                f"Agent count must be a non-negative integer, got {self.agent_count}"
            )
        if self.diffusion_dx <= 0:
            raise ConfigurationError(
                f"Diffusion spacing must be positive, got {self.diffusion_dx}"
            )
        if self.speed < 0 or self.sensor_length < 0:
            raise ConfigurationError("Speed and sensor length cannot be negative")
        return self

    def replace(self, **changes: Any) -> SimulationConfig:
        """Copy with some fields changed."""
        values = asdict(self)
        values.update(changes)
        return type(self).from_dict(values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> SimulationConfig:
        """Build a config from a mapping, rejecting unknown keys."""
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown config keys: {', '.join(unknown)}")

        values: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            if f.type in ("int", int):
                values[f.name] = _as_int(f.name, data[f.name])
                continue
            try:
                values[f.name] = float(data[f.name])
            except (TypeError, ValueError) as e:
                raise ConfigurationError(
                    f"Invalid value for {f.name}: {data[f.name]!r}"
                ) from e

        return cls(**values).validate()

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> SimulationConfig:
        """Load a config from a YAML mapping."""
        path = Path(path)
        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Expected a mapping in {path}")

        logger.info(f"Loaded simulation config from {path}")
        return cls.from_dict(data)

    @classmethod
    def from_env(cls, prefix: str = "PHYSARUM_") -> SimulationConfig:
        """Create config from environment variables, e.g. PHYSARUM_AGENT_COUNT."""
        data = {}
        for f in fields(cls):
            key = prefix + f.name.upper()
            if key in os.environ:
                data[f.name] = os.environ[key]
        return cls.from_dict(data)
