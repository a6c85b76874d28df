"""
Core components of the physarum-swarm system.

- field: The pheromone grid and its periodic stencil
- torus: Wraparound arithmetic
- organism: Sensing, steering, motion and deposit
- config: The constants of the dish
"""

from .config import SimulationConfig, PI
from .errors import ConfigurationError, RenderConversionError
from .field import Field, FieldSample, laplacian
from .organism import Organism, Colony
from .torus import loop_coord, loop_coords

__all__ = [
    "SimulationConfig",
    "PI",
    "ConfigurationError",
    "RenderConversionError",
    "Field",
    "FieldSample",
    "laplacian",
    "Organism",
    "Colony",
    "loop_coord",
    "loop_coords",
]
