"""
Physarum-Swarm: Emergent Transport Networks from Pheromone-Following Organisms

Organisms sense, turn, move and deposit on a toroidal pheromone field
that diffuses and decays. Networks emerge; nothing plans them.
"""

from physarum_swarm.core.config import SimulationConfig
from physarum_swarm.environments.slime_field import (
    SimulationState,
    SlimeField,
    initialize,
    reset,
    step,
)

__version__ = "0.1.0"

__all__ = [
    "SimulationConfig",
    "SimulationState",
    "SlimeField",
    "initialize",
    "reset",
    "step",
]
