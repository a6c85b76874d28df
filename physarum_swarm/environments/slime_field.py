"""
environments/slime_field.py

A toroidal dish of pheromone and the organisms that walk it.

One tick, five phases, always in this order:
steer, move, deposit, diffuse, decay.
Nothing is skipped. Nothing converges. It just grows.

Inspired by:
- Physarum transport networks
- Reaction-diffusion sandboxes
- Frame-driven particle simulations
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional
import logging
import numpy as np

from physarum_swarm.core.config import SimulationConfig
from physarum_swarm.core.field import Field
from physarum_swarm.core.organism import Colony, Organism, deposit, move, steer

logger = logging.getLogger(__name__)


@dataclass
class SimulationState:
    """
    Everything one simulation owns.

    Passed explicitly into step/reset and to renderers. The field and
    the colony are only ever replaced together, between steps.
    """
    config: SimulationConfig
    colony: Colony
    field: Field
    rng: np.random.Generator
    time: int = 0


def _populate(config: SimulationConfig, rng: np.random.Generator):
    """Fresh colony and zeroed field. Shared by initialize and reset."""
    colony = Colony.random(config.agent_count, config.width, config.height, rng)
    field = Field.zeros(config.width, config.height)
    return colony, field


def initialize(
    agent_count: Optional[int] = None,
    seed: Optional[int] = None,
    config: Optional[SimulationConfig] = None
) -> SimulationState:
    """
    Build a new simulation.

    Randomness is confined here and to reset(): the same seed gives the
    same organisms, and from then on every step is deterministic.
    """
    config = config or SimulationConfig()
    if agent_count is not None:
        config = config.replace(agent_count=agent_count)
    config.validate()

    rng = np.random.default_rng(seed)
    colony, field = _populate(config, rng)

    logger.info(
        f"Initialized {config.width}x{config.height} field "
        f"with {len(colony)} organisms (seed={seed})"
    )
    return SimulationState(config=config, colony=colony, field=field, rng=rng)


def step(state: SimulationState) -> SimulationState:
    """
    Advance the simulation by one tick.

    1. Steer every organism from the previous field
    2. Move every organism, wrapping on the torus
    3. Deposit at the new positions
    4. Mix in the periodic Laplacian of the post-deposit field
    5. Decay every cell
    """
    config = state.config

    # Phase 1: Steering (reads only)
    steer(state.colony, state.field, config)

    # Phase 2: Motion
    move(state.colony, config)

    # Phase 3: Deposit
    deposit(state.colony, state.field, config.deposit_amount)

    # Phase 4: Diffusion
    state.field.combine(state.field.laplacian(config.diffusion_dx), config.diffusion_mix)

    # Phase 5: Decay
    retain = 1.0 - config.decay
    state.field.map(lambda v: v * retain)

    state.time += 1
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Step {state.time}: field total={state.field.total():.4f}")
    return state


def reset(state: SimulationState, seed: Optional[int] = None) -> SimulationState:
    """
    Scatter a new colony and clear the field.

    Both are built first and swapped in together. With a seed the
    generator is reseeded; otherwise it continues its stream.
    """
    if seed is not None:
        state.rng = np.random.default_rng(seed)

    colony, field = _populate(state.config, state.rng)
    state.colony, state.field = colony, field
    state.time = 0

    logger.info(f"Reset simulation with {len(colony)} organisms")
    return state


class SlimeField:
    """
    2D toroidal environment for growth experiments.

    Features:
    - Non-wrapping sensing, wrapping motion and diffusion
    - Seeded, reproducible initialization and reset
    - Read-only field view for observers
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        seed: Optional[int] = None
    ):
        self.state = initialize(seed=seed, config=config)

    @classmethod
    def from_organisms(
        cls,
        organisms: Iterable[Organism],
        config: Optional[SimulationConfig] = None,
        seed: Optional[int] = None
    ) -> SlimeField:
        """
        Start from explicit organisms instead of a random scatter.

        A later reset() still scatters config.agent_count organisms.
        """
        config = (config or SimulationConfig()).validate()
        sim = cls(config=config.replace(agent_count=0), seed=seed)
        sim.place(organisms)
        sim.state.config = config
        return sim

    @property
    def config(self) -> SimulationConfig:
        return self.state.config

    @property
    def colony(self) -> Colony:
        return self.state.colony

    @property
    def field(self) -> Field:
        return self.state.field

    @property
    def time(self) -> int:
        return self.state.time

    def place(self, organisms: Iterable[Organism]) -> None:
        """Replace the colony with the given organisms."""
        self.state.colony = Colony.from_organisms(organisms)

    def step(self) -> None:
        step(self.state)

    def run(self, steps: int) -> None:
        for _ in range(steps):
            step(self.state)

    def reset(self, seed: Optional[int] = None) -> None:
        reset(self.state, seed=seed)

    def field_view(self) -> np.ndarray:
        """Read-only (width, height) view of the pheromone field."""
        return self.state.field.view()

    def field_stats(self) -> dict:
        return self.state.field.stats()

    def get_positions(self) -> np.ndarray:
        return self.state.colony.positions()

    def __repr__(self) -> str:
        return (
            f"SlimeField(organisms={len(self.state.colony)}, "
            f"time={self.state.time}, "
            f"total={self.state.field.total():.2f})"
        )
