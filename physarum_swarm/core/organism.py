"""
core/organism.py

An organism should be like a cell:
it smells, it turns, it walks, it leaves a trace.

Three probes. One rule. No memory beyond a heading.

Inspired by:
- Physarum polycephalum foraging
- Jones (2010) agent-based slime mould model
- Ant trail following
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, NamedTuple, Optional
import math
import numpy as np

from .config import PI, SimulationConfig
from .field import Field, FieldSample
from .torus import loop_coords


@dataclass
class Organism:
    """
    What an organism IS at this moment.

    Position is continuous. Heading is in radians and never normalised;
    only its cosine and sine matter.
    """
    x: float
    y: float
    angle: float

    def __post_init__(self):
        self.x = float(self.x)
        self.y = float(self.y)
        self.angle = float(self.angle)


class Readings(NamedTuple):
    """What the three probes of one organism found."""
    forward: FieldSample
    left: FieldSample
    right: FieldSample

    @property
    def complete(self) -> bool:
        return self.forward.ok and self.left.ok and self.right.ok


class Colony:
    """
    Every organism in the dish, stored column-wise.

    x, y and angle are parallel float64 arrays. Each organism only ever
    touches its own row, so whole-array passes compute the same thing a
    per-organism loop would.
    """

    def __init__(self, x: np.ndarray, y: np.ndarray, angle: np.ndarray):
        self.x = np.array(x, dtype=np.float64)
        self.y = np.array(y, dtype=np.float64)
        self.angle = np.array(angle, dtype=np.float64)
        if not (self.x.shape == self.y.shape == self.angle.shape) or self.x.ndim != 1:
            raise ValueError("Colony arrays must be 1D and of equal length")

    @classmethod
    def random(
        cls,
        count: int,
        width: float,
        height: float,
        rng: Optional[np.random.Generator] = None
    ) -> Colony:
        """Scatter organisms uniformly over the domain with uniform headings."""
        rng = rng if rng is not None else np.random.default_rng()
        # One (x, y, angle) triple per organism, drawn in that order
        u = rng.random((count, 3))
        return cls(
            x=u[:, 0] * width,
            y=u[:, 1] * height,
            angle=u[:, 2] * 2.0 * PI,
        )

    @classmethod
    def from_organisms(cls, organisms: Iterable[Organism]) -> Colony:
        organisms = list(organisms)
        return cls(
            x=[o.x for o in organisms],
            y=[o.y for o in organisms],
            angle=[o.angle for o in organisms],
        )

    def __len__(self) -> int:
        return len(self.x)

    def __getitem__(self, i: int) -> Organism:
        return Organism(self.x[i], self.y[i], self.angle[i])

    def __iter__(self) -> Iterator[Organism]:
        for i in range(len(self)):
            yield self[i]

    def positions(self) -> np.ndarray:
        """(n, 2) array of positions."""
        return np.column_stack([self.x, self.y])

    def __repr__(self) -> str:
        return f"Colony(n={len(self)})"


# ==================== Sensing & Steering ====================

def probe_cell(x: float, y: float, angle: float, length: float) -> tuple:
    """
    Integer cell `length` ahead along `angle`.

    Truncated toward zero, negatives saturate to 0: only the high edges
    can produce a miss.
    """
    return (
        max(0, int(x + math.cos(angle) * length)),
        max(0, int(y + math.sin(angle) * length)),
    )


def sense(organism: Organism, field: Field, config: SimulationConfig) -> Readings:
    """Read forward, left and right probes. No wraparound."""
    a = organism.angle
    fx, fy = probe_cell(organism.x, organism.y, a, config.sensor_length)
    lx, ly = probe_cell(organism.x, organism.y, a - config.sensor_angle, config.sensor_length)
    rx, ry = probe_cell(organism.x, organism.y, a + config.sensor_angle, config.sensor_length)
    return Readings(
        forward=field.get(fx, fy),
        left=field.get(lx, ly),
        right=field.get(rx, ry),
    )


def turn(forward: float, left: float, right: float) -> int:
    """
    The steering rule.

    -1 turns right (angle decreases), +1 turns left, 0 goes straight.
    Ties and both-sides-higher/lower go straight.
    """
    if forward < left and forward > right:
        return -1
    elif forward > left and forward < right:
        return 1
    return 0


def steer_one(organism: Organism, field: Field, config: SimulationConfig) -> Organism:
    """Steer a single organism in place."""
    readings = sense(organism, field, config)
    if not readings.complete:
        return organism

    direction = turn(readings.forward.value, readings.left.value, readings.right.value)
    organism.angle += direction * config.turn_rate
    return organism


def steer(colony: Colony, field: Field, config: SimulationConfig) -> None:
    """
    Steer every organism from the same field snapshot.

    An organism with any probe past the high edges keeps its heading
    this step.
    """
    if len(colony) == 0:
        return

    def sample(offset: float):
        angles = colony.angle + offset
        px = np.maximum(np.trunc(colony.x + np.cos(angles) * config.sensor_length), 0)
        py = np.maximum(np.trunc(colony.y + np.sin(angles) * config.sensor_length), 0)
        return field.sample_many(px, py)

    forward, ok_f = sample(0.0)
    left, ok_l = sample(-config.sensor_angle)
    right, ok_r = sample(config.sensor_angle)

    sensed = ok_f & ok_l & ok_r
    turn_right = sensed & (forward < left) & (forward > right)
    turn_left = sensed & (forward > left) & (forward < right)

    colony.angle[turn_right] -= config.turn_rate
    colony.angle[turn_left] += config.turn_rate


# ==================== Motion & Deposit ====================

def move(colony: Colony, config: SimulationConfig) -> None:
    """Advance along headings, wrapping onto the torus."""
    colony.x = loop_coords(colony.x + np.cos(colony.angle) * config.speed, 0.0, config.width)
    colony.y = loop_coords(colony.y + np.sin(colony.angle) * config.speed, 0.0, config.height)


def deposit(colony: Colony, field: Field, amount: float) -> None:
    """Each organism adds `amount` to the cell it stands on."""
    field.deposit_many(colony.x.astype(np.int64), colony.y.astype(np.int64), amount)
