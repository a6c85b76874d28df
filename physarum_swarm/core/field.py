"""
core/field.py

The environment as memory.

Organisms never speak to each other. They leave pheromone behind,
and the pheromone spreads and fades. Whatever pattern emerges is
written here first.

Inspired by:
- Physarum polycephalum trail networks
- Ant pheromone trails
- Heat equation on a torus
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional, Tuple
import numpy as np


@dataclass(frozen=True)
class FieldSample:
    """
    The result of reading one cell.

    A probe outside the grid is not an error, just a reading that
    did not happen: ok is False and value carries nothing.
    """
    value: float = 0.0
    ok: bool = False

    @classmethod
    def hit(cls, value: float) -> FieldSample:
        return cls(value=float(value), ok=True)

    @classmethod
    def miss(cls) -> FieldSample:
        return cls()


def roll(a: np.ndarray, shift: Tuple[int, int]) -> np.ndarray:
    """
    Cyclic shift of a whole grid.

    roll(a, (1, 0))[i, j] == a[i - 1, j], with index -1 meaning the last
    row. This is what makes the stencil periodic.
    """
    return np.roll(a, shift=shift, axis=(0, 1))


def laplacian(x: np.ndarray, dx: float) -> np.ndarray:
    """
    Discrete 4-neighbour Laplacian with periodic boundaries.

        r = (x[i+1,j] + x[i-1,j] + x[i,j+1] + x[i,j-1] - 4 x[i,j]) / dx^2

    Neighbours wrap at every edge. The output sums to zero over the grid.
    """
    ux_r = roll(x, (1, 0))
    ux_l = roll(x, (-1, 0))
    uy_r = roll(x, (0, 1))
    uy_l = roll(x, (0, -1))
    return (ux_r + uy_r + ux_l + uy_l - 4.0 * x) / dx / dx


class Field:
    """
    Dense pheromone grid of shape (width, height), indexed [x, y].

    Reads do not wrap: the stencil does, sensing does not.
    """

    def __init__(self, values: np.ndarray):
        values = np.asarray(values, dtype=np.float64)
        if values.ndim != 2:
            raise ValueError(f"Field must be 2D, got shape {values.shape}")
        self.values = values

    @classmethod
    def zeros(cls, width: int, height: int) -> Field:
        return cls(np.zeros((width, height), dtype=np.float64))

    @property
    def width(self) -> int:
        return self.values.shape[0]

    @property
    def height(self) -> int:
        return self.values.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.values.shape

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    # ==================== Cell Access ====================

    def get(self, x: int, y: int) -> FieldSample:
        """Concentration at cell (x, y), or a miss outside the grid."""
        if not self.in_bounds(x, y):
            return FieldSample.miss()
        return FieldSample.hit(self.values[x, y])

    def set(self, x: int, y: int, value: float) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell ({x}, {y}) outside {self.width}x{self.height} field")
        self.values[x, y] = value

    def add(self, x: int, y: int, amount: float) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell ({x}, {y}) outside {self.width}x{self.height} field")
        self.values[x, y] += amount

    def sample_many(self, xs: np.ndarray, ys: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Vectorised get().

        Returns (values, ok). Where ok is False the value is 0.0 and
        must not be used.
        """
        xs = np.asarray(xs, dtype=np.int64)
        ys = np.asarray(ys, dtype=np.int64)
        ok = (xs >= 0) & (xs < self.width) & (ys >= 0) & (ys < self.height)

        values = np.zeros(xs.shape, dtype=np.float64)
        values[ok] = self.values[xs[ok], ys[ok]]
        return values, ok

    def deposit_many(self, xs: np.ndarray, ys: np.ndarray, amount: float) -> None:
        """Add `amount` once per (x, y) pair; repeated cells accumulate."""
        xs = np.asarray(xs, dtype=np.int64)
        ys = np.asarray(ys, dtype=np.int64)
        if xs.size == 0:
            return
        if xs.min() < 0 or ys.min() < 0 or xs.max() >= self.width or ys.max() >= self.height:
            raise IndexError("Deposit outside the field")
        np.add.at(self.values, (xs, ys), amount)

    # ==================== Whole-Grid Transforms ====================

    def map(self, fn: Callable[[np.ndarray], np.ndarray]) -> None:
        """Apply an elementwise function to every cell."""
        self.values = np.asarray(fn(self.values), dtype=np.float64)

    def combine(self, other: np.ndarray, scale: float = 1.0) -> None:
        """Add a same-shaped grid, optionally scaled."""
        other = other.values if isinstance(other, Field) else np.asarray(other)
        if other.shape != self.values.shape:
            raise ValueError(
                f"Cannot combine {other.shape} grid into {self.values.shape} field"
            )
        self.values = self.values + other * scale

    def laplacian(self, dx: float) -> np.ndarray:
        return laplacian(self.values, dx)

    def clear(self) -> None:
        self.values.fill(0.0)

    def view(self) -> np.ndarray:
        """Read-only view for renderers."""
        v = self.values.view()
        v.flags.writeable = False
        return v

    # ==================== Monitoring ====================

    def total(self) -> float:
        return float(self.values.sum())

    def stats(self, threshold: Optional[float] = None) -> dict:
        """Summary numbers for observation."""
        threshold = 0.0 if threshold is None else threshold
        return {
            "total": self.total(),
            "max": float(self.values.max()),
            "mean": float(self.values.mean()),
            "coverage": float((self.values > threshold).mean()),
        }

    def __repr__(self) -> str:
        return f"Field({self.width}x{self.height}, total={self.total():.2f})"
