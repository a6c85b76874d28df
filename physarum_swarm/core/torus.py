"""
core/torus.py

Walk off the right edge, arrive on the left.

The toroidal wrap is the only thing that keeps organisms inside the
world after they move, so it has to be a true modulo: one period away
or a million periods away, the answer lands in [min, max).
"""

from __future__ import annotations
import numpy as np


def loop_coord(a: float, min_value: float, max_value: float) -> float:
    """
    Wrap a scalar into [min_value, max_value).

    Returns the unique value congruent to `a` modulo the span.
    """
    span = max_value - min_value
    if span <= 0:
        raise ValueError(
            f"Empty wrap interval: [{min_value}, {max_value})"
        )

    wrapped = min_value + (a - min_value) % span

    # (tiny negative) % span can round up to exactly span
    if wrapped >= max_value:
        wrapped = min_value
    return wrapped


def loop_coords(a: np.ndarray, min_value: float, max_value: float) -> np.ndarray:
    """Vectorised loop_coord over an array of coordinates."""
    span = max_value - min_value
    if span <= 0:
        raise ValueError(
            f"Empty wrap interval: [{min_value}, {max_value})"
        )

    wrapped = min_value + np.mod(np.asarray(a, dtype=np.float64) - min_value, span)
    return np.where(wrapped >= max_value, min_value, wrapped)
