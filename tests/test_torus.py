"""
Tests for core/torus.py

Wraparound arithmetic on the torus.
"""

import numpy as np
import pytest

from physarum_swarm.core.torus import loop_coord, loop_coords


class TestLoopCoord:
    """Tests for the scalar wrap."""

    def test_in_range_unchanged(self):
        """Values already in range come back as-is."""
        assert loop_coord(0.0, 0.0, 512.0) == 0.0
        assert loop_coord(256.25, 0.0, 512.0) == 256.25
        assert loop_coord(511.999, 0.0, 512.0) == 511.999

    def test_one_period_out(self):
        """Just past either edge lands just inside the other."""
        assert loop_coord(513.0, 0.0, 512.0) == 1.0
        assert loop_coord(-1.0, 0.0, 512.0) == 511.0

    def test_upper_bound_is_exclusive(self):
        """Exactly max wraps to min."""
        assert loop_coord(512.0, 0.0, 512.0) == 0.0

    def test_far_out_of_range(self):
        """Many periods away still wraps correctly."""
        assert loop_coord(512.0 * 1000 + 3.5, 0.0, 512.0) == pytest.approx(3.5)
        assert loop_coord(-512.0 * 1000 + 3.5, 0.0, 512.0) == pytest.approx(3.5)
        assert 0.0 <= loop_coord(1e300, 0.0, 512.0) < 512.0

    def test_tiny_negative_does_not_reach_max(self):
        """Rounding up to max folds back to min."""
        result = loop_coord(-1e-20, 0.0, 512.0)
        assert 0.0 <= result < 512.0

    def test_nonzero_min(self):
        """Intervals not starting at zero."""
        assert loop_coord(12.0, -5.0, 5.0) == pytest.approx(2.0)
        assert loop_coord(-6.0, -5.0, 5.0) == pytest.approx(4.0)

    def test_range_and_congruence(self):
        """Result is in range and congruent to the input."""
        rng = np.random.default_rng(0)
        for a in rng.uniform(-1e5, 1e5, size=500):
            r = loop_coord(float(a), 0.0, 512.0)
            assert 0.0 <= r < 512.0
            periods = (a - r) / 512.0
            assert abs(periods - round(periods)) < 1e-6

    def test_idempotent(self):
        """Wrapping twice is the same as wrapping once."""
        for a in [-700.5, -0.25, 3.0, 511.5, 1024.75]:
            once = loop_coord(a, 0.0, 512.0)
            assert loop_coord(once, 0.0, 512.0) == once

    def test_empty_interval_rejected(self):
        """min >= max has no valid result."""
        with pytest.raises(ValueError):
            loop_coord(1.0, 5.0, 5.0)
        with pytest.raises(ValueError):
            loop_coord(1.0, 5.0, 0.0)


class TestLoopCoords:
    """Tests for the array wrap."""

    def test_matches_scalar(self):
        """Array version agrees with the scalar version."""
        a = np.array([-513.0, -1.0, 0.0, 100.5, 512.0, 1030.0])
        expected = [loop_coord(float(v), 0.0, 512.0) for v in a]
        np.testing.assert_allclose(loop_coords(a, 0.0, 512.0), expected)

    def test_all_in_range(self):
        """Every element lands in [min, max)."""
        a = np.random.default_rng(1).uniform(-1e4, 1e4, size=1000)
        out = loop_coords(a, 0.0, 512.0)
        assert np.all(out >= 0.0)
        assert np.all(out < 512.0)

    def test_empty_interval_rejected(self):
        with pytest.raises(ValueError):
            loop_coords(np.zeros(3), 1.0, 1.0)
