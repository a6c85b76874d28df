"""
Tests for observations/visualize.py

Fields into pixels, and the host commands.
"""

import numpy as np
import pytest

from physarum_swarm.core.config import SimulationConfig
from physarum_swarm.core.errors import RenderConversionError
from physarum_swarm.environments.slime_field import SlimeField
from physarum_swarm.observations.visualize import (
    FieldVisualizer,
    animate_study,
    field_to_pixels,
    snapshot_path,
)


@pytest.fixture
def sim():
    return SlimeField(SimulationConfig(width=16, height=8, agent_count=20), seed=0)


class TestFieldToPixels:
    """Tests for the pixel conversion."""

    def test_grey_levels(self):
        """clamp(trunc(v * 128), 0, 255) on every colour channel."""
        values = np.array([[0.0, 0.5, 1.0], [1.999, 2.5, -1.0]])
        pixels = field_to_pixels(values)
        assert pixels.shape == (2, 3, 4)
        assert pixels.dtype == np.uint8
        np.testing.assert_array_equal(pixels[..., 0], [[0, 64, 128], [255, 255, 0]])
        np.testing.assert_array_equal(pixels[..., 0], pixels[..., 1])
        np.testing.assert_array_equal(pixels[..., 0], pixels[..., 2])

    def test_truncates_not_rounds(self):
        pixels = field_to_pixels(np.array([[0.0078125 * 1.99]]))
        assert pixels[0, 0, 0] == 1

    def test_fully_opaque(self):
        pixels = field_to_pixels(np.random.default_rng(0).random((4, 4)))
        assert np.all(pixels[..., 3] == 255)

    def test_non_finite_values(self):
        pixels = field_to_pixels(np.array([[np.nan, np.inf, -np.inf]]))
        np.testing.assert_array_equal(pixels[0, :, 0], [0, 255, 0])

    def test_shape_mismatch(self):
        with pytest.raises(RenderConversionError):
            field_to_pixels(np.zeros((4, 4)), expected_shape=(4, 5))

    def test_not_2d(self):
        with pytest.raises(RenderConversionError):
            field_to_pixels(np.zeros(16))


class TestSnapshotPath:
    """Tests for snapshot naming."""

    def test_named_after_program(self, monkeypatch, tmp_path):
        monkeypatch.setattr("sys.argv", ["/opt/bin/growth_demo.py"])
        assert snapshot_path(str(tmp_path)) == tmp_path / "growth_demo.png"

    def test_fallback_name(self, monkeypatch):
        monkeypatch.setattr("sys.argv", [""])
        assert snapshot_path().name == "physarum.png"


class TestFieldVisualizer:
    """Tests for the visualizer that do not need a display."""

    def test_conversion_failure_skips_frame(self, sim):
        """A bad frame is skipped; the simulation keeps going."""
        viz = FieldVisualizer(sim, display_shape=(32, 32))
        sim.step()
        assert viz.render() is False
        assert viz.frames_skipped == 1
        assert viz.frames_drawn == 0

        sim.step()
        assert sim.time == 2

    def test_reset_key(self, sim):
        viz = FieldVisualizer(sim)
        sim.run(3)
        viz.handle_key('r')
        assert sim.time == 0
        assert sim.field.total() == 0.0
        assert len(sim.colony) == 20

    def test_other_keys_ignored(self, sim):
        viz = FieldVisualizer(sim)
        sim.run(2)
        viz.handle_key('x')
        viz.handle_key(None)
        assert sim.time == 2

    def test_save_frame_without_figure(self, sim, tmp_path):
        """Saving before any render writes the raw pixel buffer."""
        matplotlib = pytest.importorskip("matplotlib")
        matplotlib.use("Agg")

        sim.run(3)
        path = tmp_path / "frame.png"
        FieldVisualizer(sim).save_frame(str(path))
        assert path.exists()
        assert path.stat().st_size > 0

    def test_snapshot_key(self, sim, tmp_path, monkeypatch):
        matplotlib = pytest.importorskip("matplotlib")
        matplotlib.use("Agg")

        monkeypatch.setattr("sys.argv", ["observe.py"])
        monkeypatch.chdir(tmp_path)
        viz = FieldVisualizer(sim)
        viz.handle_key('s')
        assert (tmp_path / "observe.png").exists()

    def test_render_draws(self, sim):
        matplotlib = pytest.importorskip("matplotlib")
        matplotlib.use("Agg")

        viz = FieldVisualizer(sim)
        try:
            sim.step()
            assert viz.render() is True
            sim.step()
            assert viz.render() is True
            assert viz.frames_drawn == 2
        finally:
            viz.close()


class TestAnimateStudy:
    """Tests for animate_study()."""

    def test_steps_and_saves(self, sim, tmp_path):
        """One step per frame, final frame written to disk."""
        matplotlib = pytest.importorskip("matplotlib")
        matplotlib.use("Agg")

        path = tmp_path / "study.png"
        animate_study(sim, steps=3, save_path=str(path))
        assert sim.time == 3
        assert path.exists()
        assert path.stat().st_size > 0

    def test_without_save_path(self, sim, tmp_path, monkeypatch):
        matplotlib = pytest.importorskip("matplotlib")
        matplotlib.use("Agg")

        monkeypatch.chdir(tmp_path)
        animate_study(sim, steps=2)
        assert sim.time == 2
        assert list(tmp_path.iterdir()) == []
