"""
observations/visualize.py

Watch. Learn. Adjust.

The simulation only produces numbers. This is where they become
pixels: one grey level per cell, brighter where the trail is thick.

Inspired by:
- Scientific visualization
- Petri dish time-lapse photography
"""

from __future__ import annotations
from pathlib import Path
from typing import Optional, Tuple, TYPE_CHECKING
import logging
import sys
import numpy as np

from physarum_swarm.core.errors import RenderConversionError

if TYPE_CHECKING:
    from physarum_swarm.environments.slime_field import SlimeField

logger = logging.getLogger(__name__)

# Pheromone units mapped to one grey level
BRIGHTNESS = 128.0


def field_to_pixels(
    values: np.ndarray,
    expected_shape: Optional[Tuple[int, int]] = None
) -> np.ndarray:
    """
    Convert a field to an RGBA uint8 buffer.

    Each cell becomes clamp(trunc(v * 128), 0, 255) on all three colour
    channels, fully opaque. The buffer keeps the field's (x, y) layout,
    so its shape is (width, height, 4).
    """
    values = np.asarray(values, dtype=np.float64)
    if values.ndim != 2:
        raise RenderConversionError(f"Expected a 2D field, got shape {values.shape}")
    if expected_shape is not None and tuple(values.shape) != tuple(expected_shape):
        raise RenderConversionError(
            f"Field shape {values.shape} does not match display {tuple(expected_shape)}"
        )

    scaled = np.nan_to_num(np.trunc(values * BRIGHTNESS), nan=0.0)
    grey = np.clip(scaled, 0, 255).astype(np.uint8)

    pixels = np.empty((*values.shape, 4), dtype=np.uint8)
    pixels[..., 0] = grey
    pixels[..., 1] = grey
    pixels[..., 2] = grey
    pixels[..., 3] = 255
    return pixels


def snapshot_path(directory: Optional[str] = None) -> Path:
    """<program-name>.png, named after the running program."""
    name = Path(sys.argv[0]).stem if sys.argv and sys.argv[0] else "physarum"
    return Path(directory or ".") / f"{name or 'physarum'}.png"


class FieldVisualizer:
    """
    Renders a SlimeField and handles the two host commands.

    - r: reset the simulation
    - s: save the current frame as <program-name>.png

    A frame that cannot be converted is skipped; the simulation keeps
    stepping regardless.
    """

    def __init__(
        self,
        sim: SlimeField,
        figsize: tuple = (8, 8),
        display_shape: Optional[Tuple[int, int]] = None
    ):
        self.sim = sim
        self.figsize = figsize
        self.display_shape = display_shape or (sim.config.width, sim.config.height)
        self.frames_drawn = 0
        self.frames_skipped = 0

        # Lazy import matplotlib
        self._plt = None
        self._fig = None
        self._ax = None
        self._image = None

    def _setup_plot(self):
        """Initialize matplotlib figure."""
        import matplotlib.pyplot as plt
        self._plt = plt

        self._fig, self._ax = plt.subplots(figsize=self.figsize)
        self._ax.set_axis_off()
        self._fig.patch.set_facecolor('black')

    def bind_keys(self) -> None:
        """Route key releases on the figure to reset/snapshot."""
        if self._plt is None:
            self._setup_plot()
        self._fig.canvas.mpl_connect('key_release_event', self._on_key)

    def _on_key(self, event) -> None:
        self.handle_key(event.key)

    def handle_key(self, key: Optional[str]) -> None:
        if key == 'r':
            self.sim.reset()
        elif key == 's':
            self.snapshot()

    def render(self) -> bool:
        """Draw the current field. Returns False if the frame was skipped."""
        try:
            pixels = field_to_pixels(self.sim.field_view(), self.display_shape)
        except RenderConversionError as e:
            logger.warning(f"Skipping frame at t={self.sim.time}: {e}")
            self.frames_skipped += 1
            return False

        if self._plt is None:
            self._setup_plot()

        if self._image is None:
            self._image = self._ax.imshow(pixels, interpolation='nearest')
        else:
            self._image.set_data(pixels)

        self._ax.set_title(
            f"Time: {self.sim.time} | Organisms: {len(self.sim.colony)}",
            color='white', fontsize=12
        )
        self.frames_drawn += 1
        self._plt.pause(0.001)
        return True

    def save_frame(self, path: str) -> None:
        """Save current frame to file."""
        if self._fig is not None:
            self._fig.savefig(path, dpi=100, facecolor=self._fig.get_facecolor())
        else:
            # Nothing drawn yet: write the raw pixel buffer
            import matplotlib.pyplot as plt
            plt.imsave(path, field_to_pixels(self.sim.field_view(), self.display_shape))
        logger.info(f"Saved frame to {path}")

    def snapshot(self, directory: Optional[str] = None) -> Path:
        path = snapshot_path(directory)
        self.save_frame(str(path))
        return path

    def close(self) -> None:
        """Close the visualization."""
        if self._plt is not None:
            self._plt.close(self._fig)


def animate_study(
    sim: SlimeField,
    steps: int = 100,
    save_path: Optional[str] = None
) -> None:
    """
    Run and animate a study.

    One step, one frame. Reset and snapshot keys stay live throughout.
    """
    viz = FieldVisualizer(sim)
    viz.bind_keys()

    try:
        for _ in range(steps):
            sim.step()
            viz.render()

        if save_path:
            viz.save_frame(save_path)

    finally:
        viz.close()
