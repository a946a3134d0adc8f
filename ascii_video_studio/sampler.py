"""Reduce full-resolution fields to one set of statistics per glyph cell."""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .errors import ConfigurationError


@dataclass(frozen=True, eq=False)
class BlockStats:
    """Per-cell aggregates, each array shaped (rows, cols[, 3])."""
    brightness: np.ndarray
    edge: Optional[np.ndarray]
    color: np.ndarray
    extreme: np.ndarray

    @property
    def shape(self):
        return self.brightness.shape


def _blocks(values: np.ndarray, cols: int, rows: int, step_x: int, step_y: int) -> np.ndarray:
    # (H, W, ...) -> (rows, step_y, cols, step_x, ...)
    cropped = values[:rows * step_y, :cols * step_x]
    return cropped.reshape((rows, step_y, cols, step_x) + values.shape[2:])


def sample_blocks(raster: np.ndarray,
                  luma: np.ndarray,
                  edges: Optional[np.ndarray],
                  cols: int,
                  rows: int) -> BlockStats:
    """Average each step_x x step_y source block into one cell.

    Steps are floor(source / grid); any remainder on the right and bottom
    edges is not sampled. A pixel is extreme when it is exactly pure black
    or pure white, and a block is extreme only if all its pixels are.
    """
    h, w = luma.shape
    step_x, step_y = w // cols, h // rows
    if step_x < 1 or step_y < 1:
        raise ConfigurationError(
            f"Grid {cols}x{rows} is larger than the {w}x{h} source")

    rgb = raster[..., :3]
    brightness = _blocks(luma, cols, rows, step_x, step_y).mean(axis=(1, 3))
    color = _blocks(rgb.astype(np.float64), cols, rows, step_x, step_y).mean(axis=(1, 3))

    edge = None
    if edges is not None:
        edge = _blocks(edges, cols, rows, step_x, step_y).mean(axis=(1, 3))

    extreme_px = np.all(rgb == 0, axis=-1) | np.all(rgb == 255, axis=-1)
    extreme = _blocks(extreme_px, cols, rows, step_x, step_y).all(axis=(1, 3))

    return BlockStats(brightness=brightness, edge=edge, color=color, extreme=extreme)
