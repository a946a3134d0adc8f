"""Brightness and edge fields computed at full source resolution."""

import cv2 as cv
import numpy as np

# ITU-R BT.601 luma weights (R, G, B)
LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float64)

# 5x5 binomial kernel: outer([1, 4, 6, 4, 1]) / 256
_BINOMIAL = np.array([1, 4, 6, 4, 1], dtype=np.float64)
GAUSSIAN_KERNEL = np.outer(_BINOMIAL, _BINOMIAL) / 256.0


def luminance(raster: np.ndarray) -> np.ndarray:
    """Per-pixel perceptual brightness of an RGB(A) raster. Alpha is ignored."""
    rgb = raster[..., :3].astype(np.float64)
    return rgb @ LUMA_WEIGHTS


def smooth(field: np.ndarray) -> np.ndarray:
    """Low-pass the field with the 5x5 binomial kernel.

    Only interior pixels are filtered; the 2-pixel border keeps its input
    values so it never looks like an edge to the Sobel pass.
    """
    out = field.copy()
    h, w = field.shape
    if h < 5 or w < 5:
        return out
    blurred = cv.filter2D(field, cv.CV_64F, GAUSSIAN_KERNEL)
    out[2:-2, 2:-2] = blurred[2:-2, 2:-2]
    return out


def edge_strength(field: np.ndarray) -> np.ndarray:
    """Sobel gradient magnitude, normalized so the strongest edge is 255.

    The 1-pixel border is 0. A flat field has no edges and yields all zeros.
    """
    h, w = field.shape
    magnitude = np.zeros((h, w), dtype=np.float64)
    if h < 3 or w < 3:
        return magnitude

    gx = cv.Sobel(field, cv.CV_64F, 1, 0, ksize=3)
    gy = cv.Sobel(field, cv.CV_64F, 0, 1, ksize=3)
    magnitude[1:-1, 1:-1] = np.sqrt(gx[1:-1, 1:-1] ** 2 + gy[1:-1, 1:-1] ** 2)

    peak = magnitude.max()
    if peak == 0:
        return magnitude
    return magnitude / peak * 255.0
