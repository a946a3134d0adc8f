"""Shared test fixtures."""

import cv2 as cv
import numpy as np
import pytest

from ascii_video_studio.config import ConverterConfig


def solid(width, height, rgb):
    raster = np.zeros((height, width, 3), dtype=np.uint8)
    raster[:, :] = rgb
    return raster


def red_blue(width=100, height=100):
    raster = solid(width, height, (0, 0, 255))
    raster[:, : width // 2] = (255, 0, 0)
    return raster


def save_rgb(path, raster):
    cv.imwrite(str(path), cv.cvtColor(raster, cv.COLOR_RGB2BGR))
    return str(path)


@pytest.fixture
def gray_raster():
    return solid(40, 40, (128, 128, 128))


@pytest.fixture
def red_blue_raster():
    return red_blue()


@pytest.fixture
def exact_config():
    """10x10 grid, no aspect correction."""
    return ConverterConfig(output_width=10, output_height=10, preserve_aspect_ratio=False)


@pytest.fixture
def frames_dir(tmp_path):
    frames = tmp_path / "frames"
    frames.mkdir()
    save_rgb(frames / "frame-0001.png", red_blue(40, 40))
    save_rgb(frames / "frame-0002.png", solid(40, 40, (128, 128, 128)))
    save_rgb(frames / "frame-0003.png", solid(40, 40, (0, 0, 0)))
    return frames
