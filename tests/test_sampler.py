"""Tests for block sampling."""

import numpy as np
import pytest

from ascii_video_studio.analysis import luminance
from ascii_video_studio.errors import ConfigurationError
from ascii_video_studio.sampler import sample_blocks
from tests.conftest import red_blue, solid


def test_uniform_block_color_is_exact():
    raster = solid(30, 20, (17, 99, 201))
    stats = sample_blocks(raster, luminance(raster), None, 3, 2)
    assert stats.shape == (2, 3)
    assert (stats.color == np.array([17.0, 99.0, 201.0])).all()
    assert stats.edge is None


def test_red_blue_halves(red_blue_raster):
    stats = sample_blocks(red_blue_raster, luminance(red_blue_raster), None, 10, 10)
    assert (stats.color[:, :5] == [255.0, 0.0, 0.0]).all()
    assert (stats.color[:, 5:] == [0.0, 0.0, 255.0]).all()
    assert not stats.extreme.any()
    assert stats.brightness[0, 0] == pytest.approx(76.245)
    assert stats.brightness[0, 9] == pytest.approx(29.07)


def test_block_means():
    raster = np.zeros((2, 4, 3), dtype=np.uint8)
    raster[0, 0] = (40, 40, 40)
    raster[1, 1] = (80, 0, 0)
    luma = luminance(raster)
    edges = np.arange(8, dtype=np.float64).reshape(2, 4)
    stats = sample_blocks(raster, luma, edges, 2, 1)
    assert stats.color[0, 0] == pytest.approx([30.0, 10.0, 10.0])
    assert stats.edge[0, 0] == pytest.approx((0 + 1 + 4 + 5) / 4)
    assert stats.edge[0, 1] == pytest.approx((2 + 3 + 6 + 7) / 4)
    assert stats.brightness[0, 0] == pytest.approx(luma[:, :2].mean())


def test_extreme_needs_every_pixel():
    raster = solid(4, 4, (0, 0, 0))
    raster[:2, 2:] = (255, 255, 255)
    raster[3, 3] = (0, 0, 1)
    stats = sample_blocks(raster, luminance(raster), None, 2, 2)
    assert stats.extreme[0, 0] and stats.extreme[0, 1] and stats.extreme[1, 0]
    assert not stats.extreme[1, 1]


def test_remainder_pixels_are_not_sampled():
    # 7 wide / 3 cols -> step 2, the last column is ignored
    raster = solid(7, 2, (10, 10, 10))
    raster[:, 6] = (250, 250, 250)
    stats = sample_blocks(raster, luminance(raster), None, 3, 1)
    assert (stats.color == 10.0).all()


def test_grid_larger_than_source_raises():
    raster = solid(4, 4, (1, 2, 3))
    with pytest.raises(ConfigurationError):
        sample_blocks(raster, luminance(raster), None, 5, 2)


def test_cells_are_independent():
    base = red_blue(20, 20)
    changed = base.copy()
    changed[:10, :10] = (7, 8, 9)
    a = sample_blocks(base, luminance(base), None, 2, 2)
    b = sample_blocks(changed, luminance(changed), None, 2, 2)
    assert (a.color[0, 1] == b.color[0, 1]).all()
    assert (a.color[1] == b.color[1]).all()
    assert (b.color[0, 0] == [7, 8, 9]).all()
