"""Tests for glyph rendering."""

import numpy as np
import pytest

from ascii_video_studio.charsets import BLANK
from ascii_video_studio.config import ConverterConfig
from ascii_video_studio.errors import ConfigurationError
from ascii_video_studio.glyphs import GlyphGrid
from ascii_video_studio.renderer import load_font, render_glyphs


def make_grid(chars, color=(255, 0, 0)):
    chars = np.array([list(row) for row in chars], dtype="<U1")
    colors = np.zeros(chars.shape + (3,), dtype=np.uint8)
    colors[:, :] = color
    return GlyphGrid(chars=chars, colors=colors)


def test_blank_grid_is_background():
    config = ConverterConfig(background_color="#102030")
    image = np.asarray(render_glyphs(make_grid([BLANK * 3, BLANK * 3]), config))
    assert image.shape == (40, 30, 3)
    assert (image == [0x10, 0x20, 0x30]).all()


def test_glyph_uses_cell_color():
    config = ConverterConfig(background_color="black")
    image = np.asarray(render_glyphs(make_grid(["@"], color=(0, 200, 0)), config))
    assert image.shape == (20, 10, 3)
    green = (image[..., 1] > 100) & (image[..., 0] < 50) & (image[..., 2] < 50)
    assert green.any()


def test_glyph_stays_in_its_cell():
    config = ConverterConfig(background_color="black", cell_width=20)
    image = np.asarray(render_glyphs(make_grid([BLANK + "@" + BLANK]), config))
    assert image.shape == (20, 60, 3)
    assert not image[:, :20].any()
    assert image[:, 20:40].any()


def test_no_color_uses_font_color():
    config = ConverterConfig(background_color="black", font_color="#0000ff", colorize=False)
    image = np.asarray(render_glyphs(make_grid(["#"], color=(255, 0, 0)), config))
    assert image[..., 2].max() > 100
    assert image[..., 0].max() == 0


def test_shadow_darkens_light_background():
    config = ConverterConfig(background_color="white", font_color="white", colorize=False)
    image = np.asarray(render_glyphs(make_grid(["@"]), config))
    # The glyph itself is white, only the shadow can show
    assert image.min() < 255


def test_missing_font_path_is_configuration_error(tmp_path):
    with pytest.raises(ConfigurationError):
        load_font(str(tmp_path / "missing.ttf"), 16)


def test_default_font_loads():
    font = load_font(None, 16)
    assert font.getbbox("@")[2] > 0
