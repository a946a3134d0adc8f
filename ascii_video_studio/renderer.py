"""Draw a glyph grid onto an image with Pillow."""

from functools import lru_cache
from typing import Dict, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from .charsets import BLANK
from .config import ConverterConfig
from .errors import ConfigurationError
from .glyphs import GlyphGrid

# Bold monospace faces tried in order when no font path is configured
FALLBACK_FONTS = (
    "DejaVuSansMono-Bold.ttf",
    "LiberationMono-Bold.ttf",
    "consolab.ttf",
    "Courier New Bold.ttf",
)

SHADOW_OFFSET = 1


@lru_cache(maxsize=8)
def load_font(font_path: Optional[str], font_size: int):
    """Load the glyph font once per process.

    An explicit path that fails to load is a configuration error. Without
    one, the first installed fallback face wins, then Pillow's own default.
    """
    if font_path:
        try:
            return ImageFont.truetype(font_path, font_size)
        except OSError as e:
            raise ConfigurationError(f"Cannot load font {font_path}: {e}") from e
    for name in FALLBACK_FONTS:
        try:
            return ImageFont.truetype(name, font_size)
        except OSError:
            continue
    return ImageFont.load_default(size=font_size)


def _glyph_offset(font, ch: str, cell_w: int, cell_h: int) -> Tuple[float, float]:
    # Offset from the cell origin that centers the glyph's ink box
    left, top, right, bottom = font.getbbox(ch)
    return (cell_w - (right - left)) / 2 - left, (cell_h - (bottom - top)) / 2 - top


def render_glyphs(grid: GlyphGrid, config: ConverterConfig, font=None) -> Image.Image:
    """Render the grid to an RGB image of cols*cell_width x rows*cell_height."""
    if font is None:
        font = load_font(config.font_path, config.font_size)
    cell_w, cell_h = config.cell_width, config.cell_height
    size = config.output_size(grid.cols, grid.rows)

    canvas = Image.new("RGB", size, config.background_rgb)
    draw = ImageDraw.Draw(canvas, "RGBA")
    offsets: Dict[str, Tuple[float, float]] = {}
    fallback = config.font_rgb

    for y in range(grid.rows):
        for x in range(grid.cols):
            ch = str(grid.chars[y, x])
            if ch == BLANK:
                continue
            if ch not in offsets:
                offsets[ch] = _glyph_offset(font, ch, cell_w, cell_h)
            dx, dy = offsets[ch]
            ox, oy = x * cell_w + dx, y * cell_h + dy

            if config.colorize:
                color = tuple(int(c) for c in grid.colors[y, x])
            else:
                color = fallback

            draw.text((ox + SHADOW_OFFSET, oy + SHADOW_OFFSET), ch,
                      font=font, fill=tuple(config.shadow_color))
            draw.text((ox, oy), ch, font=font, fill=color + (255,))

    return canvas
