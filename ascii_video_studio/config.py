"""Conversion settings shared by every frame of a run."""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from PIL import ImageColor

from .charsets import DEFAULT_CHARSET
from .errors import ConfigurationError

# Glyph footprints are roughly twice as tall as they are wide
CHAR_ASPECT = 2


@dataclass(frozen=True)
class ConverterConfig:
    output_width: int = 120
    output_height: int = 60
    charset: str = DEFAULT_CHARSET
    preserve_aspect_ratio: bool = True
    background_color: str = "black"
    font_color: str = "white"
    colorize: bool = True
    use_edges: bool = True
    cell_width: int = 10
    cell_height: int = 20
    font_path: Optional[str] = None
    font_size: int = 16
    shadow_color: Tuple[int, int, int, int] = (0, 0, 0, 128)

    def __post_init__(self):
        if self.output_width <= 0 or self.output_height <= 0:
            raise ConfigurationError(
                f"Output grid must be positive, got {self.output_width}x{self.output_height}")
        if len(self.charset) < 3:
            raise ConfigurationError(
                f"Charset must have at least 3 characters, got {self.charset!r}")
        if self.cell_width <= 0 or self.cell_height <= 0:
            raise ConfigurationError(
                f"Cell size must be positive, got {self.cell_width}x{self.cell_height}")
        if self.font_size <= 0:
            raise ConfigurationError(f"Font size must be positive, got {self.font_size}")
        if len(self.shadow_color) != 4:
            raise ConfigurationError("Shadow color must be an RGBA tuple")
        for name in ("background_color", "font_color"):
            try:
                ImageColor.getrgb(getattr(self, name))
            except ValueError as e:
                raise ConfigurationError(f"Invalid {name}: {e}") from e

    @property
    def background_rgb(self) -> Tuple[int, int, int]:
        return ImageColor.getrgb(self.background_color)[:3]

    @property
    def font_rgb(self) -> Tuple[int, int, int]:
        return ImageColor.getrgb(self.font_color)[:3]

    def grid_size(self, src_width: int, src_height: int) -> Tuple[int, int]:
        """Return the (cols, rows) character grid for a source of the given size.

        With `preserve_aspect_ratio` the row count follows the source aspect,
        halved for tall glyphs. If that overflows `output_height`, rows are
        clamped and the column count is derived back from the aspect.
        """
        cols, rows = self.output_width, self.output_height
        if self.preserve_aspect_ratio:
            aspect = src_width / src_height
            rows = math.floor(cols / aspect / CHAR_ASPECT)
            if rows > self.output_height:
                rows = self.output_height
                cols = math.floor(rows * aspect * CHAR_ASPECT)

        if cols <= 0 or rows <= 0:
            raise ConfigurationError(
                f"Grid {cols}x{rows} for a {src_width}x{src_height} source is empty")
        if cols > src_width or rows > src_height:
            raise ConfigurationError(
                f"Grid {cols}x{rows} exceeds the {src_width}x{src_height} source; "
                "lower --cols/--rows")
        return cols, rows

    def output_size(self, cols: int, rows: int) -> Tuple[int, int]:
        """Pixel size of the rendered image for a cols x rows grid."""
        return cols * self.cell_width, rows * self.cell_height
