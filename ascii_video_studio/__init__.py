"""Turn video frames into colorized glyph-grid images."""

from .analysis import edge_strength, luminance, smooth
from .charsets import BLANK, CHARSETS, DEFAULT_CHARSET
from .config import ConverterConfig
from .converter import (BatchReport, batch_convert, convert_file, convert_frame,
                        frame_to_glyphs)
from .errors import ConfigurationError, ExternalToolError, FrameError, StudioError
from .glyphs import GlyphCell, GlyphGrid, select_glyphs
from .renderer import render_glyphs
from .sampler import BlockStats, sample_blocks

__version__ = "0.1.0"
