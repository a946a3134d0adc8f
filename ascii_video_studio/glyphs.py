"""Map per-cell statistics to characters of a ramp."""

from dataclasses import dataclass
from typing import Iterator, List, NamedTuple, Tuple

import numpy as np

from .charsets import BLANK
from .sampler import BlockStats

# Cells darker or brighter than these are left blank
DARK_CUTOFF = 5.0
LIGHT_CUTOFF = 250.0

# Blend of edge strength and brightness in the glyph score
EDGE_WEIGHT = 0.7
BRIGHTNESS_WEIGHT = 0.3


class GlyphCell(NamedTuple):
    character: str
    color: Tuple[int, int, int]


@dataclass(frozen=True, eq=False)
class GlyphGrid:
    chars: np.ndarray   # (rows, cols) of single characters
    colors: np.ndarray  # (rows, cols, 3) uint8 RGB

    @property
    def rows(self) -> int:
        return self.chars.shape[0]

    @property
    def cols(self) -> int:
        return self.chars.shape[1]

    def __getitem__(self, pos) -> GlyphCell:
        y, x = pos
        r, g, b = (int(c) for c in self.colors[y, x])
        return GlyphCell(str(self.chars[y, x]), (r, g, b))

    def __iter__(self) -> Iterator[List[GlyphCell]]:
        for y in range(self.rows):
            yield [self[y, x] for x in range(self.cols)]

    def to_text(self) -> str:
        return "\n".join("".join(row) for row in self.chars)


def glyph_indices(stats: BlockStats, ramp_len: int) -> np.ndarray:
    """Index into a ramp of `ramp_len` glyphs for every cell.

    The first slot is never picked, and with edge data the last one isn't
    either.
    """
    if stats.edge is not None:
        score = (stats.edge * EDGE_WEIGHT + stats.brightness * BRIGHTNESS_WEIGHT) / 255.0
        span = ramp_len - 3
    else:
        score = stats.brightness / 255.0
        span = ramp_len - 2
    idx = np.floor(score * span).astype(np.int64) + 1
    return np.clip(idx, 1, span + 1)


def suppressed_cells(stats: BlockStats) -> np.ndarray:
    return (stats.extreme
            | (stats.brightness < DARK_CUTOFF)
            | (stats.brightness > LIGHT_CUTOFF))


def select_glyphs(stats: BlockStats, charset: str) -> GlyphGrid:
    glyphs = np.array(list(charset), dtype="<U1")
    idx = glyph_indices(stats, len(glyphs))
    chars = np.where(suppressed_cells(stats), BLANK, glyphs[idx])
    colors = np.clip(np.rint(stats.color), 0, 255).astype(np.uint8)
    return GlyphGrid(chars=chars, colors=colors)
