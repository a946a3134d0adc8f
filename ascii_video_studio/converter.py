"""Frame conversion: one source image in, one glyph image out.

Single frames go through `convert_frame` / `convert_file`. Directories of
frames go through `batch_convert`, which fans frames out over a process
pool and names every output after its frame index.
"""

import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import cv2 as cv
import numpy as np

from .analysis import edge_strength, luminance, smooth
from .config import ConverterConfig
from .errors import ConfigurationError, FrameError
from .glyphs import GlyphGrid, select_glyphs
from .renderer import load_font, render_glyphs
from .sampler import sample_blocks

FRAME_EXTENSIONS = (".png", ".jpg", ".jpeg", ".bmp", ".tif", ".tiff", ".webp")
OUTPUT_PATTERN = "ascii-{:04d}"


def frame_to_glyphs(raster: np.ndarray, config: ConverterConfig) -> GlyphGrid:
    """Run luminance, smoothing, edges, sampling and glyph selection."""
    h, w = raster.shape[:2]
    cols, rows = config.grid_size(w, h)

    luma = luminance(raster)
    edges = edge_strength(smooth(luma)) if config.use_edges else None
    stats = sample_blocks(raster, luma, edges, cols, rows)
    return select_glyphs(stats, config.charset)


def convert_frame(raster: np.ndarray, config: ConverterConfig) -> np.ndarray:
    """Convert an RGB(A) raster into a rendered RGB glyph image."""
    grid = frame_to_glyphs(raster, config)
    return np.asarray(render_glyphs(grid, config))


def read_frame(path) -> np.ndarray:
    img = cv.imread(str(path), cv.IMREAD_COLOR)
    if img is None:
        raise FrameError(path, "could not decode image")
    return cv.cvtColor(img, cv.COLOR_BGR2RGB)


def write_frame(path, image: np.ndarray) -> None:
    if not cv.imwrite(str(path), cv.cvtColor(image, cv.COLOR_RGB2BGR)):
        raise FrameError(path, "could not write image")


def convert_file(src, dst, config: ConverterConfig, text_path=None) -> GlyphGrid:
    """Convert the image at `src` and save it to `dst`.

    Optionally writes the glyph grid as plain text to `text_path`.
    """
    raster = read_frame(src)
    grid = frame_to_glyphs(raster, config)
    image = np.asarray(render_glyphs(grid, config))
    write_frame(dst, image)
    if text_path is not None:
        try:
            with open(text_path, "w", encoding="utf-8") as f:
                f.write(grid.to_text())
        except OSError as e:
            # A failed frame leaves nothing behind
            os.remove(dst)
            raise FrameError(text_path, f"could not write text: {e}") from e
    return grid


def list_frames(input_dir) -> List[str]:
    """Frame files in `input_dir`, in sorted (frame) order."""
    names = sorted(
        name for name in os.listdir(input_dir)
        if name.lower().endswith(FRAME_EXTENSIONS))
    return [os.path.join(input_dir, name) for name in names]


@dataclass
class BatchReport:
    converted: List[str] = field(default_factory=list)
    failed: List[FrameError] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.converted) + len(self.failed)


def _convert_job(job: Tuple[int, str, str, Optional[str], ConverterConfig]):
    # Runs in a worker process; FrameErrors come back as values
    index, src, dst, text_path, config = job
    try:
        convert_file(src, dst, config, text_path)
    except FrameError as e:
        return index, None, e
    except ConfigurationError as e:
        # This frame's size does not fit the grid; the batch goes on
        return index, None, FrameError(src, str(e))
    except (cv.error, OSError) as e:
        return index, None, FrameError(src, str(e))
    return index, dst, None


def _probe(frames: List[str], config: ConverterConfig) -> None:
    """Fail fast on settings that cannot work for this frame size."""
    for path in frames:
        try:
            raster = read_frame(path)
        except FrameError:
            continue
        h, w = raster.shape[:2]
        config.grid_size(w, h)
        return


def batch_convert(input_dir, output_dir, config: ConverterConfig,
                  workers: Optional[int] = None,
                  export_txt: bool = False) -> BatchReport:
    """Convert every frame in `input_dir` into `output_dir`.

    Output names follow the frame's position in sorted order
    (ascii-0000.png, ascii-0001.png, ...). A frame that fails is reported
    and skipped, including a frame whose size does not fit the grid. Font and
    grid errors found on the first readable frame abort before any frame is
    written.
    """
    frames = list_frames(input_dir)
    if not frames:
        raise ConfigurationError(f"No frames found in {input_dir}")
    os.makedirs(output_dir, exist_ok=True)

    # Font and grid problems surface here, not inside the workers
    load_font(config.font_path, config.font_size)
    _probe(frames, config)

    jobs = []
    for i, src in enumerate(frames):
        stem = os.path.join(output_dir, OUTPUT_PATTERN.format(i))
        jobs.append((i, src, stem + ".png", stem + ".txt" if export_txt else None, config))

    if workers is None:
        workers = os.cpu_count() or 1
    workers = max(1, min(workers, len(jobs)))

    print(f"[INFO] Converting {len(jobs)} frames with {workers} worker(s)...")
    report = BatchReport()
    results = {}
    every = max(1, len(jobs) // 20)

    def collect(result, done):
        index, dst, error = result
        results[index] = (dst, error)
        if error is not None:
            print(f"[WARN] Skipping {error.frame}: {error.reason}")
        if done % every == 0:
            print(f"Converted {done}/{len(jobs)} frames ({done * 100 // len(jobs)}%)")

    if workers == 1:
        for done, job in enumerate(jobs, 1):
            collect(_convert_job(job), done)
    else:
        with ProcessPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(_convert_job, job) for job in jobs]
            for done, future in enumerate(as_completed(futures), 1):
                collect(future.result(), done)

    for index in sorted(results):
        dst, error = results[index]
        if error is None:
            report.converted.append(dst)
        else:
            report.failed.append(error)

    print(f"[INFO] Converted {len(report.converted)} frames, {len(report.failed)} failed")
    return report
