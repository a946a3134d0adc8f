#!/usr/bin/env python3
"""
ASCII Video Studio
------------------
- Converts a single image, a folder of frames, or a whole video.
- Each frame becomes a grid of glyphs picked from brightness and edge
  strength, tinted with the average color of the pixels under it.
- Videos are split and stitched with ffmpeg (must be on PATH).

Usage:
    ascii-video-studio --image photo.jpg --out ascii.png
    ascii-video-studio --frames ./frames --out ./ascii_frames --workers 8
    ascii-video-studio --video clip.mp4 --out ascii.mp4 --fps 15 --with-audio
    ascii-video-studio --video clip.mp4 --charset box --cols 160 --rows 90
"""

import argparse
import os
import shutil
import sys
import tempfile

from .charsets import CHARSETS, DEFAULT_CHARSET, resolve_charset
from .config import ConverterConfig
from .converter import batch_convert, convert_file
from .errors import ConfigurationError, ExternalToolError, FrameError
from .video import assemble_video, extract_frames, mux_audio


def get_args(argv=None):
    p = argparse.ArgumentParser(description="ASCII Video Studio")
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--image", type=str, help="Path to an image file")
    src.add_argument("--frames", type=str, help="Folder of frame images")
    src.add_argument("--video", type=str, help="Path to a video file")
    p.add_argument("--out", type=str, default=None,
                   help="Output image, folder or video (default depends on source)")
    p.add_argument("--cols", type=int, default=120,
                   help="Character columns (default: 120)")
    p.add_argument("--rows", type=int, default=60,
                   help="Maximum character rows (default: 60)")
    p.add_argument("--charset", type=str, default=DEFAULT_CHARSET,
                   help=f"Exact preset name ({', '.join(CHARSETS)}), "
                        "otherwise a literal ramp, dense to sparse")
    p.add_argument("--no-aspect", action="store_true",
                   help="Use --cols/--rows as given instead of following the source aspect")
    p.add_argument("--bg", type=str, default="black",
                   help="Background color (default: black)")
    p.add_argument("--fg", type=str, default="white",
                   help="Glyph color when --no-color is set (default: white)")
    p.add_argument("--no-color", action="store_true",
                   help="Draw every glyph in --fg instead of the sampled color")
    p.add_argument("--brightness-only", action="store_true",
                   help="Pick glyphs from brightness alone, without edge detection")
    p.add_argument("--cell", type=int, nargs=2, default=(10, 20), metavar=("W", "H"),
                   help="Glyph cell size in pixels (default: 10 20)")
    p.add_argument("--font-path", type=str, default=None,
                   help="TrueType font for glyphs (default: a bold monospace system font)")
    p.add_argument("--font-size", type=int, default=16,
                   help="Font size in pixels (default: 16)")
    p.add_argument("--workers", type=int, default=None,
                   help="Worker processes for frame conversion (default: CPU count)")
    p.add_argument("--fps", type=float, default=15,
                   help="Frame rate for --video extraction and encoding (default: 15)")
    p.add_argument("--with-audio", action="store_true",
                   help="Copy the source video's audio into the output (--video)")
    p.add_argument("--export-txt", action="store_true",
                   help="Also write each glyph grid as a .txt file")
    p.add_argument("--work-dir", type=str, default=None,
                   help="Keep extracted and converted frames here (--video)")
    return p.parse_args(argv)


def build_config(args) -> ConverterConfig:
    return ConverterConfig(
        output_width=args.cols,
        output_height=args.rows,
        charset=resolve_charset(args.charset),
        preserve_aspect_ratio=not args.no_aspect,
        background_color=args.bg,
        font_color=args.fg,
        colorize=not args.no_color,
        use_edges=not args.brightness_only,
        cell_width=args.cell[0],
        cell_height=args.cell[1],
        font_path=args.font_path,
        font_size=args.font_size,
    )


def process_image(args, config):
    out = args.out or os.path.splitext(os.path.basename(args.image))[0] + "_ascii.png"
    text_path = os.path.splitext(out)[0] + ".txt" if args.export_txt else None
    grid = convert_file(args.image, out, config, text_path)
    print(f"Saved: {out} ({grid.cols}x{grid.rows} glyphs)")


def process_frames(args, config):
    out = args.out or "ascii_frames"
    report = batch_convert(args.frames, out, config, args.workers, args.export_txt)
    if not report.converted:
        print("[WARN] No frames were converted")
    return report


def process_video(args, config, work_dir):
    frames_dir = os.path.join(work_dir, "frames")
    ascii_dir = os.path.join(work_dir, "ascii")
    out = args.out or os.path.splitext(os.path.basename(args.video))[0] + "_ascii.mp4"

    # Leftovers from an earlier run would end up in the assembled video
    for d in (frames_dir, ascii_dir):
        if os.path.isdir(d):
            shutil.rmtree(d)

    extract_frames(args.video, frames_dir, args.fps)
    report = batch_convert(frames_dir, ascii_dir, config, args.workers, args.export_txt)
    if not report.converted:
        raise FrameError(args.video, "no frame could be converted")

    if args.with_audio:
        silent = os.path.join(work_dir, "silent.mp4")
        assemble_video(ascii_dir, silent, args.fps)
        mux_audio(silent, args.video, out)
    else:
        assemble_video(ascii_dir, out, args.fps)
    print(f"ASCII video created at {out}")


def main(argv=None):
    args = get_args(argv)

    for path, kind in ((args.image, "Image"), (args.video, "Video")):
        if path and not os.path.isfile(path):
            print(f"{kind} not found: {path}")
            return 1
    if args.frames and not os.path.isdir(args.frames):
        print(f"Frames folder not found: {args.frames}")
        return 1

    try:
        config = build_config(args)
        if args.image:
            process_image(args, config)
        elif args.frames:
            process_frames(args, config)
        elif args.work_dir:
            os.makedirs(args.work_dir, exist_ok=True)
            process_video(args, config, args.work_dir)
        else:
            with tempfile.TemporaryDirectory() as tmp_dir:
                process_video(args, config, tmp_dir)
    except (ConfigurationError, ExternalToolError, FrameError) as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
