"""Thin ffmpeg wrappers: split a video into frames, stitch frames back, add audio."""

import glob
import os
import shutil
import subprocess
from typing import List

from .errors import ExternalToolError

FRAME_PATTERN = "frame-%04d.png"
ASCII_GLOB = "ascii-*.png"


def _run_ffmpeg(args: List[str]) -> None:
    if shutil.which("ffmpeg") is None:
        raise ExternalToolError(
            "ffmpeg not found on PATH. Install it from https://ffmpeg.org/download.html")
    cmd = ["ffmpeg", "-y", "-loglevel", "error"] + args
    result = subprocess.run(cmd, capture_output=True, text=True, errors="replace")
    if result.returncode != 0:
        tail = "\n".join((result.stderr or "").strip().splitlines()[-5:])
        raise ExternalToolError(f"ffmpeg exited with {result.returncode}: {tail}")


def extract_frames(video_path, frames_dir, fps: float) -> List[str]:
    """Dump `video_path` as PNG frames sampled at `fps` into `frames_dir`."""
    os.makedirs(frames_dir, exist_ok=True)
    print(f"[INFO] Extracting frames from {video_path} at {fps} fps...")
    _run_ffmpeg(["-i", str(video_path), "-vf", f"fps={fps}",
                 os.path.join(str(frames_dir), FRAME_PATTERN)])
    frames = sorted(glob.glob(os.path.join(str(frames_dir), "frame-*.png")))
    print(f"[INFO] Extracted {len(frames)} frames")
    return frames


def assemble_video(frames_dir, output_path, fps: float) -> str:
    """Encode the ascii-*.png frames of `frames_dir` as an H.264 video.

    Frames are matched by glob, so a frame skipped during conversion does
    not cut the video short.
    """
    print(f"[INFO] Encoding {output_path}...")
    _run_ffmpeg(["-framerate", str(fps),
                 "-pattern_type", "glob", "-i", os.path.join(str(frames_dir), ASCII_GLOB),
                 "-c:v", "libx264", "-pix_fmt", "yuv420p", str(output_path)])
    return str(output_path)


def mux_audio(video_path, audio_source, output_path) -> str:
    """Copy the video stream and add the audio track of `audio_source`."""
    print(f"[INFO] Adding audio from {audio_source}...")
    _run_ffmpeg(["-i", str(video_path), "-i", str(audio_source),
                 "-map", "0:v:0", "-map", "1:a:0",
                 "-c:v", "copy", "-c:a", "aac", "-shortest", str(output_path)])
    return str(output_path)
