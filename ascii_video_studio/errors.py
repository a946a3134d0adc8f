"""Exceptions raised by the converter."""


class StudioError(Exception):
    """Base class for every error raised by ascii_video_studio."""


class ConfigurationError(StudioError, ValueError):
    """Invalid settings. Fatal, raised before any frame is converted."""


class FrameError(StudioError):
    """A single frame could not be read, converted or written."""

    def __init__(self, frame, reason):
        # args mirror the constructor for pickling
        super().__init__(str(frame), reason)
        self.frame = str(frame)
        self.reason = reason

    def __str__(self):
        return f"{self.frame}: {self.reason}"


class ExternalToolError(StudioError):
    """ffmpeg is missing or exited with an error."""
