"""Timed text overlays compiled into ffmpeg drawtext filters."""

__version__ = "2.0.0"
