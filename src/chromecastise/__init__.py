"""Chromecastise - batch-convert video files into Chromecast-friendly containers."""

__version__ = "1.0.0"
