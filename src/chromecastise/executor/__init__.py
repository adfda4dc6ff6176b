"""Encoder invocation.

- command.py: ffmpeg argument vector construction
- types.py: ProcessResult
- ffmpeg.py: FFmpegEncoder, runs ffmpeg with cancellation support
"""

from chromecastise.executor.command import (
    AUDIO_QUALITY_ARGS,
    VIDEO_QUALITY_ARGS,
    build_ffmpeg_command,
    default_thread_count,
)
from chromecastise.executor.ffmpeg import FFmpegEncoder
from chromecastise.executor.types import ProcessResult

__all__ = [
    "AUDIO_QUALITY_ARGS",
    "VIDEO_QUALITY_ARGS",
    "FFmpegEncoder",
    "ProcessResult",
    "build_ffmpeg_command",
    "default_thread_count",
]
