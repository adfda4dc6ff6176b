"""FFmpeg command building for Chromecast conversion.

Only the first video and first audio stream are mapped. Subtitles are copied
when the target container can hold them.
"""

from __future__ import annotations

import os
from pathlib import Path

from chromecastise.core.capabilities import COPY
from chromecastise.policy.types import EncodePlan

# x264 settings that keep the stream within Chromecast's H.264 level 4.0 limit
VIDEO_QUALITY_ARGS: tuple[str, ...] = (
    "-preset", "slow",
    "-level", "4.0",
    "-crf", "20",
    "-bf", "16",
    "-b_strategy", "2",
    "-subq", "10",
)  # fmt: skip

AUDIO_QUALITY_ARGS: tuple[str, ...] = ("-b:a", "128k")


def default_thread_count() -> int:
    """Encoder threads: one per CPU this process may run on, at least 1."""
    if hasattr(os, "process_cpu_count"):
        count = os.process_cpu_count()
    elif hasattr(os, "sched_getaffinity"):
        count = len(os.sched_getaffinity(0))
    else:
        count = os.cpu_count()
    return max(1, count or 1)


def build_ffmpeg_command(
    plan: EncodePlan,
    ffmpeg_path: Path | str = "ffmpeg",
    threads: int | None = None,
) -> list[str]:
    """Build the ffmpeg argument vector for ``plan``.

    The result is deterministic for a given plan and thread count.

    Args:
        plan: Encode plan for the file.
        ffmpeg_path: ffmpeg executable.
        threads: Encoder thread count (None = one per CPU).

    Returns:
        List of command arguments, executable first.
    """
    thread_count = threads if threads is not None else default_thread_count()

    cmd = [str(ffmpeg_path), "-hide_banner", "-threads", str(thread_count)]
    cmd.extend(["-i", str(plan.source_path)])

    cmd.extend(["-map", "0:v:0", "-map", "0:a:0"])

    cmd.extend(["-c:v", plan.video_action])
    if plan.video_action != COPY:
        cmd.extend(VIDEO_QUALITY_ARGS)

    cmd.extend(["-c:a", plan.audio_action])
    if plan.audio_action != COPY:
        cmd.extend(AUDIO_QUALITY_ARGS)

    if plan.container.supports_subtitles:
        # ? keeps the mapping optional for files without subtitles
        cmd.extend(["-map", "0:s?", "-c:s", "copy"])

    cmd.extend(["-y", str(plan.output_path)])
    return cmd
