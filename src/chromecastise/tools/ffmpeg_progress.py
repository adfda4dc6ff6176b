"""Parse the progress lines ffmpeg writes while encoding.

ffmpeg reports progress on stderr as::

    frame= 1234 fps= 30 q=28.0 size=  10240kB time=00:01:23.45 bitrate=1000.0kbits/s speed=2.0x
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class EncodeProgress:
    """One parsed ffmpeg progress line."""

    frame: int | None = None
    fps: float | None = None
    bitrate: str | None = None
    out_time_us: int | None = None  # Output time in microseconds
    speed: str | None = None

    @property
    def out_time_seconds(self) -> float | None:
        """Get output time in seconds."""
        if self.out_time_us is not None:
            return self.out_time_us / 1_000_000
        return None


PROGRESS_PATTERNS = {
    "frame": re.compile(r"frame=\s*(\d+)"),
    "fps": re.compile(r"fps=\s*([\d.]+)"),
    "bitrate": re.compile(r"bitrate=\s*([^\s]+)"),
    "speed": re.compile(r"speed=\s*([^\s]+)"),
}

_TIME_PATTERN = re.compile(r"time=\s*(\d+):(\d+):(\d+)\.(\d+)")


def _convert(key: str, value: str) -> int | float | str | None:
    if key == "frame":
        try:
            return int(value)
        except ValueError:
            return None
    if key == "fps":
        try:
            return float(value)
        except ValueError:
            return None
    return value if value != "N/A" else None


def parse_stderr_progress(line: str) -> EncodeProgress | None:
    """Parse an ffmpeg progress line.

    Args:
        line: A line of ffmpeg output.

    Returns:
        Parsed EncodeProgress, or None if the line is not a progress line.
    """
    if "frame=" not in line:
        return None

    values: dict[str, int | float | str | None] = {}
    for key, pattern in PROGRESS_PATTERNS.items():
        match = pattern.search(line)
        if match:
            converted = _convert(key, match.group(1))
            if converted is not None:
                values[key] = converted

    time_match = _TIME_PATTERN.search(line)
    if time_match:
        hours, minutes, seconds, fraction = time_match.groups()
        # ffmpeg prints centiseconds
        values["out_time_us"] = (
            int(hours) * 3600 + int(minutes) * 60 + int(seconds)
        ) * 1_000_000 + int(fraction.ljust(2, "0")[:2]) * 10_000

    return EncodeProgress(**values)  # type: ignore[arg-type]


def format_progress(progress: EncodeProgress) -> str:
    """Render progress compactly for log output, e.g. ``00:01:23 frame=1234 2.0x``."""
    parts: list[str] = []
    seconds = progress.out_time_seconds
    if seconds is not None:
        whole = int(seconds)
        parts.append(f"{whole // 3600:02d}:{whole % 3600 // 60:02d}:{whole % 60:02d}")
    if progress.frame is not None:
        parts.append(f"frame={progress.frame}")
    if progress.fps is not None:
        parts.append(f"fps={progress.fps:g}")
    if progress.speed:
        parts.append(progress.speed)
    return " ".join(parts)
