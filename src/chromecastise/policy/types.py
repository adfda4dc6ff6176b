"""Encode plan data type."""

from dataclasses import dataclass
from pathlib import Path

from chromecastise.core.capabilities import COPY, ContainerFormat


@dataclass(frozen=True)
class EncodePlan:
    """What the encoder should do with one source file."""

    source_path: Path
    output_path: Path
    container: ContainerFormat

    video_action: str
    """``copy`` or the ffmpeg video encoder to use."""

    audio_action: str
    """``copy`` or the ffmpeg audio encoder to use."""

    skip: bool
    """True when nothing would change: both streams copied, same container."""

    container_passthrough: bool = False
    """Whether the probed source container is itself passthrough-safe."""

    @property
    def copies_video(self) -> bool:
        return self.video_action == COPY

    @property
    def copies_audio(self) -> bool:
        return self.audio_action == COPY

    def describe(self) -> str:
        """One-line summary for logs and dry-run output."""
        if self.skip:
            return "no conversion required"
        return (
            f"video={self.video_action} audio={self.audio_action} "
            f"-> {self.output_path.name} ({self.container.value})"
        )
