"""Encode decision logic.

Turns inspected metadata into an :class:`EncodePlan`. Pure: no I/O, no
exceptions for well-formed input.
"""

import logging
from pathlib import Path

from chromecastise.core.capabilities import (
    AUDIO_CODECS,
    CONTAINER_FORMATS,
    COPY,
    DEFAULT_AUDIO_ENCODER,
    DEFAULT_VIDEO_ENCODER,
    VIDEO_CODECS,
    ContainerFormat,
    is_supported,
)
from chromecastise.introspector.interface import MediaProbe, source_extension
from chromecastise.policy.types import EncodePlan

logger = logging.getLogger(__name__)


def build_output_path(
    source_path: Path, suffix: str, container: ContainerFormat
) -> Path:
    """Output path next to the source.

    ``/media/My Clip.mov`` with suffix ``_new`` and mp4 becomes
    ``/media/My Clip_new.mp4``. Only the final extension is stripped.
    """
    name = source_path.name
    stem = name[: -len(source_path.suffix)] if source_path.suffix else name
    return source_path.with_name(f"{stem}{suffix}.{container.extension}")


def plan_encode(
    probe: MediaProbe,
    target: ContainerFormat | str,
    suffix: str,
    source_path: Path,
) -> EncodePlan:
    """Decide how to convert one file.

    Args:
        probe: Inspected container and codec names.
        target: Requested output container.
        suffix: Text appended to the output file's base name.
        source_path: The source file.

    Returns:
        EncodePlan. ``skip`` is set only when both streams are copied and the
        source already has the target extension.
    """
    container = ContainerFormat.parse(target)

    video_action = (
        COPY if is_supported(probe.video_codec, VIDEO_CODECS) else DEFAULT_VIDEO_ENCODER
    )
    audio_action = (
        COPY if is_supported(probe.audio_codec, AUDIO_CODECS) else DEFAULT_AUDIO_ENCODER
    )

    skip = (
        video_action == COPY
        and audio_action == COPY
        and source_extension(source_path) == container.extension
    )

    container_passthrough = is_supported(probe.container, CONTAINER_FORMATS)
    if not container_passthrough:
        logger.debug(
            "Source container %r is not passthrough-safe; output will be remuxed",
            probe.container,
        )

    plan = EncodePlan(
        source_path=source_path,
        output_path=build_output_path(source_path, suffix, container),
        container=container,
        video_action=video_action,
        audio_action=audio_action,
        skip=skip,
        container_passthrough=container_passthrough,
    )
    logger.debug("Plan for %s: %s", source_path, plan.describe())
    return plan
