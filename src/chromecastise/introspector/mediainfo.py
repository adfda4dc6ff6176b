"""mediainfo-based implementation of the MediaInspector protocol."""

import logging
import subprocess  # nosec B404 - TimeoutExpired is raised by run_command
from pathlib import Path

from chromecastise.core.cancellation import CancellationToken
from chromecastise.core.subprocess_utils import run_command
from chromecastise.exceptions import CancelledError, ProbeError
from chromecastise.introspector.interface import (
    MediaProbe,
    ProbeRequest,
    check_extension,
)

logger = logging.getLogger(__name__)

# Default time limit for a single mediainfo call (seconds)
DEFAULT_PROBE_TIMEOUT = 60.0


class MediainfoInspector:
    """Inspect files by running ``mediainfo --Inform=...`` once per property.

    Each property is a separate synchronous call. The first failing call
    aborts inspection of that file.
    """

    def __init__(
        self,
        mediainfo_path: Path | str = "mediainfo",
        timeout: float | None = DEFAULT_PROBE_TIMEOUT,
    ) -> None:
        """Initialize the inspector.

        Args:
            mediainfo_path: Path to the mediainfo executable.
            timeout: Time limit per call in seconds (None = no limit).
        """
        self._mediainfo_path = str(mediainfo_path)
        self._timeout = timeout

    def inspect(
        self, path: Path, token: CancellationToken | None = None
    ) -> MediaProbe:
        """Report container and codec names for ``path``.

        Raises:
            UnsupportedFormatError: If the extension is not accepted.
            ProbeError: If any mediainfo call fails.
            CancelledError: If ``token`` is cancelled.
        """
        check_extension(path)

        container = self._query(path, ProbeRequest.CONTAINER, token)
        video_codec = self._query(path, ProbeRequest.VIDEO_CODEC, token)
        audio_codec = self._query(path, ProbeRequest.AUDIO_CODEC, token)

        probe = MediaProbe(
            path=path,
            container=container,
            video_codec=video_codec,
            audio_codec=audio_codec,
        )
        logger.debug(
            "Probed %s: container=%r video=%r audio=%r",
            path,
            container,
            video_codec,
            audio_codec,
        )
        return probe

    def build_command(self, path: Path, request: ProbeRequest) -> list[str]:
        """Build the mediainfo argument vector for one request."""
        return [self._mediainfo_path, f"--Inform={request.value}", str(path)]

    def _query(
        self,
        path: Path,
        request: ProbeRequest,
        token: CancellationToken | None,
    ) -> str:
        cmd = self.build_command(path, request)
        try:
            stdout, stderr, returncode = run_command(
                cmd, token=token, timeout=self._timeout
            )
        except CancelledError as e:
            raise CancelledError(path) from e
        except subprocess.TimeoutExpired as e:
            raise ProbeError(
                path, request.description, reason=f"timed out after {e.timeout}s"
            ) from e
        except OSError as e:
            raise ProbeError(
                path, request.description, reason=f"could not run mediainfo: {e}"
            ) from e

        if returncode != 0:
            raise ProbeError(
                path, request.description, returncode=returncode, output=stderr
            )

        return stdout.strip()
