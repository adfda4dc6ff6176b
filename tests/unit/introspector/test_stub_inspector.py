"""Tests for StubInspector."""

from pathlib import Path

import pytest

from chromecastise.core.cancellation import CancellationToken
from chromecastise.exceptions import CancelledError, ProbeError, UnsupportedFormatError
from chromecastise.introspector import MediaProbe, StubInspector


class TestStubInspector:
    """Tests for StubInspector."""

    def test_infers_container_from_extension(self) -> None:
        """Without canned probes the container follows the extension."""
        probe = StubInspector().inspect(Path("/m/a.avi"))
        assert probe.container == "AVI"
        assert probe.video_codec == "AVC"
        assert probe.audio_codec == "AAC"

    def test_returns_canned_probe(self) -> None:
        """Canned probes are returned as given."""
        path = Path("/m/a.mkv")
        canned = MediaProbe(path, "Matroska", "MPEG-4 Visual", "MPEG Audio")
        assert StubInspector(probes={path: canned}).inspect(path) is canned

    def test_raises_canned_error(self) -> None:
        """Canned errors are raised and the call is still recorded."""
        path = Path("/m/a.mkv")
        stub = StubInspector(errors={path: ProbeError(path, "container format")})

        with pytest.raises(ProbeError):
            stub.inspect(path)
        assert stub.inspected == [path]

    def test_validates_extension(self) -> None:
        """The stub applies the same extension check as the real inspector."""
        with pytest.raises(UnsupportedFormatError):
            StubInspector().inspect(Path("/m/a.txt"))

    def test_honours_cancellation(self) -> None:
        """A cancelled token stops inspection."""
        token = CancellationToken()
        token.cancel()
        with pytest.raises(CancelledError):
            StubInspector().inspect(Path("/m/a.mkv"), token)
