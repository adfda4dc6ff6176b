"""Tests for tools/detection.py."""

from pathlib import Path
from unittest.mock import patch

import pytest

from chromecastise.exceptions import ToolNotFoundError
from chromecastise.tools import find_tool, require_tool

WHICH = "chromecastise.tools.detection.shutil.which"


class TestFindTool:
    """Tests for find_tool()."""

    def test_configured_path_wins(self, tmp_path: Path) -> None:
        """An existing configured file is used without a PATH lookup."""
        tool = tmp_path / "ffmpeg"
        tool.touch()
        with patch(WHICH) as mock_which:
            assert find_tool("ffmpeg", tool) == tool
        mock_which.assert_not_called()

    @patch(WHICH, return_value="/usr/bin/ffmpeg")
    def test_bad_configured_path_falls_back_to_path(
        self, _which, tmp_path: Path, caplog
    ) -> None:
        """A configured path that is not a file logs a warning and uses PATH."""
        assert find_tool("ffmpeg", tmp_path / "missing") == Path("/usr/bin/ffmpeg")
        assert "not a file" in caplog.text

    @patch(WHICH, return_value=None)
    def test_not_found(self, _which) -> None:
        """None when the tool is nowhere to be found."""
        assert find_tool("mediainfo") is None


class TestRequireTool:
    """Tests for require_tool()."""

    @patch(WHICH, return_value=None)
    def test_raises_with_install_hint(self, _which) -> None:
        """Missing tools raise ToolNotFoundError with an install hint."""
        with pytest.raises(ToolNotFoundError) as exc_info:
            require_tool("mediainfo")

        assert exc_info.value.tool == "mediainfo"
        assert "CHROMECASTISE_MEDIAINFO_PATH" in str(exc_info.value)

    @patch(WHICH, return_value="/usr/bin/mediainfo")
    def test_returns_path(self, _which) -> None:
        """Found tools are returned as Path."""
        assert require_tool("mediainfo") == Path("/usr/bin/mediainfo")
