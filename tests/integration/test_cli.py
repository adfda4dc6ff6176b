"""Integration tests for the chromecastise command."""

import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from chromecastise.cli import main
from chromecastise.exceptions import CancelledError, ToolNotFoundError
from chromecastise.executor import ProcessResult
from chromecastise.introspector import StubInspector


class FakeEncoder:
    """Encoder double recording plans."""

    def __init__(self, cancel: bool = False, cancel_on: str | None = None):
        self.plans = []
        self._cancel = cancel
        self._cancel_on = cancel_on

    def encode(self, plan, token=None, progress_callback=None):
        self.plans.append(plan)
        if self._cancel or plan.source_path.name == self._cancel_on:
            raise CancelledError(plan.source_path)
        return ProcessResult(
            argv=("ffmpeg", str(plan.source_path)),
            returncode=0,
            output=f"encoded {plan.source_path.name}\n",
        )


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def encoder() -> FakeEncoder:
    return FakeEncoder()


@pytest.fixture
def tools(encoder: FakeEncoder):
    """Replace tool lookup, mediainfo and ffmpeg with test doubles."""
    with (
        patch(
            "chromecastise.cli.require_tool",
            side_effect=lambda name, path=None: Path(f"/usr/bin/{name}"),
        ) as mock_require,
        patch("chromecastise.cli.find_tool", return_value=None),
        patch(
            "chromecastise.cli.MediainfoInspector", return_value=StubInspector()
        ) as mock_inspector,
        patch("chromecastise.cli.FFmpegEncoder", return_value=encoder) as mock_encoder,
    ):
        yield MagicMock(
            require=mock_require, inspector=mock_inspector, encoder=mock_encoder
        )


class TestUsageErrors:
    """Argument validation."""

    def test_mp4_and_mkv_are_exclusive(self, runner: CliRunner) -> None:
        """Giving both container flags is a usage error."""
        result = runner.invoke(main, ["--mp4", "--mkv", "a.avi"])
        assert result.exit_code == 2
        assert "mutually exclusive" in result.output

    def test_no_files_is_usage_error(self, runner: CliRunner) -> None:
        """At least one file is required."""
        result = runner.invoke(main, ["--mp4"])
        assert result.exit_code == 2
        assert "Missing argument" in result.output

    def test_threads_must_be_positive(self, runner: CliRunner) -> None:
        """--threads 0 is rejected by click."""
        result = runner.invoke(main, ["--threads", "0", "a.avi"])
        assert result.exit_code == 2

    def test_version(self, runner: CliRunner) -> None:
        """--version prints the package version."""
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_help(self, runner: CliRunner) -> None:
        """-h is an alias for --help."""
        result = runner.invoke(main, ["-h"])
        assert result.exit_code == 0
        assert "--mkv" in result.output


class TestFatalErrors:
    """Errors that stop the whole run."""

    def test_missing_tool(self, runner: CliRunner) -> None:
        """A missing mediainfo exits with TOOL_NOT_AVAILABLE."""
        with patch(
            "chromecastise.cli.require_tool",
            side_effect=ToolNotFoundError("mediainfo", "Install MediaInfo."),
        ):
            result = runner.invoke(main, ["a.avi"])

        assert result.exit_code == 30
        assert "Required tool not available: mediainfo" in result.output

    def test_invalid_config_file(
        self, runner: CliRunner, isolated_config: Path
    ) -> None:
        """A broken config file exits with CONFIG_ERROR."""
        (isolated_config / "config.toml").write_text("[transcode\n")
        result = runner.invoke(main, ["a.avi"])

        assert result.exit_code == 11
        assert "Invalid TOML" in result.output

    def test_interrupted(self, runner: CliRunner, tools) -> None:
        """Cancellation exits with 130 after printing a summary."""
        tools.encoder.return_value = FakeEncoder(cancel=True)
        result = runner.invoke(main, ["a.avi", "b.avi"])

        assert result.exit_code == 130
        assert "Processed 0 file(s)" in result.output
        assert "Interrupted" in result.output

    def test_output_of_finished_files_survives_interrupt(
        self, runner: CliRunner, tools
    ) -> None:
        """Output of files finished before an interrupt is still shown."""
        tools.encoder.return_value = FakeEncoder(cancel_on="b.avi")
        result = runner.invoke(main, ["--show-output", "a.avi", "b.avi"])

        assert result.exit_code == 130
        assert "==> a.avi\nencoded a.avi" in result.output
        assert "encoded b.avi" not in result.output
        assert "Processed 1 file(s): 1 converted" in result.output


class TestConversion:
    """End-to-end runs with test doubles for the external tools."""

    def test_batch_summary_and_exit_status(
        self, runner: CliRunner, tools, encoder: FakeEncoder
    ) -> None:
        """Per-file failures are reported but do not change the exit status."""
        result = runner.invoke(main, ["--mkv", "a.avi", "b.mkv", "notes.txt"])

        assert result.exit_code == 0
        assert "Processed 3 file(s): 1 converted, 1 skipped, 1 failed" in result.output
        assert "unsupported video format" in result.output
        assert [plan.output_path for plan in encoder.plans] == [Path("a_new.mkv")]

    def test_defaults_to_mp4(
        self, runner: CliRunner, tools, encoder: FakeEncoder
    ) -> None:
        """Without a flag the output container is mp4."""
        runner.invoke(main, ["movie.avi"])
        assert encoder.plans[0].output_path == Path("movie_new.mp4")

    def test_config_file_sets_defaults(
        self,
        runner: CliRunner,
        tools,
        encoder: FakeEncoder,
        isolated_config: Path,
    ) -> None:
        """Format and suffix come from the config file when not given."""
        (isolated_config / "config.toml").write_text(
            '[transcode]\nformat = "mkv"\nsuffix = "_cc"\n'
        )
        runner.invoke(main, ["movie.avi"])
        assert encoder.plans[0].output_path == Path("movie_cc.mkv")

    def test_flags_override_config(
        self,
        runner: CliRunner,
        tools,
        encoder: FakeEncoder,
        isolated_config: Path,
    ) -> None:
        """Command line flags win over the config file."""
        (isolated_config / "config.toml").write_text('[transcode]\nformat = "mkv"\n')
        runner.invoke(main, ["--mp4", "--suffix", "", "movie.avi"])
        assert encoder.plans[0].output_path == Path("movie.mp4")

    def test_threads_reach_encoder(self, runner: CliRunner, tools) -> None:
        """--threads is passed to the encoder."""
        runner.invoke(main, ["--threads", "3", "movie.avi"])
        assert tools.encoder.call_args.kwargs["threads"] == 3

    def test_show_output(self, runner: CliRunner, tools) -> None:
        """--show-output prints the encoder output."""
        result = runner.invoke(main, ["--show-output", "movie.avi"])
        assert "encoded movie.avi" in result.output

    def test_dry_run_does_not_need_ffmpeg(
        self, runner: CliRunner, tools, encoder: FakeEncoder
    ) -> None:
        """Dry runs only require mediainfo and never encode."""
        result = runner.invoke(main, ["--dry-run", "movie.avi"])

        assert result.exit_code == 0
        assert [c.args[0] for c in tools.require.call_args_list] == ["mediainfo"]
        assert encoder.plans == []
        assert "1 converted" in result.output

    def test_log_file(self, runner: CliRunner, tools, tmp_path: Path) -> None:
        """--log-file writes logs with the file tag."""
        log_file = tmp_path / "run.log"
        runner.invoke(main, ["--dry-run", "--log-file", str(log_file), "movie.avi"])

        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "[F01]" in log_file.read_text()

    def test_quiet_discards_logs(self, runner: CliRunner, tools) -> None:
        """--quiet drops per-file log messages but keeps the summary."""
        result = runner.invoke(main, ["--quiet", "--log-json", "a.avi", "notes.txt"])

        assert result.exit_code == 0
        assert "unsupported video format" not in result.output
        assert "Processed 2 file(s): 1 converted, 0 skipped, 1 failed" in result.output
