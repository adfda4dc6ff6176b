"""Tests for cli/output.py."""

from pathlib import Path

import pytest

from chromecastise.cli.exit_codes import ExitCode
from chromecastise.cli.output import echo_file_output, error_exit, format_summary
from chromecastise.executor import ProcessResult
from chromecastise.workflow import BatchResult, FileResult, FileState


def _batch() -> BatchResult:
    return BatchResult(
        results=[
            FileResult(
                Path("/m/a.avi"),
                FileState.DONE,
                process_result=ProcessResult(("ffmpeg",), 0, "encoded a\n"),
            ),
            FileResult(Path("/m/b.mkv"), FileState.SKIPPED),
            FileResult(Path("/m/c.avi"), FileState.FAILED, error=RuntimeError("x")),
        ]
    )


class TestErrorExit:
    """Tests for error_exit()."""

    def test_prints_and_exits(self, capsys) -> None:
        """The message goes to stderr and the exit code is used."""
        with pytest.raises(SystemExit) as exc_info:
            error_exit("mediainfo missing", ExitCode.TOOL_NOT_AVAILABLE)

        assert exc_info.value.code == 30
        assert capsys.readouterr().err == "Error: mediainfo missing\n"


class TestFormatSummary:
    """Tests for format_summary()."""

    def test_counts(self) -> None:
        """Every state is counted."""
        assert format_summary(_batch()) == (
            "Processed 3 file(s): 1 converted, 1 skipped, 1 failed"
        )

    def test_empty(self) -> None:
        """An empty batch has all zero counts."""
        assert format_summary(BatchResult()) == (
            "Processed 0 file(s): 0 converted, 0 skipped, 0 failed"
        )


def test_echo_file_output_only_for_encoded_files(capsys):
    """Only files that ran the encoder print output."""
    for file_result in _batch().results:
        echo_file_output(file_result)

    out = capsys.readouterr().out
    assert out == "==> /m/a.avi\nencoded a\n"
