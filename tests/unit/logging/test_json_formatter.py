"""Tests for logging/handlers.py."""

import json
import logging
import sys

from chromecastise.logging import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "chromecastise.workflow.batch",
        logging.WARNING,
        __file__,
        10,
        "converted %s",
        ("a.mkv",),
        None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_basic_fields(self) -> None:
        """Each entry has time, level, logger and message."""
        entry = json.loads(JSONFormatter().format(_record()))

        assert entry == {
            "time": entry["time"],
            "level": "warning",
            "logger": "chromecastise.workflow.batch",
            "message": "converted a.mkv",
        }
        assert entry["time"].endswith("+00:00")

    def test_file_fields_are_top_level(self) -> None:
        """file_id and file_path are keys of their own; the text tag is not."""
        record = _record(file_id="F01", file_path="/media/a.mkv", file_tag="[F01] ")
        entry = json.loads(JSONFormatter().format(record))

        assert entry["file_id"] == "F01"
        assert entry["file_path"] == "/media/a.mkv"
        assert "file_tag" not in entry

    def test_command_fields(self) -> None:
        """Tool run extras are emitted; unrelated attributes are not."""
        record = _record(
            command="mediainfo", returncode=0, elapsed_seconds=0.12, unrelated="x"
        )
        entry = json.loads(JSONFormatter().format(record))

        assert entry["command"] == "mediainfo"
        assert entry["returncode"] == 0
        assert entry["elapsed_seconds"] == 0.12
        assert "unrelated" not in entry

    def test_none_file_context_is_omitted(self) -> None:
        """Records outside a file carry no file keys."""
        entry = json.loads(JSONFormatter().format(_record(file_id=None)))
        assert "file_id" not in entry

    def test_exception_is_included(self) -> None:
        """Exception text is rendered."""
        try:
            raise ValueError("bad")
        except ValueError:
            record = _record()
            record.exc_info = sys.exc_info()

        entry = json.loads(JSONFormatter().format(record))
        assert "ValueError: bad" in entry["exception"]
