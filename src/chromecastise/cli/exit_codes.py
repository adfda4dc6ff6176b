"""Exit codes for the chromecastise command.

Per-file conversion failures do not change the exit code; they are logged
and counted in the summary. Only problems that stop the whole run do.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    USAGE_ERROR = 2  # Matches click's usage error exit status

    CONFIG_ERROR = 11

    TOOL_NOT_AVAILABLE = 30

    INTERRUPTED = 130  # 128 + SIGINT
