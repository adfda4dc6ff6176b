"""Result of running an external process."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of one encoder run, kept for diagnostics."""

    argv: tuple[str, ...]
    returncode: int
    output: str = ""
    """Combined stdout and stderr."""

    elapsed_seconds: float = 0.0

    @property
    def success(self) -> bool:
        return self.returncode == 0
