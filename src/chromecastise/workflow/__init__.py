"""Batch processing of input files."""

from chromecastise.workflow.batch import (
    BatchDriver,
    BatchResult,
    Encoder,
    FileResult,
    FileState,
)

__all__ = [
    "BatchDriver",
    "BatchResult",
    "Encoder",
    "FileResult",
    "FileState",
]
