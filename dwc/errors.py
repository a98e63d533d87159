from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class PipelineError(Exception):
    """Base error raised by the checklist pipeline.

    Parameters
    ----------
    stage:
        Pipeline stage that failed (``load``, ``map``, ``write``).
    message:
        Human readable error message.
    row:
        Source spreadsheet row the error refers to, when known.
    """

    stage: str
    message: str
    row: Optional[int] = None

    def __str__(self) -> str:
        if self.row is not None:
            return f"{self.stage}: {self.message} (row {self.row})"
        return f"{self.stage}: {self.message}"


class LoadError(PipelineError):
    """The input spreadsheet is missing, unreadable or malformed."""

    def __init__(self, message: str, row: Optional[int] = None) -> None:
        super().__init__("load", message, row)


class MappingError(PipelineError):
    """A source value falls outside a recoding table."""

    def __init__(self, message: str, row: Optional[int] = None) -> None:
        super().__init__("map", message, row)


class WriteError(PipelineError):
    """An output file could not be written."""

    def __init__(self, message: str, row: Optional[int] = None) -> None:
        super().__init__("write", message, row)


__all__ = ["PipelineError", "LoadError", "MappingError", "WriteError"]
