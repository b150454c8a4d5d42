"""Exception types raised by the analysis core."""

from __future__ import annotations


class AnalysisError(Exception):
    """Base class for all analysis errors."""


class ParseError(AnalysisError):
    """A source file could not be parsed as valid syntax.

    Carries the originating file name so callers can report the
    failure and keep analyzing the remaining files.
    """

    def __init__(
        self,
        file_name: str,
        message: str,
        *,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.file_name = file_name
        self.message = message
        self.line = line
        self.column = column
        location = f":{line}:{column}" if line is not None else ""
        super().__init__(f"{file_name}{location}: {message}")
