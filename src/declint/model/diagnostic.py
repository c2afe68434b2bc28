"""Diagnostic model: structured lint findings for stylesheet analysis."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class SourceLocation:
    """A location in stylesheet source."""

    file: str
    line: int  # 1-indexed
    column: int  # 1-indexed
    end_line: int | None = None
    end_column: int | None = None

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Diagnostic:
    """A single lint finding about a stylesheet.

    Attributes:
        rule: Identifier for the rule that produced this diagnostic.
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        location: Where the problem is, if applicable.
        word: The offending source text to highlight, if applicable.
    """

    rule: str
    severity: Severity
    message: str
    location: SourceLocation | None = None
    word: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def __str__(self) -> str:
        prefix = f"{self.location}: " if self.location else ""
        return f"{prefix}{self.severity.value}: {self.message} ({self.rule})"
