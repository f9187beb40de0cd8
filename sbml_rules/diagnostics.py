"""Severity-tagged diagnostics produced by document consistency checks."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import IntEnum, IntFlag


class Severity(IntEnum):
    INFO = 0
    WARNING = 1
    ERROR = 2
    FATAL = 3


class ValidatorCategory(IntFlag):
    """Groups of consistency checks a document can switch on or off."""

    NONE = 0
    IDENTIFIER = 1
    GENERAL = 2
    MATH = 4
    ALL = IDENTIFIER | GENERAL | MATH


@dataclass(frozen=True)
class Diagnostic:
    """A single consistency issue.

    Fields
    ------
    code: Stable kebab-case identifier of the check (``duplicate-id`` ...).
    severity: How serious the issue is; ERROR and above block conversion.
    message: Human readable explanation.
    element: Identifier of the offending element, empty when document-wide.
    """

    code: str
    severity: Severity
    message: str
    element: str = ""

    def __str__(self) -> str:
        prefix = f"{self.element}: " if self.element else ""
        return f"{prefix}{self.severity.name} - {self.message} [{self.code}]"


class ErrorLog:
    """Ordered collection of diagnostics attached to a document."""

    def __init__(self, diagnostics: Iterable[Diagnostic] = ()):
        self._diagnostics: list[Diagnostic] = list(diagnostics)

    def add(self, diagnostic: Diagnostic) -> None:
        self._diagnostics.append(diagnostic)

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        self._diagnostics.extend(diagnostics)

    def clear_log(self) -> None:
        self._diagnostics.clear()

    def num_fails_with_severity(self, severity: Severity) -> int:
        """Count diagnostics with exactly ``severity``."""
        return sum(1 for d in self._diagnostics if d.severity == severity)

    def errors(self) -> list[Diagnostic]:
        """Diagnostics at ERROR severity or worse."""
        return [d for d in self._diagnostics if d.severity >= Severity.ERROR]

    def __len__(self) -> int:
        return len(self._diagnostics)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(list(self._diagnostics))

    def __repr__(self) -> str:
        return f"ErrorLog({len(self)} diagnostics)"


__all__ = ["Diagnostic", "ErrorLog", "Severity", "ValidatorCategory"]
