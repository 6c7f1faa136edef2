from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from shellexec.domain.diagnostics import Diagnostic, Severity
from shellexec.domain.json_types import JsonDict

T = TypeVar("T")

EXIT_OK = 0
EXIT_INVALID_REQUEST = 2
EXIT_EXECUTION_FAILED = 3


@dataclass
class Result(Generic[T]):
    """A produced value plus everything reported while producing it."""

    value: T | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)
    artifacts: list[JsonDict] = field(default_factory=list)

    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.ERROR]

    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.WARN]

    @property
    def exit_code(self) -> int:
        errors = self.errors()
        if any(d.is_execution for d in errors):
            return EXIT_EXECUTION_FAILED
        if errors:
            return EXIT_INVALID_REQUEST
        return EXIT_OK
