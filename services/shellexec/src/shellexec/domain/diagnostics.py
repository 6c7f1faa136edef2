from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import hashlib
from typing import Any

from shellexec.domain.errors import ShellExecError


class Severity(str, Enum):
    ERROR = "error"
    WARN = "warn"
    INFO = "info"


@dataclass(frozen=True)
class Diagnostic:
    code: str
    rule: str
    severity: Severity
    message: str
    hint: str | None = None
    details: dict[str, Any] | None = None
    is_execution: bool = False
    id: str = field(init=False)

    def __post_init__(self) -> None:
        raw = f"{self.code}|{self.rule}|{self.severity}|{self.message}"
        object.__setattr__(self, "id", hashlib.sha256(raw.encode()).hexdigest()[:12])


def stderr_diagnostic(command: str, stderr_text: str) -> Diagnostic:
    return Diagnostic(
        code="COMMAND_STDERR",
        rule="command.stderr",
        severity=Severity.WARN,
        message=stderr_text,
        details={"command": command},
    )


def error_diagnostic(error: Exception) -> Diagnostic:
    if isinstance(error, ShellExecError):
        return Diagnostic(
            code=_error_code(type(error).__name__),
            rule="command.run",
            severity=Severity.ERROR,
            message=error.message,
            hint=error.hint,
            details=error.details,
            is_execution=error.is_execution,
        )
    return Diagnostic(
        code="UNEXPECTED_ERROR",
        rule="command.run",
        severity=Severity.ERROR,
        message=str(error),
        is_execution=True,
    )


def _error_code(class_name: str) -> str:
    out: list[str] = []
    for idx, ch in enumerate(class_name):
        if ch.isupper() and idx:
            out.append("_")
        out.append(ch.upper())
    return "".join(out)
