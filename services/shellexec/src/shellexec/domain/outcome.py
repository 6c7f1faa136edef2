from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FailureReason(str, Enum):
    EXIT = "exit"
    SIGNAL = "signal"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    OUTPUT_LIMIT = "output_limit"
    SPAWN = "spawn"


@dataclass(frozen=True)
class ExecutionFailure:
    reason: FailureReason
    message: str
    exit_code: int | None = None
    signal: int | None = None


@dataclass(frozen=True)
class ExecutionOutcome:
    stdout: bytes
    stderr: bytes
    failure: ExecutionFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, stdout: bytes, stderr: bytes) -> ExecutionOutcome:
        return cls(stdout=stdout, stderr=stderr)

    @classmethod
    def failed(
        cls,
        reason: FailureReason,
        message: str,
        *,
        stdout: bytes = b"",
        stderr: bytes = b"",
        exit_code: int | None = None,
        signal: int | None = None,
    ) -> ExecutionOutcome:
        return cls(
            stdout=stdout,
            stderr=stderr,
            failure=ExecutionFailure(
                reason=reason, message=message, exit_code=exit_code, signal=signal
            ),
        )
