from __future__ import annotations

import asyncio
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from shellexec.domain.output_kind import OutputKind

DEFAULT_ENCODING = "utf8"
DEFAULT_TIMEOUT_MS = 0
DEFAULT_MAX_OUTPUT_BYTES = 10 * 1024 * 1024


class CancellationSignal:
    """Cooperative cancellation handle shared between a caller and a running command.

    Triggering it asks the subprocess facility to terminate the child; the
    runner itself never polls it.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()


@dataclass(frozen=True)
class ExecutionOptions:
    cwd: Path | None = None
    encoding: str = DEFAULT_ENCODING
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES
    cancel: CancellationSignal | None = None

    def with_overrides(self, **changes: Any) -> ExecutionOptions:
        return replace(self, **changes)


@dataclass
class ExecutionRequest:
    command: str
    output: OutputKind
    filename: str | None
    options: ExecutionOptions
