from typing import Protocol

from shellexec.domain.options import ExecutionOptions
from shellexec.domain.outcome import ExecutionOutcome


class SubprocessPort(Protocol):
    async def execute(
        self, command: str, options: ExecutionOptions
    ) -> ExecutionOutcome: ...
