from typing import Protocol

from shellexec.domain.diagnostics import Diagnostic


class DiagnosticSinkPort(Protocol):
    def emit(self, diagnostic: Diagnostic) -> None: ...
