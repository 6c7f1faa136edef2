import logging

from shellexec.domain.diagnostics import Diagnostic, Severity

logger = logging.getLogger("shellexec")

_LEVELS = {
    Severity.ERROR: logging.ERROR,
    Severity.WARN: logging.WARNING,
    Severity.INFO: logging.INFO,
}


class LoggingDiagnosticSink:
    def __init__(self, log: logging.Logger | None = None) -> None:
        self.log = log or logger

    def emit(self, diagnostic: Diagnostic) -> None:
        level = _LEVELS.get(diagnostic.severity, logging.WARNING)
        if diagnostic.code == "COMMAND_STDERR":
            self.log.log(level, "[shellexec stderr] %s", diagnostic.message)
            return
        self.log.log(level, "%s: %s", diagnostic.code, diagnostic.message)


class CollectingDiagnosticSink:
    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def emit(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
