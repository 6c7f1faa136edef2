from __future__ import annotations

import logging
import sys
from pathlib import Path

from shellexec.adapters.diagnostics.sinks import LoggingDiagnosticSink
from shellexec.adapters.process.asyncio_shell import AsyncioShellSubprocess
from shellexec.adapters.project_root.markers import MarkerProjectRoot
from shellexec.application.output_adapter import convert
from shellexec.domain.diagnostics import stderr_diagnostic
from shellexec.domain.errors import ExecutionFailed, MissingFilename
from shellexec.domain.json_types import as_json_dict
from shellexec.domain.options import ExecutionOptions, ExecutionRequest
from shellexec.domain.outcome import ExecutionFailure, ExecutionOutcome
from shellexec.domain.output_kind import OutputKind, parse_output_kind
from shellexec.domain.produced import ProducedValue
from shellexec.ports.diagnostic_sink import DiagnosticSinkPort
from shellexec.ports.project_root import ProjectRootPort
from shellexec.ports.subprocess_facility import SubprocessPort

logger = logging.getLogger(__name__)

LOCAL_VENV_DIR = ".venv"


def local_bin_dir(platform: str | None = None) -> Path:
    platform = platform or sys.platform
    scripts = "Scripts" if platform == "win32" else "bin"
    return Path(LOCAL_VENV_DIR) / scripts


def _text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace") if data else ""


def _execution_failed(
    command: str, outcome: ExecutionOutcome, failure: ExecutionFailure
) -> ExecutionFailed:
    return ExecutionFailed(
        failure.message,
        details=as_json_dict(
            {
                "command": command,
                "reason": failure.reason.value,
                "exit_code": failure.exit_code,
                "signal": failure.signal,
                "stdout": _text(outcome.stdout),
                "stderr": _text(outcome.stderr),
            }
        ),
    )


class CommandRunner:
    def __init__(
        self,
        subprocess: SubprocessPort | None = None,
        project_root: ProjectRootPort | None = None,
        diagnostics: DiagnosticSinkPort | None = None,
        platform: str | None = None,
    ) -> None:
        self.subprocess = subprocess or AsyncioShellSubprocess()
        self.project_root = project_root or MarkerProjectRoot()
        self.diagnostics = diagnostics or LoggingDiagnosticSink()
        self.platform = platform or sys.platform

    async def run(
        self,
        command: str,
        output: OutputKind | str = OutputKind.TEXT,
        filename: str | Path | None = None,
        options: ExecutionOptions | None = None,
    ) -> ProducedValue:
        kind = parse_output_kind(output)
        if kind is OutputKind.VIRTUAL_FILE and not filename:
            raise MissingFilename.for_kind(kind.value)
        request = ExecutionRequest(
            command=command,
            output=kind,
            filename=str(filename) if filename else None,
            options=options or ExecutionOptions(),
        )
        logger.debug("Running %s (output=%s)", request.command, request.output.value)
        outcome = await self.subprocess.execute(request.command, request.options)
        if outcome.failure is not None:
            raise _execution_failed(request.command, outcome, outcome.failure)

        stderr_text = _text(outcome.stderr).strip()
        if stderr_text:
            self.diagnostics.emit(stderr_diagnostic(request.command, stderr_text))

        return convert(
            outcome.stdout,
            request.output,
            request.filename,
            request.options.encoding,
        )

    def local_command(self, binary: str) -> str:
        name, _, args = binary.strip().partition(" ")
        path = self.project_root.resolve() / local_bin_dir(self.platform) / name
        executable = f'"{path}.exe"' if self.platform == "win32" else str(path)
        return f"{executable} {args.strip()}" if args.strip() else executable

    async def run_local(
        self,
        binary: str,
        output: OutputKind | str = OutputKind.TEXT,
        filename: str | Path | None = None,
        options: ExecutionOptions | None = None,
    ) -> ProducedValue:
        command = self.local_command(binary)
        logger.debug("Resolved local binary %s to %s", binary, command)
        return await self.run(command, output, filename, options)


async def run(
    command: str,
    output: OutputKind | str = OutputKind.TEXT,
    filename: str | Path | None = None,
    options: ExecutionOptions | None = None,
) -> ProducedValue:
    return await CommandRunner().run(command, output, filename, options)


async def run_local(
    binary: str,
    output: OutputKind | str = OutputKind.TEXT,
    filename: str | Path | None = None,
    options: ExecutionOptions | None = None,
) -> ProducedValue:
    return await CommandRunner().run_local(binary, output, filename, options)
