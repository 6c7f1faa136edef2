from __future__ import annotations

from pathlib import Path
import asyncio
import json as _json
import logging
import sys

import typer

from shellexec.adapters.diagnostics.sinks import CollectingDiagnosticSink
from shellexec.adapters.project_root.markers import FixedProjectRoot, MarkerProjectRoot
from shellexec.application.command_runner import CommandRunner
from shellexec.application.result_serialization import serialize_result
from shellexec.application.settings import effective_options, read_settings
from shellexec.domain.diagnostics import Severity, error_diagnostic
from shellexec.domain.errors import ShellExecError
from shellexec.domain.json_types import JsonDict, as_json_dict
from shellexec.domain.produced import ProducedValue
from shellexec.domain.result import Result
from shellexec.domain.streams import ByteStream, VirtualFileStream

app = typer.Typer(add_completion=False)

OutputOpt = typer.Option("text", "--output", "-o", help="text, binary, stream or virtual_file")
FilenameOpt = typer.Option(None, "--filename", "-f", help="Target path for virtual_file output")
CwdOpt = typer.Option(None, "--cwd", help="Working directory for the command")
EncodingOpt = typer.Option(None, "--encoding")
TimeoutOpt = typer.Option(None, "--timeout-ms", help="0 means no timeout")
MaxOutputOpt = typer.Option(None, "--max-output-bytes")
JsonOpt = typer.Option(False, "--json", help="Print a JSON result instead of the output")
VerboseOpt = typer.Option(False, "--verbose", "-v")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _write_virtual_file(stream: VirtualFileStream) -> JsonDict:
    artifact: JsonDict = {"kind": "virtual_file"}
    for file in stream:
        file.path.parent.mkdir(parents=True, exist_ok=True)
        file.path.write_bytes(file.contents)
        artifact = as_json_dict(
            {"kind": "virtual_file", "path": str(file.path), "bytes": len(file.contents)}
        )
    return artifact


def _emit(value: ProducedValue, quiet: bool) -> JsonDict:
    if isinstance(value, VirtualFileStream):
        artifact = _write_virtual_file(value)
        if not quiet:
            typer.echo(artifact.get("path"))
        return artifact
    if isinstance(value, ByteStream):
        payload = value.read()
        kind = "stream"
    elif isinstance(value, bytes):
        payload = value
        kind = "binary"
    else:
        if not quiet:
            typer.echo(value)
        return as_json_dict({"kind": "text", "value": value})
    if not quiet:
        sys.stdout.flush()
        sys.stdout.buffer.write(payload)
        sys.stdout.buffer.flush()
    return as_json_dict({"kind": kind, "bytes": len(payload)})


def _execute(
    name: str,
    target: str,
    local: bool,
    output: str,
    filename: str | None,
    cwd: Path | None,
    encoding: str | None,
    timeout_ms: int | None,
    max_output_bytes: int | None,
    json: bool,
    verbose: bool,
) -> None:
    _configure_logging(verbose)
    root = MarkerProjectRoot().resolve()
    settings = read_settings(root)
    result: Result[ProducedValue] = Result(diagnostics=list(settings.diagnostics))
    options = effective_options(
        settings.value,
        cwd=cwd,
        encoding=encoding,
        timeout_ms=timeout_ms,
        max_output_bytes=max_output_bytes,
    )
    sink = CollectingDiagnosticSink()
    runner = CommandRunner(project_root=FixedProjectRoot(root), diagnostics=sink)
    call = runner.run_local if local else runner.run
    try:
        value = asyncio.run(call(target, output, filename, options))
    except ShellExecError as e:
        result.diagnostics.append(error_diagnostic(e))
    else:
        result.value = value
        result.artifacts.append(_emit(value, quiet=json))
    result.diagnostics.extend(sink.diagnostics)

    if json:
        data = serialize_result(result, command=name, args=[target])
        typer.echo(_json.dumps(data))
    else:
        for diag in result.diagnostics:
            label = "error" if diag.severity == Severity.ERROR else "warning"
            typer.echo(f"{label}: {diag.message}", err=True)
    raise typer.Exit(result.exit_code)


@app.command()
def run(
    command: str = typer.Argument(..., help="Command line passed to the shell"),
    output: str = OutputOpt,
    filename: str | None = FilenameOpt,
    cwd: Path | None = CwdOpt,
    encoding: str | None = EncodingOpt,
    timeout_ms: int | None = TimeoutOpt,
    max_output_bytes: int | None = MaxOutputOpt,
    json: bool = JsonOpt,
    verbose: bool = VerboseOpt,
):
    """Run a shell command and print its output."""
    _execute(
        "run", command, False, output, filename, cwd, encoding,
        timeout_ms, max_output_bytes, json, verbose,
    )


@app.command("run-local")
def run_local(
    binary: str = typer.Argument(..., help="Executable in the project virtualenv, with arguments"),
    output: str = OutputOpt,
    filename: str | None = FilenameOpt,
    cwd: Path | None = CwdOpt,
    encoding: str | None = EncodingOpt,
    timeout_ms: int | None = TimeoutOpt,
    max_output_bytes: int | None = MaxOutputOpt,
    json: bool = JsonOpt,
    verbose: bool = VerboseOpt,
):
    """Run an executable from the project's virtualenv."""
    _execute(
        "run-local", binary, True, output, filename, cwd, encoding,
        timeout_ms, max_output_bytes, json, verbose,
    )
