from __future__ import annotations

import codecs
from pathlib import Path

from shellexec.domain.errors import ConversionFailed, MissingFilename, ShellExecError
from shellexec.domain.json_types import as_json_dict
from shellexec.domain.output_kind import OutputKind, parse_output_kind
from shellexec.domain.produced import ProducedValue
from shellexec.domain.streams import ByteStream, VirtualFileStream
from shellexec.domain.virtual_file import VirtualFile


def resolve_virtual_path(filename: str | Path, cwd: Path | None = None) -> Path:
    path = Path(filename)
    if path.is_absolute():
        return path
    return (cwd or Path.cwd()) / path


def _decode(stdout: bytes, encoding: str) -> str:
    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise ConversionFailed(
            f"Unknown output encoding: {encoding}",
            details=as_json_dict({"encoding": encoding}),
            cause=e,
        ) from e
    return stdout.decode(encoding, errors="replace")


def _convert(
    stdout: bytes,
    kind: OutputKind,
    filename: str | Path | None,
    encoding: str,
    cwd: Path | None,
) -> ProducedValue:
    if kind is OutputKind.TEXT:
        return _decode(stdout, encoding).strip()
    if kind is OutputKind.BINARY:
        return bytes(stdout)
    if kind is OutputKind.STREAM:
        return ByteStream(bytes(stdout))
    if filename is None or filename == "":
        raise MissingFilename.for_kind(kind.value)
    path = resolve_virtual_path(filename, cwd)
    file = VirtualFile(path=path, contents=bytes(stdout), cwd=cwd or Path.cwd())
    return VirtualFileStream(file)


def convert(
    stdout: bytes,
    kind: OutputKind | str = OutputKind.TEXT,
    filename: str | Path | None = None,
    encoding: str = "utf8",
    cwd: Path | None = None,
) -> ProducedValue:
    """Turns captured stdout into the representation selected by ``kind``.

    ``cwd`` only affects how a relative virtual-file name is made absolute;
    the process working directory is used when it is not given.
    """
    resolved_kind = parse_output_kind(kind)
    try:
        return _convert(stdout, resolved_kind, filename, encoding, cwd)
    except ShellExecError:
        raise
    except Exception as e:
        raise ConversionFailed(
            f"Could not build {resolved_kind.value} output",
            details=as_json_dict({"output": resolved_kind.value}),
            cause=e,
        ) from e
