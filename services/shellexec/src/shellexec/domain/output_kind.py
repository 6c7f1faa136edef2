from __future__ import annotations

from enum import Enum

from shellexec.domain.errors import UnsupportedOutputKind


class OutputKind(str, Enum):
    TEXT = "text"
    BINARY = "binary"
    STREAM = "stream"
    VIRTUAL_FILE = "virtual_file"


# Legacy names still accepted from older callers.
_ALIASES = {
    "string": OutputKind.TEXT,
    "buffer": OutputKind.BINARY,
    "vinyl": OutputKind.VIRTUAL_FILE,
}


def valid_output_kinds() -> list[str]:
    return [kind.value for kind in OutputKind]


def parse_output_kind(value: OutputKind | str) -> OutputKind:
    if isinstance(value, OutputKind):
        return value
    if isinstance(value, str):
        for kind in OutputKind:
            if kind.value == value:
                return kind
        if value in _ALIASES:
            return _ALIASES[value]
    raise UnsupportedOutputKind.for_value(value, valid_output_kinds())
