from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone
from typing import TypeVar

from shellexec.domain.diagnostics import Diagnostic
from shellexec.domain.json_types import JsonDict, as_json_dict
from shellexec.domain.result import Result

RESULT_SCHEMA_VERSION = 1

T = TypeVar("T")


def serialize_diagnostic(diag: Diagnostic) -> JsonDict:
    return as_json_dict(asdict(diag))


def serialize_result(result: Result[T], command: str, args: list[str]) -> JsonDict:
    return as_json_dict(
        {
            "result_schema_version": RESULT_SCHEMA_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "command": command,
            "args": args,
            "exit_code": result.exit_code,
            "warnings": len(result.warnings()),
            "diagnostics": [serialize_diagnostic(d) for d in result.diagnostics],
            "artifacts": result.artifacts,
        }
    )
