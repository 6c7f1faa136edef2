from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from shellexec.domain.diagnostics import Diagnostic, Severity
from shellexec.domain.json_types import JsonDict, as_json_dict
from shellexec.domain.options import ExecutionOptions
from shellexec.domain.result import Result

SettingsDict = JsonDict

_OPTION_KEYS = ("encoding", "timeout_ms", "max_output_bytes")


def read_settings(project_root: Path) -> Result[SettingsDict]:
    path = project_root / "pyproject.toml"
    if not path.exists():
        return Result(value={})
    try:
        raw = as_json_dict(tomllib.loads(path.read_text(encoding="utf-8")))
    except Exception as e:
        return Result(
            value={},
            diagnostics=[
                Diagnostic(
                    code="SETTINGS_PARSE_FAILED",
                    rule="settings.parse",
                    severity=Severity.WARN,
                    message=str(e),
                    details={"path": str(path)},
                )
            ],
        )
    tool = as_json_dict(raw.get("tool"))
    return Result(value=as_json_dict(tool.get("shellexec")))


def effective_options(
    settings: SettingsDict | None,
    cwd: Path | None = None,
    **explicit: Any,
) -> ExecutionOptions:
    """Explicit values win over project settings, which win over defaults."""
    values: dict[str, Any] = {}
    for key in _OPTION_KEYS:
        if explicit.get(key) is not None:
            values[key] = explicit[key]
        elif settings and settings.get(key) is not None:
            values[key] = settings[key]
    return ExecutionOptions(cwd=cwd, **values)
