#!/usr/bin/env python3
from __future__ import annotations

from pathlib import Path
from typing import TypeGuard
import argparse

import yaml


REPO_ROOT = Path(__file__).resolve().parents[1]
CODES_RELPATH = Path("services/shellexec/src/shellexec/diagnostics/codes.yaml")
DOC_RELPATH = Path("docs/reference/diagnostic-codes.md")
SEVERITIES = ("error", "warn", "info")


def _is_dict(value: object) -> TypeGuard[dict[object, object]]:
    return isinstance(value, dict)


def _is_list(value: object) -> TypeGuard[list[object]]:
    return isinstance(value, list)


def _as_dict(value: object) -> dict[str, object]:
    if not _is_dict(value):
        return {}
    return {str(k): v for k, v in value.items()}


def _cell(value: object) -> str:
    return str(value or "").strip().replace("\n", " ").replace("|", "\\|")


def load_codes(repo_root: Path = REPO_ROOT) -> list[dict[str, object]]:
    src = repo_root / CODES_RELPATH
    if not src.exists():
        raise SystemExit(f"Diagnostics source not found: {src}")
    data = _as_dict(yaml.safe_load(src.read_text(encoding="utf-8")) or {})
    if data.get("version") != 1:
        raise SystemExit(f"Unsupported diagnostics version: {data.get('version')}")
    raw_codes = data.get("codes")
    if not _is_list(raw_codes):
        raise SystemExit("Invalid codes.yaml: expected top-level 'codes' list")

    codes: list[dict[str, object]] = []
    seen: set[str] = set()
    for entry in raw_codes:
        item = _as_dict(entry)
        code = _cell(item.get("code"))
        if not code or not _cell(item.get("rule")):
            raise SystemExit(f"Invalid diagnostic entry (missing code or rule): {entry}")
        if item.get("severity") not in SEVERITIES:
            raise SystemExit(f"Invalid severity for {code}: {item.get('severity')}")
        if code in seen:
            raise SystemExit(f"Duplicate diagnostic code: {code}")
        seen.add(code)
        codes.append(item)
    return codes


def render(codes: list[dict[str, object]]) -> str:
    lines = [
        "> **Generated file. Do not edit directly.**",
        "> Run: `python scripts/generate_diagnostic_codes.py`",
        "",
        "# Diagnostic codes",
        "",
        f"This page is generated from `{CODES_RELPATH.as_posix()}`.",
    ]
    rules = sorted({_cell(item.get("rule")) for item in codes})
    for rule in rules:
        lines.extend(["", f"## `{rule}`", "", "| Code | Severity | Message | Hint |", "|---|---|---|---|"])
        for item in sorted(codes, key=lambda x: _cell(x.get("code"))):
            if _cell(item.get("rule")) != rule:
                continue
            lines.append(
                f"| `{_cell(item.get('code'))}` | `{_cell(item.get('severity'))}` "
                f"| {_cell(item.get('message'))} | {_cell(item.get('hint'))} |"
            )
    return "\n".join(lines) + "\n"


def generate(repo_root: Path = REPO_ROOT, check: bool = False) -> int:
    out = repo_root / DOC_RELPATH
    content = render(load_codes(repo_root))
    if check:
        current = out.read_text(encoding="utf-8") if out.exists() else ""
        if current != content:
            print(f"{out} is out of date")
            return 1
        return 0
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(content, encoding="utf-8")
    print(f"Generated {out}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Render the diagnostic code reference.")
    parser.add_argument("--check", action="store_true", help="fail if the page is stale")
    args = parser.parse_args(argv)
    return generate(check=args.check)


if __name__ == "__main__":
    raise SystemExit(main())
