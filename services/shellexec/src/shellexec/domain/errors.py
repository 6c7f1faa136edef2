from __future__ import annotations

from dataclasses import dataclass

from shellexec.domain.json_types import JsonDict, as_json_dict


@dataclass
class ShellExecError(Exception):
    message: str
    details: JsonDict | None = None
    hint: str | None = None
    cause: Exception | None = None

    is_execution = False

    def __str__(self) -> str:
        return self.message


class MissingFilename(ShellExecError):
    @classmethod
    def for_kind(cls, kind: str) -> MissingFilename:
        return cls(
            f'filename is required when output is "{kind}"',
            details=as_json_dict({"output": kind}),
            hint="Pass a target filename for virtual file output.",
        )


class UnsupportedOutputKind(ShellExecError):
    @classmethod
    def for_value(cls, value: object, valid_kinds: list[str]) -> UnsupportedOutputKind:
        return cls(
            f'Unsupported output kind: "{value}". Use: {", ".join(valid_kinds)}.',
            details=as_json_dict({"value": str(value), "valid_kinds": valid_kinds}),
        )

    @property
    def value(self) -> str:
        return str((self.details or {}).get("value", ""))

    @property
    def valid_kinds(self) -> list[str]:
        raw = (self.details or {}).get("valid_kinds")
        return [str(item) for item in raw] if isinstance(raw, list) else []


class ExecutionFailed(ShellExecError):
    is_execution = True

    @property
    def command(self) -> str:
        return str((self.details or {}).get("command", ""))

    @property
    def stdout(self) -> str:
        return str((self.details or {}).get("stdout", ""))

    @property
    def stderr(self) -> str:
        return str((self.details or {}).get("stderr", ""))

    @property
    def exit_code(self) -> int | None:
        raw = (self.details or {}).get("exit_code")
        return raw if isinstance(raw, int) else None

    @property
    def reason(self) -> str:
        return str((self.details or {}).get("reason", ""))


class ConversionFailed(ShellExecError):
    is_execution = True
