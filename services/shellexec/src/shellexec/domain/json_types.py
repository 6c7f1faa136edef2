from __future__ import annotations

from enum import Enum
from pathlib import PurePath
from typing import TypeAlias

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | dict[str, "JsonValue"] | list["JsonValue"]
JsonDict: TypeAlias = dict[str, JsonValue]


def to_json_value(value: object) -> JsonValue:
    """Coerces error details and artifacts into plain JSON values.

    Enums collapse to their value, paths to strings and captured bytes to
    text; anything else unknown falls back to ``str``.
    """
    if isinstance(value, Enum):
        return to_json_value(value.value)
    if isinstance(value, dict):
        return {str(k): to_json_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_value(item) for item in value]
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, PurePath):
        return str(value)
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def as_json_dict(value: object) -> JsonDict:
    if not isinstance(value, dict):
        return {}
    return {str(k): to_json_value(v) for k, v in value.items()}
