"""Canonical plain-data snapshot of a composite error.

Every serializer and the identity hash consume the same snapshot so that
the formats never disagree about which fields exist or how a value reads.
"""

from __future__ import annotations

import base64
import dataclasses
import traceback
from collections.abc import Iterable, Mapping, Sequence, Set
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel

MAX_SAFE_INTEGER = 2**53 - 1
ROOT_PATH = "~"


def build_snapshot(obj: Any, transient: Iterable[str] = ()) -> dict[str, Any]:
    """Return the instance fields of ``obj`` as JSON-compatible plain data.

    Args:
        obj: Object whose ``vars()`` are captured.
        transient: Field names left out of the snapshot.
    """
    skipped = set(transient)
    fields = {key: value for key, value in vars(obj).items() if key not in skipped}
    ancestors = [(id(obj), ROOT_PATH)]
    return {key: _normalize(value, f"{ROOT_PATH}.{key}", ancestors, nested=False) for key, value in fields.items()}


def flatten_exception(error: BaseException) -> dict[str, Any]:
    """Render a native exception as ``name``/``message``/``stack`` plus its own fields."""
    return _flatten_exception(error, ROOT_PATH, [(id(error), ROOT_PATH)])


def exception_name(error: BaseException) -> str:
    name = vars(error).get("name") if hasattr(error, "__dict__") else None
    return name if isinstance(name, str) and name else type(error).__name__


def _flatten_exception(error: BaseException, path: str, ancestors: list[tuple[int, str]]) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": exception_name(error),
        "message": str(error),
        "stack": "".join(traceback.format_exception(error)).rstrip("\n"),
    }
    skipped = set(getattr(type(error), "_transient_fields", ()))
    for key, value in getattr(error, "__dict__", {}).items():
        if key in data or key in skipped:
            continue
        data[key] = _normalize(value, f"{path}.{key}", ancestors, nested=True)
    return data


def _normalize(value: Any, path: str, ancestors: list[tuple[int, str]], *, nested: bool) -> Any:
    if isinstance(value, Enum):
        return _normalize(value.value, path, ancestors, nested=nested)
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        return str(value)
    if isinstance(value, float):
        return float(value)
    if isinstance(value, int):
        return str(value) if abs(value) > MAX_SAFE_INTEGER else int(value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()

    for ancestor_id, ancestor_path in ancestors:
        if ancestor_id == id(value):
            return f"[Circular {ancestor_path}]"

    if isinstance(value, BaseException):
        if nested:
            return str(value)
        return _flatten_exception(value, path, [*ancestors, (id(value), path)])

    if isinstance(value, Mapping):
        inner = [*ancestors, (id(value), path)]
        return {
            _key(key): _normalize(item, f"{path}.{_key(key)}", inner, nested=nested) for key, item in value.items()
        }
    if isinstance(value, (Sequence, Set)):
        inner = [*ancestors, (id(value), path)]
        return [_normalize(item, f"{path}.{index}", inner, nested=nested) for index, item in enumerate(value)]
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _normalize(dataclasses.asdict(value), path, ancestors, nested=nested)
    if isinstance(value, BaseModel):
        return _normalize(value.model_dump(), path, ancestors, nested=nested)
    return str(value)


def _key(key: Any) -> str:
    return str(key.value if isinstance(key, Enum) else key)


__all__ = ["MAX_SAFE_INTEGER", "build_snapshot", "exception_name", "flatten_exception"]
