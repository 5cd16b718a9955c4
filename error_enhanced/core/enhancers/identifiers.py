"""Identity and classification fields: id, code, severity, category."""

from __future__ import annotations

import hashlib
import json
import time
import uuid
from types import MappingProxyType
from typing import Any

from error_enhanced.core.enhancers.base import Enhancer
from error_enhanced.core.models.enums import Category, Severity
from error_enhanced.core.snapshot import build_snapshot
from error_enhanced.core.validation import (
    ValidCategory,
    ValidNumber,
    ValidSeverity,
    ValidString,
    ValidStringWithEmpty,
)


class IdentifiersEnhancer(Enhancer):
    """Unique id, creation timestamps, error code and classification."""

    _field_defaults = MappingProxyType(
        {
            "_id": "",
            "_error_code": -1,
            "_error_code_prefix": "",
            "_error_description": "",
            "_timestamp": -1,
            "_high_precision_timestamp": "",
            "_severity": Severity.MEDIUM.value,
            "_category": Category.UNKNOWN.value,
        }
    )

    def __init__(self) -> None:
        self._reset_fields()
        self._id = str(uuid.uuid4())
        self._timestamp = time.time_ns() // 1_000_000
        self._high_precision_timestamp = str(time.monotonic_ns())

    @property
    def id(self) -> str:
        return self._id

    @property
    def error_code(self) -> int:
        return self._error_code

    @property
    def error_code_prefix(self) -> str:
        return self._error_code_prefix

    @property
    def full_error_code(self) -> str:
        """Prefix and code joined, e.g. ``EE5432``; empty when no code is set."""
        if self._error_code == -1:
            return ""
        return f"{self._error_code_prefix}{self._error_code}"

    @property
    def error_description(self) -> str:
        return self._error_description

    @property
    def timestamp(self) -> int:
        """Creation wall-clock time in milliseconds since the epoch."""
        return self._timestamp

    @property
    def high_precision_timestamp(self) -> str:
        """Monotonic nanosecond counter at creation, as a decimal string."""
        return self._high_precision_timestamp

    @property
    def severity(self) -> str:
        return self._severity

    @property
    def category(self) -> str:
        return self._category

    def set_error_code(self, error_code: int) -> IdentifiersEnhancer:
        self._error_code = self._validated(ValidNumber, "error_code", error_code)
        return self

    def set_error_code_prefix(self, prefix: str) -> IdentifiersEnhancer:
        self._error_code_prefix = self._validated(ValidStringWithEmpty, "error_code_prefix", prefix)
        return self

    def set_error_description(self, description: str) -> IdentifiersEnhancer:
        self._error_description = self._validated(ValidString, "error_description", description)
        return self

    def set_severity(self, severity: Severity | str) -> IdentifiersEnhancer:
        parsed = self._validated(ValidSeverity, "severity", severity, [level.value for level in Severity])
        self._severity = parsed.value
        return self

    def set_category(self, category: Category | str) -> IdentifiersEnhancer:
        parsed = self._validated(ValidCategory, "category", category, [item.value for item in Category])
        self._category = parsed.value
        return self

    def get_hash(self) -> str:
        """MD5 hex digest of the canonical snapshot rendered as sorted JSON."""
        transient = getattr(type(self), "_transient_fields", ())
        snapshot: dict[str, Any] = build_snapshot(self, transient)
        payload = json.dumps(snapshot, sort_keys=True, default=str)
        return hashlib.md5(payload.encode("utf-8")).hexdigest()
