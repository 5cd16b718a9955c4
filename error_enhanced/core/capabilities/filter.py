"""Removal of unset fields from a composite error."""

from __future__ import annotations

from collections.abc import Mapping, Set
from typing import Any

from error_enhanced.core.composition import SNAPSHOT_CACHE_FIELD

PRESERVED_FIELDS = frozenset({"name", "message", "_original_error"})
UNUSED_NUMBER = -1


def is_unused(value: Any) -> bool:
    """Return whether ``value`` is an unset sentinel.

    ``None``, ``""``, ``-1``, empty sequences and sets, and empty mappings are
    unused. Callables and exceptions always count as used.
    """
    if value is None:
        return True
    if callable(value) or isinstance(value, BaseException):
        return False
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == UNUSED_NUMBER
    if isinstance(value, (list, tuple, Set, Mapping)):
        return len(value) == 0
    return False


class FilterUtility:
    """Capability producing a copy of the error without unset fields."""

    def filter_unused(self):
        """Return a new error of the same type holding only meaningful fields.

        ``name``, ``message`` and ``_original_error`` are always kept. The
        source error is left untouched.
        """
        cls = type(self)
        filtered = cls.__new__(cls)
        filtered.args = self.args
        filtered.__cause__ = self.__cause__
        filtered.__traceback__ = self.__traceback__
        filtered.__dict__.update(
            {
                key: value
                for key, value in vars(self).items()
                if key != SNAPSHOT_CACHE_FIELD and (key in PRESERVED_FIELDS or not is_unused(value))
            }
        )
        return filtered
