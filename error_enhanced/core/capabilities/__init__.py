"""Capabilities operating on a whole composite error."""

from error_enhanced.core.capabilities.filter import PRESERVED_FIELDS, FilterUtility, is_unused
from error_enhanced.core.capabilities.serializers import (
    OMIT,
    SerializersUtility,
    default_replacer,
    sanitize_tag,
)

__all__ = [
    "OMIT",
    "PRESERVED_FIELDS",
    "FilterUtility",
    "SerializersUtility",
    "default_replacer",
    "is_unused",
    "sanitize_tag",
]
