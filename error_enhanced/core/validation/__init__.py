"""Validation primitives."""

from error_enhanced.core.validation.validators import (
    ParseResult,
    ValidCategory,
    ValidHttpBody,
    ValidHttpMethod,
    ValidHttpStatusCode,
    ValidIP,
    ValidKeyedObject,
    ValidNumber,
    Validator,
    ValidSeverity,
    ValidString,
    ValidStringList,
    ValidStringWithEmpty,
    ValidURL,
)

__all__ = [
    "ParseResult",
    "Validator",
    "ValidString",
    "ValidStringWithEmpty",
    "ValidNumber",
    "ValidURL",
    "ValidIP",
    "ValidSeverity",
    "ValidCategory",
    "ValidHttpMethod",
    "ValidHttpStatusCode",
    "ValidKeyedObject",
    "ValidStringList",
    "ValidHttpBody",
]
