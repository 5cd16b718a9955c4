"""Reusable validation primitives backed by pydantic type adapters.

Every enhancer setter checks its input through one of the validators below
and raises :class:`FieldValidationError` when ``safe_parse`` reports failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import Annotated, Any

from pydantic import AfterValidator, AnyUrl, Field, IPvAnyAddress, StrictBytes, StrictInt, StrictStr, StringConstraints, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from error_enhanced.core.models.enums import Category, HttpMethod, Severity

NON_STANDARD_STATUS_CODES = frozenset({598, 599})

NonEmptyStr = Annotated[str, StringConstraints(strict=True, min_length=1)]
PositiveInt = Annotated[StrictInt, Field(gt=0)]


def _check_http_status(value: int) -> int:
    if value in NON_STANDARD_STATUS_CODES:
        return value
    try:
        HTTPStatus(value)
    except ValueError as exc:
        raise ValueError(f"{value} is not a known HTTP status code") from exc
    return value


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of :meth:`Validator.safe_parse`."""

    success: bool
    data: Any = None
    error: str | None = None


class Validator:
    """Named chain of type adapters applied in order."""

    def __init__(self, name: str, *adapters: TypeAdapter[Any]):
        self.name = name
        self._adapters = adapters

    def safe_parse(self, value: Any) -> ParseResult:
        """Validate ``value`` without raising."""

        data = value
        for adapter in self._adapters:
            try:
                data = adapter.validate_python(data)
            except PydanticValidationError as exc:
                errors = exc.errors()
                message = errors[0]["msg"] if errors else str(exc)
                return ParseResult(success=False, error=message)
        return ParseResult(success=True, data=data)

    def is_valid(self, value: Any) -> bool:
        return self.safe_parse(value).success

    def __repr__(self) -> str:
        return f"Validator({self.name!r})"


_strict_str = TypeAdapter(StrictStr)

ValidString = Validator("non-empty string", TypeAdapter(NonEmptyStr))
ValidStringWithEmpty = Validator("string", _strict_str)
ValidNumber = Validator("positive integer", TypeAdapter(PositiveInt))
ValidURL = Validator("URL", _strict_str, TypeAdapter(AnyUrl))
ValidIP = Validator("IP address", _strict_str, TypeAdapter(IPvAnyAddress))
ValidSeverity = Validator("severity", TypeAdapter(Severity))
ValidCategory = Validator("category", TypeAdapter(Category))
ValidHttpMethod = Validator("HTTP method", TypeAdapter(HttpMethod))
ValidHttpStatusCode = Validator(
    "HTTP status code",
    TypeAdapter(Annotated[StrictInt, AfterValidator(_check_http_status)]),
)
ValidKeyedObject = Validator("keyed object", TypeAdapter(dict[NonEmptyStr, Any]))
ValidStringList = Validator("list of non-empty strings", TypeAdapter(list[NonEmptyStr]))
ValidHttpBody = Validator(
    "HTTP body",
    TypeAdapter(StrictStr | StrictBytes | dict[Any, Any] | list[Any]),
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
