"""Common base for capability enhancers."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, ClassVar

from error_enhanced.core.exceptions import FieldValidationError, validation_message
from error_enhanced.core.validation import Validator


class Enhancer:
    """Base class for enhancers composed into an :class:`EnhancedError`.

    ``_field_defaults`` lists every instance field together with its unset
    sentinel. ``_transient_fields`` names collaborator state that must never
    reach a serialized snapshot.
    """

    _field_defaults: ClassVar[Mapping[str, Any]] = MappingProxyType({})
    _transient_fields: ClassVar[frozenset[str]] = frozenset()

    def _reset_fields(self) -> None:
        for field, default in self._field_defaults.items():
            setattr(self, field, copy.deepcopy(default))

    def _validated(
        self,
        validator: Validator,
        field: str,
        value: Any,
        valid_values: list[Any] | None = None,
    ) -> Any:
        """Return the parsed value or raise :class:`FieldValidationError`."""
        result = validator.safe_parse(value)
        if not result.success:
            reason = result.error or f"is not a valid {validator.name}"
            raise FieldValidationError(
                validation_message(field, value, reason, valid_values),
                field=field,
                value=value,
                reason=reason,
                valid_values=valid_values,
            )
        return result.data
