"""Composite native exception built from enhancer capability tables."""

from __future__ import annotations

import copy
import traceback
from collections.abc import Mapping, Sequence
from threading import Lock
from types import MappingProxyType
from typing import Any, ClassVar

DEFAULT_NAME = "EnhancedError"
SNAPSHOT_CACHE_FIELD = "_serializable_cache"

_composed_classes: dict[tuple[type, tuple[type, ...]], type] = {}
_composed_lock = Lock()


class EnhancedError(Exception):
    """A native exception that carries the state and methods of its enhancers.

    Passing enhancer instances returns an instance of a composed subclass whose
    namespace is the union of the enhancers' attribute tables, copied in input
    order so the last enhancer wins on a name collision. Each enhancer's
    instance fields are copied onto the new error the same way.

    Example:
        >>> err = EnhancedError("Boom", [IdentifiersEnhancer()], name="PaymentError")
        >>> err.set_error_code(5432).set_severity("high")
    """

    capabilities: ClassVar[tuple[type, ...]] = ()
    _transient_fields: ClassVar[frozenset[str]] = frozenset({SNAPSHOT_CACHE_FIELD, "_creation_stack"})
    _field_defaults: ClassVar[Mapping[str, Any]] = MappingProxyType({})
    _creation_stack = ""

    def __new__(cls, message: str = "", enhancers: Sequence[object] = (), *, name: str | None = None):
        if enhancers and not cls.capabilities:
            cls = _composed_class(cls, tuple(type(enhancer) for enhancer in enhancers))
        return super().__new__(cls, message)

    def __init__(self, message: str = "", enhancers: Sequence[object] = (), *, name: str | None = None):
        super().__init__(message)
        for enhancer in enhancers:
            for field, value in vars(enhancer).items():
                setattr(self, field, _copy_state(value))
        self.name = name or DEFAULT_NAME
        self.message = message
        self._creation_stack = "".join(traceback.format_stack()[:-1])

    def __setattr__(self, key: str, value: Any) -> None:
        super().__setattr__(key, value)
        if key != SNAPSHOT_CACHE_FIELD:
            self.__dict__.pop(SNAPSHOT_CACHE_FIELD, None)

    def __getattr__(self, item: str) -> Any:
        # Only reached for fields missing from the instance, e.g. after filter_unused().
        defaults = type(self)._field_defaults
        if item not in defaults:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {item!r}")
        value = copy.deepcopy(defaults[item])
        if isinstance(value, (list, dict, set)):
            # Mutable defaults are stored so in-place changes persist.
            setattr(self, item, value)
        return value

    @property
    def stack(self) -> str:
        """Formatted traceback once raised, otherwise the construction-site stack."""
        if self.__traceback__ is not None:
            return "".join(traceback.format_exception(self))
        return f"{self.name}: {self.message}\n{self._creation_stack}".rstrip("\n")

    @classmethod
    def supports(cls, capability: type) -> bool:
        """Return whether an enhancer of type ``capability`` was composed in."""
        return any(issubclass(enhancer_type, capability) for enhancer_type in cls.capabilities)

    def invalidate_snapshot(self) -> None:
        """Drop the cached serializable snapshot."""
        self.__dict__.pop(SNAPSHOT_CACHE_FIELD, None)

    def __repr__(self) -> str:
        return f"{self.name}({self.message!r})"


def compose(
    enhancers: Sequence[object],
    message: str = "",
    *,
    name: str | None = None,
    base: type[EnhancedError] = EnhancedError,
) -> EnhancedError:
    """Build a composite error from ``enhancers``."""
    return base(message, tuple(enhancers), name=name)


def _copy_state(value: Any) -> Any:
    if isinstance(value, list):
        return list(value)
    if isinstance(value, dict):
        return dict(value)
    if isinstance(value, set):
        return set(value)
    return value


def _composed_class(base: type[EnhancedError], enhancer_types: tuple[type, ...]) -> type[EnhancedError]:
    key = (base, enhancer_types)
    with _composed_lock:
        composed = _composed_classes.get(key)
        if composed is None:
            composed = _build_class(base, enhancer_types)
            _composed_classes[key] = composed
    return composed


def _build_class(base: type[EnhancedError], enhancer_types: tuple[type, ...]) -> type[EnhancedError]:
    namespace: dict[str, Any] = {}
    transient = set(base._transient_fields)
    defaults: dict[str, Any] = dict(base._field_defaults)

    for enhancer_type in enhancer_types:
        for klass in reversed(enhancer_type.__mro__):
            if klass is object:
                continue
            for attr, value in vars(klass).items():
                if attr.startswith("__") and attr.endswith("__"):
                    continue
                namespace[attr] = value
        transient.update(getattr(enhancer_type, "_transient_fields", ()))
        defaults.update(getattr(enhancer_type, "_field_defaults", {}))

    namespace.update(
        {
            "__module__": base.__module__,
            "__qualname__": base.__qualname__,
            "capabilities": enhancer_types,
            "_transient_fields": frozenset(transient),
            "_field_defaults": MappingProxyType(defaults),
        }
    )
    return type(base.__name__, (base,), namespace)


__all__ = ["DEFAULT_NAME", "EnhancedError", "compose"]
