"""Caches shared across composite errors."""

from error_enhanced.core.cache.stack_cache import StackTraceCache, get_stack_cache, reset_stack_cache

__all__ = ["StackTraceCache", "get_stack_cache", "reset_stack_cache"]
