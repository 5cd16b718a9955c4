"""Tests for the parsed traceback cache."""

import gc
import threading

from error_enhanced.core.cache import StackTraceCache, get_stack_cache, reset_stack_cache
from error_enhanced.core.config import get_config_manager
from error_enhanced.core.models import StackFrame


class CustomError(Exception):
    pass


FRAMES = [StackFrame(function_name="main")]


def test_get_or_parse_calls_parser_once():
    cache = StackTraceCache()
    error = ValueError("x")
    calls = []

    def parse(exc):
        calls.append(exc)
        return FRAMES

    assert cache.get_or_parse(error, parse) == FRAMES
    assert cache.get_or_parse(error, parse) == FRAMES
    assert len(calls) == 1


def test_returned_frames_are_copies():
    cache = StackTraceCache()
    error = CustomError()

    frames = cache.get_or_parse(error, lambda exc: list(FRAMES))
    frames.append(StackFrame())

    assert cache.get(error) == FRAMES


def test_builtin_exceptions_are_bounded():
    cache = StackTraceCache(max_size=2)
    errors = [KeyError(index) for index in range(3)]
    for error in errors:
        cache.set(error, FRAMES)

    assert cache.get(errors[0]) is None
    assert cache.get(errors[1]) == FRAMES
    assert cache.get(errors[2]) == FRAMES
    assert len(cache) == 2


def test_weakly_referenced_entries_disappear():
    cache = StackTraceCache()
    error = CustomError()
    cache.set(error, FRAMES)
    assert len(cache) == 1

    del error
    gc.collect()

    assert len(cache) == 0


def test_clear():
    cache = StackTraceCache()
    cache.set(CustomError(), FRAMES)
    cache.set(ValueError(), FRAMES)
    cache.clear()

    assert len(cache) == 0


def test_default_cache_uses_configured_size():
    get_config_manager().update_config(stack_cache={"max_size": 5})
    reset_stack_cache()

    assert get_stack_cache().max_size == 5
    assert get_stack_cache() is get_stack_cache()


def test_parser_may_call_back_into_the_cache():
    cache = StackTraceCache()
    outer = CustomError("outer")
    inner = ValueError("inner")
    results = []

    def parse_outer(exc):
        return [*cache.get_or_parse(inner, lambda e: [StackFrame(function_name="inner")]), *FRAMES]

    worker = threading.Thread(target=lambda: results.append(cache.get_or_parse(outer, parse_outer)), daemon=True)
    worker.start()
    worker.join(timeout=5)

    assert not worker.is_alive()
    assert results == [[StackFrame(function_name="inner"), *FRAMES]]
    assert cache.get(inner) == [StackFrame(function_name="inner")]
    assert len(cache) == 2


def test_nested_store_for_same_error_wins():
    cache = StackTraceCache()
    error = CustomError()

    def parse(exc):
        cache.set(exc, FRAMES)
        return [StackFrame(function_name="late")]

    assert cache.get_or_parse(error, parse) == FRAMES
    assert cache.get(error) == FRAMES
