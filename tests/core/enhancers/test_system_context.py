"""Tests for the system context enhancer."""

import platform
import time
from unittest.mock import patch

import pytest

from error_enhanced.core.enhancers import SystemContextEnhancer
from error_enhanced.core.exceptions import FieldValidationError


def test_captures_host_information():
    context = SystemContextEnhancer()

    assert context.hostname
    assert context.cpu_arch == platform.machine()
    assert context.os_type == platform.system()
    assert context.os_release == platform.release()
    assert context.runtime_version == platform.python_version()
    assert context.system_uptime >= 0


def test_captures_call_site():
    context = SystemContextEnhancer()

    assert context.method == "test_captures_call_site"
    assert context.module.endswith("test_system_context")


def test_environment_comes_from_configured_variable(monkeypatch):
    monkeypatch.setenv("APP_ENV", "staging")
    assert SystemContextEnhancer().environment == "staging"

    monkeypatch.delenv("APP_ENV")
    assert SystemContextEnhancer().environment == "unknown"


def test_refresh_updates_uptime_only():
    with patch("error_enhanced.core.enhancers.system_context.psutil.boot_time", return_value=time.time() - 100):
        context = SystemContextEnhancer()
    hostname = context.hostname

    with patch("error_enhanced.core.enhancers.system_context.psutil.boot_time", return_value=time.time() - 5000):
        assert context.refresh_system_info() is context

    assert 4990 <= context.system_uptime <= 5010
    assert context.hostname == hostname


def test_setters():
    context = SystemContextEnhancer().set_environment("production").set_module("billing").set_method("charge")

    assert context.environment == "production"
    assert context.module == "billing"
    assert context.method == "charge"

    with pytest.raises(FieldValidationError):
        context.set_module("")
    assert context.module == "billing"
