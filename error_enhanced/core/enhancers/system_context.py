"""Host and runtime context captured when the error is created."""

from __future__ import annotations

import inspect
import os
import platform
import socket
import time
from pathlib import Path
from types import MappingProxyType

import psutil

from error_enhanced.core.config import get_config
from error_enhanced.core.enhancers.base import Enhancer
from error_enhanced.core.models.enums import Environment
from error_enhanced.core.validation import ValidString

PACKAGE_ROOT = Path(__file__).resolve().parents[2]


def system_uptime() -> int:
    """Seconds since the host booted."""
    return max(int(time.time() - psutil.boot_time()), 0)


def capture_caller() -> tuple[str, str]:
    """Return ``(module, qualified function name)`` of the nearest frame outside this package."""
    frame = inspect.currentframe()
    try:
        while frame is not None:
            filename = frame.f_code.co_filename
            if not _inside_package(filename):
                return frame.f_globals.get("__name__", Environment.UNKNOWN.value), frame.f_code.co_qualname
            frame = frame.f_back
    finally:
        del frame
    return Environment.UNKNOWN.value, Environment.UNKNOWN.value


def _inside_package(filename: str) -> bool:
    try:
        return Path(filename).resolve().is_relative_to(PACKAGE_ROOT)
    except (OSError, ValueError):
        return False


class SystemContextEnhancer(Enhancer):
    """Hostname, CPU architecture, OS, Python version, uptime and call site."""

    _field_defaults = MappingProxyType(
        {
            "_hostname": "",
            "_cpu_arch": "",
            "_os_type": "",
            "_os_release": "",
            "_runtime_version": "",
            "_system_uptime": -1,
            "_environment": Environment.UNKNOWN.value,
            "_module": "",
            "_method": "",
        }
    )

    def __init__(self) -> None:
        self._reset_fields()
        self._hostname = socket.gethostname() or platform.node()
        self._cpu_arch = platform.machine()
        self._os_type = platform.system()
        self._os_release = platform.release()
        self._runtime_version = platform.python_version()
        self._system_uptime = system_uptime()
        env_name = get_config().application_state.environment_variable
        self._environment = os.environ.get(env_name) or Environment.UNKNOWN.value
        self._module, self._method = capture_caller()

    @property
    def hostname(self) -> str:
        return self._hostname

    @property
    def cpu_arch(self) -> str:
        return self._cpu_arch

    @property
    def os_type(self) -> str:
        return self._os_type

    @property
    def os_release(self) -> str:
        return self._os_release

    @property
    def runtime_version(self) -> str:
        return self._runtime_version

    @property
    def system_uptime(self) -> int:
        """Host uptime in seconds as of the last refresh."""
        return self._system_uptime

    @property
    def environment(self) -> str:
        return self._environment

    @property
    def module(self) -> str:
        return self._module

    @property
    def method(self) -> str:
        return self._method

    def refresh_system_info(self) -> SystemContextEnhancer:
        """Re-read the host uptime."""
        self._system_uptime = system_uptime()
        return self

    def set_environment(self, environment: str) -> SystemContextEnhancer:
        self._environment = self._validated(ValidString, "environment", environment)
        return self

    def set_module(self, module: str) -> SystemContextEnhancer:
        self._module = self._validated(ValidString, "module", module)
        return self

    def set_method(self, method: str) -> SystemContextEnhancer:
        self._method = self._validated(ValidString, "method", method)
        return self
