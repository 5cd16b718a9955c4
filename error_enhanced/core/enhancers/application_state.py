"""Application runtime state and installed dependency discovery."""

from __future__ import annotations

import json
import os
import platform
import time
from collections.abc import Callable
from types import MappingProxyType
from typing import Any

from error_enhanced.core.config import ApplicationStateConfig, get_config
from error_enhanced.core.enhancers.base import Enhancer
from error_enhanced.core.enhancers.command_executor import CommandExecutor, SubprocessCommandExecutor
from error_enhanced.core.exceptions import (
    CommandExecutionError,
    DependencyDiscoveryError,
    ErrorBoundary,
    ErrorCode,
    ErrorMessageTemplate,
)
from error_enhanced.core.logging import get_logger
from error_enhanced.core.models.enums import Environment
from error_enhanced.core.validation import ValidKeyedObject, ValidString

logger = get_logger(__name__)

# name -> (availability probe, JSON listing command)
PACKAGE_MANAGER_COMMANDS: dict[str, tuple[str, str]] = {
    "uv": ("uv --version", "uv pip list --format=json"),
    "pip": ("pip --version", "pip list --format=json"),
    "poetry": ("poetry --version", "poetry run pip list --format=json"),
}

_boundary = ErrorBoundary("application_state")


def _phase_error(phase: str) -> Callable[[Exception], DependencyDiscoveryError]:
    def wrap(exc: Exception) -> DependencyDiscoveryError:
        message = ErrorMessageTemplate.get_message(ErrorCode.DEPENDENCY_DISCOVERY_ERROR, phase=phase, message=str(exc))
        return DependencyDiscoveryError(message, phase=phase)

    return wrap


def parse_dependency_listing(output: str) -> dict[str, Any]:
    """Turn a package manager's JSON listing into a name to version map.

    An object yields its ``dependencies`` member; a list of
    ``{"name": ..., "version": ...}`` records is folded into a map.
    """
    data = json.loads(output)
    if isinstance(data, dict):
        dependencies = data.get("dependencies", {})
        if not isinstance(dependencies, dict):
            raise ValueError("'dependencies' is not an object")
        return dict(dependencies)
    if isinstance(data, list):
        return {
            str(item["name"]): item.get("version", "")
            for item in data
            if isinstance(item, dict) and "name" in item
        }
    raise ValueError(f"unexpected listing of type {type(data).__name__}")


class ApplicationStateEnhancer(Enhancer):
    """Environment, configuration, state snapshot, event history and dependencies."""

    _field_defaults = MappingProxyType(
        {
            "_environment": Environment.UNKNOWN.value,
            "_runtime_version": "",
            "_configurations": {},
            "_env_vars": {},
            "_state_snapshot": {},
            "_event_history": [],
            "_dependencies": {},
            "_history_capacity": 10,
            "_cache_ttl": 300,
            "_package_managers": [],
            "_command_executor": None,
            "_package_manager_cache": {},
            "_dependencies_cache": None,
            "_last_fetch_time": None,
            "_clock": None,
        }
    )
    _transient_fields = frozenset(
        {
            "_history_capacity",
            "_cache_ttl",
            "_package_managers",
            "_command_executor",
            "_package_manager_cache",
            "_dependencies_cache",
            "_last_fetch_time",
            "_clock",
        }
    )

    def __init__(
        self,
        command_executor: CommandExecutor | None = None,
        *,
        config: ApplicationStateConfig | None = None,
        clock: Callable[[], float] | None = None,
    ):
        """Capture the current application state.

        Args:
            command_executor: Runs package manager commands; a subprocess
                executor is used by default.
            config: Overrides the process-wide ``application_state`` settings.
            clock: Monotonic seconds source used for the dependency cache.
        """
        self._reset_fields()
        config = config or get_config().application_state
        self._environment = os.environ.get(config.environment_variable) or Environment.UNKNOWN.value
        self._runtime_version = platform.python_version()
        self._env_vars = dict(os.environ)
        self._history_capacity = config.event_history_capacity
        self._cache_ttl = config.dependency_cache_ttl
        self._package_managers = list(config.package_managers)
        self._command_executor = command_executor or SubprocessCommandExecutor(timeout=config.command_timeout)
        self._clock = clock or time.monotonic

    @property
    def environment(self) -> str:
        return self._environment

    @property
    def runtime_version(self) -> str:
        return self._runtime_version

    @property
    def configurations(self) -> dict[str, Any]:
        return self._configurations

    @property
    def env_vars(self) -> dict[str, str]:
        return self._env_vars

    @property
    def state_snapshot(self) -> dict[str, Any]:
        return self._state_snapshot

    @property
    def event_history(self) -> list[str]:
        """Most recent events, oldest first."""
        return self._event_history

    @property
    def dependencies(self) -> dict[str, Any]:
        return self._dependencies

    def set_environment(self, environment: str) -> ApplicationStateEnhancer:
        self._environment = self._validated(ValidString, "environment", environment)
        return self

    def set_configurations(self, configurations: dict[str, Any]) -> ApplicationStateEnhancer:
        self._configurations = self._validated(ValidKeyedObject, "configurations", configurations)
        return self

    def set_state_snapshot(self, snapshot: dict[str, Any]) -> ApplicationStateEnhancer:
        self._state_snapshot = self._validated(ValidKeyedObject, "state_snapshot", snapshot)
        return self

    def add_to_event_history(self, event: str) -> ApplicationStateEnhancer:
        """Append ``event``, evicting the oldest entries beyond capacity."""
        event = self._validated(ValidString, "event", event)
        self._event_history = [*self._event_history, event][-self._history_capacity :]
        return self

    def fetch_dependencies(self) -> dict[str, Any]:
        """Return installed dependencies, re-listing at most once per cache TTL.

        Raises:
            DependencyDiscoveryError: A package manager command or its output
                failed unexpectedly.
        """
        now = self._clock()
        if self._dependencies_cache is not None and now - self._last_fetch_time < self._cache_ttl:
            self._dependencies = dict(self._dependencies_cache)
            return dict(self._dependencies_cache)

        manager = self._detect_package_manager()
        if manager is None:
            logger.warning("No supported package manager found among {managers}", managers=self._package_managers)
            dependencies: dict[str, Any] = {}
        else:
            with _boundary.guard(
                "fetch_dependencies",
                _phase_error("fetch_dependencies"),
                passthrough=(DependencyDiscoveryError,),
                package_manager=manager,
            ):
                output = self._command_executor.execute(PACKAGE_MANAGER_COMMANDS[manager][1])
            with _boundary.guard(
                "parse_dependencies",
                _phase_error("parse_dependencies"),
                passthrough=(DependencyDiscoveryError,),
                package_manager=manager,
            ):
                dependencies = parse_dependency_listing(output)

        self._dependencies_cache = dependencies
        self._last_fetch_time = now
        self._dependencies = dict(dependencies)
        return dict(dependencies)

    def _detect_package_manager(self) -> str | None:
        with _boundary.guard(
            "detect_package_manager",
            _phase_error("detect_package_manager"),
            passthrough=(DependencyDiscoveryError,),
        ):
            for manager in self._package_managers:
                if manager not in PACKAGE_MANAGER_COMMANDS:
                    logger.warning("Unsupported package manager '{manager}' skipped", manager=manager)
                    continue
                if self._is_installed(manager):
                    return manager
        return None

    def _is_installed(self, manager: str) -> bool:
        cached = self._package_manager_cache.get(manager)
        if cached is not None:
            return cached
        try:
            self._command_executor.execute(PACKAGE_MANAGER_COMMANDS[manager][0])
            installed = True
        except CommandExecutionError:
            installed = False
        self._package_manager_cache = {**self._package_manager_cache, manager: installed}
        return installed
