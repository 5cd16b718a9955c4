"""Pytest configuration for the error_enhanced test suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from error_enhanced.core.cache import StackTraceCache, reset_stack_cache
from error_enhanced.core.config import reset_config, settings
from error_enhanced.core.exceptions import CommandExecutionError
from error_enhanced.core.logging import configure_logging


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line options for controlling integration tests."""

    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run tests that execute real package manager commands.",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register the integration marker."""

    config.addinivalue_line(
        "markers",
        "integration: marks tests that run real external commands",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly requested."""

    if config.getoption("--run-integration"):
        return

    skip_integration = pytest.mark.skip(reason="integration tests require --run-integration")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep tests away from the user's config file and environment overrides."""

    monkeypatch.setattr(settings, "DEFAULT_CONFIG_PATH", tmp_path / "config.toml")
    for name in [
        "ERROR_ENHANCED_CSV_DELIMITER",
        "ERROR_ENHANCED_CSV_QUOTED",
        "ERROR_ENHANCED_JSON_INDENT",
        "ERROR_ENHANCED_EVENT_HISTORY_CAPACITY",
        "ERROR_ENHANCED_DEPENDENCY_CACHE_TTL",
        "ERROR_ENHANCED_PACKAGE_MANAGERS",
        "ERROR_ENHANCED_COMMAND_TIMEOUT",
        "ERROR_ENHANCED_STACK_CACHE_SIZE",
        "ERROR_ENHANCED_LOGGING_LEVEL",
        "ERROR_ENHANCED_LOGGING_FILE",
    ]:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    reset_stack_cache()
    yield
    reset_config()
    reset_stack_cache()
    configure_logging()


class FakeCommandExecutor:
    """Command executor answering from a canned response table."""

    def __init__(self, responses: dict[str, str | Exception] | None = None) -> None:
        self.responses = responses or {}
        self.calls: list[str] = []

    def execute(self, command: str) -> str:
        self.calls.append(command)
        response = self.responses.get(command)
        if response is None:
            raise CommandExecutionError(f"{command.split()[0]}: command not found", command=command)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_executor() -> FakeCommandExecutor:
    return FakeCommandExecutor()


@pytest.fixture
def stack_cache() -> StackTraceCache:
    return StackTraceCache(max_size=8)
