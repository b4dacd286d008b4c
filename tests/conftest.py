"""Shared test fixtures for the fieldguard test suite."""

import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import structlog

from fieldguard.grants.stores.inmemory import InMemoryGrantStore
from fieldguard.notifications.sink import RecordingSink
from fieldguard.sharing.stores.inmemory import InMemorySharingSettingsStore
from fieldguard.visibility.resolver import VisibilityResolver
from fieldguard.workflow.engine import RequestWorkflow
from fieldguard.workflow.stores.inmemory import InMemoryRequestStore
from tests.factories import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    """A clock frozen at a fixed instant; advance it explicitly."""
    return FakeClock()


@pytest.fixture
def settings_store(clock: FakeClock) -> InMemorySharingSettingsStore:
    return InMemorySharingSettingsStore(clock=clock)


@pytest.fixture
def grant_store(clock: FakeClock) -> InMemoryGrantStore:
    return InMemoryGrantStore(clock=clock)


@pytest.fixture
def request_store() -> InMemoryRequestStore:
    return InMemoryRequestStore()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def workflow(
    request_store: InMemoryRequestStore,
    grant_store: InMemoryGrantStore,
    sink: RecordingSink,
    clock: FakeClock,
) -> RequestWorkflow:
    return RequestWorkflow(request_store, grant_store, sink, clock=clock)


@pytest.fixture
def resolver(
    settings_store: InMemorySharingSettingsStore,
    grant_store: InMemoryGrantStore,
) -> VisibilityResolver:
    return VisibilityResolver(settings_store, grant_store)


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "app_name = 'test'",
                "development.toml": "[workflow]\\nrequest_ttl_days = 7",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            (test_config_dir / filename).write_text(content)

    return _create_toml_files


class EnvOverrideContext:
    """Context manager for temporarily setting environment variables."""

    def __init__(self, overrides: dict[str, str]) -> None:
        self.overrides = overrides
        self.original_env: dict[str, str | None] = {}

    def __enter__(self) -> None:
        for key, value in self.overrides.items():
            self.original_env[key] = os.environ.get(key)
            os.environ[key] = value

    def __exit__(self, *args: Any) -> None:
        for key in self.overrides:
            if self.original_env[key] is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = self.original_env[key]


@pytest.fixture
def env_override() -> Generator[Callable[[dict[str, str]], EnvOverrideContext], None, None]:
    """Temporarily set environment variables.

    Usage:
        def test_something(env_override):
            with env_override({"FIELDGUARD_WORKFLOW__REQUEST_TTL_DAYS": "7"}):
                ...
    """

    def _env_override(overrides: dict[str, str]) -> EnvOverrideContext:
        return EnvOverrideContext(overrides)

    yield _env_override


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache before and after each test."""
    from fieldguard.config import get_settings
    from fieldguard.config.settings import set_toml_config

    get_settings.cache_clear()
    set_toml_config({})
    yield
    get_settings.cache_clear()
    set_toml_config({})


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Restore structlog defaults so no test logs into a closed capture stream."""
    yield
    structlog.reset_defaults()
