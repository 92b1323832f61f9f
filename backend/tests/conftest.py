"""
Shared pytest fixtures and configuration for the temp file registry test suite.

This module provides:
- Hypothesis configuration for property-based testing
- A controllable clock for deterministic expiry
- Shared registry, service and Flask application fixtures
"""

import io
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

# Hypothesis configuration
from hypothesis import settings, HealthCheck

from temp_file_registry.app_factory import create_app
from temp_file_registry.application.event_publisher import EventPublisher
from temp_file_registry.application.registry_service import RegistryService
from temp_file_registry.config.settings import RegistryConfig
from temp_file_registry.domain.file_registry import ExpiryMinutes, FileRegistry, RegistryEntry

# Register Hypothesis profiles
settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)
settings.register_profile(
    "ci",
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)
settings.register_profile(
    "dev",
    max_examples=10,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)
settings.load_profile("default")

START_TIME = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
API_PREFIX = "/temp-file-registry/api/v1"


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = START_TIME):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


# =============================================================================
# Domain Fixtures
# =============================================================================

@pytest.fixture
def clock() -> FakeClock:
    """Provide a clock frozen at START_TIME."""
    return FakeClock()


@pytest.fixture
def registry() -> FileRegistry:
    """Provide an empty, independent registry."""
    return FileRegistry()


@pytest.fixture
def make_entry(clock):
    """
    Provide a factory for registry entries.

    The entry expires ``minutes`` after the fake clock's current time.
    """
    def _make_entry(
        key: str = "a",
        content: bytes = b"hello",
        minutes: Optional[int] = 10,
        content_type: str = "text/plain",
        filename: str = "hello.txt",
    ) -> RegistryEntry:
        raw = None if minutes is None else str(minutes)
        return RegistryEntry.create(
            key=key,
            content=content,
            content_type=content_type,
            filename=filename,
            expiry=ExpiryMinutes.resolve(raw, 10),
            now=clock(),
        )

    return _make_entry


@pytest.fixture
def event_publisher() -> EventPublisher:
    """Provide an event publisher with no subscribers."""
    return EventPublisher()


@pytest.fixture
def registry_service(registry, event_publisher, clock) -> RegistryService:
    """Provide a RegistryService with a 10 minute default expiration."""
    return RegistryService(
        registry,
        default_expiration_minutes=10,
        event_publisher=event_publisher,
        clock=clock,
    )


# =============================================================================
# Flask Application Fixtures
# =============================================================================

@pytest.fixture
def app_config() -> RegistryConfig:
    """Configuration used by the Flask app fixture (reaper not started)."""
    return RegistryConfig(
        default_expiration_minutes=10,
        max_file_size_mb=1,
        log_level=2,
        reaper_enabled=False,
    )


@pytest.fixture
def app(app_config, registry, clock):
    """Create a Flask app around the shared registry and fake clock."""
    flask_app = create_app(app_config, registry=registry, clock=clock)
    flask_app.config["TESTING"] = True
    yield flask_app
    flask_app.reaper.stop()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def upload(client):
    """
    Provide a helper posting a multipart upload.

    Fields left as None are omitted from the form.
    """
    def _upload(
        key: Optional[str] = "a",
        content: bytes = b"hello",
        expiry: Optional[str] = None,
        filename: str = "hello.txt",
        content_type: str = "text/plain",
        test_client=None,
    ):
        data = {"file": (io.BytesIO(content), filename, content_type)}
        if key is not None:
            data["key"] = key
        if expiry is not None:
            data["expiryTimeMinutes"] = expiry
        return (test_client or client).post(
            f"{API_PREFIX}/upload", data=data, content_type="multipart/form-data"
        )

    return _upload


@pytest.fixture
def download(client):
    """Provide a helper issuing download requests."""
    def _download(key: str = "a", delete: Optional[str] = None, test_client=None, **kwargs):
        query = {"key": key}
        if delete is not None:
            query["delete"] = delete
        return (test_client or client).get(f"{API_PREFIX}/download", query_string=query, **kwargs)

    return _download


# =============================================================================
# Pytest Configuration Hooks
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (full Flask application)"
    )
    config.addinivalue_line(
        "markers", "property: Property-based tests using Hypothesis"
    )


def pytest_collection_modifyitems(config, items):
    """
    Automatically mark tests based on their location.

    - tests/unit/* -> @pytest.mark.unit
    - tests/integration/* -> @pytest.mark.integration
    - tests/property/* -> @pytest.mark.property
    """
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path or "\\unit\\" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path or "\\integration\\" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/property/" in test_path or "\\property\\" in test_path:
            item.add_marker(pytest.mark.property)
