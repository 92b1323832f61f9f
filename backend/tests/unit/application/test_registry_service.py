"""
Unit tests for RegistryService.

Covers expiry resolution on upload, read-time expiry enforcement,
delete-on-read and the events published along the way.
"""

from datetime import timedelta
from unittest.mock import Mock

import pytest

from temp_file_registry.application.registry_service import RegistryService
from temp_file_registry.domain.errors import EntryNotFoundError
from temp_file_registry.domain.events import (
    EntryDeletedEvent,
    EntryDownloadedEvent,
    EntryStoredEvent,
)


def _upload(service, key="a", content=b"hello", expiry=None):
    return service.upload(
        key=key,
        content=content,
        content_type="text/plain",
        filename="hello.txt",
        expiry_time_minutes=expiry,
    )


class TestUpload:
    """Test upload semantics."""

    def test_upload_stores_entry(self, registry_service, registry):
        entry = _upload(registry_service)
        assert registry.get("a") is entry
        assert entry.content == b"hello"
        assert entry.content_type == "text/plain"
        assert entry.filename == "hello.txt"

    def test_explicit_expiry_minutes(self, registry_service, clock):
        entry = _upload(registry_service, expiry="3")
        assert entry.expires_at == clock() + timedelta(minutes=3)
        assert entry.requested_expiry_minutes == "3"

    def test_missing_expiry_uses_default(self, registry_service, clock):
        entry = _upload(registry_service)
        assert entry.expires_at == clock() + timedelta(minutes=10)
        assert entry.requested_expiry_minutes == ""

    def test_invalid_expiry_uses_default_and_keeps_raw(self, registry_service, clock):
        entry = _upload(registry_service, expiry="tomorrow")
        assert entry.expires_at == clock() + timedelta(minutes=10)
        assert entry.requested_expiry_minutes == "tomorrow"

    def test_second_upload_replaces_first(self, registry_service):
        _upload(registry_service, content=b"first")
        _upload(registry_service, content=b"second")
        assert registry_service.fetch("a").content == b"second"

    def test_upload_publishes_stored_event(self, registry, clock):
        publisher = Mock()
        service = RegistryService(registry, 10, event_publisher=publisher, clock=clock)

        _upload(service)
        _upload(service)

        events = [call.args[0] for call in publisher.publish.call_args_list]
        assert all(isinstance(event, EntryStoredEvent) for event in events)
        assert [event.replaced for event in events] == [False, True]
        assert events[0].expires_at == clock() + timedelta(minutes=10)

    def test_upload_without_publisher(self, registry, clock):
        service = RegistryService(registry, 10, clock=clock)
        assert _upload(service).key == "a"


class TestFetch:
    """Test lookup with read-time expiry enforcement."""

    def test_fetch_missing_key(self, registry_service):
        with pytest.raises(EntryNotFoundError) as exc_info:
            registry_service.fetch("missing")
        assert exc_info.value.key == "missing"
        assert exc_info.value.expired is False

    def test_fetch_is_repeatable(self, registry_service):
        _upload(registry_service)
        assert registry_service.fetch("a").content == b"hello"
        assert registry_service.fetch("a").content == b"hello"

    def test_fetch_within_default_expiry(self, registry_service, clock):
        _upload(registry_service, key="b")
        clock.advance(minutes=5)
        assert registry_service.fetch("b").key == "b"

    def test_expired_entry_is_not_found_before_sweep(self, registry_service, registry, clock):
        _upload(registry_service, expiry="1")
        clock.advance(minutes=1)

        with pytest.raises(EntryNotFoundError) as exc_info:
            registry_service.fetch("a")

        assert exc_info.value.expired is True
        # Physical removal is left to the reaper
        assert "a" in registry

    def test_zero_expiry_is_never_downloadable(self, registry_service):
        _upload(registry_service, expiry="0")
        with pytest.raises(EntryNotFoundError):
            registry_service.fetch("a")


class TestDiscard:
    """Test delete-on-read."""

    def test_discard_removes_served_entry(self, registry_service, registry):
        entry = _upload(registry_service)
        assert registry_service.discard("a", entry) is True
        assert "a" not in registry

    def test_discard_keeps_newer_upload(self, registry_service, registry):
        served = _upload(registry_service, content=b"old")
        newer = _upload(registry_service, content=b"new")

        assert registry_service.discard("a", served) is False
        assert registry.get("a") is newer

    def test_discard_twice_is_noop(self, registry_service):
        entry = _upload(registry_service)
        registry_service.discard("a", entry)
        assert registry_service.discard("a", entry) is False

    def test_discard_and_download_events(self, registry, clock):
        publisher = Mock()
        service = RegistryService(registry, 10, event_publisher=publisher, clock=clock)
        entry = _upload(service)
        publisher.reset_mock()

        service.record_download(entry, delete_requested=True)
        service.discard("a", entry)
        service.discard("a", entry)

        events = [call.args[0] for call in publisher.publish.call_args_list]
        assert len(events) == 2
        assert isinstance(events[0], EntryDownloadedEvent)
        assert events[0].delete_requested is True
        assert isinstance(events[1], EntryDeletedEvent)
