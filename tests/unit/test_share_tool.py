"""
Tests for ShareExtractor and the pending-result slot.

Covers the handoff lifecycle: a result is stored on handle(), delivered
once by fetch(), overwritten by a newer share, and left untouched by a
failed handle().
"""

import logging

import pytest

from adapters.content import MemoryContentResolver
from models import ContentHandle, ShareEvent, UnreadableContent
from tools import PendingShareStore, ShareExtractor, build_event, do_get_shared_data


class TestPendingShareStore:
    def test_take_clears(self) -> None:
        store = PendingShareStore()
        store.put({"text": "a"})
        assert store.has_pending
        assert store.take() == {"text": "a"}
        assert store.take() is None
        assert not store.has_pending

    def test_put_overwrites(self, caplog) -> None:
        store = PendingShareStore()
        store.put({"text": "old"})
        with caplog.at_level(logging.WARNING, logger="share_intake"):
            store.put({"text": "new"})
        assert store.take() == {"text": "new"}
        assert "dropping unfetched" in caplog.text

    def test_peek_does_not_clear(self) -> None:
        store = PendingShareStore()
        store.put({"length": 0})
        assert store.peek() == {"length": 0}
        assert store.take() == {"length": 0}


class TestHandleAndFetch:
    """End-to-end through a resolver."""

    def test_fetch_with_no_prior_share(self, extractor: ShareExtractor) -> None:
        assert extractor.fetch() is None

    def test_fetch_delivers_once(self, extractor: ShareExtractor) -> None:
        assert extractor.handle(ShareEvent.send_to("mailto:a@b.com")) is True
        assert extractor.fetch() == {"text": "mailto:a@b.com"}
        assert extractor.fetch() is None

    def test_send_multiple_order(self, extractor, image_handle, report_handle, notes_handle) -> None:
        extractor.handle(ShareEvent.send_multiple([notes_handle, image_handle, report_handle]))
        result = extractor.fetch()
        assert result["length"] == 3
        assert [result[f"name.{i}"] for i in range(3)] == ["notes.txt", "holiday.png", "report.pdf"]
        assert result["data.1"] == b"\x89PNG fake image"
        assert result["type.2"] == "application/pdf"

    def test_name_fallback_to_locator(self, extractor, report_handle) -> None:
        extractor.handle(ShareEvent.send(report_handle))
        assert extractor.fetch()["name.0"] == "report.pdf"

    def test_unrecognized_action_is_ignored(self, extractor) -> None:
        extractor.handle(ShareEvent.send_to("keep me"))
        assert extractor.handle(ShareEvent("android.intent.action.MAIN")) is False
        assert extractor.fetch() == {"text": "keep me"}

    def test_second_share_replaces_unfetched(self, extractor) -> None:
        extractor.handle(ShareEvent.send_to("first"))
        extractor.handle(ShareEvent.view("second"))
        assert extractor.fetch() == {"text": "second"}
        assert extractor.fetch() is None


class TestUnreadableContent:
    """A failed handle() stores nothing and leaves the slot untouched."""

    def test_failure_surfaces_and_nothing_pending(self, extractor, missing_handle) -> None:
        with pytest.raises(UnreadableContent):
            extractor.handle(ShareEvent.send(missing_handle))
        assert extractor.fetch() is None

    def test_previous_result_survives_failure(self, extractor, image_handle, missing_handle) -> None:
        extractor.handle(ShareEvent.send_to("earlier"))
        with pytest.raises(UnreadableContent):
            extractor.handle(ShareEvent.send_multiple([image_handle, missing_handle]))
        assert extractor.fetch() == {"text": "earlier"}

    def test_failure_is_logged(self, extractor, missing_handle, caplog) -> None:
        with caplog.at_level(logging.ERROR, logger="share_intake"):
            with pytest.raises(UnreadableContent):
                extractor.handle(ShareEvent.send(missing_handle))
        assert missing_handle.uri in caplog.text


class TestDoGetSharedData:
    def test_nothing_pending(self, extractor) -> None:
        assert do_get_shared_data(extractor) == {"pending": False}

    def test_pending_then_cleared(self, extractor, notes_handle) -> None:
        extractor.handle(ShareEvent.send(notes_handle, mime_type="text/plain"))
        assert do_get_shared_data(extractor) == {
            "pending": True,
            "data": {
                "mimeType": "text/plain",
                "length": 1,
                "data.0": "cGxhaW4gbm90ZXM=",
                "name.0": "notes.txt",
                "type.0": "text/plain",
            },
        }
        assert do_get_shared_data(extractor) == {"pending": False}


class TestBuildEvent:
    def test_send_multiple_keeps_all_streams(self) -> None:
        event = build_event("send_multiple", ["a", "b"])
        assert event.stream == [ContentHandle("a"), ContentHandle("b")]

    def test_send_multiple_without_streams_has_no_slot(self) -> None:
        assert build_event("send_multiple").stream is None

    def test_send_uses_first_stream(self) -> None:
        event = build_event("send", ["a", "b"], mime_type="text/plain")
        assert event.stream == ContentHandle("a")
        assert event.mime_type == "text/plain"

    def test_text_event(self) -> None:
        event = build_event("sendto", data_string="mailto:x@y.z")
        assert event.data_string == "mailto:x@y.z"
        assert event.stream is None


def test_shared_store_between_extractors() -> None:
    """Two extractors over one store share a single pending slot."""
    store = PendingShareStore()
    resolver = MemoryContentResolver()
    host_side = ShareExtractor(resolver, store)
    channel_side = ShareExtractor(resolver, store)

    host_side.handle(ShareEvent.view("https://example.com"))
    assert channel_side.fetch() == {"text": "https://example.com"}
