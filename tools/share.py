"""
Share tool — ShareExtractor entry points and the pending-result slot.

Two entry points:
- handle(event): called by the host for every share event (cold start or
  later delivery). Normalizes and stores the result.
- fetch(): called by the request channel. Returns the pending result once.

The slot holds at most one result. A new event overwrites an unfetched
result (a warning is logged; consumers are not told). A failed handle()
leaves the slot untouched.
"""

import threading
from typing import Any

from adapters.content import ContentResolver, dereference
from extractors.share import normalize_share_event, summarize_result
from logging_config import logger, log_share_event
from models import (
    ContentHandle,
    ShareAction,
    ShareEvent,
    ShareResult,
    SharedDataResponse,
    UnreadableContent,
    EXTRA_STREAM,
    KEY_LENGTH,
)


class PendingShareStore:
    """
    Single-slot handoff store.

    put() overwrites, take() returns and clears. The lock serializes a put
    against a take when the host and the channel run on different threads.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pending: ShareResult | None = None

    def put(self, result: ShareResult) -> None:
        with self._lock:
            if self._pending is not None:
                logger.warning("Share: dropping unfetched pending result, replaced by new share")
            self._pending = result

    def take(self) -> ShareResult | None:
        with self._lock:
            result, self._pending = self._pending, None
            return result

    def peek(self) -> ShareResult | None:
        with self._lock:
            return self._pending

    @property
    def has_pending(self) -> bool:
        return self.peek() is not None


class ShareExtractor:
    """Normalizes share events and hands the result off exactly once."""

    def __init__(self, resolver: ContentResolver, store: PendingShareStore | None = None):
        self.resolver = resolver
        self.store = store or PendingShareStore()

    def handle(self, event: ShareEvent) -> bool:
        """
        Normalize a share event and store it as the pending result.

        Returns:
            True if a result was stored, False if the action was ignored

        Raises:
            UnreadableContent: If an attachment stream cannot be opened.
                Nothing is stored; any previous pending result survives.
        """
        kind = event.kind
        if not kind.is_recognized:
            logger.debug(f"Share: ignoring action {event.action!r}")
            return False

        try:
            result = normalize_share_event(
                event, lambda handle: dereference(handle, self.resolver)
            )
        except UnreadableContent as e:
            logger.error(f"Share: {kind.value} aborted, {e.message}")
            raise

        # normalize_share_event only returns None for unrecognized kinds
        assert result is not None
        count = result.get(KEY_LENGTH)
        log_share_event(kind.value, event.mime_type, int(count) if count is not None else None)
        logger.debug(f"Share: stored {summarize_result(result)}")
        self.store.put(result)
        return True

    def fetch(self) -> ShareResult | None:
        """Return the pending result, or None. Always clears the slot."""
        return self.store.take()


def build_event(
    action: str,
    streams: list[str] | None = None,
    data_string: str | None = None,
    mime_type: str | None = None,
) -> ShareEvent:
    """
    Build a ShareEvent from plain values (CLI flags, cold-start arguments).

    send-multiple carries every stream as an ordered list; every other
    action carries at most the first stream.
    """
    handles = [ContentHandle(uri) for uri in streams or []]
    extras: dict[str, Any] = {}
    if ShareAction.from_intent_action(action) is ShareAction.SEND_MULTIPLE:
        if streams is not None:
            extras[EXTRA_STREAM] = handles
    elif handles:
        extras[EXTRA_STREAM] = handles[0]
    return ShareEvent(action, mime_type=mime_type, data_string=data_string, extras=extras)


def do_get_shared_data(extractor: ShareExtractor) -> dict[str, Any]:
    """
    Answer a "get pending shared data" request.

    Returns:
        {"pending": False} when nothing is pending,
        {"pending": True, "data": {...}} otherwise (bytes base64-encoded)
    """
    return SharedDataResponse(extractor.fetch()).to_dict()
