"""
Share extractor — Normalize a share event into a flat ShareResult.

Pure function: no stream access, no logging. Content handles are turned
into SharedItems through the injected dereference callable, so any
failure it raises (UnreadableContent) propagates and no partial result
is returned.

Result shapes:
    send-multiple:  {mimeType?, length: N, data.i, name.i, type.i ...}
    send-to / view: {mimeType?, text?}
    send:           {mimeType?, length: 1, data.0, name.0, type.0} or {mimeType?}
"""

from collections.abc import Callable, Sequence
from typing import Any

from models import (
    ContentHandle,
    ShareAction,
    ShareEvent,
    SharedItem,
    ShareResult,
    KEY_LENGTH,
    KEY_MIME_TYPE,
    KEY_TEXT,
    data_key,
    name_key,
    type_key,
)

Dereference = Callable[[ContentHandle], SharedItem]


def normalize_share_event(event: ShareEvent, dereference: Dereference) -> ShareResult | None:
    """
    Build the flat result for a share event.

    Args:
        event: Incoming share event
        dereference: Turns a handle into (bytes, name, type)

    Returns:
        ShareResult, or None if the action kind is not recognized
    """
    kind = event.kind
    if not kind.is_recognized:
        return None

    result: ShareResult = {}
    # Absent type means absent key, never a null marker
    if event.mime_type is not None:
        result[KEY_MIME_TYPE] = event.mime_type

    if kind is ShareAction.SEND_MULTIPLE:
        handles = _stream_handles(event.stream)
        result[KEY_LENGTH] = len(handles)
        _add_items(result, handles, dereference)
    elif kind in (ShareAction.SEND_TO, ShareAction.VIEW):
        if event.data_string is not None:
            result[KEY_TEXT] = event.data_string
    else:
        handle = _single_handle(event.stream)
        if handle is not None:
            result[KEY_LENGTH] = 1
            _add_items(result, [handle], dereference)

    return result


def _add_items(result: ShareResult, handles: Sequence[ContentHandle], dereference: Dereference) -> None:
    for index, handle in enumerate(handles):
        item = dereference(handle)
        result[data_key(index)] = item.data
        result[name_key(index)] = item.name
        result[type_key(index)] = item.mime_type


def _stream_handles(stream: Any) -> list[ContentHandle]:
    """Ordered handles from a send-multiple stream slot (order preserved)."""
    if stream is None:
        return []
    if isinstance(stream, (ContentHandle, str)):
        return [_as_handle(stream)]
    if isinstance(stream, (list, tuple)):
        return [_as_handle(h) for h in stream if h is not None]
    return []


def _as_handle(value: ContentHandle | str) -> ContentHandle:
    # Bare locator strings are accepted as handles
    return value if isinstance(value, ContentHandle) else ContentHandle(value)


def _single_handle(stream: Any) -> ContentHandle | None:
    handles = _stream_handles(stream)
    return handles[0] if handles else None


def summarize_result(result: ShareResult) -> dict[str, Any]:
    """
    Bytes-free view of a result for logs and CLI output.

    Example:
        {"mimeType": "image/*", "length": 2, "names": [...], "types": [...], "sizes": [...]}
    """
    summary: dict[str, Any] = {}
    if KEY_MIME_TYPE in result:
        summary[KEY_MIME_TYPE] = result[KEY_MIME_TYPE]
    if KEY_TEXT in result:
        summary[KEY_TEXT] = result[KEY_TEXT]
    if KEY_LENGTH in result:
        length = int(result[KEY_LENGTH])
        summary[KEY_LENGTH] = length
        summary["names"] = [result[name_key(i)] for i in range(length)]
        summary["types"] = [result[type_key(i)] for i in range(length)]
        summary["sizes"] = [len(result[data_key(i)]) for i in range(length)]
    return summary
