"""
Content adapter — Dereference opaque content handles.

A handle is a capability, not data. Resolvers are the platform backends
that know how to open a stream, look up a metadata row, and ask a type
registry about a handle's locator. This module turns a handle into the
(bytes, name, type) triple the normalizer needs.

Policy:
- bytes: fatal on failure (UnreadableContent)
- name, type: best-effort, fall back to PLACEHOLDER, never raise
"""

import io
import mimetypes
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any, BinaryIO, Protocol
from urllib.parse import unquote, urlsplit

from logging_config import logger, log_content_read
from models import ContentHandle, SharedItem, UnreadableContent, PLACEHOLDER


# Metadata columns exposed by resolvers (OpenableColumns naming)
DISPLAY_NAME_COLUMN = "_display_name"
SIZE_COLUMN = "_size"


class ContentResolver(Protocol):
    """Platform content source."""

    def open_stream(self, uri: str) -> BinaryIO | None:
        """Open a fresh read stream. Return None or raise OSError if unopenable."""
        ...

    def query(self, uri: str) -> Mapping[str, Any] | None:
        """Return the single metadata row for uri, or None."""
        ...

    def get_type(self, uri: str) -> str | None:
        """Return the registered media type for uri, or None."""
        ...


# ============================================================================
# RESOLVERS
# ============================================================================

def uri_to_path(uri: str) -> Path:
    """Convert a file:// URI or bare path into a local Path."""
    parts = urlsplit(uri)
    if parts.scheme == "file":
        return Path(unquote(parts.path))
    return Path(uri)


class LocalContentResolver:
    """Resolve file:// URIs and bare filesystem paths."""

    def open_stream(self, uri: str) -> BinaryIO:
        return open(uri_to_path(uri), "rb")

    def query(self, uri: str) -> Mapping[str, Any] | None:
        path = uri_to_path(uri)
        if not path.is_file():
            return None
        return {DISPLAY_NAME_COLUMN: path.name, SIZE_COLUMN: path.stat().st_size}

    def get_type(self, uri: str) -> str | None:
        mime_type, _ = mimetypes.guess_type(str(uri_to_path(uri)))
        return mime_type


@dataclass
class _MemoryEntry:
    data: bytes
    display_name: str | None = None
    mime_type: str | None = None


class MemoryContentResolver:
    """
    In-process content provider.

    For hosts that already hold attachment bytes keyed by locator
    (and for tests). Unregistered URIs cannot be opened.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _MemoryEntry] = {}

    def register(
        self,
        uri: str,
        data: bytes,
        display_name: str | None = None,
        mime_type: str | None = None,
    ) -> ContentHandle:
        self._entries[uri] = _MemoryEntry(data, display_name, mime_type)
        return ContentHandle(uri)

    def open_stream(self, uri: str) -> BinaryIO | None:
        entry = self._entries.get(uri)
        if entry is None:
            return None
        return io.BytesIO(entry.data)

    def query(self, uri: str) -> Mapping[str, Any] | None:
        entry = self._entries.get(uri)
        if entry is None or entry.display_name is None:
            return None
        return {DISPLAY_NAME_COLUMN: entry.display_name, SIZE_COLUMN: len(entry.data)}

    def get_type(self, uri: str) -> str | None:
        entry = self._entries.get(uri)
        return entry.mime_type if entry else None


# ============================================================================
# CONTENT READER
# ============================================================================

def load_bytes(handle: ContentHandle, resolver: ContentResolver) -> bytes:
    """
    Read a handle's content fully into memory.

    No size cap and no streaming: multi-megabyte attachments are
    read whole. The stream is closed on every exit path.

    Raises:
        UnreadableContent: If no stream can be opened for the handle
    """
    try:
        stream = resolver.open_stream(handle.uri)
    except OSError as e:
        raise UnreadableContent(handle.uri, str(e)) from e
    if stream is None:
        raise UnreadableContent(handle.uri)

    with stream:
        data = stream.read()

    log_content_read(handle.uri, len(data))
    return data


def resolve_display_name(handle: ContentHandle, resolver: ContentResolver) -> str:
    """
    Resolve a display name for the handle.

    Order: metadata row column → last path segment of the locator → PLACEHOLDER.
    """
    try:
        row = resolver.query(handle.uri)
    except Exception as e:
        logger.debug(f"Content: metadata query failed for {handle.uri}: {e}")
        row = None

    if row:
        name = row.get(DISPLAY_NAME_COLUMN)
        if name:
            return str(name)

    return filename_from_uri(handle.uri) or PLACEHOLDER


def filename_from_uri(uri: str) -> str | None:
    """Extract the final path segment from a locator string.

    Examples:
        "content://provider/doc/report.pdf" -> "report.pdf"
        "content://provider/" -> None
        "/tmp/a#b.txt" -> "a#b.txt"
    """
    parts = urlsplit(uri)
    if parts.scheme:
        name = PurePosixPath(unquote(parts.path)).name
    else:
        # Bare paths are taken literally, no URI decoding
        name = PurePosixPath(uri).name
    return name or None


def resolve_mime_type(handle: ContentHandle, resolver: ContentResolver) -> str:
    """Ask the resolver's type registry for the handle's media type, else PLACEHOLDER."""
    try:
        mime_type = resolver.get_type(handle.uri)
    except Exception as e:
        logger.debug(f"Content: type lookup failed for {handle.uri}: {e}")
        mime_type = None
    return mime_type or PLACEHOLDER


def dereference(handle: ContentHandle, resolver: ContentResolver) -> SharedItem:
    """Dereference a handle into its (bytes, name, type) triple."""
    return SharedItem(
        data=load_bytes(handle, resolver),
        name=resolve_display_name(handle, resolver),
        mime_type=resolve_mime_type(handle, resolver),
    )
