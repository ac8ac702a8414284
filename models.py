"""
Type definitions for share-intake.

Dataclasses defining the contracts between layers:
- Adapters dereference content handles into SharedItem triples
- Extractors consume ShareEvents and return flat ShareResult mappings
- Tools wire everything together and own the pending-result slot

These types make the adapter→extractor contract explicit and IDE-checkable.
"""

import base64
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ============================================================================
# ERROR TYPES
# ============================================================================

class ErrorKind(Enum):
    """Categories of errors for consistent handling."""
    UNREADABLE_CONTENT = "unreadable_content"  # No stream could be opened for a handle
    INVALID_INPUT = "invalid_input"            # Bad parameters (CLI, channel)
    UNKNOWN = "unknown"                        # Unexpected error


class ShareError(Exception):
    """
    Structured error for consistent handling across layers.

    Adapters raise these when a content source fails.
    Tools log and re-raise; the CLI and channel format them with to_dict().
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for channel/CLI response."""
        return {
            "error": True,
            "kind": self.kind.value,
            "message": self.message,
            "retryable": self.retryable,
            **self.details,
        }


class UnreadableContent(ShareError):
    """The content stream for a handle could not be opened.

    Fatal to a single handle() call. Never retried: a fresh share
    event is needed to try again.
    """

    def __init__(self, uri: str, reason: str | None = None):
        message = f"Cannot open content stream for {uri}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            ErrorKind.UNREADABLE_CONTENT,
            message,
            details={"uri": uri},
            retryable=False,
        )
        self.uri = uri


# ============================================================================
# SHARE EVENT TYPES
# ============================================================================

# Platform action strings as delivered in share intents
INTENT_ACTION_SEND = "android.intent.action.SEND"
INTENT_ACTION_SEND_MULTIPLE = "android.intent.action.SEND_MULTIPLE"
INTENT_ACTION_SENDTO = "android.intent.action.SENDTO"
INTENT_ACTION_VIEW = "android.intent.action.VIEW"

# Conventional extras slot carrying content handles
EXTRA_STREAM = "android.intent.extra.STREAM"


class ShareAction(Enum):
    """Recognized share action kinds, plus an explicit ignored case."""
    SEND = "send"
    SEND_MULTIPLE = "send_multiple"
    SEND_TO = "send_to"
    VIEW = "view"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def from_intent_action(cls, raw: "str | ShareAction | None") -> "ShareAction":
        """Map a platform action string (or short alias) to a ShareAction.

        Unknown values and None map to UNRECOGNIZED rather than raising.
        """
        if isinstance(raw, ShareAction):
            return raw
        if not raw:
            return cls.UNRECOGNIZED
        return _ACTION_ALIASES.get(raw.strip().lower(), cls.UNRECOGNIZED)

    @property
    def is_recognized(self) -> bool:
        return self is not ShareAction.UNRECOGNIZED


_ACTION_ALIASES = {
    INTENT_ACTION_SEND.lower(): ShareAction.SEND,
    INTENT_ACTION_SEND_MULTIPLE.lower(): ShareAction.SEND_MULTIPLE,
    INTENT_ACTION_SENDTO.lower(): ShareAction.SEND_TO,
    INTENT_ACTION_VIEW.lower(): ShareAction.VIEW,
    "send": ShareAction.SEND,
    "send_multiple": ShareAction.SEND_MULTIPLE,
    "send-multiple": ShareAction.SEND_MULTIPLE,
    "sendto": ShareAction.SEND_TO,
    "send_to": ShareAction.SEND_TO,
    "send-to": ShareAction.SEND_TO,
    "view": ShareAction.VIEW,
}


@dataclass(frozen=True)
class ContentHandle:
    """
    Opaque reference to a content item.

    Not data: dereference it through adapters.content to obtain
    bytes, a display name and a media type.
    """
    uri: str


@dataclass
class ShareEvent:
    """
    A share request delivered by the host.

    The stream slot (extras[EXTRA_STREAM]) holds a list of handles for
    send-multiple and a single handle for send-single.
    """
    action: str | ShareAction | None
    mime_type: str | None = None
    data_string: str | None = None
    extras: dict[str, Any] = field(default_factory=dict)

    @property
    def kind(self) -> ShareAction:
        return ShareAction.from_intent_action(self.action)

    @property
    def stream(self) -> Any:
        return self.extras.get(EXTRA_STREAM)

    @classmethod
    def send(cls, handle: ContentHandle | None = None, mime_type: str | None = None) -> "ShareEvent":
        extras = {EXTRA_STREAM: handle} if handle is not None else {}
        return cls(INTENT_ACTION_SEND, mime_type=mime_type, extras=extras)

    @classmethod
    def send_multiple(
        cls,
        handles: Sequence[ContentHandle] | None = None,
        mime_type: str | None = None,
    ) -> "ShareEvent":
        extras = {EXTRA_STREAM: list(handles)} if handles is not None else {}
        return cls(INTENT_ACTION_SEND_MULTIPLE, mime_type=mime_type, extras=extras)

    @classmethod
    def send_to(cls, data_string: str | None = None, mime_type: str | None = None) -> "ShareEvent":
        return cls(INTENT_ACTION_SENDTO, mime_type=mime_type, data_string=data_string)

    @classmethod
    def view(cls, data_string: str | None = None, mime_type: str | None = None) -> "ShareEvent":
        return cls(INTENT_ACTION_VIEW, mime_type=mime_type, data_string=data_string)


@dataclass
class SharedItem:
    """A dereferenced content handle: raw bytes, display name, media type."""
    data: bytes
    name: str
    mime_type: str


# ============================================================================
# SHARE RESULT
# ============================================================================

# Flat, language-agnostic mapping delivered across the request channel.
ShareValue = str | int | bytes
ShareResult = dict[str, ShareValue]

KEY_MIME_TYPE = "mimeType"
KEY_LENGTH = "length"
KEY_TEXT = "text"

# Returned by best-effort name/type resolution when nothing is known
PLACEHOLDER = "null"


def data_key(index: int) -> str:
    return f"data.{index}"


def name_key(index: int) -> str:
    return f"name.{index}"


def type_key(index: int) -> str:
    return f"type.{index}"


# ============================================================================
# CHANNEL RESPONSE TYPES
# ============================================================================

@dataclass
class SharedDataResponse:
    """Answer to a "get pending shared data" request.

    result is None when nothing is pending. Bytes values are
    base64-encoded in to_dict() so the response is JSON-safe.
    """
    result: ShareResult | None = None

    @property
    def pending(self) -> bool:
        return self.result is not None

    def to_dict(self) -> dict[str, Any]:
        if self.result is None:
            return {"pending": False}
        return {"pending": True, "data": to_wire(self.result)}


def to_wire(result: ShareResult) -> dict[str, str | int]:
    """Encode a ShareResult for JSON transport (bytes → base64 text)."""
    return {
        key: base64.b64encode(value).decode("ascii") if isinstance(value, bytes) else value
        for key, value in result.items()
    }
