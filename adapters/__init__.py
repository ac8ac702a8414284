"""
Adapters — Thin wrappers over platform content sources.

The only layer that opens streams. Extractors receive already-dereferenced
items through an injected callable.
"""

from .content import (
    ContentResolver,
    LocalContentResolver,
    MemoryContentResolver,
    dereference,
    load_bytes,
    resolve_display_name,
    resolve_mime_type,
)

__all__ = [
    "ContentResolver",
    "LocalContentResolver",
    "MemoryContentResolver",
    "dereference",
    "load_bytes",
    "resolve_display_name",
    "resolve_mime_type",
]
