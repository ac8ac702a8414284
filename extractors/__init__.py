"""
Extractors — Pure functions for share normalization.

No MCP awareness, no stream access. Just transform input → output.
Easily testable with in-memory items.
"""

from .share import normalize_share_event, summarize_result

__all__ = [
    "normalize_share_event",
    "summarize_result",
]
