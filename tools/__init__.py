"""
Tools — Share handling wired for the host and the request channel.

server.py provides the thin @mcp.tool() wrapper that calls into these.
"""

from .share import ShareExtractor, PendingShareStore, build_event, do_get_shared_data

__all__ = [
    "ShareExtractor",
    "PendingShareStore",
    "build_event",
    "do_get_shared_data",
]
