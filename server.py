#!/usr/bin/env python3
"""
Share Intake MCP Server

The cross-boundary request channel for shared content.

One tool:
- get_shared_data: return the pending share result once, then forget it

Share events arrive from the host through deliver_share() (at cold start
and on every later delivery; both are handled the same way). Documentation
of the result shape is provided via an MCP Resource, not a tool.

Architecture:
- extractors/: Pure functions (no MCP, no stream access)
- adapters/: Content resolvers and the content reader
- tools/: ShareExtractor and the pending-result slot
- workspace/: Filesystem deposit
- server.py: Thin MCP wrappers (this file)
"""

import os
import signal
from typing import Any

from mcp.server.fastmcp import FastMCP

from adapters.content import LocalContentResolver
from logging_config import DEFAULT_LOG_LEVEL, configure_logging
from models import ShareEvent
from tools import ShareExtractor, do_get_shared_data

SERVER_NAME = os.environ.get("SHARE_INTAKE_SERVER_NAME", "Share Intake")

# Process-wide extractor: one pending slot shared by host and channel
extractor = ShareExtractor(LocalContentResolver())

# Initialize MCP server
mcp = FastMCP(SERVER_NAME)


def deliver_share(event: ShareEvent) -> bool:
    """Host entry point for an incoming share event.

    Raises UnreadableContent when an attachment cannot be opened.
    """
    return extractor.handle(event)


# ============================================================================
# TOOLS
# ============================================================================

@mcp.tool()
def get_shared_data() -> dict[str, Any]:
    """
    Get the content most recently shared into the app.

    The pending share is delivered once: a second call returns
    {"pending": false} until a new share arrives.

    Returns:
        pending: Whether a share was waiting
        data: Flat share result (present when pending). Keys:
            mimeType: Declared type of the share (absent if none declared)
            length: Number of attachments (absent for text shares)
            data.N / name.N / type.N: Attachment bytes (base64), name, type
            text: Shared text or link (only for text shares)
    """
    return do_get_shared_data(extractor)


# ============================================================================
# RESOURCES
# ============================================================================

@mcp.resource("share://docs/result-shape")
def result_shape_docs() -> str:
    """Shape of the shared-data result."""
    return """# Shared data result

A flat mapping of primitive values. Exactly one family is present:

| Key | Type | When |
|-----|------|------|
| `mimeType` | str | Declared type of the share; key absent when none declared |
| `length` | int | Attachment shares (0 when the share carried no attachments) |
| `data.N` | bytes (base64 on the wire) | For each N in 0..length-1 |
| `name.N` | str | Display name, `"null"` when unresolvable |
| `type.N` | str | Media type, `"null"` when unresolvable |
| `text` | str | Text/link shares (send-to, view); never with `length` |

Attachment order matches the order the sharing app supplied.
A pending share is delivered once; a new share replaces an unfetched one.
"""


# ============================================================================
# SERVER ENTRY POINT
# ============================================================================

def _shutdown_handler(signum: int, frame: object) -> None:
    """Handle termination signals by exiting immediately.

    os._exit() is required because sys.exit() raises SystemExit,
    which asyncio's event loop catches and ignores.
    """
    os._exit(0)


def run_server(
    cold_start_event: ShareEvent | None = None,
    log_level: str = DEFAULT_LOG_LEVEL,
) -> None:
    """Run the MCP server, handling a cold-start share first if one is pending."""
    configure_logging(log_level)
    if cold_start_event is not None:
        deliver_share(cold_start_event)

    signal.signal(signal.SIGTERM, _shutdown_handler)
    signal.signal(signal.SIGINT, _shutdown_handler)
    mcp.run()


if __name__ == "__main__":
    run_server()
