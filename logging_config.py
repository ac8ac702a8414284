"""
Logging configuration for share-intake.

Simple setup that adapters and tools can import.
Extractors should NOT log (they're pure functions).
"""

import logging
import os
import sys

# Create logger for the package
logger = logging.getLogger("share_intake")

DEFAULT_LOG_LEVEL = os.environ.get("SHARE_INTAKE_LOG_LEVEL", "INFO")


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """
    Configure logging for share-intake.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    logger.setLevel(getattr(logging, level.upper()))

    # Only add handler if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(logging.DEBUG)

        # stdout may carry the MCP stdio transport, so logs go to stderr
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)


# NOTE: Call configure_logging() explicitly in server.py, cli.py or test setup.
# We don't auto-configure to avoid side effects on import.


# Convenience functions for common patterns
def log_share_event(action: str, mime_type: str | None, item_count: int | None = None) -> None:
    """Log an incoming share event."""
    if item_count is not None:
        logger.info(f"Share: {action} ({mime_type or 'no type'}) with {item_count} item(s)")
    else:
        logger.info(f"Share: {action} ({mime_type or 'no type'})")


def log_content_read(uri: str, size: int) -> None:
    """Log a completed content read."""
    logger.debug(f"Content: read {size} bytes from {uri}")
