"""
Shared pytest fixtures for share-intake tests.

Content comes from an in-memory resolver so tests never depend on
real files unless they ask for tmp_path.
"""

import logging
from typing import Generator

import pytest

from adapters.content import MemoryContentResolver
from models import ContentHandle
from tools import PendingShareStore, ShareExtractor


@pytest.fixture
def resolver() -> MemoryContentResolver:
    """Resolver preloaded with a few attachments."""
    r = MemoryContentResolver()
    r.register(
        "content://media/external/images/1",
        b"\x89PNG fake image",
        display_name="holiday.png",
        mime_type="image/png",
    )
    r.register(
        "content://provider/doc/report.pdf",
        b"%PDF-1.7 fake report",
        mime_type="application/pdf",
    )
    r.register(
        "content://provider/notes/42",
        b"plain notes",
        display_name="notes.txt",
        mime_type="text/plain",
    )
    return r


@pytest.fixture
def image_handle() -> ContentHandle:
    return ContentHandle("content://media/external/images/1")


@pytest.fixture
def report_handle() -> ContentHandle:
    return ContentHandle("content://provider/doc/report.pdf")


@pytest.fixture
def notes_handle() -> ContentHandle:
    return ContentHandle("content://provider/notes/42")


@pytest.fixture
def missing_handle() -> ContentHandle:
    """Handle no resolver can open."""
    return ContentHandle("content://provider/gone/deleted.bin")


@pytest.fixture
def extractor(resolver: MemoryContentResolver) -> ShareExtractor:
    return ShareExtractor(resolver, PendingShareStore())


@pytest.fixture
def share_logger_level() -> Generator[None, None, None]:
    """Restore the package logger level after tests that reconfigure it."""
    share_logger = logging.getLogger("share_intake")
    saved = share_logger.level
    yield
    share_logger.setLevel(saved)
