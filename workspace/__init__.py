"""
Workspace — Filesystem deposit for fetched shares.

Handles file deposit to share-intake/share--{title}--{stamp}/ folders.
"""

from .manager import (
    slugify,
    safe_filename,
    get_deposit_folder,
    deposit_share,
    write_manifest,
)

__all__ = [
    "slugify",
    "safe_filename",
    "get_deposit_folder",
    "deposit_share",
    "write_manifest",
]
