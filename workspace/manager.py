"""
Workspace Manager — Deposit fetched share results to disk.

Writes a fetched ShareResult into share-intake/share--{slug}--{stamp}/:
one file per attachment (01-report.pdf, 02-photo.jpg, ...), text.txt for
text shares, and manifest.json describing the deposit.
"""

import json
import os
import re
import unicodedata
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from models import (
    ShareResult,
    KEY_LENGTH,
    KEY_MIME_TYPE,
    KEY_TEXT,
    PLACEHOLDER,
    data_key,
    name_key,
    type_key,
)

DEPOSIT_ROOT = "share-intake"
DEFAULT_DEPOSIT_DIR = os.environ.get("SHARE_INTAKE_DEPOSIT_DIR")


def slugify(text: str, max_length: int = 50) -> str:
    """
    Convert text to a filesystem-safe slug.

    Examples:
        "Q4 Report.pdf" -> "q4-report-pdf"
        "Über Notes" -> "uber-notes"
    """
    text = unicodedata.normalize("NFKD", text)
    text = text.encode("ascii", "ignore").decode("ascii").lower()
    text = re.sub(r"[^a-z0-9]+", "-", text).strip("-")

    if len(text) > max_length:
        text = text[:max_length].rsplit("-", 1)[0]

    return text or "share"


def safe_filename(name: str, fallback: str = "attachment") -> str:
    """
    Make a display name safe to use as a single path component.

    Keeps the extension, drops directory separators and control characters.
    The PLACEHOLDER name maps to the fallback.
    """
    if not name or name == PLACEHOLDER:
        return fallback
    name = name.replace("/", "_").replace("\\", "_")
    name = "".join(ch for ch in name if ch.isprintable()).strip(" .")
    return name or fallback


def get_deposit_folder(title: str, base_path: Path | None = None) -> Path:
    """
    Create the folder for one deposit.

    Creates the folder structure:
        share-intake/share--{title-slug}--{YYYYmmddTHHMMSSffffff}/
    """
    base = base_path or Path(DEFAULT_DEPOSIT_DIR or Path.cwd())
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%f")
    folder = base / DEPOSIT_ROOT / f"share--{slugify(title)}--{stamp}"
    folder.mkdir(parents=True, exist_ok=True)
    return folder


def deposit_share(result: ShareResult, base_path: Path | None = None) -> Path:
    """
    Write a fetched result to a deposit folder.

    Args:
        result: ShareResult from ShareExtractor.fetch()
        base_path: Base directory (defaults to SHARE_INTAKE_DEPOSIT_DIR or cwd)

    Returns:
        Path to the deposit folder
    """
    length = int(result.get(KEY_LENGTH, 0))
    names = [str(result[name_key(i)]) for i in range(length)]
    title = names[0] if names else ("text" if KEY_TEXT in result else "empty")
    folder = get_deposit_folder(title, base_path)

    files: list[str] = []
    for index in range(length):
        filename = f"{index + 1:02d}-{safe_filename(names[index], f'attachment-{index + 1}')}"
        (folder / filename).write_bytes(bytes(result[data_key(index)]))
        files.append(filename)

    if KEY_TEXT in result:
        (folder / "text.txt").write_text(str(result[KEY_TEXT]), encoding="utf-8")
        files.append("text.txt")

    extra: dict[str, Any] = {"files": files}
    if KEY_LENGTH in result:
        extra[KEY_LENGTH] = length
        extra["names"] = names
        extra["types"] = [result[type_key(i)] for i in range(length)]
        extra["sizes"] = [len(result[data_key(i)]) for i in range(length)]
    if KEY_MIME_TYPE in result:
        extra[KEY_MIME_TYPE] = result[KEY_MIME_TYPE]

    write_manifest(folder, title, extra)
    return folder


def write_manifest(folder: Path, title: str, extra: dict[str, Any] | None = None) -> Path:
    """Write manifest.json to make the deposit folder self-describing."""
    manifest: dict[str, Any] = {
        "type": "share",
        "title": title,
        "received_at": datetime.now(timezone.utc).isoformat(),
    }
    if extra:
        manifest.update(extra)

    file_path = folder / "manifest.json"
    file_path.write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    return file_path
