"""Unit tests for workspace deposit."""

import json
from pathlib import Path

from workspace import deposit_share, get_deposit_folder, safe_filename, slugify


class TestSlugify:
    def test_basic_slug(self) -> None:
        assert slugify("Q4 Report.pdf") == "q4-report-pdf"

    def test_handles_unicode(self) -> None:
        assert slugify("Über Notes") == "uber-notes"

    def test_empty_string(self) -> None:
        assert slugify("") == "share"
        assert slugify("!!!") == "share"

    def test_truncates_long_titles(self) -> None:
        assert len(slugify("word " * 40, max_length=30)) <= 30


class TestSafeFilename:
    def test_keeps_normal_name(self) -> None:
        assert safe_filename("report.pdf") == "report.pdf"

    def test_strips_separators(self) -> None:
        assert safe_filename("../../etc/passwd") == "_.._etc_passwd"

    def test_placeholder_uses_fallback(self) -> None:
        assert safe_filename("null", "attachment-1") == "attachment-1"
        assert safe_filename("") == "attachment"


class TestGetDepositFolder:
    def test_creates_folder(self, tmp_path: Path) -> None:
        folder = get_deposit_folder("Holiday Photos", tmp_path)
        assert folder.is_dir()
        assert folder.parent == tmp_path / "share-intake"
        assert folder.name.startswith("share--holiday-photos--")


class TestDepositShare:
    def test_attachments_and_manifest(self, tmp_path: Path) -> None:
        result = {
            "mimeType": "image/*",
            "length": 2,
            "data.0": b"one",
            "name.0": "a.png",
            "type.0": "image/png",
            "data.1": b"three",
            "name.1": "null",
            "type.1": "null",
        }
        folder = deposit_share(result, tmp_path)

        assert (folder / "01-a.png").read_bytes() == b"one"
        assert (folder / "02-attachment-2").read_bytes() == b"three"

        manifest = json.loads((folder / "manifest.json").read_text())
        assert manifest["type"] == "share"
        assert manifest["title"] == "a.png"
        assert manifest["length"] == 2
        assert manifest["types"] == ["image/png", "null"]
        assert manifest["sizes"] == [3, 5]
        assert manifest["mimeType"] == "image/*"
        assert manifest["files"] == ["01-a.png", "02-attachment-2"]
        assert "received_at" in manifest

    def test_text_share(self, tmp_path: Path) -> None:
        folder = deposit_share({"text": "mailto:a@b.com"}, tmp_path)
        assert (folder / "text.txt").read_text() == "mailto:a@b.com"
        manifest = json.loads((folder / "manifest.json").read_text())
        assert "length" not in manifest
        assert manifest["files"] == ["text.txt"]
