"""Tests for the report vault writer."""

from __future__ import annotations

from datetime import date

import pytest

from newsbrief.exceptions import ToolError
from newsbrief.storage.vault import ReportWriter, normalize_filename, report_filename


class TestFilenames:
    def test_extension_appended(self):
        assert normalize_filename("Daily-Briefing-2025-02-04") == "Daily-Briefing-2025-02-04.md"

    def test_extension_not_doubled(self):
        assert normalize_filename("notes.md") == "notes.md"

    def test_report_filename(self):
        assert report_filename(date(2025, 2, 4)) == "Daily-Briefing-2025-02-04.md"

    def test_report_filename_defaults_to_today(self):
        assert report_filename() == f"Daily-Briefing-{date.today().isoformat()}.md"


class TestReportWriter:
    def test_write_creates_vault(self, writer, vault_path):
        path = writer.write("Daily-Briefing-2025-02-04", "# Briefing\n")
        assert path.is_absolute()
        assert path == (vault_path / "Daily-Briefing-2025-02-04.md").absolute()
        assert path.read_text() == "# Briefing\n"

    def test_overwrites(self, writer):
        writer.write("a.md", "first")
        path = writer.write("a", "second")
        assert path.read_text() == "second"
        assert writer.list_reports() == ["a.md"]

    def test_empty_content_allowed(self, writer):
        assert writer.write("empty", "").read_text() == ""

    def test_list_reports_newest_first(self, writer, vault_path):
        writer.write(report_filename(date(2025, 2, 3)), "x")
        writer.write(report_filename(date(2025, 2, 5)), "x")
        writer.write(report_filename(date(2025, 2, 4)), "x")
        (vault_path / "attachment.png").write_bytes(b"")
        (vault_path / "subdir.md").mkdir()
        assert writer.list_reports() == [
            "Daily-Briefing-2025-02-05.md",
            "Daily-Briefing-2025-02-04.md",
            "Daily-Briefing-2025-02-03.md",
        ]

    def test_list_reports_missing_vault(self, tmp_path):
        assert ReportWriter(tmp_path / "absent").list_reports() == []

    def test_read_report(self, writer):
        writer.write("today", "body")
        assert writer.read_report("today") == "body"
        assert writer.read_report("today.md") == "body"

    def test_read_missing_report(self, writer):
        with pytest.raises(FileNotFoundError):
            writer.read_report("nope")

    def test_write_failure_propagates(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        with pytest.raises(OSError):
            ReportWriter(blocker).write("x", "y")


class TestVaultConfinement:
    def test_absolute_filename_rejected(self, writer, tmp_path):
        target = tmp_path / "outside" / "escape"
        with pytest.raises(ToolError, match="escapes the vault"):
            writer.write(str(target), "x")
        assert not (tmp_path / "outside").exists()

    @pytest.mark.parametrize("filename", ["../escape", "nested/../../escape.md"])
    def test_parent_segments_rejected(self, writer, tmp_path, filename):
        with pytest.raises(ToolError):
            writer.write(filename, "x")
        assert not (tmp_path / "escape.md").exists()

    def test_read_outside_vault_rejected(self, writer, tmp_path):
        (tmp_path / "secret.md").write_text("private")
        with pytest.raises(ToolError):
            writer.read_report("../secret")

    def test_subdirectory_inside_vault_allowed(self, writer, vault_path):
        path = writer.write("2025/Daily-Briefing-2025-02-04", "nested")
        assert path == (vault_path / "2025" / "Daily-Briefing-2025-02-04.md").absolute()
        assert path.read_text() == "nested"
