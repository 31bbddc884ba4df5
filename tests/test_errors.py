"""Tests for src/errors.py — Diagnostic, IngestReport, ingestion errors."""

import logging

import pytest
from folio.errors import (
    Diagnostic,
    DiagnosticKind,
    EntryUnreadableError,
    FrontmatterMalformedError,
    FrontmatterMissingError,
    IngestError,
    IngestReport,
    MetadataInvalidError,
    SourceUnavailableError,
)


class TestIngestErrors:
    @pytest.mark.parametrize(
        "exc_type, kind",
        [
            (SourceUnavailableError, DiagnosticKind.DIRECTORY_UNREADABLE),
            (EntryUnreadableError, DiagnosticKind.FILE_UNREADABLE),
            (FrontmatterMissingError, DiagnosticKind.FRONTMATTER_MISSING),
            (FrontmatterMalformedError, DiagnosticKind.FRONTMATTER_MALFORMED),
            (MetadataInvalidError, DiagnosticKind.METADATA_INVALID),
        ],
    )
    def test_kinds(self, exc_type, kind):
        exc = exc_type("boom", source="post.md")
        assert isinstance(exc, IngestError)
        assert exc.kind is kind
        assert exc.source == "post.md"
        assert str(exc) == "boom"


class TestDiagnostic:
    def test_skipped(self):
        assert Diagnostic(kind=DiagnosticKind.METADATA_INVALID).skipped is True
        assert Diagnostic(kind=DiagnosticKind.DUPLICATE_SLUG).skipped is False


class TestIngestReport:
    def test_empty_report(self):
        report = IngestReport()
        assert report.has_errors is False
        assert report.skipped_count == 0

    def test_add(self):
        report = IngestReport()
        diag = report.add(DiagnosticKind.FILE_UNREADABLE, "unreadable", source="a.md")
        assert report.diagnostics == [diag]
        assert diag.source == "a.md"
        assert report.has_errors is True

    def test_add_error(self):
        report = IngestReport()
        report.add_error(FrontmatterMissingError("No frontmatter found", source="b.md"))
        assert report.diagnostics[0].kind is DiagnosticKind.FRONTMATTER_MISSING
        assert report.diagnostics[0].message == "No frontmatter found"

    def test_warnings_are_not_errors(self):
        report = IngestReport()
        report.add(DiagnosticKind.DUPLICATE_SLUG, "dup", source="c.md")
        assert report.has_errors is False

    def test_by_kind(self):
        report = IngestReport()
        report.add(DiagnosticKind.FILE_UNREADABLE, "x", source="a.md")
        report.add(DiagnosticKind.METADATA_INVALID, "y", source="b.md")
        report.add(DiagnosticKind.FILE_UNREADABLE, "z", source="c.md")
        assert [d.source for d in report.by_kind(DiagnosticKind.FILE_UNREADABLE)] == [
            "a.md",
            "c.md",
        ]

    def test_add_logs_warning(self, caplog):
        report = IngestReport()
        with caplog.at_level(logging.WARNING, logger="folio.errors"):
            report.add(DiagnosticKind.METADATA_INVALID, "slug: Field required", source="d.md")
        assert "d.md" in caplog.text
        assert "metadata_invalid" in caplog.text

    def test_summary_text(self):
        report = IngestReport(entries_seen=3, posts_loaded=2)
        report.add(DiagnosticKind.METADATA_INVALID, "slug: Field required", source="bad.md")
        text = report.summary_text()
        assert "Loaded 2 of 3" in text
        assert "Diagnostics: 1" in text
        assert "[skipped] bad.md" in text

    def test_summary_text_counts_only(self):
        report = IngestReport(entries_seen=3, posts_loaded=2)
        report.add(DiagnosticKind.METADATA_INVALID, "slug: Field required", source="bad.md")
        text = report.summary_text(include_diagnostics=False)
        assert "Diagnostics: 1" in text
        assert "bad.md" not in text

    def test_summary_text_many_truncated(self):
        report = IngestReport()
        for i in range(8):
            report.add(DiagnosticKind.FILE_UNREADABLE, f"error {i}", source=f"{i}.md")
        assert "... and 3 more" in report.summary_text()

    def test_serializable(self):
        report = IngestReport()
        report.add(DiagnosticKind.FILE_UNREADABLE, "x", source="a.md")
        data = report.model_dump(mode="json")
        assert data["diagnostics"][0]["kind"] == "file_unreadable"
