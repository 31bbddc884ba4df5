"""Structured diagnostics for blog ingestion runs."""

from __future__ import annotations

import logging
from enum import StrEnum

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class DiagnosticKind(StrEnum):
    """Categories of recoverable ingestion failures."""

    DIRECTORY_UNREADABLE = "directory_unreadable"
    FILE_UNREADABLE = "file_unreadable"
    FRONTMATTER_MISSING = "frontmatter_missing"
    FRONTMATTER_MALFORMED = "frontmatter_malformed"
    METADATA_INVALID = "metadata_invalid"
    DUPLICATE_SLUG = "duplicate_slug"


# Kinds that do not cause a post to be dropped.
WARNING_KINDS = frozenset({DiagnosticKind.DUPLICATE_SLUG})


class IngestError(Exception):
    """Base class for failures the assembler recovers from locally."""

    kind: DiagnosticKind = DiagnosticKind.FILE_UNREADABLE

    def __init__(self, message: str, *, source: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.source = source


class SourceUnavailableError(IngestError):
    """The content directory could not be opened."""

    kind = DiagnosticKind.DIRECTORY_UNREADABLE


class EntryUnreadableError(IngestError):
    """A single post file could not be read or decoded."""

    kind = DiagnosticKind.FILE_UNREADABLE


class FrontmatterMissingError(IngestError):
    kind = DiagnosticKind.FRONTMATTER_MISSING


class FrontmatterMalformedError(IngestError):
    kind = DiagnosticKind.FRONTMATTER_MALFORMED


class MetadataInvalidError(IngestError):
    """Frontmatter parsed but does not describe a valid post."""

    kind = DiagnosticKind.METADATA_INVALID


class Diagnostic(BaseModel):
    """A single failure captured during ingestion."""

    kind: DiagnosticKind
    source: str = ""
    message: str = ""

    @property
    def skipped(self) -> bool:
        """True if the diagnostic caused its source to be excluded."""
        return self.kind not in WARNING_KINDS


class IngestReport(BaseModel):
    """Summary of one ingestion call."""

    entries_seen: int = 0
    posts_loaded: int = 0
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    def add(
        self,
        kind: DiagnosticKind,
        message: str,
        *,
        source: str = "",
    ) -> Diagnostic:
        """Record a diagnostic and log it."""
        diagnostic = Diagnostic(kind=kind, source=source, message=message)
        self.diagnostics.append(diagnostic)
        logger.warning("%s [%s]: %s", source or "<source>", kind.value, message)
        return diagnostic

    def add_error(self, exc: IngestError) -> Diagnostic:
        """Record a diagnostic from a recovered ingestion error."""
        return self.add(exc.kind, exc.message, source=exc.source)

    def by_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.kind == kind]

    @property
    def skipped_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.skipped)

    @property
    def has_errors(self) -> bool:
        """True if any source was skipped."""
        return self.skipped_count > 0

    def summary_text(self, include_diagnostics: bool = True) -> str:
        """Human-readable summary of the ingestion call.

        Args:
            include_diagnostics: List the first few diagnostics under the
                counts. Callers that already print each diagnostic pass False.
        """
        lines = [f"Loaded {self.posts_loaded} of {self.entries_seen} post file(s)"]

        if self.diagnostics:
            lines.append(f"Diagnostics: {len(self.diagnostics)}")
            if include_diagnostics:
                for diag in self.diagnostics[:5]:
                    prefix = "[skipped]" if diag.skipped else "[warning]"
                    lines.append(f"  {prefix} {diag.source}: {diag.kind.value}: {diag.message}")
                if len(self.diagnostics) > 5:
                    lines.append(f"  ... and {len(self.diagnostics) - 5} more")

        return "\n".join(lines)
