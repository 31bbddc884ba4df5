"""Post collection assembly and queries.

Runs every entry of a ``ContentSource`` through the parser, keeps the posts
that parse, and orders them by publication date. Every call rebuilds the
collection from the source.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from enum import StrEnum
from pathlib import Path

from folio.blog.models import Post, PostMetadata
from folio.blog.reader import parse_post
from folio.blog.source import ContentSource, DirectorySource
from folio.errors import DiagnosticKind, IngestError, IngestReport

logger = logging.getLogger(__name__)


class SortOrder(StrEnum):
    """Publication date ordering of a collection."""

    ASC = "asc"
    DESC = "desc"


class PostCollection:
    """Ordered, queryable set of posts."""

    def __init__(self, posts: list[Post]) -> None:
        self._posts = list(posts)

    def __len__(self) -> int:
        return len(self._posts)

    def __iter__(self) -> Iterator[Post]:
        return iter(self._posts)

    @property
    def posts(self) -> list[Post]:
        return list(self._posts)

    def list(self) -> list[PostMetadata]:
        """Metadata of every post, in collection order, without content."""
        return [post.meta for post in self._posts]

    def find_by_slug(self, slug: str) -> Post | None:
        """Return the first post with the given slug, or None."""
        for post in self._posts:
            if post.meta.slug == slug:
                return post
        return None

    def tags(self) -> list[str]:
        """Distinct tags across all posts, sorted."""
        return sorted({tag for post in self._posts for tag in post.meta.tags})

    def with_tag(self, tag: str) -> list[Post]:
        return [post for post in self._posts if tag in post.meta.tags]


def as_source(directory: str | Path | ContentSource) -> ContentSource:
    """Accept either a content source or a directory path."""
    if isinstance(directory, ContentSource):
        return directory
    return DirectorySource(directory)


def _flag_duplicate_slugs(entries: list[tuple[str, Post]], report: IngestReport) -> None:
    seen: set[str] = set()
    for name, post in entries:
        slug = post.meta.slug
        if slug in seen:
            report.add(
                DiagnosticKind.DUPLICATE_SLUG,
                f"Slug {slug!r} is already used by an earlier post",
                source=name,
            )
        seen.add(slug)


def assemble(
    directory: str | Path | ContentSource,
    order: SortOrder = SortOrder.ASC,
    report: IngestReport | None = None,
) -> PostCollection:
    """Enumerate, load and parse every post, then sort by date.

    Failures for a single entry are recorded in ``report`` and the entry is
    skipped. An unreadable source yields an empty collection.

    Args:
        directory: Directory path or content source to read from.
        order: Date ordering; ascending (oldest first) by default.
        report: Optional report collecting diagnostics for this call.

    Returns:
        The assembled collection.
    """
    source = as_source(directory)
    if report is None:
        report = IngestReport()

    try:
        names = source.list_entries()
    except IngestError as exc:
        report.add_error(exc)
        return PostCollection([])

    report.entries_seen += len(names)
    parsed: list[tuple[str, Post]] = []

    for name in names:
        try:
            text = source.read(name)
            post = parse_post(text, source=name)
        except IngestError as exc:
            if not exc.source:
                exc.source = name
            report.add_error(exc)
            continue
        parsed.append((name, post))

    # Stable: equal dates keep enumeration order in either direction.
    parsed.sort(
        key=lambda entry: entry[1].meta.published,
        reverse=SortOrder(order) is SortOrder.DESC,
    )
    _flag_duplicate_slugs(parsed, report)
    ordered = [post for _name, post in parsed]
    report.posts_loaded += len(ordered)

    logger.info(
        "Assembled %d post(s) from %s (%d skipped)",
        len(ordered),
        source.describe(),
        len(names) - len(ordered),
    )
    return PostCollection(ordered)


def list_posts(
    directory: str | Path | ContentSource,
    order: SortOrder = SortOrder.ASC,
    report: IngestReport | None = None,
) -> list[PostMetadata]:
    """Metadata for every valid post, sorted by date."""
    return assemble(directory, order=order, report=report).list()


def get_post(
    directory: str | Path | ContentSource,
    slug: str,
    report: IngestReport | None = None,
) -> Post | None:
    """The first post with ``slug``, or None if no valid post has it."""
    return assemble(directory, report=report).find_by_slug(slug)
