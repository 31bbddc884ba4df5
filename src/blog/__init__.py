"""Markdown blog ingestion pipeline.

Discovers post files in a content source, parses their YAML frontmatter and
markdown bodies, and assembles a date-ordered collection that can be listed
or queried by slug.
"""

from folio.blog.collection import (
    PostCollection,
    SortOrder,
    assemble,
    get_post,
    list_posts,
)
from folio.blog.models import Post, PostMetadata
from folio.blog.reader import parse_post, split_frontmatter
from folio.blog.render import render_markdown
from folio.blog.source import ContentSource, DirectorySource, MemorySource

__all__ = [
    "ContentSource",
    "DirectorySource",
    "MemorySource",
    "Post",
    "PostCollection",
    "PostMetadata",
    "SortOrder",
    "assemble",
    "get_post",
    "list_posts",
    "parse_post",
    "render_markdown",
    "split_frontmatter",
]
