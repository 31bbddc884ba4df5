"""Blog post data models."""

from __future__ import annotations

import re
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, field_validator

DATE_FORMAT = "%Y-%m-%d"
_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
DEFAULT_OG_TYPE = "article"


class PostMetadata(BaseModel):
    """Metadata for a blog post, as declared in its frontmatter."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    slug: str
    title: str
    description: str
    author: str
    date: str
    cover_image: str | None = None
    tags: list[str]
    og_title: str | None = None
    og_description: str | None = None
    og_image: str | None = None
    og_type: str | None = None

    @field_validator("date", mode="before")
    @classmethod
    def normalize_native_date(cls, value: object) -> object:
        # Standard YAML loaders turn 2024-01-01 into a date; timestamps are not post dates.
        if isinstance(value, datetime):
            raise ValueError("date must be a calendar date (YYYY-MM-DD), not a timestamp")
        if isinstance(value, date):
            return value.isoformat()
        return value

    @field_validator("date")
    @classmethod
    def validate_calendar_date(cls, value: str) -> str:
        message = f"invalid calendar date {value!r}, expected YYYY-MM-DD"
        # strptime alone would accept unpadded 2024-1-5.
        if not _ISO_DATE_RE.fullmatch(value):
            raise ValueError(message)
        try:
            datetime.strptime(value, DATE_FORMAT)
        except ValueError:
            raise ValueError(message) from None
        return value

    @property
    def published(self) -> date:
        """Publication date as a ``datetime.date``."""
        return datetime.strptime(self.date, DATE_FORMAT).date()

    @property
    def resolved_og_title(self) -> str:
        return self.og_title or self.title

    @property
    def resolved_og_description(self) -> str:
        return self.og_description or self.description

    @property
    def resolved_og_image(self) -> str | None:
        return self.og_image or self.cover_image

    @property
    def resolved_og_type(self) -> str:
        return self.og_type or DEFAULT_OG_TYPE


class Post(BaseModel):
    """A fully parsed post: metadata plus rendered HTML body."""

    model_config = ConfigDict(frozen=True)

    meta: PostMetadata
    content: str = ""

    @property
    def slug(self) -> str:
        return self.meta.slug

    def to_dict(self) -> dict[str, object]:
        """Flatten metadata and content into a single mapping.

        This is the shape handed to JSON consumers: every metadata field at
        the top level alongside ``content``.
        """
        data: dict[str, object] = self.meta.model_dump()
        data["content"] = self.content
        return data
