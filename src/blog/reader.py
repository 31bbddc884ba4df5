"""Blog post parser.

Splits a post file into its YAML frontmatter and markdown body, validates
the frontmatter into ``PostMetadata`` and renders the body to HTML.
"""

from __future__ import annotations

import logging
import re

import yaml
from pydantic import ValidationError

from folio.blog.models import Post, PostMetadata
from folio.blog.render import render_markdown
from folio.errors import (
    FrontmatterMalformedError,
    FrontmatterMissingError,
    MetadataInvalidError,
)

logger = logging.getLogger(__name__)

_FRONTMATTER_RE = re.compile(r"\A---[ \t]*\n(.*?)^---[ \t]*$\n?", re.DOTALL | re.MULTILINE)
_BOOL_TAG = "tag:yaml.org,2002:bool"
_INT_TAG = "tag:yaml.org,2002:int"
_FLOAT_TAG = "tag:yaml.org,2002:float"
_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"
_REPLACED_TAGS = {_BOOL_TAG, _INT_TAG, _FLOAT_TAG, _TIMESTAMP_TAG}


class FrontmatterLoader(yaml.SafeLoader):
    """SafeLoader resolving plain scalars with the YAML 1.2 core schema.

    ``yes``/``on``/``off`` and base-60 values like ``1:30`` stay strings, and
    dates are not resolved at all: ``PostMetadata`` validates them, so an
    impossible date such as ``2024-02-31`` is reported as invalid metadata
    rather than a YAML error.
    """


FrontmatterLoader.yaml_implicit_resolvers = {
    first_char: [(tag, regexp) for tag, regexp in resolvers if tag not in _REPLACED_TAGS]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
FrontmatterLoader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)
# Int before float: resolvers are tried in order and "5" matches both.
FrontmatterLoader.add_implicit_resolver(
    _INT_TAG,
    re.compile(r"^(?:[-+]?(?:0|[1-9][0-9]*)|0x[0-9a-fA-F]+)$"),
    list("-+0123456789"),
)
FrontmatterLoader.add_implicit_resolver(
    _FLOAT_TAG,
    re.compile(
        r"^(?:[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?"
        r"|[-+]?\.(?:inf|Inf|INF)|\.(?:nan|NaN|NAN))$"
    ),
    list("-+.0123456789"),
)


def split_frontmatter(text: str, source: str = "<memory>") -> tuple[dict[str, object], str]:
    """Split post text into a frontmatter mapping and the markdown body.

    The block must open on the first line with ``---`` and close on a later
    line consisting of ``---``.

    Raises:
        FrontmatterMissingError: No delimited block, or the block is empty.
        FrontmatterMalformedError: The block is not valid YAML or not a mapping.
    """
    text = text.removeprefix("\ufeff").replace("\r\n", "\n")

    match = _FRONTMATTER_RE.match(text)
    if match is None:
        raise FrontmatterMissingError("No frontmatter found in post", source=source)

    raw = match.group(1)
    body = text[match.end():]

    try:
        data = yaml.load(raw, Loader=FrontmatterLoader)  # noqa: S506
    except yaml.YAMLError as exc:
        raise FrontmatterMalformedError(f"Invalid YAML frontmatter: {exc}", source=source) from exc

    if data is None:
        raise FrontmatterMissingError("Frontmatter block is empty", source=source)
    if not isinstance(data, dict):
        raise FrontmatterMalformedError(
            f"Frontmatter must be a mapping, got {type(data).__name__}", source=source
        )

    return data, body


def _describe_validation_error(exc: ValidationError) -> str:
    problems = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "frontmatter"
        problems.append(f"{field}: {err['msg']}")
    return "; ".join(problems)


def parse_metadata(data: dict[str, object], source: str = "<memory>") -> PostMetadata:
    """Validate a frontmatter mapping into ``PostMetadata``.

    Raises:
        MetadataInvalidError: A required field is missing or a field has the
            wrong type or an invalid date.
    """
    try:
        return PostMetadata.model_validate(data)
    except ValidationError as exc:
        raise MetadataInvalidError(
            f"Invalid frontmatter: {_describe_validation_error(exc)}", source=source
        ) from exc


def parse_post(text: str, source: str = "<memory>") -> Post:
    """Parse raw post text into a ``Post``.

    Raises:
        FrontmatterMissingError, FrontmatterMalformedError, MetadataInvalidError
    """
    data, body = split_frontmatter(text, source=source)
    meta = parse_metadata(data, source=source)
    content = render_markdown(body)
    logger.debug("Parsed post %r from %s", meta.slug, source)
    return Post(meta=meta, content=content)
