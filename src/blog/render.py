"""Markdown to HTML conversion for post bodies."""

from __future__ import annotations

import mistune

MARKDOWN_PLUGINS = ["strikethrough", "table", "footnotes", "task_lists"]

# Post bodies are author-controlled, so raw HTML is passed through unescaped.
_markdown = mistune.create_markdown(escape=False, plugins=MARKDOWN_PLUGINS)


def render_markdown(body: str) -> str:
    """Render a markdown body to an HTML fragment.

    Strikethrough, tables, footnotes and task lists are enabled. A blank
    body renders to an empty string.
    """
    if not body.strip():
        return ""
    return str(_markdown(body))
