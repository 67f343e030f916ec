"""Locating the ``---``-delimited front-matter block in a markdown document."""

from __future__ import annotations

import re

_FRONT_MATTER_RE = re.compile(r"\A---\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)
_EMPTY_FRONT_MATTER_RE = re.compile(r"\A---\r?\n---[ \t]*(?:\r?\n|\Z)")


def extract_front_matter(content: str) -> str | None:
    """Return the text between the opening and closing ``---`` lines.

    Returns ``None`` when the document does not start with a front-matter
    block, and ``""`` for an empty one.  Line 1 of the returned text is the
    line directly after the opening delimiter.
    """
    match = _FRONT_MATTER_RE.match(content)
    if match:
        return match.group(1)
    if _EMPTY_FRONT_MATTER_RE.match(content):
        return ""
    return None
