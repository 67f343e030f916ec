"""Best-effort recovery of the source line of each top-level front-matter key."""

from __future__ import annotations

import re
from collections.abc import Container

# Unindented ``key:``; the key token must touch the colon.
_KEY_LINE_RE = re.compile(r"^([A-Za-z0-9_-]+):")


class LineMapper:
    """Maps top-level keys to the 1-indexed line that first defines them.

    This is a line scan, not a second parse.  Literal or folded scalar bodies
    are not skipped, so an unindented ``word:`` line inside one can shadow the
    real key definition that follows it.
    """

    def build(self, text: str, keys: Container[str]) -> dict[str, int]:
        line_map: dict[str, int] = {}
        for number, line in enumerate(text.split("\n"), start=1):
            match = _KEY_LINE_RE.match(line)
            if match is None:
                continue
            key = match.group(1)
            if key in keys and key not in line_map:
                line_map[key] = number
        return line_map
