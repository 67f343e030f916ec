"""Restricted YAML loader for front-matter blocks."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.constructor import ConstructorError, SafeConstructor
from ruamel.yaml.error import MarkedYAMLError, YAMLError
from ruamel.yaml.events import AliasEvent, NodeEvent

from tenetlint.models.document import (
    ABSENT,
    MappingValue,
    MetadataValue,
    ParsedDocument,
    ScalarValue,
    SequenceValue,
)
from tenetlint.models.errors import ParseError
from tenetlint.parser.line_map import LineMapper

logger = logging.getLogger("tenetlint.parser")

# ---------------------------------------------------------------------------
# Safety limits
# ---------------------------------------------------------------------------

_MAX_DOCUMENT_SIZE = 1_000_000  # 1M characters
_MAX_NODE_COUNT = 10_000
_MAX_DEPTH = 20

_SCALAR_TYPES = (str, bool, int, float, datetime, date, type(None))

_SYNTAX_SUGGESTION = (
    "Check YAML syntax around line {line}. Common issues: unquoted colons, "
    "incorrect indentation, missing quotes around strings with special characters."
)
_GENERIC_SUGGESTION = "Ensure the content is valid YAML format between --- delimiters."
_DISALLOWED_SUGGESTION = (
    "Front-matter may only contain strings, numbers, booleans, null, dates, "
    "lists and mappings. Remove custom '!' tags."
)
_ANCHOR_SUGGESTION = (
    "Anchors (&name) and aliases (*name) are not supported in front-matter. "
    "Write each value out in full."
)


class YAMLSafetyError(Exception):
    """Raised when front-matter violates a safety constraint.

    Distinct from syntax errors: these indicate hostile or runaway input
    (disallowed tags, anchors, excessive nesting, oversized documents).
    """

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        super().__init__(message)
        self.line = line
        self.column = column


class _AnchorError(YAMLSafetyError):
    """Raised for an anchor or alias node."""


class _FrontMatterConstructor(SafeConstructor):
    """Safe constructor that keeps impossible dates as their source text.

    An unquoted ``2025-02-30`` matches the timestamp pattern but names no real
    day; returning the string lets the ``last_modified`` rule report it.
    """

    def construct_yaml_timestamp(self, node: Any, values: Any = None) -> Any:
        try:
            return super().construct_yaml_timestamp(node, values)
        except ValueError:
            return self.construct_scalar(node)


_FrontMatterConstructor.add_constructor(
    "tag:yaml.org,2002:timestamp", _FrontMatterConstructor.construct_yaml_timestamp
)


class SafeMetadataParser:
    """Parses a front-matter block into a :class:`ParsedDocument`.

    Uses ruamel.yaml's safe constructor, which never builds application
    objects, then walks the result against an explicit allow-list of value
    types.  Every failure becomes a single :class:`ParseError`; nothing is
    raised to the caller for textual input.

    Safe to share between threads: each call gets its own ruamel loader,
    since a ``YAML`` instance keeps scanner state between loads.
    """

    def __init__(self, line_mapper: LineMapper | None = None) -> None:
        self._line_mapper = line_mapper or LineMapper()

    @staticmethod
    def _new_yaml() -> YAML:
        yaml = YAML(typ="safe", pure=True)
        yaml.Constructor = _FrontMatterConstructor
        # Duplicate keys keep their first value, matching the line map.
        yaml.allow_duplicate_keys = True
        return yaml

    # -- safety checks -------------------------------------------------------

    @staticmethod
    def _check_yaml_safety(content: str) -> None:
        if len(content) > _MAX_DOCUMENT_SIZE:
            raise YAMLSafetyError(
                f"front-matter exceeds maximum size "
                f"({len(content):,} chars > {_MAX_DOCUMENT_SIZE:,} limit)"
            )

    def _check_anchors(self, content: str) -> None:
        """Reject real anchors and aliases; an ``&`` inside a scalar or comment is fine."""
        for event in self._new_yaml().parse(content):
            if isinstance(event, NodeEvent) and event.anchor is not None:
                mark = event.start_mark
                kind = "alias" if isinstance(event, AliasEvent) else "anchor"
                raise _AnchorError(
                    f"YAML {kind} '{event.anchor}' is not supported in front-matter",
                    line=mark.line + 1 if mark is not None else None,
                    column=mark.column + 1 if mark is not None else None,
                )

    def _restrict(self, data: Any) -> Any:
        """Return a plain copy of *data*, rejecting anything off the allow-list."""
        count = 0

        def _walk(node: Any, depth: int) -> Any:
            nonlocal count
            count += 1
            if count > _MAX_NODE_COUNT:
                raise YAMLSafetyError(f"front-matter exceeds maximum node count ({_MAX_NODE_COUNT:,})")
            if depth > _MAX_DEPTH:
                raise YAMLSafetyError(f"front-matter exceeds maximum nesting depth ({_MAX_DEPTH})")
            if isinstance(node, _SCALAR_TYPES):
                return node
            if isinstance(node, dict):
                return {str(k): _walk(v, depth + 1) for k, v in node.items()}
            if isinstance(node, list):
                return [_walk(item, depth + 1) for item in node]
            raise YAMLSafetyError(f"disallowed value of type '{type(node).__name__}' in front-matter")

        return _walk(data, 0)

    # -- public API ----------------------------------------------------------

    def parse(self, raw_text: str | None) -> ParsedDocument:
        """Parse *raw_text*; empty or whitespace-only input yields ``Absent``."""
        if raw_text is None or not raw_text.strip():
            return ParsedDocument()

        try:
            self._check_yaml_safety(raw_text)
            self._check_anchors(raw_text)
            data = self._restrict(self._new_yaml().load(raw_text))
        except YAMLSafetyError as exc:
            logger.warning("rejected front-matter: %s", exc)
            return self._failed(
                ParseError(
                    message=f"Unsafe YAML in front-matter: {exc}",
                    line=exc.line,
                    column=exc.column,
                    suggestion=(
                        _ANCHOR_SUGGESTION if isinstance(exc, _AnchorError) else _DISALLOWED_SUGGESTION
                    ),
                )
            )
        except ConstructorError as exc:
            logger.warning("rejected front-matter tag: %s", exc.problem)
            line, column = _mark_position(exc)
            return self._failed(
                ParseError(
                    message=f"Unsafe YAML in front-matter: {_describe(exc)}",
                    line=line,
                    column=column,
                    suggestion=_DISALLOWED_SUGGESTION,
                )
            )
        except YAMLError as exc:
            line, column = _mark_position(exc)
            logger.debug("front-matter syntax error at line %s: %s", line, exc)
            return self._failed(
                ParseError(
                    message=f"YAML syntax error: {_describe(exc)}",
                    line=line,
                    column=column,
                    suggestion=_SYNTAX_SUGGESTION.format(line=line if line is not None else "?"),
                )
            )
        except Exception as exc:
            logger.debug("front-matter load failed", exc_info=True)
            return self._failed(
                ParseError(
                    message=f"YAML parsing failed: {exc}",
                    suggestion=_GENERIC_SUGGESTION,
                )
            )

        value = _wrap(data)
        if isinstance(value, MappingValue):
            line_map = self._line_mapper.build(raw_text, value.entries)
            return ParsedDocument(value=value, line_map=line_map)
        return ParsedDocument(value=value)

    @staticmethod
    def _failed(error: ParseError) -> ParsedDocument:
        return ParsedDocument(value=ABSENT, line_map={}, parse_errors=[error])


def _wrap(data: Any) -> MetadataValue:
    if data is None:
        return ABSENT
    if isinstance(data, dict):
        return MappingValue(data)
    if isinstance(data, list):
        return SequenceValue(data)
    return ScalarValue(data)


def _mark_position(exc: YAMLError) -> tuple[int | None, int | None]:
    """1-indexed (line, column) from a ruamel diagnostic, if it carries one."""
    if isinstance(exc, MarkedYAMLError):
        mark = exc.problem_mark or exc.context_mark
        if mark is not None:
            return mark.line + 1, mark.column + 1
    return None, None


def _describe(exc: YAMLError) -> str:
    if isinstance(exc, MarkedYAMLError):
        parts = [p for p in (exc.context, exc.problem) if p]
        if parts:
            return ", ".join(parts)
    return str(exc).strip()
