"""Parsed front-matter values.

A parsed block is exactly one of :class:`Absent`, :class:`MappingValue`,
:class:`SequenceValue` or :class:`ScalarValue`.  Consumers branch on the
variant with ``isinstance`` rather than probing for ``None``/dict/list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from typing import Any, Union

from tenetlint.models.errors import ParseError

Scalar = Union[str, int, float, bool, None, date, datetime]


class DocumentKind(StrEnum):
    TENET = "tenet"
    BINDING = "binding"


@dataclass(frozen=True)
class Absent:
    """No value: the block was empty or could not be parsed."""


@dataclass(frozen=True)
class MappingValue:
    entries: dict[str, Any]

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def get(self, key: str, default: Any = None) -> Any:
        return self.entries.get(key, default)

    def keys(self) -> list[str]:
        return list(self.entries)


@dataclass(frozen=True)
class SequenceValue:
    items: list[Any]


@dataclass(frozen=True)
class ScalarValue:
    value: Scalar


MetadataValue = Union[Absent, MappingValue, SequenceValue, ScalarValue]

ABSENT = Absent()


@dataclass
class ParsedDocument:
    """Result of parsing one front-matter block."""

    value: MetadataValue = ABSENT
    line_map: dict[str, int] = field(default_factory=dict)
    parse_errors: list[ParseError] = field(default_factory=list)
