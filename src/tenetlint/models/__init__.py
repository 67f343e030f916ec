"""Pydantic and dataclass models for tenetlint."""

from tenetlint.models.document import (
    ABSENT,
    Absent,
    DocumentKind,
    MappingValue,
    MetadataValue,
    ParsedDocument,
    ScalarValue,
    SequenceValue,
)
from tenetlint.models.errors import ErrorKind, ParseError, ValidationError

__all__ = [
    "ABSENT",
    "Absent",
    "DocumentKind",
    "ErrorKind",
    "MappingValue",
    "MetadataValue",
    "ParseError",
    "ParsedDocument",
    "ScalarValue",
    "SequenceValue",
    "ValidationError",
]
