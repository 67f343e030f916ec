"""Structured error models with front-matter source positions."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class ErrorKind(StrEnum):
    YAML_SYNTAX = "yaml_syntax"
    MISSING_FIELD = "missing_field"
    INVALID_FORMAT = "invalid_format"
    DUPLICATE_ID = "duplicate_id"
    NONEXISTENT_REFERENCE = "nonexistent_reference"
    UNKNOWN_KEY = "unknown_key"
    VERSION_MISMATCH = "version_mismatch"


class ParseError(BaseModel):
    """Why a front-matter block could not be turned into a value."""

    model_config = ConfigDict(frozen=True)

    message: str
    line: int | None = None
    column: int | None = None
    suggestion: str | None = None


class ValidationError(BaseModel):
    """A single metadata violation, pinned to a file and (when known) a line."""

    model_config = ConfigDict(frozen=True)

    file: str
    kind: ErrorKind
    message: str
    line: int | None = None
    field: str | None = None
    suggestion: str | None = None
