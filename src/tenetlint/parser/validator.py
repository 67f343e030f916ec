"""Front-matter rules: required keys, field formats, id uniqueness, tenet references."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from tenetlint.models.document import (
    Absent,
    DocumentKind,
    MappingValue,
    ParsedDocument,
)
from tenetlint.models.errors import ErrorKind, ValidationError
from tenetlint.parser.registry import IdRegistry

_SLUG_RE = re.compile(r"[a-z0-9-]+")
_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_SEMVER_RE = re.compile(r"[0-9]+\.[0-9]+\.[0-9]+")


# ---------------------------------------------------------------------------
# Field predicates
# ---------------------------------------------------------------------------


def is_slug(value: Any) -> bool:
    return isinstance(value, str) and _SLUG_RE.fullmatch(value) is not None


def is_iso_date(value: Any) -> bool:
    """A native date/datetime, or a ``YYYY-MM-DD`` string naming a real day."""
    if isinstance(value, date):
        return True
    if not isinstance(value, str) or _ISO_DATE_RE.fullmatch(value) is None:
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_semver(value: Any) -> bool:
    return isinstance(value, str) and _SEMVER_RE.fullmatch(value) is not None


def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value != ""


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DocumentSchema:
    """Keys a document kind must declare, and the extra keys it may declare."""

    required: tuple[str, ...]
    optional: tuple[str, ...] = ()

    @property
    def allowed(self) -> tuple[str, ...]:
        return self.required + self.optional


SCHEMAS: dict[DocumentKind, DocumentSchema] = {
    DocumentKind.TENET: DocumentSchema(required=("id", "last_modified", "version")),
    DocumentKind.BINDING: DocumentSchema(
        required=("id", "last_modified", "derived_from", "enforced_by", "version"),
    ),
}


@dataclass
class ValidationContext:
    """Run-wide inputs shared by every file's validation."""

    expected_version: str
    known_tenet_ids: frozenset[str] = frozenset()
    id_registry: IdRegistry = field(default_factory=IdRegistry)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class ValidationRuleEngine:
    """Runs every rule against one parsed document.

    Rules do not short-circuit each other, so one file can report several
    problems at once.  The only exception is a document that did not parse
    into a mapping: it reports that and nothing else.
    """

    def __init__(self, schemas: dict[DocumentKind, DocumentSchema] | None = None) -> None:
        self._schemas = schemas or SCHEMAS

    def schema_for(self, kind: DocumentKind | str) -> DocumentSchema:
        return self._schemas[DocumentKind(kind)]

    def validate(
        self,
        doc: ParsedDocument,
        kind: DocumentKind | str,
        ctx: ValidationContext,
        file: str,
    ) -> list[ValidationError]:
        kind = DocumentKind(kind)
        schema = self.schema_for(kind)

        if doc.parse_errors:
            return [
                ValidationError(
                    file=file,
                    kind=ErrorKind.YAML_SYNTAX,
                    message=pe.message,
                    line=pe.line,
                    suggestion=pe.suggestion,
                )
                for pe in doc.parse_errors
            ]
        if not isinstance(doc.value, MappingValue):
            return [self._not_a_mapping(doc, file, schema, kind)]

        checks: list[Callable[..., list[ValidationError]]] = [
            self._check_required_keys,
            self._check_id_format,
            self._check_last_modified,
            self._check_version,
        ]
        if kind is DocumentKind.BINDING:
            checks += [self._check_derived_from, self._check_enforced_by]
        checks += [self._check_id_unique]
        if kind is DocumentKind.BINDING:
            checks += [self._check_tenet_reference]
        checks += [self._check_unknown_keys]

        errors: list[ValidationError] = []
        for check in checks:
            errors.extend(check(doc, file, schema, kind, ctx))
        return errors

    # -- helpers -------------------------------------------------------------

    @staticmethod
    def _error(
        doc: ParsedDocument,
        file: str,
        kind: ErrorKind,
        message: str,
        field: str | None = None,
        suggestion: str | None = None,
    ) -> ValidationError:
        line = doc.line_map.get(field) if field is not None else None
        return ValidationError(
            file=file, kind=kind, message=message, line=line, field=field, suggestion=suggestion
        )

    @staticmethod
    def _not_a_mapping(
        doc: ParsedDocument, file: str, schema: DocumentSchema, kind: DocumentKind
    ) -> ValidationError:
        if isinstance(doc.value, Absent):
            return ValidationError(
                file=file,
                kind=ErrorKind.MISSING_FIELD,
                message="Empty YAML in front-matter",
                suggestion=f"Front-matter for a {kind} must include: {', '.join(schema.required)}.",
            )
        return ValidationError(
            file=file,
            kind=ErrorKind.YAML_SYNTAX,
            message="YAML front-matter must be a mapping of keys to values",
            line=1,
            suggestion="Write front-matter as 'key: value' lines, e.g. id: example-id",
        )

    # -- rules ---------------------------------------------------------------

    def _check_required_keys(
        self, doc: ParsedDocument, file: str, schema: DocumentSchema, kind: DocumentKind, ctx: ValidationContext
    ) -> list[ValidationError]:
        assert isinstance(doc.value, MappingValue)
        return [
            self._error(
                doc,
                file,
                ErrorKind.MISSING_FIELD,
                f"Missing required key '{key}' in YAML front-matter",
                field=key,
                suggestion=f"A {kind} must include: {', '.join(schema.required)}.",
            )
            for key in schema.required
            if key not in doc.value
        ]

    def _check_id_format(
        self, doc: ParsedDocument, file: str, schema: DocumentSchema, kind: DocumentKind, ctx: ValidationContext
    ) -> list[ValidationError]:
        assert isinstance(doc.value, MappingValue)
        if "id" not in doc.value or is_slug(doc.value.get("id")):
            return []
        return [
            self._error(
                doc,
                file,
                ErrorKind.INVALID_FORMAT,
                f"Invalid ID format '{doc.value.get('id')}' in YAML front-matter",
                field="id",
                suggestion="ID must contain only lowercase letters, numbers, and hyphens (e.g., 'example-id').",
            )
        ]

    def _check_last_modified(
        self, doc: ParsedDocument, file: str, schema: DocumentSchema, kind: DocumentKind, ctx: ValidationContext
    ) -> list[ValidationError]:
        assert isinstance(doc.value, MappingValue)
        if "last_modified" not in doc.value or is_iso_date(doc.value.get("last_modified")):
            return []
        return [
            self._error(
                doc,
                file,
                ErrorKind.INVALID_FORMAT,
                "Invalid date format in 'last_modified' field",
                field="last_modified",
                suggestion=(
                    "Date must be a real calendar date in ISO format (YYYY-MM-DD), "
                    "enclosed in quotes. Example: last_modified: '2025-05-09'"
                ),
            )
        ]

    def _check_version(
        self, doc: ParsedDocument, file: str, schema: DocumentSchema, kind: DocumentKind, ctx: ValidationContext
    ) -> list[ValidationError]:
        assert isinstance(doc.value, MappingValue)
        if "version" not in doc.value:
            return []
        version = doc.value.get("version")
        expected = ctx.expected_version
        if not is_semver(version):
            return [
                self._error(
                    doc,
                    file,
                    ErrorKind.INVALID_FORMAT,
                    f"Invalid version format '{version}' in YAML front-matter",
                    field="version",
                    suggestion=f"Version must be a quoted semantic version. Expected: version: '{expected}'",
                )
            ]
        if version != expected:
            return [
                self._error(
                    doc,
                    file,
                    ErrorKind.VERSION_MISMATCH,
                    "Version mismatch in YAML front-matter",
                    field="version",
                    suggestion=(
                        f"Document version '{version}' does not match VERSION file "
                        f"'{expected}'. Expected: version: '{expected}'"
                    ),
                )
            ]
        return []

    def _check_derived_from(
        self, doc: ParsedDocument, file: str, schema: DocumentSchema, kind: DocumentKind, ctx: ValidationContext
    ) -> list[ValidationError]:
        assert isinstance(doc.value, MappingValue)
        if "derived_from" not in doc.value or is_slug(doc.value.get("derived_from")):
            return []
        return [
            self._error(
                doc,
                file,
                ErrorKind.INVALID_FORMAT,
                "Invalid format for 'derived_from' in YAML front-matter",
                field="derived_from",
                suggestion=(
                    "The 'derived_from' field must be a string containing only "
                    "lowercase letters, numbers, and hyphens."
                ),
            )
        ]

    def _check_enforced_by(
        self, doc: ParsedDocument, file: str, schema: DocumentSchema, kind: DocumentKind, ctx: ValidationContext
    ) -> list[ValidationError]:
        assert isinstance(doc.value, MappingValue)
        if "enforced_by" not in doc.value or is_non_empty_string(doc.value.get("enforced_by")):
            return []
        return [
            self._error(
                doc,
                file,
                ErrorKind.INVALID_FORMAT,
                "Invalid format for 'enforced_by' in YAML front-matter",
                field="enforced_by",
                suggestion="The 'enforced_by' field must be a non-empty string.",
            )
        ]

    def _check_id_unique(
        self, doc: ParsedDocument, file: str, schema: DocumentSchema, kind: DocumentKind, ctx: ValidationContext
    ) -> list[ValidationError]:
        assert isinstance(doc.value, MappingValue)
        doc_id = doc.value.get("id")
        if not isinstance(doc_id, str):
            return []
        owner = ctx.id_registry.claim(doc_id, file)
        if owner is None:
            return []
        return [
            self._error(
                doc,
                file,
                ErrorKind.DUPLICATE_ID,
                f"Duplicate ID '{doc_id}' in YAML front-matter (already used in {owner})",
                field="id",
                suggestion="Each document must have a unique ID. Choose a different ID value.",
            )
        ]

    def _check_tenet_reference(
        self, doc: ParsedDocument, file: str, schema: DocumentSchema, kind: DocumentKind, ctx: ValidationContext
    ) -> list[ValidationError]:
        assert isinstance(doc.value, MappingValue)
        if "derived_from" not in doc.value:
            return []
        derived_from = doc.value.get("derived_from")
        if isinstance(derived_from, str) and derived_from in ctx.known_tenet_ids:
            return []
        return [
            self._error(
                doc,
                file,
                ErrorKind.NONEXISTENT_REFERENCE,
                f"References non-existent tenet '{derived_from}'",
                field="derived_from",
                suggestion=(
                    "The 'derived_from' field must reference an existing tenet ID. "
                    "Check docs/tenets/ for available tenets."
                ),
            )
        ]

    def _check_unknown_keys(
        self, doc: ParsedDocument, file: str, schema: DocumentSchema, kind: DocumentKind, ctx: ValidationContext
    ) -> list[ValidationError]:
        assert isinstance(doc.value, MappingValue)
        allowed = schema.allowed
        return [
            self._error(
                doc,
                file,
                ErrorKind.UNKNOWN_KEY,
                f"Unknown key '{key}' in YAML front-matter",
                field=key,
                suggestion=f"Only these keys are allowed: {', '.join(allowed)}. Remove unknown keys.",
            )
            for key in doc.value.keys()
            if key not in allowed
        ]
