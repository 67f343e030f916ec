"""Thread-safe, append-only aggregation of validation errors."""

from __future__ import annotations

import threading
from collections.abc import Iterable

from tenetlint.models.errors import ErrorKind, ValidationError


class ErrorCollector:
    """Collects :class:`ValidationError` records in insertion order.

    Records are frozen, and :meth:`errors` hands out a fresh list on every
    call, so callers can never reach the internal state.  Appends from
    several threads are serialised by a lock; their relative order is
    whatever order the lock was acquired in.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._errors: list[ValidationError] = []

    def add_error(
        self,
        *,
        file: str,
        kind: ErrorKind,
        message: str,
        line: int | None = None,
        field: str | None = None,
        suggestion: str | None = None,
    ) -> ValidationError:
        """Record one error.  ``file``, ``kind`` and ``message`` are required."""
        error = ValidationError(
            file=str(file),
            kind=kind,
            message=message,
            line=line,
            field=field,
            suggestion=suggestion,
        )
        with self._lock:
            self._errors.append(error)
        return error

    def extend(self, errors: Iterable[ValidationError]) -> None:
        batch = list(errors)
        with self._lock:
            self._errors.extend(batch)

    def errors(self) -> list[ValidationError]:
        with self._lock:
            return list(self._errors)

    def count(self) -> int:
        with self._lock:
            return len(self._errors)

    def any(self) -> bool:
        return self.count() > 0

    def files(self) -> list[str]:
        """Distinct files with errors, in first-seen order."""
        with self._lock:
            return list(dict.fromkeys(e.file for e in self._errors))

    def clear(self) -> None:
        with self._lock:
            self._errors.clear()
