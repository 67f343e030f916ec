"""Batch validation: parse every document, run the rules, collect the errors."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from tenetlint.models.document import ParsedDocument
from tenetlint.models.errors import ErrorKind, ValidationError
from tenetlint.parser.loader import SafeMetadataParser
from tenetlint.parser.validator import ValidationContext, ValidationRuleEngine
from tenetlint.service.collector import ErrorCollector
from tenetlint.service.discovery import DocumentSource

logger = logging.getLogger("tenetlint.runner")

_NO_FRONT_MATTER_SUGGESTION = (
    "All {kind} files must begin with YAML front-matter between triple dashes. Example:\n"
    "  ---\n"
    "  id: example-id\n"
    "  last_modified: '2025-05-09'\n"
    "  ---"
)


@dataclass
class RunResult:
    """Everything a driver needs once a run has finished."""

    collector: ErrorCollector
    documents: dict[str, ParsedDocument] = field(default_factory=dict)
    file_contents: dict[str, str] = field(default_factory=dict)

    @property
    def has_errors(self) -> bool:
        return self.collector.any()


class ValidationRunner:
    """Validates a batch of documents against one :class:`ValidationContext`.

    Parsing is pure and may fan out over a thread pool.  Rules are applied in
    sorted path order afterwards, so the first file (by path) to declare an
    id is always its owner, whatever the worker count.
    """

    def __init__(
        self,
        ctx: ValidationContext,
        collector: ErrorCollector | None = None,
        max_workers: int = 1,
    ) -> None:
        self._ctx = ctx
        self._collector = collector if collector is not None else ErrorCollector()
        self._max_workers = max(1, max_workers)

        # Stateless, safe to share between workers.
        self._parser = SafeMetadataParser()
        self._engine = ValidationRuleEngine()

    @property
    def collector(self) -> ErrorCollector:
        return self._collector

    # -- per-file steps ------------------------------------------------------

    def _parse(self, source: DocumentSource) -> ParsedDocument | None:
        if source.front_matter is None:
            return None
        return self._parser.parse(source.front_matter)

    def _check(self, source: DocumentSource, doc: ParsedDocument | None) -> list[ValidationError]:
        if doc is None:
            return [
                ValidationError(
                    file=source.path,
                    kind=ErrorKind.MISSING_FIELD,
                    message="No front-matter found",
                    suggestion=_NO_FRONT_MATTER_SUGGESTION.format(kind=source.kind),
                )
            ]
        errors = self._engine.validate(doc, source.kind, self._ctx, source.path)
        if source.line_offset:
            errors = [
                e.model_copy(update={"line": e.line + source.line_offset}) if e.line is not None else e
                for e in errors
            ]
        return errors

    def validate_source(self, source: DocumentSource) -> tuple[ParsedDocument | None, list[ValidationError]]:
        doc = self._parse(source)
        return doc, self._check(source, doc)

    # -- batch ---------------------------------------------------------------

    def _safe_parse(self, source: DocumentSource) -> ParsedDocument | None | Exception:
        try:
            return self._parse(source)
        except Exception as exc:
            logger.exception("failed to parse %s", source.path)
            return exc

    def run(self, sources: list[DocumentSource]) -> RunResult:
        ordered = sorted(sources, key=lambda s: s.path)
        logger.info("validating %d document(s) with %d worker(s)", len(ordered), self._max_workers)

        if self._max_workers > 1:
            with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
                parsed = list(pool.map(self._safe_parse, ordered))
        else:
            parsed = [self._safe_parse(source) for source in ordered]

        result = RunResult(collector=self._collector)
        for source, doc in zip(ordered, parsed):
            if source.content is not None:
                result.file_contents[source.path] = source.content
            if isinstance(doc, Exception):
                self._collector.add_error(
                    file=source.path,
                    kind=ErrorKind.YAML_SYNTAX,
                    message=f"Failed to process front-matter: {doc}",
                )
                continue
            if doc is not None:
                result.documents[source.path] = doc
            try:
                errors = self._check(source, doc)
            except Exception as exc:
                logger.exception("failed to validate %s", source.path)
                self._collector.add_error(
                    file=source.path,
                    kind=ErrorKind.YAML_SYNTAX,
                    message=f"Failed to validate front-matter: {exc}",
                )
                continue
            if errors:
                logger.debug("%s: %d error(s)", source.path, len(errors))
            else:
                logger.debug("%s: ok", source.path)
            self._collector.extend(errors)

        logger.info(
            "validation finished: %d error(s) in %d file(s)",
            self._collector.count(),
            len(self._collector.files()),
        )
        return result
