"""Run-scoped state and the batch runner."""

from tenetlint.service.collector import ErrorCollector
from tenetlint.service.discovery import (
    DocumentSource,
    discover_documents,
    kind_for_path,
    load_expected_version,
    read_sources,
)
from tenetlint.service.errors import ConfigurationError
from tenetlint.parser.registry import IdRegistry
from tenetlint.service.runner import RunResult, ValidationRunner

__all__ = [
    "ConfigurationError",
    "DocumentSource",
    "ErrorCollector",
    "IdRegistry",
    "RunResult",
    "ValidationRunner",
    "discover_documents",
    "kind_for_path",
    "load_expected_version",
    "read_sources",
]
