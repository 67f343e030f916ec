"""Front-matter parsing with line fidelity, and the rules run against it."""

from tenetlint.parser.frontmatter import extract_front_matter
from tenetlint.parser.line_map import LineMapper
from tenetlint.parser.loader import SafeMetadataParser, YAMLSafetyError
from tenetlint.parser.registry import IdRegistry
from tenetlint.parser.validator import (
    SCHEMAS,
    DocumentSchema,
    ValidationContext,
    ValidationRuleEngine,
)

__all__ = [
    "SCHEMAS",
    "DocumentSchema",
    "IdRegistry",
    "LineMapper",
    "SafeMetadataParser",
    "ValidationContext",
    "ValidationRuleEngine",
    "YAMLSafetyError",
    "extract_front_matter",
]
