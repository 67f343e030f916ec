"""Shared test fixtures for tenetlint."""

from __future__ import annotations

from pathlib import Path

import pytest

from tenetlint.parser.loader import SafeMetadataParser
from tenetlint.parser.registry import IdRegistry
from tenetlint.parser.validator import ValidationContext, ValidationRuleEngine
from tenetlint.service.collector import ErrorCollector

EXPECTED_VERSION = "1.0.0"

VALID_BINDING_YAML = """\
id: x
last_modified: '2025-05-10'
derived_from: y
enforced_by: 'z'
version: '1.0.0'"""

VALID_TENET_YAML = """\
id: simplicity
last_modified: '2025-05-10'
version: '1.0.0'
"""


@pytest.fixture
def parser() -> SafeMetadataParser:
    return SafeMetadataParser()


@pytest.fixture
def engine() -> ValidationRuleEngine:
    return ValidationRuleEngine()


@pytest.fixture
def collector() -> ErrorCollector:
    return ErrorCollector()


@pytest.fixture
def registry() -> IdRegistry:
    return IdRegistry()


@pytest.fixture
def ctx(registry: IdRegistry) -> ValidationContext:
    """Context expecting version 1.0.0 with tenets 'y' and 'simplicity' known."""
    return ValidationContext(
        expected_version=EXPECTED_VERSION,
        known_tenet_ids=frozenset({"y", "simplicity"}),
        id_registry=registry,
    )


def write_doc(root: Path, relative: str, front_matter: str | None, body: str = "# Title\n") -> Path:
    """Write a markdown document under *root*, with front-matter unless ``None``."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    if front_matter is None:
        path.write_text(body, encoding="utf-8")
    else:
        path.write_text(f"---\n{front_matter.rstrip()}\n---\n\n{body}", encoding="utf-8")
    return path


@pytest.fixture
def docs_tree(tmp_path: Path) -> Path:
    """A small, valid docs/ tree with two tenets and two bindings."""
    docs = tmp_path / "docs"
    write_doc(docs, "tenets/simplicity.md", VALID_TENET_YAML)
    write_doc(
        docs,
        "tenets/testability.md",
        "id: testability\nlast_modified: '2025-05-10'\nversion: '1.0.0'\n",
    )
    write_doc(docs, "tenets/00-index.md", None, body="# Tenets\n")
    write_doc(
        docs,
        "bindings/core/no-globals.md",
        "id: no-globals\nlast_modified: '2025-05-10'\nderived_from: simplicity\n"
        "enforced_by: 'code review'\nversion: '1.0.0'\n",
    )
    write_doc(
        docs,
        "bindings/categories/python/type-hints.md",
        "id: type-hints\nlast_modified: 2025-05-11\nderived_from: testability\n"
        "enforced_by: 'mypy'\nversion: '1.0.0'\n",
    )
    (tmp_path / "VERSION").write_text("1.0.0\n", encoding="utf-8")
    return docs
