"""The fixed docs/ layout that tenets and bindings live in."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from tenetlint.models.document import DocumentKind
from tenetlint.parser.frontmatter import extract_front_matter
from tenetlint.service.errors import ConfigurationError

logger = logging.getLogger("tenetlint.discovery")

_INDEX_FILE = "00-index.md"


@dataclass(frozen=True)
class DocumentSource:
    """One document handed to the runner.

    ``front_matter`` is ``None`` when the document has no front-matter block.
    ``line_offset`` is added to block-relative line numbers so they point
    into ``content``.
    """

    path: str
    kind: DocumentKind
    front_matter: str | None
    content: str | None = None
    line_offset: int = 0

    @classmethod
    def from_markdown(cls, path: str | Path, kind: DocumentKind, content: str) -> DocumentSource:
        return cls(
            path=str(path),
            kind=kind,
            front_matter=extract_front_matter(content),
            content=content,
            line_offset=1,  # opening "---"
        )


def kind_for_path(path: str | Path) -> DocumentKind:
    """Infer the document kind from a ``/tenets/`` or ``/bindings/`` path segment."""
    parts = Path(path).parts
    if "tenets" in parts:
        return DocumentKind.TENET
    if "bindings" in parts:
        return DocumentKind.BINDING
    raise ValueError(f"Unable to determine document kind from path '{path}'")


def load_expected_version(path: str | Path) -> str:
    version_file = Path(path)
    if not version_file.is_file():
        raise ConfigurationError(f"VERSION file not found: {version_file}")
    version = version_file.read_text(encoding="utf-8").strip()
    if not version:
        raise ConfigurationError(f"VERSION file is empty: {version_file}")
    return version


def discover_documents(docs_root: str | Path) -> list[tuple[Path, DocumentKind]]:
    """Tenets, core bindings and category bindings under *docs_root*, sorted by path."""
    root = Path(docs_root)
    found: list[tuple[Path, DocumentKind]] = []

    for pattern in ("tenets/*.md", "bindings/core/*.md", "bindings/categories/*/*.md"):
        for path in root.glob(pattern):
            if path.name != _INDEX_FILE:
                # Relative, so directories above docs_root can't sway the kind.
                found.append((path, kind_for_path(path.relative_to(root))))

    misplaced = sorted(p for p in root.glob("bindings/*.md") if p.name != _INDEX_FILE)
    if misplaced:
        logger.warning(
            "%d binding file(s) directly in %s; move them to bindings/core/ or "
            "bindings/categories/<category>/: %s",
            len(misplaced),
            root / "bindings",
            ", ".join(str(p) for p in misplaced),
        )

    return sorted(found, key=lambda item: str(item[0]))


def read_sources(paths: list[tuple[Path, DocumentKind]]) -> list[DocumentSource]:
    return [
        DocumentSource.from_markdown(path, kind, path.read_text(encoding="utf-8", errors="replace"))
        for path, kind in paths
    ]
