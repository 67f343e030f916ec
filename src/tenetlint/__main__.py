"""Validate the docs tree using settings from environment / .env file."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from tenetlint import __version__
from tenetlint.models.document import DocumentKind
from tenetlint.parser.validator import ValidationContext
from tenetlint.report.renderer import DiagnosticRenderer
from tenetlint.service.discovery import discover_documents, load_expected_version, read_sources
from tenetlint.service.errors import ConfigurationError
from tenetlint.service.runner import ValidationRunner
from tenetlint.settings import Settings

logger = logging.getLogger("tenetlint")


def main(settings: Settings | None = None) -> int:
    """Run one validation pass; returns 1 when any document has errors."""
    settings = settings or Settings()

    logging.basicConfig(level=settings.log_level.upper())
    logger.info("tenetlint v%s (docs_root=%s)", __version__, settings.docs_root)

    try:
        expected_version = load_expected_version(settings.version_file)
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return 1

    paths = discover_documents(settings.docs_root)
    ctx = ValidationContext(
        expected_version=expected_version,
        known_tenet_ids=frozenset(
            Path(path).stem for path, kind in paths if kind is DocumentKind.TENET
        ),
    )
    runner = ValidationRunner(ctx, max_workers=settings.max_workers)
    result = runner.run(read_sources(paths))

    use_colors = not settings.no_color and click.get_text_stream("stdout").isatty()
    renderer = DiagnosticRenderer(use_colors=use_colors, context_lines=settings.context_lines)
    errors = result.collector.errors()
    if settings.output_format == "json":
        click.echo(renderer.render_json(errors))
    elif errors:
        click.echo(renderer.render(errors, result.file_contents), color=use_colors)
    else:
        success = f"All {len(paths)} files validated successfully!"
        click.echo(click.style(success, fg="green"), color=use_colors)
    return 1 if result.has_errors else 0


if __name__ == "__main__":
    sys.exit(main())
