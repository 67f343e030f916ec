"""Compiler-style rendering of collected validation errors."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path

import click

from tenetlint.models.errors import ValidationError

_MAX_LINE_WIDTH = 80


class DiagnosticRenderer:
    """Turns :class:`ValidationError` records into a readable report.

    Errors are rendered in the order given.  When ``file_contents`` holds the
    text of an error's file and the error has a line, a short excerpt of the
    surrounding lines is shown with the offending line marked.

    Colour is off unless ``use_colors`` is set; the driver decides from the
    terminal and settings.
    """

    def __init__(self, use_colors: bool = False, context_lines: int = 2) -> None:
        self._use_colors = use_colors
        self._context_lines = context_lines

    def _style(self, text: str, **styles: object) -> str:
        return click.style(text, **styles) if self._use_colors else text

    # -- public API ----------------------------------------------------------

    def render(
        self,
        errors: Sequence[ValidationError],
        file_contents: Mapping[str | Path, str] | None = None,
    ) -> str:
        if not errors:
            return ""

        contents = {str(path): text for path, text in (file_contents or {}).items()}
        file_count = len({e.file for e in errors})
        error_word = "error" if len(errors) == 1 else "errors"
        file_word = "file" if file_count == 1 else "files"
        output = [
            self._style(
                f"Validation failed with {len(errors)} {error_word} in {file_count} {file_word}:",
                fg="red",
                bold=True,
            ),
            "",
        ]
        for error in errors:
            output.extend(self._format_error(error, contents.get(error.file)))
            output.append("")
        output.pop()
        return "\n".join(output)

    def render_json(self, errors: Sequence[ValidationError]) -> str:
        return json.dumps(
            {
                "valid": not errors,
                "error_count": len(errors),
                "errors": [e.model_dump(mode="json") for e in errors],
            },
            indent=2,
            ensure_ascii=False,
        )

    # -- formatting ----------------------------------------------------------

    def _format_error(self, error: ValidationError, content: object) -> list[str]:
        location = error.file if error.line is None else f"{error.file}:{error.line}"
        indicator = "✗" if self._use_colors else "[ERROR]"
        lines = [
            f"{self._style(indicator, fg='red')} {self._style(location, bold=True)} — {error.message}"
        ]
        if error.field:
            lines.append(self._style(f"    field '{error.field}'", fg="bright_black"))
        lines.append(self._style(f"    type: {error.kind.value}", fg="bright_black"))

        if error.line is not None and content is not None:
            snippet = self._format_context(error.line, content)
            if snippet:
                lines.append("")
                lines.extend(snippet)

        if error.suggestion:
            lines.append(self._style("    suggestion:", fg="cyan"))
            for text in error.suggestion.split("\n"):
                lines.append(self._style(f"      {text}", fg="cyan"))
        return lines

    def _format_context(self, error_line: int, content: object) -> list[str]:
        """Lines around *error_line* (1-indexed), or ``[]`` if they can't be shown."""
        if not isinstance(content, str) or not content:
            return []
        source = content.split("\n")
        if source and source[-1] == "":
            source.pop()
        index = error_line - 1
        if index < 0 or index >= len(source):
            return []

        start = max(0, index - self._context_lines)
        end = min(len(source) - 1, index + self._context_lines)
        width = max(3, len(str(end + 1)))

        lines = [self._style("    context:", fg="blue")]
        for i in range(start, end + 1):
            text = source[i].rstrip("\r")
            if len(text) > _MAX_LINE_WIDTH:
                text = text[: _MAX_LINE_WIDTH - 3] + "..."
            number = str(i + 1).rjust(width)
            if i == index:
                marker = "→" if self._use_colors else ">"
                lines.append(
                    f"      {self._style(number, fg='red')} {self._style(marker, fg='red')} "
                    f"{self._style(text, fg='red')}"
                )
            else:
                lines.append(
                    f"      {self._style(number, fg='bright_black')} │ {self._style(text, fg='bright_black')}"
                )
        return lines
