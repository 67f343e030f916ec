"""Rendering of validation errors for terminals and tools."""

from tenetlint.report.renderer import DiagnosticRenderer

__all__ = ["DiagnosticRenderer"]
