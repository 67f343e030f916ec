"""Run-level failures that are not document violations."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Raised when a run cannot start, e.g. the VERSION file is missing."""
