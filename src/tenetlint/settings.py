"""Shared settings loaded from environment / .env file."""

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration for a tenetlint run.

    Values are read from ``TENETLINT_``-prefixed environment variables and
    from a ``.env`` file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="TENETLINT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    log_level: str = "INFO"

    # Document layout
    docs_root: str = "docs"
    version_file: str = "VERSION"

    # Execution
    max_workers: int = 1  # >1 parses files on a thread pool

    # Report
    context_lines: int = 2
    # Also honours the conventional NO_COLOR variable.
    no_color: bool = Field(
        default=False,
        validation_alias=AliasChoices("no_color", "tenetlint_no_color"),
    )
    output_format: str = "text"  # "text" or "json"
