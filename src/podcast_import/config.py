"""
Configuration management for the podcast importer.

Provides centralized configuration using Pydantic for validation and
environment variable support. Values can also come from a ``.env`` file
in the working directory.
"""

from pathlib import Path
from typing import Any, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Defaults mirror the layout of a static site repository where the importer
# lives in a sibling ``scripts`` directory.
SOURCES_FILE = Path("sources-podcasts.json")
OUTPUT_FILE = Path("data") / "output.json"
CONTENT_DIR = Path("..") / "src" / "content" / "podcast"


class Config(BaseSettings):
    """
    Application configuration with environment variable support.

    Configuration can be provided via:
    1. Environment variables (prefixed with PODCAST_IMPORT_)
    2. .env file
    3. Default values

    Example:
        export PODCAST_IMPORT_SOURCES_FILE="config/sources.yaml"
        export PODCAST_IMPORT_REQUEST_TIMEOUT=30
    """

    model_config = SettingsConfigDict(
        env_prefix="PODCAST_IMPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Inputs and outputs
    sources_file: Path = Field(
        default=SOURCES_FILE,
        description="Source descriptor list (JSON, or YAML by suffix)"
    )
    output_file: Path = Field(
        default=OUTPUT_FILE,
        description="Aggregate episode collection, read at start and rewritten at end"
    )
    content_dir: Path = Field(
        default=CONTENT_DIR,
        description="Root directory for generated content documents"
    )
    content_filename: str = Field(
        default="index.mdx",
        description="File name of the content document inside each episode folder"
    )

    # Network
    show_api_base: str = Field(
        default="https://taddy.org/podcasts",
        description="Base URL used to list the episodes of a named show"
    )
    request_timeout: float = Field(
        default=15.0,
        gt=0,
        description="Timeout in seconds for every network call"
    )

    # Aggregation
    dedupe: bool = Field(
        default=True,
        description="Drop incoming episodes already present in the collection"
    )

    # Logging
    log_file: Optional[Path] = Field(
        default=None,
        description="Optional log file written alongside console output"
    )


def get_config(**overrides: Any) -> Config:
    """
    Get the application configuration instance.

    Merges settings from environment variables and the .env file.
    Keyword overrides that are ``None`` are ignored, so CLI flags that
    were not given fall through to the environment.

    Returns:
        Config: Application configuration

    Example:
        >>> config = get_config(output_file=Path("/tmp/episodes.json"))
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    return Config(**values)
