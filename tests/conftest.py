"""
Shared test fixtures.

Provides pytest fixtures for common test resources including:
- Test configuration pointing at temporary paths
- A helper for writing source descriptor files
- Sample episode records
"""

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest

from podcast_import.config import Config


def make_record(
    title: str = "Episode 1 - Pilot",
    published_at: str = "2024-01-01T12:00:00Z",
    episode_url: str = "https://example.com/episodes/1",
    description: str = "First episode of the podcast.",
    privacy_status: str = "public",
    **extra: Any,
) -> Dict[str, Any]:
    """Build an episode record as the upstream service returns it."""
    record = {
        "title": title,
        "publishedAt": published_at,
        "episodeUrl": episode_url,
        "description": description,
        "privacyStatus": privacy_status,
    }
    record.update(extra)
    return record


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """
    Create test configuration with temporary paths.

    Returns:
        Config: Test configuration
    """
    return Config(
        sources_file=tmp_path / "sources-podcasts.json",
        output_file=tmp_path / "data" / "output.json",
        content_dir=tmp_path / "content" / "podcast",
        show_api_base="https://api.example.com/podcasts",
        request_timeout=5,
    )


@pytest.fixture
def write_sources(test_config: Config):
    """Write a list of source descriptors to the configured sources file."""

    def _write(sources: List[Dict[str, Any]]) -> Path:
        test_config.sources_file.write_text(json.dumps(sources), encoding="utf-8")
        return test_config.sources_file

    return _write


@pytest.fixture
def sample_records() -> List[Dict[str, Any]]:
    """
    Create sample episode records for testing.

    Returns:
        List of three records with distinct URLs and dates
    """
    return [
        make_record(
            title="New Year Special",
            published_at="2024-01-01",
            episode_url="https://example.com/episodes/new-year",
        ),
        make_record(
            title="Midsummer Roundtable",
            published_at="2023-06-15",
            episode_url="https://example.com/episodes/midsummer",
        ),
        make_record(
            title="June Launch",
            published_at="2024-06-01",
            episode_url="https://example.com/episodes/june-launch",
        ),
    ]
