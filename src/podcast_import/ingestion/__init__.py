"""
Ingestion module for source loading and episode fetching.

Provides the source descriptor loader and the HTTP fetcher for show
listings and single episodes.
"""

from podcast_import.ingestion.fetcher import EpisodeFetcher
from podcast_import.ingestion.sources import load_sources

__all__ = ["EpisodeFetcher", "load_sources"]
