"""
Data models for the importer.

Provides Pydantic models for source descriptors and episode records.
"""

from podcast_import.models.entities import Episode, SourceDescriptor, SourceKind

__all__ = [
    "Episode",
    "SourceDescriptor",
    "SourceKind",
]
