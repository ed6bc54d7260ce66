"""
Storage module for the aggregate episode collection.
"""

from podcast_import.storage.collection import (
    PersistResult,
    load_collection,
    merge_and_persist,
    merge_episodes,
    sort_episodes,
)

__all__ = [
    "PersistResult",
    "load_collection",
    "merge_and_persist",
    "merge_episodes",
    "sort_episodes",
]
