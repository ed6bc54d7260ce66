"""
Aggregate episode collection: loading, merging and persistence.

The collection is a JSON array of episode records sorted by publish date,
newest first. It is read once at the start of a run and fully rewritten
at the end. This module is the only writer of that file.
"""

import json
import logging
import os
import tempfile
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple

from dateutil import parser as date_parser
from pydantic import ValidationError

from podcast_import.errors import ConfigLoadError, PersistError
from podcast_import.models.entities import Episode

logger = logging.getLogger(__name__)

_UNDATED = datetime.min.replace(tzinfo=timezone.utc)


@dataclass
class PersistResult:
    """
    Outcome of merging and persisting the collection.

    Attributes:
        added_count: Incoming episodes merged into the collection
        ignored_count: Incoming episodes dropped as duplicates
        total_count: Size of the persisted collection
        output_path: File the collection was written to
    """

    added_count: int = 0
    ignored_count: int = 0
    total_count: int = 0
    output_path: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


# ---------------------------------------------------------------------------
#  Loading
# ---------------------------------------------------------------------------

def load_collection(path: Path) -> List[Episode]:
    """
    Load the persisted collection, or an empty one if the file is absent.

    Args:
        path: Path to the collection JSON file

    Returns:
        List of Episode objects in file order

    Raises:
        ConfigLoadError: If the file exists but is not a JSON array of
            episode records
    """
    path = Path(path)
    if not path.exists():
        logger.info("No previous episode data at %s, starting empty", path)
        return []

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigLoadError(f"Could not read episode data from {path}: {exc}") from exc

    if not isinstance(data, list):
        raise ConfigLoadError(
            f"Episode data in {path} must be a list, got {type(data).__name__}"
        )

    episodes: List[Episode] = []
    for index, record in enumerate(data):
        try:
            episodes.append(Episode.model_validate(record))
        except ValidationError as exc:
            raise ConfigLoadError(f"Invalid episode #{index} in {path}: {exc}") from exc

    logger.info("Loaded %d previously imported episode(s) from %s", len(episodes), path)
    return episodes


# ---------------------------------------------------------------------------
#  Ordering and deduplication
# ---------------------------------------------------------------------------

def parse_published_at(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a publish timestamp into an aware datetime.

    Naive timestamps are taken as UTC. Returns None for empty or
    unparseable values.
    """
    if not value:
        return None
    try:
        parsed = date_parser.parse(value)
    except (ValueError, OverflowError, TypeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _sort_key(episode: Episode) -> Tuple[int, datetime]:
    parsed = parse_published_at(episode.published_at)
    if parsed is None:
        return (0, _UNDATED)
    return (1, parsed)


def sort_episodes(episodes: List[Episode]) -> List[Episode]:
    """
    Sort episodes by publish date, newest first.

    The sort is stable: episodes with equal dates keep their relative
    order. Episodes without a parseable date go last.
    """
    return sorted(episodes, key=_sort_key, reverse=True)


def dedupe_episodes(
    previous: List[Episode],
    incoming: List[Episode],
) -> Tuple[List[Episode], List[Episode]]:
    """
    Split incoming episodes into new ones and duplicates.

    An incoming episode is a duplicate when its identity key (episode URL,
    or title plus publish date) matches a previous episode or an earlier
    incoming one. Previous episodes are never dropped.

    Returns:
        Tuple of (kept incoming episodes, ignored incoming episodes)
    """
    seen: Set[Tuple[str, ...]] = {episode.identity_key for episode in previous}
    kept: List[Episode] = []
    ignored: List[Episode] = []

    for episode in incoming:
        key = episode.identity_key
        if key in seen:
            ignored.append(episode)
            continue
        seen.add(key)
        kept.append(episode)

    return kept, ignored


def merge_episodes(
    previous: List[Episode],
    incoming: List[Episode],
    dedupe: bool = True,
) -> Tuple[List[Episode], List[Episode], List[Episode]]:
    """
    Merge incoming episodes into the previous collection.

    Args:
        previous: Previously persisted episodes
        incoming: Episodes fetched during this run
        dedupe: Drop incoming duplicates; when False every incoming
            episode is appended

    Returns:
        Tuple of (merged sorted collection, added episodes, ignored episodes)
    """
    if dedupe:
        added, ignored = dedupe_episodes(previous, incoming)
    else:
        added, ignored = list(incoming), []

    merged = sort_episodes(list(previous) + added)
    return merged, added, ignored


# ---------------------------------------------------------------------------
#  Persistence
# ---------------------------------------------------------------------------

def persist_collection(episodes: List[Episode], path: Path) -> None:
    """
    Overwrite the collection file with the given episodes.

    Writes to a temporary file in the same directory and renames it over
    the target, so readers see either the old or the new collection.

    Raises:
        PersistError: If the file cannot be written
    """
    path = Path(path)
    content = json.dumps(
        [episode.to_record() for episode in episodes],
        indent=2,
        ensure_ascii=False,
    )

    temp_path: Optional[str] = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        temp_fd, temp_path = tempfile.mkstemp(
            dir=path.parent, prefix=".tmp_", suffix=".json"
        )
        # Lone surrogates inside JSON strings are written as \uXXXX escapes
        with open(temp_fd, "w", encoding="utf-8", errors="backslashreplace") as f:
            f.write(content)
            f.write("\n")
        os.replace(temp_path, path)
    except OSError as exc:
        if temp_path is not None:
            Path(temp_path).unlink(missing_ok=True)
        raise PersistError(f"Could not write episode data to {path}: {exc}") from exc


def merge_and_persist(
    previous: List[Episode],
    incoming: List[Episode],
    output_path: Path,
    dedupe: bool = True,
) -> PersistResult:
    """
    Merge, sort and persist the collection.

    Args:
        previous: Previously persisted episodes
        incoming: Episodes fetched during this run
        output_path: Collection file to overwrite
        dedupe: Drop incoming duplicates before merging

    Returns:
        PersistResult with added, ignored and total counts

    Raises:
        PersistError: If the collection cannot be written

    Example:
        >>> result = merge_and_persist(previous, fetched, Path("data/output.json"))
        >>> print(f"{result.added_count} added, {result.total_count} total")
    """
    merged, added, ignored = merge_episodes(previous, incoming, dedupe=dedupe)
    persist_collection(merged, output_path)
    logger.info("Episode data written to %s", output_path)

    return PersistResult(
        added_count=len(added),
        ignored_count=len(ignored),
        total_count=len(merged),
        output_path=str(output_path),
    )
