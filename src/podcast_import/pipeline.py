"""
Import pipeline orchestration.

Runs one import strictly in sequence:

1. **LoadPrevious** -- read the source descriptors and the persisted
   collection (missing collection means an empty one).
2. **FetchAll** -- visit each source in declared order, fetch its
   episodes, write a content document per episode and collect the
   episodes into the run's working list.
3. **Persist** -- merge the working list into the collection and
   rewrite the collection file.

Per-source fetch failures and per-episode slug and write failures are
contained and reported in the result. Configuration, persistence and
cancellation errors propagate to the caller.

Example:
    >>> from podcast_import.pipeline import run_import
    >>> result = run_import(config)
    >>> print(f"Episodes added: {result.added_count}")
"""

import json
import logging
import threading
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from podcast_import.config import Config, get_config
from podcast_import.content.writer import ContentWriter
from podcast_import.errors import EmptySlugError, RunCancelled
from podcast_import.ingestion.fetcher import EpisodeFetcher
from podcast_import.ingestion.sources import load_sources
from podcast_import.models.entities import Episode, SourceDescriptor, SourceKind
from podcast_import.storage.collection import (
    load_collection,
    merge_and_persist,
    merge_episodes,
)

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    """
    Result of an import run.

    Attributes:
        sources_processed: Number of sources visited
        fetched_count: Episodes fetched across all sources
        documents_created: Content documents written this run
        documents_existing: Episodes whose document already existed
        added_count: Episodes merged into the collection
        ignored_count: Fetched episodes dropped as duplicates
        total_count: Size of the collection after the run
        output_path: Collection file
        dry_run: True if nothing was written
        not_found: Single-episode sources that returned nothing
        failed_sources: Sources whose fetch failed
        slug_errors: Titles that could not be turned into a folder name
        write_errors: Titles whose content document could not be written
    """

    sources_processed: int = 0
    fetched_count: int = 0
    documents_created: int = 0
    documents_existing: int = 0
    added_count: int = 0
    ignored_count: int = 0
    total_count: int = 0
    output_path: str = ""
    dry_run: bool = False
    not_found: List[str] = field(default_factory=list)
    failed_sources: List[str] = field(default_factory=list)
    slug_errors: List[str] = field(default_factory=list)
    write_errors: List[str] = field(default_factory=list)

    @property
    def has_fetch_failures(self) -> bool:
        return bool(self.failed_sources)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "sources_processed": self.sources_processed,
            "fetched_count": self.fetched_count,
            "documents_created": self.documents_created,
            "documents_existing": self.documents_existing,
            "added_count": self.added_count,
            "ignored_count": self.ignored_count,
            "total_count": self.total_count,
            "output_path": self.output_path,
            "dry_run": self.dry_run,
            "not_found": self.not_found,
            "failed_sources": self.failed_sources,
            "slug_errors": self.slug_errors,
            "write_errors": self.write_errors,
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


# ---------------------------------------------------------------------------
#  Phase helpers
# ---------------------------------------------------------------------------

def _check_cancelled(cancel_event: Optional[threading.Event], phase: str) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise RunCancelled(f"Import cancelled {phase}")


def _fetch_source(
    source: SourceDescriptor,
    fetcher: EpisodeFetcher,
    result: ImportResult,
) -> List[Episode]:
    """Dispatch one source to the fetcher according to its kind."""
    errors_before = len(fetcher.errors)

    if source.kind is SourceKind.SHOW_FEED:
        episodes = fetcher.fetch_show_episodes(source.name)
    else:
        episode = fetcher.fetch_single_episode(source.feed_url, source.episode_id)
        episodes = [episode] if episode is not None else []

    if len(fetcher.errors) > errors_before:
        result.failed_sources.append(source.describe())
    elif source.kind is SourceKind.SINGLE_EPISODE and not episodes:
        logger.info("Episode %s from %s not found.", source.episode_id, source.feed_url)
        result.not_found.append(source.describe())

    return episodes


def _write_document(
    episode: Episode,
    writer: ContentWriter,
    result: ImportResult,
    today: Optional[date],
) -> None:
    """Write one content document, containing failures to this episode."""
    try:
        created = writer.write_document(episode, today=today)
    except EmptySlugError as exc:
        logger.warning("Skipping content document: %s", exc)
        result.slug_errors.append(episode.title)
        return
    except (OSError, UnicodeError) as exc:
        logger.error("Could not write content document for %s: %s", episode.title, exc)
        result.write_errors.append(episode.title)
        return

    if created is None:
        result.documents_existing += 1
    else:
        result.documents_created += 1


# ---------------------------------------------------------------------------
#  Main entry point
# ---------------------------------------------------------------------------

def run_import(
    config: Optional[Config] = None,
    fetcher: Optional[EpisodeFetcher] = None,
    writer: Optional[ContentWriter] = None,
    dry_run: bool = False,
    cancel_event: Optional[threading.Event] = None,
    today: Optional[date] = None,
) -> ImportResult:
    """
    Run one import from sources to persisted collection.

    Args:
        config: Application Config object (optional, uses default if None)
        fetcher: Episode fetcher (built from config if None)
        writer: Content writer (built from config if None)
        dry_run: Fetch and merge, but write no documents and do not persist
        cancel_event: Set from another thread or a signal handler to stop
            the run before the next source and before persisting
        today: Override for the ``dateAdded`` field of new documents

    Returns:
        ImportResult with counts and per-source outcomes

    Raises:
        ConfigLoadError: If sources or the previous collection cannot be loaded
        PersistError: If the collection cannot be written
        RunCancelled: If cancel_event was set before persisting
    """
    if config is None:
        config = get_config()
    if fetcher is None:
        fetcher = EpisodeFetcher(
            show_api_base=config.show_api_base,
            timeout=config.request_timeout,
        )
    if writer is None:
        writer = ContentWriter(config.content_dir, filename=config.content_filename)

    logger.info("Start: Gathering podcast data...")
    result = ImportResult(output_path=str(config.output_file), dry_run=dry_run)

    # LoadPrevious
    sources = load_sources(config.sources_file)
    previous = load_collection(config.output_file)

    # FetchAll
    incoming: List[Episode] = []
    for source in sources:
        _check_cancelled(cancel_event, f"before fetching {source.describe()}")

        episodes = _fetch_source(source, fetcher, result)
        result.sources_processed += 1

        for episode in episodes:
            if not dry_run:
                _write_document(episode, writer, result, today)
            incoming.append(episode)

    result.fetched_count = len(incoming)

    # Persist
    _check_cancelled(cancel_event, "before persisting episode data")

    if dry_run:
        merged, added, ignored = merge_episodes(previous, incoming, dedupe=config.dedupe)
        result.added_count = len(added)
        result.ignored_count = len(ignored)
        result.total_count = len(merged)
        logger.info("[dry-run] Episode data not written to %s", config.output_file)
    else:
        persisted = merge_and_persist(
            previous,
            incoming,
            config.output_file,
            dedupe=config.dedupe,
        )
        result.added_count = persisted.added_count
        result.ignored_count = persisted.ignored_count
        result.total_count = persisted.total_count

    logger.info("Episodes added: %d", result.added_count)
    logger.info("Ignored episodes: %d", result.ignored_count)
    logger.info("New total of episodes: %d", result.total_count)
    if result.failed_sources:
        logger.warning("Sources that failed to fetch: %d", len(result.failed_sources))
    if result.write_errors:
        logger.warning("Content documents that failed to write: %d", len(result.write_errors))
    logger.info("End: Gathering podcast data.")

    return result
