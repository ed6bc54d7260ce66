"""
Episode fetcher for the upstream podcast service.

Retrieves either every episode of a named show or exactly one episode of
a feed, and normalizes the JSON responses into Episode models. Failures
are contained per source: they are logged, recorded on the fetcher, and
reported as an empty result so that the rest of the run continues.

Example:
    >>> fetcher = EpisodeFetcher(timeout=10)
    >>> episodes = fetcher.fetch_show_episodes("my-show")
    >>> episode = fetcher.fetch_single_episode("https://example.com/feed", "42")
"""

import logging
from typing import Any, List, Optional
from urllib.parse import quote

import requests
from pydantic import ValidationError

from podcast_import.errors import FetchError
from podcast_import.models.entities import Episode

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
#  Constants
# ---------------------------------------------------------------------------

DEFAULT_SHOW_API_BASE = "https://taddy.org/podcasts"
REQUEST_TIMEOUT = 15  # seconds


class EpisodeNotFoundError(FetchError):
    """The service answered 404 for the requested resource."""

    pass


# ---------------------------------------------------------------------------
#  Fetcher
# ---------------------------------------------------------------------------

class EpisodeFetcher:
    """
    Fetches episode records over HTTP.

    Attributes:
        show_api_base: Base URL for show listings
        timeout: Timeout in seconds for each request
        errors: Messages for every failed fetch, in order of occurrence
    """

    def __init__(
        self,
        show_api_base: str = DEFAULT_SHOW_API_BASE,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.show_api_base = show_api_base.rstrip("/")
        self.timeout = timeout
        self.errors: List[str] = []

    def fetch_show_episodes(self, name: str) -> List[Episode]:
        """
        Fetch all episodes of a named show.

        Args:
            name: Show identifier used in the request path

        Returns:
            List of Episode objects, empty if the request failed
        """
        url = f"{self.show_api_base}/{quote(name, safe='')}/episodes"

        try:
            payload = self._get_json(url)
        except FetchError as exc:
            self._record_error(f"Error fetching episodes for {name}: {exc}")
            return []

        records = payload.get("episodes") if isinstance(payload, dict) else payload
        if not isinstance(records, list):
            self._record_error(
                f"Error fetching episodes for {name}: unexpected response of type "
                f"{type(payload).__name__}"
            )
            return []

        episodes = []
        for record in records:
            episode = _parse_episode(record, context=f"show '{name}'")
            if episode is not None:
                episodes.append(episode)

        logger.info("Fetched %d episode(s) for show '%s'", len(episodes), name)
        return episodes

    def fetch_single_episode(self, feed_url: str, episode_id: str) -> Optional[Episode]:
        """
        Fetch exactly one episode of a feed.

        Args:
            feed_url: Base URL of the feed
            episode_id: Episode identifier within the feed

        Returns:
            The Episode, or None if it was not found or could not be fetched
        """
        url = f"{feed_url.rstrip('/')}/episodes/{quote(str(episode_id), safe='')}"

        try:
            payload = self._get_json(url)
        except EpisodeNotFoundError:
            logger.debug("Episode %s not found at %s", episode_id, url)
            return None
        except FetchError as exc:
            self._record_error(f"Error fetching episode {episode_id} from {feed_url}: {exc}")
            return None

        if not isinstance(payload, dict):
            self._record_error(
                f"Error fetching episode {episode_id} from {feed_url}: unexpected "
                f"response of type {type(payload).__name__}"
            )
            return None

        episode = _parse_episode(payload, context=f"episode {episode_id}")
        if episode is None:
            self._record_error(
                f"Error fetching episode {episode_id} from {feed_url}: malformed episode record"
            )
        return episode

    # -------------------------------------------------------------------
    #  Internal helpers
    # -------------------------------------------------------------------

    def _get_json(self, url: str) -> Any:
        """
        GET a URL and decode its JSON body.

        Raises:
            EpisodeNotFoundError: On HTTP 404
            FetchError: On timeout, transport error, other non-2xx status,
                or an undecodable body
        """
        try:
            response = requests.get(
                url,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.Timeout as exc:
            raise FetchError(f"request timed out after {self.timeout}s") from exc
        except requests.exceptions.HTTPError as exc:
            if exc.response is not None and exc.response.status_code == 404:
                raise EpisodeNotFoundError(str(exc)) from exc
            raise FetchError(f"HTTP error: {exc}") from exc
        except requests.exceptions.RequestException as exc:
            raise FetchError(f"request failed: {exc}") from exc

        try:
            return response.json()
        except ValueError as exc:
            raise FetchError(f"invalid JSON in response from {url}") from exc

    def _record_error(self, message: str) -> None:
        logger.error(message)
        self.errors.append(message)


# ---------------------------------------------------------------------------
#  Response parsing helpers
# ---------------------------------------------------------------------------

def _parse_episode(record: Any, context: str = "") -> Optional[Episode]:
    """
    Parse one episode object from a response.

    Args:
        record: Episode dictionary from the service
        context: Label of the source, used in warnings

    Returns:
        Episode, or None if the record is malformed
    """
    if not isinstance(record, dict):
        logger.warning("Skipping non-object episode record from %s", context)
        return None

    try:
        return Episode.model_validate(record)
    except ValidationError as exc:
        logger.warning(
            "Skipping malformed episode record (title=%r) from %s: %s",
            record.get("title"),
            context,
            exc,
        )
        return None


__all__ = [
    "EpisodeFetcher",
    "EpisodeNotFoundError",
]
