"""
Pydantic data models for source descriptors and episodes.

Defines the validated shapes that flow through the importer: where to
fetch episodes from, and the episode records themselves. Episode records
keep any extra fields the upstream service returns so that they survive
the round trip through the persisted collection.
"""

from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SourceKind(str, Enum):
    """Source descriptor kind."""
    SHOW_FEED = "show-feed"
    SINGLE_EPISODE = "single-episode"


# Kind names used by older sources files
LEGACY_KINDS: Dict[str, SourceKind] = {
    "podcast-show": SourceKind.SHOW_FEED,
    "podcast-episode": SourceKind.SINGLE_EPISODE,
}


class SourceDescriptor(BaseModel):
    """
    Declares where to fetch episodes from.

    A ``show-feed`` source names a show whose full episode list is fetched.
    A ``single-episode`` source points at one episode of a feed.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    kind: SourceKind
    name: Optional[str] = None
    feed_url: Optional[str] = Field(default=None, alias="feedUrl")
    episode_id: Optional[str] = Field(default=None, alias="episodeId")

    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        data = dict(data)
        if "kind" not in data and "type" in data:
            data["kind"] = data.pop("type")
        if isinstance(data.get("kind"), str) and data["kind"] in LEGACY_KINDS:
            data["kind"] = LEGACY_KINDS[data["kind"]]
        if "feedUrl" not in data and "feed_url" not in data and "podcastUrl" in data:
            data["feedUrl"] = data.pop("podcastUrl")
        return data

    @field_validator("name", "feed_url", "episode_id", mode="before")
    @classmethod
    def _coerce_to_string(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @model_validator(mode="after")
    def _check_required_fields(self) -> "SourceDescriptor":
        if self.kind is SourceKind.SHOW_FEED and not self.name:
            raise ValueError("show-feed sources require a 'name'")
        if self.kind is SourceKind.SINGLE_EPISODE and not (self.feed_url and self.episode_id):
            raise ValueError("single-episode sources require 'feedUrl' and 'episodeId'")
        return self

    def describe(self) -> str:
        """Short human-readable label for log lines."""
        if self.kind is SourceKind.SHOW_FEED:
            return f"show '{self.name}'"
        return f"episode {self.episode_id} from {self.feed_url}"


class Episode(BaseModel):
    """
    Episode data model.

    Represents one podcast episode as returned by the upstream service and
    as stored in the aggregate collection. Field names are snake_case in
    Python and camelCase on disk.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    title: str = Field(min_length=1)
    published_at: Optional[str] = Field(default=None, alias="publishedAt")
    episode_url: Optional[str] = Field(default=None, alias="episodeUrl")
    description: Optional[str] = None
    privacy_status: Optional[str] = Field(default=None, alias="privacyStatus")

    @property
    def identity_key(self) -> Tuple[str, ...]:
        """
        Key used to recognise the same episode across runs.

        The episode URL when present, otherwise title plus publish date.
        """
        if self.episode_url:
            return ("url", self.episode_url)
        return ("title", self.title, self.published_at or "")

    def to_record(self) -> Dict[str, Any]:
        """
        Convert to the camelCase dictionary stored in the collection file.

        Fields absent from the source record stay absent, and null stays null.
        """
        return self.model_dump(by_alias=True, exclude_unset=True)
