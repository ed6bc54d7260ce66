"""Exceptions raised by the podcast importer."""


class PodcastImportError(Exception):
    """Base exception for all importer errors."""

    pass


class ConfigLoadError(PodcastImportError):
    """Source descriptors or the persisted collection could not be loaded."""

    pass


class FetchError(PodcastImportError):
    """A network request for episode data failed."""

    pass


class EmptySlugError(PodcastImportError, ValueError):
    """An episode title reduces to an empty folder name."""

    def __init__(self, title: str) -> None:
        self.title = title
        super().__init__(f"Title {title!r} does not produce a usable folder name")


class PersistError(PodcastImportError):
    """The aggregate episode collection could not be written."""

    pass


class RunCancelled(PodcastImportError):
    """The run was cancelled before the collection was persisted."""

    pass
