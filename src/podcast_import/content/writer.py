"""
Content document writer.

Creates one frontmatter document per episode under the content root, at
``<content_dir>/<slug(title)>/<content_filename>``. Documents are created
once and never overwritten: an existing file is left as it is, so manual
edits such as flipping ``draft`` survive later runs. A document appears
complete or not at all.
"""

import logging
import os
import tempfile
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from podcast_import.content.slug import sanitize_title, slugify_title
from podcast_import.models.entities import Episode

logger = logging.getLogger(__name__)

DEFAULT_TAGS = ["Unsorted"]
DEFAULT_CATEGORIES = ["Podcast"]


def build_frontmatter(episode: Episode, date_added: date) -> Dict[str, Any]:
    """
    Build the metadata header for an episode document.

    Args:
        episode: Episode record
        date_added: Date the document is created

    Returns:
        Ordered dictionary of header fields
    """
    return {
        "title": sanitize_title(episode.title),
        "publishedAt": episode.published_at or "",
        "dateAdded": date_added.strftime("%Y-%m-%d"),
        "episodeUrl": episode.episode_url or "",
        "localImages": False,
        "tags": list(DEFAULT_TAGS),
        "categories": list(DEFAULT_CATEGORIES),
        "privacyStatus": episode.privacy_status or "",
        "draft": True,
    }


def build_document(episode: Episode, date_added: date) -> str:
    """Render the full document: YAML header between ``---`` lines, then the description."""
    header = yaml.safe_dump(
        build_frontmatter(episode, date_added),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=None,
        width=4096,
    )
    return f"---\n{header}---\n{episode.description or ''}\n"


class ContentWriter:
    """
    Writes episode content documents under a content root directory.

    Attributes:
        content_dir: Root directory holding one folder per episode
        filename: Name of the document inside each folder
    """

    def __init__(self, content_dir: Path, filename: str = "index.mdx") -> None:
        self.content_dir = Path(content_dir)
        self.filename = filename

    def folder_for(self, episode: Episode) -> Path:
        """Folder for an episode, derived from its own title only."""
        return self.content_dir / slugify_title(episode.title)

    def document_path(self, episode: Episode) -> Path:
        """Path of the content document for an episode."""
        return self.folder_for(episode) / self.filename

    def write_document(self, episode: Episode, today: Optional[date] = None) -> Optional[Path]:
        """
        Create the content document for an episode if it does not exist yet.

        Args:
            episode: Episode record
            today: Override for the ``dateAdded`` field (defaults to today)

        Returns:
            Path of the created document, or None if one already existed

        Raises:
            EmptySlugError: If the title cannot be turned into a folder name
            OSError: If the folder or file cannot be created
            UnicodeError: If the document text cannot be encoded
        """
        path = self.document_path(episode)
        if path.exists():
            logger.debug("Skipping %s: document already exists", path)
            return None

        content = build_document(episode, today or date.today())
        path.parent.mkdir(parents=True, exist_ok=True)

        # Hard-link a fully written temp file into place; a link never replaces an existing file
        temp_fd, temp_path = tempfile.mkstemp(
            dir=path.parent, prefix=".tmp_", suffix=path.suffix
        )
        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            try:
                os.link(temp_path, path)
            except FileExistsError:
                logger.debug("Skipping %s: document created concurrently", path)
                return None
        finally:
            Path(temp_path).unlink(missing_ok=True)

        logger.info("Created folder and %s file for %s", self.filename, sanitize_title(episode.title))
        return path
