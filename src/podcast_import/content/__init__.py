"""
Content module for generating per-episode documents.

Provides title slugification and idempotent creation of frontmatter
documents on disk.
"""

from podcast_import.content.slug import sanitize_title, slugify_title
from podcast_import.content.writer import ContentWriter, build_document

__all__ = ["ContentWriter", "build_document", "sanitize_title", "slugify_title"]
