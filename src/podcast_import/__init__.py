"""
Podcast Importer

Fetches podcast episode metadata from remote sources, writes one content
document per episode, and maintains an aggregate episode data file.
"""

__version__ = "0.1.0"

from podcast_import.config import Config

__all__ = ["Config", "__version__"]
