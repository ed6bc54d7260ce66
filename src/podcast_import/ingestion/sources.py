"""
Source descriptor loading.

Reads the ordered list of sources to import from a JSON file, or from a
YAML file when the path ends in ``.yaml``/``.yml``.
"""

import json
import logging
from pathlib import Path
from typing import Any, List

import yaml
from pydantic import ValidationError

from podcast_import.errors import ConfigLoadError
from podcast_import.models.entities import SourceDescriptor

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


def _read_document(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in YAML_SUFFIXES:
        return yaml.safe_load(text)
    return json.loads(text)


def load_sources(path: Path) -> List[SourceDescriptor]:
    """
    Load and validate source descriptors in declared order.

    Args:
        path: Path to the sources file

    Returns:
        List of SourceDescriptor objects

    Raises:
        ConfigLoadError: If the file is missing, unparseable, not a list,
            or any entry is not a valid descriptor

    Example:
        >>> sources = load_sources(Path("sources-podcasts.json"))
        >>> print(sources[0].kind)
    """
    path = Path(path)
    if not path.exists():
        raise ConfigLoadError(f"Sources file not found: {path}")

    try:
        data = _read_document(path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigLoadError(f"Could not read sources file {path}: {exc}") from exc

    if not isinstance(data, list):
        raise ConfigLoadError(
            f"Sources file {path} must contain a list of descriptors, "
            f"got {type(data).__name__}"
        )

    sources: List[SourceDescriptor] = []
    for index, entry in enumerate(data):
        try:
            sources.append(SourceDescriptor.model_validate(entry))
        except ValidationError as exc:
            raise ConfigLoadError(f"Invalid source #{index} in {path}: {exc}") from exc

    logger.debug("Loaded %d source(s) from %s", len(sources), path)
    return sources
