"""
Folder name generation for episode content documents.

Turns an episode title into a short, lower-case, hyphen-separated name
that is safe to use as a directory. The transformation is pure, so the
same title always maps to the same folder across runs.
"""

import re
import unicodedata

from podcast_import.errors import EmptySlugError

# Characters that carry structure in frontmatter and are removed from titles
STRUCTURAL_CHARS_RE = re.compile(r'[:"#]')

# General slug pass: keep word characters, whitespace and a small set of
# punctuation, then hyphenate whitespace
SLUG_DISALLOWED_RE = re.compile(r"[^\w\s$*_+~.()'\"!\-:@]+")
WHITESPACE_RE = re.compile(r"\s+")

# Folder pass
FOLDER_DISALLOWED_RE = re.compile(r'[^\w\s\-:"#]')
SEPARATOR_RUN_RE = re.compile(r'[\s\-:"#]+')

MAX_SLUG_TOKENS = 5

# Characters spelled out or transliterated before anything is stripped.
# Accented letters with a plain base letter are handled by accent folding.
CHAR_REPLACEMENTS = str.maketrans({
    "$": "dollar",
    "%": "percent",
    "&": "and",
    "<": "less",
    ">": "greater",
    "|": "or",
    "\u00a2": "cent",
    "\u00a3": "pound",
    "\u00a4": "currency",
    "\u00a5": "yen",
    "\u00a9": "(c)",
    "\u00ae": "(r)",
    "\u00aa": "a",
    "\u00ba": "o",
    "\u20ac": "euro",
    "\u2122": "tm",
    "\u221e": "infinity",
    "\u2665": "love",
    "\u00c6": "AE",
    "\u00e6": "ae",
    "\u00d0": "D",
    "\u00f0": "d",
    "\u00d8": "O",
    "\u00f8": "o",
    "\u00de": "TH",
    "\u00fe": "th",
    "\u00df": "ss",
    "\u0110": "D",
    "\u0111": "d",
    "\u0126": "H",
    "\u0127": "h",
    "\u0131": "i",
    "\u0141": "L",
    "\u0142": "l",
    "\u0152": "OE",
    "\u0153": "oe",
    "\u0166": "T",
    "\u0167": "t",
})


def sanitize_title(title: str) -> str:
    """Remove colon, double-quote and hash characters from a title."""
    return STRUCTURAL_CHARS_RE.sub("", title)


def _fold_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")


def _general_slug(text: str) -> str:
    text = _fold_accents(text.translate(CHAR_REPLACEMENTS))
    text = SLUG_DISALLOWED_RE.sub("", text).strip()
    return WHITESPACE_RE.sub("-", text).lower()


def slugify_title(title: str) -> str:
    """
    Convert an episode title into a deterministic folder name.

    Steps:
    1. Strip colon, double-quote and hash characters
    2. Spell out symbols such as ``&`` and transliterate letters such as
       ``ß``, then lower-case and hyphenate with a general slug pass
    3. Drop anything that is not a word character, whitespace or separator
    4. Collapse separator runs into single hyphens
    5. Keep the first five hyphen-delimited tokens

    Args:
        title: Episode title, any text

    Returns:
        Folder name such as ``"episode-the-big-1-launch"``

    Raises:
        EmptySlugError: If nothing usable is left after stripping

    Example:
        >>> slugify_title("One Two Three Four Five Six Seven")
        'one-two-three-four-five'
    """
    slug = _general_slug(sanitize_title(title))
    slug = FOLDER_DISALLOWED_RE.sub("", slug)
    slug = SEPARATOR_RUN_RE.sub("-", slug).strip("-")

    tokens = [token for token in slug.split("-") if token]
    if not tokens:
        raise EmptySlugError(title)

    return "-".join(tokens[:MAX_SLUG_TOKENS])
