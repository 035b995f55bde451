"""Game and item name sanitizers applied while parsing."""

import re
import unicodedata
from typing import Optional

# Keeps a leading "[tag] " or "(tag) " and the name up to the first flag
_GAME_NAME_RE = re.compile(r'(([\[(].*[)\]] )?([^(\[]+))')


def normalize_chars(text: str) -> str:
    """Fold accented characters to their unaccented base letters."""
    decomposed = unicodedata.normalize('NFKD', text)
    return ''.join(c for c in decomposed if not unicodedata.combining(c))


def clean_game_name(game: Optional[str]) -> Optional[str]:
    """
    Sanitize a machine name.

    Accents are folded and trailing region/flag groups such as
    "(USA) [!]" are cut off.

    Args:
        game: Raw machine name

    Returns:
        Cleaned name (None stays None)
    """
    if game is None:
        return None

    game = normalize_chars(game)
    match = _GAME_NAME_RE.match(game)
    if match:
        game = match.group(1)
    return game.strip()


def remove_unicode_characters(text: Optional[str]) -> Optional[str]:
    """Drop every character outside of Latin-1."""
    if text is None:
        return None
    return ''.join(c for c in text if ord(c) <= 255)
