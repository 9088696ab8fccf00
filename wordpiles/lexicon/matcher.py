"""Classification of the word assembled from the current selection."""

from typing import Collection

from .dictionary import Dictionary
from .models import WordStatus


def classify_word(
    word: str,
    target_words: Collection[str],
    found_words: Collection[str],
    hidden_words: Collection[str],
    dictionary: Dictionary,
) -> WordStatus:
    """
    Decide what a word means for the current level.

    Checks run in priority order:
    1. EMPTY          - nothing selected
    2. ALREADY_FOUND  - found target or already discovered hidden word
    3. TARGET_UNFOUND - a target still waiting to be found
    4. IN_DICTIONARY  - a valid word that is not a target
    5. INVALID        - anything else
    """
    if not word:
        return "EMPTY"

    if word in found_words or word in hidden_words:
        return "ALREADY_FOUND"

    if word in target_words:
        return "TARGET_UNFOUND"

    if word in dictionary:
        return "IN_DICTIONARY"

    return "INVALID"
