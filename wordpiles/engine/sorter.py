"""Letter scrambling applied to a word before its tiles are placed."""

import random
from typing import List

from ..lexicon.models import LetterSortMode


# A keep_base shuffle that lands on the original order is retried this many times
KEEP_BASE_ATTEMPTS = 10


def sort_letters(word: str, mode: LetterSortMode, rng: random.Random) -> List[str]:
    """
    Reorder the letters of a word according to a sort mode.

    Args:
        word: The word to scramble
        mode: One of "direct", "mirror", "random", "keep_base"
        rng: Random source used by the shuffling modes

    Returns:
        A permutation of the word's letters
    """
    letters = list(word)

    if mode == "mirror":
        return letters[::-1]

    if mode == "random":
        rng.shuffle(letters)
        return letters

    if mode == "keep_base":
        if len(letters) <= 3:
            return letters

        middle = letters[1:-1]
        shuffled = middle.copy()
        for _ in range(KEEP_BASE_ATTEMPTS):
            shuffled = middle.copy()
            rng.shuffle(shuffled)
            if shuffled != middle:
                break

        return [letters[0], *shuffled, letters[-1]]

    return letters
