"""
Level generation: spreads the letters of target words across columns.

Three placement strategies are supported:
- random:  even spread over columns, column order shuffled
- linear:  round-robin, left to right
- cluster: letters of one word stay in the same or a neighbouring column
"""

import logging
import random
from typing import Callable, Dict, List, NamedTuple, Optional

from .models import Tile
from .sorter import sort_letters
from ..lexicon.models import LevelConfig, PlacementOrder


logger = logging.getLogger(__name__)


class TaggedLetter(NamedTuple):
    """A letter waiting for a column, tagged with where it came from."""
    char: str
    word_index: int
    char_index: int


def tag_letters(
    words: List[str],
    target_words: List[str],
    config: LevelConfig,
    rng: random.Random,
) -> List[TaggedLetter]:
    """Sort each word's letters and flatten them in word order."""
    letters: List[TaggedLetter] = []
    mode = config.difficulty.letter_sort_mode

    for word in words:
        word_index = target_words.index(word)
        for char_index, char in enumerate(sort_letters(word, mode, rng)):
            letters.append(TaggedLetter(char, word_index, char_index))

    return letters


def _first_open_column(heights: List[int], row_count: int) -> Optional[int]:
    for index, height in enumerate(heights):
        if height < row_count:
            return index
    return None


def _fallback_column(heights: List[int]) -> int:
    """Lowest column, leftmost on ties. Used once every column is at the row cap."""
    column = heights.index(min(heights))
    logger.warning(
        "No column below the row cap, placing on column %d (height %d)",
        column, heights[column],
    )
    return column


def place_linear(
    letters: List[TaggedLetter],
    column_count: int,
    row_count: int,
    rng: random.Random,
) -> List[int]:
    return [i % column_count for i in range(len(letters))]


def place_random(
    letters: List[TaggedLetter],
    column_count: int,
    row_count: int,
    rng: random.Random,
) -> List[int]:
    # Every column gets floor or ceil of total/columns slots; only the order is random
    slots = [i % column_count for i in range(len(letters))]
    rng.shuffle(slots)
    return slots


def place_cluster(
    letters: List[TaggedLetter],
    column_count: int,
    row_count: int,
    rng: random.Random,
) -> List[int]:
    heights = [0] * column_count
    assignment: List[int] = []
    last_column = 0

    for letter in letters:
        column: Optional[int]

        if letter.char_index == 0:
            column = _first_open_column(heights, row_count)
        else:
            options: List[int] = []
            if heights[last_column] < row_count:
                # Staying in the same column is twice as likely as moving
                options.extend([last_column, last_column])
            if last_column > 0 and heights[last_column - 1] < row_count:
                options.append(last_column - 1)
            if last_column < column_count - 1 and heights[last_column + 1] < row_count:
                options.append(last_column + 1)

            if options:
                column = rng.choice(options)
            else:
                column = _first_open_column(heights, row_count)

        if column is None:
            column = _fallback_column(heights)

        assignment.append(column)
        heights[column] += 1
        last_column = column

    return assignment


PLACEMENT_STRATEGIES: Dict[
    PlacementOrder,
    Callable[[List[TaggedLetter], int, int, random.Random], List[int]],
] = {
    "random": place_random,
    "linear": place_linear,
    "cluster": place_cluster,
}


def generate_columns(
    config: LevelConfig,
    words: List[str],
    target_words: List[str],
    rng: random.Random,
    id_prefix: str = "tile",
) -> List[List[Tile]]:
    """
    Build the column stacks for a level.

    Args:
        config: Level configuration (column/row counts and difficulty)
        words: Words to place; the full target list on load, the unfound
            ones on restart
        target_words: The level's full target list, used for word indices
        rng: Random source for sorting and placement
        id_prefix: Prefix for tile ids, unique per generation

    Returns:
        One list of tiles per column, index 0 at the bottom
    """
    letters = tag_letters(words, target_words, config, rng)
    place = PLACEMENT_STRATEGIES[config.difficulty.placement_order]
    assignment = place(letters, config.column_count, config.row_count, rng)

    columns: List[List[Tile]] = [[] for _ in range(config.column_count)]
    for i, (letter, column) in enumerate(zip(letters, assignment)):
        columns[column].append(Tile(
            id=f"{id_prefix}-{i}",
            char=letter.char,
            column_index=column,
            word_index=letter.word_index,
            char_index=letter.char_index,
        ))

    logger.debug(
        "Generated %d tiles over %d columns (%s placement)",
        len(letters), config.column_count, config.difficulty.placement_order,
    )
    return columns
