"""Test level generation and the three placement strategies."""

import logging
import random
from collections import Counter

import pytest

from wordpiles.engine import generate_columns
from wordpiles.engine.generator import place_cluster, tag_letters
from wordpiles.lexicon import LevelConfig


def make_level(words, cols=2, rows=3, order="linear", letters="direct"):
    return LevelConfig(
        id=1,
        column_count=cols,
        row_count=rows,
        words=words,
        difficulty={"placement_order": order, "letter_sort_mode": letters},
    )


def chars(columns):
    return [[tile.char for tile in column] for column in columns]


class TestLinearPlacement:
    """Round-robin placement."""

    def test_two_word_scenario(self):
        """КОТ + ПЕС on two columns alternate columns letter by letter."""
        level = make_level(["КОТ", "ПЕС"])
        columns = generate_columns(level, ["КОТ", "ПЕС"], ["КОТ", "ПЕС"], random.Random(0))

        assert chars(columns) == [["К", "Т", "Е"], ["О", "П", "С"]]

    def test_tiles_carry_origin(self):
        level = make_level(["КОТ", "ПЕС"])
        columns = generate_columns(level, ["КОТ", "ПЕС"], ["КОТ", "ПЕС"], random.Random(0))

        bottom = columns[0][0]
        assert bottom.column_index == 0
        assert bottom.word_index == 0
        assert bottom.char_index == 0
        assert bottom.selected is False
        assert columns[1][1].word_index == 1

    def test_ids_are_unique_and_prefixed(self):
        level = make_level(["КОТ", "ПЕС"])
        columns = generate_columns(level, ["КОТ", "ПЕС"], ["КОТ", "ПЕС"], random.Random(0), id_prefix="g7")

        ids = [tile.id for column in columns for tile in column]
        assert len(set(ids)) == 6
        assert all(tile_id.startswith("g7-") for tile_id in ids)

    def test_word_index_follows_full_target_list(self):
        """On restart only some words are placed but indices stay stable."""
        level = make_level(["КОТ", "ПЕС"])
        columns = generate_columns(level, ["ПЕС"], ["КОТ", "ПЕС"], random.Random(0))

        assert {tile.word_index for column in columns for tile in column} == {1}
        assert chars(columns) == [["П", "С"], ["Е"]]


class TestRandomPlacement:
    """Even spread with shuffled column order."""

    def test_even_distribution(self):
        words = ["МЫШКА", "БЕЛКА", "ЁЖ"]
        level = make_level(words, cols=4, rows=4, order="random")
        columns = generate_columns(level, words, words, random.Random(5))

        heights = [len(column) for column in columns]
        assert sum(heights) == 12
        assert max(heights) - min(heights) <= 1

    def test_same_seed_same_board(self):
        words = ["МЫШКА", "БЕЛКА"]
        level = make_level(words, cols=3, order="random", letters="random")

        first = generate_columns(level, words, words, random.Random(42))
        second = generate_columns(level, words, words, random.Random(42))
        assert chars(first) == chars(second)

    def test_column_index_matches_column(self):
        words = ["ЛИСА", "СОВА"]
        level = make_level(words, cols=3, order="random")
        columns = generate_columns(level, words, words, random.Random(1))

        for index, column in enumerate(columns):
            assert all(tile.column_index == index for tile in column)


class TestClusterPlacement:
    """Letters of a word stay close together."""

    def test_neighbouring_columns(self):
        """With room to spare every letter lands next to the previous one."""
        words = ["ПРОГРАММА", "ЛИСА", "СОВА"]
        level = make_level(words, cols=5, rows=20, order="cluster")
        columns = generate_columns(level, words, words, random.Random(9))

        by_word = {}
        for column in columns:
            for tile in column:
                by_word.setdefault(tile.word_index, []).append(tile)

        for tiles in by_word.values():
            tiles.sort(key=lambda t: t.char_index)
            assert tiles[0].column_index == 0
            for previous, current in zip(tiles, tiles[1:]):
                assert abs(current.column_index - previous.column_index) <= 1

    def test_first_letter_skips_full_columns(self):
        """A word starts in the leftmost column below the row cap."""
        letters = tag_letters(["АБ", "В"], ["АБ", "В"], make_level(["АБ", "В"]), random.Random(0))

        class Stay:
            def choice(self, options):
                return options[0]

        # АБ fills column 0 (cap 2), so В starts in column 1
        assert place_cluster(letters, 3, 2, Stay()) == [0, 0, 1]

    def test_overflow_falls_back_to_lowest_column(self, caplog):
        """When every column is full the tile still gets placed."""
        level = make_level(["АБВ"], cols=2, rows=1, order="cluster")

        with caplog.at_level(logging.WARNING, logger="wordpiles.engine.generator"):
            columns = generate_columns(level, ["АБВ"], ["АБВ"], random.Random(0))

        assert chars(columns) == [["А", "В"], ["Б"]]
        assert "row cap" in caplog.text


class TestGeneratedBoard:
    """Properties shared by every strategy."""

    @pytest.mark.parametrize("order", ["random", "linear", "cluster"])
    @pytest.mark.parametrize("letters", ["direct", "mirror", "random", "keep_base"])
    def test_tile_count_and_letters(self, order, letters):
        words = ["МЫШКА", "БЕЛКА", "ЁЖ", "КОТ"]
        level = make_level(words, cols=3, rows=5, order=order, letters=letters)
        columns = generate_columns(level, words, words, random.Random(17))

        tiles = [tile for column in columns for tile in column]
        assert len(tiles) == sum(len(w) for w in words)
        for index, word in enumerate(words):
            placed = [t.char for t in tiles if t.word_index == index]
            assert Counter(placed) == Counter(word)

    @pytest.mark.parametrize("order", ["random", "linear", "cluster"])
    def test_word_order_reconstructs_sorted_word(self, order):
        """Ordering a word's tiles by char_index gives the sorted letters."""
        words = ["ЛИСА", "СОВА"]
        level = make_level(words, cols=3, rows=5, order=order, letters="mirror")
        columns = generate_columns(level, words, words, random.Random(2))

        tiles = [tile for column in columns for tile in column]
        for index, word in enumerate(words):
            own = sorted((t for t in tiles if t.word_index == index), key=lambda t: t.char_index)
            assert ''.join(t.char for t in own) == word[::-1]

    def test_no_words_gives_empty_columns(self):
        level = make_level(["КОТ"], cols=4)
        columns = generate_columns(level, [], ["КОТ"], random.Random(0))
        assert columns == [[], [], [], []]
