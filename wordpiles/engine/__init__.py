"""Puzzle engine for word-piles."""

from .models import (
    TileState,
    TaskKind,
    Confirmation,
    WORD_COLORS,
    Tile,
    ScheduledTask,
    TileView,
    WordView,
    SessionView,
    GameConfig,
)
from .sorter import sort_letters
from .generator import generate_columns, PLACEMENT_STRATEGIES
from .availability import tile_state, selectable_tile, topmost_selected
from .board import Board
from .session import Session
from .view import build_view
from .game import WordPiles, ALL_LEVELS_DONE

__all__ = [
    "TileState",
    "TaskKind",
    "Confirmation",
    "WORD_COLORS",
    "Tile",
    "ScheduledTask",
    "TileView",
    "WordView",
    "SessionView",
    "GameConfig",
    "sort_letters",
    "generate_columns",
    "PLACEMENT_STRATEGIES",
    "tile_state",
    "selectable_tile",
    "topmost_selected",
    "Board",
    "Session",
    "build_view",
    "WordPiles",
    "ALL_LEVELS_DONE",
]
