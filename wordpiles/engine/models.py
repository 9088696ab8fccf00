"""
Pydantic models for the engine layer.

This module contains the data models (tiles, scheduled continuations, the
presentation model and the game configuration) used throughout the engine.
The logic classes (Board, Session, WordPiles) live in their respective files.
"""

from typing import List, Optional, Literal
from pydantic import BaseModel, Field

from ..lexicon.models import WordStatus


# Type aliases
TileState = Literal["SELECTED", "ACTIVE", "BLOCKED"]
TaskKind = Literal["remove_tiles", "clear_selection", "win"]
Confirmation = Literal["found", "hidden"]

# Pastel blue, green, pink, beige
WORD_COLORS: List[str] = ["#AEC6CF", "#B2E2B2", "#FFD1DC", "#F4E1D2"]


class Tile(BaseModel):
    """A single placed letter."""
    id: str
    char: str = Field(..., min_length=1, max_length=1)
    column_index: int = Field(..., ge=0)
    word_index: int = Field(..., ge=0)  # Index into the level's full target list
    char_index: int = Field(..., ge=0)  # Position within the word's sorted letters
    selected: bool = False


class ScheduledTask(BaseModel):
    """
    A deferred continuation requested by the core.

    The host waits ``delay_ms`` with whatever timer it has, then hands the
    task back through ``complete()`` exactly once.
    """
    task_id: str
    kind: TaskKind
    delay_ms: int = Field(..., ge=0)
    tile_ids: List[str] = Field(default_factory=list)


class TileView(BaseModel):
    """Render-ready tile."""
    id: str
    char: str
    state: TileState
    color: Optional[str] = None
    confirmed: Optional[Confirmation] = None


class WordView(BaseModel):
    """Render-ready target word entry."""
    text: str  # Masked with '*' until found or revealed
    found: bool = False
    revealed: bool = False
    color: Optional[str] = None


class SessionView(BaseModel):
    """Everything a front end needs to draw one frame."""
    level_id: str
    columns: List[List[TileView]] = Field(default_factory=list)
    row_count: int = 0
    current_word: str = ""
    word_status: WordStatus = "EMPTY"
    target_words: List[WordView] = Field(default_factory=list)
    hidden_words: List[str] = Field(default_factory=list)
    found_count: int = 0
    total_count: int = 0
    is_processing: bool = False
    is_won: bool = False
    hint_available: bool = False
    color_bonus_offered: bool = False
    color_bonus_available: bool = False
    notice: Optional[str] = None


class GameConfig(BaseModel):
    """Configuration for a game run."""
    levels_path: Optional[str] = None
    dictionary_path: Optional[str] = None
    seed: Optional[int] = None
    start_level: int = Field(default=0, ge=0)
    found_delay_ms: int = Field(default=800, ge=0)
    win_delay_ms: int = Field(default=500, ge=0)
    hidden_delay_ms: int = Field(default=1200, ge=0)
    palette: List[str] = Field(default_factory=lambda: list(WORD_COLORS), min_length=1)
